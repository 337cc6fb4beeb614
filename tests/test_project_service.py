"""
tests/test_project_service.py
Tests for services/project_service.py.
"""
import math

import pytest
import sys, pathlib
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

from domain.catalog import PLACEHOLDER_MODEL, RadiatorModel
from domain.radiator import size_room
from domain.room import GlobalSettings, RoomSpec
from services.catalog_service import catalog_for_series
from services.project_service import (
    SUMMARY_COLUMNS,
    add_environment,
    find_project,
    new_project,
    project_summary,
    project_total_watts,
    projects_from_records,
    projects_to_records,
    remove_environment,
    remove_project,
    rename_environment,
    replace_project,
    resolve_project_id,
    set_manual_elements,
    size_project,
    update_environment_spec,
    update_project_details,
)


@pytest.fixture
def settings():
    return GlobalSettings()


@pytest.fixture
def project():
    p = add_environment(new_project())
    return update_environment_spec(p, 1, surface=12.0, height=2.5, valve_center_distance=600.0)


@pytest.fixture
def custom_models():
    return [RadiatorModel(label="600", height=665, interaxis=600, watts=120, series="CUSTOM", id="abc")]


class TestProjects:

    def test_new_project_has_one_environment(self):
        p = new_project()
        assert len(p.environments) == 1
        assert p.environments[0].name == "Environment 1"
        assert p.environments[0].spec == RoomSpec()

    def test_remove_last_project_is_noop(self):
        p = new_project()
        assert remove_project([p], p.id) == [p]

    def test_remove_project(self):
        a, b = new_project(), new_project()
        assert remove_project([a, b], a.id) == [b]

    def test_find_project_falls_back_to_first(self):
        a, b = new_project(), new_project()
        assert find_project([a, b], b.id) is b
        assert find_project([a, b], "gone") is a

    def test_resolve_keeps_stored_selection(self):
        a, b = new_project(), new_project()
        assert resolve_project_id([a, b], b.id) == b.id

    @pytest.mark.parametrize("stale", [None, "", "gone"])
    def test_resolve_falls_back_to_first_stored(self, stale):
        a, b = new_project(), new_project()
        assert resolve_project_id([a, b], stale) == a.id

    def test_resolve_after_reload_with_fresh_layout_id(self):
        # Stored projects come back from the browser; a freshly generated id is not among them.
        stored = projects_from_records(projects_to_records([new_project(), new_project()]))
        assert resolve_project_id(stored, new_project().id) == stored[0].id
        assert find_project(stored, resolve_project_id(stored, stored[1].id)) == stored[1]

    def test_resolve_empty_list(self):
        assert resolve_project_id([], "x") is None

    def test_replace_project(self):
        a, b = new_project(), new_project()
        renamed = update_project_details(b, client_surname="Rossi")
        assert replace_project([a, b], renamed) == [a, renamed]

    def test_update_details(self):
        p = update_project_details(new_project(), client_name="Mario", site_address="Via Roma 1")
        assert (p.client_name, p.site_address) == ("Mario", "Via Roma 1")

    def test_update_unknown_detail_raises(self):
        with pytest.raises(ValueError):
            update_project_details(new_project(), phone="123")


class TestEnvironments:

    def test_add_environment(self, project):
        assert [e.name for e in project.environments] == ["Environment 1", "Environment 2"]

    def test_remove_environment(self, project):
        second = project.environments[1]
        assert remove_environment(project, 0).environments == (second,)

    def test_remove_last_environment_is_noop(self):
        p = new_project()
        assert remove_environment(p, 0) == p

    def test_rename(self, project):
        assert rename_environment(project, 0, "Living").environments[0].name == "Living"

    def test_index_out_of_range(self, project):
        with pytest.raises(IndexError):
            update_environment_spec(project, 5, surface=10.0)

    def test_spec_update_only_touches_one_environment(self, project):
        updated = update_environment_spec(project, 0, niche_width=1200.0)
        assert updated.environments[0].spec.niche_width == 1200.0
        assert updated.environments[1] == project.environments[1]

    def test_invalidating_update_clears_manual(self, project):
        p = set_manual_elements(project, 0, 9)
        assert p.environments[0].spec.manual_elements == 9
        p = update_environment_spec(p, 0, height=3.0)
        assert p.environments[0].spec.manual_elements is None

    def test_non_invalidating_update_keeps_manual(self, project):
        p = set_manual_elements(project, 0, 9)
        p = update_environment_spec(p, 0, side_valve_distance=70.0)
        assert p.environments[0].spec.manual_elements == 9

    def test_clear_manual(self, project):
        p = set_manual_elements(set_manual_elements(project, 0, 9), 0, None)
        assert p.environments[0].spec.manual_elements is None


class TestSizingAndSummary:

    def test_size_project_matches_size_room(self, project, settings):
        results = size_project(project, [], settings)
        for env, res in zip(project.environments, results):
            expected = size_room(env.spec, catalog_for_series(env.spec.series), settings)
            assert res == expected

    def test_total_is_sum_of_installed(self, project, settings):
        results = size_project(project, [], settings)
        assert project_total_watts(project, [], settings) == sum(r.total_watts for r in results)

    def test_summary_rows(self, project, settings):
        df = project_summary(project, [], settings)
        assert list(df.columns) == SUMMARY_COLUMNS
        assert list(df["Environment"]) == ["Environment 1", "Environment 2"]
        assert df.loc[0, "Required (W)"] == 1884

    def test_summary_coverage(self, project, settings):
        df = project_summary(project, [], settings)
        row = df.iloc[1]
        assert row["Coverage (%)"] == pytest.approx(
            round(row["Installed (W)"] / row["Required (W)"] * 100, 1)
        )

    def test_summary_coverage_nan_without_demand(self, settings):
        p = update_environment_spec(new_project(), 0, surface=0.0)
        assert math.isnan(project_summary(p, [], settings).loc[0, "Coverage (%)"])

    def test_custom_series_uses_custom_models(self, custom_models, settings):
        p = update_environment_spec(new_project(), 0, series="CUSTOM", valve_center_distance=550.0)
        result = size_project(p, custom_models, settings)[0]
        assert result.model == custom_models[0]

    def test_custom_series_without_models(self, settings):
        p = update_environment_spec(new_project(), 0, series="CUSTOM")
        result = size_project(p, [], settings)[0]
        assert result.model == PLACEHOLDER_MODEL and result.current_elements == 0

    def test_coefficient_changes_demand(self, project):
        low  = project_summary(project, [], GlobalSettings(watt_coefficient=20))
        high = project_summary(project, [], GlobalSettings(watt_coefficient=40))
        assert (high["Required (W)"] > low["Required (W)"]).all()


class TestSerialisation:

    def test_round_trip(self, project):
        p = set_manual_elements(project, 1, 6)
        assert projects_from_records(projects_to_records([p])) == [p]

    def test_empty_records_give_new_project(self):
        projects = projects_from_records(None)
        assert len(projects) == 1 and len(projects[0].environments) == 1

    def test_project_without_environments_gets_one(self):
        projects = projects_from_records([{"id": "p1", "environments": []}])
        assert projects[0].id == "p1" and len(projects[0].environments) == 1
