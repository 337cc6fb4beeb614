"""
tests/test_radiator.py
Tests for domain/catalog.py (matching), domain/clearance.py
and domain/radiator.py (element count, power balance, size_room).
"""
import dataclasses

import pytest
import sys, pathlib
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

from domain.catalog import (
    BUILTIN_CATALOGS, PLACEHOLDER_MODEL, RadiatorModel, RadiatorSeries, find_closest_model,
)
from domain.clearance import (
    eccentric_offset, eccentric_text, needs_eccentric, occupied_width, validate_clearance,
)
from domain.radiator import (
    PowerBalance, body_length, classify_power_balance, compute_elements, size_room,
)
from domain.room import GlobalSettings, RoomSpec, ValvePosition


def _model(interaxis, watts, label=None):
    return RadiatorModel(label=label or str(interaxis), height=interaxis + 65, interaxis=interaxis, watts=watts)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def catalog():
    return [_model(200, 100), _model(600, 150)]


@pytest.fixture
def settings():
    return GlobalSettings(watt_coefficient=30)


@pytest.fixture
def side_room():
    return RoomSpec(
        surface=20, height=2.7, valve_center_distance=550,
        valve_position=ValvePosition.LEFT, side_valve_distance=60, niche_width=1000,
    )


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------
class TestFindClosestModel:

    def test_closest_interaxis(self, catalog):
        assert find_closest_model(catalog, 550).interaxis == 600

    def test_exact_match(self, catalog):
        assert find_closest_model(catalog, 200).interaxis == 200

    def test_tie_goes_to_first_in_order(self):
        first, second = _model(500, 40, "A"), _model(600, 50, "B")
        assert find_closest_model([first, second], 550).label == "A"
        assert find_closest_model([second, first], 550).label == "B"

    def test_duplicate_interaxis_keeps_first(self):
        a, b = _model(500, 40, "A"), _model(500, 90, "B")
        assert find_closest_model([a, b], 500).label == "A"

    def test_empty_catalog_returns_placeholder(self):
        assert find_closest_model([], 500) is PLACEHOLDER_MODEL

    def test_builtin_tesi3_match(self):
        assert find_closest_model(BUILTIN_CATALOGS[RadiatorSeries.TESI3], 500).label == "565"

    @pytest.mark.parametrize("series", [RadiatorSeries.TESI2, RadiatorSeries.TESI3, RadiatorSeries.TESI4])
    def test_builtin_catalogs_sorted_by_interaxis(self, series):
        axes = [m.interaxis for m in BUILTIN_CATALOGS[series]]
        assert axes == sorted(axes) and len(axes) > 0


# ---------------------------------------------------------------------------
# Element count
# ---------------------------------------------------------------------------
class TestElements:

    def test_ceil_of_required_over_watts(self):
        assert compute_elements(1884, _model(600, 150)) == 13

    def test_body_length(self):
        assert body_length(13) == 585

    @pytest.mark.parametrize("override", [0, 1, 7, 40])
    def test_manual_override_used_verbatim(self, override):
        assert compute_elements(1884, _model(600, 150), override) == override

    def test_exact_division_not_rounded_up(self):
        assert compute_elements(1500, _model(600, 150)) == 10

    def test_zero_watt_model_divides_by_one(self):
        # Known quirk: a zero-watt model yields ceil(required) elements.
        assert compute_elements(872.09, PLACEHOLDER_MODEL) == 873


# ---------------------------------------------------------------------------
# Eccentric fittings
# ---------------------------------------------------------------------------
class TestEccentric:

    def test_side_valves_with_mismatch(self):
        assert needs_eccentric(ValvePosition.LEFT, 550, 600) is True
        assert eccentric_text(ValvePosition.LEFT, 550, 600) == "eccentric fittings required to compensate 50 mm"

    def test_side_valves_without_mismatch(self):
        assert needs_eccentric(ValvePosition.RIGHT, 600, 600) is False
        assert eccentric_text(ValvePosition.RIGHT, 600, 600) is None

    @pytest.mark.parametrize("target", [0, 123, 550, 5000])
    def test_bottom_never_flagged(self, target):
        assert needs_eccentric(ValvePosition.BOTTOM, target, 600) is False
        assert eccentric_text(ValvePosition.BOTTOM, target, 600) is None

    def test_offset_is_absolute(self):
        assert eccentric_offset(630, 600) == 30
        assert eccentric_offset(570, 600) == 30
        assert eccentric_text(ValvePosition.RIGHT, 630, 600) == "eccentric fittings required to compensate 30 mm"


# ---------------------------------------------------------------------------
# Clearance
# ---------------------------------------------------------------------------
class TestClearance:

    def test_bottom_occupied_width(self):
        assert occupied_width(ValvePosition.BOTTOM, 40, 585) == 775

    def test_bottom_occupied_ignores_eccentric(self):
        assert occupied_width(ValvePosition.BOTTOM, 40, 585, with_eccentric=True) == 775

    def test_side_occupied_width(self):
        assert occupied_width(ValvePosition.LEFT, 60, 585) == 695
        assert occupied_width(ValvePosition.LEFT, 60, 585, with_eccentric=True) == 745

    def test_bottom_side_distance_too_small(self):
        room = RoomSpec(valve_position=ValvePosition.BOTTOM, side_valve_distance=40, niche_width=1000)
        assert validate_clearance(room, 585) is True

    @pytest.mark.parametrize("niche, issue", [(1000, False), (785, False), (784, True)])
    def test_bottom_right_gap(self, niche, issue):
        room = RoomSpec(valve_position=ValvePosition.BOTTOM, side_valve_distance=50, niche_width=niche)
        assert validate_clearance(room, 585) is issue

    @pytest.mark.parametrize("niche, issue", [(735, False), (734, True)])
    def test_side_remaining_gap(self, niche, issue):
        room = RoomSpec(valve_position=ValvePosition.RIGHT, side_valve_distance=50, niche_width=niche)
        assert validate_clearance(room, 585) is issue

    @pytest.mark.parametrize("niche, issue", [(785, False), (784, True)])
    def test_side_eccentric_takes_extra_space(self, niche, issue):
        room = RoomSpec(valve_position=ValvePosition.LEFT, side_valve_distance=50, niche_width=niche)
        assert validate_clearance(room, 585, with_eccentric=True) is issue

    @pytest.mark.parametrize("niche", [0, -10])
    def test_unconstrained_niche_skipped(self, niche):
        room = RoomSpec(side_valve_distance=0, niche_width=niche)
        assert validate_clearance(room, 5000) is False


# ---------------------------------------------------------------------------
# Power balance
# ---------------------------------------------------------------------------
class TestPowerBalance:

    @pytest.mark.parametrize("installed, expected", [
        (700,  PowerBalance.UNDERSIZED),
        (750,  PowerBalance.UNDERSIZED),
        (800,  PowerBalance.SLIGHTLY_UNDERSIZED),
        (900,  PowerBalance.SLIGHTLY_UNDERSIZED),
        (1000, PowerBalance.BALANCED),
        (1100, PowerBalance.BALANCED),
        (1200, PowerBalance.SLIGHTLY_OVERSIZED),
        (1249, PowerBalance.SLIGHTLY_OVERSIZED),
        (1250, PowerBalance.OVERSIZED),
    ])
    def test_thresholds(self, installed, expected):
        assert classify_power_balance(installed, 1000) is expected

    def test_undefined_without_figures(self):
        assert classify_power_balance(0, 1000) is PowerBalance.UNDEFINED
        assert classify_power_balance(1000, 0) is PowerBalance.UNDEFINED


# ---------------------------------------------------------------------------
# size_room
# ---------------------------------------------------------------------------
class TestSizeRoom:

    def test_side_valve_room(self, side_room, catalog, settings):
        r = size_room(side_room, catalog, settings)
        assert r.model.interaxis == 600
        assert r.required_watts == 1884
        assert r.base_elements == 13 and r.current_elements == 13
        assert r.total_watts == 1950
        assert r.body_length == 585 and r.total_length == 585
        assert r.needs_eccentric is True and r.eccentric_offset == 50
        assert "50 mm" in r.eccentric_text
        assert r.total_occupied_width == 745
        assert r.has_clearance_issue is False
        assert r.power_balance is PowerBalance.BALANCED

    def test_bottom_room(self, side_room, catalog, settings):
        room = dataclasses.replace(side_room, valve_position=ValvePosition.BOTTOM)
        r = size_room(room, catalog, settings)
        assert r.needs_eccentric is False and r.eccentric_text is None
        assert r.total_occupied_width == 60 + 50 + 585 + 50 + 50

    def test_bottom_scenario_side_distance_issue(self, catalog, settings):
        room = RoomSpec(surface=20, height=2.7, valve_center_distance=550,
                        side_valve_distance=40, niche_width=1000)
        r = size_room(room, catalog, settings)
        assert r.total_occupied_width == 775
        assert r.has_clearance_issue is True

    def test_idempotent(self, side_room, catalog, settings):
        assert size_room(side_room, catalog, settings) == size_room(side_room, catalog, settings)

    @pytest.mark.parametrize("override", [0, 5, 30])
    def test_manual_override_precedence(self, side_room, catalog, settings, override):
        room = dataclasses.replace(side_room, manual_elements=override)
        r = size_room(room, catalog, settings)
        assert r.current_elements == override
        assert r.base_elements == 13
        assert r.body_length == override * 45
        assert r.total_watts == override * 150

    def test_unconstrained_niche_never_flags(self, side_room, catalog, settings):
        room = dataclasses.replace(side_room, niche_width=0, side_valve_distance=0)
        assert size_room(room, catalog, settings).has_clearance_issue is False

    def test_empty_catalog_short_circuits(self, settings):
        r = size_room(RoomSpec(surface=10, height=2.5), [], settings)
        assert r.model == PLACEHOLDER_MODEL
        assert r.required_watts == 872
        assert r.current_elements == 0 and r.total_watts == 0
        assert r.has_clearance_issue is False and r.needs_eccentric is False

    def test_placeholder_catalog_zero_watt_quirk(self, settings):
        # Known quirk, kept on purpose: 872.09 W over a 0 W model gives 873 elements.
        r = size_room(RoomSpec(surface=10, height=2.5), [PLACEHOLDER_MODEL], settings)
        assert (r.model.height, r.model.interaxis, r.model.watts) == (0, 0, 0)
        assert r.base_elements == 873
        assert r.current_elements == 873
        assert r.body_length == 873 * 45
        assert r.total_watts == 0
        assert r.power_balance is PowerBalance.UNDEFINED

    def test_max_width_flag(self, side_room, catalog, settings):
        assert size_room(dataclasses.replace(side_room, max_width=500), catalog, settings).exceeds_max_width
        assert not size_room(dataclasses.replace(side_room, max_width=600), catalog, settings).exceeds_max_width
        assert not size_room(side_room, catalog, settings).exceeds_max_width

    def test_zero_surface_room(self, catalog, settings):
        r = size_room(RoomSpec(surface=0, height=2.7), catalog, settings)
        assert r.required_watts == 0 and r.current_elements == 0

    def test_result_to_dict(self, side_room, catalog, settings):
        d = size_room(side_room, catalog, settings).to_dict()
        assert d["power_balance"] == "BALANCED"
        assert d["model"]["interaxis"] == 600
