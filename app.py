"""
app.py
======
Dash entry point: builds the app, wires the layout and registers callbacks.
"""
import dash_bootstrap_components as dbc
from dash import Dash

from config import APP_TITLE
from ui.layout import build_layout
from ui.callbacks import catalog, navigation, sizing, summary
from utils.logger import get_logger

log = get_logger()

# ---------- Dash app ----------
external_stylesheets = [dbc.themes.ZEPHYR, dbc.icons.BOOTSTRAP]
app = Dash(__name__, external_stylesheets=external_stylesheets, suppress_callback_exceptions=True)
app.title = APP_TITLE
server = app.server

app.layout = build_layout

for module in (navigation, sizing, summary, catalog):
    module.register(app)


if __name__ == "__main__":
    log.info("Starting %s", APP_TITLE)
    app.run(debug=True)
