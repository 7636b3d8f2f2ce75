"""
Dashboard Entrypoint (Dash)
---------------------------
Creates the Dash app, auto-discovers pages, holds the session/local stores
shared by every page, and runs the dev server when invoked directly.

Conventions
-----------
- Pages: Dash Pages (`use_pages=True`), "/" = reports, "/settings" = settings.
- Stores (app-level so they survive page switches):
    prefs-theme / prefs-defaults / prefs-filters : local storage documents
    field-values                                 : session field values
    values-version                               : bumped when defaults reseed values
    result-store                                 : last request result
- Exports: `server = app.server` is what Gunicorn imports.

Notes
-----
- PORT defaults to 8080, DEBUG accepts 1/true/yes, LOG_LEVEL defaults to INFO.
"""

# services/dashboard/app.py

import logging
import os
from pathlib import Path

import dash
from dash import ClientsideFunction, Input, Output, State, dcc, html

from helpers.preferences import DEFAULT_THEME, THEMES

logger = logging.getLogger("dashboard")
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))


# --- App bootstrap --------------------------------------------------------------

def _find_pages_dir() -> str | None:
    """
    Resolve the pages directory inside the container or local dev tree.

    Search order:
      1) <here>/pages
      2) <here>/services/dashboard/pages

    Returns:
        str | None: Absolute path to the pages directory if found; otherwise None.
    """
    here = Path(__file__).parent
    candidates = [
        here / "pages",
        here / "services" / "dashboard" / "pages",
    ]
    for p in candidates:
        if p.exists():
            logger.info("Using pages_folder: %s", p)
            return str(p)
    logger.warning("No pages folder found among: %s", ", ".join(map(str, candidates)))
    return None


pages_dir = _find_pages_dir()

app = dash.Dash(
    __name__,
    title="FTC Standing Dashboard",
    use_pages=True,
    pages_folder=pages_dir,                 # Dash will ignore None and use default
    suppress_callback_exceptions=True       # page-specific and pattern-matching IDs
)
server = app.server

header = html.Header(
    className="topbar",
    children=[
        html.Div(
            className="topbar-inner",
            children=[
                html.Div(
                    [
                        html.H1("FTC Standing Dashboard", className="topbar-title"),
                        html.P(id="topbar-subtitle", className="topbar-subtitle"),
                    ],
                    className="topbar-center",
                ),
                html.Nav(
                    className="topbar-actions",
                    children=[
                        dcc.Link(html.Button("Reports", className="btn"), href="/"),
                        dcc.Link(html.Button("⚙", className="icon-btn", title="Open settings"), href="/settings"),
                    ],
                ),
            ],
        )
    ],
)

app.layout = html.Div(
    id="app-shell",
    className=f"app-shell theme-{DEFAULT_THEME}",
    children=[
        dcc.Location(id="url"),
        dcc.Store(id="prefs-theme", storage_type="local"),
        dcc.Store(id="prefs-defaults", storage_type="local"),
        dcc.Store(id="prefs-filters", storage_type="local"),
        dcc.Store(id="field-values", storage_type="memory"),
        dcc.Store(id="values-version", storage_type="memory"),
        dcc.Store(id="result-store", storage_type="memory"),
        header,
        html.Main(dash.page_container, className="app-main"),
    ],
)


# First visit: seed prefs-theme from the OS colour scheme (assets/theme.js).
dash.clientside_callback(
    ClientsideFunction(namespace="theme", function_name="seed"),
    Output("prefs-theme", "data", allow_duplicate=True),
    Input("url", "pathname"),
    State("prefs-theme", "data"),
    prevent_initial_call="initial_duplicate",
)


@dash.callback(
    Output("app-shell", "className"),
    Input("prefs-theme", "data"),
)
def _apply_theme(theme):
    return f"app-shell theme-{theme if theme in THEMES else DEFAULT_THEME}"


@dash.callback(
    Output("topbar-subtitle", "children"),
    Input("url", "pathname"),
)
def _subtitle(pathname):
    if pathname == "/settings":
        return "Configure application settings."
    return "Select a view, set filters, and load table results."


if __name__ == "__main__":
    port = int(os.getenv("PORT", "8080"))
    debug = os.getenv("DEBUG", "0") in ("1", "true", "True", "YES", "yes")
    app.run(host="0.0.0.0", port=port, debug=debug)
