# dashboard/pages/settings.py

import dash
from dash import ClientsideFunction, Input, Output, State, callback, clientside_callback, dcc, html, no_update

from helpers.preferences import (
    USER_DEFAULTS_KEY,
    Preferences,
    UserDefaults,
)

dash.register_page(__name__, path="/settings", name="Settings")


def _text_setting(label: str, control_id: str, placeholder: str) -> html.Label:
    return html.Label(
        [label, dcc.Input(id=control_id, type="text", placeholder=placeholder)],
        className="field",
    )


def layout():
    return html.Section(
        className="card",
        children=[
            html.H2("Settings"),
            html.Div(
                className="grid",
                children=[
                    html.Label(
                        [
                            "Theme",
                            dcc.Dropdown(
                                id="settings-theme",
                                options=[
                                    {"label": "Light", "value": "light"},
                                    {"label": "Dark", "value": "dark"},
                                ],
                                clearable=False,
                                className="dd dd-compact",
                            ),
                        ],
                        className="field",
                    ),
                    _text_setting("Default Season", "settings-season", "2025"),
                    _text_setting("Default Region", "settings-region", "USCHS"),
                    _text_setting("Default Team Num", "settings-team", "12345"),
                ],
            ),
            html.Div(
                className="actions",
                children=[
                    html.Button("Save Settings", id="settings-save", n_clicks=0),
                    dcc.Link(html.Button("Back to Reports", className="secondary"), href="/"),
                ],
            ),
            html.P(id="settings-saved", className="status"),
            # present only while this page is mounted; fires the hydration callback
            dcc.Store(id="settings-mounted", data=True),
        ],
    )


clientside_callback(
    ClientsideFunction(namespace="theme", function_name="hydrate"),
    Output("settings-theme", "value"),
    Input("settings-mounted", "data"),
    State("prefs-theme", "data"),
)


@callback(
    Output("settings-season", "value"),
    Output("settings-region", "value"),
    Output("settings-team", "value"),
    Input("settings-mounted", "data"),
    State("prefs-defaults", "data"),
)
def _hydrate_settings(_mounted, defaults_doc):
    prefs = Preferences.load({USER_DEFAULTS_KEY: defaults_doc})
    return prefs.defaults.season, prefs.defaults.region, prefs.defaults.team_number


@callback(
    Output("prefs-theme", "data", allow_duplicate=True),
    Input("settings-theme", "value"),
    State("prefs-theme", "data"),
    prevent_initial_call=True,
)
def _save_theme(theme, stored):
    if not theme or theme == stored:
        return no_update
    return theme


@callback(
    Output("prefs-defaults", "data"),
    Output("settings-saved", "children"),
    Input("settings-save", "n_clicks"),
    State("settings-season", "value"),
    State("settings-region", "value"),
    State("settings-team", "value"),
    prevent_initial_call=True,
)
def _save_defaults(clicks, season, region, team):
    if not clicks:
        return no_update, no_update
    defaults = UserDefaults.cleaned(season, region, team)
    return Preferences(defaults=defaults).save()[USER_DEFAULTS_KEY], "Settings saved."
