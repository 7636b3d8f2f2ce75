# dashboard/pages/reports.py

import logging

import dash
from dash import ALL, MATCH, Input, Output, State, callback, ctx, dcc, html, no_update

from helpers import api_client
from helpers.explorer import ResultState, clear_result, run_request
from helpers.fields import get_field
from helpers.normalizer import Table
from helpers.preferences import (
    LAST_FILTERS_KEY,
    USER_DEFAULTS_KEY,
    Preferences,
    apply_user_defaults,
    initial_values,
)
from helpers.sorting import SortState
from helpers.tables import (
    export_filename,
    header_labels,
    render_body,
    results_table,
    status_children,
    table_frame,
)
from helpers.views import get_view, sorted_views

logger = logging.getLogger(__name__)

dash.register_page(__name__, path="/", name="Reports")


# --------------------------
# Layout helpers
# --------------------------
def _field_control(name: str, value: str, invalid: bool) -> html.Label:
    spec = get_field(name)
    label = spec.label if spec else name
    control_id = {"type": "field-input", "name": name}
    if spec and spec.kind == "select":
        control = dcc.Dropdown(
            id=control_id,
            options=[{"label": o.label, "value": o.value} for o in spec.options],
            value=value,
            clearable=False,
            className="dd dd-compact",
        )
    else:
        control = dcc.Input(
            id=control_id,
            type="text",
            value=value,
            placeholder=(spec.placeholder if spec and spec.placeholder else name),
            debounce=False,
        )
    return html.Label([label, control], className="field invalid" if invalid else "field")


def layout():
    views = sorted_views()
    return html.Div(
        [
            html.Section(
                className="card",
                children=[
                    dcc.Tabs(
                        id="view-tabs",
                        value=views[0].id,
                        children=[dcc.Tab(label=v.label, value=v.id) for v in views],
                        className="tabs-bar",
                    ),
                    html.Div(id="field-grid", className="grid"),
                    html.Div(
                        className="actions",
                        children=[
                            html.Button("Load Data", id="load-btn", n_clicks=0, disabled=not api_client.API_BASE_URL),
                            html.Button("Clear Response", id="clear-btn", className="secondary", n_clicks=0),
                        ],
                    ),
                    html.Div(id="validation-msg"),
                    dcc.Store(id="validation-store"),
                ],
            ),
            html.Section(
                className="card",
                children=[
                    html.H2("Results"),
                    html.Div(id="result-status"),
                    dcc.Loading(html.Div(id="result-tables"), type="dot"),
                ],
            ),
        ],
        className="reports-page",
    )


# --------------------------
# Field values
# --------------------------
@callback(
    Output("field-values", "data"),
    Output("values-version", "data"),
    Input("prefs-defaults", "modified_timestamp"),
    State("prefs-defaults", "data"),
    State("prefs-filters", "data"),
    State("field-values", "data"),
    State("values-version", "data"),
)
def _seed_values(_ts, defaults_doc, filters_doc, current, version):
    prefs = Preferences.load({USER_DEFAULTS_KEY: defaults_doc, LAST_FILTERS_KEY: filters_doc})
    values = initial_values(prefs) if current is None else apply_user_defaults(current, prefs.defaults)
    return values, (version or 0) + 1


@callback(
    Output("field-grid", "children"),
    Input("view-tabs", "value"),
    Input("values-version", "data"),
    Input("validation-store", "data"),
    State("field-values", "data"),
)
def _render_fields(view_id, _version, validation, values):
    view = get_view(view_id)
    values = values or {}
    missing = set((validation or {}).get("missing") or [])
    return [_field_control(name, values.get(name, ""), name in missing) for name in view.fields]


@callback(
    Output("field-values", "data", allow_duplicate=True),
    Input({"type": "field-input", "name": ALL}, "value"),
    State({"type": "field-input", "name": ALL}, "id"),
    State("field-values", "data"),
    prevent_initial_call=True,
)
def _capture_field_edits(field_values, field_ids, current):
    values = dict(current or {})
    for field_id, value in zip(field_ids, field_values):
        values[field_id["name"]] = "" if value is None else str(value)
    return values


@callback(
    Output("prefs-filters", "data"),
    Input("field-values", "data"),
    State("prefs-filters", "data"),
    prevent_initial_call=True,
)
def _remember_filters(values, stored):
    if not values:
        return no_update
    doc = Preferences.load({LAST_FILTERS_KEY: stored}).with_filters(values).save()[LAST_FILTERS_KEY]
    return no_update if doc == stored else doc


# --------------------------
# Request cycle
# --------------------------
@callback(
    Output("result-store", "data"),
    Output("validation-store", "data"),
    Input("load-btn", "n_clicks"),
    State("view-tabs", "value"),
    State("field-values", "data"),
    State("result-store", "data"),
    prevent_initial_call=True,
    running=[
        (Output("load-btn", "disabled"), True, not api_client.API_BASE_URL),
        (Output("load-btn", "children"), "Loading...", "Load Data"),
        (Output("clear-btn", "disabled"), True, False),
    ],
)
def _load(_clicks, view_id, values, current):
    view = get_view(view_id)
    outcome = run_request(api_client.API_BASE_URL, view, values or {}, previous=ResultState.from_dict(current))
    if outcome.validation:
        # previous tables stay untouched
        return no_update, {"message": outcome.validation, "missing": outcome.missing}
    return outcome.to_dict(), {}


@callback(
    Output("result-store", "data", allow_duplicate=True),
    Output("validation-store", "data", allow_duplicate=True),
    Input("clear-btn", "n_clicks"),
    prevent_initial_call=True,
)
def _clear(_clicks):
    return clear_result().to_dict(), {}


@callback(
    Output("validation-msg", "children"),
    Input("validation-store", "data"),
)
def _render_validation(validation):
    message = (validation or {}).get("message")
    return html.P(message, className="validation-error") if message else None


@callback(
    Output("result-status", "children"),
    Output("result-tables", "children"),
    Input("result-store", "data"),
)
def _render_results(data):
    result = ResultState.from_dict(data)
    status = status_children(result.status_code, result.error, result.error_kind, "", bool(result.tables))
    return status, [results_table(table, index) for index, table in enumerate(result.tables)]


# --------------------------
# Per-table sorting / export
# --------------------------
@callback(
    Output({"type": "sort-state", "table": MATCH}, "data"),
    Input({"type": "sort-btn", "table": MATCH, "column": ALL}, "n_clicks"),
    State({"type": "sort-state", "table": MATCH}, "data"),
    prevent_initial_call=True,
)
def _on_header_click(clicks, state):
    if not ctx.triggered_id or not any(clicks or []):
        return no_update
    return SortState.from_dict(state).toggle(ctx.triggered_id["column"]).to_dict()


@callback(
    Output({"type": "table-body", "table": MATCH}, "children"),
    Output({"type": "sort-btn", "table": MATCH, "column": ALL}, "children"),
    Input({"type": "sort-state", "table": MATCH}, "data"),
    State({"type": "table-data", "table": MATCH}, "data"),
    prevent_initial_call=True,
)
def _resort(state, table_data):
    table = Table.from_dict(table_data or {})
    sort_state = SortState.from_dict(state)
    return render_body(table, sort_state), header_labels(table, sort_state)


@callback(
    Output({"type": "export", "table": MATCH}, "data"),
    Input({"type": "export-btn", "table": MATCH}, "n_clicks"),
    State({"type": "sort-state", "table": MATCH}, "data"),
    State({"type": "table-data", "table": MATCH}, "data"),
    prevent_initial_call=True,
)
def _export(clicks, state, table_data):
    if not clicks:
        return no_update
    table = Table.from_dict(table_data or {})
    frame = table_frame(table, SortState.from_dict(state))
    return dcc.send_data_frame(frame.to_csv, export_filename(table.title), index=False)
