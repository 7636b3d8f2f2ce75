"""
Table rendering helpers
-----------------------
Dash components for normalized tables plus a pandas view used for CSV export.

Component ids (pattern-matching, `index` = position in the result list):
- {"type": "sort-btn",   "table": i, "column": name} header buttons
- {"type": "sort-state", "table": i}                 dcc.Store with SortState
- {"type": "table-data", "table": i}                 dcc.Store with the Table
- {"type": "table-body", "table": i}                 tbody, re-rendered on sort
- {"type": "export-btn", "table": i} / {"type": "export", "table": i}
"""

import re
from typing import Any, List, Mapping, Sequence

import pandas as pd
from dash import dcc, html

from helpers.formatting import cell_text, entry_text
from helpers.normalizer import Table
from helpers.sorting import SortState, sort_rows


def _sort_id(index: int, column: str) -> dict:
    return {"type": "sort-btn", "table": index, "column": column}


def render_cell(value: Any):
    """Scalar -> text; list -> one line per entry; event entries list their awards."""
    if not isinstance(value, list):
        return "" if value is None else str(value)
    lines = []
    for entry in value:
        text = entry_text(entry)
        awards = entry.get("awards") if isinstance(entry, Mapping) else None
        if awards:
            lines.append(html.Div([text, html.Ul([html.Li(a) for a in awards], className="cell-sublist")]))
        elif text:
            lines.append(html.Div(text))
    return lines


def render_body(table: Table, state: SortState) -> List[html.Tr]:
    return [
        html.Tr([html.Td(render_cell(row.get(column))) for column in table.columns])
        for row in sort_rows(table.rows, state)
    ]


def header_labels(table: Table, state: SortState) -> List[str]:
    return [f"{column}{state.arrow(column)}" for column in table.columns]


def results_table(table: Table, index: int) -> html.Section:
    """One titled, sortable table with its own fresh sort state."""
    state = SortState()
    stores = [
        dcc.Store(id={"type": "sort-state", "table": index}, data=state.to_dict()),
        dcc.Store(id={"type": "table-data", "table": index}, data=table.to_dict()),
        dcc.Download(id={"type": "export", "table": index}),
    ]
    if not table.rows:
        return html.Section(
            [html.H3(table.title), html.P("No rows returned.", className="empty-state"), *stores],
            className="table-section",
        )

    header = html.Tr([
        html.Th(html.Button(label, id=_sort_id(index, column), className="column-sort-btn", n_clicks=0))
        for column, label in zip(table.columns, header_labels(table, state))
    ])
    return html.Section(
        [
            html.Div(
                [
                    html.H3(table.title),
                    html.Button(
                        "Export CSV",
                        id={"type": "export-btn", "table": index},
                        className="secondary small",
                        n_clicks=0,
                    ),
                ],
                className="table-title-row",
            ),
            html.Div(
                html.Table([
                    html.Thead(header),
                    html.Tbody(render_body(table, state), id={"type": "table-body", "table": index}),
                ]),
                className="table-wrap",
            ),
            *stores,
        ],
        className="table-section",
    )


# -----------------------------
# pandas export
# -----------------------------

def table_frame(table: Table, state: SortState = SortState()) -> pd.DataFrame:
    """Flattened DataFrame of `table` in the current sort order (lists joined by ', ')."""
    rows = [
        {column: cell_text(row.get(column)) for column in table.columns}
        for row in sort_rows(table.rows, state)
    ]
    return pd.DataFrame(rows, columns=list(table.columns))


def export_filename(title: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", title or "table").strip("_").lower()
    return f"{slug or 'table'}.csv"


def status_children(status_code, error: str, error_kind: str, validation: str, has_tables: bool) -> Sequence:
    out = []
    if validation:
        out.append(html.P(validation, className="validation-error"))
    if error:
        prefix = "Network error: " if error_kind == "network" else ""
        out.append(html.P(f"{prefix}{error}", className="error"))
    if status_code is not None:
        out.append(html.P(f"Status: {status_code}", className="status"))
    if not has_tables:
        out.append(html.P("No data loaded yet.", className="empty-state"))
    return out
