"""
Tabular Sort Engine
-------------------
Per-table, click-driven sorting.

Behaviour
- Clicking the active column flips asc <-> desc; clicking any other column
  makes it active, starting *descending* (biggest first).
- No active column means rows keep their original order.
- Cells that are both finite numbers compare numerically; everything else
  compares as case/accent-insensitive, numeric-aware text ("2" < "10").
- `sorted` is stable, so equal keys keep their original relative order in
  both directions.
"""

import re
import unicodedata
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from helpers.formatting import cell_text, finite_number

ASC = "asc"
DESC = "desc"

_CHUNKS = re.compile(r"(\d+)")


@dataclass(frozen=True)
class SortState:
    column: Optional[str] = None
    direction: str = ASC

    def toggle(self, column: str) -> "SortState":
        if self.column == column:
            return SortState(column, ASC if self.direction == DESC else DESC)
        return SortState(column, DESC)

    def to_dict(self) -> Dict[str, Any]:
        return {"column": self.column, "direction": self.direction}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SortState":
        if not data:
            return cls()
        direction = DESC if data.get("direction") == DESC else ASC
        return cls(data.get("column"), direction)

    def arrow(self, column: str) -> str:
        if self.column != column:
            return ""
        return " ▲" if self.direction == ASC else " ▼"


def _natural_key(value: Any) -> List[Tuple[int, int, str]]:
    text = unicodedata.normalize("NFKD", cell_text(value))
    text = "".join(ch for ch in text if not unicodedata.combining(ch)).casefold()
    key = []
    for chunk in _CHUNKS.split(text):
        if not chunk:
            continue
        if chunk.isdecimal():
            key.append((0, int(chunk), ""))
        else:
            key.append((1, 0, chunk))
    return key


def compare_cells(left: Any, right: Any) -> int:
    """-1/0/1 ordering of two cells, ascending."""
    left_num = finite_number(left)
    right_num = finite_number(right)
    if left_num is not None and right_num is not None:
        return (left_num > right_num) - (left_num < right_num)
    left_key = _natural_key(left)
    right_key = _natural_key(right)
    return (left_key > right_key) - (left_key < right_key)


def sort_rows(rows: Sequence[Mapping[str, Any]], state: SortState) -> List[Mapping[str, Any]]:
    if not state.column:
        return list(rows)
    sign = 1 if state.direction == ASC else -1
    column = state.column

    def _cmp(left, right):
        return compare_cells(left.get(column), right.get(column)) * sign

    return sorted(rows, key=cmp_to_key(_cmp))


class TableSorter:
    """Sort state bound to one table's rows."""

    def __init__(self, rows: Sequence[Mapping[str, Any]], state: Optional[SortState] = None):
        self._rows = list(rows)
        self.state = state or SortState()

    def on_header_click(self, column: str) -> SortState:
        self.state = self.state.toggle(column)
        return self.state

    @property
    def rows(self) -> List[Mapping[str, Any]]:
        return sort_rows(self._rows, self.state)
