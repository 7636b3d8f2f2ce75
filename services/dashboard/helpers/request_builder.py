"""
Request Builder
---------------
Pure URL construction for a view + field values. No I/O happens here.

Rules
- Optional placeholders (`{name?}`) drop their whole segment (leading slash
  included) when the value is blank.
- Required placeholders (`{name}`) are always substituted; a blank value
  yields an empty segment. Required-ness is the validation gate's job.
- Query params keep declared order and are sent only when non-blank, after
  per-view exclusions have been applied.
"""

from typing import List, Mapping, Optional, Tuple
from urllib.parse import quote, urlencode

from helpers.fields import field_value
from helpers.views import ViewDescriptor


def _encode(value: str) -> str:
    return quote(value, safe="")


def resolve_template(view: ViewDescriptor, values: Optional[Mapping[str, object]]) -> str:
    """Pick the path template, honoring the view's declared overrides."""
    for trigger, template in view.path_overrides:
        if field_value(values, trigger):
            return template
    return view.path_template


def build_path(view: ViewDescriptor, values: Optional[Mapping[str, object]]) -> str:
    path = resolve_template(view, values)
    for name in view.path_params:
        value = field_value(values, name)
        optional = f"/{{{name}?}}"
        if optional in path:
            path = path.replace(optional, f"/{_encode(value)}" if value else "")
            continue
        path = path.replace(f"{{{name}}}", _encode(value))
    return path


def build_query(view: ViewDescriptor, values: Optional[Mapping[str, object]]) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for name in view.query_params:
        blocker = view.query_exclusions.get(name)
        if blocker and field_value(values, blocker):
            continue
        value = field_value(values, name)
        if value:
            pairs.append((name, value))
    return pairs


def build_url(base_url: str, view: ViewDescriptor, values: Optional[Mapping[str, object]]) -> str:
    """Absolute request URL for `view` given the current field values.

    Args:
        base_url: API root, e.g. "http://localhost:8080/" (one trailing slash is dropped).
        view: catalog entry describing the endpoint.
        values: field name -> raw user input (trimmed here).

    Returns:
        str: base + path + optional "?query".
    """
    base = (base_url or "").strip()
    if base.endswith("/"):
        base = base[:-1]
    query = urlencode(build_query(view, values), quote_via=quote)
    return f"{base}{build_path(view, values)}{'?' + query if query else ''}"
