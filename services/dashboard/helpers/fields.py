"""
Field Registry
--------------
Static metadata for every user-editable field a view can reference.

Conventions
- One entry per field name; views refer to fields by name only.
- `kind` is "text" (free input) or "select" (uses `options`).
- `DEFAULT_VALUES` seeds a new session before user defaults are applied.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FieldOption:
    value: str
    label: str


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    placeholder: str = ""
    kind: str = "text"
    options: Tuple[FieldOption, ...] = field(default_factory=tuple)


FIELD_REGISTRY: Dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec("season", "Season", "2025"),
        FieldSpec("teamId", "Team ID", "12345"),
        FieldSpec("region", "Region", "USCHS"),
        FieldSpec("eventCode", "Event Code", "USNCCOQ"),
        FieldSpec("country", "Country", "USA"),
        FieldSpec("event", "Event (optional)", "USNCCOQ"),
        FieldSpec("team", "Team Filter", "12345"),
        FieldSpec("limit", "Limit", "25"),
        FieldSpec(
            "phase",
            "Match Phase",
            kind="select",
            options=(
                FieldOption("", "Both"),
                FieldOption("qualification", "Qualification"),
                FieldOption("playoff", "Playoff"),
            ),
        ),
    )
}

DEFAULT_VALUES: Dict[str, str] = {
    "season": "2025",
    "teamId": "12345",
    "region": "USCHS",
    "eventCode": "USNCCOQ",
    "country": "",
    "event": "",
    "team": "",
    "limit": "25",
    "phase": "",
}


def get_field(name: str) -> Optional[FieldSpec]:
    return FIELD_REGISTRY.get(name)


def field_label(name: str) -> str:
    """Registry label for `name`, or the raw name when it is not registered."""
    spec = FIELD_REGISTRY.get(name)
    return spec.label if spec else name


def field_value(values: Optional[Mapping[str, object]], name: str) -> str:
    """Trimmed string value of a field; missing and None read as ''."""
    if not values:
        return ""
    raw = values.get(name)
    if raw is None:
        return ""
    return str(raw).strip()
