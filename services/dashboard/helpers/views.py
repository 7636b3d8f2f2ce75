"""
View Catalog
------------
Declarative descriptors for every FTC API query the dashboard can run.

Each view names:
- a path template with `{name}` and optional `{name?}` placeholders,
- which fields fill the path, which become query parameters, and which are
  purely local (consumed by the normalizer, never sent),
- which fields must be non-blank before a request may be issued,
- per-view rules: alternate templates chosen by a non-blank field
  (`path_overrides`) and query params suppressed by a local field
  (`query_exclusions`).
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from helpers.fields import FIELD_REGISTRY


@dataclass(frozen=True)
class ViewDescriptor:
    id: str
    label: str
    path_template: str
    path_params: Tuple[str, ...] = ()
    query_params: Tuple[str, ...] = ()
    local_params: Tuple[str, ...] = ()
    required_fields: Tuple[str, ...] = ()
    path_overrides: Tuple[Tuple[str, str], ...] = ()
    query_exclusions: Dict[str, str] = field(default_factory=dict)

    @property
    def fields(self) -> List[str]:
        """Ordered, de-duplicated field names to render as inputs."""
        seen = set()
        out: List[str] = []
        for name in (*self.path_params, *self.query_params, *self.local_params):
            if name not in seen:
                out.append(name)
                seen.add(name)
        return out

    def __post_init__(self):
        unknown = [name for name in self.fields if name not in FIELD_REGISTRY]
        for trigger, _template in self.path_overrides:
            if trigger not in FIELD_REGISTRY:
                unknown.append(trigger)
        if unknown:
            raise ValueError(f"view {self.id!r} references unknown fields: {unknown}")

        stray = [name for name in self.required_fields if name not in self.fields]
        if stray:
            raise ValueError(f"view {self.id!r} requires fields it never reads: {stray}")


VIEWS: Tuple[ViewDescriptor, ...] = (
    ViewDescriptor(
        id="teams",
        label="Teams",
        path_template="/v1/{season}/teams/{region?}",
        path_params=("season", "region"),
        query_params=("limit",),
        required_fields=("season",),
    ),
    ViewDescriptor(
        id="team-details",
        label="Team Details",
        path_template="/v1/{season}/team/{teamId}",
        path_params=("season", "teamId"),
        required_fields=("season", "teamId"),
    ),
    ViewDescriptor(
        id="event-teams",
        label="Event Teams",
        path_template="/v1/{season}/events/{eventCode}/teams",
        path_params=("season", "eventCode"),
        query_params=("limit",),
        required_fields=("season", "eventCode"),
    ),
    ViewDescriptor(
        id="event-rankings",
        label="Qualification Rankings",
        path_template="/v1/{season}/events/{eventCode}/rankings",
        path_params=("season", "eventCode"),
        query_params=("limit",),
        required_fields=("season", "eventCode"),
    ),
    ViewDescriptor(
        id="event-awards",
        label="Event Awards",
        path_template="/v1/{season}/events/{eventCode}/awards",
        path_params=("season", "eventCode"),
        query_params=("limit",),
        required_fields=("season", "eventCode"),
    ),
    ViewDescriptor(
        id="event-advancement",
        label="Event Advancement",
        path_template="/v1/{season}/events/{eventCode}/advancement",
        path_params=("season", "eventCode"),
        required_fields=("season", "eventCode"),
    ),
    ViewDescriptor(
        id="event-matches",
        label="Event Matches",
        path_template="/v1/{season}/events/{eventCode}/matches",
        path_params=("season", "eventCode"),
        query_params=("limit",),
        local_params=("team", "phase"),
        required_fields=("season", "eventCode"),
        # limit is applied locally after the phase filter instead
        query_exclusions={"limit": "phase"},
    ),
    ViewDescriptor(
        id="team-rankings",
        label="Team Rankings",
        path_template="/v1/{season}/team-rankings",
        path_params=("season",),
        query_params=("region", "country", "event", "limit"),
        required_fields=("season",),
        path_overrides=(("event", "/v1/{season}/team-event-rankings"),),
    ),
    ViewDescriptor(
        id="region-advancement",
        label="Team Advancement",
        path_template="/v1/{season}/regions/{region}/advancement",
        path_params=("season", "region"),
        required_fields=("season", "region"),
    ),
    ViewDescriptor(
        id="all-advancement",
        label="Event Advancement",
        path_template="/v1/{season}/advancement",
        path_params=("season",),
        query_params=("region",),
        required_fields=("season",),
    ),
    ViewDescriptor(
        id="health",
        label="Health",
        path_template="/v1/health",
    ),
)

_VIEWS_BY_ID: Dict[str, ViewDescriptor] = {view.id: view for view in VIEWS}


def get_view(view_id: Optional[str]) -> ViewDescriptor:
    """Look up a view by id, falling back to the first catalog entry."""
    return _VIEWS_BY_ID.get(view_id or "", VIEWS[0])


def sorted_views() -> List[ViewDescriptor]:
    """Views ordered by label, case-insensitive (tab order)."""
    return sorted(VIEWS, key=lambda view: view.label.casefold())
