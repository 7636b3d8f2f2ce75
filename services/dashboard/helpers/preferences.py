"""
Preferences
-----------
Value object for everything the dashboard persists in browser local storage.

Three independent documents, each a JSON string under its own key:
- THEME_KEY         : "light" | "dark"
- USER_DEFAULTS_KEY : {"season", "region", "teamNumber"}
- LAST_FILTERS_KEY  : {"eventCode", "limit"}

Missing or corrupt documents fall back to built-in defaults; nothing here
raises. Only the Dash shell reads/writes storage (via `dcc.Store`), core
helpers receive plain values.
"""

import json
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

from helpers.fields import DEFAULT_VALUES

logger = logging.getLogger(__name__)

THEME_KEY = "ftcapi-theme"
USER_DEFAULTS_KEY = "ftcapi-user-defaults"
LAST_FILTERS_KEY = "ftcapi-last-filters"

THEMES = ("light", "dark")
DEFAULT_THEME = "light"


@dataclass(frozen=True)
class UserDefaults:
    season: str = "2025"
    region: str = "USCHS"
    team_number: str = "12345"

    @classmethod
    def cleaned(cls, season: Any = "", region: Any = "", team_number: Any = "") -> "UserDefaults":
        """Trimmed values; blanks fall back to the built-in defaults."""
        base = cls()
        return cls(
            season=str(season or "").strip() or base.season,
            region=str(region or "").strip() or base.region,
            team_number=str(team_number or "").strip() or base.team_number,
        )

    def to_dict(self) -> Dict[str, str]:
        return {"season": self.season, "region": self.region, "teamNumber": self.team_number}


@dataclass(frozen=True)
class LastFilters:
    event_code: str = DEFAULT_VALUES["eventCode"]
    limit: str = DEFAULT_VALUES["limit"]

    def to_dict(self) -> Dict[str, str]:
        return {"eventCode": self.event_code, "limit": self.limit}


def _parse(raw: Any) -> Optional[Dict[str, Any]]:
    if isinstance(raw, Mapping):
        return dict(raw)
    if not raw or not isinstance(raw, str):
        return None
    try:
        parsed = json.loads(raw)
    except ValueError:
        logger.info("Ignoring corrupt stored preferences: %r", raw[:80])
        return None
    return parsed if isinstance(parsed, dict) else None


def _text(value: Any, fallback: str) -> str:
    return str(value) if value else fallback


@dataclass(frozen=True)
class Preferences:
    theme: str = DEFAULT_THEME
    defaults: UserDefaults = field(default_factory=UserDefaults)
    filters: LastFilters = field(default_factory=LastFilters)

    @classmethod
    def load(cls, storage: Optional[Mapping[str, Any]]) -> "Preferences":
        storage = storage or {}

        theme = storage.get(THEME_KEY)
        if theme not in THEMES:
            theme = DEFAULT_THEME

        base = UserDefaults()
        stored = _parse(storage.get(USER_DEFAULTS_KEY)) or {}
        defaults = UserDefaults(
            season=_text(stored.get("season"), base.season),
            region=_text(stored.get("region"), base.region),
            team_number=_text(stored.get("teamNumber"), base.team_number),
        )

        last = LastFilters()
        stored = _parse(storage.get(LAST_FILTERS_KEY)) or {}
        filters = LastFilters(
            event_code=_text(stored.get("eventCode"), last.event_code),
            limit=_text(stored.get("limit"), last.limit),
        )
        return cls(theme=theme, defaults=defaults, filters=filters)

    def save(self) -> Dict[str, str]:
        """Key -> string documents ready for local storage."""
        return {
            THEME_KEY: self.theme,
            USER_DEFAULTS_KEY: json.dumps(self.defaults.to_dict()),
            LAST_FILTERS_KEY: json.dumps(self.filters.to_dict()),
        }

    def with_filters(self, values: Mapping[str, Any]) -> "Preferences":
        return replace(
            self,
            filters=LastFilters(
                event_code=str(values.get("eventCode") or ""),
                limit=str(values.get("limit") or ""),
            ),
        )


def apply_user_defaults(values: Mapping[str, Any], defaults: UserDefaults) -> Dict[str, str]:
    """Push saved defaults into the editable field values."""
    out = dict(values)
    out.update(
        season=defaults.season,
        region=defaults.region,
        teamId=defaults.team_number,
        team=defaults.team_number,
    )
    return out


def initial_values(prefs: Preferences) -> Dict[str, str]:
    """Field defaults, then user defaults, then the last-used filters."""
    values = apply_user_defaults(DEFAULT_VALUES, prefs.defaults)
    values.update(eventCode=prefs.filters.event_code, limit=prefs.filters.limit)
    return values
