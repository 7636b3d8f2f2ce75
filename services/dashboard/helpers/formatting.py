"""
Normalization primitives
------------------------
Small readers/formatters shared by every per-view transform.

Principles
- Never raise on odd payloads: non-mappings read as missing, bad numbers
  format as "" (never "nan" or "0.00").
- Two casings exist upstream (`team_id` vs `TeamID`); `first_defined` is the
  one place that resolves them.
"""

import math
import re
from typing import Any, Dict, List, Mapping, Optional

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def first_defined(obj: Any, *keys: str, default: Any = None) -> Any:
    """Value of the first key present in `obj`.

    A present key wins even if its value is JSON null; null then reads as `default`.
    """
    if not isinstance(obj, Mapping):
        return default
    for key in keys:
        if key in obj:
            value = obj[key]
            return default if value is None else value
    return default


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def finite_number(value: Any) -> Optional[float]:
    """Float for real numbers and numeric strings; None for anything non-finite."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            num = float(text)
        except ValueError:
            return None
    else:
        return None
    return num if math.isfinite(num) else None


def is_score(value: Any) -> bool:
    """True for JSON numbers only (strings do not count as scores)."""
    return isinstance(value, (int, float)) and finite_number(value) is not None


def plain(value: Any) -> Any:
    """Drop a float's trailing '.0' so 12345.0 displays and compares as 12345."""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return value


def format_number(value: Any, digits: int = 2) -> str:
    num = finite_number(value)
    if num is None:
        return ""
    return f"{num:.{digits}f}"


def format_record(record: Any) -> str:
    """'W-L-T' for a record object; missing parts count as 0."""
    if not isinstance(record, Mapping):
        return ""
    wins = plain(first_defined(record, "wins", "Wins", default=0))
    losses = plain(first_defined(record, "losses", "Losses", default=0))
    ties = plain(first_defined(record, "ties", "Ties", default=0))
    return f"{wins}-{losses}-{ties}"


def format_date(value: Any) -> str:
    if not value:
        return ""
    text = str(value)
    return text[:10] if len(text) >= 10 else text


def parse_limit(value: Any) -> Optional[int]:
    """Leading integer of a limit field when it is positive, else None."""
    match = _LEADING_INT.match(str(value or ""))
    if not match:
        return None
    limit = int(match.group(1))
    return limit if limit > 0 else None


def join_location(obj: Any) -> str:
    parts = (
        first_defined(obj, "city", "City"),
        first_defined(obj, "state_prov", "StateProv"),
        first_defined(obj, "country", "Country"),
    )
    return ", ".join(str(part) for part in parts if part)


# --- Teams / events ------------------------------------------------------------

def team_number(team: Any) -> Any:
    return plain(first_defined(team, "team_id", "TeamID", default=""))


def team_name(team: Any) -> Any:
    return first_defined(team, "name", "Name", default="")


def team_entry(team: Any) -> Optional[Dict[str, Any]]:
    """Compound {number, name} entry, or None when neither is present."""
    number = team_number(team)
    name = team_name(team)
    if number in ("", None) and not name:
        return None
    return {"number": number, "name": name}


def team_label(team: Any) -> str:
    """'12345 - Name', or whichever half is present."""
    number = team_number(team)
    name = team_name(team)
    if number and name:
        return f"{number} - {name}"
    return f"{number}{name}"


def event_label(event: Any) -> str:
    if not event:
        return ""
    code = first_defined(event, "event_code", "EventCode", default="")
    name = first_defined(event, "name", "Name", default="")
    return f"{code} - {name}".strip()


def entry_text(entry: Any) -> str:
    """Display text of a cell sub-entry (plain string, team or event entry)."""
    if isinstance(entry, Mapping):
        if "code" in entry:
            return event_label({"event_code": entry.get("code"), "name": entry.get("name")})
        number = entry.get("number")
        name = entry.get("name")
        if number not in ("", None) and name:
            return f"{number} - {name}"
        return f"{'' if number is None else number}{name or ''}"
    return "" if entry is None else str(entry)


def cell_text(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(entry_text(entry) for entry in value)
    return entry_text(value)


# --- Matches -------------------------------------------------------------------

def match_phase(match: Any) -> str:
    level = first_defined(match, "tournamentLevel", "tournament_level", "TournamentLevel", default="")
    kind = first_defined(match, "matchType", "match_type", "MatchType", default="")
    descriptor = f"{level} {kind}".lower()
    if "qual" in descriptor:
        return "qualification"
    if "playoff" in descriptor or "final" in descriptor:
        return "playoff"
    return ""


def alliance(match: Any, color: str) -> Any:
    return first_defined(match, f"{color}_alliance", f"{color.capitalize()}Alliance")


def alliance_score(match: Any, color: str) -> Any:
    score = first_defined(alliance(match, color), "score", "Score")
    return first_defined(score, "total_points", "TotalPoints")


def alliance_teams(side: Any) -> List[Dict[str, Any]]:
    teams = as_list(first_defined(side, "teams", "Teams"))
    return [entry for entry in (team_entry(team) for team in teams) if entry is not None]


def match_result(match: Any) -> str:
    explicit = first_defined(match, "result", "Result", default="")
    if explicit:
        return str(explicit)
    red = alliance_score(match, "red")
    blue = alliance_score(match, "blue")
    if not (is_score(red) and is_score(blue)):
        return ""
    if red > blue:
        return "Red"
    if blue > red:
        return "Blue"
    return "Tie"


def match_score(match: Any) -> str:
    red = alliance_score(match, "red")
    blue = alliance_score(match, "blue")
    if is_score(red) and is_score(blue):
        return f"{plain(red)}-{plain(blue)}"
    return ""


def roster_has_team(match: Any, team: str) -> bool:
    """True when either alliance lists a team whose number, as text, equals `team`."""
    for color in ("red", "blue"):
        for entry in alliance_teams(alliance(match, color)):
            if str(entry["number"]) == team:
                return True
    return False


def filter_matches(matches: List[Any], phase: str = "", team: str = "", limit: Any = "") -> List[Any]:
    """Phase filter, then team filter, then limit truncation (original order kept)."""
    phase = (phase or "").strip().lower()
    team = (team or "").strip()
    if phase:
        matches = [match for match in matches if match_phase(match) == phase]
    if team:
        matches = [match for match in matches if roster_has_team(match, team)]
    cap = parse_limit(limit)
    if cap is not None:
        matches = matches[:cap]
    return matches
