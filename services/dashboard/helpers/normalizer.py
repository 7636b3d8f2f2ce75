"""
Response Normalizer
-------------------
Turns a raw FTC API payload into render-ready tables, one transform per view.

Conventions
- Transforms are registered with `@register("<view id>")` and share the
  signature `(raw, values) -> List[Table]`.
- Unknown view ids normalize to [] (no error), so new API views can ship
  before their transform does.
- Table order and column order per view are part of the output contract.
- Transforms read every payload field through `helpers.formatting`, so
  missing keys become neutral values instead of exceptions.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from helpers.fields import field_value
from helpers.formatting import (
    alliance,
    alliance_teams,
    as_list,
    event_label,
    filter_matches,
    first_defined,
    format_date,
    format_number,
    format_record,
    join_location,
    match_result,
    match_score,
    plain,
    team_entry,
    team_label,
    team_name,
    team_number,
)

Values = Optional[Mapping[str, Any]]


@dataclass
class Table:
    title: str
    columns: List[str]
    rows: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "columns": list(self.columns), "rows": list(self.rows)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Table":
        return cls(
            title=str(data.get("title", "")),
            columns=list(data.get("columns") or []),
            rows=list(data.get("rows") or []),
        )


Transform = Callable[[Any, Values], List[Table]]
TRANSFORMS: Dict[str, Transform] = {}


def register(view_id: str) -> Callable[[Transform], Transform]:
    def decorator(fn: Transform) -> Transform:
        TRANSFORMS[view_id] = fn
        return fn
    return decorator


def normalize(view_id: str, raw: Any, values: Values = None) -> List[Table]:
    """Tables for `view_id`, or [] when no transform is registered."""
    transform = TRANSFORMS.get(view_id)
    if transform is None:
        return []
    return transform(raw, values or {})


def _titled(base: str, suffix: Any) -> str:
    return f"{base} - {suffix}" if suffix else base


def _event(raw: Any) -> Any:
    return first_defined(raw, "event", "Event")


def _event_code(raw: Any) -> Any:
    return first_defined(_event(raw), "event_code", "EventCode", default="")


# -----------------------------
# Health / teams
# -----------------------------

@register("health")
def _health(raw, values):
    return [Table("Health", ["Status"], [{"Status": first_defined(raw, "status", "Status", default="")}])]


def _team_row(team: Any) -> Dict[str, Any]:
    return {
        "Team Num": team_number(team),
        "Team Name": team_name(team),
        "Location": join_location(team),
        "Region": first_defined(team, "home_region", "HomeRegion", default=""),
        "Rookie Year": first_defined(team, "rookie_year", "RookieYear", default=""),
    }


@register("teams")
def _teams(raw, values):
    rows = []
    for team in as_list(raw):
        row = _team_row(team)
        row["Country"] = first_defined(team, "country", "Country", default="")
        rows.append(row)
    return [Table(
        "Teams",
        ["Team Num", "Team Name", "Country", "Region", "Location", "Rookie Year"],
        rows,
    )]


@register("team-details")
def _team_details(raw, values):
    summary = {
        "Team Num": team_number(raw),
        "Team Name": team_name(raw),
        "Location": join_location(raw),
        "Region": first_defined(raw, "region", "Region", default=""),
        "Rookie Year": first_defined(raw, "rookie_year", "RookieYear", default=""),
        "Total Record": format_record(first_defined(raw, "total_record", "TotalRecord")),
        "Qualification Record": format_record(first_defined(raw, "qual_record", "QualRecord")),
        "Playoff Record": format_record(first_defined(raw, "playoff_record", "PlayoffRecord")),
    }
    events = [
        {
            "Event Code": first_defined(item, "event_code", "EventCode", default=""),
            "Event Name": first_defined(item, "event_name", "EventName", default=""),
            "Rank": first_defined(item, "qual_rank", "QualRank", default=""),
            "Total": format_record(first_defined(item, "total_record", "TotalRecord")),
            "Qual": format_record(first_defined(item, "qual_record", "QualRecord")),
            "Playoff": format_record(first_defined(item, "playoff_record", "PlayoffRecord")),
            "Advanced": "✓" if first_defined(item, "advanced", "Advanced") else "",
            "Awards": [str(award) for award in as_list(first_defined(item, "awards", "Awards")) if award],
        }
        for item in as_list(first_defined(raw, "events", "Events"))
    ]
    return [
        Table("Team Summary", list(summary), [summary]),
        Table(
            "Events",
            ["Event Code", "Event Name", "Rank", "Total", "Qual", "Playoff", "Advanced", "Awards"],
            events,
        ),
    ]


# -----------------------------
# Event views
# -----------------------------

@register("event-teams")
def _event_teams(raw, values):
    event = _event(raw)
    dates = [
        format_date(first_defined(event, "date_start", "DateStart")),
        format_date(first_defined(event, "date_end", "DateEnd")),
    ]
    summary = {
        "Event": event_label(event),
        "Year": first_defined(event, "year", "Year", default=""),
        "Location": join_location(event),
        "Dates": " to ".join(d for d in dates if d),
    }
    teams = [_team_row(team) for team in as_list(first_defined(event, "teams", "Teams"))]
    return [
        Table("Event", ["Event", "Year", "Location", "Dates"], [summary]),
        Table("Event Teams", ["Team Num", "Team Name", "Location", "Region", "Rookie Year"], teams),
    ]


@register("event-rankings")
def _event_rankings(raw, values):
    rows = []
    for index, item in enumerate(as_list(first_defined(raw, "rankings", "Rankings")), start=1):
        team = first_defined(item, "team", "Team")
        rows.append({
            "Rank": index,
            "Team Num": team_number(team),
            "Team Name": team_name(team),
            "RS": format_number(first_defined(item, "sort_order1", "SortOrder1")),
            "Match Pts": format_number(first_defined(item, "sort_order2", "SortOrder2")),
            "Base Pts": format_number(first_defined(item, "sort_order3", "SortOrder3")),
            "Auto Pts": format_number(first_defined(item, "sort_order4", "SortOrder4")),
            "High Score": first_defined(item, "high_match_score", "HighMatchScore", default=""),
            "W-L-T": format_record(item),
            "Matches": first_defined(item, "matches_played", "MatchesPlayed", default=""),
        })
    return [Table(
        _titled("Event Rankings", _event_code(raw)),
        ["Rank", "Team Num", "Team Name", "RS", "Match Pts", "Base Pts", "Auto Pts", "High Score", "W-L-T", "Matches"],
        rows,
    )]


@register("event-awards")
def _event_awards(raw, values):
    awards = first_defined(_event(raw), "awards", "Awards")
    if not isinstance(awards, list):
        awards = as_list(first_defined(raw, "awards", "Awards"))
    rows = [
        {
            "Award Name": first_defined(item, "name", "Name", default=""),
            "Team": team_label(first_defined(item, "team", "Team")),
        }
        for item in awards
    ]
    return [Table(_titled("Event Awards", _event_code(raw)), ["Award Name", "Team"], rows)]


@register("event-advancement")
def _event_advancement(raw, values):
    rows = []
    for item in as_list(first_defined(raw, "team_advancements", "TeamAdvancements")):
        team = first_defined(item, "team", "Team")
        status = str(first_defined(item, "status", "Status", default="")).lower()
        rows.append({
            "Rank": first_defined(item, "rank", "Rank", default=""),
            "Team Num": team_number(team),
            "Team Name": team_name(team),
            "Total Pts": first_defined(item, "total_points", "TotalPoints", default=""),
            "Judging": first_defined(item, "judging_points", "JudgingPoints", default=""),
            "Playoff": first_defined(item, "playoff_points", "PlayoffPoints", default=""),
            "Selection": first_defined(item, "selection_points", "SelectionPoints", default=""),
            "Qualification": first_defined(item, "qualification_points", "QualificationPoints", default=""),
            "Adv #": first_defined(item, "advancement_number", "AdvancementNumber", default=""),
            "Advancing": "✓" if status == "first" else "-",
        })
    return [Table(
        _titled("Event Advancement", _event_code(raw)),
        ["Rank", "Team Num", "Team Name", "Total Pts", "Judging", "Playoff", "Selection",
         "Qualification", "Adv #", "Advancing"],
        rows,
    )]


@register("event-matches")
def _event_matches(raw, values):
    matches = first_defined(_event(raw), "matches", "Matches")
    if not isinstance(matches, list):
        matches = as_list(first_defined(raw, "matches", "Matches"))
    kept = filter_matches(
        matches,
        phase=field_value(values, "phase"),
        team=field_value(values, "team"),
        limit=field_value(values, "limit"),
    )
    rows = [
        {
            "Type": first_defined(match, "matchType", "match_type", "MatchType", default=""),
            "Match #": plain(first_defined(match, "matchNumber", "match_number", "MatchNumber", default="")),
            "Red Alliance": alliance_teams(alliance(match, "red")),
            "Blue Alliance": alliance_teams(alliance(match, "blue")),
            "Score": match_score(match),
            "Result": match_result(match),
        }
        for match in kept
    ]
    return [Table(
        _titled("Event Matches", _event_code(raw)),
        ["Type", "Match #", "Red Alliance", "Blue Alliance", "Score", "Result"],
        rows,
    )]


# -----------------------------
# Season-wide views
# -----------------------------

_RATING_COLUMNS = (
    ("CCWM", "ccwm", "CCWM"),
    ("OPR", "opr", "OPR"),
    ("npOPR", "np_opr", "NpOPR"),
    ("DPR", "dpr", "DPR"),
    ("npDPR", "np_dpr", "NpDPR"),
    ("npAVG", "np_avg", "NpAVG"),
)


@register("team-rankings")
def _team_rankings(raw, values):
    event_mode = bool(field_value(values, "event"))
    columns = ["Rank", "Team Num", "Team Name", "Region"]
    if event_mode:
        columns.append("Event")
    columns.append("Matches")
    columns.extend(name for name, _snake, _caps in _RATING_COLUMNS)

    rows = []
    for index, item in enumerate(as_list(raw), start=1):
        row = {
            "Rank": index,
            "Team Num": team_number(item),
            "Team Name": first_defined(item, "team_name", "TeamName", default=""),
            "Region": first_defined(item, "region", "Region", default=""),
            "Matches": first_defined(item, "matches", "Matches", default=""),
        }
        if event_mode:
            row["Event"] = first_defined(item, "event_code", "EventCode", default="")
        for name, snake, caps in _RATING_COLUMNS:
            row[name] = format_number(first_defined(item, snake, caps))
        rows.append(row)

    title = "Team Event Rankings" if event_mode else "Team Rankings"
    return [Table(title, columns, rows)]


def _event_entry(event: Any, awards: Any = None) -> Optional[Dict[str, Any]]:
    if not event_label(event):
        return None
    return {
        "code": first_defined(event, "event_code", "EventCode", default=""),
        "name": first_defined(event, "name", "Name", default=""),
        "awards": _award_names(awards),
    }


def _award_names(awards: Any) -> List[str]:
    names = (first_defined(award, "name", "Name") for award in as_list(awards))
    return [str(name) for name in names if name]


@register("region-advancement")
def _region_advancement(raw, values):
    rows = []
    for item in as_list(first_defined(raw, "team_advancements", "TeamAdvancements")):
        team = first_defined(item, "team", "Team")
        others = []
        for entry in as_list(first_defined(item, "other_event_participations", "OtherEventParticipations")):
            other = _event_entry(
                first_defined(entry, "event", "Event"),
                first_defined(entry, "awards", "Awards"),
            )
            if other is not None:
                others.append(other)
        rows.append({
            "Team Num": team_number(team),
            "Team Name": team_name(team),
            "Advancing Event": event_label(first_defined(item, "advancing_event", "AdvancingEvent")),
            "Advancing Awards": _award_names(first_defined(item, "advancing_event_awards", "AdvancingEventAwards")),
            "Other Events": others,
        })
    return [Table(
        _titled("Region Advancement", first_defined(raw, "region_code", "RegionCode")),
        ["Team Num", "Team Name", "Advancing Event", "Advancing Awards", "Other Events"],
        rows,
    )]


@register("all-advancement")
def _all_advancement(raw, values):
    rows = []
    for item in as_list(first_defined(raw, "event_summaries", "EventSummaries")):
        event = first_defined(item, "event", "Event")
        qualified = as_list(first_defined(item, "qualified_teams", "QualifiedTeams"))
        teams = [team_entry(first_defined(entry, "team", "Team")) for entry in qualified]
        rows.append({
            "Event Code": first_defined(event, "event_code", "EventCode", default=""),
            "Event Name": first_defined(event, "name", "Name", default=""),
            "Date": format_date(first_defined(event, "date_start", "DateStart")),
            "Qualified Teams": len(qualified),
            "Teams": [team for team in teams if team is not None],
        })
    return [Table(
        _titled("Advancement Summary", first_defined(raw, "region_code", "RegionCode")),
        ["Event Code", "Event Name", "Date", "Qualified Teams", "Teams"],
        rows,
    )]
