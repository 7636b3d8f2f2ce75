"""Shared fixtures: small FTC API payloads in both key casings."""

import pytest


def _team(number, name):
    return {"team_id": number, "name": name}


def _match(number, level, kind, red, blue, red_score=None, blue_score=None, result=None):
    match = {
        "matchNumber": number,
        "tournamentLevel": level,
        "matchType": kind,
        "red_alliance": {"teams": [_team(n, f"Team {n}") for n in red]},
        "blue_alliance": {"teams": [_team(n, f"Team {n}") for n in blue]},
    }
    if red_score is not None:
        match["red_alliance"]["score"] = {"total_points": red_score}
    if blue_score is not None:
        match["blue_alliance"]["score"] = {"total_points": blue_score}
    if result is not None:
        match["result"] = result
    return match


@pytest.fixture
def matches_payload():
    """Six qualification matches followed by four playoff matches."""
    matches = [
        _match(i, "QUALIFICATION", "Qualification", [100 + i, 200 + i], [300 + i, 400 + i], 50 + i, 40)
        for i in range(1, 7)
    ]
    matches += [
        _match(i, "PLAYOFF", "Semifinal", [12345, 500 + i], [600 + i, 700 + i], 80, 80)
        for i in range(7, 9)
    ]
    matches += [
        _match(i, "PLAYOFF", "Final", [800 + i, 900 + i], [12345, 1000 + i], 60, 90)
        for i in range(9, 11)
    ]
    return {"event": {"event_code": "USNCCOQ", "matches": matches}}


@pytest.fixture
def rankings_payload():
    return {
        "event": {"event_code": "USNCCOQ"},
        "rankings": [
            {
                "team": {"team_id": 12345, "name": "Gear Grinders"},
                "sort_order1": 2,
                "sort_order2": 105.5,
                "sort_order3": "abc",
                "high_match_score": 140,
                "wins": 5,
                "losses": 1,
                "matches_played": 6,
            },
            {
                "Team": {"TeamID": 777, "Name": "Bolt Brigade"},
                "SortOrder1": 1.5,
                "Wins": 3,
                "Losses": 3,
                "Ties": 0,
            },
        ],
    }


@pytest.fixture
def fake_fetch():
    """Recording transport double; set `.result` to the FetchResult to return."""

    class FakeFetch:
        def __init__(self):
            self.calls = []
            self.result = None
            self.error = None

        def __call__(self, url):
            self.calls.append(url)
            if self.error is not None:
                raise self.error
            return self.result

    return FakeFetch()
