"""Tests for persisted preferences (theme, user defaults, last filters)."""

import json

from helpers.preferences import (
    DEFAULT_THEME,
    LAST_FILTERS_KEY,
    THEME_KEY,
    USER_DEFAULTS_KEY,
    LastFilters,
    Preferences,
    UserDefaults,
    apply_user_defaults,
    initial_values,
)


class TestLoad:
    """Missing or corrupt storage always yields usable preferences."""

    def test_empty_storage_gives_builtin_defaults(self):
        prefs = Preferences.load(None)
        assert prefs.theme == DEFAULT_THEME
        assert prefs.defaults == UserDefaults("2025", "USCHS", "12345")
        assert prefs.filters == LastFilters("USNCCOQ", "25")

    def test_corrupt_documents_fall_back(self):
        prefs = Preferences.load({
            THEME_KEY: "purple",
            USER_DEFAULTS_KEY: "{not json",
            LAST_FILTERS_KEY: "[1, 2]",
        })
        assert prefs == Preferences()

    def test_stored_documents_are_read(self):
        prefs = Preferences.load({
            THEME_KEY: "dark",
            USER_DEFAULTS_KEY: json.dumps({"season": "2024", "region": "USNC", "teamNumber": "777"}),
            LAST_FILTERS_KEY: {"eventCode": "USNCRAQ", "limit": "10"},
        })
        assert prefs.theme == "dark"
        assert prefs.defaults == UserDefaults("2024", "USNC", "777")
        assert prefs.filters == LastFilters("USNCRAQ", "10")

    def test_partial_defaults_keep_remaining_builtins(self):
        prefs = Preferences.load({USER_DEFAULTS_KEY: json.dumps({"region": "USTX"})})
        assert prefs.defaults == UserDefaults("2025", "USTX", "12345")


class TestSave:

    def test_save_then_load(self):
        prefs = Preferences(theme="dark", defaults=UserDefaults("2024", "USNC", "777"))
        documents = prefs.save()
        assert set(documents) == {THEME_KEY, USER_DEFAULTS_KEY, LAST_FILTERS_KEY}
        assert json.loads(documents[USER_DEFAULTS_KEY]) == {
            "season": "2024", "region": "USNC", "teamNumber": "777",
        }
        assert Preferences.load(documents) == prefs

    def test_with_filters_records_event_and_limit(self):
        prefs = Preferences().with_filters({"eventCode": "USNCRAQ", "limit": "5", "season": "2020"})
        assert prefs.filters == LastFilters("USNCRAQ", "5")
        assert prefs.defaults == UserDefaults()


class TestUserDefaults:

    def test_cleaned_trims_and_falls_back(self):
        assert UserDefaults.cleaned(" 2024 ", "", None) == UserDefaults("2024", "USCHS", "12345")

    def test_apply_sets_team_fields_from_team_number(self):
        values = apply_user_defaults({"eventCode": "X", "team": ""}, UserDefaults("2024", "USNC", "777"))
        assert values == {"eventCode": "X", "season": "2024", "region": "USNC", "teamId": "777", "team": "777"}

    def test_initial_values_layering(self):
        prefs = Preferences(
            defaults=UserDefaults("2024", "USNC", "777"),
            filters=LastFilters("USNCRAQ", "10"),
        )
        values = initial_values(prefs)
        assert values["season"] == "2024"
        assert values["teamId"] == "777"
        assert values["eventCode"] == "USNCRAQ"
        assert values["limit"] == "10"
        assert values["phase"] == ""
