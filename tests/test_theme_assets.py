"""Checks on the clientside theme script served from assets/."""

from pathlib import Path

import pytest

THEME_JS = Path(__file__).resolve().parents[1] / "services" / "dashboard" / "assets" / "theme.js"


@pytest.fixture(scope="module")
def script():
    return THEME_JS.read_text(encoding="utf-8")


class TestThemeScript:
    """First-visit theme follows the OS colour scheme; stored choice wins."""

    def test_namespace_and_functions(self, script):
        assert "window.dash_clientside" in script
        for name in ("theme:", "resolve:", "seed:", "hydrate:"):
            assert name in script

    def test_stored_theme_checked_before_media_query(self, script):
        assert script.index('stored === "dark"') < script.index("prefers-color-scheme: dark")

    def test_seed_skips_write_when_stored(self, script):
        seed = script[script.index("seed:"):script.index("hydrate:")]
        assert "no_update" in seed

    def test_callbacks_reference_existing_functions(self):
        dashboard = THEME_JS.parents[1]
        app_src = (dashboard / "app.py").read_text(encoding="utf-8")
        settings_src = (dashboard / "pages" / "settings.py").read_text(encoding="utf-8")
        assert 'ClientsideFunction(namespace="theme", function_name="seed")' in app_src
        assert 'ClientsideFunction(namespace="theme", function_name="hydrate")' in settings_src
