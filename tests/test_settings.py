"""Tests for settings resolution."""

import pytest

from config.settings import (
    DevelopmentConfig,
    ProductionConfig,
    Settings,
    TestingConfig,
    get_settings,
)
from state import Language


class TestSettings:
    """Tests for Settings and get_settings."""

    @pytest.mark.parametrize("environment,expected", [
        ("production", ProductionConfig),
        ("testing", TestingConfig),
        ("development", DevelopmentConfig),
    ])
    def test_environment_selection(self, environment: str, expected: type) -> None:
        assert type(get_settings(environment)) is expected

    def test_language_tags(self) -> None:
        settings = Settings()
        assert settings.language_tag(Language.PRIMARY) == settings.primary_language_tag
        assert settings.language_tag(Language.SECONDARY) == settings.secondary_language_tag

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("LISTEN_TIMEOUT_SECONDS", "3.5")
        monkeypatch.setenv("SECONDARY_LANGUAGE_TAG", "ta-IN")
        settings = Settings()
        assert settings.listen_timeout_seconds == 3.5
        assert settings.language_tag(Language.SECONDARY) == "ta-IN"

    def test_timeout_must_be_positive(self, monkeypatch) -> None:
        monkeypatch.setenv("LISTEN_TIMEOUT_SECONDS", "0")
        with pytest.raises(ValueError):
            Settings()

    def test_settings_resolved_on_demand(self) -> None:
        import config.settings as settings_module
        assert not hasattr(settings_module, "settings")
