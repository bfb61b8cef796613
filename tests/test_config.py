"""Tests for configuration loading."""

from pathlib import Path

import pytest

from cardsmith import config
from cardsmith.config import Settings, get_settings, load_settings


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    """Keep the global settings instance isolated per test."""
    monkeypatch.setattr(config, "_settings", None)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        settings = Settings()

        assert settings.default_font_size == 12.0
        assert settings.default_font_color == "black"
        assert settings.font_dirs == []
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CARDSMITH_DEFAULT_FONT_FAMILY", "Serif")
        monkeypatch.setenv("CARDSMITH_DEFAULT_FONT_SIZE", "9")
        monkeypatch.setenv("CARDSMITH_FONT_DIRS", '["/fonts", "/more"]')

        settings = Settings()

        assert settings.default_font_family == "Serif"
        assert settings.default_font_size == 9
        assert settings.font_dirs == [Path("/fonts"), Path("/more")]

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_load_settings_from_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("CARDSMITH_PDF_MARGIN_INCHES=0.25\n", encoding="utf-8")

        settings = load_settings(env_file)

        assert settings.pdf_margin_inches == 0.25
        assert get_settings() is settings
