"""
Tests for Settings.
"""

from zoneinfo import ZoneInfo

import pytest

from core.config import ConfigurationError, Settings


class TestSettings:
    """Test suite for Settings helpers."""

    def test_explicit_api_key_wins(self, tmp_path):
        key_file = tmp_path / "apikey.txt"
        key_file.write_text("from-file\n", encoding="utf-8")
        settings = Settings(api_key="explicit", api_key_file=str(key_file))
        assert settings.get_api_key() == "explicit"

    def test_api_key_from_file(self, tmp_path):
        key_file = tmp_path / "apikey.txt"
        key_file.write_text("  abc123  \nsecond-line\n", encoding="utf-8")
        settings = Settings(api_key="", api_key_file=str(key_file))
        assert settings.get_api_key() == "abc123"

    def test_missing_key_file(self, tmp_path):
        settings = Settings(api_key="", api_key_file=str(tmp_path / "missing.txt"))
        with pytest.raises(ConfigurationError, match="does not exist"):
            settings.get_api_key()

    def test_empty_key_file(self, tmp_path):
        key_file = tmp_path / "apikey.txt"
        key_file.write_text("\n  \n", encoding="utf-8")
        settings = Settings(api_key="", api_key_file=str(key_file))
        with pytest.raises(ConfigurationError, match="empty"):
            settings.get_api_key()

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NOOK_LAT", "52.37")
        monkeypatch.setenv("NOOK_REFRESH_MINUTES", "15")
        settings = Settings()
        assert settings.lat == 52.37
        assert settings.refresh_minutes == 15
        assert settings.get_cache_ttl()["display_summary"] == 900

    def test_display_tz(self):
        assert Settings(timezone="Europe/Amsterdam").display_tz == ZoneInfo("Europe/Amsterdam")
        assert Settings(timezone=None).display_tz is None

    def test_paths(self, tmp_path):
        settings = Settings(img_dir=str(tmp_path), template_file="t.svg", output_file="out.svg")
        assert settings.template_path == tmp_path / "t.svg"
        assert settings.output_path == tmp_path / "out.svg"
