"""
Unit Tests for Configuration

Tests for settings and configuration management.
"""

import calendar
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from ezteach.config import Settings


def test_settings_defaults():
    """Test default settings values."""
    settings = Settings()

    assert settings.ENVIRONMENT in ["local", "staging", "production"]
    assert settings.LOG_LEVEL in ["DEBUG", "INFO", "WARNING", "ERROR"]
    assert isinstance(settings.DATABASE_URL, str)
    assert settings.AUTH_JWT_ALGORITHMS


def test_leaderboard_limit_defaults():
    """Per-game boards default to 30 rows, the general board to 100."""
    settings = Settings(
        LEADERBOARD_GAME_LIMIT=30, LEADERBOARD_GENERAL_LIMIT=100, LEADERBOARD_MAX_LIMIT=500
    )

    assert settings.LEADERBOARD_GAME_LIMIT == 30
    assert settings.LEADERBOARD_GENERAL_LIMIT == 100
    assert settings.LEADERBOARD_MAX_LIMIT == 500


def test_settings_environment_specific():
    """Test environment-specific behavior."""
    settings_local = Settings(ENVIRONMENT="local")
    assert settings_local.is_local is True
    assert settings_local.is_production is False

    settings_prod = Settings(ENVIRONMENT="production")
    assert settings_prod.is_local is False
    assert settings_prod.is_production is True


class TestLeaderboardTimezone:
    """Timezone used for month/week boundaries."""

    def test_known_timezone(self):
        settings = Settings(LEADERBOARD_TIMEZONE="America/Chicago")
        assert settings.leaderboard_tz == ZoneInfo("America/Chicago")

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValidationError, match="LEADERBOARD_TIMEZONE"):
            Settings(LEADERBOARD_TIMEZONE="Mars/Olympus_Mons")


class TestFirstWeekday:
    """Week start configuration."""

    def test_explicit_weekday(self):
        assert Settings(LEADERBOARD_FIRST_WEEKDAY=6).first_weekday == 6

    def test_platform_default(self):
        settings = Settings(LEADERBOARD_FIRST_WEEKDAY=None)
        assert settings.first_weekday == calendar.firstweekday()

    @pytest.mark.parametrize("weekday", [-1, 7])
    def test_out_of_range_rejected(self, weekday):
        with pytest.raises(ValidationError):
            Settings(LEADERBOARD_FIRST_WEEKDAY=weekday)
