# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for engine settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from peerpulse.core.config.settings import (
    AnalyticsSettings,
    LeaderboardSettings,
    PerformanceSettings,
    Settings,
    TriageSettings,
    clear_settings_cache,
    get_settings,
)


class TestLeaderboardSettings:
    """Tests for LeaderboardSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = LeaderboardSettings()

        assert settings.category_expert_threshold == 20
        assert settings.weekly_days == 7
        assert settings.monthly_days == 30

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        with patch.dict(os.environ, {"LEADERBOARD_CATEGORY_EXPERT_THRESHOLD": "5"}, clear=False):
            settings = LeaderboardSettings()

        assert settings.category_expert_threshold == 5


class TestPerformanceSettings:
    """Tests for PerformanceSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = PerformanceSettings()

        assert settings.sla_hours == 24.0
        assert settings.active_window_hours == 24.0
        assert settings.load_window_days == 7
        assert settings.high_load_threshold == 20
        assert settings.medium_load_threshold == 10

    def test_rejects_inverted_load_bands(self) -> None:
        """Test medium threshold above high threshold is rejected."""
        with pytest.raises(ValidationError):
            PerformanceSettings(high_load_threshold=5, medium_load_threshold=10)


class TestTriageAndAnalyticsSettings:
    """Tests for TriageSettings and AnalyticsSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        assert TriageSettings().top_n == 5

        analytics = AnalyticsSettings()
        assert analytics.very_fast_minutes == 30.0
        assert analytics.fast_minutes == 60.0
        assert analytics.dashboard_active_days == 30
        assert analytics.export_preview_chars == 500
        assert analytics.recent_activity_limit == 10
        assert analytics.team_active_days == 30

    def test_rejects_inverted_response_bands(self) -> None:
        """Test fast band below very-fast band is rejected."""
        with pytest.raises(ValidationError):
            AnalyticsSettings(very_fast_minutes=60, fast_minutes=30)


class TestSettings:
    """Tests for the root Settings object."""

    def test_environment_flags(self) -> None:
        """Test environment helper properties."""
        assert Settings(environment="development").is_development
        assert Settings(environment="production").is_production

    def test_get_settings_is_cached(self) -> None:
        """Test get_settings returns a singleton until cleared."""
        first = get_settings()

        assert get_settings() is first

        clear_settings_cache()

        assert get_settings() is not first

    def test_subsettings_pick_up_environment(self) -> None:
        """Test nested settings read their own prefixes."""
        with patch.dict(os.environ, {"TRIAGE_TOP_N": "10"}, clear=False):
            clear_settings_cache()
            settings = get_settings()

        assert settings.triage.top_n == 10
