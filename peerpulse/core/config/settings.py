# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Engine configuration settings using Pydantic Settings.

This module provides centralized configuration for the PeerPulse engine.
Settings are loaded from environment variables with defaults that match
the thresholds used by the peer-support screens.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from peerpulse.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> settings.leaderboard.category_expert_threshold
    20
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LeaderboardSettings(BaseSettings):
    """Leaderboard aggregation configuration.

    Attributes:
        category_expert_threshold: Minimum replies in a single category
            before a user appears on the category-expert board.
        weekly_days: Trailing window for the weekly time filter.
        monthly_days: Trailing window for the monthly time filter.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEADERBOARD_",
        extra="ignore",
    )

    category_expert_threshold: int = Field(default=20, ge=1)
    weekly_days: int = Field(default=7, ge=1)
    monthly_days: int = Field(default=30, ge=1)


class PerformanceSettings(BaseSettings):
    """Peer-educator performance configuration.

    Attributes:
        sla_hours: Reply delay (hours) up to which a reply is on time.
        active_window_hours: An educator seen within this window is active.
        load_window_days: Trailing window used for response load.
        high_load_threshold: Recent replies at or above this are high load.
        medium_load_threshold: Recent replies at or above this are medium load.
    """

    model_config = SettingsConfigDict(
        env_prefix="PERFORMANCE_",
        extra="ignore",
    )

    sla_hours: float = Field(default=24.0, gt=0)
    active_window_hours: float = Field(default=24.0, gt=0)
    load_window_days: int = Field(default=7, ge=1)
    high_load_threshold: int = Field(default=20, ge=1)
    medium_load_threshold: int = Field(default=10, ge=1)

    @model_validator(mode="after")
    def validate_load_thresholds(self) -> Self:
        """Ensure the medium band sits below the high band.

        Raises:
            ValueError: If medium_load_threshold exceeds high_load_threshold.
        """
        if self.medium_load_threshold > self.high_load_threshold:
            raise ValueError(
                "medium_load_threshold must not exceed high_load_threshold"
            )
        return self


class TriageSettings(BaseSettings):
    """Triage panel configuration.

    Attributes:
        top_n: Number of escalations/reports shown on triage panels.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRIAGE_",
        extra="ignore",
    )

    top_n: int = Field(default=5, ge=1)


class AnalyticsSettings(BaseSettings):
    """Admin analytics configuration.

    Attributes:
        very_fast_minutes: Response times below this are "Very Fast".
        fast_minutes: Response times below this are "Fast".
        dashboard_active_days: Users seen within this many days count as
            active on the admin dashboard.
        export_preview_chars: Length of the export preview.
        recent_activity_limit: Items shown in the dashboard activity feed.
        team_active_days: Educators seen within this many days count as
            active in the team summary.
    """

    model_config = SettingsConfigDict(
        env_prefix="ANALYTICS_",
        extra="ignore",
    )

    very_fast_minutes: float = Field(default=30.0, gt=0)
    fast_minutes: float = Field(default=60.0, gt=0)
    dashboard_active_days: int = Field(default=30, ge=1)
    export_preview_chars: int = Field(default=500, ge=1)
    recent_activity_limit: int = Field(default=10, ge=1)
    team_active_days: int = Field(default=30, ge=1)

    @model_validator(mode="after")
    def validate_response_bands(self) -> Self:
        """Ensure the response-time bands are ordered.

        Raises:
            ValueError: If fast_minutes is below very_fast_minutes.
        """
        if self.fast_minutes < self.very_fast_minutes:
            raise ValueError("fast_minutes must not be below very_fast_minutes")
        return self


class Settings(BaseSettings):
    """Main engine settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        leaderboard: Leaderboard settings.
        performance: Peer-educator performance settings.
        triage: Triage panel settings.
        analytics: Admin analytics settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "test", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Subsettings - loaded with their own env prefixes
    leaderboard: LeaderboardSettings = Field(default_factory=LeaderboardSettings)
    performance: PerformanceSettings = Field(default_factory=PerformanceSettings)
    triage: TriageSettings = Field(default_factory=TriageSettings)
    analytics: AnalyticsSettings = Field(default_factory=AnalyticsSettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
