# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for PeerPulse.

Example:
    >>> from peerpulse.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.triage.top_n
    5
"""

from peerpulse.core.config.settings import (
    AnalyticsSettings,
    LeaderboardSettings,
    PerformanceSettings,
    Settings,
    TriageSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "LeaderboardSettings",
    "PerformanceSettings",
    "TriageSettings",
    "AnalyticsSettings",
    "get_settings",
    "clear_settings_cache",
]
