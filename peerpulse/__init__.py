# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""PeerPulse - community ranking and performance analytics engine.

Pure aggregations over peer-support records: leaderboards, peer-educator
scorecards, triage ordering and admin analytics.
"""

__version__ = "0.1.0"

from peerpulse.domains.analytics import AnalyticsAggregator, render_report
from peerpulse.domains.leaderboard import LeaderboardAggregator
from peerpulse.domains.performance import PerformanceAnalyzer
from peerpulse.domains.refresh import RefreshCoordinator
from peerpulse.domains.triage import TriagePrioritizer

__all__ = [
    "__version__",
    "LeaderboardAggregator",
    "PerformanceAnalyzer",
    "TriagePrioritizer",
    "AnalyticsAggregator",
    "render_report",
    "RefreshCoordinator",
]
