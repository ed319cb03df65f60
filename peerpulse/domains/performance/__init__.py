# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Peer-educator performance domain.

Scores educators on response SLA, reply quality and workload, and builds
sorted/filtered roster views for the executive panel.
"""

from peerpulse.domains.performance.analyzer import (
    ActivityLogSummary,
    PeerEducatorActivity,
    PerformanceAnalyzer,
    RosterSummary,
    filter_activities,
    format_last_active,
    quality_score,
    sort_activities,
    summarize_activity_logs,
    summarize_roster,
)

__all__ = [
    "PerformanceAnalyzer",
    "PeerEducatorActivity",
    "RosterSummary",
    "ActivityLogSummary",
    "quality_score",
    "sort_activities",
    "filter_activities",
    "summarize_roster",
    "summarize_activity_logs",
    "format_last_active",
]
