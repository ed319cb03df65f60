# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin analytics domain.

This module provides:
- Date-windowed counts and category distribution
- Insight strings for the analytics screen
- Admin dashboard headline statistics and recent-activity feed
- Executive team summary
- Flat text export of a summary

Usage:
    from peerpulse.domains.analytics import AnalyticsAggregator, render_report

    aggregator = AnalyticsAggregator()
    summary = aggregator.summarize(
        posts=posts, escalations=escalations, users=users, date_range="7d"
    )
    text = render_report(summary)
"""

from peerpulse.domains.analytics.aggregator import (
    ActivityItem,
    AnalyticsAggregator,
    AnalyticsInsights,
    AnalyticsSummary,
    DashboardStats,
    DateWindow,
    TeamSummary,
    category_share,
    escalation_rate,
    resolve_date_range,
)
from peerpulse.domains.analytics.export import preview_report, render_report

__all__ = [
    # Aggregation
    "AnalyticsAggregator",
    "AnalyticsSummary",
    "AnalyticsInsights",
    "DashboardStats",
    "ActivityItem",
    "TeamSummary",
    "DateWindow",
    "resolve_date_range",
    "escalation_rate",
    "category_share",
    # Export
    "render_report",
    "preview_report",
]
