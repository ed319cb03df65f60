# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Flat text export of admin analytics.

The report is line-oriented, comma-separated where a row carries a value:

    Analytics Report
    Date Range: 30d
    Generated: 2025-03-01 09:30:00

    Metric,Value
    Total Posts,42
    Escalations,3
    Active Users,17

    Posts by Category
    Academic Support & Exam Stress,20
    ...
"""

from datetime import datetime

from peerpulse.core.config.settings import get_settings
from peerpulse.domains.analytics.aggregator import AnalyticsSummary
from peerpulse.utils.datetime import utc_now


def render_report(summary: AnalyticsSummary, generated_at: datetime | None = None) -> str:
    """Render a summary as the flat export report.

    Args:
        summary: Computed analytics summary.
        generated_at: Generation timestamp (defaults to current UTC time).

    Returns:
        Report text, lines joined with newlines.
    """
    generated_at = generated_at or utc_now()

    rows = [
        "Analytics Report",
        f"Date Range: {summary.window.label}",
        f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}",
        "",
        "Metric,Value",
        f"Total Posts,{summary.total_posts}",
        f"Escalations,{summary.escalation_count}",
        f"Active Users,{summary.active_users}",
        "",
        "Posts by Category",
    ]
    rows.extend(
        f"{category.display_name},{count}"
        for category, count in summary.posts_by_category.items()
    )
    return "\n".join(rows)


def preview_report(report: str, max_chars: int | None = None) -> str:
    """Shorten a report for an on-screen preview.

    Args:
        report: Rendered report text.
        max_chars: Preview length (defaults to the configured length).
    """
    max_chars = max_chars or get_settings().analytics.export_preview_chars
    if len(report) <= max_chars:
        return report
    return report[:max_chars] + "..."
