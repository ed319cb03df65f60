# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin analytics aggregation module.

This module computes the date-windowed admin analytics:
- Window resolution for the 7d/30d/90d/all/custom selectors
- Post, escalation and active-user counts within the window
- Posts per category
- Derived insight strings (top concern, community response, escalation rate)
- Headline dashboard statistics and the recent-activity feed
- Peer-educator team summary for the executive screen

Posts and escalations are counted when their timestamp falls inside
[start, end]. Active users are only bounded by the window start: a user
whose last activity is after the window end still counts.

Usage:
    from peerpulse.domains.analytics import AnalyticsAggregator

    aggregator = AnalyticsAggregator()
    summary = aggregator.summarize(
        posts=posts,
        escalations=escalations,
        users=users,
        date_range="30d",
    )
    insights = aggregator.insights(summary)
"""

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Literal

from peerpulse.core.config.settings import AnalyticsSettings, get_settings
from peerpulse.domains.performance.analyzer import quality_score
from peerpulse.exceptions import InvalidDateRangeError
from peerpulse.models.enums import (
    DateRangePreset,
    PostCategory,
    ReportStatus,
    coerce_selector,
)
from peerpulse.models.records import Escalation, Post, Reply, Report, User
from peerpulse.utils.datetime import (
    EPOCH,
    SECONDS_PER_DAY,
    days_before,
    end_of_day,
    ensure_utc,
    start_of_day,
    utc_now,
)

logger = logging.getLogger(__name__)

PRESET_DAYS: dict[DateRangePreset, int] = {
    DateRangePreset.LAST_7_DAYS: 7,
    DateRangePreset.LAST_30_DAYS: 30,
    DateRangePreset.LAST_90_DAYS: 90,
}


@dataclass(frozen=True)
class DateWindow:
    """Resolved analytics window (inclusive bounds)."""

    preset: DateRangePreset
    start: datetime
    end: datetime

    @property
    def label(self) -> str:
        """Date range as shown on exported reports."""
        if self.preset == DateRangePreset.CUSTOM:
            return f"{self.start:%Y-%m-%d} to {self.end:%Y-%m-%d}"
        return self.preset.value

    def contains(self, moment: datetime) -> bool:
        """Check whether a timestamp falls inside the window."""
        return self.start <= moment <= self.end


@dataclass
class AnalyticsSummary:
    """Windowed admin analytics.

    Attributes:
        window: Window the figures were computed for.
        total_posts: Posts created in the window.
        escalation_count: Escalations detected in the window.
        active_users: Users active since the window start.
        posts_by_category: Post count per category, in first-seen order.
        response_time: Mean minutes from post to first reply, if known.
    """

    window: DateWindow
    total_posts: int = 0
    escalation_count: int = 0
    active_users: int = 0
    posts_by_category: dict[PostCategory, int] = field(default_factory=dict)
    response_time: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for rendering."""
        return {
            "date_range": self.window.label,
            "start": self.window.start.isoformat(),
            "end": self.window.end.isoformat(),
            "total_posts": self.total_posts,
            "escalation_count": self.escalation_count,
            "active_users": self.active_users,
            "posts_by_category": {
                category.value: count for category, count in self.posts_by_category.items()
            },
            "response_time": self.response_time,
        }


@dataclass(frozen=True)
class AnalyticsInsights:
    """Derived insight strings shown beside the summary."""

    top_concern_category: str
    community_response: str
    escalation_rate: str


@dataclass(frozen=True)
class DashboardStats:
    """Headline figures for the admin dashboard."""

    total_posts: int
    total_users: int
    total_escalations: int
    pending_reports: int
    active_users: int


@dataclass(frozen=True)
class ActivityItem:
    """One line of the admin dashboard activity feed.

    Attributes:
        kind: "post" or "escalation".
        id: Record identifier.
        title: Post title, or "Escalation: <level>".
        occurred_at: Post creation or escalation detection time.
        pseudonym: Post author (posts only).
    """

    kind: Literal["post", "escalation"]
    id: str
    title: str
    occurred_at: datetime
    pseudonym: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for rendering."""
        return {
            "type": self.kind,
            "id": self.id,
            "title": self.title,
            "date": self.occurred_at.isoformat(),
            "user": self.pseudonym,
        }


@dataclass(frozen=True)
class TeamSummary:
    """Peer-educator team figures for the executive analytics screen."""

    total_members: int
    active_members: int
    total_responses: int
    helpful_responses: int

    @property
    def helpful_rate(self) -> int:
        """Helpful share of responses as a rounded percentage."""
        return quality_score(self.helpful_responses, self.total_responses)


def resolve_date_range(
    preset: DateRangePreset | str,
    now: datetime | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
) -> DateWindow:
    """Resolve a date-range selector into day-aligned bounds.

    Args:
        preset: 7d, 30d, 90d, all or custom.
        now: Reference time (defaults to current UTC time).
        start: First day of a custom range.
        end: Last day of a custom range.

    Returns:
        DateWindow with inclusive start and end.

    Raises:
        InvalidDateRangeError: If a custom range lacks a bound or is inverted.
        UnknownSelectorError: If the preset is not recognized.
    """
    preset = coerce_selector(DateRangePreset, preset, "date range")
    now = ensure_utc(now) if now else utc_now()

    if preset in PRESET_DAYS:
        return DateWindow(
            preset=preset,
            start=start_of_day(days_before(now, PRESET_DAYS[preset])),
            end=end_of_day(now),
        )

    if preset == DateRangePreset.CUSTOM:
        if start is None or end is None:
            raise InvalidDateRangeError(
                "Custom date range requires both start and end",
                details={"start": start, "end": end},
            )
        window = DateWindow(preset=preset, start=start_of_day(start), end=end_of_day(end))
        if window.end < window.start:
            raise InvalidDateRangeError(
                "Custom date range ends before it starts",
                details={"start": window.start.isoformat(), "end": window.end.isoformat()},
            )
        return window

    return DateWindow(preset=preset, start=EPOCH, end=end_of_day(now))


def _one_decimal(value: float) -> Decimal:
    # Exact halves round away from zero, as the dashboards display them.
    return Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def escalation_rate(escalation_count: int, total_posts: int) -> str:
    """Format escalations per post as a percentage with one decimal.

    Returns:
        e.g. "12.5%", or "0%" when there are no posts.
    """
    if total_posts <= 0:
        return "0%"
    return f"{_one_decimal(escalation_count / total_posts * 100)}%"


def category_share(summary: AnalyticsSummary) -> dict[PostCategory, float]:
    """Percentage of windowed posts in each category, one decimal."""
    if summary.total_posts <= 0:
        return {category: 0.0 for category in summary.posts_by_category}
    return {
        category: float(_one_decimal(count / summary.total_posts * 100))
        for category, count in summary.posts_by_category.items()
    }


class AnalyticsAggregator:
    """Computes admin analytics over record snapshots.

    Attributes:
        settings: Response-time bands and dashboard window.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        """Initialize the aggregator.

        Args:
            settings: Analytics settings (defaults to global settings).
        """
        self.settings = settings or get_settings().analytics

    def summarize(
        self,
        *,
        posts: Sequence[Post],
        escalations: Sequence[Escalation],
        users: Sequence[User],
        date_range: DateRangePreset | str = DateRangePreset.LAST_30_DAYS,
        replies: Sequence[Reply] | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> AnalyticsSummary:
        """Compute windowed analytics.

        Args:
            posts: All posts.
            escalations: All escalations.
            users: All users.
            date_range: 7d, 30d, 90d, all or custom.
            replies: All replies; when given, the mean first-reply delay
                of windowed posts is reported as response_time.
            start: First day of a custom range.
            end: Last day of a custom range.
            now: Reference time (defaults to current UTC time).

        Returns:
            AnalyticsSummary for the window.
        """
        window = resolve_date_range(date_range, now, start, end)

        windowed_posts = [post for post in posts if window.contains(post.created_at)]
        escalation_count = sum(
            1 for escalation in escalations if window.contains(escalation.detected_at)
        )

        posts_by_category: Counter[PostCategory] = Counter()
        for post in windowed_posts:
            posts_by_category[post.category] += 1

        active_users = sum(1 for user in users if user.last_seen >= window.start)

        summary = AnalyticsSummary(
            window=window,
            total_posts=len(windowed_posts),
            escalation_count=escalation_count,
            active_users=active_users,
            posts_by_category=dict(posts_by_category),
            response_time=(
                _mean_first_reply_minutes(windowed_posts, replies)
                if replies is not None
                else None
            ),
        )

        logger.debug(
            "Analytics summarized: range=%s, posts=%d, escalations=%d, active_users=%d",
            window.label,
            summary.total_posts,
            summary.escalation_count,
            summary.active_users,
        )
        return summary

    def community_response(self, response_time: float | None) -> str:
        """Classify community response speed."""
        if not response_time:
            return "N/A"
        if response_time < self.settings.very_fast_minutes:
            return "Very Fast"
        if response_time < self.settings.fast_minutes:
            return "Fast"
        return "Average"

    def insights(self, summary: AnalyticsSummary) -> AnalyticsInsights:
        """Derive the insight strings for a summary."""
        if summary.posts_by_category:
            # max() keeps the first category on ties.
            top_category = max(summary.posts_by_category.items(), key=lambda item: item[1])[0]
            top_concern = top_category.display_name
        else:
            top_concern = "N/A"

        return AnalyticsInsights(
            top_concern_category=top_concern,
            community_response=self.community_response(summary.response_time),
            escalation_rate=escalation_rate(summary.escalation_count, summary.total_posts),
        )

    def dashboard_stats(
        self,
        *,
        posts: Sequence[Post],
        reports: Sequence[Report],
        users: Sequence[User],
        escalations: Sequence[Escalation],
        now: datetime | None = None,
    ) -> DashboardStats:
        """Compute the headline admin dashboard figures.

        Users count as active when seen within dashboard_active_days.
        """
        now = ensure_utc(now) if now else utc_now()
        active_users = sum(
            1
            for user in users
            if (now - user.last_seen).total_seconds() / SECONDS_PER_DAY
            <= self.settings.dashboard_active_days
        )
        return DashboardStats(
            total_posts=len(posts),
            total_users=len(users),
            total_escalations=len(escalations),
            pending_reports=sum(1 for report in reports if report.status == ReportStatus.PENDING),
            active_users=active_users,
        )

    def recent_activity(
        self,
        *,
        posts: Sequence[Post],
        escalations: Sequence[Escalation],
        limit: int | None = None,
    ) -> list[ActivityItem]:
        """Merge the latest posts and escalations into one feed.

        The first ``limit`` posts and the first ``limit`` escalations are
        taken in input order (the stores return newest first), merged,
        ordered newest first and cut to ``limit``. Items with the same
        timestamp keep posts ahead of escalations.

        Args:
            posts: Posts, newest first.
            escalations: Escalations, newest first.
            limit: Feed length (defaults to recent_activity_limit).

        Returns:
            Feed items, newest first.
        """
        limit = limit or self.settings.recent_activity_limit

        items = [
            ActivityItem(
                kind="post",
                id=post.id,
                title=post.title,
                occurred_at=post.created_at,
                pseudonym=post.author_pseudonym,
            )
            for post in posts[:limit]
        ]
        items.extend(
            ActivityItem(
                kind="escalation",
                id=escalation.id,
                title=f"Escalation: {escalation.escalation_level.value}",
                occurred_at=escalation.detected_at,
            )
            for escalation in escalations[:limit]
        )

        items.sort(key=lambda item: item.occurred_at, reverse=True)
        return items[:limit]

    def team_summary(
        self,
        *,
        users: Sequence[User],
        replies: Sequence[Reply],
        now: datetime | None = None,
    ) -> TeamSummary:
        """Compute the peer-educator team figures.

        Members are educators; they count as active when seen within
        team_active_days. Responses cover every reply supplied.
        """
        now = ensure_utc(now) if now else utc_now()
        since = days_before(now, self.settings.team_active_days)
        members = [user for user in users if user.is_educator]

        return TeamSummary(
            total_members=len(members),
            active_members=sum(1 for member in members if member.last_seen >= since),
            total_responses=len(replies),
            helpful_responses=sum(1 for reply in replies if reply.is_helpful > 0),
        )


def _mean_first_reply_minutes(
    posts: Sequence[Post],
    replies: Sequence[Reply],
) -> float | None:
    first_reply: dict[str, datetime] = {}
    for reply in replies:
        current = first_reply.get(reply.post_id)
        if current is None or reply.created_at < current:
            first_reply[reply.post_id] = reply.created_at

    delays = [
        (first_reply[post.id] - post.created_at).total_seconds() / 60
        for post in posts
        if post.id in first_reply and first_reply[post.id] >= post.created_at
    ]
    if not delays:
        return None
    return sum(delays) / len(delays)
