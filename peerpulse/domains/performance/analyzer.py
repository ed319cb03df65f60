# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Peer-educator performance analysis module.

This module derives per-educator scorecards from community records:
- Response SLA: reply delay against the parent post, on-time vs late
- Quality: share of replies that received helpful votes
- Workload: distinct threads and recent reply volume
- Sessions and logged hours from support sessions and activity logs

Only replies written in a volunteer capacity count toward an educator's
scorecard. Replies whose parent post is not in the supplied set still
count toward totals and quality but are left out of response times.

Usage:
    from peerpulse.domains.performance import PerformanceAnalyzer

    analyzer = PerformanceAnalyzer()
    roster = analyzer.analyze_roster(
        users,
        replies=replies,
        posts=posts,
        sort_by="quality",
        filter_by="high-load",
    )
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from peerpulse.core.config.settings import PerformanceSettings, get_settings
from peerpulse.models.enums import (
    EducatorFilter,
    EducatorSortMode,
    QualityBand,
    ResponseLoad,
    SessionStatus,
    coerce_selector,
)
from peerpulse.models.records import ActivityLog, Post, Reply, SupportSession, User
from peerpulse.utils.datetime import days_between, ensure_utc, hours_between, utc_now

logger = logging.getLogger(__name__)

MINUTES_PER_HOUR = 60


@dataclass
class PeerEducatorActivity:
    """Performance scorecard for one peer educator.

    Attributes:
        peer_educator: The educator.
        total_responses: Volunteer replies written.
        average_response_time: Mean reply delay in hours.
        on_time_responses: Replies within the SLA.
        late_responses: Replies past the SLA.
        helpful_responses: Replies with at least one helpful vote.
        active_threads: Distinct posts replied to.
        last_active: Last activity (epoch start when unknown).
        is_active: Seen within the active window.
        response_load: Recent workload classification.
        quality_score: Helpful share as a 0-100 integer.
        students_helped: Resolved sessions handled.
        active_sessions: Sessions currently in progress.
        hours_logged: Logged activity hours, one decimal.
    """

    peer_educator: User
    total_responses: int = 0
    average_response_time: float = 0.0
    on_time_responses: int = 0
    late_responses: int = 0
    helpful_responses: int = 0
    active_threads: int = 0
    last_active: datetime | None = None
    is_active: bool = False
    response_load: ResponseLoad = ResponseLoad.LOW
    quality_score: int = 0
    students_helped: int = 0
    active_sessions: int = 0
    hours_logged: float = 0.0

    @property
    def quality_band(self) -> QualityBand:
        """Band the quality score for display."""
        if self.quality_score >= 80:
            return QualityBand.EXCELLENT
        if self.quality_score >= 60:
            return QualityBand.GOOD
        return QualityBand.NEEDS_ATTENTION

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for rendering."""
        return {
            "user_id": self.peer_educator.id,
            "pseudonym": self.peer_educator.pseudonym,
            "total_responses": self.total_responses,
            "average_response_time": self.average_response_time,
            "on_time_responses": self.on_time_responses,
            "late_responses": self.late_responses,
            "helpful_responses": self.helpful_responses,
            "active_threads": self.active_threads,
            "last_active": self.last_active.isoformat() if self.last_active else None,
            "is_active": self.is_active,
            "response_load": self.response_load.value,
            "quality_score": self.quality_score,
            "quality_band": self.quality_band.value,
            "students_helped": self.students_helped,
            "active_sessions": self.active_sessions,
            "hours_logged": self.hours_logged,
        }


@dataclass
class RosterSummary:
    """Headline counts for a roster view."""

    active: int = 0
    inactive: int = 0
    high_load: int = 0


@dataclass
class ActivityLogSummary:
    """Totals over an educator's activity logs."""

    total_hours: float = 0.0
    sessions_count: int = 0
    training_hours: float = 0.0
    minutes_by_type: dict[str, int] = field(default_factory=dict)


def quality_score(helpful: int, total: int) -> int:
    """Calculate the helpful share of replies as a rounded percentage.

    Args:
        helpful: Replies with at least one helpful vote.
        total: All replies.

    Returns:
        Integer in [0, 100]; 0 when there are no replies.
    """
    if total <= 0:
        return 0
    # Half-up rounding on the percentage.
    return min(100, int(helpful * 100 / total + 0.5))


def _hours(minutes: int) -> float:
    # Tenths of an hour, exact halves rounded up.
    return math.floor(minutes / MINUTES_PER_HOUR * 10 + 0.5) / 10


def summarize_activity_logs(logs: Iterable[ActivityLog]) -> ActivityLogSummary:
    """Summarize logged activity.

    Args:
        logs: Activity logs, usually for one educator.

    Returns:
        ActivityLogSummary with hours rounded to one decimal.
    """
    minutes_by_type: dict[str, int] = {}
    sessions_count = 0

    for log in logs:
        minutes_by_type[log.activity_type] = (
            minutes_by_type.get(log.activity_type, 0) + log.duration_minutes
        )
        if log.activity_type == "session":
            sessions_count += 1

    return ActivityLogSummary(
        total_hours=_hours(sum(minutes_by_type.values())),
        sessions_count=sessions_count,
        training_hours=_hours(minutes_by_type.get("training", 0)),
        minutes_by_type=minutes_by_type,
    )


def summarize_roster(activities: Iterable[PeerEducatorActivity]) -> RosterSummary:
    """Count active, inactive and high-load educators."""
    summary = RosterSummary()
    for activity in activities:
        if activity.is_active:
            summary.active += 1
        else:
            summary.inactive += 1
        if activity.response_load == ResponseLoad.HIGH:
            summary.high_load += 1
    return summary


def format_last_active(last_active: datetime, now: datetime | None = None) -> str:
    """Describe when an educator was last active.

    Returns:
        "Today", "Yesterday", "N days ago" within a week, else "Mon D, YYYY".
    """
    now = ensure_utc(now) if now else utc_now()
    if last_active.date() == now.date():
        return "Today"
    if (now.date() - last_active.date()).days == 1:
        return "Yesterday"
    days_ago = int(days_between(last_active, now))
    if days_ago < 7:
        return f"{days_ago} days ago"
    return f"{last_active.strftime('%b')} {last_active.day}, {last_active.year}"


class PerformanceAnalyzer:
    """Computes peer-educator scorecards and roster views.

    Attributes:
        settings: SLA, activity and workload thresholds.
    """

    def __init__(self, settings: PerformanceSettings | None = None) -> None:
        """Initialize the analyzer.

        Args:
            settings: Performance settings (defaults to global settings).
        """
        self.settings = settings or get_settings().performance

    def classify_load(self, recent_replies: int) -> ResponseLoad:
        """Classify workload from the number of recent replies."""
        if recent_replies >= self.settings.high_load_threshold:
            return ResponseLoad.HIGH
        if recent_replies >= self.settings.medium_load_threshold:
            return ResponseLoad.MEDIUM
        return ResponseLoad.LOW

    def analyze_educator(
        self,
        educator: User,
        *,
        replies: Sequence[Reply],
        posts: Sequence[Post],
        sessions: Sequence[SupportSession] = (),
        activity_logs: Sequence[ActivityLog] = (),
        now: datetime | None = None,
    ) -> PeerEducatorActivity:
        """Build the scorecard for one educator.

        Args:
            educator: The educator to score.
            replies: All replies; filtered to this educator's volunteer replies.
            posts: All posts, used to time replies against their parent.
            sessions: All support sessions.
            activity_logs: All activity logs.
            now: Reference time (defaults to current UTC time).

        Returns:
            PeerEducatorActivity for the educator.
        """
        now = ensure_utc(now) if now else utc_now()
        post_times = {post.id: post.created_at for post in posts}
        return self._score(educator, replies, post_times, sessions, activity_logs, now)

    def analyze_roster(
        self,
        users: Sequence[User],
        *,
        replies: Sequence[Reply],
        posts: Sequence[Post],
        sessions: Sequence[SupportSession] = (),
        activity_logs: Sequence[ActivityLog] = (),
        sort_by: EducatorSortMode | str = EducatorSortMode.ACTIVITY,
        filter_by: EducatorFilter | str = EducatorFilter.ALL,
        now: datetime | None = None,
    ) -> list[PeerEducatorActivity]:
        """Score every educator, then sort and filter the roster.

        Non-educator users are ignored. Sorting happens before filtering.

        Args:
            users: All users.
            replies: All replies.
            posts: All posts.
            sessions: All support sessions.
            activity_logs: All activity logs.
            sort_by: activity, responses or quality.
            filter_by: all, active, inactive or high-load.
            now: Reference time (defaults to current UTC time).

        Returns:
            Ordered, filtered scorecards.

        Raises:
            UnknownSelectorError: If a selector value is not recognized.
        """
        sort_by = coerce_selector(EducatorSortMode, sort_by, "sort mode")
        filter_by = coerce_selector(EducatorFilter, filter_by, "roster filter")
        now = ensure_utc(now) if now else utc_now()

        post_times = {post.id: post.created_at for post in posts}
        activities = [
            self._score(user, replies, post_times, sessions, activity_logs, now)
            for user in users
            if user.is_educator
        ]

        ordered = sort_activities(activities, sort_by)
        filtered = filter_activities(ordered, filter_by)

        logger.debug(
            "Roster analyzed: educators=%d, shown=%d, sort_by=%s, filter_by=%s",
            len(activities),
            len(filtered),
            sort_by.value,
            filter_by.value,
        )
        return filtered

    def _score(
        self,
        educator: User,
        replies: Sequence[Reply],
        post_times: dict[str, datetime],
        sessions: Sequence[SupportSession],
        activity_logs: Sequence[ActivityLog],
        now: datetime,
    ) -> PeerEducatorActivity:
        own = [
            reply
            for reply in replies
            if reply.author_id == educator.id and reply.is_from_volunteer
        ]

        total_response_time = 0.0
        response_count = 0
        on_time = 0
        late = 0
        for reply in own:
            posted_at = post_times.get(reply.post_id)
            if posted_at is None:
                continue
            response_hours = hours_between(posted_at, reply.created_at)
            total_response_time += response_hours
            response_count += 1
            if response_hours <= self.settings.sla_hours:
                on_time += 1
            else:
                late += 1

        helpful = sum(1 for reply in own if reply.is_helpful > 0)
        recent = sum(
            1
            for reply in own
            if days_between(reply.created_at, now) <= self.settings.load_window_days
        )

        own_sessions = [s for s in sessions if s.educator_id == educator.id]
        own_minutes = sum(log.duration_minutes for log in activity_logs if log.user_id == educator.id)

        last_active = educator.last_seen
        return PeerEducatorActivity(
            peer_educator=educator,
            total_responses=len(own),
            average_response_time=(
                total_response_time / response_count if response_count > 0 else 0.0
            ),
            on_time_responses=on_time,
            late_responses=late,
            helpful_responses=helpful,
            active_threads=len({reply.post_id for reply in own}),
            last_active=last_active,
            is_active=hours_between(last_active, now) < self.settings.active_window_hours,
            response_load=self.classify_load(recent),
            quality_score=quality_score(helpful, len(own)),
            students_helped=sum(1 for s in own_sessions if s.status == SessionStatus.RESOLVED),
            active_sessions=sum(1 for s in own_sessions if s.status == SessionStatus.ACTIVE),
            hours_logged=_hours(own_minutes),
        )


def sort_activities(
    activities: Iterable[PeerEducatorActivity],
    sort_by: EducatorSortMode,
) -> list[PeerEducatorActivity]:
    """Order scorecards by the requested mode (stable)."""
    if sort_by == EducatorSortMode.RESPONSES:
        return sorted(activities, key=lambda a: a.total_responses, reverse=True)
    if sort_by == EducatorSortMode.QUALITY:
        return sorted(activities, key=lambda a: a.quality_score, reverse=True)
    return sorted(
        activities,
        key=lambda a: (a.is_active, a.last_active or a.peer_educator.last_seen),
        reverse=True,
    )


def filter_activities(
    activities: Iterable[PeerEducatorActivity],
    filter_by: EducatorFilter,
) -> list[PeerEducatorActivity]:
    """Keep the scorecards matching a roster filter."""
    if filter_by == EducatorFilter.ACTIVE:
        return [a for a in activities if a.is_active]
    if filter_by == EducatorFilter.INACTIVE:
        return [a for a in activities if not a.is_active]
    if filter_by == EducatorFilter.HIGH_LOAD:
        return [a for a in activities if a.response_load == ResponseLoad.HIGH]
    return list(activities)
