# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Triage ordering for escalations, reports and the session queue.

All orderings are stable: records with equal keys keep their input order.
"""

import logging
from collections.abc import Iterable

from peerpulse.core.config.settings import TriageSettings, get_settings
from peerpulse.models.enums import (
    EscalationLevel,
    ReportStatus,
    SessionPriority,
    SessionStatus,
    coerce_selector,
)
from peerpulse.models.records import Post, Report, SupportSession

logger = logging.getLogger(__name__)

_DEFAULT = object()


class TriagePrioritizer:
    """Orders records for triage panels.

    Attributes:
        settings: Triage settings (panel size).
    """

    def __init__(self, settings: TriageSettings | None = None) -> None:
        """Initialize the prioritizer.

        Args:
            settings: Triage settings (defaults to global settings).
        """
        self.settings = settings or get_settings().triage

    def _limit(self, limit: object) -> int | None:
        return self.settings.top_n if limit is _DEFAULT else limit  # type: ignore[return-value]

    def escalated_posts(
        self,
        posts: Iterable[Post],
        *,
        level: EscalationLevel | str | None = None,
        limit: int | None | object = _DEFAULT,
    ) -> list[Post]:
        """Select escalated posts, most severe first.

        Args:
            posts: All posts.
            level: Keep only this escalation level.
            limit: Maximum posts returned; None for no truncation.
                Defaults to the configured panel size.

        Returns:
            Posts with an escalation level other than none.
        """
        escalated = [post for post in posts if post.escalation_level != EscalationLevel.NONE]
        if level is not None:
            level = coerce_selector(EscalationLevel, level, "escalation level")
            escalated = [post for post in escalated if post.escalation_level == level]

        escalated.sort(key=lambda post: post.escalation_level.rank, reverse=True)
        return _truncate(escalated, self._limit(limit))

    def pending_reports(
        self,
        reports: Iterable[Report],
        *,
        limit: int | None | object = _DEFAULT,
    ) -> list[Report]:
        """Select pending reports, most recent first."""
        pending = [report for report in reports if report.status == ReportStatus.PENDING]
        pending.sort(key=lambda report: report.created_at, reverse=True)
        return _truncate(pending, self._limit(limit))

    def session_queue(
        self,
        sessions: Iterable[SupportSession],
        *,
        priority: SessionPriority | str | None = None,
    ) -> list[SupportSession]:
        """Order pending support sessions for pickup.

        Most pressing priority first, then oldest request first.
        """
        queue = [session for session in sessions if session.status == SessionStatus.PENDING]
        if priority is not None:
            priority = coerce_selector(SessionPriority, priority, "session priority")
            queue = [session for session in queue if session.priority == priority]

        queue.sort(key=lambda session: session.created_at)
        queue.sort(key=lambda session: session.priority.rank, reverse=True)

        logger.debug("Session queue built: pending=%d", len(queue))
        return queue


def _truncate(records: list, limit: int | None) -> list:
    if limit is None:
        return records
    return records[: max(limit, 0)]
