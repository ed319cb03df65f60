# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Input records consumed by the aggregation engine.

Records are read-only snapshots owned by the storage layer. They accept
both the camelCase keys of backend payloads and snake_case keys, and
normalize every timestamp to timezone-aware UTC. Category, level and
status fields are closed enumerations, so an unknown value fails at
construction instead of creating a new bucket downstream.
"""

from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, NonNegativeInt
from pydantic.alias_generators import to_camel

from peerpulse.models.enums import (
    EDUCATOR_ROLES,
    EscalationLevel,
    EscalationStatus,
    PostCategory,
    ReportStatus,
    SessionPriority,
    SessionStatus,
    UserRole,
)
from peerpulse.utils.datetime import EPOCH, ensure_utc

UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class Record(BaseModel):
    """Base class for immutable input records."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class Post(Record):
    """Forum post."""

    id: str
    author_id: str
    author_pseudonym: str = "Anonymous"
    category: PostCategory
    title: str = ""
    escalation_level: EscalationLevel = EscalationLevel.NONE
    created_at: UtcDatetime


class Reply(Record):
    """Reply to a forum post.

    Attributes:
        is_helpful: Number of helpful votes the reply received.
        is_from_volunteer: Whether the reply was written in a volunteer
            (peer-educator) capacity.
    """

    id: str
    post_id: str
    author_id: str
    author_pseudonym: str = "Anonymous"
    is_helpful: NonNegativeInt = 0
    is_from_volunteer: bool = False
    created_at: UtcDatetime


class User(Record):
    """Platform user."""

    id: str
    pseudonym: str
    role: UserRole = UserRole.STUDENT
    last_active: UtcDatetime | None = None

    @property
    def last_seen(self) -> datetime:
        """Last activity, with a missing value treated as epoch start."""
        return self.last_active or EPOCH

    @property
    def is_educator(self) -> bool:
        """Whether the user belongs to the peer-educator roster."""
        return self.role in EDUCATOR_ROLES


class SupportSession(Record):
    """One-to-one support session request."""

    id: str
    student_pseudonym: str
    educator_id: str | None = None
    category: str = ""
    priority: SessionPriority = SessionPriority.NORMAL
    status: SessionStatus = SessionStatus.PENDING
    created_at: UtcDatetime


class ActivityLog(Record):
    """Logged peer-educator activity (session, training, meeting, ...)."""

    id: str
    user_id: str
    activity_type: str
    duration_minutes: NonNegativeInt = 0
    date: UtcDatetime


class Report(Record):
    """Moderation report against a post, reply or user."""

    id: str
    target_type: str
    target_id: str
    reason: str = ""
    status: ReportStatus = ReportStatus.PENDING
    created_at: UtcDatetime


class Escalation(Record):
    """Escalation raised for a post."""

    id: str
    post_id: str
    escalation_level: EscalationLevel
    reason: str = ""
    detected_at: UtcDatetime
    status: EscalationStatus = EscalationStatus.PENDING


class StreakRecord(Record):
    """Per-user streak counter for one streak type."""

    user_id: str
    streak_type: str = "check-in"
    current_streak: NonNegativeInt = 0
    longest_streak: NonNegativeInt = 0
    last_activity_date: UtcDatetime | None = None


class BadgeAward(Record):
    """A badge earned by a user."""

    user_id: str
    badge_id: str
    pseudonym: str = Field(default="Anonymous")
    earned_at: UtcDatetime | None = None
