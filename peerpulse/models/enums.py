# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enumerations shared by every PeerPulse component.

Every vocabulary used by the engine is a closed enumeration. Severity-like
vocabularies (EscalationLevel, SessionPriority) expose a ``rank`` that
defines their total order; every consumer sorts by ``rank`` instead of
keeping its own lookup table.
"""

from enum import Enum
from typing import TypeVar

from peerpulse.exceptions import UnknownSelectorError


class PostCategory(str, Enum):
    """Forum post categories."""

    MENTAL_HEALTH = "mental-health"
    CRISIS = "crisis"
    SUBSTANCE_ABUSE = "substance-abuse"
    SEXUAL_HEALTH = "sexual-health"
    STIS_HIV = "stis-hiv"
    FAMILY_HOME = "family-home"
    ACADEMIC = "academic"
    SOCIAL = "social"
    RELATIONSHIPS = "relationships"
    CAMPUS = "campus"
    GENERAL = "general"

    @property
    def display_name(self) -> str:
        """Human-readable category name used in reports."""
        return _CATEGORY_NAMES[self]


_CATEGORY_NAMES: dict[PostCategory, str] = {
    PostCategory.MENTAL_HEALTH: "Mental Health Support",
    PostCategory.CRISIS: "Crisis Support",
    PostCategory.SUBSTANCE_ABUSE: "Drug & Substance Abuse",
    PostCategory.SEXUAL_HEALTH: "Sexual & Reproductive Health (SRH)",
    PostCategory.STIS_HIV: "STIs/HIV & Safe Sex Education",
    PostCategory.FAMILY_HOME: "Family & Home Challenges",
    PostCategory.ACADEMIC: "Academic Support & Exam Stress",
    PostCategory.SOCIAL: "Social & Personal",
    PostCategory.RELATIONSHIPS: "Relationship & Social Guidance",
    PostCategory.CAMPUS: "Campus Life",
    PostCategory.GENERAL: "General Support",
}


class EscalationLevel(str, Enum):
    """Severity tag on a post.

    Ordered none < low < medium < high < critical via ``rank``.
    """

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        """Severity number; higher is more severe."""
        return _ESCALATION_RANKS[self]


# Gap between none and low is kept from the triage tables.
_ESCALATION_RANKS: dict[EscalationLevel, int] = {
    EscalationLevel.NONE: 0,
    EscalationLevel.LOW: 2,
    EscalationLevel.MEDIUM: 3,
    EscalationLevel.HIGH: 4,
    EscalationLevel.CRITICAL: 5,
}


class SessionPriority(str, Enum):
    """Support session priority, ordered low < normal < urgent."""

    LOW = "low"
    NORMAL = "normal"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Priority number; higher is more pressing."""
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS: dict[SessionPriority, int] = {
    SessionPriority.LOW: 1,
    SessionPriority.NORMAL: 2,
    SessionPriority.URGENT: 3,
}


class UserRole(str, Enum):
    """Platform roles."""

    STUDENT = "student"
    PEER_EDUCATOR = "peer-educator"
    PEER_EDUCATOR_EXECUTIVE = "peer-educator-executive"
    MODERATOR = "moderator"
    COUNSELOR = "counselor"
    LIFE_COACH = "life-coach"
    STUDENT_AFFAIRS = "student-affairs"
    ADMIN = "admin"


EDUCATOR_ROLES = frozenset({UserRole.PEER_EDUCATOR, UserRole.PEER_EDUCATOR_EXECUTIVE})


class SessionStatus(str, Enum):
    """Support session lifecycle status."""

    PENDING = "pending"
    ACTIVE = "active"
    RESOLVED = "resolved"


class ReportStatus(str, Enum):
    """Moderation report status."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class EscalationStatus(str, Enum):
    """Escalation handling status."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class LeaderboardCategory(str, Enum):
    """Leaderboard selector."""

    HELPFUL = "helpful"
    ENGAGED = "engaged"
    STREAKS = "streaks"
    BADGES = "badges"
    CATEGORY_EXPERT = "category-expert"


class TimeFilter(str, Enum):
    """Leaderboard time window."""

    ALL_TIME = "all-time"
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class EducatorSortMode(str, Enum):
    """Roster ordering."""

    ACTIVITY = "activity"
    RESPONSES = "responses"
    QUALITY = "quality"


class EducatorFilter(str, Enum):
    """Roster filter, applied after sorting."""

    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"
    HIGH_LOAD = "high-load"


class ResponseLoad(str, Enum):
    """Workload classification from recent reply volume."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class QualityBand(str, Enum):
    """Quality score band shown beside an educator."""

    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_ATTENTION = "needs-attention"


class DateRangePreset(str, Enum):
    """Admin analytics date range selector."""

    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    ALL = "all"
    CUSTOM = "custom"


E = TypeVar("E", bound=Enum)


def coerce_selector(enum_cls: type[E], value: E | str, selector: str) -> E:
    """Map a selector value onto its enumeration.

    Args:
        enum_cls: Target enumeration.
        value: Enum member or its string value.
        selector: Selector name used in the error message.

    Returns:
        The matching enum member.

    Raises:
        UnknownSelectorError: If the value names no member.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise UnknownSelectorError(
            selector, value, [member.value for member in enum_cls]
        ) from None
