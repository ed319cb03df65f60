# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Record models and enumerations consumed by the engine."""

from peerpulse.models.enums import (
    EDUCATOR_ROLES,
    DateRangePreset,
    EducatorFilter,
    EducatorSortMode,
    EscalationLevel,
    EscalationStatus,
    LeaderboardCategory,
    PostCategory,
    QualityBand,
    ReportStatus,
    ResponseLoad,
    SessionPriority,
    SessionStatus,
    TimeFilter,
    UserRole,
    coerce_selector,
)
from peerpulse.models.records import (
    ActivityLog,
    BadgeAward,
    Escalation,
    Post,
    Record,
    Reply,
    Report,
    StreakRecord,
    SupportSession,
    User,
)

__all__ = [
    # Enums
    "PostCategory",
    "EscalationLevel",
    "EscalationStatus",
    "SessionPriority",
    "SessionStatus",
    "ReportStatus",
    "UserRole",
    "EDUCATOR_ROLES",
    "LeaderboardCategory",
    "TimeFilter",
    "EducatorSortMode",
    "EducatorFilter",
    "ResponseLoad",
    "QualityBand",
    "DateRangePreset",
    "coerce_selector",
    # Records
    "Record",
    "Post",
    "Reply",
    "User",
    "SupportSession",
    "ActivityLog",
    "Report",
    "Escalation",
    "StreakRecord",
    "BadgeAward",
]
