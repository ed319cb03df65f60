# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for PeerPulse.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
"""

from peerpulse.utils.datetime import (
    EPOCH,
    days_before,
    days_between,
    end_of_day,
    ensure_utc,
    hours_between,
    start_of_day,
    utc_now,
)
from peerpulse.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "EPOCH",
    "utc_now",
    "ensure_utc",
    "start_of_day",
    "end_of_day",
    "hours_between",
    "days_between",
    "days_before",
]
