# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the PeerPulse engine.

This module defines the exception hierarchy for engine operations:
- PeerPulseError: Base exception for all engine errors
- InvalidDateRangeError: A custom analytics window is incomplete or inverted
- UnknownSelectorError: A selector string names no known mode

Anticipated data problems (missing post references, empty denominators)
are not errors; aggregators degrade them to safe defaults instead.
"""

from typing import Any


class PeerPulseError(Exception):
    """Base exception for all engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize engine error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class InvalidDateRangeError(PeerPulseError):
    """Raised when a custom date range is missing a bound or is inverted."""


class UnknownSelectorError(PeerPulseError):
    """Raised when a selector value cannot be mapped to its enumeration.

    Attributes:
        selector: Name of the selector (e.g. "category", "sort_by").
        value: The rejected value.
    """

    def __init__(self, selector: str, value: Any, allowed: list[str]):
        """Initialize selector error.

        Args:
            selector: Name of the selector.
            value: The rejected value.
            allowed: Accepted values, reported in details.
        """
        self.selector = selector
        self.value = value
        super().__init__(
            f"Unknown {selector}: {value!r}",
            details={"allowed": allowed},
        )
