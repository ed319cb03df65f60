# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Refresh coordination: join-barrier fetches and last-request-wins publication."""

from peerpulse.domains.refresh.coordinator import (
    Fetcher,
    RefreshCoordinator,
    RefreshOutcome,
)

__all__ = ["RefreshCoordinator", "RefreshOutcome", "Fetcher"]
