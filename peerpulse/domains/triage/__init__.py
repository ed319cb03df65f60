# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Triage domain: escalation, report and session-queue ordering."""

from peerpulse.domains.triage.prioritizer import TriagePrioritizer

__all__ = ["TriagePrioritizer"]
