# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Aggregation domains.

- leaderboard: ranked community standings
- performance: peer-educator scorecards and roster views
- triage: escalation, report and session-queue ordering
- analytics: windowed admin analytics and export
- refresh: coordination of concurrent refreshes
"""
