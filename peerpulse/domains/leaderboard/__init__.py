# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Leaderboard domain.

Ranks community members by helpfulness, engagement, streaks, badges and
category expertise.

Usage:
    from peerpulse.domains.leaderboard import LeaderboardAggregator

    board = LeaderboardAggregator().build("engaged", posts=posts, replies=replies)
"""

from peerpulse.domains.leaderboard.aggregator import (
    Leaderboard,
    LeaderboardAggregator,
    LeaderboardEntry,
    find_user_rank,
    rank_entries,
)

__all__ = [
    "LeaderboardAggregator",
    "Leaderboard",
    "LeaderboardEntry",
    "rank_entries",
    "find_user_rank",
]
