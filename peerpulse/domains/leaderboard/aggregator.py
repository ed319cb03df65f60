# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Leaderboard aggregation module.

This module turns raw community records into ranked standings for five
leaderboard categories:
- helpful: helpful votes received on replies
- engaged: posts plus replies authored
- streaks: best longest-streak across a user's streak records
- badges: badges earned
- category-expert: replies concentrated in one post category

Standings are ranked by descending value with a stable sort, so equal
values keep the order in which users were first seen in the records.

Usage:
    from peerpulse.domains.leaderboard import LeaderboardAggregator

    aggregator = LeaderboardAggregator()
    board = aggregator.build(
        "helpful",
        posts=posts,
        replies=replies,
        time_filter="weekly",
    )
    my_rank = board.rank_of(current_user_id)
"""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from peerpulse.core.config.settings import LeaderboardSettings, get_settings
from peerpulse.models.enums import (
    LeaderboardCategory,
    PostCategory,
    TimeFilter,
    coerce_selector,
)
from peerpulse.models.records import BadgeAward, Post, Reply, StreakRecord, User
from peerpulse.utils.datetime import days_before, ensure_utc, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    """One user's standing on a leaderboard.

    Attributes:
        user_id: User identifier.
        pseudonym: Display pseudonym.
        value: Score for the leaderboard category.
        rank: 1-based position; 0 until ranked.
        category: Top post category (category-expert board only).
    """

    user_id: str
    pseudonym: str
    value: int
    rank: int = 0
    category: PostCategory | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "user_id": self.user_id,
            "pseudonym": self.pseudonym,
            "value": self.value,
            "rank": self.rank,
            "category": self.category.value if self.category else None,
        }


@dataclass
class Leaderboard:
    """A ranked leaderboard ready for rendering."""

    category: LeaderboardCategory
    time_filter: TimeFilter
    entries: list[LeaderboardEntry] = field(default_factory=list)
    generated_at: datetime = field(default_factory=utc_now)

    def rank_of(self, user_id: str) -> int | None:
        """Get the rank of a user, or None when unranked."""
        return find_user_rank(self.entries, user_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for rendering."""
        return {
            "category": self.category.value,
            "time_filter": self.time_filter.value,
            "generated_at": self.generated_at.isoformat(),
            "entries": [entry.to_dict() for entry in self.entries],
        }


def rank_entries(entries: Iterable[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """Order entries by descending value and assign contiguous ranks.

    Args:
        entries: Unranked entries in first-seen order.

    Returns:
        New entries ranked 1..n. Ties keep their input order.
    """
    ordered = sorted(entries, key=lambda entry: entry.value, reverse=True)
    return [replace(entry, rank=index) for index, entry in enumerate(ordered, start=1)]


def find_user_rank(entries: Sequence[LeaderboardEntry], user_id: str) -> int | None:
    """Find a user's rank in a ranked leaderboard.

    Args:
        entries: Ranked entries.
        user_id: User to look up.

    Returns:
        The user's rank, or None when the user is unranked.
    """
    for entry in entries:
        if entry.user_id == user_id:
            return entry.rank
    return None


class LeaderboardAggregator:
    """Builds ranked leaderboards from community records.

    Attributes:
        settings: Leaderboard thresholds and window sizes.
    """

    def __init__(self, settings: LeaderboardSettings | None = None) -> None:
        """Initialize the aggregator.

        Args:
            settings: Leaderboard settings (defaults to global settings).
        """
        self.settings = settings or get_settings().leaderboard

    def build(
        self,
        category: LeaderboardCategory | str,
        *,
        posts: Sequence[Post] = (),
        replies: Sequence[Reply] = (),
        users: Sequence[User] = (),
        streaks: Sequence[StreakRecord] = (),
        badges: Sequence[BadgeAward] = (),
        time_filter: TimeFilter | str = TimeFilter.ALL_TIME,
        now: datetime | None = None,
    ) -> Leaderboard:
        """Build a ranked leaderboard for one category.

        The time filter narrows the contributing records (posts, replies,
        badge awards) before aggregation. Replies are still matched against
        the full post set, so a recent reply to an older post keeps its
        category. Streak records are lifetime figures and are not windowed.

        Args:
            category: Leaderboard selector.
            posts: All posts.
            replies: All replies.
            users: All users (streaks board, badge pseudonyms).
            streaks: All streak records (streaks board).
            badges: All badge awards (badges board).
            time_filter: all-time, monthly or weekly.
            now: Reference time (defaults to current UTC time).

        Returns:
            Ranked Leaderboard.

        Raises:
            UnknownSelectorError: If a selector value is not recognized.
        """
        category = coerce_selector(LeaderboardCategory, category, "leaderboard category")
        time_filter = coerce_selector(TimeFilter, time_filter, "time filter")
        now = ensure_utc(now) if now else utc_now()

        since = self.window_start(time_filter, now)
        recent_posts = _since(posts, since, "created_at")
        recent_replies = _since(replies, since, "created_at")

        if category == LeaderboardCategory.HELPFUL:
            entries = self._helpful(recent_replies)
        elif category == LeaderboardCategory.ENGAGED:
            entries = self._engaged(recent_posts, recent_replies)
        elif category == LeaderboardCategory.STREAKS:
            entries = self._streaks(users, streaks)
        elif category == LeaderboardCategory.BADGES:
            entries = self._badges(_since(badges, since, "earned_at"), users)
        else:
            entries = self._category_experts(posts, recent_replies)

        ranked = rank_entries(entries)

        logger.debug(
            "Leaderboard built: category=%s, time_filter=%s, entries=%d",
            category.value,
            time_filter.value,
            len(ranked),
        )

        return Leaderboard(
            category=category,
            time_filter=time_filter,
            entries=ranked,
            generated_at=now,
        )

    def window_start(self, time_filter: TimeFilter, now: datetime) -> datetime | None:
        """Get the earliest timestamp kept by a time filter.

        Returns:
            Window start, or None for all-time.
        """
        if time_filter == TimeFilter.WEEKLY:
            return days_before(now, self.settings.weekly_days)
        if time_filter == TimeFilter.MONTHLY:
            return days_before(now, self.settings.monthly_days)
        return None

    def _helpful(self, replies: Iterable[Reply]) -> list[LeaderboardEntry]:
        totals: dict[str, int] = {}
        pseudonyms: dict[str, str] = {}

        for reply in replies:
            if reply.is_helpful <= 0:
                continue
            if reply.author_id not in totals:
                totals[reply.author_id] = 0
                pseudonyms[reply.author_id] = reply.author_pseudonym
            totals[reply.author_id] += reply.is_helpful

        return [
            LeaderboardEntry(user_id=user_id, pseudonym=pseudonyms[user_id], value=total)
            for user_id, total in totals.items()
        ]

    def _engaged(
        self,
        posts: Iterable[Post],
        replies: Iterable[Reply],
    ) -> list[LeaderboardEntry]:
        counts: Counter[str] = Counter()
        pseudonyms: dict[str, str] = {}

        for record in [*posts, *replies]:
            pseudonyms.setdefault(record.author_id, record.author_pseudonym)
            counts[record.author_id] += 1

        return [
            LeaderboardEntry(user_id=user_id, pseudonym=pseudonyms[user_id], value=count)
            for user_id, count in counts.items()
        ]

    def _streaks(
        self,
        users: Iterable[User],
        streaks: Iterable[StreakRecord],
    ) -> list[LeaderboardEntry]:
        best: dict[str, int] = {}
        for record in streaks:
            best[record.user_id] = max(best.get(record.user_id, 0), record.longest_streak)

        entries = []
        for user in users:
            longest = best.get(user.id, 0)
            if longest > 0:
                entries.append(
                    LeaderboardEntry(user_id=user.id, pseudonym=user.pseudonym, value=longest)
                )
        return entries

    def _badges(
        self,
        awards: Iterable[BadgeAward],
        users: Iterable[User],
    ) -> list[LeaderboardEntry]:
        known = {user.id: user.pseudonym for user in users}
        counts: Counter[str] = Counter()
        pseudonyms: dict[str, str] = {}

        for award in awards:
            pseudonyms.setdefault(award.user_id, known.get(award.user_id, award.pseudonym))
            counts[award.user_id] += 1

        return [
            LeaderboardEntry(user_id=user_id, pseudonym=pseudonyms[user_id], value=count)
            for user_id, count in counts.items()
        ]

    def _category_experts(
        self,
        posts: Iterable[Post],
        replies: Iterable[Reply],
    ) -> list[LeaderboardEntry]:
        category_by_post = {post.id: post.category for post in posts}
        per_user: dict[str, Counter[PostCategory]] = {}
        pseudonyms: dict[tuple[str, PostCategory], str] = {}
        orphans = 0

        for reply in replies:
            category = category_by_post.get(reply.post_id)
            if category is None:
                orphans += 1
                continue
            per_user.setdefault(reply.author_id, Counter())[category] += 1
            pseudonyms.setdefault((reply.author_id, category), reply.author_pseudonym)

        if orphans:
            logger.warning(
                "Skipped %d replies referencing unknown posts for category-expert board",
                orphans,
            )

        entries = []
        for user_id, counts in per_user.items():
            top_category, top_count = None, 0
            # Among categories tied at the maximum, the one seen first in the
            # replies wins.
            for category, count in counts.items():
                if count > top_count:
                    top_category, top_count = category, count
            if top_category is not None and top_count >= self.settings.category_expert_threshold:
                entries.append(
                    LeaderboardEntry(
                        user_id=user_id,
                        pseudonym=pseudonyms[(user_id, top_category)],
                        value=top_count,
                        category=top_category,
                    )
                )
        return entries


def _since(records: Sequence[Any], since: datetime | None, attr: str) -> list[Any]:
    """Keep records whose timestamp attribute is at or after since.

    Undated records are kept only when no window applies.
    """
    if since is None:
        return list(records)
    return [
        record
        for record in records
        if getattr(record, attr) is not None and getattr(record, attr) >= since
    ]
