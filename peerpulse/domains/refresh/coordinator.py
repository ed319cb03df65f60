# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Refresh coordination for screens that re-run an aggregation.

A refresh fans out its record fetches concurrently, waits for all of them
(join barrier), then runs one pure aggregation over the joined snapshot.

Each refresh is tagged with a monotonically increasing token. A result is
published only if its token is still the latest issued, so a slow refresh
that finishes after a newer one was started cannot overwrite newer data.
Superseded refreshes are not cancelled; their results are discarded.

If any fetch fails, the remaining fetches are cancelled, the failure is
logged and the previously published result stays available
(stale-but-available). Exceptions raised by the aggregation itself
propagate to the caller.

Example:
    coordinator = RefreshCoordinator("admin-dashboard")

    outcome = await coordinator.refresh(
        {
            "posts": storage.fetch_posts,
            "reports": storage.fetch_reports,
        },
        lambda snapshot: prioritizer.pending_reports(snapshot["reports"]),
    )
    if outcome.stale:
        show_banner("Showing last loaded data")
    render(coordinator.latest)
"""

import asyncio
from collections.abc import Callable, Coroutine, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

from peerpulse.utils.datetime import utc_now
from peerpulse.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Fetcher = Callable[[], Coroutine[Any, Any, Any]]


@dataclass
class RefreshOutcome(Generic[T]):
    """Outcome of one refresh attempt.

    Attributes:
        token: Token issued to this refresh.
        result: The published result after this attempt. On a stale or
            superseded attempt this is the previously published result.
        stale: A fetch failed; result is the last good result.
        superseded: A newer refresh was issued; this result was discarded.
        error: The fetch error, when stale.
        completed_at: When the attempt finished.
    """

    token: int
    result: T | None
    stale: bool = False
    superseded: bool = False
    error: Exception | None = None
    completed_at: datetime = field(default_factory=utc_now)

    @property
    def published(self) -> bool:
        """Whether this attempt's own result was published."""
        return not (self.stale or self.superseded)


class RefreshCoordinator(Generic[T]):
    """Serializes publication of concurrent refreshes of one view.

    Attributes:
        name: View name used in log lines.
    """

    def __init__(self, name: str) -> None:
        """Initialize the coordinator.

        Args:
            name: View name used in log lines.
        """
        self.name = name
        self._issued = 0
        self._published_token = 0
        self._latest: T | None = None

    @property
    def latest(self) -> T | None:
        """Most recently published result."""
        return self._latest

    @property
    def latest_token(self) -> int:
        """Token of the most recently published result (0 if none)."""
        return self._published_token

    def issue_token(self) -> int:
        """Issue the next refresh token."""
        self._issued += 1
        return self._issued

    def is_current(self, token: int) -> bool:
        """Check whether a token is the latest issued."""
        return token == self._issued

    async def refresh(
        self,
        fetchers: Mapping[str, Fetcher],
        compute: Callable[[dict[str, Any]], T],
    ) -> RefreshOutcome[T]:
        """Fetch all inputs, aggregate, and publish if still current.

        Args:
            fetchers: Named zero-argument coroutine functions returning records.
            compute: Pure aggregation over the joined snapshot.

        Returns:
            RefreshOutcome describing what was published.
        """
        token = self.issue_token()
        log = logger.bind(view=self.name, token=token)

        try:
            async with asyncio.TaskGroup() as group:
                tasks = {name: group.create_task(fetch()) for name, fetch in fetchers.items()}
        except ExceptionGroup as failures:
            error = failures.exceptions[0]
            log.error(
                "refresh_fetch_failed",
                error=str(error),
                failed=len(failures.exceptions),
                exc_info=error,
            )
            return RefreshOutcome(token=token, result=self._latest, stale=True, error=error)

        result = compute({name: task.result() for name, task in tasks.items()})

        if not self.is_current(token):
            log.info("refresh_superseded", latest=self._issued)
            return RefreshOutcome(token=token, result=self._latest, superseded=True)

        self._latest = result
        self._published_token = token
        log.debug("refresh_published")
        return RefreshOutcome(token=token, result=result)
