# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

Provides a fixed reference time and record factories so every test
builds its snapshot relative to the same ``now``.
"""

from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any

import pytest

from peerpulse.core.config.settings import clear_settings_cache
from peerpulse.models import Escalation, Post, Reply, Report, SupportSession, User


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Reload settings for every test so env patches do not leak."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def now() -> datetime:
    """Provide a fixed reference time for the snapshot."""
    return datetime(2025, 3, 14, 15, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Record Factories
# =============================================================================


@pytest.fixture
def make_post(now: datetime) -> Callable[..., Post]:
    """Build posts with sensible defaults."""
    ids = count(1)

    def factory(**overrides: Any) -> Post:
        data: dict[str, Any] = {
            "id": f"P{next(ids)}",
            "author_id": "U1",
            "author_pseudonym": "QuietRiver",
            "category": "academic",
            "created_at": now - timedelta(days=1),
        }
        data.update(overrides)
        return Post(**data)

    return factory


@pytest.fixture
def make_reply(now: datetime) -> Callable[..., Reply]:
    """Build replies with sensible defaults."""
    ids = count(1)

    def factory(**overrides: Any) -> Reply:
        data: dict[str, Any] = {
            "id": f"R{next(ids)}",
            "post_id": "P1",
            "author_id": "U1",
            "author_pseudonym": "QuietRiver",
            "is_helpful": 0,
            "is_from_volunteer": False,
            "created_at": now - timedelta(hours=1),
        }
        data.update(overrides)
        return Reply(**data)

    return factory


@pytest.fixture
def make_user(now: datetime) -> Callable[..., User]:
    """Build users with sensible defaults."""
    ids = count(1)

    def factory(**overrides: Any) -> User:
        index = next(ids)
        data: dict[str, Any] = {
            "id": f"U{index}",
            "pseudonym": f"Member{index}",
            "role": "student",
            "last_active": now - timedelta(hours=2),
        }
        data.update(overrides)
        return User(**data)

    return factory


@pytest.fixture
def make_report(now: datetime) -> Callable[..., Report]:
    """Build moderation reports with sensible defaults."""
    ids = count(1)

    def factory(**overrides: Any) -> Report:
        data: dict[str, Any] = {
            "id": f"RP{next(ids)}",
            "target_type": "post",
            "target_id": "P1",
            "reason": "spam",
            "status": "pending",
            "created_at": now - timedelta(hours=3),
        }
        data.update(overrides)
        return Report(**data)

    return factory


@pytest.fixture
def make_session(now: datetime) -> Callable[..., SupportSession]:
    """Build support sessions with sensible defaults."""
    ids = count(1)

    def factory(**overrides: Any) -> SupportSession:
        data: dict[str, Any] = {
            "id": f"S{next(ids)}",
            "student_pseudonym": "GentleRiver88",
            "category": "academic",
            "priority": "normal",
            "status": "pending",
            "created_at": now - timedelta(hours=4),
        }
        data.update(overrides)
        return SupportSession(**data)

    return factory


@pytest.fixture
def make_escalation(now: datetime) -> Callable[..., Escalation]:
    """Build escalations with sensible defaults."""
    ids = count(1)

    def factory(**overrides: Any) -> Escalation:
        data: dict[str, Any] = {
            "id": f"E{next(ids)}",
            "post_id": "P1",
            "escalation_level": "high",
            "detected_at": now - timedelta(days=1),
        }
        data.update(overrides)
        return Escalation(**data)

    return factory
