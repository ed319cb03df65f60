# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for triage ordering."""

from datetime import timedelta

import pytest

from peerpulse.core.config.settings import TriageSettings
from peerpulse.domains.triage import TriagePrioritizer
from peerpulse.models import EscalationLevel, SessionPriority


@pytest.fixture
def prioritizer() -> TriagePrioritizer:
    """Create a prioritizer showing five records per panel."""
    return TriagePrioritizer(TriageSettings())


class TestSeverityOrder:
    """Tests for the shared severity ranks."""

    def test_escalation_levels_are_totally_ordered(self):
        """Test none < low < medium < high < critical."""
        ranks = [level.rank for level in EscalationLevel]

        assert ranks == sorted(ranks)
        assert EscalationLevel.CRITICAL.rank == 5
        assert EscalationLevel.NONE.rank == 0

    def test_session_priorities_are_totally_ordered(self):
        """Test low < normal < urgent."""
        assert SessionPriority.LOW.rank < SessionPriority.NORMAL.rank < SessionPriority.URGENT.rank


class TestEscalatedPosts:
    """Tests for escalated post ordering."""

    def test_orders_by_severity_and_drops_none(self, prioritizer, make_post):
        """Test most severe first and unescalated posts excluded."""
        posts = [
            make_post(id="low", escalation_level="low"),
            make_post(id="none", escalation_level="none"),
            make_post(id="crit", escalation_level="critical"),
            make_post(id="med", escalation_level="medium"),
        ]

        result = prioritizer.escalated_posts(posts)

        assert [p.id for p in result] == ["crit", "med", "low"]

    def test_truncates_to_panel_size(self, prioritizer, make_post):
        """Test only the top five are returned by default."""
        posts = [make_post(escalation_level="high") for _ in range(8)]

        assert len(prioritizer.escalated_posts(posts)) == 5
        assert len(prioritizer.escalated_posts(posts, limit=None)) == 8

    def test_equal_severity_keeps_input_order(self, prioritizer, make_post):
        """Test ties are stable."""
        posts = [make_post(id=f"H{i}", escalation_level="high") for i in range(3)]

        assert [p.id for p in prioritizer.escalated_posts(posts)] == ["H0", "H1", "H2"]

    def test_level_filter(self, prioritizer, make_post):
        """Test the escalations screen level filter."""
        posts = [
            make_post(id="a", escalation_level="high"),
            make_post(id="b", escalation_level="critical"),
        ]

        result = prioritizer.escalated_posts(posts, level="high", limit=None)

        assert [p.id for p in result] == ["a"]


class TestPendingReports:
    """Tests for pending report ordering."""

    def test_most_recent_first(self, prioritizer, make_report, now):
        """Test pending reports sort newest first, others are dropped."""
        reports = [
            make_report(id="old", created_at=now - timedelta(days=2)),
            make_report(id="done", status="resolved", created_at=now),
            make_report(id="new", created_at=now - timedelta(hours=1)),
        ]

        assert [r.id for r in prioritizer.pending_reports(reports)] == ["new", "old"]

    def test_identical_timestamps_are_stable(self, prioritizer, make_report, now):
        """Test reports created at the same moment keep input order."""
        reports = [make_report(id="first", created_at=now), make_report(id="second", created_at=now)]

        assert [r.id for r in prioritizer.pending_reports(reports)] == ["first", "second"]


class TestSessionQueue:
    """Tests for the support session queue."""

    def test_priority_then_oldest(self, prioritizer, make_session, now):
        """Test urgent first, then oldest request within a priority."""
        sessions = [
            make_session(id="n-new", priority="normal", created_at=now - timedelta(hours=1)),
            make_session(id="u", priority="urgent", created_at=now - timedelta(minutes=5)),
            make_session(id="n-old", priority="normal", created_at=now - timedelta(hours=3)),
            make_session(id="taken", priority="urgent", status="active"),
            make_session(id="l", priority="low"),
        ]

        result = prioritizer.session_queue(sessions)

        assert [s.id for s in result] == ["u", "n-old", "n-new", "l"]

    def test_priority_filter(self, prioritizer, make_session):
        """Test filtering the queue to one priority."""
        sessions = [make_session(id="a", priority="low"), make_session(id="b", priority="urgent")]

        assert [s.id for s in prioritizer.session_queue(sessions, priority="low")] == ["a"]
