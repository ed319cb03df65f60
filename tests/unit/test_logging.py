# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for structured logging setup."""

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog
from structlog.testing import capture_logs

from peerpulse.core.config.settings import Settings
from peerpulse.utils.logging import (
    ENGINE_LOGGER,
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore structlog defaults and the engine logger around each test."""
    engine = logging.getLogger(ENGINE_LOGGER)
    saved = (engine.handlers[:], engine.level, engine.propagate)
    structlog.reset_defaults()
    clear_context()
    yield
    clear_context()
    structlog.reset_defaults()
    engine.handlers, engine.level, engine.propagate = saved


def _json_lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_json_output_outside_development(self) -> None:
        """Test production settings render one JSON object per event."""
        stream = io.StringIO()
        setup_logging(Settings(environment="production", log_level="INFO"), stream)

        get_logger("peerpulse.test").info("leaderboard_built", entries=3)

        (payload,) = _json_lines(stream)
        assert payload["event"] == "leaderboard_built"
        assert payload["entries"] == 3
        assert payload["level"] == "info"
        assert payload["logger"] == "peerpulse.test"
        assert "timestamp" in payload

    def test_stdlib_engine_loggers_share_renderer(self) -> None:
        """Test domain modules logging via the stdlib produce the same JSON."""
        stream = io.StringIO()
        setup_logging(Settings(environment="production", log_level="INFO"), stream)

        logging.getLogger("peerpulse.domains.leaderboard").warning(
            "Skipped %d replies referencing unknown posts", 2
        )

        (payload,) = _json_lines(stream)
        assert payload["event"] == "Skipped 2 replies referencing unknown posts"
        assert payload["level"] == "warning"
        assert payload["logger"] == "peerpulse.domains.leaderboard"

    def test_level_filters_events(self) -> None:
        """Test events below the configured level are dropped."""
        stream = io.StringIO()
        setup_logging(Settings(environment="production", log_level="WARNING"), stream)

        get_logger("peerpulse.test").info("ignored_event")
        logging.getLogger("peerpulse.domains.analytics").info("Ignored %s", "too")

        assert stream.getvalue() == ""
        assert logging.getLogger(ENGINE_LOGGER).level == logging.WARNING

    def test_repeated_setup_replaces_handler(self) -> None:
        """Test calling setup twice keeps a single engine handler."""
        settings = Settings(environment="production")
        setup_logging(settings, io.StringIO())
        setup_logging(settings, io.StringIO())

        assert len(logging.getLogger(ENGINE_LOGGER).handlers) == 1


class TestContext:
    """Tests for context binding helpers."""

    def test_bound_context_until_cleared(self) -> None:
        """Test bound variables are kept until the context is cleared."""
        bind_context(view="admin-dashboard", token=7)

        assert structlog.contextvars.get_contextvars() == {
            "view": "admin-dashboard",
            "token": 7,
        }

        clear_context()

        assert structlog.contextvars.get_contextvars() == {}

    def test_bound_context_reaches_output(self) -> None:
        """Test bound variables are merged into rendered events."""
        stream = io.StringIO()
        setup_logging(Settings(environment="production"), stream)

        bind_context(view="queue")
        get_logger("peerpulse.test").info("refresh_published")

        (payload,) = _json_lines(stream)
        assert payload["view"] == "queue"

    def test_logger_binds_fields(self) -> None:
        """Test bound logger fields reach captured events."""
        with capture_logs() as captured:
            get_logger("peerpulse.test").bind(view="queue").info("refresh_published")

        assert captured == [
            {
                "view": "queue",
                "event": "refresh_published",
                "log_level": "info",
            }
        ]


class TestGetLogger:
    """Tests for get_logger."""

    def test_logger_created_before_setup_follows_setup(self) -> None:
        """Test a module-level logger picks up configuration applied later."""
        logger = get_logger("peerpulse.domains.refresh.coordinator")
        stream = io.StringIO()
        setup_logging(Settings(environment="production"), stream)

        logger.bind(view="dashboard").info("refresh_published", token=1)

        (payload,) = _json_lines(stream)
        assert payload["logger"] == "peerpulse.domains.refresh.coordinator"
        assert payload["view"] == "dashboard"
        assert payload["token"] == 1

    def test_error_with_exception_renders_traceback(self) -> None:
        """Test exc_info on a structlog event is rendered into the JSON line."""
        stream = io.StringIO()
        setup_logging(Settings(environment="production"), stream)

        try:
            raise ConnectionError("posts unavailable")
        except ConnectionError:
            get_logger("peerpulse.test").error("refresh_fetch_failed", exc_info=True)

        (payload,) = _json_lines(stream)
        assert payload["level"] == "error"
        assert "ConnectionError: posts unavailable" in payload["exception"]
