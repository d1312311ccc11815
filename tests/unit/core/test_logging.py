"""Tests for logging configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
import structlog
from structlog.contextvars import get_contextvars
from structlog.testing import capture_logs

from binary_dungeon.core.logging import (
    add_app_context,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from binary_dungeon.engine.loop import process_turn, start_new_run
from binary_dungeon.models import GamePhase, GameState, StartGame


if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults and drop bound context around each test."""
    clear_context()
    yield
    clear_context()
    structlog.reset_defaults()


class TestLoggingHelpers:
    """Tests for logging helpers."""

    def test_add_app_context(self) -> None:
        """Test the app name is stamped on every event."""
        event = add_app_context(None, "info", {"event": "hello"})
        assert event["app"] == "binary_dungeon"

    def test_bind_and_clear_context(self) -> None:
        """Test bound values are visible until cleared."""
        bind_context(milestone="v1.0.0", turn=3)
        assert get_contextvars() == {"milestone": "v1.0.0", "turn": 3}

        clear_context()
        assert get_contextvars() == {}

    @pytest.mark.parametrize("json_format", [True, False])
    def test_configure_logging(self, json_format: bool) -> None:
        """Test both renderers configure without error."""
        configure_logging(level="DEBUG", json_format=json_format)
        get_logger(__name__).debug("configured", json_format=json_format)

    def test_log_file_handler(self, tmp_path: Path) -> None:
        """Test stdlib records are also written to the given file."""
        log_path = tmp_path / "dungeon.log"
        configure_logging(level="info", log_file=str(log_path))
        handlers = [
            handler
            for handler in logging.getLogger().handlers
            if isinstance(handler, logging.FileHandler)
        ]

        try:
            logging.getLogger("binary_dungeon.test").info("floor generated")
            for handler in handlers:
                handler.flush()
            assert "floor generated" in log_path.read_text()
        finally:
            for handler in handlers:
                logging.getLogger().removeHandler(handler)
                handler.close()


class TestEngineLogging:
    """Tests for the structured events the engine emits."""

    def test_new_run_logged(self, exploring_state: GameState) -> None:
        """Test a new run emits an event and rebinds the milestone."""
        bind_context(milestone="v2.1.0", stale=True)

        with capture_logs() as logs:
            start_new_run(exploring_state)

        assert any(entry["event"] == "New run started" for entry in logs)
        assert get_contextvars() == {"milestone": "v1.0.0"}

    def test_start_binds_milestone(self, exploring_state: GameState) -> None:
        """Test starting a run binds the current milestone."""
        exploring_state.phase = GamePhase.TITLE

        process_turn(exploring_state, StartGame())

        assert get_contextvars()["milestone"] == "v1.0.0"
