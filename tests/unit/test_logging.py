"""Tests for structured logging helpers."""

import pytest
from structlog.testing import capture_logs

from storefront_app.logging import get_state_logger, get_sync_logger, log_state_transition
from storefront_app.logging.config import configure_logging


class TestLoggingHelpers:
    """Test subsystem loggers and transition events."""

    def test_state_transition_event(self):
        with capture_logs() as logs:
            logger = get_state_logger("test")
            log_state_transition(
                logger,
                item_id="course-a",
                from_state="pending",
                to_state="unlocked",
                trigger="payment_confirmed",
                context={"unlocked_count": 1},
            )

        assert logs == [{
            "event": "State transition",
            "log_level": "info",
            "subsystem": "unlock_state",
            "audit_trail": True,
            "item_id": "course-a",
            "from_state": "pending",
            "to_state": "unlocked",
            "trigger": "payment_confirmed",
            "context": {"unlocked_count": 1},
        }]

    def test_context_omitted_when_empty(self):
        with capture_logs() as logs:
            log_state_transition(get_state_logger("test"), "a", "locked", "checkout_open", "checkout_opened")

        assert "context" not in logs[0]

    def test_sync_logger_tag(self):
        with capture_logs() as logs:
            get_sync_logger("test").info("Toast shown", message="hi")

        assert logs[0]["subsystem"] == "presentation"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            configure_logging(level="LOUD")
