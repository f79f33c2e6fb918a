"""Transient toast notifications with a fixed visible duration."""

import time
from collections.abc import Callable
from typing import Optional

from ..logging.config import get_sync_logger

logger = get_sync_logger(__name__)


class ToastNotifier:
    """
    Single-slot transient message display.

    A new message replaces the current one and restarts the visible window.
    Visibility is computed against the clock rather than a timer so the
    notifier needs no event loop.
    """

    def __init__(self, visible_seconds: float = 3.2, clock: Optional[Callable[[], float]] = None):
        self.visible_seconds = visible_seconds
        self.clock = clock or time.monotonic
        self.message: Optional[str] = None
        self.history: list[str] = []
        self._expires_at = 0.0

    def show(self, message: str) -> None:
        self.message = message
        self.history.append(message)
        self._expires_at = self.clock() + self.visible_seconds
        logger.info("Toast shown", message=message)

    @property
    def visible(self) -> bool:
        return self.message is not None and self.clock() < self._expires_at

    @property
    def current(self) -> Optional[str]:
        """The visible message, or None once its window has elapsed."""
        return self.message if self.visible else None
