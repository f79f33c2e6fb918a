"""
Overlay lifecycle and focus management.

Exactly one overlay is tracked as active at a time. Opening another overlay
while one is active follows last-opened-wins: the previous overlay is hidden
and the new session inherits its remembered focus target, so closing the new
overlay returns focus to wherever the user was before either opened. Escape
only ever closes the active overlay.
"""

from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..errors import UnknownOverlayError
from ..logging.config import get_sync_logger

logger = get_sync_logger(__name__)

ESCAPE_KEY = "Escape"


class Focusable:
    """A named element that can hold input focus."""

    def __init__(self, name: str, can_focus: bool = True):
        self.name = name
        self.can_focus = can_focus

    def __repr__(self) -> str:
        return f"Focusable({self.name!r})"


class FocusTracker:
    """Tracks which element currently holds input focus."""

    def __init__(self, active: Optional[Focusable] = None):
        self.active = active

    def focus(self, element: Optional[Focusable]) -> bool:
        if element is None or not element.can_focus:
            return False
        self.active = element
        return True


class ClickRegion(str, Enum):
    """Where inside an overlay a click landed."""
    BACKDROP = "backdrop"
    CONTENT = "content"
    CLOSE_CONTROL = "close_control"


@dataclass
class Overlay:
    """A modal surface and its dismiss control."""
    overlay_id: str
    dismiss_control: Focusable
    title: str = ""
    content: Any = None
    visible: bool = False


@dataclass(frozen=True)
class ModalSession:
    """The active overlay and the element to refocus when it closes."""
    overlay_id: str
    return_focus: Optional[Focusable]


class ModalController:
    """Opens and closes registered overlays, restoring focus on close."""

    def __init__(self, focus: Optional[FocusTracker] = None):
        self.focus = focus or FocusTracker()
        self.logger = logger
        self._overlays: dict[str, Overlay] = {}
        self._close_callbacks: dict[str, list[Callable[[Overlay], None]]] = defaultdict(list)
        self._session: Optional[ModalSession] = None

    def register(self, overlay: Overlay) -> Overlay:
        self._overlays[overlay.overlay_id] = overlay
        return overlay

    def overlay(self, overlay_id: str) -> Overlay:
        try:
            return self._overlays[overlay_id]
        except KeyError:
            raise UnknownOverlayError(
                f"Overlay {overlay_id!r} is not registered",
                overlay_id=overlay_id
            ) from None

    def on_close(self, overlay_id: str, callback: Callable[[Overlay], None]) -> None:
        """Call callback every time the overlay goes from visible to hidden."""
        self.overlay(overlay_id)
        self._close_callbacks[overlay_id].append(callback)

    @property
    def session(self) -> Optional[ModalSession]:
        return self._session

    @property
    def active(self) -> Optional[str]:
        return self._session.overlay_id if self._session else None

    @property
    def page_locked(self) -> bool:
        """True while any overlay is visible."""
        return any(overlay.visible for overlay in self._overlays.values())

    def open(self, overlay_id: str, element_to_focus: Optional[Focusable] = None) -> Overlay:
        """Show the overlay and move focus into it."""
        overlay = self.overlay(overlay_id)
        previous = self._session

        if previous is not None and previous.overlay_id == overlay_id:
            return_focus = previous.return_focus
        elif previous is not None:
            return_focus = previous.return_focus
            self._session = None
            self._hide(self._overlays[previous.overlay_id])
            self.logger.debug(
                "Replaced active overlay",
                previous=previous.overlay_id,
                overlay_id=overlay_id
            )
        else:
            return_focus = self.focus.active

        overlay.visible = True
        self._session = ModalSession(overlay_id=overlay_id, return_focus=return_focus)

        if not self.focus.focus(element_to_focus):
            self.focus.focus(overlay.dismiss_control)

        self.logger.debug("Overlay opened", overlay_id=overlay_id)
        return overlay

    def close(self, overlay_id: str) -> bool:
        """
        Hide the overlay.

        Focus is restored only when closing the tracked active overlay, and
        only if the remembered element can still take focus.

        Returns:
            True if the overlay was visible and is now hidden
        """
        overlay = self.overlay(overlay_id)
        session = self._session

        if session is not None and session.overlay_id == overlay_id:
            self._session = None
            self._hide(overlay)
            if session.return_focus is not None and session.return_focus.can_focus:
                self.focus.focus(session.return_focus)
            self.logger.debug("Overlay closed", overlay_id=overlay_id)
            return True

        if not overlay.visible:
            return False

        self._hide(overlay)
        return True

    def handle_key(self, key: str) -> bool:
        """Escape closes the active overlay; anything else is ignored."""
        if key != ESCAPE_KEY or self._session is None:
            return False
        return self.close(self._session.overlay_id)

    def handle_click(self, overlay_id: str, region: ClickRegion) -> bool:
        """Backdrop and close-control clicks dismiss; clicks on content do not."""
        if region == ClickRegion.CONTENT:
            return False
        return self.close(overlay_id)

    def _hide(self, overlay: Overlay) -> None:
        if not overlay.visible:
            return
        overlay.visible = False
        for callback in list(self._close_callbacks.get(overlay.overlay_id, [])):
            callback(overlay)
