"""Tests for overlay lifecycle and focus restoration."""

import pytest

from storefront_app.errors import UnknownOverlayError
from storefront_app.presentation.modals import (
    ClickRegion,
    Focusable,
    FocusTracker,
    ModalController,
    Overlay,
)


class TestModalController:
    """Test ModalController open/close semantics."""

    def setup_method(self):
        self.trigger = Focusable("buy-button")
        self.focus = FocusTracker(active=self.trigger)
        self.modals = ModalController(self.focus)
        self.payment = self.modals.register(Overlay("payment", dismiss_control=Focusable("payment-close")))
        self.purchases = self.modals.register(Overlay("purchases", dismiss_control=Focusable("purchases-close")))

    def test_open_focuses_supplied_target(self):
        """Opening moves focus to the supplied element."""
        pay = Focusable("pay")
        self.modals.open("payment", pay)

        assert self.payment.visible is True
        assert self.modals.active == "payment"
        assert self.focus.active is pay
        assert self.modals.page_locked is True

    def test_open_defaults_to_dismiss_control(self):
        """Without a target, focus goes to the overlay's dismiss control."""
        self.modals.open("payment")
        assert self.focus.active is self.payment.dismiss_control

    def test_close_restores_focus(self):
        """Closing returns focus to the element focused before opening."""
        self.modals.open("payment")

        assert self.modals.close("payment") is True
        assert self.payment.visible is False
        assert self.modals.active is None
        assert self.focus.active is self.trigger
        assert self.modals.page_locked is False

    def test_close_skips_unfocusable_element(self):
        """Focus is not restored to an element that can no longer take it."""
        self.modals.open("payment")
        self.trigger.can_focus = False

        self.modals.close("payment")

        assert self.focus.active is self.payment.dismiss_control

    def test_escape_closes_active_overlay(self):
        """Escape dismisses whichever overlay is active."""
        self.modals.open("purchases")

        assert self.modals.handle_key("Escape") is True
        assert self.purchases.visible is False

    def test_escape_with_nothing_open_is_noop(self):
        """Escape with no overlay open does nothing and raises nothing."""
        assert self.modals.handle_key("Escape") is False
        assert self.focus.active is self.trigger

    def test_other_keys_ignored(self):
        self.modals.open("payment")
        assert self.modals.handle_key("Enter") is False
        assert self.payment.visible is True

    @pytest.mark.parametrize("region,closes", [
        (ClickRegion.BACKDROP, True),
        (ClickRegion.CLOSE_CONTROL, True),
        (ClickRegion.CONTENT, False),
    ])
    def test_click_regions(self, region, closes):
        """Backdrop and close control dismiss; content clicks do not."""
        self.modals.open("payment")

        assert self.modals.handle_click("payment", region) is closes
        assert self.payment.visible is not closes

    def test_second_open_replaces_first(self):
        """Last-opened-wins: the first overlay hides, focus returns to the first trigger."""
        self.modals.open("payment")
        self.modals.open("purchases")

        assert self.payment.visible is False
        assert self.purchases.visible is True
        assert self.modals.active == "purchases"

        self.modals.close("purchases")

        assert self.focus.active is self.trigger

    def test_closing_untracked_overlay_keeps_session(self):
        """Closing an overlay that is not active leaves the active session and focus alone."""
        self.payment.visible = True
        self.modals.open("purchases")
        focused = self.focus.active

        assert self.modals.close("payment") is True
        assert self.modals.active == "purchases"
        assert self.focus.active is focused

    def test_reopen_same_overlay_keeps_return_focus(self):
        """Reopening the active overlay does not overwrite the remembered element."""
        self.modals.open("payment")
        self.modals.open("payment", Focusable("inner"))
        self.modals.close("payment")

        assert self.focus.active is self.trigger

    def test_close_hidden_overlay_returns_false(self):
        assert self.modals.close("payment") is False

    def test_close_callbacks_fire_once_per_hide(self):
        """Close callbacks fire when an overlay goes from visible to hidden."""
        closed = []
        self.modals.on_close("payment", lambda overlay: closed.append(overlay.overlay_id))

        self.modals.open("payment")
        self.modals.close("payment")
        self.modals.close("payment")

        assert closed == ["payment"]

    def test_replacement_fires_close_callback(self):
        """An overlay hidden by last-opened-wins reports its close."""
        closed = []
        self.modals.on_close("payment", lambda overlay: closed.append(overlay.overlay_id))

        self.modals.open("payment")
        self.modals.open("purchases")

        assert closed == ["payment"]

    def test_unknown_overlay(self):
        """Unregistered overlay ids raise UnknownOverlayError."""
        with pytest.raises(UnknownOverlayError):
            self.modals.open("missing")
