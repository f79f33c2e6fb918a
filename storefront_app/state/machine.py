"""
Per-item unlock state machine.

Locked --checkout--> CheckoutOpen --simulate payment--> Pending --delay--> Unlocked

The machine owns the unlocked identifier set and is the only component that
writes it to the purchase store. Checking out an item that is already
unlocked never reopens the checkout overlay; it re-syncs presentation and
posts an "already unlocked" notice instead.
"""

import asyncio
from typing import Optional

from ..catalog.models import Item
from ..config.defaults import PaymentParams
from ..errors import PaymentCancelledError, StateTransitionError
from ..logging.config import get_state_logger, log_state_transition
from ..persistence.purchase_store import PersistentPurchaseStore
from ..presentation.modals import Focusable, ModalController, Overlay
from ..presentation.notifier import ToastNotifier
from ..presentation.sync import PresentationSync
from ..presentation.views import ProcessingView, build_checkout_view, build_success_view
from .models import TRANSIENT_STATES, CheckoutOutcome, UnlockState
from .payment import CancellationToken, PaymentSimulator

state_logger = get_state_logger(__name__)

CHECKOUT_OVERLAY = "payment"
ALREADY_UNLOCKED_MESSAGE = "This item is already unlocked."
UNLOCKED_MESSAGE = "{name} unlocked. Terabox download ready!"


class UnlockStateMachine:
    """Drives checkout and simulated payment for catalog items."""

    def __init__(
        self,
        store: PersistentPurchaseStore,
        presentation: PresentationSync,
        notifier: ToastNotifier,
        modals: ModalController,
        payment_params: Optional[PaymentParams] = None,
        checkout_overlay: str = CHECKOUT_OVERLAY
    ):
        self.store = store
        self.presentation = presentation
        self.notifier = notifier
        self.modals = modals
        self.payment_params = payment_params or PaymentParams()
        self.checkout_overlay = checkout_overlay
        self.simulator = PaymentSimulator(self.payment_params.simulation_delay_seconds)
        self.logger = state_logger

        # Focus target inside the checkout overlay
        self.pay_action = Focusable("simulate-payment")

        self._unlocked: dict[str, None] = dict.fromkeys(sorted(store.load()))
        self._transient: dict[str, UnlockState] = {}
        self._checkout_item: Optional[str] = None

        self.modals.on_close(self.checkout_overlay, self._on_checkout_closed)

    def state_of(self, item_id: str) -> UnlockState:
        if item_id in self._unlocked:
            return UnlockState.UNLOCKED
        return self._transient.get(item_id, UnlockState.LOCKED)

    def is_unlocked(self, item_id: str) -> bool:
        return item_id in self._unlocked

    def unlocked_ids(self) -> list[str]:
        """Unlocked identifiers, persisted ones first, then in unlock order."""
        return list(self._unlocked)

    @property
    def checkout_item(self) -> Optional[str]:
        """Identifier whose checkout currently owns the checkout overlay."""
        return self._checkout_item

    def begin_checkout(self, item: Item) -> CheckoutOutcome:
        """Open the checkout overlay for item, unless it is already unlocked or paying."""
        if self.is_unlocked(item.id):
            self.presentation.set_unlocked(item.id, True)
            self.presentation.render_purchases(self.unlocked_ids())
            self.notifier.show(ALREADY_UNLOCKED_MESSAGE)
            self.logger.info("Checkout skipped for unlocked item", item_id=item.id)
            return CheckoutOutcome.ALREADY_UNLOCKED

        if self.state_of(item.id) == UnlockState.PENDING:
            return CheckoutOutcome.IN_PROGRESS

        previous = self._checkout_item
        if previous is not None and previous != item.id:
            if self.state_of(previous) == UnlockState.CHECKOUT_OPEN:
                self._set_state(previous, UnlockState.LOCKED, trigger="checkout_replaced")

        self._set_state(item.id, UnlockState.CHECKOUT_OPEN, trigger="checkout_opened")
        self._checkout_item = item.id

        overlay = self._overlay()
        checkout_view = build_checkout_view(item, self.payment_params)
        overlay.title = checkout_view.title
        overlay.content = checkout_view
        self.modals.open(self.checkout_overlay, self.pay_action)

        return CheckoutOutcome.OPENED

    async def simulate_payment(
        self,
        item: Item,
        token: Optional[CancellationToken] = None
    ) -> UnlockState:
        """
        Run the simulated payment for an item whose checkout is open.

        Raises:
            StateTransitionError: if the item's checkout is not open
            PaymentCancelledError: if token is cancelled before confirmation
        """
        self._enter_pending(item)
        return await self._run_payment(item, token)

    def schedule_payment(
        self,
        item: Item,
        token: Optional[CancellationToken] = None
    ) -> "asyncio.Task[UnlockState]":
        """
        Start the simulated payment as a task on the running loop.

        The Pending transition happens before this returns, so a second call
        for the same item fails immediately instead of starting a second task.
        """
        self._enter_pending(item)
        return asyncio.get_running_loop().create_task(self._run_payment(item, token))

    def complete_unlock(self, item: Item) -> None:
        """
        Enter Unlocked for item.

        Side effects run in order: persist the set, sync the card and the
        purchases summary, post the notice, show the success view. Repeating
        it for an unlocked item re-runs them without changing the set.

        Raises:
            StateTransitionError: if the item is neither pending nor unlocked
        """
        from_state = self.state_of(item.id)
        if from_state not in (UnlockState.PENDING, UnlockState.UNLOCKED):
            raise StateTransitionError(
                f"Cannot unlock {item.id!r} from {from_state.value}",
                current_state=from_state.value,
                attempted_transition=UnlockState.UNLOCKED.value
            )

        self._unlocked[item.id] = None
        self._transient.pop(item.id, None)
        self.store.save(self._unlocked)

        log_state_transition(
            self.logger,
            item_id=item.id,
            from_state=from_state.value,
            to_state=UnlockState.UNLOCKED.value,
            trigger="payment_confirmed",
            context={"unlocked_count": len(self._unlocked)}
        )

        self.presentation.set_unlocked(item.id, True)
        self.presentation.render_purchases(self.unlocked_ids())
        self.notifier.show(UNLOCKED_MESSAGE.format(name=item.name))

        if self._checkout_item == item.id:
            self._overlay().content = build_success_view(item)

    def _enter_pending(self, item: Item) -> None:
        current = self.state_of(item.id)
        if current != UnlockState.CHECKOUT_OPEN:
            raise StateTransitionError(
                f"Cannot start payment for {item.id!r} from {current.value}",
                current_state=current.value,
                attempted_transition=UnlockState.PENDING.value
            )

        self._set_state(item.id, UnlockState.PENDING, trigger="payment_started")
        if self._checkout_item == item.id:
            self._overlay().content = ProcessingView(item_id=item.id)

    async def _run_payment(self, item: Item, token: Optional[CancellationToken]) -> UnlockState:
        try:
            await self.simulator.run(token)
        except (PaymentCancelledError, asyncio.CancelledError):
            self._set_state(item.id, UnlockState.LOCKED, trigger="payment_cancelled")
            if self._checkout_item == item.id:
                self._checkout_item = None
                self.modals.close(self.checkout_overlay)
            raise

        self.complete_unlock(item)
        return UnlockState.UNLOCKED

    def _on_checkout_closed(self, overlay: Overlay) -> None:
        item_id = self._checkout_item
        if item_id is None:
            return

        state = self.state_of(item_id)
        if state == UnlockState.CHECKOUT_OPEN:
            self._set_state(item_id, UnlockState.LOCKED, trigger="checkout_dismissed")

        # A pending payment keeps running and still owns the overlay content
        if state != UnlockState.PENDING:
            self._checkout_item = None

    def _set_state(self, item_id: str, new_state: UnlockState, trigger: str) -> None:
        from_state = self.state_of(item_id)

        if new_state in TRANSIENT_STATES:
            self._transient[item_id] = new_state
        else:
            self._transient.pop(item_id, None)

        log_state_transition(
            self.logger,
            item_id=item_id,
            from_state=from_state.value,
            to_state=new_state.value,
            trigger=trigger
        )

    def _overlay(self) -> Overlay:
        return self.modals.overlay(self.checkout_overlay)
