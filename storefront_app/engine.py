"""
Storefront coordinator.

Wires the catalog loader, purchase store, unlock state machine, presentation
sync and modal controller together:
Catalog Sections → Index → Cards → Checkout → Unlock → Store + Cards → Success
"""

from collections.abc import Callable
from dataclasses import asdict
from typing import Optional

import httpx

from .catalog.index import CatalogIndex
from .catalog.loader import CatalogLoader
from .catalog.models import CatalogSection, Item, SectionResult
from .config.defaults import StorefrontConfig
from .config.loader import ConfigLoader
from .logging.config import get_logger
from .persistence.kv_store import SqliteKeyValueStorage
from .persistence.purchase_store import KeyValueStorage, PersistentPurchaseStore
from .presentation.modals import ClickRegion, Focusable, FocusTracker, ModalController, Overlay
from .presentation.notifier import ToastNotifier
from .presentation.sync import PresentationSync
from .state.machine import CHECKOUT_OVERLAY, UnlockStateMachine
from .state.models import CheckoutOutcome, UnlockState
from .state.payment import CancellationToken

logger = get_logger(__name__)

PURCHASES_OVERLAY = "purchases"


class Storefront:
    """
    Main coordinator for the storefront engine.

    Exposes the user-facing actions (load, checkout, pay, view purchases,
    keyboard and click dismissal) over headless view state.
    """

    def __init__(
        self,
        config: Optional[StorefrontConfig] = None,
        storage: Optional[KeyValueStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        focus: Optional[FocusTracker] = None,
        clock: Optional[Callable[[], float]] = None
    ) -> None:
        """Initialize the storefront from configuration."""
        self.logger = logger
        self.config = config or ConfigLoader.create().load()

        if storage is None:
            storage = SqliteKeyValueStorage(self.config.persistence.db_path)
        self.store = PersistentPurchaseStore(storage, key=self.config.persistence.storage_key)

        self.index = CatalogIndex()
        self.loader = CatalogLoader(
            self.index,
            base_url=self.config.catalog.base_url,
            timeout_seconds=self.config.catalog.timeout_seconds,
            transport=transport,
        )

        self.modals = ModalController(focus or FocusTracker())
        self.modals.register(Overlay(
            overlay_id=CHECKOUT_OVERLAY,
            dismiss_control=Focusable("payment-close"),
        ))
        self.purchases_overlay = self.modals.register(Overlay(
            overlay_id=PURCHASES_OVERLAY,
            dismiss_control=Focusable("purchases-close"),
            title="My purchases",
        ))

        self.notifier = ToastNotifier(self.config.notification.visible_seconds, clock=clock)
        self.presentation = PresentationSync(
            self.index,
            is_unlocked=self._is_unlocked,
            catalog_params=self.config.catalog,
            payment_params=self.config.payment,
        )
        self.machine = UnlockStateMachine(
            store=self.store,
            presentation=self.presentation,
            notifier=self.notifier,
            modals=self.modals,
            payment_params=self.config.payment,
        )

        self.sections = [CatalogSection(**asdict(section)) for section in self.config.sections]
        self.purchases_overlay.content = self.presentation.render_purchases(self.machine.unlocked_ids())

        self.logger.info(
            "Storefront initialized",
            sections=len(self.sections),
            unlocked=len(self.machine.unlocked_ids())
        )

    def _is_unlocked(self, item_id: str) -> bool:
        return self.machine.is_unlocked(item_id)

    async def load_catalog(self, sections: Optional[list[CatalogSection]] = None) -> list[SectionResult]:
        """Load every section concurrently, rendering each as it settles."""
        results = await self.loader.load_all(
            sections if sections is not None else self.sections,
            on_settled=self.presentation.render_section,
        )
        self.presentation.render_purchases(self.machine.unlocked_ids())
        return results

    def item(self, item_id: str) -> Item:
        item = self.index.get(item_id)
        if item is None:
            raise KeyError(f"Item {item_id!r} is not in the catalog")
        return item

    def checkout(self, item_id: str) -> CheckoutOutcome:
        """User activated the checkout control on a card."""
        return self.machine.begin_checkout(self.item(item_id))

    async def pay(self, item_id: str, token: Optional[CancellationToken] = None) -> UnlockState:
        """User activated the simulate-payment action in the checkout overlay."""
        return await self.machine.simulate_payment(self.item(item_id), token)

    def open_purchases(self) -> Overlay:
        """Refresh and show the purchases summary overlay."""
        self.presentation.render_purchases(self.machine.unlocked_ids())
        return self.modals.open(PURCHASES_OVERLAY, self.purchases_overlay.dismiss_control)

    def press_key(self, key: str) -> bool:
        return self.modals.handle_key(key)

    def click(self, overlay_id: str, region: ClickRegion) -> bool:
        return self.modals.handle_click(overlay_id, region)

    def close(self, overlay_id: str) -> bool:
        return self.modals.close(overlay_id)
