"""
Presentation sync.

Reconciles unlock state with rendered cards and the purchases summary. Cards
are registered in an identifier-to-handle map when a section renders, so an
update is a dictionary lookup; an identifier with no rendered card yet is a
silent no-op because unlocks can race section loads.
"""

from collections.abc import Callable, Iterable
from typing import Optional

from ..catalog.index import CatalogIndex
from ..catalog.models import Item, SectionResult, SectionStatus
from ..catalog.parsers import resolve_download_link
from ..config.defaults import CatalogParams, PaymentParams
from ..logging.config import get_sync_logger
from .views import (
    EMPTY_MESSAGE,
    ERROR_COUNT_LABEL,
    ERROR_MESSAGE,
    NO_PURCHASES_MESSAGE,
    SYNCING_PURCHASES_MESSAGE,
    CardView,
    PurchasesSummaryView,
    SectionView,
    SummaryEntry,
    count_label,
    format_price,
)

logger = get_sync_logger(__name__)

CHECKOUT_LABEL = "Pay {price} & unlock"
UNLOCKED_LABEL = "Already unlocked"


class PresentationSync:
    """Owns section views, card handles and the purchases summary."""

    def __init__(
        self,
        index: CatalogIndex,
        is_unlocked: Callable[[str], bool],
        catalog_params: Optional[CatalogParams] = None,
        payment_params: Optional[PaymentParams] = None
    ):
        self.index = index
        self.is_unlocked = is_unlocked
        self.catalog_params = catalog_params or CatalogParams()
        self.payment_params = payment_params or PaymentParams()
        self.logger = logger

        self.sections: dict[str, SectionView] = {}
        self.purchases = PurchasesSummaryView()
        self._cards: dict[str, list[CardView]] = {}

    @property
    def price_label(self) -> str:
        return format_price(self.payment_params.price, self.payment_params.currency)

    def section(self, name: str) -> Optional[SectionView]:
        return self.sections.get(name)

    def card(self, item_id: str) -> Optional[CardView]:
        """Most recently rendered card for item_id, if any."""
        cards = self._cards.get(item_id)
        return cards[-1] if cards else None

    def render_section(self, result: SectionResult) -> SectionView:
        """Render one settled section without touching any other section."""
        section = result.section
        view = SectionView(
            name=section.name,
            title=section.title,
            description=section.description,
        )

        previous = self.sections.get(section.name)
        if previous is not None:
            self._forget_cards(previous)

        if result.status == SectionStatus.ERRORED:
            view.errored = True
            view.count_label = ERROR_COUNT_LABEL
            view.message = ERROR_MESSAGE
        elif result.status == SectionStatus.SKIPPED:
            pass
        else:
            if result.title:
                view.title = result.title
            if result.description:
                view.description = result.description

            if result.items:
                view.cards = [self._build_card(item) for item in result.items]
                for card in view.cards:
                    self._cards.setdefault(card.item_id, []).append(card)
            else:
                view.message = EMPTY_MESSAGE
            view.count_label = count_label(len(result.items))

        self.sections[section.name] = view

        self.logger.debug(
            "Rendered catalog section",
            section=section.name,
            status=result.status.value,
            cards=len(view.cards)
        )
        return view

    def set_unlocked(self, item_id: str, unlocked: bool) -> bool:
        """
        Update every card rendered for item_id.

        Returns:
            True if at least one card was updated, False if none is rendered
        """
        cards = self._cards.get(item_id)
        if not cards:
            self.logger.debug("No rendered card for item", item_id=item_id)
            return False

        for card in cards:
            self._apply_purchase_state(card, unlocked)
        return True

    def render_purchases(self, unlocked_ids: Iterable[str]) -> PurchasesSummaryView:
        """Rebuild the purchases summary in place from unlocked items present in the index."""
        unlocked_ids = list(unlocked_ids)
        summary = self.purchases
        summary.entries = []
        summary.message = None

        if not unlocked_ids:
            summary.message = NO_PURCHASES_MESSAGE
        else:
            for item_id in unlocked_ids:
                item = self.index.get(item_id)
                if item is None:
                    continue
                summary.entries.append(SummaryEntry(
                    item_id=item.id,
                    name=item.name,
                    url=resolve_download_link(item),
                ))
            if not summary.entries:
                summary.message = SYNCING_PURCHASES_MESSAGE

        return summary

    def _forget_cards(self, view: SectionView) -> None:
        for card in view.cards:
            remaining = [c for c in self._cards.get(card.item_id, []) if c is not card]
            if remaining:
                self._cards[card.item_id] = remaining
            else:
                self._cards.pop(card.item_id, None)

    def _build_card(self, item: Item) -> CardView:
        card = CardView(
            item_id=item.id,
            name=item.name,
            summary=item.summary if item.summary is not None else self.catalog_params.default_summary,
            thumbnail=item.thumbnail or self.catalog_params.fallback_thumbnail,
            price_label=self.price_label,
            download_url=resolve_download_link(item),
            type_label=item.type_label,
            tag=item.tag,
            meta=[(label, value) for label, value in item.meta if value],
            highlights=list(item.highlights),
        )
        self._apply_purchase_state(card, self.is_unlocked(item.id))
        return card

    def _apply_purchase_state(self, card: CardView, unlocked: bool) -> None:
        if unlocked:
            card.checkout_label = UNLOCKED_LABEL
            card.checkout_enabled = False
            card.download_visible = True
        else:
            card.checkout_label = CHECKOUT_LABEL.format(price=self.price_label)
            card.checkout_enabled = True
            card.download_visible = False
