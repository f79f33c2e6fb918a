"""
Headless view models.

These are the render handles a UI layer binds to. They are mutable on
purpose: presentation sync updates them in place instead of rebuilding.
"""

from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import quote

from ..catalog.models import DownloadDescriptor, Item
from ..catalog.parsers import download_links, resolve_download_link
from ..config.defaults import PaymentParams

CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$", "EUR": "€", "GBP": "£"}

ERROR_COUNT_LABEL = "Error"
ERROR_MESSAGE = (
    "Unable to load this catalog section right now. "
    "Please refresh or update the JSON endpoint."
)
EMPTY_MESSAGE = (
    "No items are configured for this section yet. "
    "Add products to the JSON file to populate the catalog."
)
NO_PURCHASES_MESSAGE = "You haven’t unlocked any items during this session yet."
SYNCING_PURCHASES_MESSAGE = (
    "Your unlocked items are syncing. "
    "Please refresh once the catalog JSON finishes loading."
)


def format_price(amount: Union[int, float], currency: str = "INR") -> str:
    """Format a whole-unit price with its currency symbol, e.g. ₹199."""
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), f"{currency.upper()} ")
    return f"{symbol}{amount:,.0f}"


def count_label(count: int) -> str:
    return f"{count} item{'s' if count != 1 else ''}"


@dataclass
class CardView:
    """Render handle for one catalog card."""

    item_id: str
    name: str
    summary: str
    thumbnail: str
    price_label: str
    download_url: str
    type_label: Optional[str] = None
    tag: Optional[str] = None
    meta: list[tuple[str, str]] = field(default_factory=list)
    highlights: list[str] = field(default_factory=list)

    # Purchase-dependent state
    checkout_label: str = ""
    checkout_enabled: bool = True
    download_visible: bool = False


@dataclass
class SectionView:
    """Render handle for one catalog section region."""

    name: str
    title: str = ""
    description: str = ""
    count_label: str = ""
    message: Optional[str] = None
    errored: bool = False
    cards: list[CardView] = field(default_factory=list)


@dataclass(frozen=True)
class SummaryEntry:
    """One row of the purchases summary."""
    item_id: str
    name: str
    url: str


@dataclass
class PurchasesSummaryView:
    """Render handle for the "my purchases" overlay body."""
    entries: list[SummaryEntry] = field(default_factory=list)
    message: Optional[str] = NO_PURCHASES_MESSAGE


@dataclass(frozen=True)
class CheckoutView:
    """Checkout overlay body shown while an item's checkout is open."""
    item_id: str
    title: str
    name: str
    summary: str
    price_label: str
    qr_image_url: str
    pay_label: str
    cancel_label: str = "Cancel"


@dataclass(frozen=True)
class ProcessingView:
    """Indeterminate view shown while the simulated payment runs. No cancel action."""
    item_id: str
    heading: str = "Processing test payment…"


@dataclass(frozen=True)
class SuccessView:
    """Checkout overlay body after an item unlocks."""
    item_id: str
    name: str
    downloads: tuple[DownloadDescriptor, ...]
    heading: str = "Payment successful"
    close_label: str = "Close & continue browsing"


def qr_image_url(endpoint: str, size: int, data: str) -> str:
    """Placeholder QR image for the mock transaction, keyed off a download URL."""
    return f"{endpoint}?size={size}x{size}&data={quote(data, safe='')}"


def build_checkout_view(item: Item, payment: PaymentParams) -> CheckoutView:
    return CheckoutView(
        item_id=item.id,
        title=f"Checkout: {item.name}",
        name=item.name,
        summary=item.summary or "",
        price_label=format_price(payment.price, payment.currency),
        qr_image_url=qr_image_url(payment.qr_endpoint, payment.qr_size, resolve_download_link(item)),
        pay_label=f"Simulate {payment.provider_label} payment",
    )


def build_success_view(item: Item) -> SuccessView:
    return SuccessView(item_id=item.id, name=item.name, downloads=download_links(item))
