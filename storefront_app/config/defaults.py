"""Default configuration parameters for the storefront engine."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class SectionConfig:
    """One catalog section and the endpoint it loads from."""
    name: str
    resource: Optional[str] = None
    title: str = ""
    description: str = ""


@dataclass(frozen=True)
class CatalogParams:
    """Catalog fetching and card rendering parameters."""
    base_url: str = ""
    timeout_seconds: float = 10.0
    fallback_thumbnail: str = (
        "https://images.unsplash.com/photo-1521737604893-d14cc237f11d"
        "?auto=format&fit=crop&w=1200&q=80"
    )
    default_summary: str = (
        "Detailed description coming soon. "
        "Update the JSON file to tailor this listing."
    )


@dataclass(frozen=True)
class PaymentParams:
    """Simulated payment parameters."""
    price: int = 199                                  # Fixed price for every item
    currency: str = "INR"
    simulation_delay_seconds: float = 1.5             # Pending -> Unlocked delay
    provider_label: str = "PhonePe"
    qr_endpoint: str = "https://api.qrserver.com/v1/create-qr-code/"
    qr_size: int = 160


@dataclass(frozen=True)
class NotificationParams:
    """Transient notification parameters."""
    visible_seconds: float = 3.2


@dataclass(frozen=True)
class PersistenceParams:
    """Local purchase persistence parameters."""
    db_path: str = "purchases.db"
    storage_key: str = "open-source-unlocked-items"


@dataclass(frozen=True)
class StorefrontConfig:
    """Complete storefront configuration."""
    catalog: CatalogParams
    payment: PaymentParams
    notification: NotificationParams
    persistence: PersistenceParams
    sections: list[SectionConfig] = field(default_factory=list)


def get_default_config() -> StorefrontConfig:
    """Get the default configuration instance."""
    return StorefrontConfig(
        catalog=CatalogParams(),
        payment=PaymentParams(),
        notification=NotificationParams(),
        persistence=PersistenceParams(),
        sections=[],
    )
