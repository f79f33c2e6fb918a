"""
Error classification for the storefront engine.

Catalog data errors are recovered per section, system failures are caught
at the component that owns the resource, and payment errors only surface
when a simulated payment is explicitly cancelled.
"""

from .data_quality import (
    CatalogDataError,
    CatalogFetchError,
    MalformedCatalogError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
    StateTransitionError,
    UnknownOverlayError,
)
from .payment import (
    PaymentError,
    PaymentCancelledError,
)

__all__ = [
    # Catalog Data Errors
    "CatalogDataError",
    "CatalogFetchError",
    "MalformedCatalogError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    "StateTransitionError",
    "UnknownOverlayError",
    # Payment
    "PaymentError",
    "PaymentCancelledError",
]
