"""Simulated payment errors."""

from typing import Optional


class PaymentError(Exception):
    """Base class for simulated payment failures."""

    def __init__(self, message: str, item_id: Optional[str] = None):
        super().__init__(message)
        self.item_id = item_id


class PaymentCancelledError(PaymentError):
    """The payment simulation was aborted through its cancellation token."""
