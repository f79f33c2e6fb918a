"""
Unlock state data models.

UnlockState is derived per item: Unlocked comes from membership in the
persisted purchase set, CheckoutOpen and Pending are transient and never
stored, and everything else is Locked.
"""

from enum import Enum


class UnlockState(str, Enum):
    """Per-item unlock lifecycle states."""
    LOCKED = "locked"
    CHECKOUT_OPEN = "checkout_open"
    PENDING = "pending"
    UNLOCKED = "unlocked"


class CheckoutOutcome(str, Enum):
    """Result of asking to check out an item."""
    OPENED = "opened"
    ALREADY_UNLOCKED = "already_unlocked"
    IN_PROGRESS = "in_progress"


TRANSIENT_STATES = frozenset({UnlockState.CHECKOUT_OPEN, UnlockState.PENDING})
