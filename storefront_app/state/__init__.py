"""
Unlock state machine module.

Drives each item through Locked -> CheckoutOpen -> Pending -> Unlocked and is
the only writer of the persisted purchase set.
"""
