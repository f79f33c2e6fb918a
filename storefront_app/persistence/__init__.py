"""
Purchase persistence module.

Durable set of unlocked item identifiers on top of a local key-value store.
"""
