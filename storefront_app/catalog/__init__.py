"""
Catalog loading module.

Parses section payloads into immutable items, fetches sections
concurrently and keeps the identifier-to-item index.
"""
