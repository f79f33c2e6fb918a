"""
Persistent set of unlocked item identifiers.

The set lives in a single named slot as a JSON array. Reading never fails
upward: a missing, unparsable or non-array slot is an empty purchase set.
Writing never fails upward either: the caller's in-memory set stays
authoritative for the session when the write is rejected.
"""

import json
from collections.abc import Iterable
from typing import Protocol, Optional

from ..errors import PersistenceError
from ..logging.config import get_logger

logger = get_logger(__name__)


class KeyValueStorage(Protocol):
    """Minimal slot storage the purchase store needs."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class PersistentPurchaseStore:
    """Loads and saves the unlocked identifier set."""

    def __init__(self, storage: KeyValueStorage, key: str = "open-source-unlocked-items"):
        self.storage = storage
        self.key = key
        self.logger = logger

    def load(self) -> set[str]:
        """Return the persisted identifier set, empty on any read problem."""
        try:
            raw = self.storage.get(self.key)
        except PersistenceError as e:
            self.logger.warning("Failed to read purchases from storage", key=self.key, error=str(e))
            return set()

        if not raw:
            return set()

        try:
            parsed = json.loads(raw)
        except ValueError as e:
            self.logger.warning("Stored purchases are not valid JSON", key=self.key, error=str(e))
            return set()

        if not isinstance(parsed, list):
            self.logger.warning(
                "Stored purchases are not an array",
                key=self.key,
                stored_type=type(parsed).__name__
            )
            return set()

        return {entry for entry in parsed if isinstance(entry, str)}

    def save(self, item_ids: Iterable[str]) -> bool:
        """
        Persist the identifier set.

        Returns:
            True if the write succeeded, False if it was logged and dropped
        """
        payload = json.dumps(sorted(set(item_ids)))

        try:
            self.storage.set(self.key, payload)
        except PersistenceError as e:
            self.logger.warning("Unable to persist purchases", key=self.key, error=str(e))
            return False

        return True
