"""In-memory catalog index keyed by item identifier."""

from collections.abc import Iterator
from typing import Optional

from ..logging.config import get_logger
from .models import Item

logger = get_logger(__name__)


class CatalogIndex:
    """
    Mapping from item identifier to item record.

    Only the catalog loader registers items; everything else reads. A later
    registration under an existing identifier replaces the earlier item.
    """

    def __init__(self) -> None:
        self._items: dict[str, Item] = {}

    def register(self, item: Item, section: Optional[str] = None) -> None:
        if item.id in self._items:
            logger.debug(
                "Catalog item replaced by later registration",
                item_id=item.id,
                section=section
            )
        self._items[item.id] = item

    def get(self, item_id: str) -> Optional[Item]:
        return self._items.get(item_id)

    def items(self) -> list[Item]:
        return list(self._items.values())

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)
