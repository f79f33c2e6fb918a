"""
Catalog data models.

Items are immutable once parsed; a section result captures how one catalog
section settled so the presentation layer can render it independently of
every other section.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class DownloadDescriptor:
    """One download entry exposed after an item is unlocked."""
    url: str
    label: str = "Download"


@dataclass(frozen=True)
class Item:
    """A single purchasable catalog entry."""

    id: str
    name: str = ""
    summary: Optional[str] = None
    thumbnail: Optional[str] = None
    type_label: Optional[str] = None
    tag: Optional[str] = None

    # Ordered (label, display value) pairs; values may be absent
    meta: tuple[tuple[str, Optional[str]], ...] = ()
    highlights: tuple[str, ...] = ()

    # Structured downloads win over the single legacy link
    downloads: tuple[DownloadDescriptor, ...] = ()
    download_link: Optional[str] = None


@dataclass(frozen=True)
class CatalogSection:
    """A named rendering region backed by one JSON resource."""
    name: str
    resource: Optional[str] = None
    title: str = ""
    description: str = ""


class SectionStatus(str, Enum):
    """How a catalog section settled."""
    LOADED = "loaded"
    EMPTY = "empty"
    ERRORED = "errored"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class SectionResult:
    """Outcome of loading one catalog section."""

    section: CatalogSection
    status: SectionStatus
    items: tuple[Item, ...] = ()

    # Title/description supplied by the payload, if any
    title: Optional[str] = None
    description: Optional[str] = None

    dropped_count: int = 0
    error: Optional[str] = None
    context: dict = field(default_factory=dict)

    @property
    def item_count(self) -> int:
        return len(self.items)
