"""
Catalog payload parsers.

Converts the JSON objects returned by section endpoints into immutable
``Item`` records. Parsing is tolerant: malformed fields fall back to empty
values and items without an identifier are dropped rather than reported.
"""

from typing import Any, Optional

from .models import DownloadDescriptor, Item

PLACEHOLDER_LINK = "#"
LEGACY_DOWNLOAD_LABEL = "Download from Terabox"


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _parse_meta(raw: Any) -> tuple[tuple[str, Optional[str]], ...]:
    if not isinstance(raw, dict):
        return ()
    return tuple(
        (str(label), _optional_text(value) if value else None)
        for label, value in raw.items()
    )


def _parse_highlights(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(str(point) for point in raw if point is not None)


def _parse_downloads(raw: Any) -> tuple[DownloadDescriptor, ...]:
    if not isinstance(raw, list):
        return ()

    downloads = []
    for entry in raw:
        if not isinstance(entry, dict) or not entry.get("url"):
            continue
        downloads.append(DownloadDescriptor(
            url=str(entry["url"]),
            label=str(entry.get("label") or "Download"),
        ))
    return tuple(downloads)


def parse_item(payload: Any) -> Optional[Item]:
    """
    Parse one item object from a section payload.

    Returns:
        The parsed Item, or None when the payload has no usable identifier
    """
    if not isinstance(payload, dict):
        return None

    item_id = payload.get("id")
    if not item_id:
        return None

    return Item(
        id=str(item_id),
        name=str(payload.get("name") or ""),
        summary=_optional_text(payload.get("summary")),
        thumbnail=_optional_text(payload.get("thumbnail")) or None,
        type_label=_optional_text(payload.get("typeLabel")) or None,
        tag=_optional_text(payload.get("tag")) or None,
        meta=_parse_meta(payload.get("meta")),
        highlights=_parse_highlights(payload.get("highlights")),
        downloads=_parse_downloads(payload.get("downloads")),
        download_link=_optional_text(payload.get("downloadLink")) or None,
    )


def parse_section_payload(payload: Any) -> tuple[Optional[str], Optional[str], list[Item], int]:
    """
    Parse a whole section payload.

    A payload that is not an object, or whose ``items`` is not an array, is
    an empty section rather than an error.

    Returns:
        Tuple of (title, description, items, dropped item count)
    """
    if not isinstance(payload, dict):
        return None, None, [], 0

    title = _optional_text(payload.get("title")) or None
    description = _optional_text(payload.get("description")) or None

    raw_items = payload.get("items")
    if not isinstance(raw_items, list):
        return title, description, [], 0

    items = []
    dropped = 0
    for raw in raw_items:
        item = parse_item(raw)
        if item is None:
            dropped += 1
            continue
        items.append(item)

    return title, description, items, dropped


def resolve_download_link(item: Item) -> str:
    """Primary download URL: first structured download, then the legacy link."""
    if item.downloads:
        return item.downloads[0].url
    return item.download_link or PLACEHOLDER_LINK


def download_links(item: Item) -> tuple[DownloadDescriptor, ...]:
    """Every download offered on the success view."""
    if item.downloads:
        return item.downloads
    return (DownloadDescriptor(url=resolve_download_link(item), label=LEGACY_DOWNLOAD_LABEL),)
