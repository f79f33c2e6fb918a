#!/usr/bin/env python3
"""
Basic Usage Example - Storefront Engine

This script walks through a storefront session against the sample catalog
in data/, served from disk through an in-process HTTP transport. It shows how to:
- Initialize the storefront from configuration
- Load catalog sections concurrently
- Check out and pay for an item
- Inspect cards, the purchases summary and the success view

Run: python examples/basic_usage.py
"""

import asyncio
import sys
import tempfile
from pathlib import Path

import httpx

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from storefront_app.config.loader import ConfigLoader
from storefront_app.engine import Storefront
from storefront_app.logging.config import configure_logging
from storefront_app.presentation.modals import Focusable, FocusTracker
from storefront_app.state.machine import CHECKOUT_OVERLAY


def local_catalog_transport(root: Path) -> httpx.MockTransport:
    """Serve request paths as files under root."""
    def handler(request: httpx.Request) -> httpx.Response:
        path = root / request.url.path.lstrip("/")
        if not path.is_file():
            return httpx.Response(404, text="not found")
        return httpx.Response(200, content=path.read_bytes(),
                              headers={"content-type": "application/json"})

    return httpx.MockTransport(handler)


def print_sections(storefront: Storefront) -> None:
    for view in storefront.presentation.sections.values():
        print(f"\n📦 {view.title} ({view.count_label})")
        if view.message:
            print(f"   {view.message}")
        for card in view.cards:
            state = "🔓" if card.download_visible else "🔒"
            print(f"   {state} {card.name} - {card.checkout_label}")


async def run_session(storefront: Storefront) -> None:
    await storefront.load_catalog()
    print_sections(storefront)

    item_id = "python-foundations"
    print(f"\n🛒 Checking out {item_id}...")
    outcome = storefront.checkout(item_id)
    print(f"   Outcome: {outcome.value}")
    print(f"   Overlay: {storefront.modals.overlay(CHECKOUT_OVERLAY).title}")

    print("💳 Simulating payment...")
    state = await storefront.pay(item_id)
    print(f"   State: {state.value}")
    print(f"   Notice: {storefront.notifier.current}")

    success = storefront.modals.overlay(CHECKOUT_OVERLAY).content
    print(f"\n✅ {success.heading}")
    for download in success.downloads:
        print(f"   {download.label}: {download.url}")

    storefront.press_key("Escape")

    print("\n🧾 My purchases")
    storefront.open_purchases()
    summary = storefront.purchases_overlay.content
    for entry in summary.entries:
        print(f"   {entry.name} → {entry.url}")

    print("\n🔁 Checking out the same item again...")
    print(f"   Outcome: {storefront.checkout(item_id).value}")
    print(f"   Notice: {storefront.notifier.current}")


def main():
    configure_logging(level="WARNING")

    with tempfile.TemporaryDirectory() as tmp:
        config = ConfigLoader.create().load({
            "payment": {"simulation_delay_seconds": 0.2},
            "persistence": {"db_path": str(Path(tmp) / "purchases.db")},
        })
        storefront = Storefront(
            config=config,
            transport=local_catalog_transport(project_root),
            focus=FocusTracker(active=Focusable("page")),
        )

        print("🚀 Storefront example")
        asyncio.run(run_session(storefront))


if __name__ == "__main__":
    main()
