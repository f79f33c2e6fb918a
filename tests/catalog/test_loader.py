"""Tests for concurrent catalog loading and the catalog index."""

import asyncio

import httpx
import pytest

from storefront_app.catalog.index import CatalogIndex
from storefront_app.catalog.loader import CatalogLoader
from storefront_app.catalog.models import CatalogSection, Item, SectionStatus

BASE_URL = "http://catalog.test"


def load(loader, sections, on_settled=None):
    return asyncio.run(loader.load_all(sections, on_settled=on_settled))


class TestCatalogIndex:
    """Test CatalogIndex behaviour."""

    def test_register_and_get(self):
        """Registered items are retrievable by identifier."""
        index = CatalogIndex()
        index.register(Item(id="a", name="A"))

        assert "a" in index
        assert index.get("a").name == "A"
        assert index.get("missing") is None
        assert len(index) == 1

    def test_last_write_wins(self):
        """A later registration replaces an earlier one with the same id."""
        index = CatalogIndex()
        index.register(Item(id="a", name="First"), section="one")
        index.register(Item(id="a", name="Second"), section="two")

        assert index.get("a").name == "Second"
        assert len(index) == 1


class TestCatalogLoader:
    """Test CatalogLoader section handling."""

    @pytest.fixture(autouse=True)
    def setup_loader(self, make_transport):
        self.index = CatalogIndex()
        self.make_transport = make_transport

    def make_loader(self, routes):
        return CatalogLoader(self.index, base_url=BASE_URL, transport=self.make_transport(routes))

    def test_loads_sections_and_populates_index(self, catalog_routes):
        """Successful sections register their items."""
        loader = self.make_loader(catalog_routes)
        results = load(loader, [
            CatalogSection(name="courses", resource="/courses.json"),
            CatalogSection(name="ebooks", resource="/ebooks.json"),
        ])

        assert [r.status for r in results] == [SectionStatus.LOADED, SectionStatus.LOADED]
        assert results[0].title == "Video Courses"
        assert results[0].item_count == 2
        assert results[0].dropped_count == 1
        assert set(self.index) == {"course-a", "course-b", "ebook-c"}

    def test_empty_section_is_not_an_error(self):
        """A successful fetch with zero items is EMPTY."""
        loader = self.make_loader({"/empty.json": {"items": []}})
        [result] = load(loader, [CatalogSection(name="empty", resource="/empty.json")])

        assert result.status == SectionStatus.EMPTY
        assert result.error is None

    @pytest.mark.parametrize("route", [
        httpx.Response(500, text="boom"),
        httpx.Response(404),
        httpx.Response(200, text="{not json"),
        httpx.ConnectError("connection refused"),
    ])
    def test_failure_is_isolated_to_its_section(self, catalog_routes, route):
        """One section failing leaves the other section's outcome unchanged."""
        routes = dict(catalog_routes)
        routes["/broken.json"] = route
        loader = self.make_loader(routes)

        results = load(loader, [
            CatalogSection(name="broken", resource="/broken.json"),
            CatalogSection(name="ebooks", resource="/ebooks.json"),
        ])

        assert results[0].status == SectionStatus.ERRORED
        assert results[0].error
        assert results[1].status == SectionStatus.LOADED
        assert results[1].item_count == 1
        assert "ebook-c" in self.index

    def test_status_code_recorded(self):
        """Non-2xx responses carry the status code in the result context."""
        loader = self.make_loader({"/gone.json": httpx.Response(410)})
        [result] = load(loader, [CatalogSection(name="gone", resource="/gone.json")])

        assert result.context == {"status_code": 410}
        assert result.error == "Status 410"

    def test_section_without_resource_is_skipped(self):
        """Sections with no resource are not fetched."""
        loader = self.make_loader({})
        [result] = load(loader, [CatalogSection(name="static")])

        assert result.status == SectionStatus.SKIPPED

    def test_on_settled_called_for_every_section(self, catalog_routes):
        """The settle callback sees every section exactly once."""
        settled = []
        loader = self.make_loader(catalog_routes)

        load(loader, [
            CatalogSection(name="courses", resource="/courses.json"),
            CatalogSection(name="missing", resource="/missing.json"),
        ], on_settled=lambda result: settled.append((result.section.name, result.status)))

        assert sorted(settled) == [
            ("courses", SectionStatus.LOADED),
            ("missing", SectionStatus.ERRORED),
        ]

    def test_items_registered_before_callback(self, catalog_routes):
        """Items are in the index by the time their section is reported."""
        seen = []
        loader = self.make_loader(catalog_routes)

        load(
            loader,
            [CatalogSection(name="ebooks", resource="/ebooks.json")],
            on_settled=lambda result: seen.append("ebook-c" in self.index),
        )

        assert seen == [True]

    def test_fetches_run_concurrently(self):
        """Both requests are in flight before either completes."""
        in_flight = 0
        peak = 0

        class SlowTransport(httpx.AsyncBaseTransport):
            async def handle_async_request(self, request):
                nonlocal in_flight, peak
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1
                return httpx.Response(200, json={"items": [{"id": request.url.path}]})

        loader = CatalogLoader(self.index, base_url=BASE_URL, transport=SlowTransport())
        load(loader, [
            CatalogSection(name="one", resource="/one.json"),
            CatalogSection(name="two", resource="/two.json"),
        ])

        assert peak == 2
