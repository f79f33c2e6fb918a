"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict

import httpx
import pytest

from storefront_app.config.defaults import (
    CatalogParams,
    NotificationParams,
    PaymentParams,
    PersistenceParams,
    SectionConfig,
    StorefrontConfig,
)

BASE_URL = "http://catalog.test"


def _mock_transport(routes: Dict[str, Any]) -> httpx.MockTransport:
    """
    Build a mock catalog endpoint.

    Route values may be a JSON-able payload (served with 200), an
    httpx.Response, or an exception instance to raise.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    return httpx.MockTransport(handler)


def _test_config(db_path: str, sections=None, delay: float = 0.01) -> StorefrontConfig:
    """Storefront configuration suitable for tests."""
    return StorefrontConfig(
        catalog=CatalogParams(base_url=BASE_URL, timeout_seconds=5.0),
        payment=PaymentParams(simulation_delay_seconds=delay),
        notification=NotificationParams(),
        persistence=PersistenceParams(db_path=db_path),
        sections=list(sections or []),
    )


@pytest.fixture
def make_transport():
    """Factory for mock catalog endpoints."""
    return _mock_transport


@pytest.fixture
def make_config():
    """Factory for test storefront configurations."""
    return _test_config


@pytest.fixture
def temp_dir():
    """Temporary directory removed after the test."""
    path = tempfile.mkdtemp()
    yield Path(path)
    shutil.rmtree(path)


@pytest.fixture
def sample_item_payload() -> Dict[str, Any]:
    """A fully populated catalog item object."""
    return {
        "id": "course-a",
        "name": "Course A",
        "summary": "Learn the basics.",
        "thumbnail": "https://img.test/a.png",
        "typeLabel": "Course",
        "tag": "Bestseller",
        "meta": {"Duration": "6 weeks", "Level": "Beginner", "Updated": None},
        "highlights": ["Hands-on labs", "Certificate"],
        "downloads": [
            {"url": "https://files.test/a-part1.zip", "label": "Part 1"},
            {"url": "https://files.test/a-part2.zip", "label": "Part 2"},
        ],
    }


@pytest.fixture
def sample_sections() -> list:
    """Two catalog sections backed by the mock endpoint."""
    return [
        SectionConfig(name="courses", resource="/courses.json", title="Courses"),
        SectionConfig(name="ebooks", resource="/ebooks.json", title="E-books"),
    ]


@pytest.fixture
def catalog_routes(sample_item_payload) -> Dict[str, Any]:
    """Mock endpoint payloads for the sample sections."""
    return {
        "/courses.json": {
            "title": "Video Courses",
            "description": "Structured learning paths.",
            "items": [
                sample_item_payload,
                {"id": "course-b", "name": "Course B", "downloadLink": "https://files.test/b.zip"},
                {"name": "No identifier"},
            ],
        },
        "/ebooks.json": {
            "items": [
                {"id": "ebook-c", "name": "E-book C"},
            ],
        },
    }
