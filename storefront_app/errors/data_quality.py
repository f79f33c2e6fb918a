"""
Catalog data error classifications.

These exceptions describe why a single catalog section could not be
populated. They never escape the catalog loader: each one is converted
into an errored section result.
"""

from typing import Optional, Dict, Any


class CatalogDataError(Exception):
    """Base class for catalog section failures that are handled per section."""

    def __init__(self, message: str, resource: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.resource = resource
        self.context = context or {}
        self.recoverable = True


class CatalogFetchError(CatalogDataError):
    """The section endpoint could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class MalformedCatalogError(CatalogDataError):
    """The section endpoint answered but the body is not valid JSON."""

    def __init__(self, message: str, raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
