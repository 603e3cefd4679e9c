"""
Error types raised by the Folio content pipeline.

Load-time errors (MalformedDocument, DuplicateSlug) abort the build.
Lookup-time errors (NotFound, InvalidPageNumber) are raised at the route
boundary and mapped to "not found" by whoever renders the site.
"""

from typing import Iterable, Optional


class FolioError(Exception):
    """Base class for all Folio errors."""


class MalformedDocument(FolioError, ValueError):
    """A source document is missing required metadata or has an invalid value."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed document {path}: {reason}")


class DuplicateSlug(FolioError, ValueError):
    """Two or more documents resolve to the same slug."""

    def __init__(self, slug: str, paths: Iterable[Optional[str]]):
        self.slug = slug
        self.paths = tuple(p for p in paths if p)
        sources = ', '.join(self.paths) or 'unknown sources'
        super().__init__(f"Duplicate slug '{slug}' from: {sources}")


class NotFound(FolioError, LookupError):
    """No resource matches the requested key."""

    def __init__(self, resource: str, key):
        self.resource = resource
        self.key = key
        super().__init__(f"No {resource} found for {key!r}")


class InvalidPageNumber(FolioError, ValueError):
    """A page number is not a positive integer."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid page number: {value!r}")
