"""
Server-side failures raised by the store and storage layers.
"""

from __future__ import annotations


class BlogBackendError(Exception):
    """Base class for failures that surface to clients as HTTP 500."""


class StoreError(BlogBackendError):
    """The post store driver failed (connectivity, malformed id, ...)."""


class StorageError(BlogBackendError):
    """Writing or reading an uploaded file failed."""
