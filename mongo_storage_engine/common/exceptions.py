"""Specific MongoDB Storage Engine Python exceptions."""
from __future__ import annotations

__all__ = (
    "ResourceNotFoundError",
    "StorageConnectionError",
    "StorageEngineError",
    "StorageEngineNotInitialized",
)


class StorageEngineError(Exception):
    """General MongoDB Storage Engine exception."""


class ResourceNotFoundError(StorageEngineError, KeyError):
    """A resource with the requested `resourceId` does not exist in the collection."""

    def __init__(self, resource_id: str) -> None:
        super().__init__(f"Resource {resource_id} not found")
        self.resource_id = resource_id

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes.
        return str(self.args[0])


class StorageConnectionError(StorageEngineError, ConnectionError):
    """Could not connect to, or complete the handshake with, the MongoDB server."""


class StorageEngineNotInitialized(StorageEngineError):
    """The storage engine has not been initialized. Call `init()` first."""
