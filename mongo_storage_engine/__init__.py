"""
MongoDB Storage Engine

This package is a storage engine exposing a single MongoDB collection of resources
through the GET/PUT/DEL/HAS storage engine contract.
It is built using motor and asyncio.
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "MongoDB Storage Engine developers"
__author_email__ = "storage-engine@example.org"

ENGINE_NAME = "Mongo"
"""The name the engine registers itself with."""

ENGINE_VERSION = __version__
"""The version the engine registers itself with."""

from .engine import MongoStorageEngine  # noqa: E402

__all__ = ("ENGINE_NAME", "ENGINE_VERSION", "MongoStorageEngine")
