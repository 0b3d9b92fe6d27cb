"""Everything to do with the MongoDB backend."""
from __future__ import annotations

from .collection import AsyncResourceCollection
from .database import connect, create_client

__all__ = ("AsyncResourceCollection", "connect", "create_client")
