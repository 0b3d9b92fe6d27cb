"""
Pydantic models and storage engine contract types

The host storage engine contract and the data models returned by the engine can be
found in this module.
"""
from __future__ import annotations

from .engine import (
    StorageEngine,
    StorageFunction,
    StorageFunctionGroup,
    StorageFunctionType,
    StorageType,
)
from .resources import MigrationSummary

__all__ = (
    "MigrationSummary",
    "StorageEngine",
    "StorageFunction",
    "StorageFunctionGroup",
    "StorageFunctionType",
    "StorageType",
)
