"""Pytest fixtures and configuration for all tests"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from mongomock_motor import AsyncMongoMockClient

    from mongo_storage_engine import MongoStorageEngine


# UTILITY FUNCTIONS


def get_test_config(top_dir: Path | str) -> dict:
    """Utility function for getting and parsing the test config."""
    top_dir = Path(top_dir).resolve()

    test_config: dict = json.loads(
        (top_dir / "tests" / "static" / "test_config.json").read_bytes()
    )

    assert isinstance(test_config, dict), "Test config is not a dict!"

    return test_config


def get_test_resources(top_dir: Path | str) -> list[dict]:
    """Utility function for getting the test resources."""
    data_file = Path(top_dir).resolve() / "tests" / "static" / "test_resources.json"

    assert data_file.exists(), f"Test data file at {data_file} does not seem to exist!"

    return json.loads(data_file.read_bytes())


# PYTEST FIXTURES AND CONFIGURATION


def pytest_configure(config):  # noqa: ARG001
    """Method that runs before pytest collects tests so no modules are imported"""
    cwd = Path(__file__).parent.resolve()
    os.environ["MONGO_STORAGE_ENGINE_CONFIG_FILE"] = str(
        cwd / "static/test_config.json"
    )


@pytest.fixture(scope="session")
def top_dir() -> Path:
    """Return Path instance for the repository's top (root) directory"""
    return Path(__file__).parent.parent.resolve()


@pytest.fixture(scope="session")
def test_config(top_dir: Path) -> dict:
    """Return test config dict"""
    return get_test_config(top_dir)


@pytest.fixture()
def test_resources(top_dir: Path) -> list[dict]:
    """Return a fresh copy of the test resources"""
    return get_test_resources(top_dir)


@pytest.fixture()
def mongo_client() -> AsyncMongoMockClient:
    """Return an in-memory mock of the motor client"""
    from mongomock_motor import AsyncMongoMockClient

    return AsyncMongoMockClient()


@pytest.fixture()
async def engine(
    mongo_client: AsyncMongoMockClient,
) -> AsyncGenerator[MongoStorageEngine, None]:
    """Return an initialized storage engine with an empty collection"""
    from mongo_storage_engine import MongoStorageEngine

    storage_engine = MongoStorageEngine()
    await storage_engine.init(client=mongo_client)
    try:
        yield storage_engine
    finally:
        storage_engine.close()


@pytest.fixture()
async def populated_engine(
    engine: MongoStorageEngine, test_resources: list[dict]
) -> MongoStorageEngine:
    """Return an initialized storage engine with the test resources stored"""
    await engine.collection.collection.insert_many(
        [dict(resource) for resource in test_resources]
    )
    return engine
