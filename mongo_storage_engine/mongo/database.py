"""Connect to the MongoDB database."""

from __future__ import annotations

from os import getenv
from typing import TYPE_CHECKING

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import ConfigurationError, ConnectionFailure, OperationFailure

from mongo_storage_engine.common.exceptions import StorageConnectionError
from mongo_storage_engine.common.logger import LOGGER

if TYPE_CHECKING or bool(getenv("MKDOCS_BUILD", "")):  # pragma: no cover
    from mongo_storage_engine.common.config import StorageEngineConfig


def create_client(config: StorageEngineConfig) -> AsyncIOMotorClient:
    """Create a MongoDB motor client from the configuration.

    No connection is made before the first operation, except for the DNS lookup of
    `mongodb+srv://` hosts.

    Parameters:
        config: The storage engine configuration.

    Returns:
        The MongoDB motor client.

    """
    return AsyncIOMotorClient(config.mongo_uri, **config.client_options())


async def connect(config: StorageEngineConfig) -> AsyncIOMotorClient:
    """Create a MongoDB motor client and complete the handshake with the server.

    The handshake is a `ping` command, which fails if no server can be selected
    within the configured timeouts or if authentication is rejected.
    There is no retry.

    Credentials are masked in all log and error messages.

    Parameters:
        config: The storage engine configuration.

    Raises:
        StorageConnectionError: If the address cannot be resolved, or if the server
            is unreachable or rejects the handshake.

    Returns:
        The connected MongoDB motor client.

    """
    client: AsyncIOMotorClient | None = None

    try:
        client = create_client(config)
        await client.admin.command("ping")
    except (ConfigurationError, ConnectionFailure, OperationFailure) as exc:
        if client is not None:
            client.close()
        LOGGER.error(
            "Could not connect to MongoDB at %s: %s", config.redacted_uri, exc
        )
        raise StorageConnectionError(
            f"Could not connect to MongoDB database {config.database!r} at "
            f"{config.redacted_uri}: {exc}"
        ) from exc

    LOGGER.info("Using: Real MongoDB (motor) at %s", config.redacted_uri)
    LOGGER.info("Database: %s", config.database)

    return client
