"""The MongoDB storage engine.

[`MongoStorageEngine`][mongo_storage_engine.engine.MongoStorageEngine] exposes a single
MongoDB collection of resources through the storage engine contract, see
[`mongo_storage_engine.models.engine`][mongo_storage_engine.models.engine].

Usage:

```python
from mongo_storage_engine import MongoStorageEngine
from mongo_storage_engine.common.config import StorageEngineConfig

async with MongoStorageEngine(StorageEngineConfig(database="assets")) as engine:
    await engine.put("a", {"v": 1})
    resource = await engine.get("a")
```

"""
from __future__ import annotations

import asyncio
from collections.abc import Mapping
from os import getenv
from typing import TYPE_CHECKING

from mongo_storage_engine import ENGINE_NAME, ENGINE_VERSION
from mongo_storage_engine.common.config import CONFIG
from mongo_storage_engine.common.exceptions import (
    ResourceNotFoundError,
    StorageEngineNotInitialized,
)
from mongo_storage_engine.common.logger import LOGGER
from mongo_storage_engine.common.utils import prepare_resource_data
from mongo_storage_engine.models.engine import (
    StorageEngine,
    StorageFunction,
    StorageFunctionGroup,
    StorageFunctionType,
    StorageType,
)
from mongo_storage_engine.models.resources import MigrationSummary
from mongo_storage_engine.mongo.collection import AsyncResourceCollection
from mongo_storage_engine.mongo.database import connect

if TYPE_CHECKING or bool(getenv("MKDOCS_BUILD", "")):  # pragma: no cover
    from collections.abc import Iterable
    from typing import Any

    from motor.motor_asyncio import AsyncIOMotorClient
    from pydantic import BaseModel

    from mongo_storage_engine.common.config import StorageEngineConfig


__all__ = ("MongoStorageEngine",)


class MongoStorageEngine(StorageEngine):
    """Storage engine for resources in a MongoDB collection.

    Every resource is a MongoDB document identified by its `resourceId` field, with
    the resource data merged in as top-level fields.

    The engine owns a single MongoDB client for its lifetime, from
    [`init()`][mongo_storage_engine.engine.MongoStorageEngine.init] until
    [`close()`][mongo_storage_engine.engine.MongoStorageEngine.close].

    Parameters:
        config: The storage engine configuration. Defaults to the configuration
            loaded from the environment.

    """

    def __init__(self, config: StorageEngineConfig | None = None) -> None:
        super().__init__(
            ENGINE_NAME,
            StorageType.DB,
            StorageFunctionGroup(
                StorageFunction(StorageFunctionType.GET, self.get),
                StorageFunction(StorageFunctionType.PUT, self.put),
                StorageFunction(StorageFunctionType.DEL, self.delete),
                StorageFunction(StorageFunctionType.HAS, self.has),
            ),
            version=ENGINE_VERSION,
        )

        self.config = config if config is not None else CONFIG
        self.client: AsyncIOMotorClient | None = None
        self._collection: AsyncResourceCollection | None = None
        self._owns_client = False

    async def __aenter__(self) -> MongoStorageEngine:
        await self.init()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def collection(self) -> AsyncResourceCollection:
        """The resource collection.

        Raises:
            StorageEngineNotInitialized: If `init()` has not been called.

        """
        if self._collection is None:
            raise StorageEngineNotInitialized(
                f"{self.name} storage engine has not been initialized. Call `init()` "
                "first."
            )
        return self._collection

    async def init(self, client: AsyncIOMotorClient | None = None) -> str:
        """Initialize the database connection.

        If initialization fails, the engine is left as it was and a client created
        here is closed again.

        Parameters:
            client: An existing motor(-compatible) client to use instead of connecting
                with the engine's configuration. It is used as-is, without a
                handshake, and is not closed by the engine.

        Raises:
            StorageConnectionError: If the MongoDB server is unreachable or rejects
                the handshake.
            pymongo.errors.DuplicateKeyError: If `create_key_index` is set and the
                collection already holds resources with the same ID.

        Returns:
            A confirmation message.

        """
        if client is None:
            new_client = await connect(self.config)
            owns_client = True
        else:
            new_client = client
            owns_client = False

        collection = AsyncResourceCollection(
            new_client[self.config.database][self.config.collection]
        )

        if self.config.create_key_index:
            try:
                index = await collection.ensure_key_index()
            except Exception:
                if owns_client:
                    new_client.close()
                raise
            LOGGER.debug("Ensured unique index %r on %s", index, collection)

        self.close()
        self.client, self._owns_client = new_client, owns_client
        self._collection = collection

        LOGGER.info(
            "%s storage engine initialized with collection %r in database %r",
            self.name,
            self.config.collection,
            self.config.database,
        )
        return f"Connected to MongoDB database {self.config.database}"

    def close(self) -> None:
        """Close the MongoDB client, if it was created by the engine."""
        if self.client is not None and self._owns_client:
            self.client.close()
            LOGGER.debug("Closed MongoDB client for %s", self.config.redacted_uri)
        self.client = None
        self._collection = None
        self._owns_client = False

    async def get(
        self, resource_id: str | None = None
    ) -> dict[str, Any] | list[tuple[str, dict[str, Any]]]:
        """Get resource data from the database.

        Parameters:
            resource_id: The resource ID. If not given, all resources are returned.

        Raises:
            ResourceNotFoundError: If `resource_id` is given and the resource does not
                exist.

        Returns:
            The resource document for `resource_id`, or a list of
            `(resource ID, resource document)` tuples for all resources.

        """
        collection = self.collection

        if resource_id is None:
            return [
                (document.get(collection.key), document)
                for document in await collection.get_multiple()
            ]

        document = await collection.get_one(resource_id)
        if document is None:
            raise ResourceNotFoundError(resource_id)
        return document

    async def put(
        self, resource_id: str, data: Mapping[str, Any] | BaseModel
    ) -> str:
        """Store resource data in the database.

        Existing resources have the top-level fields of `data` updated, while any other
        fields are left untouched. New resources are created with `data` and the
        resource ID.

        Parameters:
            resource_id: The resource ID.
            data: The resource data.

        Returns:
            A confirmation message.

        """
        collection = self.collection
        document = await prepare_resource_data(resource_id, data)

        if await collection.upsert_one(resource_id, document):
            return f"Created resource {resource_id}"
        return f"Updated resource {resource_id}"

    async def has(self, resource_id: str) -> bool:
        """Check if a resource with `resource_id` exists in the database.

        Parameters:
            resource_id: The resource ID.

        """
        return await self.collection.exists(resource_id)

    async def delete(self, resource_id: str | None = None) -> str:
        """Delete a single resource or all resources from the database.

        Deleting a non-existent resource is not an error.

        Parameters:
            resource_id: The resource ID. If not given, all resources are deleted.

        Returns:
            A confirmation message.

        """
        collection = self.collection

        if resource_id is None:
            deleted = await collection.delete_many()
            LOGGER.debug("Deleted %d resources from %s", deleted, collection)
            return f"Deleted all {deleted} resources"

        deleted = await collection.delete_one(resource_id)
        LOGGER.debug(
            "Deleted %d resource(s) with ID %r from %s",
            deleted,
            resource_id,
            collection,
        )
        return f"Deleted resource {resource_id}"

    async def size(self) -> int:
        """Get the number of resources in the database."""
        return await self.collection.acount()

    async def migrate(
        self,
        entries: Iterable[tuple[str, Mapping[str, Any] | BaseModel]]
        | Mapping[str, Mapping[str, Any] | BaseModel],
    ) -> MigrationSummary:
        """Add existing resources to the database.

        Resources that already exist in the database are left untouched.
        All entries are migrated concurrently, and the first failing entry aborts the
        migration. Entries migrated up until the failure are not rolled back.

        Parameters:
            entries: Either `(resource ID, resource data)` pairs, e.g., as returned by
                `get()`, or a mapping of resource IDs to resource data.

        Returns:
            A summary of the migration.

        """
        collection = self.collection

        if isinstance(entries, Mapping):
            entries = entries.items()

        async def _migrate_entry(
            resource_id: str, data: Mapping[str, Any] | BaseModel
        ) -> bool:
            document = await prepare_resource_data(resource_id, data)
            return await collection.insert_if_absent(resource_id, document)

        results = await asyncio.gather(
            *(_migrate_entry(resource_id, data) for resource_id, data in entries)
        )

        summary = MigrationSummary(
            attempted=len(results),
            inserted=sum(results),
            skipped=len(results) - sum(results),
        )
        LOGGER.info("Migration into %s: %s", collection, summary)
        return summary

    async def drop_collection(self) -> str:
        """Delete the whole collection.

        The collection is re-created (empty) by MongoDB upon the next write.

        Returns:
            A confirmation message.

        """
        collection = self.collection
        await collection.drop()
        LOGGER.info("Dropped %s", collection)
        return f"Collection {collection.name} dropped"
