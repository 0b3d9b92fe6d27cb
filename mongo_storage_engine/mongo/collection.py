"""MongoDB collection for keyed resources.

The [`AsyncResourceCollection`][mongo_storage_engine.mongo.collection.AsyncResourceCollection]
wraps a motor collection where every document is identified by a unique key field
(`resourceId` by default).
"""
from __future__ import annotations

from os import getenv
from typing import TYPE_CHECKING

from pymongo import ASCENDING

from mongo_storage_engine.common.logger import LOGGER

if TYPE_CHECKING or bool(getenv("MKDOCS_BUILD", "")):  # pragma: no cover
    from typing import Any

    from motor.motor_asyncio import AsyncIOMotorCollection


__all__ = ("AsyncResourceCollection",)


class AsyncResourceCollection:
    """MongoDB Collection of keyed resources for use with `asyncio`

    The asynchronicity is implemented using [`motor`](https://motor.readthedocs.io) and
    [`asyncio`](https://asyncio.readthedocs.io/).

    Documents are always returned without MongoDB's own `_id` field.
    """

    PROJECTION = {"_id": False}

    def __init__(
        self, collection: AsyncIOMotorCollection, key: str = "resourceId"
    ) -> None:
        """Initialize the AsyncResourceCollection.

        Parameters:
            collection: The motor collection to wrap.
            key: The document field uniquely identifying a resource.

        """
        self.collection = collection
        self.key = key

    def __str__(self) -> str:
        """Standard printing result for an instance."""
        return (
            f"<{self.__class__.__name__}: key={self.key} "
            f"DB_collection={self.collection.name}>"
        )

    def __repr__(self) -> str:
        """Representation of instance."""
        return (
            f"{self.__class__.__name__}(collection={self.collection.name!r}, "
            f"key={self.key!r})"
        )

    @property
    def name(self) -> str:
        """The name of the underlying MongoDB collection."""
        return self.collection.name

    def _filter(self, resource_id: str) -> dict[str, str]:
        return {self.key: resource_id}

    async def get_one(self, resource_id: str) -> dict[str, Any] | None:
        """Get one resource by its ID.

        Parameters:
            resource_id: The ID of the resource.

        Returns:
            The resource document or `None` if it does not exist.

        """
        return await self.collection.find_one(
            self._filter(resource_id), projection=self.PROJECTION
        )

    async def get_multiple(self, **criteria: Any) -> list[dict[str, Any]]:
        """Get a list of resources based on criteria

        Parameters:
            **criteria: Keyword arguments for the `find()` method of the collection.
                If no `filter` is given, all resources are returned.

        Returns:
            A list of resource documents in the order returned by MongoDB.

        """
        criteria.setdefault("filter", {})
        criteria.setdefault("projection", self.PROJECTION)

        results = []
        async for document in self.collection.find(**criteria):
            results.append(document)

        return results

    async def exists(self, resource_id: str) -> bool:
        """Assert whether `resource_id` exists in the collection.

        Parameters:
            resource_id: The ID of the resource.

        """
        return bool(await self.collection.count_documents(self._filter(resource_id)))

    async def upsert_one(self, resource_id: str, data: dict[str, Any]) -> bool:
        """Update the fields given in `data`, creating the resource if needed.

        Only the top-level fields in `data` are replaced; other fields of an existing
        resource are left as they are. This is a single atomic operation.

        Parameters:
            resource_id: The ID of the resource.
            data: The (already cleaned) top-level fields to set.

        Returns:
            Whether or not a new resource was created.

        """
        update: dict[str, Any] = (
            {"$set": data} if data else {"$setOnInsert": self._filter(resource_id)}
        )
        result = await self.collection.update_one(
            self._filter(resource_id), update, upsert=True
        )
        created = result.upserted_id is not None
        LOGGER.debug(
            "%s resource %r in DB collection %s",
            "Inserted" if created else "Updated",
            resource_id,
            self.name,
        )
        return created

    async def insert_if_absent(self, resource_id: str, data: dict[str, Any]) -> bool:
        """Create the resource, unless a resource with the same ID already exists.

        An existing resource is never changed. This is a single atomic operation.

        Parameters:
            resource_id: The ID of the resource.
            data: The (already cleaned) fields of the new resource.

        Returns:
            Whether or not a new resource was created.

        """
        result = await self.collection.update_one(
            self._filter(resource_id),
            {"$setOnInsert": {**data, **self._filter(resource_id)}},
            upsert=True,
        )
        return result.upserted_id is not None

    async def delete_one(self, resource_id: str) -> int:
        """Delete a single resource, if it exists.

        Parameters:
            resource_id: The ID of the resource.

        Returns:
            The number of deleted resources, i.e., `0` or `1`.

        """
        result = await self.collection.delete_one(self._filter(resource_id))
        return result.deleted_count

    async def delete_many(self, **criteria: Any) -> int:
        """Delete all resources matching criteria (all resources by default).

        Parameters:
            **criteria: Keyword arguments for the `delete_many()` method of the
                collection.

        Returns:
            The number of deleted resources.

        """
        criteria.setdefault("filter", {})
        result = await self.collection.delete_many(**criteria)
        return result.deleted_count

    async def acount(self, **criteria: Any) -> int:
        """Count documents in Collection.

        Parameters:
            **criteria: Keyword arguments for the `count_documents()` method of the
                collection.

        Returns:
            int: The number of resources matching the criteria.

        """
        criteria.setdefault("filter", {})
        return await self.collection.count_documents(**criteria)

    async def drop(self) -> None:
        """Drop the whole MongoDB collection, including any indexes."""
        await self.collection.drop()

    async def ensure_key_index(self) -> str:
        """Create a unique index on the key field, if it does not already exist.

        Returns:
            The name of the index.

        """
        return await self.collection.create_index(
            [(self.key, ASCENDING)], unique=True
        )
