"""Storage engine contract.

A host application discovers a storage engine through its name, its type and a group
of storage functions; one for each [`StorageFunctionType`][mongo_storage_engine.models.engine.StorageFunctionType].
The host then invokes the functions uniformly:

- `GET`: `(resource_id) -> Awaitable[Any]`
- `PUT`: `(resource_id, data) -> Awaitable[Any]`
- `DEL`: `(resource_id) -> Awaitable[Any]`
- `HAS`: `(resource_id) -> Awaitable[bool]`

"""
from __future__ import annotations

from enum import Enum
from os import getenv
from typing import TYPE_CHECKING

if TYPE_CHECKING or bool(getenv("MKDOCS_BUILD", "")):  # pragma: no cover
    from collections.abc import Awaitable, Callable, Iterator
    from typing import Any


__all__ = (
    "StorageEngine",
    "StorageFunction",
    "StorageFunctionGroup",
    "StorageFunctionType",
    "StorageType",
)


class StorageType(Enum):
    """Category of a storage engine."""

    FILE = "file"
    DB = "db"
    MEMORY = "memory"
    API = "api"


class StorageFunctionType(Enum):
    """The operations a storage engine must provide."""

    GET = "get"
    PUT = "put"
    DEL = "del"
    HAS = "has"


class StorageFunction:
    """A single named storage operation.

    Calling the storage function awaits the wrapped coroutine function.
    """

    def __init__(
        self, type: StorageFunctionType, func: Callable[..., Awaitable[Any]]
    ) -> None:
        if not isinstance(type, StorageFunctionType):
            raise TypeError(
                f"type must be a StorageFunctionType, it was of type {type!r}"
            )
        if not callable(func):
            raise TypeError(f"func must be callable, got {func!r}")

        self.type = type
        self.func = func

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return await self.func(*args, **kwargs)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(type={self.type}, "
            f"func={getattr(self.func, '__qualname__', self.func)!r})"
        )


class StorageFunctionGroup:
    """The complete set of storage functions for a storage engine.

    Exactly one function must be given for each storage function type.
    """

    def __init__(self, *functions: StorageFunction) -> None:
        self._functions: dict[StorageFunctionType, StorageFunction] = {}

        for function in functions:
            if function.type in self._functions:
                raise ValueError(
                    f"More than one storage function given for {function.type}"
                )
            self._functions[function.type] = function

        missing = [_ for _ in StorageFunctionType if _ not in self._functions]
        if missing:
            raise ValueError(
                "Missing storage function(s) for: "
                f"{', '.join(_.name for _ in missing)}"
            )

    def __getitem__(self, type: StorageFunctionType | str) -> StorageFunction:
        if isinstance(type, str):
            type = StorageFunctionType[type.upper()]
        return self._functions[type]

    def __iter__(self) -> Iterator[StorageFunction]:
        return iter(self._functions.values())

    def __len__(self) -> int:
        return len(self._functions)

    @property
    def get(self) -> StorageFunction:
        return self._functions[StorageFunctionType.GET]

    @property
    def put(self) -> StorageFunction:
        return self._functions[StorageFunctionType.PUT]

    @property
    def delete(self) -> StorageFunction:
        return self._functions[StorageFunctionType.DEL]

    @property
    def has(self) -> StorageFunction:
        return self._functions[StorageFunctionType.HAS]


class StorageEngine:
    """Base class for storage engines.

    Parameters:
        name: The name of the storage engine.
        type: The category of the storage engine.
        functions: The storage functions implementing the contract.
        version: The version of the storage engine.

    """

    def __init__(
        self,
        name: str,
        type: StorageType,
        functions: StorageFunctionGroup,
        version: str | None = None,
    ) -> None:
        if not isinstance(type, StorageType):
            raise TypeError(f"type must be a StorageType, it was of type {type!r}")

        self.name = name
        self.type = type
        self.functions = functions
        self.version = version

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}: name={self.name!r} type={self.type.value} "
            f"version={self.version!r}>"
        )
