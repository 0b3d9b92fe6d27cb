"""Common utility functions.

These functions may be used in general throughout the MongoDB Storage Engine code.
"""
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from os import getenv
from typing import TYPE_CHECKING
from warnings import warn

from pydantic import AnyUrl, BaseModel

from mongo_storage_engine.warnings import ReservedFieldWarning

if TYPE_CHECKING or bool(getenv("MKDOCS_BUILD", "")):  # pragma: no cover
    from typing import Any

RESERVED_FIELDS = ("_id", "resourceId")
"""Top-level document fields that are never taken from resource data."""


async def clean_python_types(data: Any, **dump_kwargs: Any) -> Any:
    """Turn any types into MongoDB-friendly Python types.

    Use `model_dump()` method for Pydantic models.
    Use `value` property for Enums.
    Turn tuples and sets into lists.
    """
    if isinstance(data, (list, tuple, set)):
        res = []
        for datum in data:
            res.append(await clean_python_types(datum, **dump_kwargs))
        return res

    if isinstance(data, Mapping):
        res = {}
        for key in list(data.keys()):
            res[key] = await clean_python_types(data[key], **dump_kwargs)
        return res

    if isinstance(data, BaseModel):
        # Pydantic model
        return await clean_python_types(data.model_dump(**dump_kwargs))

    if isinstance(data, Enum):
        return await clean_python_types(data.value, **dump_kwargs)

    if isinstance(data, type):
        return await clean_python_types(
            f"{data.__module__}.{data.__name__}", **dump_kwargs
        )

    if isinstance(data, AnyUrl):
        return await clean_python_types(str(data), **dump_kwargs)

    # Unknown or other basic type, e.g., str, int, etc.
    return data


async def prepare_resource_data(
    resource_id: str, data: Mapping[str, Any] | BaseModel
) -> dict[str, Any]:
    """Return `data` as a MongoDB-friendly document body for `resource_id`.

    Reserved top-level fields are removed, since the resource ID given to the
    operation is the only source of the record key.

    Parameters:
        resource_id: The ID of the resource the data belongs to.
        data: The resource data, either a mapping or a pydantic model.

    Raises:
        TypeError: If `data` is neither a mapping nor a pydantic model.
        ValueError: If a top-level field name is not a string, contains a `.` or
            starts with a `$`. MongoDB reads such names as paths or operators.

    Returns:
        The cleaned resource data without any reserved fields.

    """
    if not isinstance(data, (Mapping, BaseModel)):
        raise TypeError(
            "Resource data must be either a mapping or a pydantic model, it was of "
            f"type {type(data)!r}"
        )

    document: dict[str, Any] = await clean_python_types(data)

    invalid = [
        field
        for field in document
        if not isinstance(field, str) or "." in field or field.startswith("$")
    ]
    if invalid:
        raise ValueError(
            "Resource data field names must be strings that neither contain a '.' "
            f"nor start with a '$', found {invalid} for resource {resource_id!r}"
        )

    # A matching `resourceId` is silently dropped, e.g., when re-storing a fetched
    # record.
    if document.get("resourceId") == resource_id:
        del document["resourceId"]

    reserved = [field for field in RESERVED_FIELDS if field in document]
    if reserved:
        warn(
            ReservedFieldWarning(
                detail=(
                    f"Ignoring reserved field(s) {reserved} in the data for resource "
                    f"{resource_id!r}."
                )
            )
        )
        for field in reserved:
            del document[field]

    return document
