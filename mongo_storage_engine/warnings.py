"""Storage engine warnings.

The warnings in this module are emitted with [`warnings.warn`][warnings.warn] and can be
filtered by their class like any other Python warning.
"""
from __future__ import annotations


class StorageEngineWarning(UserWarning):
    """Base Warning for the `mongo-storage-engine` package."""

    def __init__(
        self, detail: str | None = None, title: str | None = None, *args
    ) -> None:
        detail = detail if detail else self.__doc__
        super().__init__(detail, *args)
        self.detail = detail
        self.title = title if title else self.__class__.__name__

    def __repr__(self) -> str:
        attrs = {"detail": self.detail, "title": self.title}
        return "<{:s}({:s})>".format(
            self.__class__.__name__,
            " ".join(
                [
                    f"{attr}={value!r}"
                    for attr, value in attrs.items()
                    if value is not None
                ]
            ),
        )

    def __str__(self) -> str:
        return self.detail if self.detail is not None else ""


class ReservedFieldWarning(StorageEngineWarning):
    """Reserved fields (`resourceId`, `_id`) in resource data are ignored, the resource
    ID given to the operation is always used."""
