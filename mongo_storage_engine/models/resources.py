"""Pydantic models/schemas for results of bulk resource operations."""
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MigrationSummary(BaseModel):
    """Summary of a migration of resources into the collection.

    Every entry is attempted, and each attempted entry is either inserted or skipped
    (because a resource with the same ID already existed).
    """

    model_config = ConfigDict(frozen=True)

    attempted: Annotated[
        int, Field(description="Number of entries processed.", ge=0)
    ] = 0

    inserted: Annotated[
        int, Field(description="Number of entries stored as new resources.", ge=0)
    ] = 0

    skipped: Annotated[
        int,
        Field(
            description="Number of entries left out as the resource already existed.",
            ge=0,
        ),
    ] = 0

    @model_validator(mode="after")
    def check_counts(self) -> MigrationSummary:
        """Ensure all attempted entries are accounted for."""
        if self.inserted + self.skipped != self.attempted:
            raise ValueError(
                f"inserted ({self.inserted}) and skipped ({self.skipped}) entries must "
                f"add up to the attempted entries ({self.attempted})."
            )
        return self

    def __str__(self) -> str:
        return (
            f"{self.attempted} entries migrated ({self.inserted} inserted, "
            f"{self.skipped} skipped)"
        )
