# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Base entity models with common fields and validation.
"""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict
from bson import ObjectId


def generate_object_id() -> str:
    """Generate a new MongoDB ObjectId as string."""
    return str(ObjectId())


def utc_now() -> datetime:
    """Current timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class BaseEntity(BaseModel):
    """Base entity with common fields for all catalog and ledger objects."""

    model_config = ConfigDict(
        # Allow population by field name or alias
        populate_by_name=True,
        # Validate assignment
        validate_assignment=True,
        # Arbitrary types allowed
        arbitrary_types_allowed=True
    )

    id: str = Field(default_factory=generate_object_id, description="Unique identifier")
    active: bool = Field(default=True, description="Soft-delete flag")
    created_at: datetime = Field(default_factory=utc_now, description="Creation timestamp")
    updated_at: datetime = Field(default_factory=utc_now, description="Last update timestamp")
    schema_version: int = Field(default=1, description="Schema version for migrations")

    def touch(self) -> None:
        """Update the last-modified timestamp."""
        self.updated_at = utc_now()

    def deactivate(self) -> None:
        """Perform soft delete by clearing the active flag."""
        self.active = False
        self.touch()

    def activate(self) -> None:
        """Reverse a soft delete."""
        self.active = True
        self.touch()
