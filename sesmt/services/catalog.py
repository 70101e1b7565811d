# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Generic catalog service over a repository.

Catalog entries are shared, read-mostly configuration objects. Lookups that
feed new bindings only see active entries; ``*_including_inactive`` lookups
exist for callers that need to interpret historical data.
"""

import logging
from typing import Any, Callable, Dict, Generic, List, Optional

from opentelemetry import trace

from ..domain.validation import ValidationResult
from ..errors import NotFoundException, ValidationException
from .repository import Repository, T

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

IMMUTABLE_FIELDS = ("id", "created_at")


def _no_rules(entity) -> ValidationResult:
    return ValidationResult.from_errors([])


class CatalogService(Generic[T]):
    """Register, patch, toggle and look up entries of one catalog."""

    def __init__(
        self,
        repository: Repository[T],
        entity_name: str,
        validator: Callable[[T], ValidationResult] = _no_rules
    ):
        self.repository = repository
        self.entity_name = entity_name
        self.validator = validator

    def register(self, entity: T) -> T:
        """
        Register a new entry after validating its business rules.

        Raises:
            ValidationException: If the entry breaks a rule or its ID is taken
        """
        with tracer.start_as_current_span(f"{self.entity_name}.register") as span:
            span.set_attribute("sesmt.entity_id", entity.id)

            if self.repository.get(entity.id) is not None:
                raise ValidationException(
                    f"{self.entity_name} already registered",
                    validation_errors=[f"Duplicate ID: {entity.id}"]
                )

            self.validator(entity).raise_if_invalid(f"Invalid {self.entity_name}")
            self.repository.upsert(entity)

            logger.info(
                f"Registered {self.entity_name}",
                extra={"entity": self.entity_name, "entity_id": entity.id}
            )
            return entity

    def update(self, entity_id: str, patch: Dict[str, Any]) -> T:
        """
        Apply a partial update and re-validate the whole entry.

        Raises:
            NotFoundException: If the entry does not exist
            ValidationException: If the patched entry breaks a rule
        """
        with tracer.start_as_current_span(f"{self.entity_name}.update") as span:
            span.set_attribute("sesmt.entity_id", entity_id)

            current = self.find_by_id_including_inactive(entity_id)
            if current is None:
                raise NotFoundException(
                    f"{self.entity_name} not found: {entity_id}",
                    entity=self.entity_name,
                    entity_id=entity_id
                )

            blocked = [name for name in IMMUTABLE_FIELDS if name in patch]
            if blocked:
                raise ValidationException(
                    f"Cannot update {self.entity_name}",
                    validation_errors=[f"Field '{name}' is immutable" for name in blocked]
                )

            data = current.model_dump()
            data.update(patch)
            updated = type(current).model_validate(data)

            self.validator(updated).raise_if_invalid(f"Invalid {self.entity_name}")
            updated.touch()
            self.repository.upsert(updated)

            logger.info(
                f"Updated {self.entity_name}",
                extra={"entity": self.entity_name, "entity_id": entity_id, "fields": sorted(patch)}
            )
            return updated

    def set_active(self, entity_id: str, active: bool) -> T:
        """
        Toggle the active flag; reversible and never touches references.

        Raises:
            NotFoundException: If the entry does not exist
        """
        with tracer.start_as_current_span(f"{self.entity_name}.set_active") as span:
            span.set_attributes({"sesmt.entity_id": entity_id, "sesmt.active": active})

            entity = self.find_by_id_including_inactive(entity_id)
            if entity is None:
                raise NotFoundException(
                    f"{self.entity_name} not found: {entity_id}",
                    entity=self.entity_name,
                    entity_id=entity_id
                )

            if active:
                entity.activate()
            else:
                entity.deactivate()
            self.repository.upsert(entity)

            logger.info(
                f"{'Activated' if active else 'Deactivated'} {self.entity_name}",
                extra={"entity": self.entity_name, "entity_id": entity_id}
            )
            return entity

    def find_by_id(self, entity_id: str) -> Optional[T]:
        """Active entry by ID; None if absent or inactive."""
        entity = self.repository.get(entity_id)
        if entity is None or not entity.active:
            return None
        return entity

    def find_by_id_including_inactive(self, entity_id: str) -> Optional[T]:
        return self.repository.get(entity_id)

    def require_active(self, entity_id: str) -> T:
        """
        Active entry by ID.

        Raises:
            NotFoundException: If the entry is absent or inactive
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundException.for_entity(self.entity_name, entity_id)
        return entity

    def require_all_active(self, entity_ids: List[str]) -> List[T]:
        """
        Resolve every ID to an active entry, failing on the first miss.

        Raises:
            NotFoundException: If any entry is absent or inactive
        """
        return [self.require_active(entity_id) for entity_id in entity_ids]

    def list_all(self, include_inactive: bool = False) -> List[T]:
        entities = self.repository.list()
        if include_inactive:
            return entities
        return [entity for entity in entities if entity.active]
