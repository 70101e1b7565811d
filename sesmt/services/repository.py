# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Repository boundary for catalog and ledger entities.

The compliance services only need get-by-id, list-all, upsert and
soft-delete per entity type. ``InMemoryRepository`` backs tests and
single-process use; ``services.mongodb.MongoRepository`` backs MongoDB.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Generic, List, Optional, TypeVar

from ..models.base import BaseEntity

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseEntity)


class Repository(ABC, Generic[T]):
    """
    Abstract key-value store for one entity type.

    Adapters must implement get, list, upsert, soft_delete and delete.
    """

    @abstractmethod
    def get(self, entity_id: str) -> Optional[T]:
        """Entity by ID regardless of its active flag, or None."""
        pass

    @abstractmethod
    def list(self) -> List[T]:
        """Every stored entity, active or not."""
        pass

    @abstractmethod
    def upsert(self, entity: T) -> T:
        """Insert or replace an entity by ID."""
        pass

    @abstractmethod
    def soft_delete(self, entity_id: str) -> bool:
        """Clear the active flag; False if the entity does not exist."""
        pass

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """Remove an entity permanently; False if it does not exist."""
        pass


class InMemoryRepository(Repository[T]):
    """Dictionary-backed repository that stores and returns copies."""

    def __init__(self, name: str = "entities", items: Optional[List[T]] = None):
        self.name = name
        self._items: Dict[str, T] = {}
        for item in items or []:
            self.upsert(item)

    def get(self, entity_id: str) -> Optional[T]:
        item = self._items.get(entity_id)
        return item.model_copy(deep=True) if item is not None else None

    def list(self) -> List[T]:
        return [item.model_copy(deep=True) for item in self._items.values()]

    def upsert(self, entity: T) -> T:
        self._items[entity.id] = entity.model_copy(deep=True)
        logger.debug(f"Upserted {entity.id} in {self.name}")
        return entity

    def soft_delete(self, entity_id: str) -> bool:
        item = self._items.get(entity_id)
        if item is None:
            logger.warning(f"No entity soft deleted for {entity_id} in {self.name}")
            return False
        item.deactivate()
        logger.debug(f"Soft deleted {entity_id} in {self.name}")
        return True

    def delete(self, entity_id: str) -> bool:
        if self._items.pop(entity_id, None) is None:
            logger.warning(f"No entity deleted for {entity_id} in {self.name}")
            return False
        logger.debug(f"Deleted {entity_id} in {self.name}")
        return True

    def __len__(self) -> int:
        return len(self._items)
