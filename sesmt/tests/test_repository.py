# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the repository boundary.
"""

import pytest

from sesmt.models import Sector
from sesmt.services.repository import InMemoryRepository, Repository


class TestRepositoryContract:
    """Test the abstract repository contract."""

    def test_base_repository_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            Repository()

    def test_incomplete_adapter_cannot_be_instantiated(self):
        """Test an adapter missing soft_delete and delete is rejected."""

        class ReadOnlyRepository(Repository[Sector]):
            def get(self, entity_id):
                return None

            def list(self):
                return []

            def upsert(self, entity):
                return entity

        with pytest.raises(TypeError):
            ReadOnlyRepository()

    def test_in_memory_repository_is_a_repository(self):
        assert isinstance(InMemoryRepository("sectors"), Repository)


class TestInMemoryRepository:
    """Test the dictionary-backed repository."""

    @pytest.fixture
    def repository(self):
        return InMemoryRepository("sectors", [Sector(name="Transporte")])

    def test_returns_copies(self, repository):
        stored = repository.list()[0]
        stored.name = "Changed"

        assert repository.get(stored.id).name == "Transporte"

    def test_soft_delete_keeps_entity(self, repository):
        sector = repository.list()[0]

        assert repository.soft_delete(sector.id) is True
        assert repository.get(sector.id).active is False
        assert repository.soft_delete("missing") is False

    def test_delete_removes_entity(self, repository):
        sector = repository.list()[0]

        assert repository.delete(sector.id) is True
        assert repository.get(sector.id) is None
        assert len(repository) == 0
        assert repository.delete(sector.id) is False
