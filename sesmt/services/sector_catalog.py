# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Sector catalog with the referential invariant against job functions.
"""

import logging

from opentelemetry import trace

from ..errors import NotFoundException, ValidationException
from ..models.entities import JobFunction, Sector
from .catalog import CatalogService
from .repository import Repository

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class SectorCatalog(CatalogService[Sector]):
    """Sectors can be deactivated freely but never removed while referenced."""

    def __init__(self, repository: Repository[Sector], function_repository: Repository[JobFunction]):
        super().__init__(repository, "sector")
        self.function_repository = function_repository

    def referencing_functions(self, sector_id: str) -> list:
        """Functions (active or not) owned by a sector."""
        return [f for f in self.function_repository.list() if f.sector_id == sector_id]

    def remove(self, sector_id: str) -> None:
        """
        Hard-delete a sector nobody references.

        Raises:
            NotFoundException: If the sector does not exist
            ValidationException: If any function still references it
        """
        with tracer.start_as_current_span("sector.remove") as span:
            span.set_attribute("sesmt.entity_id", sector_id)

            if self.find_by_id_including_inactive(sector_id) is None:
                raise NotFoundException(f"sector not found: {sector_id}", entity="sector", entity_id=sector_id)

            functions = self.referencing_functions(sector_id)
            if functions:
                raise ValidationException(
                    "Sector is referenced by job functions",
                    validation_errors=[f"Referenced by function '{f.name}' ({f.id})" for f in functions]
                )

            self.repository.delete(sector_id)
            logger.info("Removed sector", extra={"entity": "sector", "entity_id": sector_id})
