# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Company programme documents (PCMSO, PGR, LTCAT, PPP, AET) and their validity.
"""

import logging
from datetime import date, timedelta
from typing import List, Optional

from opentelemetry import trace

from ..domain.documents import validate_occupational_document
from ..domain.temporal_status import compute_status, days_until, is_current
from ..errors import NotFoundException
from ..models.entities import OccupationalDocument
from ..models.enums import OccupationalDocumentType
from ..models.responses import OccupationalDocumentStatus
from .catalog import CatalogService
from .compliance_tracker import default_warning_window
from .repository import Repository

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class OccupationalDocumentRegistry(CatalogService[OccupationalDocument]):
    """Programme documents with statuses derived at read time."""

    def __init__(self, repository: Repository[OccupationalDocument], warning_window: Optional[timedelta] = None):
        super().__init__(repository, "occupational_document", validate_occupational_document)
        self.warning_window = warning_window if warning_window is not None else default_warning_window()

    def remove(self, document_id: str) -> None:
        """
        Delete a programme document.

        Raises:
            NotFoundException: If the document does not exist
        """
        with tracer.start_as_current_span("occupational_document.remove") as span:
            span.set_attribute("sesmt.entity_id", document_id)
            if not self.repository.delete(document_id):
                raise NotFoundException(
                    f"occupational_document not found: {document_id}",
                    entity="occupational_document",
                    entity_id=document_id
                )
            logger.info("Removed occupational document", extra={"entity_id": document_id})

    def list_with_status(
        self,
        now: Optional[date] = None,
        doc_type: Optional[OccupationalDocumentType] = None
    ) -> List[OccupationalDocumentStatus]:
        """Active documents with derived status, soonest expiry first."""
        reference = now or date.today()
        documents = [
            document for document in self.list_all()
            if doc_type is None or document.doc_type == OccupationalDocumentType(doc_type)
        ]
        documents.sort(key=lambda document: document.valid_until)
        return [
            OccupationalDocumentStatus(
                document=document,
                status=compute_status(document.valid_until, reference, self.warning_window),
                days_until_expiry=days_until(document.valid_until, reference)
            )
            for document in documents
        ]

    def list_needing_renewal(self, now: Optional[date] = None) -> List[OccupationalDocumentStatus]:
        """Documents that are Expired or ExpiringSoon."""
        return [entry for entry in self.list_with_status(now) if not is_current(entry.status)]
