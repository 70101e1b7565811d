# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Medical exam catalog.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from ..domain.exams import compute_exam_expiry, filter_by_trigger, sort_by_name, validate_exam
from ..errors import NotFoundException
from ..models.entities import Exam
from ..models.enums import TriggerEvent
from .catalog import CatalogService
from .repository import Repository

logger = logging.getLogger(__name__)


class ExamCatalog(CatalogService[Exam]):
    """Registry of exam definitions, their trigger-events and price lists."""

    def __init__(self, repository: Repository[Exam]):
        super().__init__(repository, "exam", validate_exam)

    def list_by_trigger_event(self, event: TriggerEvent) -> List[Exam]:
        """Active exams applicable to an event, ordered by name."""
        exams = filter_by_trigger(self.list_all(), TriggerEvent(event))
        logger.debug(f"Found {len(exams)} exams for trigger-event {TriggerEvent(event).value}")
        return exams

    def list_sorted(self, include_inactive: bool = False) -> List[Exam]:
        return sort_by_name(self.list_all(include_inactive))

    def price_for(self, exam_id: str, provider_id: str) -> Optional[Decimal]:
        """Price charged by a provider for an active exam, if listed."""
        return self.require_active(exam_id).price_for(provider_id)

    def preview_valid_until(self, exam_id: str, performed_on: date) -> Optional[date]:
        """Expiry an exam performed on a date would get; None if it never expires."""
        exam = self.find_by_id_including_inactive(exam_id)
        if exam is None:
            raise NotFoundException.for_entity(self.entity_name, exam_id)
        return compute_exam_expiry(exam, performed_on)
