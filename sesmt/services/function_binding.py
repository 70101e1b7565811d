# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Job function requirement binding service.

Associates a job function with its sector, duties, required equipment,
uniforms and, per trigger-event, required exams. Every mutation validates
all references before anything is written, so a failed call leaves the
stored function unchanged.
"""

import logging
from typing import Dict, List, Optional

from opentelemetry import trace

from ..domain import functions as rules
from ..errors import NotFoundException
from ..models.entities import Exam, JobFunction
from ..models.enums import TriggerEvent
from ..models.responses import ExamCostEstimate, RequirementsSummary
from .equipment_catalog import EquipmentCatalog
from .exam_catalog import ExamCatalog
from .provider_directory import ProviderDirectory
from .repository import Repository
from .sector_catalog import SectorCatalog

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class FunctionRequirementBinding:
    """Central aggregate binding job functions to their requirements."""

    def __init__(
        self,
        repository: Repository[JobFunction],
        sectors: SectorCatalog,
        exams: ExamCatalog,
        equipment: EquipmentCatalog,
        providers: Optional[ProviderDirectory] = None
    ):
        self.repository = repository
        self.sectors = sectors
        self.exams = exams
        self.equipment = equipment
        self.providers = providers

    def _get_function(self, function_id: str) -> JobFunction:
        function = self.repository.get(function_id)
        if function is None:
            raise NotFoundException(
                f"function not found: {function_id}",
                entity="function",
                entity_id=function_id
            )
        return function

    def create_function(
        self,
        sector_id: str,
        name: str,
        description: Optional[str] = None,
        duties: Optional[List[str]] = None
    ) -> JobFunction:
        """
        Create a function with empty requirement sets.

        Raises:
            NotFoundException: If the sector is missing or inactive
        """
        with tracer.start_as_current_span("function.create") as span:
            span.set_attribute("sesmt.sector_id", sector_id)

            self.sectors.require_active(sector_id)
            function = JobFunction(
                sector_id=sector_id,
                name=name,
                description=description,
                duties=list(duties or [])
            )
            self.repository.upsert(function)

            logger.info(
                f"Created function '{function.name}'",
                extra={"function_id": function.id, "sector_id": sector_id}
            )
            return function

    def update_function(
        self,
        function_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        duties: Optional[List[str]] = None,
        sector_id: Optional[str] = None
    ) -> JobFunction:
        """
        Edit the descriptive fields of a function; requirement sets are untouched.

        Raises:
            NotFoundException: If the function, or a new sector, is missing or inactive
        """
        with tracer.start_as_current_span("function.update") as span:
            span.set_attribute("sesmt.function_id", function_id)

            function = self._get_function(function_id)
            if sector_id is not None and sector_id != function.sector_id:
                self.sectors.require_active(sector_id)

            data = function.model_dump()
            for key, value in (("name", name), ("description", description),
                               ("duties", duties), ("sector_id", sector_id)):
                if value is not None:
                    data[key] = value
            updated = JobFunction.model_validate(data)
            updated.touch()
            self.repository.upsert(updated)

            logger.info("Updated function", extra={"function_id": function_id})
            return updated

    def set_active(self, function_id: str, active: bool) -> JobFunction:
        """Reversibly toggle a function; requirement bindings are kept."""
        with tracer.start_as_current_span("function.set_active") as span:
            span.set_attributes({"sesmt.function_id": function_id, "sesmt.active": active})

            function = self._get_function(function_id)
            if active:
                function.activate()
            else:
                function.deactivate()
            self.repository.upsert(function)

            logger.info(
                f"{'Activated' if active else 'Deactivated'} function",
                extra={"function_id": function_id}
            )
            return function

    def set_equipment(self, function_id: str, equipment_ids: List[str]) -> JobFunction:
        """
        Replace the function's equipment set.

        Raises:
            NotFoundException: If the function or any equipment item is missing or inactive
        """
        with tracer.start_as_current_span("function.set_equipment") as span:
            span.set_attributes({"sesmt.function_id": function_id, "sesmt.item_count": len(equipment_ids)})

            function = self._get_function(function_id)
            self.equipment.equipment.require_all_active(equipment_ids)

            updated = rules.with_equipment(function, equipment_ids)
            self.repository.upsert(updated)

            logger.info(
                "Replaced function equipment",
                extra={"function_id": function_id, "equipment_ids": updated.equipment_ids}
            )
            return updated

    def set_uniforms(self, function_id: str, uniform_ids: List[str]) -> JobFunction:
        """
        Replace the function's uniform set.

        Raises:
            NotFoundException: If the function or any uniform is missing or inactive
        """
        with tracer.start_as_current_span("function.set_uniforms") as span:
            span.set_attributes({"sesmt.function_id": function_id, "sesmt.item_count": len(uniform_ids)})

            function = self._get_function(function_id)
            self.equipment.uniforms.require_all_active(uniform_ids)

            updated = rules.with_uniforms(function, uniform_ids)
            self.repository.upsert(updated)

            logger.info(
                "Replaced function uniforms",
                extra={"function_id": function_id, "uniform_ids": updated.uniform_ids}
            )
            return updated

    def set_exams_for_trigger(
        self,
        function_id: str,
        trigger_event: TriggerEvent,
        exam_ids: List[str]
    ) -> JobFunction:
        """
        Replace one trigger-event bucket, leaving the other buckets untouched.

        Raises:
            NotFoundException: If the function or any exam is missing or inactive
            ValidationException: If an exam does not apply to the trigger-event
        """
        event = TriggerEvent(trigger_event)
        with tracer.start_as_current_span("function.set_exams_for_trigger") as span:
            span.set_attributes({
                "sesmt.function_id": function_id,
                "sesmt.trigger_event": event.value,
                "sesmt.item_count": len(exam_ids)
            })

            function = self._get_function(function_id)
            exams = self.exams.require_all_active(exam_ids)
            rules.validate_exam_bucket(exams, event).raise_if_invalid(
                f"Exams cannot be bound to trigger-event {event.value}"
            )

            updated = rules.with_exam_bucket(function, event, exam_ids)
            self.repository.upsert(updated)

            logger.info(
                "Replaced function exam bucket",
                extra={"function_id": function_id, "trigger_event": event.value,
                       "exam_ids": updated.exam_ids_for(event)}
            )
            return updated

    def get_requirements_summary(self, function_id: str) -> RequirementsSummary:
        """
        Resolve every requirement of a function into catalog objects.

        Entries deactivated after binding are still returned so historical
        bindings stay interpretable.
        """
        function = self._get_function(function_id)

        equipment = self._dereference(function.equipment_ids, self.equipment.find_equipment_including_inactive)
        uniforms = self._dereference(function.uniform_ids, self.equipment.find_uniform_including_inactive)
        exams_by_trigger: Dict[TriggerEvent, List[Exam]] = {}
        for event in TriggerEvent:
            exams = self._dereference(function.exam_ids_for(event), self.exams.find_by_id_including_inactive)
            if exams:
                exams_by_trigger[event] = exams

        return RequirementsSummary(
            function=function,
            sector=self.sectors.find_by_id_including_inactive(function.sector_id),
            equipment=equipment,
            uniforms=uniforms,
            exams_by_trigger=exams_by_trigger
        )

    def _dereference(self, ids, lookup) -> list:
        resolved = []
        for item_id in ids:
            item = lookup(item_id)
            if item is None:
                logger.warning(f"Bound catalog entry no longer exists: {item_id}")
                continue
            resolved.append(item)
        return resolved

    def count_distinct_exams(self, function_id: str) -> int:
        """Distinct exams across all buckets; an exam under two events counts once."""
        return rules.count_distinct_exams(self._get_function(function_id))

    def find_function(self, function_id: str) -> Optional[JobFunction]:
        """Active function by ID; None if absent or inactive."""
        function = self.repository.get(function_id)
        if function is None or not function.active:
            return None
        return function

    def list_functions(self, sector_id: Optional[str] = None, include_inactive: bool = False) -> List[JobFunction]:
        functions = [
            function for function in self.repository.list()
            if (include_inactive or function.active)
            and (sector_id is None or function.sector_id == sector_id)
        ]
        return sorted(functions, key=lambda function: function.name.casefold())

    def estimate_exam_cost(
        self,
        function_id: str,
        trigger_event: TriggerEvent,
        provider_id: str
    ) -> ExamCostEstimate:
        """
        Price one trigger-event bucket at a provider.

        Raises:
            NotFoundException: If the function or the provider is missing or inactive
        """
        function = self._get_function(function_id)
        if self.providers is not None:
            self.providers.require_active(provider_id)

        exams = {}
        for exam_id in function.exam_ids_for(trigger_event):
            exam = self.exams.find_by_id_including_inactive(exam_id)
            if exam is not None:
                exams[exam_id] = exam
        return rules.estimate_bucket_cost(function, trigger_event, provider_id, exams)
