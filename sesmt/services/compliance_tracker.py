# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Per-employee compliance ledger.

Records exams performed, equipment issued, documents generated and
professional certifications obtained, each with a validity window. Statuses are recomputed on every read and never stored.
"""

import os
import logging
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from opentelemetry import trace

from ..domain.certifications import certification_key, validate_certification
from ..domain.compliance import compute_pending, select_best_record, track_record
from ..domain.documents import DEFAULT_COMPANY_NAME, render_template
from ..domain.equipment import compute_equipment_expiry
from ..domain.exams import compute_exam_expiry, validate_exam_trigger
from ..domain.temporal_status import expiry_after, is_current
from ..errors import NotFoundException
from ..models.entities import ComplianceRecord, DocumentTemplate, Employee
from ..models.enums import CertificationCategory, RecordKind, TriggerEvent
from ..models.responses import PendingRequirement, TrackedRecord
from .catalog import CatalogService
from .employee_registry import EmployeeRegistry
from .equipment_catalog import EquipmentCatalog
from .exam_catalog import ExamCatalog
from .function_binding import FunctionRequirementBinding
from .provider_directory import ProviderDirectory
from .repository import Repository

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def default_warning_window() -> timedelta:
    """Warning window from SESMT_WARNING_WINDOW_DAYS (30 days by default)."""
    return timedelta(days=int(os.getenv('SESMT_WARNING_WINDOW_DAYS', '30')))


class ComplianceRecordTracker:
    """Ledger of what each employee actually holds, and what is missing."""

    def __init__(
        self,
        repository: Repository[ComplianceRecord],
        employees: EmployeeRegistry,
        exams: ExamCatalog,
        equipment: EquipmentCatalog,
        functions: FunctionRequirementBinding,
        providers: Optional[ProviderDirectory] = None,
        templates: Optional[Repository[DocumentTemplate]] = None,
        warning_window: Optional[timedelta] = None
    ):
        self.repository = repository
        self.employees = employees
        self.exams = exams
        self.equipment = equipment
        self.functions = functions
        self.providers = providers
        self.templates = CatalogService(templates, "document_template") if templates is not None else None
        self.warning_window = warning_window if warning_window is not None else default_warning_window()

        logger.info(f"Compliance tracker initialized with {self.warning_window.days}-day warning window")

    def _get_employee(self, employee_id: str) -> Employee:
        employee = self.employees.find_by_id_including_inactive(employee_id)
        if employee is None:
            raise NotFoundException(
                f"employee not found: {employee_id}",
                entity="employee",
                entity_id=employee_id
            )
        return employee

    def _store(self, record: ComplianceRecord) -> ComplianceRecord:
        self.repository.upsert(record)
        logger.info(
            f"Recorded {record.kind.value} for employee",
            extra={
                "employee_id": record.employee_id,
                "catalog_id": record.catalog_id,
                "record_id": record.id,
                "expires_on": record.expires_on.isoformat() if record.expires_on else None
            }
        )
        return record

    def record_exam_performed(
        self,
        employee_id: str,
        exam_id: str,
        trigger_event: TriggerEvent,
        performed_on: date,
        provider_id: str,
        result: str,
        observations: Optional[str] = None,
        file_ref: Optional[str] = None
    ) -> ComplianceRecord:
        """
        Record an exam an employee went through.

        Raises:
            NotFoundException: If the employee, exam or provider is missing or inactive
            ValidationException: If the exam does not apply to the trigger-event
        """
        event = TriggerEvent(trigger_event)
        with tracer.start_as_current_span("compliance.record_exam_performed") as span:
            span.set_attributes({
                "sesmt.employee_id": employee_id,
                "sesmt.exam_id": exam_id,
                "sesmt.trigger_event": event.value
            })

            self.employees.require_active(employee_id)
            exam = self.exams.require_active(exam_id)
            if self.providers is not None:
                self.providers.require_active(provider_id)
            validate_exam_trigger(exam, event).raise_if_invalid("Exam cannot be recorded for this trigger-event")

            record = ComplianceRecord(
                kind=RecordKind.EXAM,
                employee_id=employee_id,
                catalog_id=exam_id,
                trigger_event=event,
                performed_on=performed_on,
                expires_on=compute_exam_expiry(exam, performed_on),
                provider_id=provider_id,
                result=result,
                observations=observations,
                file_ref=file_ref
            )
            return self._store(record)

    def record_equipment_issued(
        self,
        employee_id: str,
        equipment_id: str,
        issued_on: date,
        observations: Optional[str] = None,
        file_ref: Optional[str] = None
    ) -> ComplianceRecord:
        """
        Record equipment handed to an employee.

        Raises:
            NotFoundException: If the employee or the equipment item is missing or inactive
        """
        with tracer.start_as_current_span("compliance.record_equipment_issued") as span:
            span.set_attributes({"sesmt.employee_id": employee_id, "sesmt.equipment_id": equipment_id})

            self.employees.require_active(employee_id)
            item = self.equipment.equipment.require_active(equipment_id)

            record = ComplianceRecord(
                kind=RecordKind.EQUIPMENT,
                employee_id=employee_id,
                catalog_id=equipment_id,
                performed_on=issued_on,
                expires_on=compute_equipment_expiry(item, issued_on),
                observations=observations,
                file_ref=file_ref
            )
            return self._store(record)

    def _require_template(self, template_id: str) -> DocumentTemplate:
        if self.templates is None:
            raise NotFoundException.for_entity("document_template", template_id)
        return self.templates.require_active(template_id)

    def record_document_generated(
        self,
        employee_id: str,
        template_id: str,
        generated_on: date,
        observations: Optional[str] = None,
        file_ref: Optional[str] = None
    ) -> ComplianceRecord:
        """
        Record a document generated or filed for an employee.

        Raises:
            NotFoundException: If the employee or the template is missing or inactive
        """
        with tracer.start_as_current_span("compliance.record_document_generated") as span:
            span.set_attributes({"sesmt.employee_id": employee_id, "sesmt.template_id": template_id})

            self.employees.require_active(employee_id)
            template = self._require_template(template_id)

            record = ComplianceRecord(
                kind=RecordKind.DOCUMENT,
                employee_id=employee_id,
                catalog_id=template_id,
                performed_on=generated_on,
                expires_on=expiry_after(generated_on, template.validity_months),
                observations=observations,
                file_ref=file_ref
            )
            return self._store(record)

    def generate_document(
        self,
        employee_id: str,
        template_id: str,
        generated_on: date,
        company_name: Optional[str] = None
    ) -> Tuple[str, ComplianceRecord]:
        """
        Render a template for an employee and record the generated document.

        Returns:
            Tuple of (rendered text, ledger record)
        """
        employee = self.employees.require_active(employee_id)
        template = self._require_template(template_id)
        text = render_template(
            template.content,
            employee,
            today=generated_on,
            company_name=company_name or os.getenv('SESMT_COMPANY_NAME', DEFAULT_COMPANY_NAME)
        )
        record = self.record_document_generated(employee_id, template_id, generated_on)
        return text, record

    def record_certification(
        self,
        employee_id: str,
        name: str,
        issued_on: date,
        valid_until: Optional[date] = None,
        issuer: Optional[str] = None,
        certificate_number: Optional[str] = None,
        category: Optional[CertificationCategory] = None,
        observations: Optional[str] = None,
        file_ref: Optional[str] = None
    ) -> ComplianceRecord:
        """
        Record a professional certification an employee obtained.

        Certifications are not catalog entries: the ledger key is the
        normalized name, so a later certificate with the same name renews
        the earlier one. ``valid_until=None`` marks a lifetime certificate.

        Raises:
            NotFoundException: If the employee is missing or inactive
            ValidationException: If the name is blank or the validity precedes the issue date
        """
        with tracer.start_as_current_span("compliance.record_certification") as span:
            span.set_attributes({"sesmt.employee_id": employee_id, "sesmt.certification": name or ""})

            self.employees.require_active(employee_id)
            validate_certification(name, issued_on, valid_until).raise_if_invalid("Invalid certification")

            record = ComplianceRecord(
                kind=RecordKind.CERTIFICATION,
                employee_id=employee_id,
                catalog_id=certification_key(name),
                performed_on=issued_on,
                expires_on=valid_until,
                title=name.strip(),
                issuer=issuer,
                certificate_number=certificate_number,
                certification_category=CertificationCategory(category) if category else None,
                observations=observations,
                file_ref=file_ref
            )
            return self._store(record)

    def renew_certification(
        self,
        record_id: str,
        renewed_on: date,
        valid_until: Optional[date],
        observations: Optional[str] = None,
        file_ref: Optional[str] = None
    ) -> ComplianceRecord:
        """
        Renew a certification, keeping its name, issuer, number and category.

        The previous record stays in the ledger as history.

        Raises:
            NotFoundException: If no certification record has that ID
            ValidationException: If the new validity precedes the renewal date
        """
        previous = self.repository.get(record_id)
        if previous is None or previous.kind != RecordKind.CERTIFICATION:
            raise NotFoundException.for_entity("certification", record_id)

        renewed = self.record_certification(
            previous.employee_id,
            previous.title or previous.catalog_id,
            renewed_on,
            valid_until=valid_until,
            issuer=previous.issuer,
            certificate_number=previous.certificate_number,
            category=previous.certification_category,
            observations=observations,
            file_ref=file_ref
        )
        logger.info(
            "Renewed certification",
            extra={
                "previous_record_id": record_id,
                "record_id": renewed.id,
                "previous_expires_on": previous.expires_on.isoformat() if previous.expires_on else None
            }
        )
        return renewed

    def get_records_for_employee(
        self,
        employee_id: str,
        now: Optional[date] = None,
        kind: Optional[RecordKind] = None
    ) -> List[TrackedRecord]:
        """
        Every record of an employee with its status derived at ``now``.

        Raises:
            NotFoundException: If the employee does not exist
        """
        self._get_employee(employee_id)
        reference = now or date.today()

        records = [
            record for record in self.repository.list()
            if record.employee_id == employee_id and (kind is None or record.kind == kind)
        ]
        records.sort(key=lambda record: (record.performed_on, record.created_at), reverse=True)

        logger.debug(f"Found {len(records)} records for employee {employee_id}")
        return [track_record(record, reference, self.warning_window) for record in records]

    def get_records_needing_renewal(self, employee_id: str, now: Optional[date] = None) -> List[TrackedRecord]:
        """
        Latest records that are Expired or ExpiringSoon at ``now``.

        Only the best record of each exam, equipment item, template or
        certification is considered, so an item already renewed drops off.
        """
        latest: Dict[Tuple[RecordKind, str], List[TrackedRecord]] = {}
        tracked = self.get_records_for_employee(employee_id, now)
        for record in tracked:
            latest.setdefault((record.kind, record.catalog_id), []).append(record)

        best_ids = {select_best_record(records).id for records in latest.values()}
        return [
            record for record in tracked
            if record.id in best_ids and not is_current(record.status)
        ]

    def get_pending_for_function(
        self,
        employee_id: str,
        function_id: str,
        now: Optional[date] = None,
        trigger_events: Optional[List[TriggerEvent]] = None
    ) -> List[PendingRequirement]:
        """
        Required exams and equipment the employee does not currently hold.

        Inactive catalog entries are skipped because they can no longer be
        recorded.

        Raises:
            NotFoundException: If the employee or the function does not exist
        """
        with tracer.start_as_current_span("compliance.get_pending_for_function") as span:
            span.set_attributes({"sesmt.employee_id": employee_id, "sesmt.function_id": function_id})

            self._get_employee(employee_id)
            summary = self.functions.get_requirements_summary(function_id)

            exams = {
                exam.id: exam
                for bucket in summary.exams_by_trigger.values()
                for exam in bucket
                if exam.active
            }
            equipment = {item.id: item for item in summary.equipment if item.active}
            records = [record for record in self.repository.list() if record.employee_id == employee_id]

            pending = compute_pending(
                summary.function,
                exams,
                equipment,
                records,
                now or date.today(),
                self.warning_window,
                trigger_events
            )
            span.set_attribute("sesmt.pending_count", len(pending))
            return pending

    def remove_employee(self, employee_id: str) -> int:
        """
        Delete an employee and cascade to its records.

        Returns:
            Number of records removed

        Raises:
            NotFoundException: If the employee does not exist
        """
        with tracer.start_as_current_span("compliance.remove_employee") as span:
            span.set_attribute("sesmt.employee_id", employee_id)

            self._get_employee(employee_id)
            record_ids = [r.id for r in self.repository.list() if r.employee_id == employee_id]

            for record_id in record_ids:
                self.repository.delete(record_id)
            self.employees.repository.delete(employee_id)

            logger.info(
                "Removed employee and compliance records",
                extra={"employee_id": employee_id, "record_count": len(record_ids)}
            )
            return len(record_ids)
