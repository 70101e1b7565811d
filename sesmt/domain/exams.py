# SPDX-License-Identifier: Apache-2.0

"""
Medical exam rules.

Pure functions for exam definition validation, trigger-event checks and
expiry computation.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from ..models.entities import Exam
from ..models.enums import TriggerEvent
from .temporal_status import expiry_after
from .validation import ValidationResult


def validate_exam(exam: Exam) -> ValidationResult:
    """
    Validate the cross-field rules of an exam definition.

    Args:
        exam: Exam to validate

    Returns:
        ValidationResult with validation status and errors
    """
    errors = []
    warnings = []

    if not exam.trigger_events:
        errors.append("Exam must apply to at least one trigger-event")

    interval = exam.renewal_interval_months
    if interval is not None and (isinstance(interval, bool) or interval <= 0):
        errors.append("Renewal interval must be a positive number of months")

    if exam.is_periodic() and interval is None:
        errors.append("Periodic exams require a renewal interval")

    if exam.expires is True and interval is None:
        errors.append("Expiring exams require a renewal interval")

    if interval is not None and not exam.expires_on_schedule():
        warnings.append("Renewal interval is ignored because the exam does not expire")

    for provider_id, price in exam.prices.items():
        if price < Decimal("0"):
            errors.append(f"Price for provider {provider_id} cannot be negative")

    return ValidationResult.from_errors(errors, warnings)


def validate_exam_trigger(exam: Exam, trigger_event: TriggerEvent) -> ValidationResult:
    """
    Check that an exam supports a trigger-event.

    Args:
        exam: Exam being bound or recorded
        trigger_event: Event it is bound or recorded under

    Returns:
        ValidationResult with validation status and errors
    """
    errors = []
    if not exam.applies_to(trigger_event):
        errors.append(
            f"Exam '{exam.name}' does not apply to trigger-event {TriggerEvent(trigger_event).value}"
        )
    return ValidationResult.from_errors(errors)


def compute_exam_expiry(exam: Exam, performed_on: date) -> Optional[date]:
    """
    Expiry date of an exam performed on a given date.

    Exams whose policy says they do not expire (by default every exam without
    the periodic trigger) yield None.
    """
    if not exam.expires_on_schedule():
        return None
    return expiry_after(performed_on, exam.renewal_interval_months)


def filter_by_trigger(exams: List[Exam], trigger_event: TriggerEvent) -> List[Exam]:
    """Exams applicable to an event, ordered by name."""
    return sort_by_name([exam for exam in exams if exam.applies_to(trigger_event)])


def sort_by_name(exams: List[Exam]) -> List[Exam]:
    return sorted(exams, key=lambda exam: (exam.name.casefold(), exam.id))
