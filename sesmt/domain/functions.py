# SPDX-License-Identifier: Apache-2.0

"""
Job function requirement binding rules.

This module contains pure functions that compute new binding state for a
function. They never mutate their inputs; callers persist the returned copy.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from ..models.entities import Exam, JobFunction
from ..models.enums import TriggerEvent
from ..models.responses import ExamCostEstimate
from .exams import validate_exam_trigger
from .validation import ValidationResult


def normalize_ids(ids: List[str]) -> List[str]:
    """Drop duplicate IDs, keeping first occurrence order."""
    unique: List[str] = []
    for item_id in ids:
        if item_id not in unique:
            unique.append(item_id)
    return unique


def validate_exam_bucket(exams: List[Exam], trigger_event: TriggerEvent) -> ValidationResult:
    """
    Validate that every exam supports the bucket's trigger-event.

    Args:
        exams: Exams about to be bound
        trigger_event: Bucket being replaced

    Returns:
        ValidationResult listing every incompatible exam
    """
    errors = []
    for exam in exams:
        errors.extend(validate_exam_trigger(exam, trigger_event).errors)
    return ValidationResult.from_errors(errors)


def with_equipment(function: JobFunction, equipment_ids: List[str]) -> JobFunction:
    """Copy of the function with its equipment set replaced."""
    updated = function.model_copy(deep=True)
    updated.equipment_ids = normalize_ids(equipment_ids)
    updated.touch()
    return updated


def with_uniforms(function: JobFunction, uniform_ids: List[str]) -> JobFunction:
    """Copy of the function with its uniform set replaced."""
    updated = function.model_copy(deep=True)
    updated.uniform_ids = normalize_ids(uniform_ids)
    updated.touch()
    return updated


def with_exam_bucket(
    function: JobFunction,
    trigger_event: TriggerEvent,
    exam_ids: List[str]
) -> JobFunction:
    """
    Copy of the function with a single trigger-event bucket replaced.

    Other buckets are left untouched. An empty list removes the bucket.
    """
    event = TriggerEvent(trigger_event)
    buckets = {key: list(value) for key, value in function.exams_by_trigger.items()}
    ids = normalize_ids(exam_ids)

    if ids:
        buckets[event] = ids
    else:
        buckets.pop(event, None)

    updated = function.model_copy(deep=True)
    updated.exams_by_trigger = buckets
    updated.touch()
    return updated


def count_distinct_exams(function: JobFunction) -> int:
    """
    Number of distinct exams across all trigger-event buckets.

    An exam bound under two events counts once.
    """
    return len(function.distinct_exam_ids())


def buckets_requiring(function: JobFunction, exam_id: str) -> List[TriggerEvent]:
    """Trigger-events whose bucket contains the exam, in enum order."""
    return [event for event in TriggerEvent if exam_id in function.exams_by_trigger.get(event, [])]


def estimate_bucket_cost(
    function: JobFunction,
    trigger_event: TriggerEvent,
    provider_id: str,
    exams: Dict[str, Exam]
) -> ExamCostEstimate:
    """
    Sum the provider's prices for the exams of one bucket.

    Args:
        function: Function whose bucket is priced
        trigger_event: Bucket to price
        provider_id: Provider whose price list is used
        exams: Exams of the bucket keyed by ID

    Returns:
        ExamCostEstimate with the total and the exams lacking a price
    """
    event = TriggerEvent(trigger_event)
    estimate = ExamCostEstimate(
        function_id=function.id,
        trigger_event=event,
        provider_id=provider_id
    )

    total = Decimal("0")
    for exam_id in function.exam_ids_for(event):
        exam: Optional[Exam] = exams.get(exam_id)
        price = exam.price_for(provider_id) if exam else None
        if price is None:
            estimate.unpriced_exam_ids.append(exam_id)
            continue
        estimate.priced[exam_id] = price
        total += price

    estimate.total = total
    return estimate
