# SPDX-License-Identifier: Apache-2.0

"""
Compliance ledger rules.

This module contains pure functions that derive record statuses and diff a
function's requirements against the records an employee actually holds.
"""

from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from ..models.entities import ComplianceRecord, EquipmentItem, Exam, JobFunction
from ..models.enums import ComplianceStatus, RecordKind, TriggerEvent, UrgencyBucket
from ..models.responses import PendingRequirement, TrackedRecord
from .functions import buckets_requiring
from .temporal_status import compute_status, days_until

URGENCY_ORDER = {
    UrgencyBucket.MISSING: 0,
    UrgencyBucket.EXPIRED: 1,
    UrgencyBucket.EXPIRING_SOON: 2,
}


def track_record(record: ComplianceRecord, now: date, warning_window: timedelta) -> TrackedRecord:
    """Attach the status derived at ``now`` to a record."""
    return TrackedRecord(
        **record.model_dump(),
        status=compute_status(record.expires_on, now, warning_window),
        days_until_expiry=days_until(record.expires_on, now)
    )


def select_best_record(records: Iterable[ComplianceRecord]) -> Optional[ComplianceRecord]:
    """
    Pick the record that best satisfies a requirement.

    A non-expiring record beats any dated one; among dated records the latest
    expiry wins, then the latest performed date.
    """
    best: Optional[ComplianceRecord] = None
    for record in records:
        if best is None or _record_rank(record) > _record_rank(best):
            best = record
    return best


def _record_rank(record: ComplianceRecord):
    never_expires = record.expires_on is None
    return (never_expires, record.expires_on or date.min, record.performed_on)


def urgency_for(status: Optional[ComplianceStatus]) -> Optional[UrgencyBucket]:
    """
    Map a best-record status to a pending bucket.

    Returns None when the requirement is satisfied.
    """
    if status is None:
        return UrgencyBucket.MISSING
    if status == ComplianceStatus.EXPIRED:
        return UrgencyBucket.EXPIRED
    if status == ComplianceStatus.EXPIRING_SOON:
        return UrgencyBucket.EXPIRING_SOON
    return None


def group_records(
    records: Iterable[ComplianceRecord],
    kind: RecordKind
) -> Dict[str, List[ComplianceRecord]]:
    """Records of one kind grouped by catalog ID."""
    grouped: Dict[str, List[ComplianceRecord]] = {}
    for record in records:
        if record.kind == kind:
            grouped.setdefault(record.catalog_id, []).append(record)
    return grouped


def compute_pending(
    function: JobFunction,
    exams: Dict[str, Exam],
    equipment: Dict[str, EquipmentItem],
    records: List[ComplianceRecord],
    now: date,
    warning_window: timedelta,
    trigger_events: Optional[List[TriggerEvent]] = None
) -> List[PendingRequirement]:
    """
    Diff a function's requirements against an employee's records.

    Args:
        function: Function whose requirements are checked
        exams: Active exams referenced by the function, keyed by ID
        equipment: Active equipment referenced by the function, keyed by ID
        records: All records of the employee
        now: Reference date
        warning_window: Length of the "expiring soon" window
        trigger_events: Restrict exam buckets; None checks every bucket

    Returns:
        Pending requirements ordered by urgency, then name
    """
    events = [TriggerEvent(event) for event in trigger_events] if trigger_events else list(TriggerEvent)
    exam_records = group_records(records, RecordKind.EXAM)
    equipment_records = group_records(records, RecordKind.EQUIPMENT)
    pending: List[PendingRequirement] = []

    for exam_id in function.distinct_exam_ids():
        exam = exams.get(exam_id)
        if exam is None:
            continue
        required_by = [event for event in buckets_requiring(function, exam_id) if event in events]
        if not required_by:
            continue

        candidates = exam_records.get(exam_id, [])
        if not exam.expires_on_schedule():
            # One-off exams are satisfied per trigger-event, not by any record
            covered = {record.trigger_event for record in candidates}
            required_by = [event for event in required_by if event not in covered]
            if not required_by:
                continue
            candidates = []

        item = _pending_item(RecordKind.EXAM, exam, candidates, now, warning_window)
        if item is not None:
            item.trigger_events = required_by
            pending.append(item)

    for equipment_id in function.equipment_ids:
        piece = equipment.get(equipment_id)
        if piece is None:
            continue
        item = _pending_item(
            RecordKind.EQUIPMENT, piece, equipment_records.get(equipment_id, []), now, warning_window
        )
        if item is not None:
            pending.append(item)

    return sorted(pending, key=lambda p: (URGENCY_ORDER[p.urgency], p.kind.value, _item_name(p.item)))


def _pending_item(kind, catalog_item, records, now, warning_window) -> Optional[PendingRequirement]:
    best = select_best_record(records)
    status = compute_status(best.expires_on, now, warning_window) if best else None
    urgency = urgency_for(status)
    if urgency is None:
        return None
    return PendingRequirement(
        kind=kind,
        item=catalog_item,
        urgency=urgency,
        latest_record=best,
        expires_on=best.expires_on if best else None,
        days_until_expiry=days_until(best.expires_on, now) if best else None
    )


def _item_name(item) -> str:
    return item.name.casefold()
