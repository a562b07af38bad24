from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .gradebook_models import (
    AUDIT_ACTION_BULK_UPLOAD,
    STATUS_NEW,
    STATUS_REJECTED,
    STATUS_REPLACING,
    AssignmentRef,
    AuditEntry,
    ExistingMarkRef,
    ParsedRow,
    RosterEntry,
    RowOutcome,
    format_marks,
)

_log = logging.getLogger(__name__)

UNKNOWN_STUDENT_NAME = "Unknown"
REASON_NOT_FOUND = "Student not found"
REASON_AMBIGUOUS = "Student ID is ambiguous"


@dataclass(frozen=True)
class ReconcileDeps:
    load_roster: Callable[[], List[RosterEntry]]
    load_existing_marks: Callable[[str], List[ExistingMarkRef]]
    append_audit_entry: Callable[[AuditEntry], None]
    now_iso: Callable[[], str]
    actor: str


def _index_roster(roster: Iterable[RosterEntry]) -> Dict[str, List[RosterEntry]]:
    index: Dict[str, List[RosterEntry]] = {}
    for entry in roster:
        index.setdefault(entry.student_id, []).append(entry)
    return index


def _existing_keys(existing_marks: Iterable[ExistingMarkRef]) -> Set[Tuple[str, str]]:
    return {(mark.student_id, mark.assignment_id) for mark in existing_marks}


def class_mismatch_reason(assignment: AssignmentRef) -> str:
    return f"Student not in {assignment.class_name}"


def range_reason(assignment: AssignmentRef) -> str:
    return f"Invalid marks (0-{format_marks(assignment.max_marks)} allowed)"


def classify_row(
    row: ParsedRow,
    assignment: AssignmentRef,
    roster_index: Dict[str, List[RosterEntry]],
    existing_keys: Set[Tuple[str, str]],
) -> RowOutcome:
    """Apply roster, class, range and existing-mark checks in that order.

    The first failing check decides the rejection reason; later checks are
    not evaluated for that row.
    """
    matches = roster_index.get(row.student_id) or []
    if len(matches) != 1:
        return RowOutcome(
            student_id=row.student_id,
            student_name=UNKNOWN_STUDENT_NAME,
            marks=row.marks,
            status=STATUS_REJECTED,
            message=REASON_NOT_FOUND if not matches else REASON_AMBIGUOUS,
        )
    entry = matches[0]
    display_name = entry.display_name()

    if entry.class_name != assignment.class_name:
        return RowOutcome(
            student_id=row.student_id,
            student_name=display_name,
            marks=row.marks,
            status=STATUS_REJECTED,
            message=class_mismatch_reason(assignment),
        )

    if row.marks < 0 or row.marks > assignment.max_marks:
        return RowOutcome(
            student_id=row.student_id,
            student_name=display_name,
            marks=row.marks,
            status=STATUS_REJECTED,
            message=range_reason(assignment),
        )

    key = (row.student_id, assignment.assignment_id)
    return RowOutcome(
        student_id=row.student_id,
        student_name=display_name,
        marks=row.marks,
        status=STATUS_REPLACING if key in existing_keys else STATUS_NEW,
    )


def reconcile_rows(
    rows: Sequence[ParsedRow],
    assignment: AssignmentRef,
    roster: Iterable[RosterEntry],
    existing_marks: Iterable[ExistingMarkRef],
) -> List[RowOutcome]:
    roster_index = _index_roster(roster)
    existing_keys = _existing_keys(existing_marks)
    return [classify_row(row, assignment, roster_index, existing_keys) for row in rows]


def build_audit_entry(
    assignment: AssignmentRef,
    records_processed: int,
    *,
    actor: str,
    timestamp: str,
) -> AuditEntry:
    return AuditEntry(
        entry_id=uuid.uuid4().hex,
        timestamp=timestamp,
        actor=actor,
        assignment_id=assignment.assignment_id,
        assignment_title=assignment.title,
        action=AUDIT_ACTION_BULK_UPLOAD,
        records_processed=int(records_processed),
    )


def reconcile_marks(
    rows: Sequence[ParsedRow],
    assignment: AssignmentRef,
    *,
    deps: ReconcileDeps,
    actor: Optional[str] = None,
) -> Tuple[List[RowOutcome], AuditEntry]:
    roster = deps.load_roster()
    existing_marks = deps.load_existing_marks(assignment.assignment_id)
    outcomes = reconcile_rows(rows, assignment, roster, existing_marks)

    entry = build_audit_entry(
        assignment,
        len(outcomes),
        actor=str(actor or "").strip() or deps.actor,
        timestamp=deps.now_iso(),
    )
    deps.append_audit_entry(entry)
    _log.info(
        "marks reconciled assignment=%s rows=%s rejected=%s",
        assignment.assignment_id,
        len(outcomes),
        sum(1 for item in outcomes if item.status == STATUS_REJECTED),
    )
    return outcomes, entry
