from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

from .gradebook_models import STATUS_NEW, STATUS_REJECTED, STATUS_REPLACING, AssignmentRef, RowOutcome
from .marks_parse_service import parse_marks_text
from .marks_reconcile_service import ReconcileDeps, reconcile_marks
from .marks_template_service import build_marks_template, template_filename

_log = logging.getLogger(__name__)

MISSING_INPUT_DETAIL = "Please select an assignment and provide CSV data."


class BulkUploadError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = int(status_code)
        self.detail = detail


@dataclass(frozen=True)
class BulkUploadDeps:
    get_assignment: Callable[[str], Optional[AssignmentRef]]
    reconcile: ReconcileDeps
    write_marks: Callable[[str, List[RowOutcome]], int]
    sleep: Callable[[float], None]
    delay_ms: int = 0


_ASSIGNMENT_LOCKS: Dict[str, threading.Lock] = {}
_ASSIGNMENT_LOCKS_GUARD = threading.Lock()


@contextmanager
def assignment_pass_lock(assignment_id: str) -> Iterator[None]:
    with _ASSIGNMENT_LOCKS_GUARD:
        lock = _ASSIGNMENT_LOCKS.setdefault(assignment_id, threading.Lock())
    with lock:
        yield


def resolve_assignment(assignment_id: str, *, deps: BulkUploadDeps) -> AssignmentRef:
    aid = str(assignment_id or "").strip()
    if not aid:
        raise BulkUploadError(status_code=400, detail="assignment_id is required")
    try:
        assignment = deps.get_assignment(aid)
    except ValueError as exc:
        raise BulkUploadError(status_code=400, detail=f"invalid assignment: {exc}") from exc
    if assignment is None:
        raise BulkUploadError(status_code=404, detail="assignment not found")
    return assignment


def summarize_outcomes(outcomes: List[RowOutcome]) -> Dict[str, int]:
    counts = {STATUS_NEW: 0, STATUS_REPLACING: 0, STATUS_REJECTED: 0}
    for item in outcomes:
        counts[item.status] = counts.get(item.status, 0) + 1
    return {
        "total": len(outcomes),
        "success_count": counts[STATUS_NEW] + counts[STATUS_REPLACING],
        "error_count": counts[STATUS_REJECTED],
        "new_count": counts[STATUS_NEW],
        "replacing_count": counts[STATUS_REPLACING],
    }


def marks_template(assignment_id: str, *, deps: BulkUploadDeps) -> Dict[str, Any]:
    assignment = resolve_assignment(assignment_id, deps=deps)
    return {
        "filename": template_filename(assignment.title or assignment.assignment_id),
        "content": build_marks_template(assignment),
    }


def run_bulk_upload(
    assignment_id: Optional[str],
    text: Optional[str],
    *,
    deps: BulkUploadDeps,
    actor: Optional[str] = None,
    apply: bool = False,
) -> Dict[str, Any]:
    if not str(assignment_id or "").strip() or not str(text or "").strip():
        raise BulkUploadError(status_code=400, detail=MISSING_INPUT_DETAIL)
    assignment = resolve_assignment(str(assignment_id), deps=deps)

    with assignment_pass_lock(assignment.assignment_id):
        if deps.delay_ms > 0:
            deps.sleep(deps.delay_ms / 1000.0)
        rows = parse_marks_text(str(text))
        outcomes, audit_entry = reconcile_marks(rows, assignment, deps=deps.reconcile, actor=actor)
        applied = 0
        write_error: Optional[str] = None
        if apply:
            try:
                applied = deps.write_marks(assignment.assignment_id, outcomes)
            except OSError:
                # the audit entry for this pass is already recorded
                _log.exception("bulk upload write failed assignment=%s", assignment.assignment_id)
                write_error = "failed to write marks"

    summary = summarize_outcomes(outcomes)
    _log.info(
        "bulk upload done assignment=%s total=%s errors=%s applied=%s",
        assignment.assignment_id,
        summary["total"],
        summary["error_count"],
        applied,
    )
    return {
        "ok": True,
        "assignment": assignment.to_dict(),
        "results": [item.to_dict() for item in outcomes],
        **summary,
        "audit_entry": audit_entry.to_dict(),
        "applied": applied,
        "write_error": write_error,
    }
