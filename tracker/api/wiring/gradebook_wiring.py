"""Gradebook deps builders - bind services to the file-backed store."""
from __future__ import annotations

__all__ = [
    "_audit_log_deps",
    "_reconcile_deps",
    "_bulk_upload_deps",
    "_performance_summary_deps",
]

import time
from typing import List

from ..audit_log_service import AuditLogDeps, append_audit_entry
from ..bulk_upload_service import BulkUploadDeps
from ..gradebook_models import RowOutcome
from ..marks_reconcile_service import ReconcileDeps
from ..paths import bulk_upload_audit_path, now_iso, today_iso
from ..performance_summary_service import PerformanceSummaryDeps
from .. import gradebook_store

from . import get_app_core as _app_core


def _audit_log_deps():
    _ac = _app_core()
    return AuditLogDeps(
        audit_path=bulk_upload_audit_path(_ac.AUDIT_DIR),
        limit_max=_ac.AUDIT_LIST_LIMIT_MAX,
    )


def _reconcile_deps():
    _ac = _app_core()
    gradebook_dir = _ac.GRADEBOOK_DIR
    audit_deps = _audit_log_deps()
    return ReconcileDeps(
        load_roster=lambda: gradebook_store.load_roster(gradebook_dir),
        load_existing_marks=lambda assignment_id: gradebook_store.load_existing_marks(gradebook_dir, assignment_id),
        append_audit_entry=lambda entry: append_audit_entry(entry, deps=audit_deps),
        now_iso=now_iso,
        actor=_ac.DEFAULT_ACTOR,
    )


def _bulk_upload_deps():
    _ac = _app_core()
    gradebook_dir = _ac.GRADEBOOK_DIR

    def _write_marks(assignment_id: str, outcomes: List[RowOutcome]) -> int:
        return gradebook_store.upsert_marks(gradebook_dir, assignment_id, outcomes, submission_date=today_iso())

    return BulkUploadDeps(
        get_assignment=lambda assignment_id: gradebook_store.get_assignment(gradebook_dir, assignment_id),
        reconcile=_reconcile_deps(),
        write_marks=_write_marks,
        sleep=time.sleep,
        delay_ms=_ac.BULK_UPLOAD_DELAY_MS,
    )


def _performance_summary_deps():
    _ac = _app_core()
    gradebook_dir = _ac.GRADEBOOK_DIR
    return PerformanceSummaryDeps(
        load_classes=lambda: gradebook_store.load_classes(gradebook_dir),
        load_roster=lambda: gradebook_store.load_roster(gradebook_dir),
        load_assignments=lambda: gradebook_store.load_assignments(gradebook_dir),
        load_marks=lambda: gradebook_store.load_marks(gradebook_dir),
        top_performers_limit=_ac.TOP_PERFORMERS_LIMIT,
    )
