"""Paths and service entry points shared by the routes and the CLI."""
from __future__ import annotations

from .audit_log_service import list_audit_entries as _list_audit_entries_impl
from .bulk_upload_service import (
    BulkUploadError,
    marks_template as _marks_template_impl,
    run_bulk_upload as _run_bulk_upload_impl,
)
from .config import (
    APP_ROOT,
    AUDIT_DIR,
    AUDIT_LIST_LIMIT_MAX,
    BULK_UPLOAD_DELAY_MS,
    DATA_DIR,
    DEFAULT_ACTOR,
    GRADEBOOK_DIR,
    TOP_PERFORMERS_LIMIT,
)
from .performance_summary_service import (
    assignment_stats as _assignment_stats_impl,
    class_stats as _class_stats_impl,
    dashboard_overview as _dashboard_overview_impl,
    student_stats as _student_stats_impl,
    top_performers as _top_performers_impl,
)
from .wiring.gradebook_wiring import (
    _audit_log_deps,
    _bulk_upload_deps,
    _performance_summary_deps,
    _reconcile_deps,
)

__all__ = [
    "APP_ROOT",
    "AUDIT_DIR",
    "AUDIT_LIST_LIMIT_MAX",
    "BULK_UPLOAD_DELAY_MS",
    "DATA_DIR",
    "DEFAULT_ACTOR",
    "GRADEBOOK_DIR",
    "TOP_PERFORMERS_LIMIT",
    "BulkUploadError",
    "_assignment_stats_impl",
    "_audit_log_deps",
    "_bulk_upload_deps",
    "_class_stats_impl",
    "_dashboard_overview_impl",
    "_list_audit_entries_impl",
    "_marks_template_impl",
    "_performance_summary_deps",
    "_reconcile_deps",
    "_run_bulk_upload_impl",
    "_student_stats_impl",
    "_top_performers_impl",
]
