#!/usr/bin/env python3
import argparse
import json
import sys
import time
from pathlib import Path

from tracker.api import gradebook_store
from tracker.api.audit_log_service import AuditLogDeps, append_audit_entry
from tracker.api.bulk_upload_service import BulkUploadDeps, BulkUploadError, run_bulk_upload
from tracker.api.config import DATA_DIR, DEFAULT_ACTOR
from tracker.api.logging_config import configure_logging
from tracker.api.marks_reconcile_service import ReconcileDeps
from tracker.api.paths import bulk_upload_audit_path, now_iso, today_iso


def build_deps(data_dir: Path, actor: str) -> BulkUploadDeps:
    gradebook_dir = data_dir / "gradebook"
    audit_deps = AuditLogDeps(audit_path=bulk_upload_audit_path(data_dir / "audit"))
    return BulkUploadDeps(
        get_assignment=lambda aid: gradebook_store.get_assignment(gradebook_dir, aid),
        reconcile=ReconcileDeps(
            load_roster=lambda: gradebook_store.load_roster(gradebook_dir),
            load_existing_marks=lambda aid: gradebook_store.load_existing_marks(gradebook_dir, aid),
            append_audit_entry=lambda entry: append_audit_entry(entry, deps=audit_deps),
            now_iso=now_iso,
            actor=actor,
        ),
        write_marks=lambda aid, outcomes: gradebook_store.upsert_marks(
            gradebook_dir, aid, outcomes, submission_date=today_iso()
        ),
        sleep=time.sleep,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Validate a marks CSV against the gradebook and report outcomes")
    parser.add_argument("--assignment-id", required=True, help="assignment to upload marks for")
    parser.add_argument("--file", required=True, help="CSV with 'Student ID,Marks' header")
    parser.add_argument("--data-dir", default=str(DATA_DIR), help="data directory holding gradebook/ and audit/")
    parser.add_argument("--actor", default=DEFAULT_ACTOR, help="name recorded in the audit log")
    parser.add_argument("--apply", action="store_true", help="write accepted marks into the gradebook")
    args = parser.parse_args(argv)

    configure_logging()
    text = Path(args.file).read_text(encoding="utf-8-sig")
    deps = build_deps(Path(args.data_dir), args.actor)
    try:
        report = run_bulk_upload(args.assignment_id, text, deps=deps, actor=args.actor, apply=args.apply)
    except BulkUploadError as exc:
        print(json.dumps({"error": exc.detail, "status_code": exc.status_code}, ensure_ascii=False), file=sys.stderr)
        return 1
    print(json.dumps(report, ensure_ascii=False, indent=2))
    if report["write_error"]:
        return 1
    return 0 if report["error_count"] == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
