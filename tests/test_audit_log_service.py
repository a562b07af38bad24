from __future__ import annotations

import json

from tracker.api.audit_log_service import AuditLogDeps, append_audit_entry, list_audit_entries, load_audit_entries
from tracker.api.gradebook_models import AuditEntry


def _entry(n: int) -> AuditEntry:
    return AuditEntry(
        entry_id=f"e{n}",
        timestamp=f"2026-02-07T10:00:0{n}",
        actor="Admin User",
        assignment_id="1",
        assignment_title="Mathematics Quiz 1",
        action="Bulk Upload",
        records_processed=n,
    )


def test_append_then_list_newest_first(tmp_path):
    deps = AuditLogDeps(audit_path=tmp_path / "audit" / "bulk_upload.jsonl")
    for n in range(3):
        append_audit_entry(_entry(n), deps=deps)

    result = list_audit_entries(10, deps=deps)
    assert result["ok"] is True
    assert result["total"] == 3
    assert [item["entry_id"] for item in result["entries"]] == ["e2", "e1", "e0"]


def test_list_respects_limit_and_cap(tmp_path):
    deps = AuditLogDeps(audit_path=tmp_path / "a.jsonl", limit_max=2)
    for n in range(5):
        append_audit_entry(_entry(n), deps=deps)
    assert len(list_audit_entries(1, deps=deps)["entries"]) == 1
    assert len(list_audit_entries(100, deps=deps)["entries"]) == 2
    assert len(list_audit_entries(0, deps=deps)["entries"]) == 1


def test_missing_file_lists_nothing(tmp_path):
    deps = AuditLogDeps(audit_path=tmp_path / "none.jsonl")
    assert list_audit_entries(5, deps=deps) == {"ok": True, "entries": [], "total": 0}


def test_corrupt_lines_are_skipped(tmp_path):
    path = tmp_path / "a.jsonl"
    path.write_text(json.dumps(_entry(1).to_dict()) + "\n{broken\n\n[1,2]\n", encoding="utf-8")
    entries = load_audit_entries(deps=AuditLogDeps(audit_path=path))
    assert [e.entry_id for e in entries] == ["e1"]
