from __future__ import annotations

from datetime import datetime
from pathlib import Path

GRADEBOOK_TABLES = ("classes", "students", "assignments", "marks")


def today_iso() -> str:
    return datetime.now().date().isoformat()


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def gradebook_table_path(gradebook_dir: Path, table: str) -> Path:
    if table not in GRADEBOOK_TABLES:
        raise ValueError(f"invalid gradebook table: {table}")
    return gradebook_dir / f"{table}.json"


def bulk_upload_audit_path(audit_dir: Path) -> Path:
    return audit_dir / "bulk_upload.jsonl"
