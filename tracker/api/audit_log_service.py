from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from .fs_atomic import append_jsonl
from .gradebook_models import AuditEntry

_log = logging.getLogger(__name__)

_AUDIT_WRITE_LOCK = threading.Lock()


@dataclass(frozen=True)
class AuditLogDeps:
    audit_path: Path
    limit_max: int = 200


def append_audit_entry(entry: AuditEntry, *, deps: AuditLogDeps) -> None:
    with _AUDIT_WRITE_LOCK:
        append_jsonl(deps.audit_path, entry.to_dict())


def load_audit_entries(*, deps: AuditLogDeps) -> List[AuditEntry]:
    path = deps.audit_path
    if not path.exists():
        return []
    entries: List[AuditEntry] = []
    with path.open(encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                payload = json.loads(line)
            except json.JSONDecodeError:
                _log.warning("skipping corrupt audit line %s in %s", line_no, path)
                continue
            if isinstance(payload, dict):
                entries.append(AuditEntry.from_dict(payload))
    return entries


def list_audit_entries(limit: int, *, deps: AuditLogDeps) -> Dict[str, Any]:
    """Newest entries first, capped at ``deps.limit_max``."""
    limit = max(1, min(int(limit or 1), int(deps.limit_max)))
    entries = load_audit_entries(deps=deps)
    entries.reverse()
    return {
        "ok": True,
        "entries": [item.to_dict() for item in entries[:limit]],
        "total": len(entries),
    }
