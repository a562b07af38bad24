from __future__ import annotations

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .fs_atomic import atomic_write_json
from .gradebook_models import AssignmentRef, ExistingMarkRef, RosterEntry, RowOutcome
from .paths import gradebook_table_path

_log = logging.getLogger(__name__)

_MARKS_WRITE_LOCK = threading.Lock()

CLASS_SHIFTS = ("Full-time", "Part-time")


def load_table(gradebook_dir: Path, table: str) -> List[Dict[str, Any]]:
    path = gradebook_table_path(gradebook_dir, table)
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        _log.warning("failed to read gradebook table %s", path, exc_info=True)
        return []
    if not isinstance(data, list):
        _log.warning("gradebook table %s is not a list", path)
        return []
    return [item for item in data if isinstance(item, dict)]


def save_table(gradebook_dir: Path, table: str, records: List[Dict[str, Any]]) -> None:
    atomic_write_json(gradebook_table_path(gradebook_dir, table), records)


def load_classes(gradebook_dir: Path) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for record in load_table(gradebook_dir, "classes"):
        class_id = str(record.get("class_id") or "").strip()
        class_name = str(record.get("class_name") or "").strip()
        if not class_id or not class_name:
            continue
        shift = str(record.get("shift") or "").strip()
        out.append(
            {
                "class_id": class_id,
                "class_name": class_name,
                "shift": shift if shift in CLASS_SHIFTS else "",
            }
        )
    return out


def _class_names_by_id(gradebook_dir: Path) -> Dict[str, str]:
    return {item["class_id"]: item["class_name"] for item in load_classes(gradebook_dir)}


def _resolve_class_name(record: Dict[str, Any], class_names: Dict[str, str]) -> str:
    class_id = str(record.get("class_id") or "").strip()
    if class_id:
        return class_names.get(class_id, class_id)
    return str(record.get("class_name") or "").strip()


def load_roster(gradebook_dir: Path) -> List[RosterEntry]:
    class_names = _class_names_by_id(gradebook_dir)
    roster: List[RosterEntry] = []
    for record in load_table(gradebook_dir, "students"):
        student_id = str(record.get("student_id") or "").strip()
        if not student_id:
            continue
        roster.append(
            RosterEntry(
                student_id=student_id,
                class_name=_resolve_class_name(record, class_names),
                name=str(record.get("name") or "").strip(),
            )
        )
    return roster


def _assignment_from_record(record: Dict[str, Any], class_names: Dict[str, str]) -> Optional[AssignmentRef]:
    assignment_id = str(record.get("assignment_id") or "").strip()
    if not assignment_id:
        return None
    try:
        return AssignmentRef(
            assignment_id=assignment_id,
            class_name=_resolve_class_name(record, class_names),
            max_marks=record.get("max_marks"),
            title=str(record.get("title") or "").strip(),
        )
    except ValueError:
        _log.warning("assignment %s has invalid max_marks=%r", assignment_id, record.get("max_marks"))
        return None


def load_assignments(gradebook_dir: Path) -> List[AssignmentRef]:
    class_names = _class_names_by_id(gradebook_dir)
    out: List[AssignmentRef] = []
    for record in load_table(gradebook_dir, "assignments"):
        assignment = _assignment_from_record(record, class_names)
        if assignment is not None:
            out.append(assignment)
    return out


def get_assignment(gradebook_dir: Path, assignment_id: str) -> Optional[AssignmentRef]:
    """Resolve one assignment; raises ``ValueError`` when its ``max_marks`` is unusable."""
    aid = str(assignment_id or "").strip()
    if not aid:
        return None
    for record in load_table(gradebook_dir, "assignments"):
        if str(record.get("assignment_id") or "").strip() != aid:
            continue
        return AssignmentRef(
            assignment_id=aid,
            class_name=_resolve_class_name(record, _class_names_by_id(gradebook_dir)),
            max_marks=record.get("max_marks"),
            title=str(record.get("title") or "").strip(),
        )
    return None


def load_marks(gradebook_dir: Path) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for record in load_table(gradebook_dir, "marks"):
        student_id = str(record.get("student_id") or "").strip()
        assignment_id = str(record.get("assignment_id") or "").strip()
        if not student_id or not assignment_id:
            continue
        try:
            marks_obtained = float(record.get("marks_obtained"))
        except (TypeError, ValueError):
            _log.warning("mark %s/%s has non-numeric score", student_id, assignment_id)
            continue
        out.append(
            {
                "mark_id": str(record.get("mark_id") or ""),
                "student_id": student_id,
                "assignment_id": assignment_id,
                "marks_obtained": marks_obtained,
                "submission_date": str(record.get("submission_date") or ""),
            }
        )
    return out


def load_existing_marks(gradebook_dir: Path, assignment_id: str) -> List[ExistingMarkRef]:
    return [
        ExistingMarkRef(
            student_id=item["student_id"],
            assignment_id=item["assignment_id"],
            marks=item["marks_obtained"],
        )
        for item in load_marks(gradebook_dir)
        if item["assignment_id"] == assignment_id
    ]


def upsert_marks(
    gradebook_dir: Path,
    assignment_id: str,
    outcomes: Iterable[RowOutcome],
    *,
    submission_date: str,
) -> int:
    """Write accepted outcomes into the marks table; returns records written.

    A later row for the same student overrides an earlier one.
    """
    accepted = [item for item in outcomes if item.accepted]
    if not accepted:
        return 0
    with _MARKS_WRITE_LOCK:
        records = load_table(gradebook_dir, "marks")
        positions = {
            (str(rec.get("student_id") or ""), str(rec.get("assignment_id") or "")): idx
            for idx, rec in enumerate(records)
        }
        for outcome in accepted:
            key = (outcome.student_id, assignment_id)
            if key in positions:
                record = records[positions[key]]
                record["marks_obtained"] = outcome.marks
                record["submission_date"] = submission_date
                continue
            positions[key] = len(records)
            records.append(
                {
                    "mark_id": uuid.uuid4().hex,
                    "student_id": outcome.student_id,
                    "assignment_id": assignment_id,
                    "marks_obtained": outcome.marks,
                    "submission_date": submission_date,
                }
            )
        save_table(gradebook_dir, "marks", records)
    written = len({item.student_id for item in accepted})
    _log.info("marks written assignment=%s count=%s", assignment_id, written)
    return written
