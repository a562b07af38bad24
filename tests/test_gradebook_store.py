"""Tests for the JSON-file gradebook store."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from tracker.api import gradebook_store
from tracker.api.gradebook_models import RowOutcome


def _seed(gradebook_dir: Path) -> None:
    gradebook_dir.mkdir(parents=True, exist_ok=True)
    tables = {
        "classes": [
            {"class_id": "c1", "class_name": "Grade 11A", "shift": "Full-time"},
            {"class_id": "c2", "class_name": "Grade 11B", "shift": "Part-time"},
            {"class_id": "", "class_name": "ignored"},
        ],
        "students": [
            {"student_id": "ST001", "name": "John Doe", "class_id": "c1"},
            {"student_id": "ST002", "name": "Jane Smith", "class_id": "c2"},
            {"student_id": "ST004", "name": None, "class_id": "c1"},
            {"student_id": "ST009", "class_name": "Computer Science A"},
            {"name": "no id"},
        ],
        "assignments": [
            {"assignment_id": "1", "title": "Mathematics Quiz 1", "class_id": "c1", "max_marks": 100},
            {"assignment_id": "3", "title": "English Essay", "class_id": "c2", "max_marks": 80},
            {"assignment_id": "bad", "title": "Broken", "class_id": "c1", "max_marks": 0},
        ],
        "marks": [
            {"mark_id": "m1", "student_id": "ST001", "assignment_id": "1", "marks_obtained": 85},
            {"mark_id": "m2", "student_id": "ST002", "assignment_id": "3", "marks_obtained": "72"},
            {"mark_id": "m3", "student_id": "ST002", "assignment_id": "3", "marks_obtained": "n/a"},
        ],
    }
    for name, records in tables.items():
        (gradebook_dir / f"{name}.json").write_text(json.dumps(records), encoding="utf-8")


def test_missing_tables_read_as_empty(tmp_path):
    assert gradebook_store.load_roster(tmp_path) == []
    assert gradebook_store.load_assignments(tmp_path) == []
    assert gradebook_store.load_marks(tmp_path) == []
    assert gradebook_store.get_assignment(tmp_path, "1") is None


def test_corrupt_table_reads_as_empty(tmp_path):
    (tmp_path / "students.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "classes.json").write_text('{"a": 1}', encoding="utf-8")
    assert gradebook_store.load_roster(tmp_path) == []
    assert gradebook_store.load_classes(tmp_path) == []


def test_roster_resolves_class_names(tmp_path):
    _seed(tmp_path)
    roster = {entry.student_id: entry for entry in gradebook_store.load_roster(tmp_path)}
    assert set(roster) == {"ST001", "ST002", "ST004", "ST009"}
    assert roster["ST001"].class_name == "Grade 11A"
    assert roster["ST002"].class_name == "Grade 11B"
    assert roster["ST004"].name == ""
    assert roster["ST009"].class_name == "Computer Science A"


def test_load_assignments_skips_invalid_ceiling(tmp_path):
    _seed(tmp_path)
    ids = [a.assignment_id for a in gradebook_store.load_assignments(tmp_path)]
    assert ids == ["1", "3"]


def test_get_assignment_raises_on_invalid_ceiling(tmp_path):
    _seed(tmp_path)
    assignment = gradebook_store.get_assignment(tmp_path, "1")
    assert assignment.class_name == "Grade 11A"
    assert assignment.max_marks == 100.0
    with pytest.raises(ValueError):
        gradebook_store.get_assignment(tmp_path, "bad")
    assert gradebook_store.get_assignment(tmp_path, "") is None


def test_existing_marks_scoped_to_assignment(tmp_path):
    _seed(tmp_path)
    existing = gradebook_store.load_existing_marks(tmp_path, "3")
    assert [(m.student_id, m.assignment_id, m.marks) for m in existing] == [("ST002", "3", 72.0)]


def test_upsert_marks_updates_and_inserts(tmp_path):
    _seed(tmp_path)
    outcomes = [
        RowOutcome("ST001", "John Doe", 90.0, "replacing"),
        RowOutcome("ST004", "Student ST004", 40.0, "new"),
        RowOutcome("ST002", "Jane Smith", 10.0, "rejected", "Student not in Grade 11A"),
        RowOutcome("ST004", "Student ST004", 45.0, "new"),
    ]
    written = gradebook_store.upsert_marks(tmp_path, "1", outcomes, submission_date="2026-02-07")
    assert written == 2

    marks = {(m["student_id"], m["assignment_id"]): m for m in gradebook_store.load_marks(tmp_path)}
    assert marks[("ST001", "1")]["marks_obtained"] == 90.0
    assert marks[("ST001", "1")]["mark_id"] == "m1"
    assert marks[("ST004", "1")]["marks_obtained"] == 45.0
    assert marks[("ST004", "1")]["submission_date"] == "2026-02-07"
    assert ("ST002", "1") not in marks


def test_upsert_with_nothing_accepted_leaves_file_untouched(tmp_path):
    written = gradebook_store.upsert_marks(
        tmp_path, "1", [RowOutcome("x", "Unknown", 1.0, "rejected", "Student not found")], submission_date="d"
    )
    assert written == 0
    assert not (tmp_path / "marks.json").exists()


def test_upsert_counts_each_student_once(tmp_path):
    outcomes = [
        RowOutcome("ST001", "John Doe", 70.0, "new"),
        RowOutcome("ST001", "John Doe", 75.0, "new"),
    ]
    written = gradebook_store.upsert_marks(tmp_path, "1", outcomes, submission_date="2026-02-07")
    marks = gradebook_store.load_marks(tmp_path)
    assert written == len(marks) == 1
    assert marks[0]["marks_obtained"] == 75.0
