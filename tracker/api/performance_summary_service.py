from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List

from .gradebook_models import AssignmentRef, RosterEntry

_GRADE_BANDS = (
    (90.0, "A+"),
    (80.0, "A"),
    (70.0, "B"),
    (60.0, "C"),
)


@dataclass(frozen=True)
class PerformanceSummaryDeps:
    load_classes: Callable[[], List[Dict[str, Any]]]
    load_roster: Callable[[], List[RosterEntry]]
    load_assignments: Callable[[], List[AssignmentRef]]
    load_marks: Callable[[], List[Dict[str, Any]]]
    top_performers_limit: int = 3


def mark_percentage(marks: float, max_marks: float) -> float:
    if not max_marks or max_marks <= 0:
        return 0.0
    return float(marks) / float(max_marks) * 100.0


def grade_letter(percentage: float) -> str:
    for threshold, letter in _GRADE_BANDS:
        if percentage >= threshold:
            return letter
    return "F"


def _mean(values: List[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _mark_percentages(marks: List[Dict[str, Any]], assignments: Dict[str, AssignmentRef]) -> List[float]:
    out: List[float] = []
    for mark in marks:
        assignment = assignments.get(mark["assignment_id"])
        if assignment is None:
            continue
        out.append(mark_percentage(mark["marks_obtained"], assignment.max_marks))
    return out


def dashboard_overview(*, deps: PerformanceSummaryDeps) -> Dict[str, Any]:
    assignments = {item.assignment_id: item for item in deps.load_assignments()}
    marks = deps.load_marks()
    return {
        "ok": True,
        "total_classes": len(deps.load_classes()),
        "total_students": len(deps.load_roster()),
        "total_assignments": len(assignments),
        "total_marks": len(marks),
        "average_performance": round(_mean(_mark_percentages(marks, assignments)), 1),
    }


def assignment_stats(*, deps: PerformanceSummaryDeps) -> Dict[str, Any]:
    roster = deps.load_roster()
    marks = deps.load_marks()
    items: List[Dict[str, Any]] = []
    completion_rates: List[float] = []
    for assignment in deps.load_assignments():
        total_students = sum(1 for entry in roster if entry.class_name == assignment.class_name)
        scores = [m["marks_obtained"] for m in marks if m["assignment_id"] == assignment.assignment_id]
        average_score = mark_percentage(_mean(scores), assignment.max_marks) if scores else 0.0
        completion_rates.append(len(scores) / total_students if total_students > 0 else 0.0)
        items.append(
            {
                **assignment.to_dict(),
                "total_students": total_students,
                "submitted_count": len(scores),
                "average_score": round(average_score, 1),
            }
        )
    return {
        "ok": True,
        "assignments": items,
        "average_completion": round(_mean(completion_rates) * 100) if items else 0,
        "average_score": round(_mean([item["average_score"] for item in items]), 1),
    }


def student_stats(*, deps: PerformanceSummaryDeps) -> Dict[str, Any]:
    assignments = {item.assignment_id: item for item in deps.load_assignments()}
    marks = deps.load_marks()
    items: List[Dict[str, Any]] = []
    for entry in deps.load_roster():
        student_marks = [m for m in marks if m["student_id"] == entry.student_id]
        average_score = _mean(_mark_percentages(student_marks, assignments))
        items.append(
            {
                "student_id": entry.student_id,
                "name": entry.name,
                "display_name": entry.display_name(),
                "class_name": entry.class_name,
                "total_assignments": sum(1 for a in assignments.values() if a.class_name == entry.class_name),
                "completed_assignments": len(student_marks),
                "average_score": round(average_score, 1),
            }
        )
    return {"ok": True, "students": items}


def class_stats(*, deps: PerformanceSummaryDeps) -> Dict[str, Any]:
    classes = deps.load_classes()
    roster = deps.load_roster()
    items = [
        {
            **item,
            "student_count": sum(1 for entry in roster if entry.class_name == item["class_name"]),
        }
        for item in classes
    ]
    return {
        "ok": True,
        "classes": items,
        "total_classes": len(classes),
        "full_time_classes": sum(1 for item in classes if item.get("shift") == "Full-time"),
        "part_time_classes": sum(1 for item in classes if item.get("shift") == "Part-time"),
    }


def top_performers(limit: int = 0, *, deps: PerformanceSummaryDeps) -> Dict[str, Any]:
    limit = int(limit or deps.top_performers_limit)
    assignments = {item.assignment_id: item for item in deps.load_assignments()}
    names = {entry.student_id: entry.display_name() for entry in deps.load_roster()}
    ranked: List[Dict[str, Any]] = []
    for mark in deps.load_marks():
        assignment = assignments.get(mark["assignment_id"])
        if assignment is None:
            continue
        percentage = mark_percentage(mark["marks_obtained"], assignment.max_marks)
        ranked.append(
            {
                "student_id": mark["student_id"],
                "student_name": names.get(mark["student_id"], f"Student {mark['student_id']}"),
                "assignment_id": assignment.assignment_id,
                "assignment_title": assignment.title,
                "marks_obtained": mark["marks_obtained"],
                "max_marks": assignment.max_marks,
                "percentage": round(percentage, 1),
                "grade": grade_letter(percentage),
            }
        )
    ranked.sort(key=lambda item: item["percentage"], reverse=True)
    return {"ok": True, "performers": ranked[: max(1, limit)]}
