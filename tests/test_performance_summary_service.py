import unittest

from tracker.api.gradebook_models import AssignmentRef, RosterEntry
from tracker.api.performance_summary_service import (
    PerformanceSummaryDeps,
    assignment_stats,
    class_stats,
    dashboard_overview,
    grade_letter,
    mark_percentage,
    student_stats,
    top_performers,
)


def _deps(marks=None):
    classes = [
        {"class_id": "c1", "class_name": "Grade 11A", "shift": "Full-time"},
        {"class_id": "c2", "class_name": "Grade 11B", "shift": "Part-time"},
        {"class_id": "c3", "class_name": "CS A", "shift": "Full-time"},
    ]
    roster = [
        RosterEntry(student_id="ST001", name="John Doe", class_name="Grade 11A"),
        RosterEntry(student_id="ST004", name="", class_name="Grade 11A"),
        RosterEntry(student_id="ST002", name="Jane Smith", class_name="Grade 11B"),
    ]
    assignments = [
        AssignmentRef(assignment_id="1", class_name="Grade 11A", max_marks=100, title="Mathematics Quiz 1"),
        AssignmentRef(assignment_id="4", class_name="Grade 11A", max_marks=50, title="Physics Lab Report"),
        AssignmentRef(assignment_id="3", class_name="Grade 11B", max_marks=80, title="English Essay"),
    ]
    if marks is None:
        marks = [
            {"student_id": "ST001", "assignment_id": "1", "marks_obtained": 85.0},
            {"student_id": "ST004", "assignment_id": "1", "marks_obtained": 65.0},
            {"student_id": "ST001", "assignment_id": "4", "marks_obtained": 45.0},
            {"student_id": "ST002", "assignment_id": "3", "marks_obtained": 72.0},
            {"student_id": "ST002", "assignment_id": "gone", "marks_obtained": 5.0},
        ]
    return PerformanceSummaryDeps(
        load_classes=lambda: list(classes),
        load_roster=lambda: list(roster),
        load_assignments=lambda: list(assignments),
        load_marks=lambda: list(marks),
    )


class PerformanceSummaryServiceTest(unittest.TestCase):
    def test_percentage_and_grades(self):
        self.assertEqual(mark_percentage(45, 50), 90.0)
        self.assertEqual(mark_percentage(1, 0), 0.0)
        self.assertEqual(grade_letter(90), "A+")
        self.assertEqual(grade_letter(89.9), "A")
        self.assertEqual(grade_letter(70), "B")
        self.assertEqual(grade_letter(60), "C")
        self.assertEqual(grade_letter(59.9), "F")

    def test_overview_averages_known_assignments_only(self):
        out = dashboard_overview(deps=_deps())
        self.assertEqual(out["total_classes"], 3)
        self.assertEqual(out["total_students"], 3)
        self.assertEqual(out["total_assignments"], 3)
        self.assertEqual(out["total_marks"], 5)
        # (85 + 65 + 90 + 90) / 4
        self.assertEqual(out["average_performance"], 82.5)

    def test_overview_without_marks(self):
        self.assertEqual(dashboard_overview(deps=_deps(marks=[]))["average_performance"], 0)

    def test_assignment_stats(self):
        out = assignment_stats(deps=_deps())
        by_id = {item["assignment_id"]: item for item in out["assignments"]}
        self.assertEqual(by_id["1"]["total_students"], 2)
        self.assertEqual(by_id["1"]["submitted_count"], 2)
        self.assertEqual(by_id["1"]["average_score"], 75.0)
        self.assertEqual(by_id["4"]["submitted_count"], 1)
        self.assertEqual(by_id["4"]["average_score"], 90.0)
        self.assertEqual(by_id["3"]["average_score"], 90.0)
        # completion: 2/2, 1/2, 1/1
        self.assertEqual(out["average_completion"], 83)
        self.assertEqual(out["average_score"], 85.0)

    def test_student_stats(self):
        out = student_stats(deps=_deps())
        by_id = {item["student_id"]: item for item in out["students"]}
        self.assertEqual(by_id["ST001"]["total_assignments"], 2)
        self.assertEqual(by_id["ST001"]["completed_assignments"], 2)
        self.assertEqual(by_id["ST001"]["average_score"], 87.5)
        self.assertEqual(by_id["ST004"]["display_name"], "Student ST004")
        self.assertEqual(by_id["ST002"]["completed_assignments"], 2)
        self.assertEqual(by_id["ST002"]["average_score"], 90.0)

    def test_class_stats(self):
        out = class_stats(deps=_deps())
        self.assertEqual(out["total_classes"], 3)
        self.assertEqual(out["full_time_classes"], 2)
        self.assertEqual(out["part_time_classes"], 1)
        counts = {item["class_name"]: item["student_count"] for item in out["classes"]}
        self.assertEqual(counts, {"Grade 11A": 2, "Grade 11B": 1, "CS A": 0})

    def test_top_performers(self):
        out = top_performers(deps=_deps())
        self.assertEqual(len(out["performers"]), 3)
        self.assertEqual([p["percentage"] for p in out["performers"]], [90.0, 90.0, 85.0])
        self.assertEqual(out["performers"][0]["grade"], "A+")
        self.assertEqual(len(top_performers(1, deps=_deps())["performers"]), 1)


if __name__ == "__main__":
    unittest.main()
