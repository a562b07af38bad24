from __future__ import annotations

import re

from .gradebook_models import AssignmentRef

TEMPLATE_HEADER = ("Student ID", "Marks")
TEMPLATE_EXAMPLE_ROWS = (
    ("ST001", "85"),
    ("ST002", "92"),
    ("ST003", "78"),
)
TEMPLATE_MEDIA_TYPE = "text/csv"

_WHITESPACE_RUN = re.compile(r"\s+")


def build_marks_template(assignment: AssignmentRef) -> str:
    # Example rows are placeholders; they do not depend on the assignment's roster.
    lines = [",".join(TEMPLATE_HEADER)]
    lines.extend(",".join(row) for row in TEMPLATE_EXAMPLE_ROWS)
    return "\n".join(lines)


def template_filename(title: str) -> str:
    stem = _WHITESPACE_RUN.sub("_", str(title or ""))
    return f"{stem}_template.csv"
