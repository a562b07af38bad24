from __future__ import annotations

import logging
import math
import re
from typing import List, Optional

from .gradebook_models import ParsedRow

_log = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_marks_value(value: str) -> Optional[float]:
    """Read the leading number of ``value`` (``"92 marks"`` -> ``92.0``).

    Trailing text is ignored. ``None`` when there is no numeric prefix or the
    number is not finite.
    """
    match = _LEADING_NUMBER.match(str(value or ""))
    if not match:
        return None
    out = float(match.group(1))
    if not math.isfinite(out):
        return None
    return out


def parse_marks_line(line: str) -> Optional[ParsedRow]:
    """Split one data line into (student id, marks).

    Only the first comma separates the fields, so ``ST001,85,extra`` yields a
    value field of ``85,extra`` whose leading number is used. Lines without a
    usable id or number come back as ``None``.
    """
    student_id, _, value_text = line.partition(",")
    student_id = student_id.strip()
    if not student_id:
        return None
    marks = parse_marks_value(value_text)
    if marks is None:
        return None
    return ParsedRow(student_id=student_id, marks=marks)


def parse_marks_text(text: str) -> List[ParsedRow]:
    rows: List[ParsedRow] = []
    header_skipped = False
    dropped = 0
    for raw_line in str(text or "").split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        if not header_skipped:
            # first non-empty line is the header, whatever it contains
            header_skipped = True
            continue
        parsed = parse_marks_line(line)
        if parsed is None:
            dropped += 1
            continue
        rows.append(parsed)
    if dropped:
        _log.debug("marks parse dropped %s malformed line(s)", dropped)
    return rows
