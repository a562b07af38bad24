from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

STATUS_NEW = "new"
STATUS_REPLACING = "replacing"
STATUS_REJECTED = "rejected"

AUDIT_ACTION_BULK_UPLOAD = "Bulk Upload"


def format_marks(value: float) -> str:
    """Render a score without a trailing ``.0`` (``100.0`` -> ``100``)."""
    text = format(float(value), "f").rstrip("0").rstrip(".")
    return text or "0"


@dataclass(frozen=True)
class RosterEntry:
    student_id: str
    class_name: str
    name: str = ""

    def display_name(self) -> str:
        name = str(self.name or "").strip()
        return name or f"Student {self.student_id}"


@dataclass(frozen=True)
class AssignmentRef:
    assignment_id: str
    class_name: str
    max_marks: float
    title: str = ""

    def __post_init__(self) -> None:
        try:
            max_marks = float(self.max_marks)
        except (TypeError, ValueError):
            raise ValueError(f"max_marks must be a number: {self.max_marks!r}") from None
        if not math.isfinite(max_marks) or max_marks <= 0:
            raise ValueError(f"max_marks must be positive: {self.max_marks!r}")
        object.__setattr__(self, "max_marks", max_marks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "assignment_id": self.assignment_id,
            "title": self.title,
            "class_name": self.class_name,
            "max_marks": self.max_marks,
        }


@dataclass(frozen=True)
class ExistingMarkRef:
    student_id: str
    assignment_id: str
    marks: float


@dataclass(frozen=True)
class ParsedRow:
    student_id: str
    marks: float


@dataclass(frozen=True)
class RowOutcome:
    student_id: str
    student_name: str
    marks: float
    status: str
    message: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.status != STATUS_REJECTED

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AuditEntry:
    entry_id: str
    timestamp: str
    actor: str
    assignment_id: str
    assignment_title: str
    action: str
    records_processed: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AuditEntry":
        return cls(
            entry_id=str(payload.get("entry_id") or ""),
            timestamp=str(payload.get("timestamp") or ""),
            actor=str(payload.get("actor") or ""),
            assignment_id=str(payload.get("assignment_id") or ""),
            assignment_title=str(payload.get("assignment_title") or ""),
            action=str(payload.get("action") or ""),
            records_processed=int(payload.get("records_processed") or 0),
        )
