from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class BulkUploadRequest(BaseModel):
    assignment_id: Optional[str] = None
    csv_data: Optional[str] = None
    actor: Optional[str] = None
    apply: bool = False
