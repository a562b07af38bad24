"""Request id propagation.

The middleware in ``app.py`` binds a request id per request, the logging
filter copies it onto every record, and the response carries it back in
``x-request-id``.
"""
from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar

REQUEST_ID: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "x-request-id"


def new_request_id() -> str:
    return uuid.uuid4().hex[:16]


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = REQUEST_ID.get("") or "-"  # type: ignore[attr-defined]
        return True
