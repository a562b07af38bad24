from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

_log = logging.getLogger(__name__)
_DISK_MIN_BYTES = 100 * 1024 * 1024  # 100 MB


def _check_disk(core: Any) -> dict:
    try:
        data_dir = Path(str(getattr(core, "DATA_DIR", None) or "."))
        # statvfs needs an existing path
        check_path = data_dir
        while not check_path.exists() and check_path.parent != check_path:
            check_path = check_path.parent
        usage = shutil.disk_usage(str(check_path))
        return {
            "status": "ok" if usage.free >= _DISK_MIN_BYTES else "degraded",
            "free_mb": int(usage.free / (1024 * 1024)),
        }
    except OSError as exc:
        _log.warning("health: disk check failed", exc_info=True)
        return {"status": "error", "detail": str(exc)}


def _check_gradebook(core: Any) -> dict:
    gradebook_dir = Path(str(getattr(core, "GRADEBOOK_DIR", None) or "."))
    if not gradebook_dir.exists():
        return {"status": "skipped", "reason": "no_gradebook"}
    return {"status": "ok"}


def build_router(core: Any) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    async def health():
        checks = {"disk": _check_disk(core), "gradebook": _check_gradebook(core)}
        degraded = any(c.get("status") not in ("ok", "skipped") for c in checks.values())
        payload = {"status": "degraded" if degraded else "ok", "checks": checks}
        return JSONResponse(content=payload, status_code=503 if degraded else 200)

    return router
