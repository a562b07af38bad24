from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from ..api_models import BulkUploadRequest
from ..marks_template_service import TEMPLATE_MEDIA_TYPE


def build_router(core: Any) -> APIRouter:
    router = APIRouter()

    def _run(assignment_id: Optional[str], text: Optional[str], actor: Optional[str], apply: bool) -> Any:
        try:
            return core._run_bulk_upload_impl(
                assignment_id,
                text,
                actor=actor,
                apply=apply,
                deps=core._bulk_upload_deps(),
            )
        except core.BulkUploadError as exc:
            raise HTTPException(status_code=exc.status_code, detail=exc.detail)

    @router.get("/marks/bulk-upload/template")
    def marks_bulk_upload_template(assignment_id: str):
        try:
            result = core._marks_template_impl(assignment_id, deps=core._bulk_upload_deps())
        except core.BulkUploadError as exc:
            raise HTTPException(status_code=exc.status_code, detail=exc.detail)
        return Response(
            content=result["content"],
            media_type=TEMPLATE_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{result["filename"]}"'},
        )

    @router.post("/marks/bulk-upload")
    def marks_bulk_upload(req: BulkUploadRequest):
        return _run(req.assignment_id, req.csv_data, req.actor, req.apply)

    @router.post("/marks/bulk-upload/file")
    async def marks_bulk_upload_file(
        assignment_id: str = Form(...),
        file: UploadFile = File(...),
        actor: Optional[str] = Form(None),
        apply: bool = Form(False),
    ):
        raw = await file.read()
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise HTTPException(status_code=400, detail="CSV file must be UTF-8 encoded")
        return await run_in_threadpool(_run, assignment_id, text, actor, apply)

    @router.get("/marks/bulk-upload/audit")
    def marks_bulk_upload_audit(limit: int = 50):
        return core._list_audit_entries_impl(limit, deps=core._audit_log_deps())

    return router
