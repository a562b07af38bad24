from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import settings as _settings
from .logging_config import configure_logging
from .request_context import REQUEST_ID, REQUEST_ID_HEADER, new_request_id
from .routes import bulk_upload_routes, dashboard_routes, misc_health_routes

_log = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(_app: FastAPI):
    configure_logging()
    core = getattr(_app.state, "core", None)
    _log.info("tracker api started data_dir=%s", getattr(core, "DATA_DIR", None))
    yield


def create_app(core: Optional[Any] = None) -> FastAPI:
    if core is None:
        from . import app_core as core

    app = FastAPI(title="Student Activity Tracker API", version="0.1.0", lifespan=app_lifespan)
    app.state.core = core

    origins = _settings.cors_origins_raw()
    origins_list = [o.strip() for o in origins.split(",") if o.strip()] or ["*"]
    if "*" in origins_list and _settings.is_production():
        _log.warning("CORS_ORIGINS allows any origin in %s", _settings.app_env())
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _request_id_middleware(request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        token = REQUEST_ID.set(rid)
        try:
            response = await call_next(request)
        finally:
            REQUEST_ID.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response

    app.include_router(misc_health_routes.build_router(core))
    app.include_router(bulk_upload_routes.build_router(core))
    app.include_router(dashboard_routes.build_router(core))
    return app


app = create_app()
