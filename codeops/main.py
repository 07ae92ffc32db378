# codeops/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from codeops.core.config import Settings
from codeops.core.errors import CodeOpsError, ConfigError, UnknownActionError
from codeops.core.log import configure_logging
from codeops.routes.ide import router as ide_router

logger = logging.getLogger(__name__)

async def codeops_error_handler(request: Request, exc: CodeOpsError) -> JSONResponse:
    status = 400 if isinstance(exc, (ConfigError, UnknownActionError)) else 502
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"error": exc.describe()})

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="codeops")
    app.include_router(ide_router)
    app.add_exception_handler(CodeOpsError, codeops_error_handler)
    return app

app = create_app()
