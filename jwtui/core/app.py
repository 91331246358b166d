"""FastAPI application factory for the token workbench."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from jwtui.api.router_tokens import router as tokens_router
from jwtui.core.settings import WorkbenchSettings
from jwtui.crypto.errors import JwtUiError

HTTP_BAD_REQUEST = 400

logger = logging.getLogger(__name__)


async def _handle_jwtui_error(_request: Request, exc: Exception) -> JSONResponse:
    """Render a workbench error as its user-facing message."""
    kind = exc.kind if isinstance(exc, JwtUiError) else "error"
    return JSONResponse(
        {"error": kind, "message": str(exc)},
        status_code=HTTP_BAD_REQUEST,
    )


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    settings = WorkbenchSettings()
    logging.getLogger("jwtui").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="jwtui token workbench",
        version="0.1.0",
    )

    origins = settings.get_cors_origin_list()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=False,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type"],
        )

    app.add_exception_handler(JwtUiError, _handle_jwtui_error)
    app.include_router(tokens_router)

    logger.debug("Workbench app created")
    return app
