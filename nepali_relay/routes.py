import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.types import Scope

from .deps import create_http_client
from .errors import handle_unexpected_error
from .logging_config import get_logger
from .relay_routes import router as relay_router
from .schemas import HealthResponse
from .settings import settings


logger = get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open one keep-alive upstream client for the whole process and close it
    on shutdown.
    """
    client = create_http_client()
    app.state.http_client = client
    logger.info(
        "Upstream client ready (timeout=%ss, gemini=%s)",
        settings.upstream_timeout,
        "configured" if settings.gemini_configured else "disabled",
    )
    try:
        yield
    finally:
        app.state.http_client = None
        await client.aclose()


class SPAStaticFiles(StaticFiles):
    """
    Serves the frontend build and answers unknown paths with index.html so
    client-side routes survive a reload. Unknown /api paths stay 404.
    """

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != status.HTTP_404_NOT_FOUND:
                raise
            if path == "api" or path.startswith("api" + os.sep):
                raise
            return await super().get_response("index.html", scope)


def create_app() -> FastAPI:
    app = FastAPI(title="Nepali Lipi Relay", version="0.1.0", lifespan=lifespan)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # The frontend may be hosted anywhere; every origin is allowed by default.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Basic request/response logging middleware.
        """
        client_host = request.client.host if request.client else "-"
        logger.info(
            "HTTP %s %s from %s", request.method, request.url.path, client_host
        )
        response = await call_next(request)
        logger.info(
            "HTTP %s %s -> %s", request.method, request.url.path, response.status_code
        )
        return response

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(gemini=settings.gemini_configured)

    app.include_router(relay_router)

    # Mounted last so it never shadows the API routes.
    static_root = Path(settings.static_dir).resolve()
    if static_root.is_dir():
        logger.info("Serving frontend from %s", static_root)
        app.mount(
            "/",
            SPAStaticFiles(directory=str(static_root), html=True),
            name="frontend",
        )
    else:
        logger.info("No frontend directory at %s; serving API only", static_root)

    return app
