"""
FastAPI application entry point.
Challenge: Mount routes, middleware (CORS, Prometheus), map domain errors to {message} bodies.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import make_asgi_app

from replate.api.router import api_router
from replate.config import get_settings
from replate.core.exceptions import NoToken, ReplateError, StoreError
from replate.store.provider import close_stores

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: nothing to warm up (stores are lazy). Shutdown: release the HTTP pool."""
    yield
    await close_stores()


async def replate_error_handler(request: Request, exc: ReplateError) -> JSONResponse:
    if isinstance(exc, StoreError):
        # Full detail stays server-side
        logger.error("%s %s: %s: %s", request.method, request.url.path, type(exc).__name__, exc.detail)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, NoToken) else None
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request."
    return JSONResponse(status_code=400, content={"message": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error."})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title=settings.app_name,
        description="Food-donation listing board: sign up, log in, post surplus food, claim listings.",
        version="1.0.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_exception_handler(ReplateError, replate_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # CORS for the browser board
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus metrics at /metrics
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    app.include_router(api_router, prefix="/api")

    # Board UI (static), when deployed next to the API
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir() and (static_dir / "index.html").exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

        @app.get("/", include_in_schema=False)
        async def root():
            return FileResponse(static_dir / "index.html")

    return app


app = create_app()
