"""
Creator Station Backend API
FastAPI application that splits video scripts into scenes and generates a
still image and narration audio for every scene.

This is the main entry point that wires together routes, services and the
prebuilt single-page front end.
"""

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import (
    API_TITLE,
    API_DESCRIPTION,
    API_VERSION,
    CORS_ORIGINS,
    Settings,
)
from .routes import (
    analysis_router,
    media_router,
    presets_router,
    runs_router,
)
from .core import (
    setup_logging,
    get_logger,
    set_request_id,
    clear_context,
    parse_bool_env,
    static_site_report,
)
from .core.exceptions import ConfigurationError, CreatorStationError, RemoteCallError
from .services.container import ServiceContainer, build_container, build_unready_container

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = parse_bool_env(os.getenv("JSON_LOGS"), default=False)

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
)

logger = get_logger(__name__, service="api")


async def _run_startup(app: FastAPI) -> None:
    """Build the service container unless one was injected."""
    if getattr(app.state, "container", None) is not None:
        return

    settings: Settings = app.state.settings
    try:
        app.state.container = build_container(settings)
    except ConfigurationError as exc:
        if settings.strict_config:
            logger.error("Startup aborted: invalid configuration", extra={"error": str(exc)})
            raise
        app.state.container = build_unready_container(settings, exc)

    logger.info("Startup complete", extra={
        "backend": settings.backend,
        "ready": app.state.container.ready,
        "static_site": static_site_report(settings.static_dir),
    })


async def _run_shutdown(app: FastAPI) -> None:
    """Stop an in-flight generation run."""
    container: Optional[ServiceContainer] = getattr(app.state, "container", None)
    if container is not None and container.orchestrator is not None:
        await container.orchestrator.shutdown()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await _run_startup(app)
    try:
        yield
    finally:
        await _run_shutdown(app)


def _error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CreatorStationError)
    async def handle_app_error(request: Request, exc: CreatorStationError):
        if isinstance(exc, RemoteCallError):
            logger.error(f"{request.method} {request.url.path} failed: {exc}", extra={"detail": exc.detail})
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
        return _error_response(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            problems.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
        message = "; ".join(problems) or "Invalid request"
        logger.warning(f"{request.method} {request.url.path} invalid request: {message}")
        return _error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def _register_frontend(app: FastAPI, static_dir: Path) -> None:
    """Serve the prebuilt SPA; unmatched paths fall back to index.html."""
    static_root = static_dir.resolve()

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            return _error_response(404, "Not found")

        if full_path:
            candidate = (static_root / full_path).resolve()
            if candidate.is_relative_to(static_root) and candidate.is_file():
                return FileResponse(candidate)

        index_file = static_root / "index.html"
        if index_file.is_file():
            return FileResponse(index_file)
        return _error_response(404, "Front end is not built")


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Passing ``container`` skips the startup wiring (used by tests and
    embedding callers).
    """
    settings = settings or (container.settings if container else Settings.from_env())

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.container = container

    @app.middleware("http")
    async def add_request_correlation(request: Request, call_next):
        """Attach a correlation ID to the request and its log lines."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        path = request.url.path

        logger.info(f"{request.method} {path}", extra={
            "method": request.method,
            "path": path,
            "client": request.client.host if request.client else "unknown",
        })

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            response.headers.setdefault("X-Content-Type-Options", "nosniff")

            logger.info(f"Response: {response.status_code}", extra={
                "status_code": response.status_code,
                "method": request.method,
                "path": path,
            })
            return response
        finally:
            clear_context()

    # CORS middleware for the dev-server front end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    app.include_router(analysis_router)
    app.include_router(media_router)
    app.include_router(presets_router)
    app.include_router(runs_router)

    @app.get("/health")
    async def health_check(request: Request):
        """Liveness: the process is up and serving requests."""
        current: Optional[ServiceContainer] = request.app.state.container
        run = current.orchestrator.current_run if current and current.orchestrator else None
        return {
            "status": "ok",
            "version": API_VERSION,
            "backend": request.app.state.settings.backend,
            "ready": bool(current and current.ready),
            "run_status": run.status.value if run else None,
            "static_site": static_site_report(request.app.state.settings.static_dir),
        }

    @app.get("/ready")
    async def readiness_check(request: Request):
        """Readiness: remote clients are configured. 503 otherwise."""
        current: Optional[ServiceContainer] = request.app.state.container
        if current is None:
            return JSONResponse(status_code=503, content={"ready": False, "error": "Service is starting"})
        report = current.readiness()
        return JSONResponse(status_code=200 if report["ready"] else 503, content=report)

    # Registered last so API routes take precedence
    _register_frontend(app, settings.static_dir)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings: Settings = app.state.settings
    uvicorn.run(app, host=_settings.host, port=_settings.port)
