"""
Content Factory API
FastAPI application turning raw transcripts into short-video editing plans
and long-form copy through a chain of model-backed stages.

This is the main entry point that wires together routes and services.
"""

import os
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import API_DESCRIPTION, API_TITLE, API_VERSION, CORS_ORIGINS, DATA_DIR
from .core import (
    ContentFactoryError,
    check_data_directory,
    clear_context,
    get_logger,
    is_auth_enabled,
    is_public_path,
    is_request_authenticated,
    list_public_paths,
    set_request_id,
    setup_logging,
)
from .routes import auth_router, workflow_router
from .services.llm import LLMProvider, get_llm_provider
from .services.storage import FileBasedWorkflowRepository, WorkflowRepository

# Initialize logging
log_level = os.getenv("LOG_LEVEL", "INFO")
log_file = os.getenv("LOG_FILE")
use_json_logs = os.getenv("JSON_LOGS", "false").lower() == "true"

setup_logging(
    level=log_level,
    log_file=Path(log_file) if log_file else None,
    use_json=use_json_logs,
)

logger = get_logger(__name__, service="api")

# Runtime protection controls
MAX_REQUEST_BODY_BYTES = int(os.getenv("MAX_REQUEST_BODY_BYTES", str(2 * 1024 * 1024)))


def _build_default_provider() -> Optional[LLMProvider]:
    try:
        return get_llm_provider()
    except ValueError as exc:
        logger.warning("LLM provider not configured", extra={"error": str(exc)})
        return None


def create_app(
    repository: Optional[WorkflowRepository] = None,
    llm_provider: Optional[LLMProvider] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        repository: Persistence handle; defaults to the file-based store in DATA_DIR
        llm_provider: Text generation backend; defaults to the configured provider
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.repository = repository or FileBasedWorkflowRepository(DATA_DIR)
        app.state.repository.open()
        app.state.llm_provider = llm_provider or _build_default_provider()
        logger.info("Starting Content Factory API", extra={
            "log_level": log_level,
            "json_logs": use_json_logs,
            "llm_provider": app.state.llm_provider.name if app.state.llm_provider else None,
            "auth_enabled": is_auth_enabled(),
            "public_paths": list_public_paths(),
        })
        try:
            yield
        finally:
            app.state.repository.close()
            logger.info("Content Factory API stopped")

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
    )

    @app.middleware("http")
    async def add_request_correlation(request: Request, call_next):
        """Add correlation ID, enforce auth and request limits, and attach security headers."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        set_request_id(request_id)
        path = request.url.path

        logger.info(f"{request.method} {path}", extra={
            "method": request.method,
            "path": path,
            "client": request.client.host if request.client else "unknown",
        })

        try:
            if request.method != "OPTIONS" and is_auth_enabled() and not is_public_path(path):
                if not is_request_authenticated(request):
                    return JSONResponse(status_code=401, content={"detail": "Unauthorized"})

            content_length = request.headers.get("content-length")
            if content_length:
                try:
                    size = int(content_length)
                except ValueError:
                    return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length header"})
                if size > MAX_REQUEST_BODY_BYTES:
                    return JSONResponse(
                        status_code=413,
                        content={"detail": f"Request body too large. Max allowed: {MAX_REQUEST_BODY_BYTES} bytes"},
                    )

            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            response.headers.setdefault("X-Content-Type-Options", "nosniff")
            response.headers.setdefault("Referrer-Policy", "no-referrer")
            response.headers.setdefault("X-Frame-Options", "DENY")

            logger.info(f"Response: {response.status_code}", extra={
                "status_code": response.status_code,
                "method": request.method,
                "path": path,
            })
            return response
        finally:
            clear_context()

    @app.exception_handler(ContentFactoryError)
    async def handle_content_factory_error(request: Request, exc: ContentFactoryError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"status_code": exc.status_code, "path": request.url.path},
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.info(
            "Request validation failed",
            extra={"path": request.url.path, "errors": exc.errors()},
        )
        return JSONResponse(status_code=400, content={"detail": "Invalid input"})

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(workflow_router)

    @app.get("/")
    async def root():
        """Root endpoint - API info"""
        return {
            "message": "Content Factory API - from transcript to video plan and copy",
            "version": API_VERSION,
        }

    @app.get("/health")
    async def health_check(request: Request):
        """
        Health check endpoint for container orchestration.

        Validates:
        - Repository open and its data directory writable
        - An LLM provider configured

        Returns 200 if healthy, 503 if any check fails.
        """
        checks = {"status": "healthy", "checks": {}}
        all_healthy = True

        repo = getattr(request.app.state, "repository", None)
        storage = {"open": bool(repo and repo.is_open)}
        base_dir = getattr(repo, "base_dir", None)
        if base_dir is not None:
            storage.update(check_data_directory(base_dir))
        checks["checks"]["storage"] = storage
        if not storage["open"] or storage.get("writable") is False:
            all_healthy = False
            logger.warning("Health check: storage unavailable", extra={"storage": storage})

        provider = getattr(request.app.state, "llm_provider", None)
        checks["checks"]["llm_provider"] = {
            "configured": provider is not None and provider.is_available(),
            "name": provider.name if provider else None,
        }
        if not checks["checks"]["llm_provider"]["configured"]:
            all_healthy = False
            logger.warning("Health check: no LLM provider configured")

        if not all_healthy:
            checks["status"] = "unhealthy"
            return JSONResponse(status_code=503, content=checks)
        return checks

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "content_factory.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        reload_excludes=["data/*", "logs/*", "*.pyc", "__pycache__/*"],
    )
