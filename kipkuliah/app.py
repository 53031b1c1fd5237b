"""FastAPI application for the KIP Kuliah backend."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kipkuliah.core.config import Settings, get_settings
from kipkuliah.repositories.context import DataContext, open_data_context
from kipkuliah.routers import discussion as discussion_router
from kipkuliah.routers import student as student_router
from kipkuliah.services.discussion_service import DiscussionService
from kipkuliah.services.student_service import StudentService

logger = logging.getLogger("kipkuliah.api")


def _install_context(app: FastAPI, context: DataContext) -> None:
    app.state.data_context = context
    app.state.student_service = StudentService(context.resolver)
    app.state.discussion_service = DiscussionService(context.resolver)


def create_app(settings: Settings | None = None, context: DataContext | None = None) -> FastAPI:
    """Build the API.

    Without an explicit ``context`` the stores are opened when the app starts
    up and closed when it shuts down; a context passed in stays owned by the
    caller.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "data_context", None) is not None:
            yield
            return
        opened = open_data_context(settings)
        _install_context(app, opened)
        logger.info("KIP Kuliah API starting up (store: %s)", "sql" if opened.connected else "memory")
        try:
            yield
        finally:
            opened.close()
            app.state.data_context = None

    app = FastAPI(title="KIP Kuliah API", lifespan=lifespan)
    app.state.data_context = None
    if context is not None:
        _install_context(app, context)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(student_router.router)
    app.include_router(discussion_router.router)

    @app.get("/api/health")
    def health(request: Request):
        ctx = getattr(request.app.state, "data_context", None)
        return {
            "status": "Server is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "store": "sql" if ctx is not None and ctx.connected else "memory",
        }

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # unknown methods on known paths answer like unknown paths
        if exc.status_code in (404, 405):
            return JSONResponse({"error": "Route not found"}, status_code=404)
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            {"error": "Invalid request body", "message": "Format data tidak valid"},
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse({"error": "Something went wrong!"}, status_code=500)

    return app


app = create_app()
