"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.user_service import __version__
from src.user_service.api.http.app_data import ApplicationDependencies
from src.user_service.api.http.errors import error_envelope, register_error_handlers
from src.user_service.api.http.routers import health, users
from src.user_service.api.utils.app_startup import configure_logging
from src.user_service.core.services import DbManageService, DbSessionService
from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.context import get_config

__all__ = ["app", "create_app"]


def _client_ip(request: Request) -> str:
    xff = request.headers.get("x-forwarded-for")
    if xff:
        return xff.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": _client_ip(request),
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    # Everything that logs within this block inherits base_ctx
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            response = error_envelope(request, 500, "Internal server error")
            response.headers["X-Request-ID"] = request_id
            return response


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application around an explicit configuration.

    The database engine is opened when the app starts and disposed when it
    stops; nothing is connected at import time.
    """
    app_config = config or get_config()
    configure_logging(app_config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting up application in {} environment", app_config.app.environment
        )
        database_service = DbSessionService(app_config)
        if app_config.database.auto_create_tables:
            DbManageService(database_service.engine).create_all()

        app.state.app_dependencies = ApplicationDependencies(
            config=app_config,
            database_service=database_service,
        )
        try:
            yield
        finally:
            logger.info("Shutting down application")
            database_service.close()

    is_production = app_config.app.environment == "production"
    app = FastAPI(
        title="User Service API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    if is_production and "*" in app_config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.app.cors.origins,
        allow_credentials=app_config.app.cors.allow_credentials,
        allow_methods=app_config.app.cors.allow_methods,
        allow_headers=app_config.app.cors.allow_headers,
    )
    app.middleware("http")(log_requests)

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)

    return app


app = create_app()
