"""
FastAPI application entry point.

Uses structured logging from core.logging module. The JSON API is mounted
under /api/v1 and the issue pages under /issues.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from core.db import db
from core.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import get_settings
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .routers import issue_comments as issue_comments_router
from .routers import issues as issues_router
from .routers import media as media_router
from .web import routes as web_routes

# Configure structured logging
settings = get_settings()
log_level = "DEBUG" if settings.debug else "INFO"
configure_logging(level=log_level)
logger = get_logger("api")


def create_app() -> FastAPI:
    # API version prefix
    api_version = "v1"
    api_prefix = f"{settings.api_prefix}/{api_version}"

    app = FastAPI(title=settings.app_name, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Accept-Encoding",
            "Origin",
            "X-Requested-With",
        ],
    )

    # GZip compression for responses > 500 bytes
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Request ID middleware (for tracing)
    app.add_middleware(RequestIDMiddleware)

    # Structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    @app.on_event("startup")
    async def startup_event():
        """Initialize the database on startup."""
        logger.info("app_startup", app_name=settings.app_name)

        config_errors, config_warnings = settings.validate_production_config()
        for warning in config_warnings:
            logger.warning("config_warning", message=warning)
        for error in config_errors:
            logger.warning("config_error", message=error)

        db.initialize(settings.database_url)
        logger.info("database_initialized")

        if settings.create_tables_on_startup:
            db.create_all_tables()
            logger.info("database_tables_created")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("app_shutdown")
        db.reset()

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness check endpoint.

        Returns 200 if the database answers, 503 otherwise.
        """
        result = db.health_check()
        if not result["healthy"]:
            return JSONResponse(
                status_code=503,
                content={"status": "not_ready", "checks": {"database": False}},
            )
        return {"status": "ready", "checks": {"database": True}}

    # API is accessible at /api/v1/*
    app.include_router(issues_router.router, prefix=api_prefix)
    app.include_router(issue_comments_router.router, prefix=api_prefix)
    app.include_router(media_router.router, prefix=api_prefix)

    # Server-rendered issue pages
    app.include_router(web_routes.router)

    return app


app = create_app()
