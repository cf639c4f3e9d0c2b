"""Formguard — server-side validation for jQuery Validation rulesets.

Main FastAPI application with lifespan logging, CORS, and global error handling.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from formguard import __version__
from formguard.config import Settings, get_settings
from formguard.api.router import api_router
from formguard.validators import (
    ConfigurationError,
    FormguardError,
    InvalidDatasetError,
    MessageCatalog,
    RemoteValidationGateway,
    RuleCatalog,
    RulesetFormatError,
    RulesetNotConfiguredError,
    ValidationEngine,
)


def configure_logging(settings: Settings) -> None:
    """Structured logging: console output in DEBUG, JSON lines otherwise."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.LOG_LEVEL.upper())
        ),
    )


configure_logging(get_settings())

logger = structlog.get_logger()

ERROR_STATUS = {
    RulesetNotConfiguredError: 503,
    RulesetFormatError: 422,
    InvalidDatasetError: 422,
    ConfigurationError: 500,
}


def build_engine(settings: Settings) -> ValidationEngine:
    """Engine wired from settings: rule sets, message overrides, ruleset file."""
    catalog = RuleCatalog(settings.RULE_SETS)
    messages = catalog.default_messages()
    if settings.MESSAGES_PATH:
        messages = MessageCatalog.from_file(settings.MESSAGES_PATH, messages.as_dict())

    engine = ValidationEngine(catalog=catalog, messages=messages)
    if settings.RULESET_PATH:
        engine.set_rule_file(settings.RULESET_PATH)
    return engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()
    engine = app.state.engine

    # ── Startup ──
    logger.info(
        "app_started",
        debug=settings.DEBUG,
        rule_sets=list(engine.catalog.rule_sets),
        ruleset_fields=len(engine.ruleset) if engine.ruleset is not None else 0,
        remote_methods=engine.catalog.remote_names(),
    )
    if engine.ruleset is None:
        logger.warning("ruleset_not_configured", hint="set FORMGUARD_RULESET_PATH")

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


def create_app(engine: Optional[ValidationEngine] = None) -> FastAPI:
    """Create the API around an engine (built from settings when not given).

    Register remote methods on ``app.state.engine`` before serving.
    """
    app = FastAPI(
        title="Formguard",
        description=(
            "Server-side validation of jQuery Validation rulesets. "
            "The same JSON ruleset drives the browser and the server."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.engine = engine or build_engine(get_settings())
    app.state.gateway = RemoteValidationGateway(app.state.engine.catalog)

    # ── Middleware ──

    # The client validator calls the remote endpoint from the page's origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # ── Global Exception Handlers ──

    @app.exception_handler(FormguardError)
    async def formguard_error_handler(request: Request, exc: FormguardError):
        """Configuration problems and malformed requests."""
        status_code = next(
            (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
            500,
        )
        logger.error("request_failed", path=request.url.path, error=str(exc), error_type=exc.code)
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "message": str(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all error handler for unhandled exceptions."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "The form could not be validated. Please try again.",
            },
        )

    # ── Routes ──

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint — API info."""
        return {
            "name": "Formguard",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/v1/health",
        }

    return app


# ── Create Application ──

app = create_app()
