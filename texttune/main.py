from __future__ import annotations

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from texttune.api.v1.router import router as v1_router
from texttune.core.config import Settings, get_settings
from texttune.core.logging import configure_logging, get_logger
from texttune.schemas.common import ErrorResponse, HealthResponse
from texttune.services.gemini import GeminiClient
from texttune.utils.trace import TRACE_HEADER, get_trace_id, trace_context_middleware

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> ORJSONResponse:
    return ORJSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err.get("loc", ()) if item != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "Invalid request body: " + "; ".join(parts)


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}


async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    return response


def create_app(settings: Settings | None = None, gemini_client: GeminiClient | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)

    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.environment)

    app = FastAPI(title=settings.app_name, default_response_class=ORJSONResponse)
    app.state.settings = settings
    app.state.gemini_client = gemini_client or GeminiClient(settings)

    app.middleware("http")(security_headers)
    app.middleware("http")(trace_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_: Request, exc: RequestValidationError):
        return _error(400, _validation_message(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        # Runs outside the http middlewares, so their headers are added here.
        trace_id = get_trace_id(request)
        logger.exception("unhandled_exception", error=str(exc), trace_id=trace_id)
        response = _error(500, "Internal server error")
        response.headers.update(SECURITY_HEADERS)
        response.headers[TRACE_HEADER] = trace_id
        return response

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok")

    app.include_router(v1_router, prefix=settings.api_prefix)
    Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app, include_in_schema=False)

    logger.info(
        "app_created",
        environment=settings.environment,
        api_prefix=settings.api_prefix,
        model=settings.gemini_model,
    )
    return app
