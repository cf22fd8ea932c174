"""FastAPI application factory and entrypoint. No business logic; only wiring, middleware and error mapping."""

import logging
import time

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from salon_api.api.v1 import health
from salon_api.api.v1 import router as v1_router
from salon_api.core.config import Settings, get_settings
from salon_api.core.database import build_engine, build_session_factory
from salon_api.core.errors import AppError
from salon_api.core.logging_config import configure_logging
from salon_api.core.tokens import TokenService
from salon_api.schemas.common import ErrorResponse, FieldError
from salon_api.services.auth import AuthService
from salon_api.services.users import UserService

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def _error_response(
    status_code: int,
    message: str,
    code: str,
    errors: list[FieldError] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, code=code, errors=errors)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _field_errors(exc: RequestValidationError) -> list[FieldError]:
    fields = []
    for err in exc.errors():
        # Drop the leading location ("body", "query", "path").
        loc = [str(part) for part in err.get("loc", ())[1:]]
        fields.append(FieldError(field=".".join(loc) or "body", message=err.get("msg", "Invalid value")))
    return fields


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map every failure to the {success: false, message, code} envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        errors = [FieldError(**e) for e in exc.errors] if exc.errors else None
        return _error_response(exc.status_code, exc.message, exc.code, errors, headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(422, "Validation error", "VALIDATION_ERROR", _field_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _error_response(404, f"Route {request.url.path} not found", "NOT_FOUND")
        return _error_response(exc.status_code, str(exc.detail), "HTTP_ERROR", headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error",
            extra={"method": request.method, "path": request.url.path},
        )
        message = "Internal server error" if settings.is_production else str(exc) or type(exc).__name__
        return _error_response(500, message, "INTERNAL_ERROR")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application: engine, session factory, token service and services are
    constructed once here and stored on app.state for the request dependencies.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Salon Booking API",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = build_engine(settings)
    token_service = TokenService.from_settings(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = token_service
    app.state.auth_service = AuthService(token_service, bcrypt_rounds=settings.BCRYPT_ROUNDS)
    app.state.user_service = UserService(bcrypt_rounds=settings.BCRYPT_ROUNDS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else settings.CORS_ALLOWED_ORIGINS,
        allow_credentials=settings.APP_ENV != "dev",
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        # Unhandled errors escape call_next and become a 500 further out.
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "%s %s %s",
                request.method,
                request.url.path,
                status_code,
                extra={"latency_ms": round((time.perf_counter() - start) * 1000, 2)},
            )

    register_exception_handlers(app, settings)

    app.include_router(health.index_router, prefix=settings.API_V1_PREFIX, tags=["meta"])
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Salon Booking API", "docs": "/docs"}

    logger.info(
        "Application configured",
        extra={"environment": settings.APP_ENV, "api_prefix": settings.API_V1_PREFIX},
    )
    return app


app = create_app()
