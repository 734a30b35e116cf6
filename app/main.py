"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

import logging
import time
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory
from app.core.errors import AppError, AuthenticationError, NotFoundError
from app.core.logging import configure_logging
from app.core.security import PasswordHasher, TokenService
from app.models import Base
from app.schemas.base import describe_errors
from app.services.email import build_email_dispatcher
from app.services.password_reset import utc_now

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map the AppError hierarchy and framework errors to the {success, error} envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc.__cause__ or exc,
            )
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return _error(exc.status_code, exc.message, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error(400, describe_errors(list(exc.errors())))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404:
            return await app_error_handler(request, NotFoundError("Route not found"))
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application. The engine, hasher, token service and email
    dispatcher are created here once and shared through app.state.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="NGO Connect API",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = build_engine(settings)
    if settings.DATABASE_URL.startswith("sqlite://"):
        # No migrations for local SQLite databases.
        Base.metadata.create_all(engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.token_service = TokenService(
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        expire_days=settings.JWT_EXPIRE_DAYS,
    )
    app.state.email_dispatcher = build_email_dispatcher(settings)
    app.state.otp_ttl = timedelta(minutes=settings.PASSWORD_RESET_OTP_TTL_MINUTES)
    app.state.clock = utc_now
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict:
        """Root route; lists the API surface for discovery."""
        prefix = settings.API_PREFIX
        return {
            "success": True,
            "message": "NGO Connect Backend API",
            "version": app.version,
            "endpoints": {
                "auth": {
                    "register": f"POST {prefix}/auth/register",
                    "login": f"POST {prefix}/auth/login",
                    "me": f"GET {prefix}/auth/me",
                    "forgotPassword": f"POST {prefix}/auth/forgot-password",
                    "resetPassword": f"POST {prefix}/auth/reset-password",
                },
                "users": {
                    "profile": f"PUT {prefix}/users/profile",
                    "volunteers": f"GET {prefix}/users/volunteers",
                    "ngos": f"GET {prefix}/users/ngos",
                },
                "health": f"GET {prefix}/health",
            },
        }

    logger.info(
        "NGO Connect API configured",
        extra={"environment": settings.APP_ENV, "email_backend": settings.EMAIL_BACKEND},
    )
    return app


app = create_app()
