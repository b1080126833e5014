"""
FastAPI application factory
"""
import logging
import time
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.api.v1 import subscriptions
from app.config import get_settings
from app.domain.period import InvalidPeriodFormat
from app.domain.subscription import SubscriptionValidationError
from app.infrastructure.db.session import check_db_connection
from app.infrastructure.db.subscription_repository import StorageError

logger = logging.getLogger(__name__)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Catches everything the exception handlers did not, including sync routes"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return Response(content="Internal Server Error", status_code=500)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_request_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors, e.g. price: Input should be a valid integer; period_to: Field required"""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain/storage errors to HTTP responses"""

    @app.exception_handler(SubscriptionValidationError)
    async def validation_error_handler(request: Request, exc: SubscriptionValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(InvalidPeriodFormat)
    async def period_format_handler(request: Request, exc: InvalidPeriodFormat):
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        # Details are already logged by the use case; never leak them to clients
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(422, _describe_request_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))


def create_app() -> FastAPI:
    """
    Application factory: builds and configures the FastAPI app

    Returns:
        Configured FastAPI app
    """
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    app = FastAPI(
        title="Subscription Ledger API",
        description="REST API for aggregating user online subscriptions",
        version="1.0.0",
        debug=settings.DEBUG,
    )

    # Last added runs outermost: request logging sees the 500 built by ErrorLoggingMiddleware
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(subscriptions.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (checks database availability)"""
        check_db_connection()
        return "ok"

    return app


# Create app instance
app = create_app()
