"""Map service errors onto the ``{ok, message}`` envelope."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.services.errors import (
    INTERNAL_ERROR_MESSAGE,
    AuthenticationError,
    FieldViolation,
    ServiceError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "message": message})


def violations_from_request_error(exc: RequestValidationError) -> list[FieldViolation]:
    """Flatten pydantic error dicts into field violations, in order."""
    violations = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        violations.append(
            FieldViolation(field=".".join(loc) or "body", message=error.get("msg", "Invalid value"))
        )
    return violations


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = ValidationError(violations_from_request_error(exc))
        return error_response(error.public_message, error.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), exc.status_code)

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.__class__.__name__} ({exc.reason})")
        return error_response(exc.public_message, exc.status_code)

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.reason}")
        return error_response(exc.public_message, exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return error_response(INTERNAL_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
