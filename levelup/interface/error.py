"""Interface layer errors and their HTTP mapping.

Every failure is terminal for the request; nothing here retries.
"""

import logging
from collections.abc import Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from levelup.adapter.error import AdapterError
from levelup.domain.error import NotFoundError, ValidationError, VerificationError
from levelup.util.error import ConfigurationError
from levelup.util.jwt import JWTError

logger = logging.getLogger(__name__)

ErrorBody = Callable[[str], dict]


def detail_body(message: str) -> dict:
    """Error body used by the linking service."""
    return {"detail": message}


def status_body(message: str) -> dict:
    """Error body used by the recall service."""
    return {"status": "error", "message": message}


def _field_names(exc: RequestValidationError) -> list[str]:
    names = set()
    for error in exc.errors():
        parts = [str(p) for p in error.get("loc", ()) if p != "body"]
        if parts:
            names.add(".".join(parts))
    return sorted(names)


def register_error_handlers(app: FastAPI, body: ErrorBody = detail_body) -> None:
    """Map exceptions raised by routes and use cases to HTTP responses.

    Args:
        app: FastAPI application
        body: Builds the JSON error body from a message
    """

    def respond(
        status_code: int, message: str, headers: dict[str, str] | None = None
    ) -> JSONResponse:
        return JSONResponse(status_code=status_code, content=body(message), headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return respond(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        fields = _field_names(exc)
        message = f"Invalid or missing fields: {', '.join(fields)}" if fields else "Malformed request body"
        return respond(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError):
        return respond(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(JWTError)
    async def handle_jwt(request: Request, exc: JWTError):
        logger.info(f"Rejected session token on {request.url.path}: {exc}")
        return respond(status.HTTP_403_FORBIDDEN, "Invalid or expired token")

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return respond(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(VerificationError)
    async def handle_verification(request: Request, exc: VerificationError):
        logger.warning(f"Credential verification failed on {request.url.path}: {exc}")
        return respond(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error verifying credential")

    @app.exception_handler(AdapterError)
    async def handle_upstream(request: Request, exc: AdapterError):
        logger.error(f"Upstream call failed on {request.url.path}: {exc}")
        return respond(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Upstream service error")

    @app.exception_handler(ConfigurationError)
    async def handle_configuration(request: Request, exc: ConfigurationError):
        logger.error(f"Configuration error on {request.url.path}: {exc}")
        return respond(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "An internal server error occurred."
        )
