"""HTTP error mapping for the codec API.

Library exceptions are translated into an ``ApiError`` with a status and a
stable code; the library's own code travels in ``details.reason``.

    AudioDecodeError         400 INVALID_AUDIO
    AudioValidationError     422 INVALID_INPUT
    InvalidParameterError    422 INVALID_PARAMETER
    DescriptorParseError     422 INVALID_CODE
    SegmentationError,
    AudioEncodeError, other  500 INTERNAL_ERROR
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from audioio.errors import AudioDecodeError, AudioEncodeError, AudioValidationError
from segcodec.errors import DescriptorParseError, InvalidParameterError, SegmentationError

from .schemas import ApiErrorResponse, ErrorDetail


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error with an HTTP status, rendered as ``{"error": {...}}``.

    Subclasses set ``status_code``, ``default_code`` and ``default_message``.
    """

    status_code = 500
    default_code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        code: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.code = code or self.default_code
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class InvalidAudioError(ApiError):
    """Upload is not decodable audio."""

    status_code = 400
    default_code = "INVALID_AUDIO"
    default_message = "Failed to decode audio file"


class InvalidInputError(ApiError):
    """Upload is missing, empty or outside the configured limits."""

    status_code = 422
    default_code = "INVALID_INPUT"
    default_message = "Invalid input"


class InvalidParameterApiError(ApiError):
    """Encoding parameters are unknown or out of range."""

    status_code = 422
    default_code = "INVALID_PARAMETER"
    default_message = "Invalid encoding parameters"


class InvalidCodeError(ApiError):
    """Encoding code does not parse."""

    status_code = 422
    default_code = "INVALID_CODE"
    default_message = "Invalid encoding code"


class InternalError(ApiError):
    """Failure on the server side."""


# First match wins
_LIBRARY_ERRORS: tuple[tuple[tuple[type[Exception], ...], type[ApiError]], ...] = (
    ((AudioDecodeError,), InvalidAudioError),
    ((AudioValidationError,), InvalidInputError),
    ((InvalidParameterError,), InvalidParameterApiError),
    ((DescriptorParseError,), InvalidCodeError),
    ((SegmentationError, AudioEncodeError), InternalError),
)


def map_exception_to_api_error(exc: Exception) -> ApiError:
    """Translate any exception into an ``ApiError``."""
    if isinstance(exc, ApiError):
        return exc

    for library_errors, api_error_class in _LIBRARY_ERRORS:
        if isinstance(exc, library_errors):
            return api_error_class(
                message=exc.message,
                details={"reason": exc.code, **exc.details},
            )

    return InternalError(
        message=str(exc) or "An unexpected error occurred",
        details={"exception_type": type(exc).__name__},
    )


def error_body(api_error: ApiError) -> dict[str, Any]:
    """Serialize an ``ApiError`` as the standard error payload."""
    return ApiErrorResponse(
        error=ErrorDetail(code=api_error.code, message=api_error.message, details=api_error.details)
    ).model_dump()


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render an exception as JSON, logging server errors with a traceback."""
    request_id = getattr(request.state, "request_id", "unknown")
    api_error = map_exception_to_api_error(exc)

    if api_error.status_code >= 500:
        logger.error(
            "Request failed: code=%s message=%s request_id=%s",
            api_error.code,
            api_error.message,
            request_id,
            exc_info=exc,
        )
    else:
        logger.warning(
            "Request rejected: code=%s message=%s request_id=%s",
            api_error.code,
            api_error.message,
            request_id,
        )

    return JSONResponse(
        status_code=api_error.status_code,
        content=error_body(api_error),
        headers={"X-Request-ID": request_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Route ``ApiError``, every library error and any other exception to ``api_error_handler``."""
    handled = [ApiError, Exception]
    for library_errors, _ in _LIBRARY_ERRORS:
        handled.extend(library_errors)
    for exc_class in handled:
        app.add_exception_handler(exc_class, api_error_handler)
