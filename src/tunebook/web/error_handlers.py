import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from tunebook.errors import UserError, ValidationError

logger = structlog.get_logger(__name__)


def error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "type": error_type})


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Render a UserError with the status and type its class declares."""
    if not isinstance(exc, UserError):
        raise TypeError(f"user_error_handler got {type(exc).__name__}")
    return error_response(exc.status_code, str(exc), exc.error_type)


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Malformed bodies and path parameters are 400s, like any other invalid input."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    details = "; ".join(f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}" for err in errors)
    message = f"Invalid request: {details}" if details else "Invalid request"
    return error_response(ValidationError.status_code, message, ValidationError.error_type)


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    logger.exception("unexpected_error", method=request.method, path=request.url.path, error_class=type(exc).__name__)
    return error_response(500, "An unexpected error occurred.", "internal_server_error")
