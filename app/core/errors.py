import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Request-level errors (converted to JSON at the handler boundary)
# -------------------------------------------------------------------
class ContactAPIError(Exception):
    status_code = 500
    error = "Server error"

    def __init__(self, error: str | None = None, details: str | None = None):
        self.error = error or self.error
        self.details = details
        super().__init__(self.error)

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class InputError(ContactAPIError):
    status_code = 400
    error = "Missing fields"


class MethodError(ContactAPIError):
    status_code = 405
    error = "Method not allowed"


class IntegrationError(ContactAPIError):
    status_code = 500
    error = "Failed to send message"


# -------------------------------------------------------------------
# Process-level errors
# -------------------------------------------------------------------
class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing or invalid."""


class MailDeliveryError(RuntimeError):
    """Raised by a mail sender when the outbound call fails."""


class BackendNotConfiguredError(RuntimeError):
    pass


# -------------------------------------------------------------------
# Handlers
# -------------------------------------------------------------------
async def _contact_error_handler(request: Request, exc: ContactAPIError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(
            status_code=405,
            content=MethodError().to_dict(),
            headers=exc.headers,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=exc.headers,
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content=InputError("Invalid request body").to_dict(),
    )


async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content=ContactAPIError().to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ContactAPIError, _contact_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
