import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BookstoreError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdentifier(BookstoreError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, raw, field: str = "id"):
        super().__init__(f"Invalid {field} format: {raw!r}")
        self.raw = raw
        self.field = field


class InvalidQuantity(BookstoreError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, value):
        super().__init__(f"Quantity must be a positive integer, got {value!r}")
        self.value = value


class ValidationError(BookstoreError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(BookstoreError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, kind: str, identifier: str | None = None):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.identifier = identifier


class StorageFailure(BookstoreError):
    """The document store was unreachable or rejected the operation."""


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def bookstore_error_handler(request: Request, exc: BookstoreError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error(exc.status_code, "An internal error occurred.")
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return _error(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return await bookstore_error_handler(request, ValidationError("Invalid request"))

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if first.get("type") == "missing":
        message = f"Missing required field: {field}"
    else:
        message = f"Invalid value for {field}: {first.get('msg')}"
    return await bookstore_error_handler(request, ValidationError(message))


async def storage_error_handler(request: Request, exc: PyMongoError):
    logger.exception(f"Storage failure on {request.method} {request.url.path}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "An internal error occurred.")


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "An internal error occurred.")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookstoreError, bookstore_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PyMongoError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
