"""Exception handlers: the only place error responses are written.

Every failure leaves the API as ``{"message": ...}`` with a status code.
Before responding, an image uploaded by the failed request is deleted.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.middleware.image_upload import discard_uploaded_image
from domain.model.errors import DEFAULT_ERROR_MESSAGE, DomainError

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid inputs passed, please check your data."
ROUTE_NOT_FOUND_MESSAGE = "Could not found this route."


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    if discard_uploaded_image(request):
        logger.info("Deleted image from failed request", extra={"path": request.url.path})
    return JSONResponse(status_code=status_code, content={"message": message})


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = exc.code or 500
    if status_code >= 500:
        logger.error("Request failed", extra={"path": request.url.path, "status": status_code, "error": exc.message})
    return _error_response(request, status_code, exc.message or DEFAULT_ERROR_MESSAGE)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Request validation failed", extra={"path": request.url.path, "errors": str(exc.errors())})
    return _error_response(request, 422, INVALID_INPUT_MESSAGE)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = ROUTE_NOT_FOUND_MESSAGE
    else:
        message = str(exc.detail)
    return _error_response(request, exc.status_code, message)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return _error_response(request, 500, DEFAULT_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
