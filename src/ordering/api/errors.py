"""Exception-to-response mapping for the Ordering API.

Domain errors carry their own status code. Protean validation and lookup
errors map to 400 and 404. Requests the framework cannot parse map to 401
or 400, depending on whether a caller is present. Anything else is logged with its traceback and
returned as a generic 500.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.errors import InternalFailureError, InvalidInputError, OrderingError, UnauthenticatedError

logger = structlog.get_logger(__name__)


async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Ordering request failed", path=request.url.path, error=exc.message)
    else:
        logger.info("Ordering request rejected", path=request.url.path, status=exc.status_code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("Ordering request invalid", path=request.url.path, errors=exc.messages)
    return JSONResponse(status_code=400, content={"message": "Invalid request.", "errors": exc.messages})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bodies the framework cannot parse still get the domain's status codes."""
    if not request.headers.get("x-user-id"):
        error = UnauthenticatedError("User is not authenticated.")
    else:
        error = InvalidInputError("Request body is invalid.")
    logger.info("Ordering request unparseable", path=request.url.path, status=error.status_code)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    logger.info("Ordering record not found", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=404, content={"message": "Not found."})


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in ordering request", path=request.url.path)
    failure = InternalFailureError("Internal server error.")
    return JSONResponse(status_code=failure.status_code, content=failure.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderingError, ordering_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
