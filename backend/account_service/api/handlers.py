"""
Global exception handlers.

Business and validation failures are rendered as the usual envelope with the
error code in the body; the HTTP status stays 200. Anything else (database or
Redis outages) is left to FastAPI's default 500 handling.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from account_service.core.exceptions import BusinessException
from account_service.schemas.common import ApiResponse

logger = logging.getLogger(__name__)

VALIDATION_ERROR_CODE = 400


def first_validation_message(exc: RequestValidationError) -> str:
    """Message of the first field-level error, e.g. 'username must not be blank'"""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    if error.get("type") == "missing" and error.get("loc"):
        return f"{error['loc'][-1]} is required"
    return error.get("msg", "Invalid request")


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    body = ApiResponse.error(exc.code, exc.message)
    return JSONResponse(content=jsonable_encoder(body))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = first_validation_message(exc)
    logger.debug(f"Validation failed for {request.method} {request.url.path}: {message}")
    body = ApiResponse.error(VALIDATION_ERROR_CODE, message)
    return JSONResponse(content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
