"""Translate domain errors into HTTP responses.

Every error body has the shape ``{"error": {"code": ..., "message": ...}}``.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain.exceptions import DomainException

logger = structlog.get_logger(__name__)

STATUS_BY_CODE = {
    "VALIDATION_ERROR": 400,
    "INSUFFICIENT_STOCK": 400,
    "INVALID_STATUS_TRANSITION": 400,
    "AUTHENTICATION_FAILED": 401,
    "PERMISSION_DENIED": 403,
    "NOT_FOUND": 404,
    "CONFLICT": 409,
    "STOCK_CONFLICT": 409,
    "INTERNAL_ERROR": 500,
}


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
        headers=headers,
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = STATUS_BY_CODE.get(exc.code, 400)
    if status_code >= 500:
        logger.error("Request failed", path=request.url.path, code=exc.code, error=exc.message)
    else:
        logger.info("Request rejected", path=request.url.path, code=exc.code, error=exc.message)
    return error_response(status_code, exc.code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        where = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{where}: {first.get('msg')}" if where else str(first.get("msg"))
    else:
        message = "Invalid request"
    return error_response(400, "VALIDATION_ERROR", message)


CODE_BY_STATUS = {
    401: "AUTHENTICATION_FAILED",
    403: "PERMISSION_DENIED",
    404: "NOT_FOUND",
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Routing errors: unknown path, method not allowed.
    code = CODE_BY_STATUS.get(exc.status_code, "VALIDATION_ERROR")
    response = error_response(exc.status_code, code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return error_response(500, "INTERNAL_ERROR", "Internal server error")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)
