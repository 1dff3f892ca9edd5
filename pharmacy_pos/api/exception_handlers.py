# FILE: pharmacy_pos/api/exception_handlers.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pharmacy_pos.api.response import err
from pharmacy_pos.services.errors import (
    BillingError,
    MedicineUnavailableError,
    PersistenceError,
    PrescriptionGateError,
    PrescriptionRequiredError,
    StockConflictError,
)

logger = logging.getLogger(__name__)


def billing_error_status(exc: BillingError) -> int:
    if isinstance(exc, MedicineUnavailableError):
        return 404
    if isinstance(exc, (PrescriptionRequiredError, PrescriptionGateError, StockConflictError)):
        return 409
    if isinstance(exc, PersistenceError):
        return 500
    return 400


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BillingError)
    async def billing_exception_handler(request: Request, exc: BillingError) -> JSONResponse:
        status_code = billing_error_status(exc)
        if status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return err(exc, status_code=status_code)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # exc.detail can be str/dict/list
        msg = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return err(msg, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return err("Validation error", status_code=422, code="request_invalid")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return err("Internal server error", status_code=500)
