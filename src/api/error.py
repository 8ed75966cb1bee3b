"""API error handling

Use case errors are raised from routes as ClientError and rendered as
``{"error": {"code", "message", "reason"}}``.
"""

import logging
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)

CONFLICT_CODES = {
    "INVOICE_NOT_DRAFT",
    "INVOICE_NOT_PAYABLE",
    "INVOICE_NOT_ISSUED",
    "INVOICE_STUDENT_MISMATCH",
    "OVERLAPPING_PRICE_OVERRIDE",
}


def status_for(error: Error) -> int:
    """HTTP status of a use case error code"""
    if error.code.endswith("_NOT_FOUND"):
        return status.HTTP_404_NOT_FOUND
    if error.code in CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    if error.code == "VALIDATION_ERROR":
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if error.code.endswith("_FAILED"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


class ClientError(Exception):
    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_for(error)


def error_body(error: Error) -> dict:
    return {"error": error.model_dump(exclude_none=True)}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ClientError)
    async def client_error_handler(request: Request, exc: ClientError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} {exc.error.reason}")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.error))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = Error(
            code="VALIDATION_ERROR",
            message="Invalid request parameters",
            reason="; ".join(
                f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
                for item in exc.errors()
            ),
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body(error),
        )
