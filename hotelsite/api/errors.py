from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotelsite.api.responses import error_payload

logger = logging.getLogger(__name__)


class ApiException(Exception):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: object | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details


async def _handle_api_exception(request: Request, exc: ApiException) -> JSONResponse:
    logger.info(
        "api.request_rejected",
        extra={
            "event": "api.request_rejected",
            "path": request.url.path,
            "status_code": exc.status_code,
            "code": exc.code,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_payload(
            request,
            code=exc.code,
            message=exc.message,
            details=exc.details,
        ),
    )


async def _handle_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=error_payload(
            request,
            code="validation_error",
            message="Request validation failed.",
            details=[
                {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
                for error in exc.errors()
            ],
        ),
    )


def register_api_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiException, _handle_api_exception)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
