"""Turn raised errors into consistent JSON error responses."""
import logging
from datetime import datetime
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from timetracker.exceptions import AppError

logger = logging.getLogger(__name__)


class ApiError(BaseModel):
    """Error body shared by every failed request."""

    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    code: str


def error_response(status_code: int, message: str, path: str, code: str) -> JSONResponse:
    body = ApiError(
        timestamp=datetime.now(),
        status=status_code,
        error=HTTPStatus(status_code).phrase,
        message=message,
        path=path,
        code=code,
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to the application."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(exc.status_code, exc.message, request.url.path, exc.code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = ", ".join(
            f"{err['loc'][-1]}: {err['msg']}" if err.get("loc") else err["msg"]
            for err in exc.errors()
        )
        return error_response(400, message, request.url.path, "VALIDATION_ERROR")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, "Unexpected error occurred", request.url.path, "INTERNAL_ERROR")
