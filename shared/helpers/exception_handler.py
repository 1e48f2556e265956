import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from shared.core.schemas import JsonOutResult
from shared.helpers.json_response_helper import field_errors
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc.detail, dict):
            return JSONResponse(content=exc.detail, status_code=exc.status_code)

        wrapped = JsonOutResult(
            status=False,
            status_code=AppStatusCode.OPERATION_FAILED,
            message=str(exc.detail)
        ).model_dump(exclude_none=True)
        return JSONResponse(content=wrapped, status_code=exc.status_code or 400)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        wrapped = JsonOutResult(
            status=False,
            status_code=AppStatusCode.INVALID_INPUT,
            message="Validation Error.",
            errors=field_errors(exc.errors())
        ).model_dump(exclude_none=True)
        return JSONResponse(content=wrapped, status_code=400)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s", request.url.path)

        wrapped = JsonOutResult(
            status=False,
            status_code=AppStatusCode.OPERATION_FAILED,
            message="Internal server error."
        ).model_dump(exclude_none=True)
        return JSONResponse(content=wrapped, status_code=500)
