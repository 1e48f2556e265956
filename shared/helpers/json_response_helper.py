from fastapi import HTTPException
from typing import Any, Dict, List

from shared.utils.app_status_code import AppStatusCode
from shared.core.schemas import JsonOutResult


def field_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic errors into [{field, message}] pairs."""
    flattened = []
    for error in errors:
        loc = error.get("loc") or ()
        field = str(loc[-1]) if loc else ""
        # Prefer the raw validator message over pydantic's "Value error, ..." prefix
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error else error.get("msg", "")
        flattened.append({"field": field, "message": message})
    return flattened


def success_response(data: Any = None, message: str = "Success", status_code: str = AppStatusCode.OPERATION_SUCCESS):
    return JsonOutResult(
        data=data,
        status=True,
        status_code=status_code,
        message=message
    )


def error_response(message: str, status_code: str = AppStatusCode.OPERATION_FAILED, http_status: int = 400):
    raise HTTPException(
        status_code=http_status,
        detail=JsonOutResult(
            status=False,
            status_code=status_code,
            message=message
        ).model_dump(exclude_none=True)
    )


def validation_error_response(errors: List[Dict[str, str]], message: str = "Validation Error.", status_code: str = AppStatusCode.INVALID_INPUT):
    raise HTTPException(
        status_code=400,
        detail=JsonOutResult(
            status=False,
            status_code=status_code,
            message=message,
            errors=errors
        ).model_dump(exclude_none=True)
    )
