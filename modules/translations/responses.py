"""Response envelope helpers for the translation API.

Every response body is ``{success, data?, error?, message?}``; service
results are mapped to HTTP status codes here.
"""

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse

from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult, OperationStatus

logger = get_module_logger()

STATUS_CODES = {
    OperationStatus.SUCCESS: 200,
    OperationStatus.NOT_FOUND: 404,
    OperationStatus.CONFLICT: 409,
    OperationStatus.PROTECTED: 400,
    OperationStatus.INVALID_INPUT: 400,
    OperationStatus.IO_FAILURE: 500,
}


def format_success_response(
    data: Any = None, message: Optional[str] = None
) -> Dict[str, Any]:
    response: Dict[str, Any] = {"success": True}
    if message:
        response["message"] = message
    if data is not None:
        response["data"] = data
    return response


def format_error_response(
    error: str,
    error_code: Optional[str] = None,
    message: Optional[str] = None,
    data: Any = None,
) -> Dict[str, Any]:
    response: Dict[str, Any] = {"success": False, "error": error}
    if error_code:
        response["errorCode"] = error_code
    if message:
        response["message"] = message
    if data is not None:
        response["data"] = data
    return response


def to_response(
    result: OperationResult, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    """Map an OperationResult to a JSONResponse with the envelope."""
    if result.is_success:
        message = result.message if result.message != "ok" else None
        body = format_success_response(result.data, message)
    else:
        logger.info("operation_failed", **result.log_fields())
        body = format_error_response(
            result.message, error_code=result.error_code, data=result.data
        )
    return JSONResponse(
        status_code=STATUS_CODES.get(result.status, 500),
        content=body,
        headers=headers,
    )
