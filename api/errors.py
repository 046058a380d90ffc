from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from infrastructure.logging import get_module_logger
from modules.translations.responses import format_error_response

logger = get_module_logger()


async def validation_error_handler(request: Request, exc: Exception):
    """Report malformed request bodies with the standard envelope and a 400."""
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    details = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())[1:]),
            "message": error.get("msg", ""),
        }
        for error in errors
    ]
    logger.info(
        "request_validation_failed",
        path=request.url.path,
        errors=len(details),
    )
    message = details[0]["message"] if details else "Invalid request"
    return JSONResponse(
        status_code=400,
        content=format_error_response(
            message, error_code="INVALID_INPUT", data=details or None
        ),
    )


def setup_exception_handlers(app: FastAPI):
    """
    Register the API exception handlers on the FastAPI application.
    """
    app.add_exception_handler(RequestValidationError, validation_error_handler)
