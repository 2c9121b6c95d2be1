from fastapi import Request, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_503_SERVICE_UNAVAILABLE,
)
from interviewee.errors.interview_errors import (
    ConfigurationError,
    InvalidInputError,
    InvalidStateError,
    ModelGatewayError,
    NoModelAvailableError,
    TransientModelError,
)

def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
    )

def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Invalid request", "detail": jsonable_encoder(exc.errors())},
    )

def invalid_input_handler(request: Request, exc: InvalidInputError):
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"error": str(exc)},
    )

def invalid_state_handler(request: Request, exc: InvalidStateError):
    return JSONResponse(
        status_code=HTTP_409_CONFLICT,
        content={"error": str(exc)},
    )

def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {exc}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)},
    )

def model_gateway_error_handler(request: Request, exc: ModelGatewayError):
    """
    Surface model gateway failures with a displayable message.

    Exhausted retries on an overloaded or rate-limited model map to 503 so that
    clients can tell "try again later" apart from a broken configuration.
    Everything else, including running out of fallback models, is a 500.
    """
    logger.error(f"Model gateway failure ({exc.kind.value}, model={exc.model_id}): {exc.message}")
    if isinstance(exc, TransientModelError):
        status_code = HTTP_503_SERVICE_UNAVAILABLE
        message = f"The model is busy right now, please retry shortly. ({exc.message})"
    elif isinstance(exc, NoModelAvailableError):
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        message = exc.message or "No model succeeded"
    else:
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        message = exc.message or "Model request failed"
    return JSONResponse(status_code=status_code, content={"error": message})

def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "An unexpected error occurred."},
    )
