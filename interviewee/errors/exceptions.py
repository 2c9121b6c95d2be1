"""
Description:
HTTP exception types raised by the route layer.

Dependencies:
- fastapi: For the HTTPException base class.
- starlette.status: For HTTP status code constants.
"""
from fastapi import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=HTTP_400_BAD_REQUEST, detail=detail)

class NotFound(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=HTTP_404_NOT_FOUND, detail=detail)

class InternalServerError(HTTPException):
    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)

class SessionNotFound(NotFound):
    def __init__(self, identifier: str = None):
        detail = f"Session '{identifier}' not found." if identifier else "Session not found."
        super().__init__(detail=detail)
