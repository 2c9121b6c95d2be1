"""
Description:
Domain error taxonomy for blueprint generation, the model gateway and the
interview state machine. These are plain exceptions; errors.handlers maps
them to HTTP responses.

Dependencies:
- enum: For the gateway error kinds.
- typing: For type hints.
"""
from enum import Enum
from typing import Optional


class InterviewError(Exception):
    """Base class for every error raised by the interview services."""


class InvalidInputError(InterviewError):
    """A required field is missing or empty, or a value is not allowed."""


class InvalidStateError(InterviewError):
    """An interview session operation was called from the wrong state."""


class ConfigurationError(InterviewError):
    """The service is missing configuration it needs, such as the model credential."""


class BlueprintParseError(InterviewError):
    """
    The model answered but its output could not be decoded into a Blueprint.

    The raw text is kept so that callers can still display it.
    """

    def __init__(self, parse_error: str, raw: str):
        super().__init__(parse_error)
        self.parse_error = parse_error
        self.raw = raw


class ErrorKind(str, Enum):
    """Failure classes callers of the model gateway branch on."""
    TRANSIENT = "transient"
    NOT_FOUND = "not_found"
    FATAL = "fatal"


class ModelGatewayError(InterviewError):
    """
    Structured model gateway failure.

    Attributes:
        kind (ErrorKind): Failure class used for retry and fallback decisions.
        model_id (Optional[str]): Model identifier the failing call targeted.
        retry_after_seconds (Optional[float]): Wait suggested by the provider, if any.
    """

    kind = ErrorKind.FATAL

    def __init__(
        self,
        message: str,
        model_id: Optional[str] = None,
        retry_after_seconds: Optional[float] = None,
    ):
        super().__init__(message)
        self.message = message
        self.model_id = model_id
        self.retry_after_seconds = retry_after_seconds


class TransientModelError(ModelGatewayError):
    kind = ErrorKind.TRANSIENT


class ModelNotFoundError(ModelGatewayError):
    kind = ErrorKind.NOT_FOUND


class FatalModelError(ModelGatewayError):
    kind = ErrorKind.FATAL


class NoModelAvailableError(ModelGatewayError):
    """Every candidate model identifier was rejected as not found."""
    kind = ErrorKind.NOT_FOUND
