"""
Error Classifier Module

Maps whatever the model SDK raised onto the gateway's three failure classes and
pulls a retry hint out of the error when the provider sent one. This is the only
place that inspects SDK exceptions or error message text.

Classes:
- NOT_FOUND: HTTP 404, the model identifier does not exist for this credential.
- TRANSIENT: HTTP 429 (rate limited), HTTP 503 (overloaded) and request timeouts.
- FATAL: everything else.

Dependencies:
- openai: For the SDK exception types.
- interviewee.constants.regex_patterns: For retry hint patterns in error messages.
"""

from typing import Any, Optional
import openai
from interviewee.constants.regex_patterns import RETRY_IN_SECONDS, TRY_AGAIN_IN
from interviewee.errors.interview_errors import (
    FatalModelError,
    ModelGatewayError,
    ModelNotFoundError,
    TransientModelError,
)

TRANSIENT_STATUS_CODES = {429, 503}
NOT_FOUND_STATUS_CODES = {404}


def _status_code(exc: BaseException) -> Optional[int]:
    for attribute in ("status_code", "status", "code"):
        value = getattr(exc, attribute, None)
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return None


def _header_hint(exc: BaseException) -> Optional[float]:
    response: Any = getattr(exc, "response", None)
    headers = getattr(response, "headers", None)
    if not headers:
        return None
    retry_after_ms = headers.get("retry-after-ms")
    if retry_after_ms:
        try:
            return float(retry_after_ms) / 1000.0
        except ValueError:
            pass
    retry_after = headers.get("retry-after")
    if retry_after:
        try:
            return float(retry_after)
        except ValueError:
            # HTTP-date form is not worth parsing for a capped backoff
            return None
    return None


def parse_retry_hint(message: str) -> Optional[float]:
    """
    Read a suggested wait out of a free-text error message.

    Example:
        >>> parse_retry_hint("Quota exceeded. Please retry in 12.5s.")
        12.5
        >>> parse_retry_hint("Rate limit reached. Please try again in 350ms.")
        0.35
    """
    if not message:
        return None
    match = RETRY_IN_SECONDS.search(message)
    if match:
        return float(match.group(1))
    match = TRY_AGAIN_IN.search(message)
    if match:
        value = float(match.group(1))
        return value / 1000.0 if match.group(2).lower() == "ms" else value
    return None


def retry_hint(exc: BaseException) -> Optional[float]:
    hint = _header_hint(exc)
    if hint is not None:
        return hint
    return parse_retry_hint(str(getattr(exc, "message", "") or exc))


def classify_error(exc: BaseException, model_id: Optional[str] = None) -> ModelGatewayError:
    """
    Classify an exception raised while calling the model.

    Args:
        exc (BaseException): The raised exception.
        model_id (Optional[str]): Model identifier of the failing call.

    Returns:
        ModelGatewayError: TransientModelError, ModelNotFoundError or FatalModelError.
    """
    if isinstance(exc, ModelGatewayError):
        return exc

    message = str(getattr(exc, "message", "") or exc) or type(exc).__name__

    if isinstance(exc, openai.APITimeoutError):
        return TransientModelError(f"Model request timed out: {message}", model_id=model_id)

    status = _status_code(exc)
    if isinstance(exc, openai.NotFoundError) or status in NOT_FOUND_STATUS_CODES:
        return ModelNotFoundError(message, model_id=model_id)
    if isinstance(exc, openai.RateLimitError) or status in TRANSIENT_STATUS_CODES:
        return TransientModelError(message, model_id=model_id, retry_after_seconds=retry_hint(exc))
    return FatalModelError(message, model_id=model_id)
