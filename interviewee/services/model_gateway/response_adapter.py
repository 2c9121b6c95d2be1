"""
Response Adapter Module

Single seam for pulling generated text out of a model response. Response shapes
differ between SDK versions and endpoints, so every shape check lives here:

- Responses API objects expose `output_text`.
- Chat completions expose `choices[0].message.content`.
- Some clients expose `text` as a property, others as a method.
- Test doubles and raw HTTP payloads are plain dicts or strings.

Dependencies:
- interviewee.errors.interview_errors: For FatalModelError.
"""

from typing import Any
from interviewee.errors.interview_errors import FatalModelError


def _get(source: Any, key: str) -> Any:
    if isinstance(source, dict):
        return source.get(key)
    return getattr(source, key, None)


def _from_choices(choices: Any) -> Any:
    if not choices:
        return None
    first = choices[0]
    message = _get(first, "message")
    if message is not None:
        return _get(message, "content")
    return _get(first, "text")


def extract_text(raw_response: Any) -> str:
    """
    Extract the generated text from a model response.

    Args:
        raw_response (Any): Whatever the client returned.

    Returns:
        str: The generated text. A response that carries an explicit empty or null
        content yields "".

    Raises:
        FatalModelError: If the response has no recognizable text field.
    """
    if isinstance(raw_response, str):
        return raw_response

    output_text = _get(raw_response, "output_text")
    if isinstance(output_text, str):
        return output_text

    choices = _get(raw_response, "choices")
    if choices is not None:
        content = _from_choices(choices)
        if content is None or isinstance(content, str):
            return content or ""

    text = _get(raw_response, "text")
    if callable(text):
        text = text()
    if isinstance(text, str):
        return text

    raise FatalModelError(f"Unrecognized model response shape: {type(raw_response).__name__}")
