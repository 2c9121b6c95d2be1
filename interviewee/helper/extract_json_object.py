"""
Description:
Extract a JSON object from model output that may be wrapped in prose or markdown
fences despite instructions.

The object is taken as the text from the first "{" to the last "}". When either
brace is missing the whole text is decoded as is, so the caller gets a real
decoding error message to show next to the raw output.

Arguments:
- text: Raw model output.

Returns:
- The decoded object.

Dependencies:
- json: For decoding.

"""
import json
from typing import Any

def slice_json_object(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end != -1 and end > start:
        return text[start:end + 1]
    return text

def extract_json_object(text: str) -> Any:
    """
    Raises:
        json.JSONDecodeError: If the sliced text is not valid JSON.
    """
    return json.loads(slice_json_object(text or ""))
