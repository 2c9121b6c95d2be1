"""
Settings Module

This module builds the explicit configuration handed to the model gateway. The
process environment (optionally populated from a .env file) is read exactly once
per call to load_settings(); nothing else in the package looks up credentials.

Environment variables:
- OPENAI_API_KEY: Model API credential (primary name).
- NEBIUS_API_KEY: Model API credential (legacy alias, used when the primary is unset).
- OPENAI_BASE_URL / NEBIUS_BASE_URL: Optional OpenAI-compatible endpoint.
- LLM_MODEL: Preferred model identifier, tried first.
- LLM_FALLBACK_MODELS: Comma separated fallback identifiers (replaces the defaults).
- LLM_MAX_RETRIES, LLM_BACKOFF_CAP_SECONDS, LLM_TIMEOUT_SECONDS: Retry and deadline knobs.

Dependencies:
- pydantic: For the settings model.
- python-dotenv: For loading a local .env file.
"""

import os
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
from interviewee.errors.interview_errors import ConfigurationError

PRIMARY_API_KEY_ENV = "OPENAI_API_KEY"
LEGACY_API_KEY_ENV = "NEBIUS_API_KEY"

DEFAULT_MODEL_CANDIDATES = [
    "gpt-4o-mini",
    "gpt-4.1-mini",
    "gpt-3.5-turbo",
]

NUMERIC_ENV_FIELDS = {
    "max_retries": "LLM_MAX_RETRIES",
    "backoff_cap_seconds": "LLM_BACKOFF_CAP_SECONDS",
    "request_timeout_seconds": "LLM_TIMEOUT_SECONDS",
}


class ModelGatewaySettings(BaseModel):
    """Configuration for the model gateway."""
    api_key: Optional[str] = Field(default=None, description="Model API credential")
    base_url: Optional[str] = Field(default=None, description="OpenAI-compatible endpoint, None for the default")
    model_candidates: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MODEL_CANDIDATES),
        min_length=1,
        description="Model identifiers in fallback order",
    )
    max_retries: int = Field(default=2, ge=0, le=5, description="Retries after the first attempt on transient failures")
    backoff_base_seconds: float = Field(default=2.0, ge=0, description="First default backoff delay")
    backoff_cap_seconds: float = Field(default=20.0, ge=0, description="Upper bound for any single backoff delay")
    request_timeout_seconds: float = Field(default=60.0, gt=0, description="Deadline for one model request attempt")

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1


def _split_models(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _dedupe(items: List[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


def _env_number(name: str, default: str, cast):
    value = os.getenv(name, default).strip() or default
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(f"Invalid {name}: expected a number, got {value!r}") from None


def load_settings() -> ModelGatewaySettings:
    """
    Build ModelGatewaySettings from the environment.

    A missing credential is not an error here; the gateway raises
    ConfigurationError the first time it needs to reach the model.

    Returns:
        ModelGatewaySettings: The resolved configuration.

    Raises:
        ConfigurationError: If a numeric knob is not a number or is out of range.
    """
    load_dotenv()

    api_key = os.getenv(PRIMARY_API_KEY_ENV) or os.getenv(LEGACY_API_KEY_ENV) or None
    base_url = os.getenv("OPENAI_BASE_URL") or os.getenv("NEBIUS_BASE_URL") or None

    candidates = []
    preferred = os.getenv("LLM_MODEL")
    if preferred and preferred.strip():
        candidates.append(preferred.strip())
    fallback = os.getenv("LLM_FALLBACK_MODELS")
    candidates.extend(_split_models(fallback) if fallback else DEFAULT_MODEL_CANDIDATES)

    try:
        return ModelGatewaySettings(
            api_key=api_key,
            base_url=base_url,
            model_candidates=_dedupe(candidates) or list(DEFAULT_MODEL_CANDIDATES),
            max_retries=_env_number("LLM_MAX_RETRIES", "2", int),
            backoff_cap_seconds=_env_number("LLM_BACKOFF_CAP_SECONDS", "20", float),
            request_timeout_seconds=_env_number("LLM_TIMEOUT_SECONDS", "60", float),
        )
    except ValidationError as e:
        error = e.errors()[0]
        field = error["loc"][0] if error["loc"] else ""
        name = NUMERIC_ENV_FIELDS.get(field, field)
        raise ConfigurationError(f"Invalid {name}: {error['msg']}") from None
