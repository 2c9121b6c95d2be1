"""
Model Gateway Module

This module wraps single-prompt text generation against an OpenAI-compatible API.
It owns the retry and fallback policy for every model call the application makes:

- Transient failures (rate limits, overload, timeouts) are retried on the same model
  with backoff, up to the configured number of attempts.
- A model identifier that does not exist is never retried; generate_with_fallback()
  moves on to the next identifier without waiting.
- Anything else is fatal and raised immediately.

The prompt handed to the gateway is already fully rendered. The gateway does no
templating and no caching.

Dependencies:
- openai: For the AsyncOpenAI client.
- loguru: For logging retries and fallbacks.
- interviewee.core.settings: For ModelGatewaySettings.
"""

import asyncio
from typing import Any, Awaitable, Callable, List, NamedTuple, Optional, Sequence
from loguru import logger
from openai import AsyncOpenAI
from interviewee.core.settings import ModelGatewaySettings, PRIMARY_API_KEY_ENV, LEGACY_API_KEY_ENV
from interviewee.errors.interview_errors import (
    ConfigurationError,
    ErrorKind,
    ModelGatewayError,
    ModelNotFoundError,
    NoModelAvailableError,
)
from interviewee.services.model_gateway.backoff import backoff_delay
from interviewee.services.model_gateway.error_classifier import classify_error
from interviewee.services.model_gateway.response_adapter import extract_text


class Generation(NamedTuple):
    text: str
    model_id: str


def _preview(text: str, limit: int = 80) -> str:
    first_line = text.strip().splitlines()[0] if text.strip() else ""
    return first_line if len(first_line) <= limit else first_line[: limit - 3] + "..."


class ModelGateway:
    """
    Boundary component issuing text-generation requests to the language model.

    The client is created lazily so that a missing credential surfaces as a
    ConfigurationError on the first call instead of failing at import or startup.

    Attributes:
        settings (ModelGatewaySettings): Credential, fallback list and retry knobs.

    Example:
        >>> gateway = ModelGateway(load_settings())
        >>> generation = await gateway.generate_with_fallback("Ask one interview question.")
        >>> print(generation.model_id, generation.text)
    """

    def __init__(
        self,
        settings: ModelGatewaySettings,
        client: Optional[Any] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Args:
            settings (ModelGatewaySettings): Gateway configuration.
            client (Optional[Any]): Pre-built AsyncOpenAI-compatible client. Tests pass fakes here.
            sleep (Callable): Awaitable used for backoff waits.
        """
        self.settings = settings
        self._client = client
        self._sleep = sleep

    @property
    def model_candidates(self) -> List[str]:
        return list(self.settings.model_candidates)

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.settings.api_key:
                raise ConfigurationError(
                    f"Missing {PRIMARY_API_KEY_ENV} (or {LEGACY_API_KEY_ENV}) in the environment or .env file"
                )
            # retries are handled here, not inside the SDK
            self._client = AsyncOpenAI(
                api_key=self.settings.api_key,
                base_url=self.settings.base_url,
                max_retries=0,
                timeout=self.settings.request_timeout_seconds,
            )
            logger.info("Initialized model client")
        return self._client

    async def _request(self, client: Any, model_id: str, prompt: str) -> str:
        response = await client.chat.completions.create(
            model=model_id,
            messages=[{"role": "user", "content": prompt}],
        )
        return extract_text(response)

    async def generate(self, model_id: str, prompt: str) -> str:
        """
        Generate text with one model, retrying transient failures.

        Args:
            model_id (str): Model identifier.
            prompt (str): Fully rendered prompt.

        Returns:
            str: Generated text.

        Raises:
            ConfigurationError: If no credential is configured.
            TransientModelError: If every attempt failed transiently.
            ModelNotFoundError: If the identifier does not exist.
            FatalModelError: For any other failure.
        """
        client = self._get_client()
        attempts = self.settings.max_attempts
        for attempt in range(attempts):
            try:
                text = await self._request(client, model_id, prompt)
                logger.info(f"Model {model_id} answered on attempt {attempt + 1}/{attempts}: {_preview(text)}")
                return text
            except ModelGatewayError:
                raise
            except Exception as exc:
                error = classify_error(exc, model_id)
                if error.kind is not ErrorKind.TRANSIENT:
                    raise error from exc
                if attempt == attempts - 1:
                    logger.error(f"Model {model_id} still unavailable after {attempts} attempts: {error.message}")
                    raise error from exc
                delay = backoff_delay(
                    attempt,
                    error.retry_after_seconds,
                    base_seconds=self.settings.backoff_base_seconds,
                    cap_seconds=self.settings.backoff_cap_seconds,
                )
                logger.warning(
                    f"Model {model_id} transient failure on attempt {attempt + 1}/{attempts}, "
                    f"retrying in {delay:.1f}s: {error.message}"
                )
                await self._sleep(delay)
        # range(attempts) is never empty, every path above returns or raises
        raise ModelGatewayError("Retry exhausted", model_id=model_id)

    async def generate_with_fallback(self, prompt: str, model_ids: Optional[Sequence[str]] = None) -> Generation:
        """
        Generate text with the first model identifier that exists.

        Identifiers are tried in order. Only a not-found failure advances to the next
        one; transient exhaustion and fatal errors are raised as they are.

        Raises:
            NoModelAvailableError: If every identifier was rejected as not found.
        """
        candidates = list(model_ids) if model_ids else self.model_candidates
        last_error: Optional[ModelNotFoundError] = None
        for model_id in candidates:
            try:
                text = await self.generate(model_id, prompt)
                return Generation(text=text, model_id=model_id)
            except ModelNotFoundError as exc:
                logger.warning(f"Model {model_id} not found, trying next candidate")
                last_error = exc
        message = f"No model succeeded (tried: {', '.join(candidates)})"
        if last_error is not None:
            message = f"{message}: {last_error.message}"
        raise NoModelAvailableError(message) from last_error

    async def list_models(self) -> List[str]:
        """Model identifiers visible to the configured credential, sorted."""
        client = self._get_client()
        try:
            model_ids = [model.id async for model in client.models.list()]
        except Exception as exc:
            raise classify_error(exc) from exc
        return sorted(model_ids)
