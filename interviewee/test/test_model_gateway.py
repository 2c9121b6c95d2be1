"""
Test Model Gateway Module

This module tests retry, backoff and fallback behavior of the model gateway against
a scripted fake client, plus the error classifier and response adapter it relies on.

Dependencies:
- pytest: For testing framework
- pytest-asyncio: For async test support
- interviewee.services.model_gateway: The modules being tested
"""

from types import SimpleNamespace

import httpx
import openai
import pytest

from interviewee.core.settings import ModelGatewaySettings, load_settings
from interviewee.errors.interview_errors import (
    ConfigurationError,
    ErrorKind,
    FatalModelError,
    ModelNotFoundError,
    NoModelAvailableError,
    TransientModelError,
)
from interviewee.services.model_gateway.backoff import backoff_delay
from interviewee.services.model_gateway.error_classifier import classify_error, parse_retry_hint
from interviewee.services.model_gateway.model_gateway import ModelGateway
from interviewee.services.model_gateway.response_adapter import extract_text
from interviewee.test.fakes import api_error


class TestBackoff:
    def test_exponential_default(self):
        assert [backoff_delay(attempt) for attempt in range(4)] == [2.0, 4.0, 8.0, 16.0]

    def test_capped(self):
        assert backoff_delay(5) == 20.0
        assert backoff_delay(0, retry_after_seconds=45) == 20.0

    def test_hint_wins(self):
        assert backoff_delay(3, retry_after_seconds=1.5) == 1.5

    def test_never_negative(self):
        assert backoff_delay(0, retry_after_seconds=-3) == 0.0


class TestErrorClassifier:
    """Test mapping of SDK exceptions onto gateway error kinds."""

    def test_not_found(self):
        error = classify_error(api_error(404, "model does not exist"), "model-a")
        assert isinstance(error, ModelNotFoundError)
        assert error.kind is ErrorKind.NOT_FOUND
        assert error.model_id == "model-a"

    @pytest.mark.parametrize("status_code", [429, 503])
    def test_transient_status(self, status_code):
        assert classify_error(api_error(status_code)).kind is ErrorKind.TRANSIENT

    def test_timeout_is_transient(self):
        timeout = openai.APITimeoutError(request=httpx.Request("POST", "https://models.test"))
        assert isinstance(classify_error(timeout), TransientModelError)

    @pytest.mark.parametrize("status_code", [400, 401, 500])
    def test_other_status_is_fatal(self, status_code):
        assert isinstance(classify_error(api_error(status_code)), FatalModelError)

    def test_unknown_exception_is_fatal(self):
        assert classify_error(RuntimeError("boom")).kind is ErrorKind.FATAL

    def test_retry_after_header(self):
        error = classify_error(api_error(429, "slow down", headers={"retry-after": "7"}))
        assert error.retry_after_seconds == 7.0

    def test_retry_after_ms_header(self):
        error = classify_error(api_error(429, "slow down", headers={"retry-after-ms": "1500"}))
        assert error.retry_after_seconds == 1.5

    def test_retry_hint_from_message(self):
        error = classify_error(api_error(429, "Quota exceeded. Please retry in 12.5s."))
        assert error.retry_after_seconds == 12.5

    def test_transient_without_hint(self):
        assert classify_error(api_error(503, "overloaded")).retry_after_seconds is None

    @pytest.mark.parametrize("message, expected", [
        ("Please retry in 3s", 3.0),
        ("Rate limit reached. Please try again in 350ms.", 0.35),
        ("Please try again in 20s.", 20.0),
        ("nothing useful here", None),
        ("", None),
    ])
    def test_parse_retry_hint(self, message, expected):
        assert parse_retry_hint(message) == expected


class TestExtractText:
    """Test the response adapter against the shapes clients return."""

    def test_plain_string(self):
        assert extract_text("hello") == "hello"

    def test_chat_completion_object(self):
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="hi"))])
        assert extract_text(response) == "hi"

    def test_chat_completion_dict(self):
        assert extract_text({"choices": [{"message": {"content": "hi"}}]}) == "hi"

    def test_null_content_is_empty(self):
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])
        assert extract_text(response) == ""

    def test_output_text(self):
        assert extract_text(SimpleNamespace(output_text="from responses api")) == "from responses api"

    def test_text_property_and_method(self):
        assert extract_text(SimpleNamespace(text="as field")) == "as field"
        assert extract_text(SimpleNamespace(text=lambda: "as method")) == "as method"

    def test_unrecognized_shape_is_fatal(self):
        with pytest.raises(FatalModelError):
            extract_text(SimpleNamespace(something_else=1))


class TestGenerate:
    """Test retries on a single model."""

    @pytest.mark.asyncio
    async def test_success_first_try(self, make_gateway, sleep):
        gateway, client = make_gateway(["Tell me about a conflict."])
        assert await gateway.generate("model-a", "prompt") == "Tell me about a conflict."
        assert client.models_called == ["model-a"]
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_transient_then_success_honors_hint(self, make_gateway, sleep):
        gateway, client = make_gateway([
            api_error(429, "Please retry in 3s"),
            "ok",
        ])
        assert await gateway.generate("model-a", "prompt") == "ok"
        assert client.models_called == ["model-a", "model-a"]
        assert sleep.delays == [3.0]

    @pytest.mark.asyncio
    async def test_transient_uses_exponential_backoff(self, make_gateway, sleep):
        gateway, _ = make_gateway([api_error(503), api_error(503), "ok"])
        assert await gateway.generate("model-a", "prompt") == "ok"
        assert sleep.delays == [2.0, 4.0]

    @pytest.mark.asyncio
    async def test_transient_exhaustion(self, make_gateway, sleep):
        gateway, client = make_gateway([api_error(429), api_error(429), api_error(429)])
        with pytest.raises(TransientModelError):
            await gateway.generate("model-a", "prompt")
        assert len(client.calls) == 3
        assert len(sleep.delays) == 2

    @pytest.mark.asyncio
    async def test_fatal_is_not_retried(self, make_gateway, sleep):
        gateway, client = make_gateway([api_error(401, "bad key")])
        with pytest.raises(FatalModelError):
            await gateway.generate("model-a", "prompt")
        assert len(client.calls) == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_not_found_is_not_retried(self, make_gateway, sleep):
        gateway, client = make_gateway([api_error(404)])
        with pytest.raises(ModelNotFoundError):
            await gateway.generate("model-a", "prompt")
        assert len(client.calls) == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_missing_credential(self):
        gateway = ModelGateway(ModelGatewaySettings(api_key=None))
        with pytest.raises(ConfigurationError):
            await gateway.generate("model-a", "prompt")


class TestGenerateWithFallback:
    """Test fallback across candidate model identifiers."""

    @pytest.mark.asyncio
    async def test_not_found_moves_to_next_model_without_waiting(self, make_gateway, sleep):
        gateway, client = make_gateway([api_error(404), "from b"])
        generation = await gateway.generate_with_fallback("prompt")
        assert generation.text == "from b"
        assert generation.model_id == "model-b"
        assert client.models_called == ["model-a", "model-b"]
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_all_not_found(self, make_gateway):
        gateway, client = make_gateway([api_error(404), api_error(404), api_error(404)])
        with pytest.raises(NoModelAvailableError) as exc_info:
            await gateway.generate_with_fallback("prompt")
        assert "No model succeeded" in exc_info.value.message
        assert client.models_called == ["model-a", "model-b", "model-c"]

    @pytest.mark.asyncio
    async def test_transient_exhaustion_does_not_fall_back(self, make_gateway):
        gateway, client = make_gateway([api_error(503), api_error(503), api_error(503)])
        with pytest.raises(TransientModelError):
            await gateway.generate_with_fallback("prompt")
        assert set(client.models_called) == {"model-a"}

    @pytest.mark.asyncio
    async def test_fatal_does_not_fall_back(self, make_gateway):
        gateway, client = make_gateway([api_error(400, "bad request")])
        with pytest.raises(FatalModelError):
            await gateway.generate_with_fallback("prompt")
        assert client.models_called == ["model-a"]

    @pytest.mark.asyncio
    async def test_explicit_model_list(self, make_gateway):
        gateway, client = make_gateway(["ok"])
        generation = await gateway.generate_with_fallback("prompt", model_ids=["model-z"])
        assert generation.model_id == "model-z"
        assert client.calls[0]["prompt"] == "prompt"

    @pytest.mark.asyncio
    async def test_list_models_sorted(self, make_gateway):
        gateway, _ = make_gateway(model_ids=["model-b", "model-a"])
        assert await gateway.list_models() == ["model-a", "model-b"]


class TestLoadSettings:
    """Test environment-driven configuration."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (
            "OPENAI_API_KEY", "NEBIUS_API_KEY", "OPENAI_BASE_URL", "NEBIUS_BASE_URL",
            "LLM_MODEL", "LLM_FALLBACK_MODELS", "LLM_MAX_RETRIES", "LLM_BACKOFF_CAP_SECONDS",
            "LLM_TIMEOUT_SECONDS",
        ):
            monkeypatch.delenv(name, raising=False)
        # keep a developer's local .env out of these tests
        monkeypatch.setattr("interviewee.core.settings.load_dotenv", lambda *args, **kwargs: False)

    def test_defaults(self):
        settings = load_settings()
        assert settings.api_key is None
        assert settings.model_candidates == ["gpt-4o-mini", "gpt-4.1-mini", "gpt-3.5-turbo"]
        assert settings.max_attempts == 3

    def test_legacy_key_alias(self, monkeypatch):
        monkeypatch.setenv("NEBIUS_API_KEY", "legacy")
        assert load_settings().api_key == "legacy"
        monkeypatch.setenv("OPENAI_API_KEY", "primary")
        assert load_settings().api_key == "primary"

    def test_preferred_model_first_without_duplicates(self, monkeypatch):
        monkeypatch.setenv("LLM_MODEL", "model-b")
        monkeypatch.setenv("LLM_FALLBACK_MODELS", "model-a, model-b ,model-c")
        monkeypatch.setenv("LLM_MAX_RETRIES", "0")
        settings = load_settings()
        assert settings.model_candidates == ["model-b", "model-a", "model-c"]
        assert settings.max_attempts == 1

    @pytest.mark.parametrize("name, value, message", [
        ("LLM_MAX_RETRIES", "abc", "expected a number"),
        ("LLM_MAX_RETRIES", "9", "less than or equal to 5"),
        ("LLM_MAX_RETRIES", "-1", "greater than or equal to 0"),
        ("LLM_TIMEOUT_SECONDS", "soon", "expected a number"),
        ("LLM_TIMEOUT_SECONDS", "0", "greater than 0"),
        ("LLM_BACKOFF_CAP_SECONDS", "-5", "greater than or equal to 0"),
    ])
    def test_invalid_numeric_knob_names_the_variable(self, monkeypatch, name, value, message):
        """A bad knob is reported as a configuration problem that names the variable."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ConfigurationError, match=f"Invalid {name}") as exc_info:
            load_settings()
        assert message in str(exc_info.value)

    def test_blank_numeric_knob_uses_default(self, monkeypatch):
        monkeypatch.setenv("LLM_TIMEOUT_SECONDS", "  ")
        assert load_settings().request_timeout_seconds == 60.0
