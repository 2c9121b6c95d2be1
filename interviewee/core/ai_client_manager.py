"""
AI Client Manager

This module owns the process-wide ModelGateway instance. The gateway is built
lazily from explicit settings on first use; routes receive it through the
get_model_gateway() FastAPI dependency, which tests override with fakes.
"""

import threading
from typing import Optional
from loguru import logger
from interviewee.core.settings import ModelGatewaySettings, load_settings
from interviewee.services.model_gateway.model_gateway import ModelGateway

_gateway: Optional[ModelGateway] = None
_gateway_lock = threading.Lock()


def build_model_gateway(settings: Optional[ModelGatewaySettings] = None) -> ModelGateway:
    """
    Build a new ModelGateway.

    Args:
        settings (Optional[ModelGatewaySettings]): Explicit settings. Read from the
            environment when omitted.

    Returns:
        ModelGateway: A gateway whose client is created on first use.
    """
    settings = settings or load_settings()
    if not settings.api_key:
        logger.warning("No model API credential configured; model calls will fail until one is set")
    logger.info(f"Model gateway configured with candidates: {', '.join(settings.model_candidates)}")
    return ModelGateway(settings)


def get_model_gateway() -> ModelGateway:
    """
    Get the shared ModelGateway with lazy, thread-safe initialization.

    Returns:
        ModelGateway: The singleton instance
    """
    global _gateway

    if _gateway is None:
        with _gateway_lock:
            # Double-check locking pattern
            if _gateway is None:
                _gateway = build_model_gateway()

    return _gateway


def reset_model_gateway() -> None:
    """Drop the shared gateway so the next call re-reads the environment."""
    global _gateway
    with _gateway_lock:
        _gateway = None
