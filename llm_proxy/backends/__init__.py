"""Backend adapters, one per mode, and the factory choosing between them."""

from __future__ import annotations

import httpx

from llm_proxy.backends.base import Backend, extract_text
from llm_proxy.backends.local import LocalBackend
from llm_proxy.backends.openai import OpenAIBackend
from llm_proxy.backends.simulate import SimulatedBackend
from llm_proxy.config import Settings
from llm_proxy.modes import select_mode

__all__ = [
    "Backend",
    "LocalBackend",
    "OpenAIBackend",
    "SimulatedBackend",
    "build_backend",
    "extract_text",
]


def build_backend(
    config: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Backend:
    """Build the single backend selected by ``config``."""
    mode = select_mode(config.openai_api_key, config.local_model_url)
    if mode == "openai":
        return OpenAIBackend(
            api_key=(config.openai_api_key or "").strip(),
            endpoint=config.openai_api_url,
            rewrite_model=config.rewrite_model(),
            suggestion_model=config.suggestion_model(),
            timeout=config.request_timeout_seconds,
            transport=transport,
        )
    if mode == "local":
        return LocalBackend(
            base_url=config.local_model_url or "",
            timeout=config.request_timeout_seconds,
            transport=transport,
        )
    return SimulatedBackend()
