"""Remote provider backend speaking the OpenAI chat completions API."""

from __future__ import annotations

from typing import Any

import httpx

from llm_proxy.backends.base import ExtractionPath, decode_body, extract_text, post_json
from llm_proxy.config import ModelConfig
from llm_proxy.prompts import build_rewrite_messages, build_suggestion_messages
from llm_proxy.types import Mode

# choices[0].message.content, then the legacy completions field
CHOICE_TEXT_PATHS: tuple[ExtractionPath, ...] = (
    ("choices", 0, "message", "content"),
    ("choices", 0, "text"),
)


class OpenAIBackend:
    """Calls the chat completions endpoint with bearer authorization."""

    mode: Mode = "openai"

    def __init__(
        self,
        *,
        api_key: str,
        endpoint: str,
        rewrite_model: ModelConfig,
        suggestion_model: ModelConfig,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self.endpoint = endpoint
        self.rewrite_model = rewrite_model
        self.suggestion_model = suggestion_model
        self._timeout = timeout
        self._transport = transport

    @property
    def info(self) -> str:
        return f"Using OpenAI chat completions ({self.rewrite_model.name})."

    def build_payload(self, messages: list[dict[str, str]], model: ModelConfig) -> dict[str, Any]:
        """Translate messages into the chat completions request shape."""
        return {
            "model": model.name,
            "messages": messages,
            "temperature": model.temperature,
            "max_tokens": model.max_tokens,
        }

    async def _complete(self, payload: dict[str, Any]) -> str:
        response = await post_json(
            self.endpoint,
            payload,
            headers={"Authorization": f"Bearer {self._api_key}"},
            timeout=self._timeout,
            transport=self._transport,
        )
        return extract_text(decode_body(response), CHOICE_TEXT_PATHS)

    async def rewrite(self, text: str, tone: str | None) -> str:
        payload = self.build_payload(build_rewrite_messages(text, tone), self.rewrite_model)
        return await self._complete(payload)

    async def suggest(self, context: str | None) -> str:
        payload = self.build_payload(build_suggestion_messages(context), self.suggestion_model)
        return await self._complete(payload)
