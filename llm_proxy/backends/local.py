"""Backend forwarding raw fields to a locally hosted model service."""

from __future__ import annotations

from typing import Any

import httpx

from llm_proxy.backends.base import ExtractionPath, decode_body, extract_text, post_json
from llm_proxy.types import Mode

REWRITE_PATH = "/rewrite"
SUGGESTION_PATH = "/suggestion"

REWRITE_TEXT_PATHS: tuple[ExtractionPath, ...] = (("rewritten",), ("output",))
SUGGESTION_TEXT_PATHS: tuple[ExtractionPath, ...] = (("suggestion",), ("output",))


class LocalBackend:
    """Posts ``{text, tone}`` or ``{context}`` verbatim to the local service.

    When none of the known result fields is present the upstream response
    text is used as the result, exactly as received.
    """

    mode: Mode = "local"

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.strip().rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def info(self) -> str:
        return f"Forwarding to local model service at {self.base_url}."

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def _forward(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        return await post_json(
            self.url_for(path),
            payload,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def rewrite(self, text: str, tone: str | None) -> str:
        response = await self._forward(REWRITE_PATH, {"text": text, "tone": tone})
        return extract_text(decode_body(response), REWRITE_TEXT_PATHS, default=response.text)

    async def suggest(self, context: str | None) -> str:
        response = await self._forward(SUGGESTION_PATH, {"context": context})
        return extract_text(decode_body(response), SUGGESTION_TEXT_PATHS, default=response.text)
