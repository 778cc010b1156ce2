"""Backend contract and shared helpers for outbound model calls."""

from __future__ import annotations

from typing import Any, Protocol, Sequence, Union

import httpx

from llm_proxy.errors import ProviderError
from llm_proxy.logging_utils import get_logger
from llm_proxy.types import Mode

logger = get_logger(__name__)

PathKey = Union[str, int]
ExtractionPath = tuple[PathKey, ...]


class Backend(Protocol):
    """Capability shared by every mode: rewrite text and suggest a break."""

    mode: Mode

    @property
    def info(self) -> str: ...

    async def rewrite(self, text: str, tone: str | None) -> str: ...

    async def suggest(self, context: str | None) -> str: ...


def _lookup(payload: Any, path: ExtractionPath) -> Any:
    current = payload
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
            current = current[key]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(key)
    return current


def extract_text(payload: Any, paths: Sequence[ExtractionPath], default: str = "") -> str:
    """Return the first non-empty string found along ``paths``, else ``default``."""
    for path in paths:
        value = _lookup(payload, path)
        if isinstance(value, str) and value:
            return value
    return default


async def post_json(
    url: str,
    payload: dict[str, Any],
    *,
    headers: dict[str, str] | None = None,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """POST ``payload`` as JSON once and return the successful response.

    Non-success statuses and transport failures raise ``ProviderError``; the
    upstream body or exception text becomes the error details.
    """
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Upstream request failed | url=%s error=%s", url, exc)
            raise ProviderError(str(exc) or exc.__class__.__name__) from exc

    if response.is_error:
        logger.error("Upstream returned status %d | url=%s", response.status_code, url)
        raise ProviderError(response.text)
    return response


def decode_body(response: httpx.Response) -> Any:
    """Return the parsed JSON body, or the raw text when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text
