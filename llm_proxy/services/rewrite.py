"""Rewrite service validating input and delegating to the active backend."""

from __future__ import annotations

import time
from dataclasses import dataclass

from llm_proxy.backends import Backend
from llm_proxy.errors import InvalidInputError
from llm_proxy.logging_utils import get_logger
from llm_proxy.prompts import resolve_tone
from llm_proxy.types import Mode, ToneStyle

logger = get_logger(__name__)


@dataclass
class RewriteResult:
    """Structured response returned by the rewrite service."""

    mode: Mode
    tone: ToneStyle
    rewritten: str
    latency_ms: float


class RewriteService:
    """Rewrite text in a tone through whichever backend is active."""

    def __init__(self, *, backend: Backend, max_text_length: int) -> None:
        self._backend = backend
        self._max_text_length = max_text_length

    def validate(self, text: str) -> None:
        if not text:
            raise InvalidInputError("Text must be a non-empty string.")
        if len(text) > self._max_text_length:
            raise InvalidInputError(f"Text exceeds the maximum length of {self._max_text_length} characters.")

    async def rewrite(self, *, text: str, tone: str | None = None) -> RewriteResult:
        self.validate(text)

        start = time.perf_counter()
        rewritten = await self._backend.rewrite(text, tone)
        latency_ms = (time.perf_counter() - start) * 1000

        logger.debug(
            "Rewrite completed | mode=%s tone=%s latency_ms=%.2f text_len=%d",
            self._backend.mode,
            resolve_tone(tone),
            latency_ms,
            len(text),
        )

        return RewriteResult(
            mode=self._backend.mode,
            tone=resolve_tone(tone),
            rewritten=rewritten or "",
            latency_ms=latency_ms,
        )
