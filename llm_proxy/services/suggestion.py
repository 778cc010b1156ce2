"""Wellness suggestion service."""

from __future__ import annotations

import time
from dataclasses import dataclass

from llm_proxy.backends import Backend
from llm_proxy.logging_utils import get_logger
from llm_proxy.types import Mode

logger = get_logger(__name__)


@dataclass
class SuggestionResult:
    mode: Mode
    suggestion: str
    latency_ms: float


class SuggestionService:
    """Ask the active backend for a short micro-break suggestion."""

    def __init__(self, *, backend: Backend) -> None:
        self._backend = backend

    async def suggest(self, *, context: str | None = None) -> SuggestionResult:
        start = time.perf_counter()
        suggestion = await self._backend.suggest(context)
        latency_ms = (time.perf_counter() - start) * 1000

        logger.debug("Suggestion completed | mode=%s latency_ms=%.2f", self._backend.mode, latency_ms)

        return SuggestionResult(
            mode=self._backend.mode,
            suggestion=(suggestion or "").strip(),
            latency_ms=latency_ms,
        )
