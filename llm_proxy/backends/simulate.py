"""Deterministic simulator used when no model backend is configured."""

from __future__ import annotations

import random
import re

from llm_proxy.prompts import resolve_tone
from llm_proxy.types import Mode, ToneStyle

SNIPPET_LENGTH = 200

REWRITE_TEMPLATES: dict[ToneStyle, str] = {
    "professional": "Professional summary: {text}...",
    "simple": "Simple version: {text}",
    "dramatic": "Dramatic retelling: {text}!",
}

FATIGUE_PATTERN = re.compile(r"tired|fatigue|sleep", re.IGNORECASE)
FATIGUE_TIP = "You seem tired — stand up and walk for 2 minutes."

GENERAL_TIPS: tuple[str, ...] = (
    "Take three slow, deep breaths before reading on.",
    "Look at something 20 feet away for 20 seconds to rest your eyes.",
    "Roll your shoulders and stretch your neck for 30 seconds.",
    "Drink a glass of water and come back refreshed.",
)


class SimulatedBackend:
    """Canned responses with no external I/O. Never fails."""

    mode: Mode = "simulate"

    def __init__(self, *, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    @property
    def info(self) -> str:
        return "Simulated responses. Set OPENAI_API_KEY or LOCAL_MODEL_URL to use a real model."

    def render_rewrite(self, text: str, tone: str | None) -> str:
        template = REWRITE_TEMPLATES[resolve_tone(tone)]
        return template.format(text=text[:SNIPPET_LENGTH])

    def pick_tip(self, context: str | None) -> str:
        if context and FATIGUE_PATTERN.search(context):
            return FATIGUE_TIP
        return self._rng.choice(GENERAL_TIPS)

    async def rewrite(self, text: str, tone: str | None) -> str:
        return self.render_rewrite(text, tone)

    async def suggest(self, context: str | None) -> str:
        return self.pick_tip(context)
