"""Prompt templates and builders for the remote provider."""

from __future__ import annotations

from llm_proxy.types import DEFAULT_TONE, ToneStyle

REWRITE_SYSTEM_PROMPT = "You are a helpful assistant that rewrites content using the requested tone."

SUGGESTION_SYSTEM_PROMPT = (
    "You are a supportive assistant that provides short wellness suggestions and micro-break activities."
)

TONE_PROMPTS: dict[ToneStyle, str] = {
    "simple": "Rewrite the following text so a 5th grader can understand it.",
    "dramatic": "Rewrite in a dramatic, narrative tone.",
    "professional": "Rewrite as a concise professional summary for executives.",
}

GENERIC_SUGGESTION_PROMPT = (
    "Provide a short, actionable wellness suggestion for a reader who needs a quick break."
)


def resolve_tone(tone: str | None) -> ToneStyle:
    """Return a known tone key, falling back to the default for anything else."""
    if tone in TONE_PROMPTS:
        return tone  # type: ignore[return-value]
    return DEFAULT_TONE


def build_rewrite_messages(text: str, tone: str | None = None) -> list[dict[str, str]]:
    """Build chat messages asking the model to rewrite text in a tone."""
    instruction = TONE_PROMPTS[resolve_tone(tone)]
    return [
        {"role": "system", "content": REWRITE_SYSTEM_PROMPT},
        {"role": "user", "content": f"{instruction}\n\nText:\n{text}"},
    ]


def build_suggestion_messages(context: str | None = None) -> list[dict[str, str]]:
    """Build chat messages asking for a one-sentence wellness suggestion."""
    if context:
        user_prompt = f"Based on this context, provide a short (one-sentence) wellness suggestion: {context}"
    else:
        user_prompt = GENERIC_SUGGESTION_PROMPT
    return [
        {"role": "system", "content": SUGGESTION_SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]
