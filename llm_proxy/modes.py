"""Backend mode selection."""

from __future__ import annotations

from llm_proxy.types import Mode


def _is_set(value: str | None) -> bool:
    return bool(value and value.strip())


def select_mode(api_key: str | None, local_url: str | None) -> Mode:
    """Pick the backend mode from the provider key and local model URL.

    The provider key wins over the local URL. With neither configured the
    process runs against the built-in simulator.
    """
    if _is_set(api_key):
        return "openai"
    if _is_set(local_url):
        return "local"
    return "simulate"
