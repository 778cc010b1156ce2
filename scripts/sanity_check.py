"""Simple sanity check script exercising each endpoint of a running server."""

from __future__ import annotations

import os
from typing import Any

import httpx

BASE_URL = os.environ.get("PROXY_URL", "http://localhost:5173")


def post_sample(client: httpx.Client, path: str, payload: dict[str, Any]) -> None:
    """Send a sample request and dump the response."""
    response = client.post(f"{BASE_URL}{path}", json=payload)
    print(f"POST {path} {payload} -> {response.status_code}")
    print(f"  {response.json()}")
    print("-" * 60)


def main() -> None:
    """Report the active mode, then invoke each tone and a couple of suggestions."""
    sample_text = "The quarterly results exceeded expectations across every region."

    with httpx.Client(timeout=60.0) as client:
        mode = client.get(f"{BASE_URL}/api/mode")
        mode.raise_for_status()
        print(f"Mode: {mode.json()['mode']} ({mode.json()['info']})")
        print("-" * 60)

        for tone in ("professional", "simple", "dramatic", None):
            post_sample(client, "/api/rewrite", {"text": sample_text, "tone": tone})
        post_sample(client, "/api/rewrite", {})

        for context in ("I feel so tired today", "Reading a long contract", None):
            post_sample(client, "/api/suggestion", {"context": context})


if __name__ == "__main__":
    main()
