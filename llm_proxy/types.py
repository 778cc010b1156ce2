"""Shared typing helpers."""

from typing import Literal

Mode = Literal["openai", "local", "simulate"]
ToneStyle = Literal["simple", "dramatic", "professional"]

DEFAULT_TONE: ToneStyle = "professional"
