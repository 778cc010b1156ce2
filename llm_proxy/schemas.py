"""Pydantic models for API requests and responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from llm_proxy.types import Mode


class HealthResponse(BaseModel):
    """Response model for /health."""

    status: str
    environment: str
    version: str
    mode: Mode


class ModeResponse(BaseModel):
    """Active backend mode and a human-readable description."""

    mode: Mode
    info: str


class RewriteRequest(BaseModel):
    """Request payload for /api/rewrite."""

    text: str = Field(..., description="Original text to rewrite.")
    tone: str | None = Field(
        default=None,
        description="Tone key (simple, dramatic, professional). Unknown values use professional.",
    )

    @field_validator("tone", mode="before")
    @classmethod
    def drop_non_string_tone(cls, value: Any) -> str | None:
        """Treat a tone of any other type as absent so the default tone applies."""
        return value if isinstance(value, str) else None


class RewriteResponse(BaseModel):
    rewritten: str = ""


class SuggestionRequest(BaseModel):
    """Request payload for /api/suggestion."""

    context: str | None = Field(default=None, description="Optional free-text reading context.")


class SuggestionResponse(BaseModel):
    suggestion: str = ""


class ErrorResponse(BaseModel):
    """JSON error envelope returned for every failure."""

    error: str
    details: str | None = None
