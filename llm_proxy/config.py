"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"


@dataclass(slots=True, frozen=True)
class ModelConfig:
    """Generation parameters for a single remote model call."""

    name: str
    temperature: float
    max_tokens: int


class Settings(BaseSettings):
    """Pydantic settings wrapper."""

    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_api_url: str = Field(default=DEFAULT_OPENAI_API_URL, alias="OPENAI_API_URL")
    openai_model: str = Field(default="gpt-4o", alias="OPENAI_MODEL")
    local_model_url: str | None = Field(default=None, alias="LOCAL_MODEL_URL")

    host: str = Field(default="127.0.0.1", alias="HOST")
    port: int = Field(default=5173, alias="PORT")
    static_dir: str = Field(default="public", alias="STATIC_DIR")

    environment: str = Field(default="development", alias="ENVIRONMENT")
    request_timeout_seconds: float = Field(default=60.0, alias="REQUEST_TIMEOUT_SECONDS")
    max_text_length: int = Field(default=20_000, alias="MAX_TEXT_LENGTH")
    max_body_bytes: int = Field(default=200 * 1024, alias="MAX_BODY_BYTES")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_content_enabled: bool = Field(default=False, alias="LOG_CONTENT_ENABLED")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    def rewrite_model(self) -> ModelConfig:
        return ModelConfig(name=self.openai_model, temperature=0.7, max_tokens=350)

    def suggestion_model(self) -> ModelConfig:
        return ModelConfig(name=self.openai_model, temperature=0.7, max_tokens=120)


settings = Settings()
