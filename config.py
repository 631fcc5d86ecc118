"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Annotated, List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ENDPOINT = "http://localhost:8080/api/email/generate"


class Settings(BaseSettings):
    """
    Settings loaded from environment variables and ``.env``.

    Environment names are the upper-cased field names, except the OpenRouter
    key which keeps its ``OPEN_ROUTER_KEY`` name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Reply requests
    reply_endpoint: str = Field(default=DEFAULT_ENDPOINT, description="Generation endpoint both surfaces POST to")
    request_timeout: float = Field(default=30.0, gt=0, description="Seconds before a reply request is abandoned")
    inject_delay: float = Field(default=0.5, ge=0, description="Debounce before injecting the trigger")
    default_tone: str = Field(default="professional", description="Tone used by the compose-toolbar trigger")

    # LLM provider
    openrouter_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("OPEN_ROUTER_KEY", "openrouter_key")
    )
    openrouter_base: str = Field(default="https://openrouter.ai/api/v1")
    openrouter_model: str = Field(default="meta-llama/llama-3.1-8b-instruct")

    # Server
    cors_origins: Annotated[List[str], NoDecode] = Field(default=["*"], description="Comma-separated CORS origins")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text", description='"json" for one JSON object per line')
    quiet_loggers: Annotated[List[str], NoDecode] = Field(
        default=["httpx", "httpcore", "uvicorn.access"],
        description="Comma-separated loggers held at WARNING",
    )

    @field_validator("cors_origins", "quiet_loggers", mode="before")
    @classmethod
    def split_commas(cls, v):
        """Parse comma-separated values into a list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("cors_origins")
    @classmethod
    def default_origins(cls, v: List[str]) -> List[str]:
        return v or ["*"]


def load_settings() -> Settings:
    return Settings()


@lru_cache
def get_settings() -> Settings:
    return load_settings()
