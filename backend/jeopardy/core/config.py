"""
Centralized application configuration.

Uses pydantic BaseSettings for automatic env-var loading and validation.
Import the singleton ``settings`` instance throughout the app.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Annotated, List, Literal, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode

_VALID_PROVIDERS = {"GROQ", "GOOGLE", "OLLAMA", "NVIDIA"}


class Settings(BaseSettings):
    """Application settings — validated from environment variables."""

    # ── Environment ────────────────────────────────────────
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False

    # ── Server ────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    MAX_BODY_SIZE_KB: int = 64

    # ── CORS ──────────────────────────────────────────────
    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors(cls, v):
        if isinstance(v, str):
            # Env values arrive raw; a JSON array is still accepted
            if v.strip().startswith("["):
                return json.loads(v)
            return [o.strip() for o in v.split(",") if o.strip()]
        return v

    # ── LLM ───────────────────────────────────────────────
    LLM_PROVIDER: str = "GROQ"  # GROQ, GOOGLE, OLLAMA, NVIDIA
    GROQ_CLOUD_API_KEY: str = ""
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    GOOGLE_API_KEY: str = ""
    GOOGLE_MODEL: str = "models/gemini-2.5-flash"
    OLLAMA_MODEL: str = "llama3"
    NVIDIA_API_KEY: str = ""
    NVIDIA_MODEL: str = "meta/llama-3.3-70b-instruct"
    LLM_TIMEOUT: Optional[int] = None  # None → client default

    # ── LLM Generation Control ───────────────────────────
    LLM_TEMPERATURE: float = 0.7
    LLM_MAX_TOKENS: int = 1500
    LLM_MAX_TOKENS_PER_CATEGORY: int = 800

    # ── Generation Pipeline ──────────────────────────────
    STRICT_SCHEMA: bool = True
    PER_CATEGORY_CONCURRENT: bool = False

    @field_validator("LLM_PROVIDER", mode="after")
    @classmethod
    def _uppercase_provider(cls, v: str) -> str:
        v = v.upper()
        if v not in _VALID_PROVIDERS:
            raise ValueError(f"LLM_PROVIDER must be one of {_VALID_PROVIDERS}, got {v!r}")
        return v

    @field_validator("LLM_TEMPERATURE", mode="after")
    @classmethod
    def _validate_temperature(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"LLM_TEMPERATURE must be between 0 and 2, got {v}")
        return v

    @model_validator(mode="after")
    def _warn_missing_keys(self):
        """Warn (don't fail) when the active provider has no API key."""
        _log = logging.getLogger("config")
        if self.LLM_PROVIDER == "GROQ" and not self.GROQ_CLOUD_API_KEY:
            _log.warning("LLM_PROVIDER is GROQ but GROQ_CLOUD_API_KEY is empty")
        if self.LLM_PROVIDER == "GOOGLE" and not self.GOOGLE_API_KEY:
            _log.warning("LLM_PROVIDER is GOOGLE but GOOGLE_API_KEY is empty")
        if self.LLM_PROVIDER == "NVIDIA" and not self.NVIDIA_API_KEY:
            _log.warning("LLM_PROVIDER is NVIDIA but NVIDIA_API_KEY is empty")
        return self

    @property
    def active_model(self) -> str:
        return {
            "GROQ": self.GROQ_MODEL,
            "GOOGLE": self.GOOGLE_MODEL,
            "OLLAMA": self.OLLAMA_MODEL,
            "NVIDIA": self.NVIDIA_MODEL,
        }[self.LLM_PROVIDER]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


settings = get_settings()
