"""LLM provider factory.

Usage:
    from jeopardy.services.llm_service.llm import get_llm

    llm = get_llm()                      # configured provider + defaults
    llm = get_llm(max_tokens=800)        # per-category token budget

    response = await llm.ainvoke(messages)

Instances are cached on their build parameters, so every request shares the
same client handle for a given configuration.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_groq import ChatGroq
from langchain_nvidia_ai_endpoints import ChatNVIDIA
from langchain_ollama import ChatOllama

from jeopardy.core.config import settings

logger = logging.getLogger(__name__)

# ── Provider registry ─────────────────────────────────────────

_PROVIDERS: Dict[str, Callable[..., Any]] = {}

# ── LLM instance cache (keyed on frozen kwargs) ───────────────
_llm_cache: Dict[tuple, Any] = {}
_LLM_CACHE_MAX = 8


def _register_providers():
    """Build the provider map lazily (called once on first ``get_llm``)."""
    if _PROVIDERS:
        return

    _PROVIDERS["GROQ"] = _build_groq
    _PROVIDERS["GOOGLE"] = _build_google
    _PROVIDERS["OLLAMA"] = _build_ollama
    _PROVIDERS["NVIDIA"] = _build_nvidia


# ── Builder functions ─────────────────────────────────────────


def _common_kwargs(temperature: float, max_tokens: int, with_timeout: bool = True) -> dict:
    """Shared kwargs for providers that speak the OpenAI-style parameter names."""
    kwargs = {
        "temperature": temperature,
        "max_tokens": max_tokens,
    }
    if with_timeout and settings.LLM_TIMEOUT:
        kwargs["timeout"] = settings.LLM_TIMEOUT
    return kwargs


def _build_groq(temperature: float, max_tokens: int):
    """Build Groq client (default provider)."""
    kw = _common_kwargs(temperature, max_tokens)
    kw.update(
        model=settings.GROQ_MODEL,
        api_key=settings.GROQ_CLOUD_API_KEY or None,
    )
    return ChatGroq(**kw)


def _build_google(temperature: float, max_tokens: int):
    """Build Google Gemini client."""
    kw = _common_kwargs(temperature, max_tokens)
    kw.update(
        model=settings.GOOGLE_MODEL,
        google_api_key=settings.GOOGLE_API_KEY or None,
    )
    return ChatGoogleGenerativeAI(**kw)


def _build_ollama(temperature: float, max_tokens: int):
    """Build local Ollama client. Ollama names the token budget ``num_predict``."""
    return ChatOllama(
        model=settings.OLLAMA_MODEL,
        temperature=temperature,
        num_predict=max_tokens,
    )


def _build_nvidia(temperature: float, max_tokens: int):
    """Build NVIDIA AI endpoints client."""
    kw = _common_kwargs(temperature, max_tokens, with_timeout=False)
    kw.update(
        model=settings.NVIDIA_MODEL,
        api_key=settings.NVIDIA_API_KEY or None,
    )
    return ChatNVIDIA(**kw)


# ── Public API ────────────────────────────────────────────────


def get_llm(
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    provider: Optional[str] = None,
):
    """Return a LangChain chat model for question generation.

    Args:
        temperature: Sampling temperature (default: LLM_TEMPERATURE).
        max_tokens: Completion token budget (default: LLM_MAX_TOKENS).
        provider: Override the configured LLM_PROVIDER.

    Returns:
        Cached chat model instance.
    """
    _register_providers()

    temp = temperature if temperature is not None else settings.LLM_TEMPERATURE
    tokens = max_tokens if max_tokens is not None else settings.LLM_MAX_TOKENS
    active_provider = (provider or settings.LLM_PROVIDER).upper()

    builder = _PROVIDERS.get(active_provider)
    if builder is None:
        logger.warning(f"Unknown LLM provider '{active_provider}', falling back to GROQ")
        active_provider = "GROQ"
        builder = _PROVIDERS["GROQ"]

    cache_key = (active_provider, temp, tokens)
    cached = _llm_cache.get(cache_key)
    if cached is not None:
        return cached

    logger.info("Building %s chat model (temperature=%s, max_tokens=%s)", active_provider, temp, tokens)
    instance = builder(temperature=temp, max_tokens=tokens)
    if len(_llm_cache) >= _LLM_CACHE_MAX:
        _llm_cache.pop(next(iter(_llm_cache)))
    _llm_cache[cache_key] = instance
    return instance


def clear_llm_cache() -> None:
    """Drop cached clients (used after settings change and in tests)."""
    _llm_cache.clear()
