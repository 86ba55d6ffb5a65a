"""Completion invocation and JSON normalization for model output.

Pipeline for a single call:
1. Send role-tagged messages to the configured chat model
2. Extract the raw response text
3. Strip code fences and repair a truncated top-level array
4. Parse strictly, exactly once

There is deliberately no retry: a transport failure raises ``UpstreamError``
and unparseable text raises ``ParseError`` carrying the cleaned output.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional, Sequence, Tuple

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from jeopardy.core.errors import ParseError, UpstreamError
from jeopardy.services.llm_service.llm import get_llm

logger = logging.getLogger(__name__)

# ── JSON Cleanup Patterns ─────────────────────────────────────

_OPEN_FENCE_RE = re.compile(r"^\s*```[\w+-]*[ \t]*\n?")
_CLOSE_FENCE_RE = re.compile(r"\n?[ \t]*```\s*$")


# ── Normalization ─────────────────────────────────────────────


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, language-tagged or not."""
    text = _OPEN_FENCE_RE.sub("", text, count=1)
    text = _CLOSE_FENCE_RE.sub("", text, count=1)
    return text.strip()


def repair_truncated_array(text: str) -> str:
    """Append a closing ``]`` when the trimmed text does not end with one.

    Covers the common case of the model stopping right after the last
    category object. Anything more deeply truncated still fails to parse.
    """
    text = text.strip()
    if not text.endswith("]"):
        text += "]"
    return text


def normalize_model_output(text: str, repair: bool = True) -> str:
    """Trim *text* and, when *repair* is set, strip fences and close the array."""
    cleaned = text.strip()
    if repair:
        cleaned = repair_truncated_array(strip_code_fences(cleaned))
    return cleaned


def parse_model_output(text: str, repair: bool = True) -> Any:
    """Turn raw model text into a JSON value with a single strict parse.

    Args:
        text: Raw completion text
        repair: Strip fences and close a truncated array before parsing.
            When False the trimmed text is parsed as-is.

    Returns:
        The parsed JSON value (not schema-checked).

    Raises:
        ParseError: with the cleaned text when ``json.loads`` fails.
    """
    cleaned = normalize_model_output(text, repair=repair)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Model output is not valid JSON (%s). Cleaned output: %s", exc, cleaned[:1000])
        raise ParseError(cleaned) from exc


# ── Completion Invocation ─────────────────────────────────────


def build_messages(user_prompt: str, system_prompt: Optional[str] = None) -> List[BaseMessage]:
    """Build the role-tagged message list sent to the chat model."""
    messages: List[BaseMessage] = []
    if system_prompt:
        messages.append(SystemMessage(content=system_prompt))
    messages.append(HumanMessage(content=user_prompt))
    return messages


def _response_text(response: Any) -> str:
    content = getattr(response, "content", response)
    # Some providers return a list of content parts
    if isinstance(content, list):
        content = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part) for part in content
        )
    if not isinstance(content, str):
        raise TypeError(f"Unexpected completion content type: {type(content).__name__}")
    return content


async def complete(messages: Sequence[BaseMessage], max_tokens: Optional[int] = None) -> str:
    """Send *messages* to the chat model and return the trimmed response text.

    Raises:
        UpstreamError: on any client, transport or response-shape failure.
    """
    try:
        llm = get_llm(max_tokens=max_tokens)
        logger.debug("Invoking LLM with %d message(s)", len(messages))
        response = await llm.ainvoke(list(messages))
        text = _response_text(response).strip()
    except Exception as exc:
        logger.error("Completion call failed: %s: %s", type(exc).__name__, exc)
        raise UpstreamError() from exc

    if not text:
        logger.error("Completion call returned empty content")
        raise UpstreamError()
    return text


async def complete_json(
    messages: Sequence[BaseMessage],
    max_tokens: Optional[int] = None,
    repair: bool = True,
) -> Tuple[Any, str]:
    """One completion call followed by one parse.

    Returns:
        ``(parsed_value, cleaned_text)``
    """
    raw = await complete(messages, max_tokens=max_tokens)
    return parse_model_output(raw, repair=repair), normalize_model_output(raw, repair=repair)
