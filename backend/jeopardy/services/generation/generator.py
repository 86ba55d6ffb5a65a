"""Jeopardy board generation.

One pipeline, three prompt strategies:

- ``batch``        one completion covering every category (default endpoint)
- ``legacy``       one completion, system + user prompt, no output cleanup
- ``per_category`` one completion per category, results kept in input order

Every strategy is all-or-nothing: the first failure aborts the request and
nothing collected so far is returned.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from jeopardy.core.config import settings
from jeopardy.core.errors import InputError, SchemaError
from jeopardy.prompts import get_jeopardy_prompt, get_legacy_system_prompt, get_legacy_user_prompt
from jeopardy.services.llm_service.llm_schemas import validate_question_sets
from jeopardy.services.llm_service.structured_invoker import build_messages, complete_json

logger = logging.getLogger(__name__)


class PromptStrategy(str, Enum):
    BATCH = "batch"
    LEGACY = "legacy"
    PER_CATEGORY = "per_category"


def require_categories(categories: Any) -> List[str]:
    """Return *categories* as a list, or raise InputError when unusable."""
    if not isinstance(categories, (list, tuple)) or not categories:
        raise InputError()
    if not all(isinstance(c, str) for c in categories):
        raise InputError("Every category must be a string")
    return list(categories)


async def _single_call(categories: List[str], strategy: PromptStrategy, strict: bool) -> Any:
    if strategy is PromptStrategy.LEGACY:
        messages = build_messages(get_legacy_user_prompt(categories), get_legacy_system_prompt())
        data, cleaned = await complete_json(messages, repair=False)
    else:
        messages = build_messages(get_jeopardy_prompt(categories))
        data, cleaned = await complete_json(messages)

    if strict:
        validate_question_sets(data, cleaned)
    return data


async def _generate_category(category: str, strict: bool) -> Dict[str, Any]:
    """Generate the question set for one category."""
    messages = build_messages(get_jeopardy_prompt([category]))
    data, cleaned = await complete_json(messages, max_tokens=settings.LLM_MAX_TOKENS_PER_CATEGORY)

    if strict:
        validate_question_sets(data, cleaned)
        if len(data) != 1:
            raise SchemaError(cleaned, [f"expected one question set for {category!r}, got {len(data)}"])

    # Repaired output always parses to a list
    return data[0] if data else {}


async def _per_category(categories: List[str], strict: bool, concurrent: bool) -> List[Dict[str, Any]]:
    if not concurrent:
        results = []
        for index, category in enumerate(categories):
            logger.info("Generating category %d/%d: %s", index + 1, len(categories), category)
            results.append(await _generate_category(category, strict))
        return results

    outcomes = await asyncio.gather(
        *(_generate_category(c, strict) for c in categories),
        return_exceptions=True,
    )
    # First failure in input order voids the whole board
    for category, outcome in zip(categories, outcomes):
        if isinstance(outcome, BaseException):
            logger.error("Category %r failed; discarding %d result(s)", category, len(categories))
            raise outcome
    return list(outcomes)


async def generate_jeopardy(
    categories: Sequence[str],
    strategy: PromptStrategy = PromptStrategy.BATCH,
    strict: Optional[bool] = None,
    concurrent: Optional[bool] = None,
) -> List[Any]:
    """Generate a Jeopardy board for *categories*.

    Args:
        categories: Non-empty list of category names
        strategy: Prompt/invocation strategy
        strict: Validate output against the question-set schema
            (default: STRICT_SCHEMA)
        concurrent: Issue per-category calls concurrently
            (default: PER_CATEGORY_CONCURRENT, per_category strategy only)

    Returns:
        list: Question sets as returned by the model

    Raises:
        InputError, UpstreamError, ParseError, SchemaError
    """
    cats = require_categories(categories)
    strict = settings.STRICT_SCHEMA if strict is None else strict
    concurrent = settings.PER_CATEGORY_CONCURRENT if concurrent is None else concurrent
    strategy = PromptStrategy(strategy)

    logger.info("Generating %d categories (strategy=%s, strict=%s)", len(cats), strategy.value, strict)

    if strategy is PromptStrategy.PER_CATEGORY:
        return await _per_category(cats, strict, concurrent)
    return await _single_call(cats, strategy, strict)
