"""Prompt template loader.

Each ``get_*_prompt`` function loads a ``.txt`` template from this
package directory and substitutes placeholders.
"""

from __future__ import annotations

import json
import os
import random
from functools import lru_cache
from typing import Dict, Optional, Sequence

_DIR = os.path.dirname(__file__)

DIFFICULTY_BY_POINTS: Dict[int, str] = {
    100: "very easy",
    200: "easy",
    300: "medium",
    400: "challenging",
    500: "hard",
}

# One of these is injected per prompt so identical requests don't get identical boards.
CREATIVE_FRAMINGS = (
    "Favour surprising, lesser-known facts over the most obvious trivia.",
    "Draw on a mix of historical and modern examples.",
    "Think like a quiz writer preparing a brand-new episode.",
    "Lean towards questions that make players say 'I should have known that'.",
    "Mix people, places, events and ideas within each category.",
    "Avoid the first questions that come to mind; dig one layer deeper.",
)


@lru_cache(maxsize=32)
def _load(filename: str) -> str:
    """Read a template file, caching the result."""
    with open(os.path.join(_DIR, filename), encoding="utf-8") as f:
        return f.read()


def _render(filename: str, subs: Dict[str, str]) -> str:
    """Load *filename* and apply all substitutions."""
    text = _load(filename)
    for key, val in subs.items():
        text = text.replace(key, val)
    return text


def _difficulty_rules() -> str:
    return "\n".join(f"- {points} → {label}" for points, label in DIFFICULTY_BY_POINTS.items())


# ── Public helpers ────────────────────────────────────────


def get_jeopardy_prompt(categories: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """Single instruction covering every category in one completion.

    Also used per category by passing a one-element list.
    """
    rng = rng or random
    if len(categories) == 1:
        scope = f"Generate questions for this single category: {json.dumps(categories[0])}"
    else:
        scope = f"Categories: {json.dumps(list(categories))}"

    return _render("jeopardy_prompt.txt", {
        "{{DIFFICULTY_RULES}}": _difficulty_rules(),
        "{{CREATIVE_FRAMING}}": rng.choice(CREATIVE_FRAMINGS),
        "{{SEED}}": str(rng.randint(1000, 999999)),
        "{{CATEGORY_SCOPE}}": scope,
    })


def get_legacy_system_prompt() -> str:
    return _load("jeopardy_legacy_system.txt")


def get_legacy_user_prompt(categories: Sequence[str]) -> str:
    numbered = "\n".join(f"{i + 1}. {c}" for i, c in enumerate(categories))
    return _render("jeopardy_legacy_user.txt", {"{{CATEGORY_LIST}}": numbered})
