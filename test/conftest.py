"""
Shared pytest fixtures and configuration for the entire test suite.
Applies to all subdirectories: unit/, api/, e2e/
"""

import sys
import os
import json
import tempfile
from unittest.mock import AsyncMock, MagicMock, patch
import pytest

# ── Ensure backend is importable from every pytest session ──────────────────
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "backend"))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# Minimal env so that Pydantic Settings can validate on import
os.environ.setdefault("GROQ_CLOUD_API_KEY", "gsk_test_key_for_unit_tests_only")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "jeopardy-test-logs"))


# ── Board builders ───────────────────────────────────────────────────────────

def _question(points: int, category: str) -> dict:
    return {
        "points": points,
        "question": f"{category} question worth {points}?",
        "options": [f"{category} {points} A", f"{category} {points} B",
                    f"{category} {points} C", f"{category} {points} D"],
        "answer": f"{category} {points} B",
    }


def _question_set(category: str, subfield: str = "General") -> dict:
    return {
        "category": category,
        "subfield": subfield,
        "questions": [_question(p, category) for p in (100, 200, 300, 400, 500)],
    }


@pytest.fixture
def board_factory():
    """Return a builder for well-formed boards: ``board_factory(["Science"])``."""
    def _build(categories):
        return [_question_set(c) for c in categories]
    return _build


@pytest.fixture
def board_json(board_factory):
    """Return a builder for the JSON text of a well-formed board."""
    def _build(categories):
        return json.dumps(board_factory(categories))
    return _build


# ── Fake completion client ──────────────────────────────────────────────────

@pytest.fixture
def fake_llm():
    """Patch the chat model used by the completion layer.

    Configure replies with ``fake_llm.reply("text", ...)`` or failures with
    ``fake_llm.ainvoke.side_effect = SomeError()``. Inspect calls through
    ``fake_llm.ainvoke.await_count`` / ``await_args_list``.
    """
    from langchain_core.messages import AIMessage

    llm = MagicMock()
    llm.ainvoke = AsyncMock()

    def reply(*texts):
        llm.ainvoke.side_effect = [AIMessage(content=t) for t in texts]

    llm.reply = reply
    with patch("jeopardy.services.llm_service.structured_invoker.get_llm", return_value=llm):
        yield llm


# ── Settings override ───────────────────────────────────────────────────────

@pytest.fixture
def lenient_schema(monkeypatch):
    """Pass parsed output through without schema validation."""
    from jeopardy.core.config import settings
    monkeypatch.setattr(settings, "STRICT_SCHEMA", False)
    yield


# ── FastAPI TestClient fixture ────────────────────────────────────────────────

@pytest.fixture(scope="session")
def app_client():
    """Return a FastAPI TestClient for the full application."""
    from fastapi.testclient import TestClient
    from jeopardy.main import app
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
