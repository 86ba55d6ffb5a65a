"""Pydantic schemas for validating structured LLM outputs."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator, model_validator

from jeopardy.core.errors import SchemaError

POINT_TIERS = (100, 200, 300, 400, 500)
OPTIONS_PER_QUESTION = 4


# ── Jeopardy ──────────────────────────────────────────────

class Question(BaseModel):
    points: int
    question: str = Field(min_length=1)
    options: List[str] = Field(min_length=OPTIONS_PER_QUESTION, max_length=OPTIONS_PER_QUESTION)
    answer: str

    model_config = {"extra": "allow"}

    @field_validator("points")
    @classmethod
    def _known_tier(cls, v: int) -> int:
        if v not in POINT_TIERS:
            raise ValueError(f"points must be one of {list(POINT_TIERS)}, got {v}")
        return v

    @model_validator(mode="after")
    def _answer_among_options(self) -> "Question":
        if len(set(self.options)) != len(self.options):
            raise ValueError("options must be distinct")
        if self.answer not in self.options:
            raise ValueError("answer must equal one of the options")
        return self


class QuestionSet(BaseModel):
    category: str
    subfield: Optional[str] = None
    questions: List[Question] = Field(min_length=len(POINT_TIERS), max_length=len(POINT_TIERS))

    model_config = {"extra": "allow"}

    @model_validator(mode="after")
    def _one_question_per_tier(self) -> "QuestionSet":
        tiers = sorted(q.points for q in self.questions)
        if tiers != list(POINT_TIERS):
            raise ValueError(f"questions must cover each point tier once, got {tiers}")
        return self


_QUESTION_SETS = TypeAdapter(List[QuestionSet])


def _format_error(err: dict) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
    return f"{loc}: {err.get('msg', 'invalid')}"


def find_schema_problems(data: Any) -> List[str]:
    """Return a list of human-readable shape violations (empty when valid)."""
    try:
        _QUESTION_SETS.validate_python(data)
    except ValidationError as exc:
        return [_format_error(e) for e in exc.errors()]
    return []


def validate_question_sets(data: Any, raw_output: str = "") -> Any:
    """Check parsed model output against the QuestionSet shape.

    Returns *data* unchanged when it is a list of complete question sets.

    Raises:
        SchemaError: listing every violation found.
    """
    problems = find_schema_problems(data)
    if problems:
        raise SchemaError(raw_output, problems)
    return data
