"""Generation error taxonomy.

Every failure in the question pipeline is terminal for the request and maps
to exactly one HTTP response. The exception handler registered in
``jeopardy.main`` renders any ``GenerationError`` via ``to_payload()``.

- InputError     → 400, no completion call attempted
- UpstreamError  → 500, completion call itself failed (no raw output)
- ParseError     → 500, output was not JSON after cleanup (raw output kept)
- SchemaError    → 500, JSON parsed but does not match the question shape
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class GenerationError(Exception):
    """Base class for all pipeline failures."""

    status_code: int = 500
    message: str = "Question generation failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class InputError(GenerationError):
    """Missing, empty or malformed category list."""

    status_code = 400
    message = "A list of categories is required"


class UpstreamError(GenerationError):
    """The completion service call failed (network, auth, quota, bad response)."""

    message = "AI request failed"


class ParseError(GenerationError):
    """The completion succeeded but its text is not valid JSON after cleanup."""

    message = "AI returned invalid JSON"

    def __init__(self, raw_output: str, message: Optional[str] = None):
        """Initialize with the cleaned model output.

        Args:
            raw_output: Text that failed to parse, after fence stripping/repair
            message: Optional override for the client-facing error message
        """
        super().__init__(message)
        self.raw_output = raw_output

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "rawOutput": self.raw_output}


class SchemaError(ParseError):
    """Parsed JSON does not match the QuestionSet / Question shape."""

    message = "AI returned questions that do not match the expected format"

    def __init__(self, raw_output: str, problems: List[str], message: Optional[str] = None):
        super().__init__(raw_output, message)
        self.problems = problems

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        payload["problems"] = self.problems
        return payload
