"""Question generation routes.

All three endpoints share the request/response contract; they differ only in
the prompt strategy passed to the generation pipeline. Pipeline errors are
rendered by the ``GenerationError`` handler registered in ``jeopardy.main``.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from jeopardy.services.generation.generator import PromptStrategy, generate_jeopardy

logger = logging.getLogger(__name__)
router = APIRouter()


class GenerateQuestionsRequest(BaseModel):
    categories: Optional[List[str]] = None


async def _generate(request: GenerateQuestionsRequest, strategy: PromptStrategy) -> dict:
    data = await generate_jeopardy(request.categories, strategy=strategy)
    logger.info("Generated board for %d categories (%s)", len(request.categories), strategy.value)
    return {"jeopardyData": data}


@router.post("/generate-questions")
async def generate_questions(request: GenerateQuestionsRequest):
    return await _generate(request, PromptStrategy.BATCH)


@router.post("/generate-questions-old")
async def generate_questions_old(request: GenerateQuestionsRequest):
    """Original two-message prompt; output is parsed without cleanup."""
    return await _generate(request, PromptStrategy.LEGACY)


@router.post("/generate-questions-new")
async def generate_questions_new(request: GenerateQuestionsRequest):
    """One completion per category, in request order."""
    return await _generate(request, PromptStrategy.PER_CATEGORY)
