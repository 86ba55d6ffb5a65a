"""Health check endpoint.

Reports the configured completion provider and whether its client can be
built. No completion request is sent.
"""

from __future__ import annotations

import logging
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from jeopardy.core.config import settings
from jeopardy.services.llm_service.llm import get_llm

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health")
async def health_check():
    health_status = {
        "provider": settings.LLM_PROVIDER,
        "model": settings.active_model,
        "strict_schema": settings.STRICT_SCHEMA,
        "llm": "unknown",
        "overall": "unknown",
    }

    try:
        get_llm()
        health_status["llm"] = "ok"
    except Exception as e:
        health_status["llm"] = "error"
        logger.error(f"LLM health check failed: {e}")

    if health_status["llm"] == "ok":
        health_status["overall"] = "healthy"
        return JSONResponse(status_code=200, content=health_status)

    health_status["overall"] = "unhealthy"
    return JSONResponse(status_code=503, content=health_status)
