"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if the database is unreachable or the article
      cache cannot serve an initGame (fewer than end_candidates tierOne or 0 tierTwo)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Cache population checked at readiness: an empty cache means every initGame fails
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import wikitrains.infrastructure.database as db_module
from wikitrains.config import get_settings
from wikitrains.core.domain_types import Tier
from wikitrains.infrastructure.article_cache import ArticleCache

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "wikitrains-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe: database connectivity and cache population."""
    db = db_module.db_manager
    db_ok = await db.health_check() if db else False
    if not db_ok:
        return _not_ready("database_unavailable")

    cache = ArticleCache(db)
    counts = {tier.value: await cache.count(tier) for tier in Tier}
    settings = get_settings()
    if (counts[Tier.ONE.value] < settings.end_candidates
            or counts[Tier.TWO.value] < 1):
        return _not_ready("article_cache_underfilled", counts)
    return {
        "status": "ready",
        "checks": {"database": "healthy", "article_cache": counts},
    }


def _not_ready(reason: str, counts: dict | None = None) -> JSONResponse:
    content: dict = {"status": "not_ready", "reason": reason}
    if counts is not None:
        content["article_cache"] = counts
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=content,
    )
