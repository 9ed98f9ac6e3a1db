# comment_analyzer/app/routes_health.py

from __future__ import annotations
from fastapi import APIRouter

router = APIRouter()

@router.get("/health")
async def health():
    """
    Liveness check.

    - only tells whether the server is up
    - does not probe the external analysis API
    """
    return {
        "status": "ok",
        "service": "public-comment-analyzer",
    }
