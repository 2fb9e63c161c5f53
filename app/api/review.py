"""
Review Handler Module

FastAPI endpoint that hands submitted text to the review orchestrator.

Design Decisions:
- Reject blank submissions before any model call
- Bound the whole review with a timeout; the orchestrator has none
- Map non-completed reviews to 502 so clients can tell them from a review
"""

import asyncio

from fastapi import APIRouter, Depends, HTTPException, status

from app.config import Settings, get_settings
from app.logging_config import get_logger
from app.models import ReviewRequest, ReviewResponse
from app.services.review_orchestrator import ReviewOrchestrator, get_review_orchestrator

logger = get_logger(__name__)

router = APIRouter(prefix="/ai", tags=["review"])


@router.post("/get-review", response_model=ReviewResponse)
async def get_review(
    body: ReviewRequest,
    orchestrator: ReviewOrchestrator = Depends(get_review_orchestrator),
    settings: Settings = Depends(get_settings),
) -> ReviewResponse:
    """
    Review submitted code, or reply to casual text.

    Returns:
        The assembled review and how it was produced

    Raises:
        HTTPException: 400 on blank input, 502 when the model fails,
            504 when the review takes too long
    """
    if not body.code.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Code is required"
        )

    try:
        result = await asyncio.wait_for(
            orchestrator.review(body.code),
            timeout=settings.review_timeout_seconds
        )
    except asyncio.TimeoutError:
        logger.error(
            "Review timed out",
            timeout_seconds=settings.review_timeout_seconds,
            length=len(body.code)
        )
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="Review timed out"
        )

    if not result.ok:
        logger.warning(
            "Review did not complete",
            kind=result.kind.value,
            status=result.status.value,
            chunks_total=result.chunks_total,
            chunks_reviewed=result.chunks_reviewed,
            failure_reason=result.failure_reason
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=result.text
        )

    return ReviewResponse.from_result(result)
