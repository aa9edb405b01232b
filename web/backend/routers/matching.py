#!/usr/bin/env python3
"""
Matching endpoints - calculate, read and batch-recompute mentor matches.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.matching_service import MatchingService
from ..dependencies import get_matching_service
from ..models.requests import BatchMatchingRequest
from ..models.responses import (
    CalculateMatchingResponse,
    TopMatchesResponse,
    MentorMatchResponse,
    BatchStartResponse,
    BatchStatusResponse,
    BatchJobListResponse,
    StoredMatchModel,
)

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/matching", tags=["matching"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": str(exc)}
    )


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _to_stored_match_model(match) -> StoredMatchModel:
    mentor = None
    if match.mentor is not None:
        mentor = {
            "mentor_id": match.mentor.mentor_id,
            "name": match.mentor.name,
            "specialization": match.mentor.specialization,
            "bio": match.mentor.bio,
            "profile_image": match.mentor.profile_image,
            "experience_level": match.mentor.experience_level,
            "skills": match.mentor.skills,
            "rating": match.mentor.rating,
        }
    return StoredMatchModel(
        match_id=match.match_id,
        user_id=match.user_id,
        mentor_id=match.mentor_id,
        compatibility_score=match.compatibility_score,
        match_factors=match.match_factors.to_dict(),
        is_active=match.is_active,
        last_calculated=_iso(match.last_calculated),
        mentor=mentor
    )


@router.post("/calculate/{user_id}", response_model=CalculateMatchingResponse)
def calculate_matching(
    user_id: str,
    service: MatchingService = Depends(get_matching_service)
):
    """
    Calculate compatibility scores between a user and every active mentor.

    Results are persisted and returned sorted by compatibility score.
    """
    results = service.calculate_matching(user_id)
    return CalculateMatchingResponse(
        success=True,
        count=len(results),
        matches=[r.to_dict() for r in results]
    )


@router.get("/top/{user_id}", response_model=TopMatchesResponse)
def get_top_matches(
    user_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Maximum matches to return"),
    service: MatchingService = Depends(get_matching_service)
):
    """
    Get the user's best persisted mentor matches.

    Only active matches are returned; nothing is recalculated.
    """
    matches = service.get_top_matches(user_id, limit)
    return TopMatchesResponse(
        success=True,
        count=len(matches),
        matches=[_to_stored_match_model(m) for m in matches]
    )


@router.get("/mentor/{mentor_id}", response_model=MentorMatchResponse)
def get_mentor_match(
    mentor_id: str,
    user_id: str = Query(..., description="User the match belongs to"),
    service: MatchingService = Depends(get_matching_service)
):
    """
    Get the persisted match between a user and one mentor.
    """
    match = service.get_mentor_match(user_id, mentor_id)
    return MentorMatchResponse(success=True, match=_to_stored_match_model(match))


@router.post("/batch", response_model=BatchStartResponse)
@limiter.limit("5/minute")
def run_batch_matching(
    request: Request,
    body: Optional[BatchMatchingRequest] = None,
    service: MatchingService = Depends(get_matching_service)
):
    """
    Recompute matches for the given users, or for every user.

    Returns immediately with a job_id; use /api/matching/batch/{job_id}
    to follow progress.
    """
    user_ids = body.user_ids if body else None
    job = service.run_batch_matching(user_ids)

    return BatchStartResponse(
        success=True,
        message="Batch matching started",
        job_id=job.job_id,
        total_users=job.total_users
    )


def _to_batch_status(job) -> BatchStatusResponse:
    response = BatchStatusResponse(
        job_id=job.job_id,
        status=job.status,
        total_users=job.total_users,
        error=job.error,
        created_at=_iso(job.created_at),
        finished_at=_iso(job.finished_at)
    )

    if job.result:
        response.processed = job.result.processed
        response.failed = job.result.failed
        response.failed_user_ids = list(job.result.failed_user_ids)
        response.execution_time = job.result.execution_time
    elif job.progress:
        response.processed = job.progress.get("processed")
        response.failed = job.progress.get("failed")

    return response


@router.get("/batch", response_model=BatchJobListResponse)
def list_batch_jobs(service: MatchingService = Depends(get_matching_service)):
    """List batch jobs still held for polling, newest first."""
    jobs = service.list_batch_jobs()
    return BatchJobListResponse(
        count=len(jobs),
        jobs=[_to_batch_status(job) for job in jobs]
    )


@router.get("/batch/{job_id}", response_model=BatchStatusResponse)
def get_batch_status(
    job_id: str,
    service: MatchingService = Depends(get_matching_service)
):
    """
    Get the status of a batch matching job.

    Status values:
    - pending: Job created but not yet started
    - running: Users are being processed
    - completed: Every user was attempted; see processed/failed
    - failed: The job itself crashed
    """
    job = service.get_batch_job(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Batch job not found")

    return _to_batch_status(job)
