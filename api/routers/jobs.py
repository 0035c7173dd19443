"""Job browsing endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_service
from api.routers.insights import _insight_to_response
from api.schemas import BrowseRequest, InsightResponse
from core.service import JobInsightsService
from jobs.client import JobsApiError
from models.schemas import CandidateContext

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/browse", response_model=List[InsightResponse])
def browse_jobs(request: BrowseRequest, service: JobInsightsService = Depends(get_service)):
    """
    Filter, score, and sort a list of jobs for a candidate.
    """
    try:
        jobs = [j.to_domain() for j in request.jobs]
        filters = request.filters.to_domain()
        candidate = request.candidate()
    except ValueError as e:
        raise HTTPException(422, str(e))

    insights = service.browse(jobs, filters, candidate)
    return [_insight_to_response(i) for i in insights]


@router.get("/{job_id}/insights", response_model=InsightResponse)
def get_job_insights(
    job_id: str,
    skills: List[str] = Query(default=[]),
    experience_years: float = Query(default=0, ge=0, alias="experienceYears"),
    service: JobInsightsService = Depends(get_service),
):
    """Fetch a job from the Linsta backend and score it."""
    candidate = CandidateContext(skills=skills, experience_years=experience_years)
    try:
        insight = service.fetch_insight(job_id, candidate)
    except JobsApiError as e:
        if e.status_code == 404:
            raise HTTPException(404, f"Job not found: {job_id}")
        logger.error(f"Jobs backend failed for {job_id}: {e}")
        raise HTTPException(502, f"Jobs backend error: {e}")
    return _insight_to_response(insight)
