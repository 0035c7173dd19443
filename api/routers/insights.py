"""Match and scam scoring endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic.alias_generators import to_camel

from api.dependencies import get_service
from api.schemas import (
    ExplainRequest, ImprovementResponse, InsightResponse, MatchRequest, MatchResponse,
    ScamRequest, ScamResponse,
)
from core.service import JobInsightsService
from matching.matcher import compute_match, generate_match_explanation, match_color, match_label
from models.schemas import JobInsight, MatchScore, ScamDetection
from scam.detector import risk_color, risk_label

logger = logging.getLogger(__name__)
router = APIRouter()


def _match_to_response(score: MatchScore) -> MatchResponse:
    """Convert a domain MatchScore to API response."""
    return MatchResponse(
        job_id=score.job_id,
        variant=score.variant.value,
        overall_match=score.overall_match,
        skill_match=score.skill_match,
        experience_match=score.experience_match,
        location_match=score.location_match,
        education_match=score.education_match,
        salary_match=score.salary_match,
        matching_skills=list(score.matching_skills),
        missing_skills=list(score.missing_skills),
        reasons=list(score.reasons),
        strengths=list(score.strengths),
        gaps=list(score.gaps),
        improvements=[
            ImprovementResponse(skill=i.skill, importance=i.importance, suggestion=i.suggestion)
            for i in score.improvements
        ],
        application_tips=list(score.application_tips),
        recommendation=score.recommendation,
        label=match_label(score.overall_match),
        color=match_color(score.overall_match),
    )


def _scam_to_response(detection: ScamDetection) -> ScamResponse:
    return ScamResponse(
        score=detection.score,
        risk_level=detection.risk_level.value,
        flags={to_camel(name): value for name, value in vars(detection.flags).items()},
        reasons=list(detection.reasons),
        show_warning=detection.should_show_warning,
        label=risk_label(detection.risk_level),
        color=risk_color(detection.risk_level),
    )


def _insight_to_response(insight: JobInsight) -> InsightResponse:
    return InsightResponse(
        job_id=insight.job.id,
        title=insight.job.title,
        company=insight.job.company.name,
        match=_match_to_response(insight.match),
        scam=_scam_to_response(insight.scam),
    )


@router.post("/match", response_model=MatchResponse)
def score_match(request: MatchRequest, service: JobInsightsService = Depends(get_service)):
    """Score a job against a candidate with the requested (or default) variant."""
    try:
        job = request.job.to_domain()
        candidate = request.candidate()
        variant = request.variant or service.scorer.variant
        score = compute_match(
            job, candidate.skills, candidate.experience_years, variant,
            service.scorer.max_improvements,
        )
    except ValueError as e:
        logger.warning(f"Rejected match request for job {request.job.id}: {e}")
        raise HTTPException(422, str(e))
    return _match_to_response(score)


@router.post("/explain", response_model=MatchResponse)
def explain_match(request: ExplainRequest, service: JobInsightsService = Depends(get_service)):
    """Explain how a resume matches a job, with improvement suggestions."""
    try:
        job = request.job.to_domain()
        resume = request.resume.to_domain()
    except ValueError as e:
        raise HTTPException(422, str(e))
    score = generate_match_explanation(
        job, resume, request.skills, max_improvements=service.scorer.max_improvements,
    )
    return _match_to_response(score)


@router.post("/scam", response_model=ScamResponse)
def check_scam(request: ScamRequest, service: JobInsightsService = Depends(get_service)):
    """Scam-risk check for one job posting."""
    try:
        job = request.job.to_domain()
    except ValueError as e:
        raise HTTPException(422, str(e))
    return _scam_to_response(service.detector.detect(job))
