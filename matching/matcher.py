"""
Job and candidate match scoring.

Scores the compatibility between a candidate (skills and years of experience)
and a job posting using skill overlap, experience alignment, work mode, and a
weighted combination of those sub-scores. Two weighting policies exist:

* ``simple``      - skills .50, experience .25, education .15, location .10
* ``explanation`` - skills .40, experience .30, location .15, salary .15

Education and salary have no real data behind them and are scored with fixed
placeholders. Every function here is total: any well-typed input yields a
score, never an exception.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from models.schemas import (
    CandidateContext, Job, MatchScore, MatchVariant, Resume, SkillImprovement, WorkMode,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Weighting policies
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MatchPolicy:
    """Weights and fixed sub-scores for one scoring variant."""

    variant: MatchVariant
    skill_weight: float
    experience_weight: float
    location_weight: float
    education_weight: float = 0.0
    salary_weight: float = 0.0
    remote_location_score: int = 100
    non_remote_location_score: int = 75
    education_placeholder: Optional[int] = None
    salary_placeholder: Optional[int] = None


SIMPLE_POLICY = MatchPolicy(
    variant=MatchVariant.SIMPLE,
    skill_weight=0.5,
    experience_weight=0.25,
    education_weight=0.15,
    location_weight=0.10,
    non_remote_location_score=75,
    education_placeholder=85,
)

EXPLANATION_POLICY = MatchPolicy(
    variant=MatchVariant.EXPLANATION,
    skill_weight=0.4,
    experience_weight=0.3,
    location_weight=0.15,
    salary_weight=0.15,
    non_remote_location_score=80,
    salary_placeholder=85,
)

POLICIES = {
    MatchVariant.SIMPLE: SIMPLE_POLICY,
    MatchVariant.EXPLANATION: EXPLANATION_POLICY,
}

# Score uplift quoted for each improvement tier
_UPLIFT = {"high": "10-15%", "medium": "5-10%", "low": "2-5%"}

APPLICATION_TIPS = (
    "Highlight your matching skills in your cover letter",
    "Emphasize relevant experience",
    "Research the company culture",
)

EXPERIENCE_FLOOR = 70


def get_policy(variant) -> MatchPolicy:
    """Resolve a variant (enum or its string value) to its policy."""
    if isinstance(variant, str):
        try:
            variant = MatchVariant(variant.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown match variant: {variant}")
    return POLICIES[variant]


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------

def _round(value: float) -> int:
    """Round half up, so 82.5 scores 83 rather than banker's 82."""
    return int(math.floor(value + 0.5))


def _normalize(text: str) -> str:
    return text.strip().lower()


def skills_match(candidate_skill: str, required_skill: str) -> bool:
    """True when the two labels are equal or one contains the other, ignoring case."""
    a = _normalize(candidate_skill)
    b = _normalize(required_skill)
    if not a or not b:
        return False
    return a in b or b in a


def partition_skills(
    requirements: Sequence[str], candidate_skills: Iterable[str]
) -> Tuple[List[str], List[str]]:
    """
    Split job requirements into (matching, missing), preserving requirement order.

    Each requirement lands in exactly one of the two lists.
    """
    candidates = [s for s in candidate_skills if s and s.strip()]
    matching: List[str] = []
    missing: List[str] = []
    for requirement in requirements:
        if any(skills_match(c, requirement) for c in candidates):
            matching.append(requirement)
        else:
            missing.append(requirement)
    return matching, missing


def score_skills(matching_count: int, required_count: int) -> int:
    # nothing required, nothing missing
    if required_count <= 0:
        return 100
    return _round(matching_count / required_count * 100)


def score_experience(years: float, min_years: float, max_years: float) -> int:
    """
    Score candidate years against the job's required range.

    Within ``[min, max + 2]`` scores 100. Below the range scores the fraction
    of ``min`` reached. Above it loses 30 points per ``max`` years of excess,
    never dropping below 70.
    """
    if min_years <= years <= max_years + 2:
        return 100
    if years < min_years:
        if min_years <= 0:
            return 100
        return max(0, _round(years / min_years * 100))
    if max_years <= 0:
        return EXPERIENCE_FLOOR
    return max(EXPERIENCE_FLOOR, 100 - _round((years - max_years) / max_years * 30))


def score_location(work_mode: WorkMode, policy: MatchPolicy) -> int:
    if work_mode == WorkMode.REMOTE:
        return policy.remote_location_score
    return policy.non_remote_location_score


def _weighted_overall(
    policy: MatchPolicy,
    skill: int,
    experience: int,
    location: int,
    education: Optional[int],
    salary: Optional[int],
) -> int:
    total = (
        skill * policy.skill_weight
        + experience * policy.experience_weight
        + location * policy.location_weight
        + (education or 0) * policy.education_weight
        + (salary or 0) * policy.salary_weight
    )
    return _round(total)


# ---------------------------------------------------------------------------
# Explanations
# ---------------------------------------------------------------------------

def _build_reasons(
    job: Job,
    skill_match: int,
    matching_count: int,
    required_count: int,
    experience_match: int,
    years: float,
) -> List[str]:
    reasons = []
    if skill_match >= 80:
        tier = "Strong"
    elif skill_match >= 60:
        tier = "Good"
    else:
        tier = "Partial"
    reasons.append(f"{tier} skill match: {matching_count}/{required_count} required skills")

    if experience_match >= 90:
        reasons.append(f"Your {_round(years)} years experience matches perfectly")
    elif experience_match >= 70:
        reasons.append("Your experience level is suitable for this role")

    if job.work_mode == WorkMode.REMOTE:
        reasons.append("Remote work opportunity matches your preferences")
    return reasons


def importance_for(index: int) -> str:
    """Importance tier of the n-th missing skill."""
    if index < 2:
        return "high"
    if index < 4:
        return "medium"
    return "low"


def build_improvements(missing_skills: Sequence[str], limit: int = 5) -> List[SkillImprovement]:
    improvements = []
    for index, skill in enumerate(missing_skills[:max(limit, 0)]):
        importance = importance_for(index)
        improvements.append(SkillImprovement(
            skill=skill,
            importance=importance,
            suggestion=f"Learn {skill} to increase your match score by {_UPLIFT[importance]}",
        ))
    return improvements


def match_label(score: int) -> str:
    if score >= 90:
        return "Excellent Match"
    if score >= 75:
        return "Great Match"
    if score >= 60:
        return "Good Match"
    if score >= 40:
        return "Fair Match"
    return "Low Match"


def match_color(score: int) -> str:
    if score >= 90:
        return "#10B981"
    if score >= 75:
        return "#3B82F6"
    if score >= 60:
        return "#F59E0B"
    return "#EF4444"


# ---------------------------------------------------------------------------
# Public scoring entry points
# ---------------------------------------------------------------------------

def compute_match(
    job: Job,
    candidate_skills: Iterable[str],
    candidate_experience_years: float,
    variant=MatchVariant.EXPLANATION,
    max_improvements: int = 5,
) -> MatchScore:
    """
    Score a job against a candidate.

    Args:
        job: Job posting to score
        candidate_skills: Candidate skill labels (free text)
        candidate_experience_years: Total years of professional experience
        variant: MatchVariant or its string value, selecting the weighting policy
        max_improvements: How many missing skills get a learning suggestion

    Returns:
        A new MatchScore
    """
    policy = get_policy(variant)
    years = candidate_experience_years or 0.0

    requirements = job.skill_requirements()
    matching, missing = partition_skills(requirements, candidate_skills)

    skill_match = score_skills(len(matching), len(requirements))
    experience_match = score_experience(years, job.experience.min, job.experience.max)
    location_match = score_location(job.work_mode, policy)
    education_match = policy.education_placeholder
    salary_match = policy.salary_placeholder

    overall = _weighted_overall(
        policy, skill_match, experience_match, location_match,
        education_match, salary_match,
    )

    return MatchScore(
        job_id=job.id,
        variant=policy.variant,
        overall_match=overall,
        skill_match=skill_match,
        experience_match=experience_match,
        location_match=location_match,
        education_match=education_match,
        salary_match=salary_match,
        matching_skills=tuple(matching),
        missing_skills=tuple(missing),
        reasons=tuple(_build_reasons(
            job, skill_match, len(matching), len(requirements), experience_match, years,
        )),
        strengths=tuple(matching[:3]),
        gaps=tuple(missing[:3]),
        improvements=tuple(build_improvements(missing, max_improvements)),
        application_tips=APPLICATION_TIPS,
        recommendation=(
            "Highly recommended to apply" if overall >= 75 else "Consider improving skills"
        ),
    )


def calculate_job_match(
    job: Job, resume_skills: Iterable[str], experience_years: float = 0.0
) -> MatchScore:
    """Score with the simple policy (education placeholder, 75 for non-remote)."""
    return compute_match(job, resume_skills, experience_years, MatchVariant.SIMPLE)


def generate_match_explanation(
    job: Job,
    resume: Resume,
    user_skills: Optional[Iterable[str]] = None,
    now: Optional[datetime] = None,
    max_improvements: int = 5,
) -> MatchScore:
    """
    Score with the explanation policy using a resume's skills and experience.

    Candidate skills are the resume's skill names merged with ``user_skills``.
    """
    candidate = CandidateContext.from_resume(resume, list(user_skills or []), now)
    return compute_match(
        job, candidate.skills, candidate.experience_years,
        MatchVariant.EXPLANATION, max_improvements=max_improvements,
    )


# ---------------------------------------------------------------------------
# Scorer facade
# ---------------------------------------------------------------------------

class MatchScorer:
    """
    Orchestrates match scoring for one or many jobs.

    Responsibility: Holds the default variant and improvement limit, and logs
    each result. Acts as facade for the match scoring subsystem.
    """

    def __init__(self, variant=MatchVariant.EXPLANATION, max_improvements: int = 5):
        """
        Initialize scorer.

        Args:
            variant: Default MatchVariant (or its string value)
            max_improvements: How many missing skills get a learning suggestion
        """
        self.policy = get_policy(variant)
        self.max_improvements = max_improvements

    @property
    def variant(self) -> MatchVariant:
        return self.policy.variant

    def score_job(
        self, job: Job, candidate_skills: Iterable[str], experience_years: float
    ) -> MatchScore:
        score = compute_match(
            job, candidate_skills, experience_years,
            self.policy.variant, self.max_improvements,
        )
        logger.debug(
            f"Scored '{job.title}' ({job.id}): overall={score.overall_match} "
            f"skills={score.skill_match} experience={score.experience_match}"
        )
        return score

    def score_jobs(
        self, jobs: Sequence[Job], candidate_skills: Iterable[str], experience_years: float
    ) -> List[MatchScore]:
        """Score multiple jobs and return results in the same order."""
        skills = list(candidate_skills)
        scores = [self.score_job(job, skills, experience_years) for job in jobs]
        logger.info(f"Scored {len(scores)} jobs with the {self.variant.value} policy")
        return scores

    def set_variant(self, variant) -> None:
        """Change the weighting policy."""
        self.policy = get_policy(variant)
        logger.info(f"Switched match variant to: {self.policy.variant.value}")
