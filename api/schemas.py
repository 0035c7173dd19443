"""
Pydantic request/response models for the FastAPI endpoints.

Separate from domain dataclasses (models/schemas.py). Field names are
snake_case in Python and camelCase on the wire, matching the mobile client.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from jobs.parser import parse_job
from models.schemas import (
    CandidateContext, ExperienceLevel, Job, JobFilters, JobType, Resume, RiskLevel, WorkMode,
)
from resume.parser import parse_resume


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Job
# ---------------------------------------------------------------------------

class CompanySchema(CamelModel):
    id: str = ""
    name: str = ""
    industry: str = ""
    size: str = ""
    website: str = ""
    verified: bool = False


class LocationSchema(CamelModel):
    city: str = ""
    state: str = ""
    country: str = ""
    address: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    remote: bool = False


class SalarySchema(CamelModel):
    min: float = 0
    max: float = 0
    currency: str = "INR"
    period: str = "yearly"


class ExperienceSchema(CamelModel):
    min: float = 0
    max: float = 0
    level: Optional[str] = None


class JobSchema(CamelModel):
    id: str
    title: str
    company: CompanySchema = CompanySchema()
    description: str = ""
    location: LocationSchema = LocationSchema()
    salary: SalarySchema = SalarySchema()
    experience: ExperienceSchema = ExperienceSchema()
    work_mode: Optional[str] = None
    job_type: Optional[str] = None
    skills: List[str] = []
    required_skills: Optional[List[str]] = None
    preferred_skills: List[str] = []
    posted_date: Optional[str] = None
    application_deadline: Optional[str] = None
    views: int = 0
    applicants: int = 0
    featured: bool = False
    urgent: bool = False

    def to_domain(self) -> Job:
        return parse_job(self.model_dump(by_alias=True))


# ---------------------------------------------------------------------------
# Resume & candidate
# ---------------------------------------------------------------------------

class ResumeSchema(CamelModel):
    id: str = ""
    personal_info: Dict[str, Any] = {}
    skills: List[Any] = []
    experience: List[Dict[str, Any]] = []

    def to_domain(self) -> Resume:
        return parse_resume(self.model_dump(by_alias=True))


class CandidateRequest(CamelModel):
    """Candidate given either as a resume or as explicit skills and years."""

    skills: List[str] = []
    experience_years: float = Field(default=0, ge=0)
    resume: Optional[ResumeSchema] = None

    def candidate(self) -> CandidateContext:
        if self.resume is not None:
            return CandidateContext.from_resume(self.resume.to_domain(), self.skills)
        return CandidateContext(skills=list(self.skills), experience_years=self.experience_years)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

class FiltersSchema(CamelModel):
    keywords: Optional[str] = None
    location: Optional[str] = None
    work_mode: List[str] = []
    job_type: List[str] = []
    experience_level: List[str] = []
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    remote: Optional[bool] = None
    posted_within: Optional[int] = Field(default=None, ge=1)
    max_risk: Optional[str] = None
    sort_by: str = "date"
    sort_order: str = "desc"

    def to_domain(self) -> JobFilters:
        """
        Raises:
            ValueError: If an enumerated filter value is unknown
        """
        return JobFilters(
            keywords=self.keywords,
            location=self.location,
            work_mode=[WorkMode(v) for v in self.work_mode],
            job_type=[JobType(v) for v in self.job_type],
            experience_level=[ExperienceLevel(v) for v in self.experience_level],
            salary_min=self.salary_min,
            salary_max=self.salary_max,
            remote=self.remote,
            posted_within=self.posted_within,
            max_risk=RiskLevel(self.max_risk) if self.max_risk else None,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
        )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class MatchRequest(CandidateRequest):
    job: JobSchema
    variant: Optional[str] = None


class ExplainRequest(CamelModel):
    job: JobSchema
    resume: ResumeSchema
    skills: List[str] = []


class ScamRequest(CamelModel):
    job: JobSchema


class BrowseRequest(CandidateRequest):
    jobs: List[JobSchema]
    filters: FiltersSchema = FiltersSchema()


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class ImprovementResponse(CamelModel):
    skill: str
    importance: str
    suggestion: str


class MatchResponse(CamelModel):
    job_id: str
    variant: str
    overall_match: int
    skill_match: int
    experience_match: int
    location_match: int
    education_match: Optional[int] = None
    salary_match: Optional[int] = None
    matching_skills: List[str] = []
    missing_skills: List[str] = []
    reasons: List[str] = []
    strengths: List[str] = []
    gaps: List[str] = []
    improvements: List[ImprovementResponse] = []
    application_tips: List[str] = []
    recommendation: str = ""
    label: str = ""
    color: str = ""


class ScamResponse(CamelModel):
    score: int
    risk_level: str
    flags: Dict[str, bool]
    reasons: List[str] = []
    show_warning: bool = False
    label: str = ""
    color: str = ""


class InsightResponse(CamelModel):
    job_id: str
    title: str
    company: str
    match: MatchResponse
    scam: ScamResponse
