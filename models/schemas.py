"""
Data models and schemas for jobs, resumes, match scores, and scam detection.

Defines the domain models used throughout the application following the
Single Responsibility Principle - each model represents a single concept.
Result models (MatchScore, ScamDetection) are frozen: they are built fresh
for every scoring call and never mutated afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple


class WorkMode(Enum):
    """Where the work happens."""

    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"


class JobType(Enum):
    """Types of employment."""

    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class ExperienceLevel(Enum):
    """Job seniority levels."""

    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"


class RiskLevel(Enum):
    """Discrete scam-risk tier."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MatchVariant(Enum):
    """Named match-scoring variants (see matching.matcher policies)."""

    SIMPLE = "simple"
    EXPLANATION = "explanation"


@dataclass
class Company:
    """Represents the company behind a job posting."""

    name: str = ""
    id: str = ""
    industry: str = ""
    size: str = ""
    website: str = ""
    verified: bool = False


@dataclass
class Location:
    """Represents a geographic location."""

    city: str = ""
    state: str = ""
    country: str = ""
    address: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    remote: bool = False

    def __str__(self) -> str:
        if self.remote:
            return "Remote"
        return ", ".join(p for p in (self.city, self.state, self.country) if p)


@dataclass
class Salary:
    """Represents a salary range."""

    min: float = 0.0
    max: float = 0.0
    currency: str = "INR"
    period: str = "yearly"  # yearly, monthly, hourly

    @property
    def average(self) -> float:
        return (self.min + self.max) / 2


@dataclass
class ExperienceRange:
    """Required years of experience for a job."""

    min: float = 0.0
    max: float = 0.0
    level: Optional[ExperienceLevel] = None


@dataclass
class Job:
    """
    Represents a job posting.

    Responsibility: Encapsulates the job data both scoring components read.
    Skill lists are free text and are never normalized here.
    """

    id: str
    title: str
    company: Company = field(default_factory=Company)
    description: str = ""
    location: Location = field(default_factory=Location)
    salary: Salary = field(default_factory=Salary)
    experience: ExperienceRange = field(default_factory=ExperienceRange)
    work_mode: WorkMode = WorkMode.ONSITE
    job_type: Optional[JobType] = None
    skills: List[str] = field(default_factory=list)
    required_skills: Optional[List[str]] = None
    preferred_skills: List[str] = field(default_factory=list)
    posted_date: Optional[datetime] = None
    application_deadline: Optional[datetime] = None
    views: int = 0
    applicants: int = 0
    featured: bool = False
    urgent: bool = False

    def skill_requirements(self) -> List[str]:
        """
        Required skills followed by preferred skills, deduplicated case-insensitively.

        Falls back to the plain ``skills`` list when no explicit required
        skills are given.
        """
        required = self.required_skills if self.required_skills else self.skills
        seen = set()
        result = []
        for skill in list(required) + list(self.preferred_skills):
            key = skill.strip().lower()
            if not key or key in seen:
                continue
            seen.add(key)
            result.append(skill)
        return result


@dataclass
class WorkExperience:
    """Represents a role on a resume."""

    company: str
    role: str
    start_date: datetime
    end_date: Optional[datetime] = None
    current: bool = False


@dataclass
class ResumeSkill:
    """A named skill on a resume."""

    name: str
    level: str = ""
    category: str = ""


@dataclass
class Resume:
    """
    Represents a candidate's resume.

    Responsibility: Supplies the candidate skills and experience a match is scored against.
    """

    id: str = ""
    name: str = ""
    skills: List[ResumeSkill] = field(default_factory=list)
    experience: List[WorkExperience] = field(default_factory=list)

    def skill_names(self) -> List[str]:
        return [s.name for s in self.skills if s.name and s.name.strip()]

    def years_of_experience(self, now: Optional[datetime] = None) -> float:
        """Sum the date ranges of all roles; open-ended roles count up to ``now``."""
        now = now or datetime.now()
        total_days = 0.0
        for exp in self.experience:
            end = now if exp.current or exp.end_date is None else exp.end_date
            duration = (end - exp.start_date).total_seconds() / 86400
            if duration > 0:
                total_days += duration
        return total_days / 365


@dataclass
class CandidateContext:
    """The candidate side of a match: skill labels and total years of experience."""

    skills: List[str] = field(default_factory=list)
    experience_years: float = 0.0

    @classmethod
    def from_resume(
        cls,
        resume: Resume,
        extra_skills: Optional[List[str]] = None,
        now: Optional[datetime] = None,
    ) -> "CandidateContext":
        skills = list(dict.fromkeys(resume.skill_names() + list(extra_skills or [])))
        return cls(skills=skills, experience_years=resume.years_of_experience(now))


@dataclass(frozen=True)
class SkillImprovement:
    """A suggestion to learn one missing skill."""

    skill: str
    importance: str  # high, medium, low
    suggestion: str


@dataclass(frozen=True)
class MatchScore:
    """
    Represents match results between a job and a candidate.

    Responsibility: Encapsulates scoring results with component breakdowns.
    All scores are integers in 0-100.
    """

    job_id: str
    variant: MatchVariant
    overall_match: int
    skill_match: int
    experience_match: int
    location_match: int
    education_match: Optional[int] = None
    salary_match: Optional[int] = None
    matching_skills: Tuple[str, ...] = ()
    missing_skills: Tuple[str, ...] = ()
    reasons: Tuple[str, ...] = ()
    strengths: Tuple[str, ...] = ()
    gaps: Tuple[str, ...] = ()
    improvements: Tuple[SkillImprovement, ...] = ()
    application_tips: Tuple[str, ...] = ()
    recommendation: str = ""


@dataclass(frozen=True)
class ScamFlags:
    """Named booleans, one per scam heuristic."""

    unrealistic_salary: bool = False
    poor_description: bool = False
    urgent_hiring: bool = False
    upfront_payment: bool = False
    suspicious_company: bool = False

    def triggered(self) -> List[str]:
        return [name for name, value in vars(self).items() if value]


@dataclass(frozen=True)
class ScamDetection:
    """
    Represents scam-risk results for one job posting.

    ``score`` is an unbounded accumulation; consumers branch on ``risk_level``.
    """

    score: int
    risk_level: RiskLevel
    flags: ScamFlags
    reasons: Tuple[str, ...] = ()

    @property
    def should_show_warning(self) -> bool:
        return self.risk_level in (RiskLevel.MEDIUM, RiskLevel.HIGH)


@dataclass
class JobFilters:
    """Search filters applied to a list of jobs."""

    keywords: Optional[str] = None
    location: Optional[str] = None
    work_mode: List[WorkMode] = field(default_factory=list)
    job_type: List[JobType] = field(default_factory=list)
    experience_level: List[ExperienceLevel] = field(default_factory=list)
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    remote: Optional[bool] = None
    posted_within: Optional[int] = None  # days
    max_risk: Optional[RiskLevel] = None  # jobs at or above this risk are removed
    sort_by: str = "date"  # relevance, date, salary, match
    sort_order: str = "desc"


@dataclass
class JobInsight:
    """
    A job together with its match and scam analysis.

    Responsibility: The view model a job list or job detail screen renders.
    """

    job: Job
    match: MatchScore
    scam: ScamDetection
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def show_warning(self) -> bool:
        return self.scam.should_show_warning
