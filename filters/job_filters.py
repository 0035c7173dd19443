"""
Job filtering and sorting implementations.

Narrows a job list by keywords, city, work mode, job type, experience level,
salary bounds, remote flag, posting age, and scam risk. Filters run
sequentially in a pipeline that tracks which filter removed each job.
"""

import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from models.schemas import (
    ExperienceLevel, Job, JobFilters, JobInsight, JobType, MatchScore, RiskLevel, WorkMode,
)
from scam.detector import ScamDetector

logger = logging.getLogger(__name__)

_RISK_ORDER = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH]


def _normalize(text: str) -> str:
    """Lowercase, strip, collapse whitespace."""
    return re.sub(r"\s+", " ", (text or "").lower().strip())


def _removed(filter_name: str, job: Job, why: str) -> str:
    return f"[{filter_name}] Removed '{job.title}' at {job.company.name}: {why}"


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class JobFilter(ABC):
    """
    Abstract base class for job filters.

    Responsibility: Defines interface for filtering jobs based on one criterion.
    """

    @abstractmethod
    def apply(self, jobs: List[Job]) -> Tuple[List[Job], List[str]]:
        """
        Apply filter to jobs.

        Args:
            jobs: List of jobs to filter

        Returns:
            Tuple of (filtered_jobs, filter_reasons) where reasons explain removals
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get filter name."""
        pass


class PredicateFilter(JobFilter):
    """Keeps the jobs for which ``accepts`` is true; reports the rest."""

    def apply(self, jobs: List[Job]) -> Tuple[List[Job], List[str]]:
        filtered = []
        reasons = []
        for job in jobs:
            if self.accepts(job):
                filtered.append(job)
            else:
                reasons.append(_removed(self.get_name(), job, self.describe(job)))

        removed = len(jobs) - len(filtered)
        if removed:
            logger.debug(f"{self.get_name()}: removed {removed}/{len(jobs)} jobs")
        return filtered, reasons

    @abstractmethod
    def accepts(self, job: Job) -> bool:
        pass

    def describe(self, job: Job) -> str:
        return "did not match"


# ---------------------------------------------------------------------------
# Text filters
# ---------------------------------------------------------------------------

class KeywordFilter(PredicateFilter):
    """Keeps jobs whose title, company name, or description contains the keywords."""

    def __init__(self, keywords: str):
        self.keywords = _normalize(keywords)

    def accepts(self, job: Job) -> bool:
        return (
            self.keywords in _normalize(job.title)
            or self.keywords in _normalize(job.company.name)
            or self.keywords in _normalize(job.description)
        )

    def describe(self, job: Job) -> str:
        return f"no mention of '{self.keywords}'"

    def get_name(self) -> str:
        return "keyword_filter"


class LocationFilter(PredicateFilter):
    """Keeps jobs whose city contains the requested location."""

    def __init__(self, location: str):
        self.location = _normalize(location)

    def accepts(self, job: Job) -> bool:
        return self.location in _normalize(job.location.city)

    def describe(self, job: Job) -> str:
        return f"city '{job.location.city}' does not match '{self.location}'"

    def get_name(self) -> str:
        return "location_filter"


# ---------------------------------------------------------------------------
# Enumerated filters
# ---------------------------------------------------------------------------

class WorkModeFilter(PredicateFilter):
    def __init__(self, modes: List[WorkMode]):
        self.modes = list(modes)

    def accepts(self, job: Job) -> bool:
        return job.work_mode in self.modes

    def describe(self, job: Job) -> str:
        return f"work mode '{job.work_mode.value}' not allowed"

    def get_name(self) -> str:
        return "work_mode_filter"


class JobTypeFilter(PredicateFilter):
    def __init__(self, job_types: List[JobType]):
        self.job_types = list(job_types)

    def accepts(self, job: Job) -> bool:
        return job.job_type in self.job_types

    def describe(self, job: Job) -> str:
        job_type = job.job_type.value if job.job_type else "unknown"
        return f"job type '{job_type}' not allowed"

    def get_name(self) -> str:
        return "job_type_filter"


class ExperienceLevelFilter(PredicateFilter):
    def __init__(self, levels: List[ExperienceLevel]):
        self.levels = list(levels)

    def accepts(self, job: Job) -> bool:
        return job.experience.level in self.levels

    def describe(self, job: Job) -> str:
        level = job.experience.level.value if job.experience.level else "unknown"
        return f"level '{level}' not allowed"

    def get_name(self) -> str:
        return "experience_level_filter"


# ---------------------------------------------------------------------------
# Numeric and date filters
# ---------------------------------------------------------------------------

class SalaryFilter(PredicateFilter):
    """
    Filters jobs based on salary bounds.

    The job's lower bound must reach ``min_salary`` and its upper bound must
    not exceed ``max_salary``.
    """

    def __init__(self, min_salary: Optional[float] = None, max_salary: Optional[float] = None):
        self.min_salary = min_salary
        self.max_salary = max_salary

    def accepts(self, job: Job) -> bool:
        if self.min_salary and job.salary.min < self.min_salary:
            return False
        if self.max_salary and job.salary.max > self.max_salary:
            return False
        return True

    def describe(self, job: Job) -> str:
        return f"salary {job.salary.min:,.0f}-{job.salary.max:,.0f} outside bounds"

    def get_name(self) -> str:
        return "salary_filter"


class RemoteFilter(PredicateFilter):
    def __init__(self, remote: bool):
        self.remote = remote

    def accepts(self, job: Job) -> bool:
        return job.location.remote == self.remote

    def describe(self, job: Job) -> str:
        return "remote" if job.location.remote else "not remote"

    def get_name(self) -> str:
        return "remote_filter"


class PostedWithinFilter(PredicateFilter):
    """Keeps jobs posted within the last ``days`` days. Undated jobs are removed."""

    def __init__(self, days: int, now: Optional[datetime] = None):
        self.days = days
        self.cutoff = (now or datetime.now()) - timedelta(days=days)

    def accepts(self, job: Job) -> bool:
        return job.posted_date is not None and job.posted_date >= self.cutoff

    def describe(self, job: Job) -> str:
        return f"posted more than {self.days} days ago"

    def get_name(self) -> str:
        return "posted_within_filter"


class ScamRiskFilter(PredicateFilter):
    """Removes jobs whose scam risk reaches ``max_risk``."""

    def __init__(self, max_risk: RiskLevel = RiskLevel.MEDIUM, detector: Optional[ScamDetector] = None):
        self.max_risk = max_risk
        self.detector = detector or ScamDetector()

    def accepts(self, job: Job) -> bool:
        level = self.detector.detect(job).risk_level
        return _RISK_ORDER.index(level) < _RISK_ORDER.index(self.max_risk)

    def describe(self, job: Job) -> str:
        detection = self.detector.detect(job)
        return f"{detection.risk_level.value} scam risk ({', '.join(detection.reasons)})"

    def get_name(self) -> str:
        return "scam_risk_filter"


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

class JobFilterPipeline:
    """
    Applies filters in sequence.

    Responsibility: Manages sequential execution of filters with tracking
    of which filter removed each job.
    """

    def __init__(self, filters: Optional[List[JobFilter]] = None):
        self.filters = filters or []

    def add_filter(self, job_filter: JobFilter) -> None:
        """Add a filter to the pipeline."""
        self.filters.append(job_filter)

    def apply(self, jobs: List[Job]) -> Tuple[List[Job], dict]:
        """
        Apply filters sequentially.

        Returns:
            Tuple of (filtered_jobs, removal_report) where report contains:
                - total_input: number of jobs before filtering
                - total_output: number of jobs after filtering
                - total_removed: number of jobs removed
                - per_filter: dict mapping filter name to count removed
                - reasons: list of all removal reason strings
        """
        current_jobs = list(jobs)
        all_reasons = []
        per_filter: Dict[str, int] = {}

        for filt in self.filters:
            before_count = len(current_jobs)
            current_jobs, reasons = filt.apply(current_jobs)
            removed_count = before_count - len(current_jobs)

            if removed_count > 0:
                per_filter[filt.get_name()] = removed_count
                all_reasons.extend(reasons)

        total_removed = len(jobs) - len(current_jobs)
        if self.filters:
            logger.info(
                f"FilterPipeline: {len(jobs)} -> {len(current_jobs)} "
                f"({total_removed} removed total)"
            )

        report = {
            "total_input": len(jobs),
            "total_output": len(current_jobs),
            "total_removed": total_removed,
            "per_filter": per_filter,
            "reasons": all_reasons,
        }
        return current_jobs, report


def build_filter_pipeline(
    filters: JobFilters,
    now: Optional[datetime] = None,
    detector: Optional[ScamDetector] = None,
) -> JobFilterPipeline:
    """
    Build a pipeline holding one filter per criterion set in ``filters``.

    ``detector`` scores jobs for ``filters.max_risk``; a default ScamDetector
    is used when omitted.
    """
    pipeline = JobFilterPipeline()
    if filters.keywords:
        pipeline.add_filter(KeywordFilter(filters.keywords))
    if filters.location:
        pipeline.add_filter(LocationFilter(filters.location))
    if filters.work_mode:
        pipeline.add_filter(WorkModeFilter(filters.work_mode))
    if filters.job_type:
        pipeline.add_filter(JobTypeFilter(filters.job_type))
    if filters.experience_level:
        pipeline.add_filter(ExperienceLevelFilter(filters.experience_level))
    if filters.salary_min or filters.salary_max:
        pipeline.add_filter(SalaryFilter(filters.salary_min, filters.salary_max))
    if filters.remote is not None:
        pipeline.add_filter(RemoteFilter(filters.remote))
    if filters.posted_within:
        pipeline.add_filter(PostedWithinFilter(filters.posted_within, now))
    if filters.max_risk is not None:
        pipeline.add_filter(ScamRiskFilter(filters.max_risk, detector))
    return pipeline


def filter_jobs(jobs: List[Job], filters: JobFilters, now: Optional[datetime] = None) -> List[Job]:
    filtered, _ = build_filter_pipeline(filters, now).apply(jobs)
    return filtered


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def _sort_key(sort_by: str, overall_match: Optional[Callable[[Job], Optional[int]]]):
    """Key function for ``sort_by``, or None when the key is unknown."""
    if sort_by == "date":
        return lambda job: job.posted_date or datetime.min
    if sort_by == "salary":
        return lambda job: job.salary.min
    if sort_by == "relevance":
        return lambda job: job.views
    if sort_by == "match" and overall_match is not None:
        return lambda job: _or_unscored(overall_match(job))
    return None


def _or_unscored(score: Optional[int]) -> int:
    return -1 if score is None else score


def sort_jobs(
    jobs: List[Job],
    sort_by: str = "date",
    sort_order: str = "desc",
    match_scores: Optional[Mapping[str, MatchScore]] = None,
) -> List[Job]:
    """
    Return a sorted copy of ``jobs``.

    Args:
        jobs: Jobs to sort
        sort_by: 'date', 'salary' (lower bound), 'relevance' (views), or
                 'match' (overall match from ``match_scores``, keyed by job id).
                 Any other key keeps the input order.
        sort_order: 'asc' or 'desc'
        match_scores: Precomputed scores used by 'match'
    """
    overall_match = None
    if match_scores is not None:
        scores = {job_id: score.overall_match for job_id, score in match_scores.items()}
        overall_match = lambda job: scores.get(job.id)  # noqa: E731

    key = _sort_key(sort_by, overall_match)
    if key is None:
        return list(jobs)
    return sorted(jobs, key=key, reverse=sort_order != "asc")


def sort_insights(
    insights: List[JobInsight],
    sort_by: str = "date",
    sort_order: str = "desc",
) -> List[JobInsight]:
    """
    Return a sorted copy of ``insights``, ordered by the same keys as sort_jobs().

    'match' uses each insight's own score, so jobs sharing an id keep their
    own results.
    """
    scores = {id(insight.job): insight.match.overall_match for insight in insights}
    key = _sort_key(sort_by, lambda job: scores.get(id(job)))
    if key is None:
        return list(insights)
    return sorted(insights, key=lambda insight: key(insight.job), reverse=sort_order != "asc")
