"""
Job payload parsing.

Converts job records as the Linsta backend and mobile client exchange them
(camelCase JSON) into domain Job objects. Tolerates missing or
malformed fields: anything absent gets the model default.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

from models.schemas import (
    Company, ExperienceLevel, ExperienceRange, Job, JobType, Location, Salary, WorkMode,
)

logger = logging.getLogger(__name__)


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-ish date string into a naive UTC datetime.

    Returns None for empty values, "present"/"current", and unparseable input.
    """
    if isinstance(value, datetime):
        parsed = value
    elif not value or not isinstance(value, str):
        return None
    else:
        value = value.strip()
        if value.lower() in ("null", "none", "present", "current", ""):
            return None
        try:
            parsed = date_parser.parse(value)
        except (ValueError, TypeError, OverflowError):
            logger.warning(f"Could not parse date: {value}")
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _safe_float(value, default: float = 0.0) -> float:
    """Safely convert a value to float, returning ``default`` on failure."""
    if value is None:
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def _safe_int(value, default: int = 0) -> int:
    if isinstance(value, list):
        return len(value)
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def _parse_enum(enum_cls, value, default=None):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value.strip():
        return default
    normalized = value.strip().lower().replace("_", "-").replace("-", "")
    for member in enum_cls:
        if member.value.replace("-", "") == normalized:
            return member
    logger.warning(f"Unknown {enum_cls.__name__} value: {value}")
    return default


def _string_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [s.strip() for s in value if isinstance(s, str) and s.strip()]


def _parse_company(data) -> Company:
    if isinstance(data, str):
        return Company(name=data)
    if not isinstance(data, dict):
        return Company()
    return Company(
        id=str(data.get("id", "") or ""),
        name=data.get("name", "") or "",
        industry=data.get("industry", "") or "",
        size=data.get("size", "") or "",
        website=data.get("website", "") or "",
        verified=bool(data.get("verified", False)),
    )


def _parse_location(data) -> Location:
    if isinstance(data, str):
        parts = [p.strip() for p in data.split(",")]
        return Location(
            city=parts[0] if parts else "",
            country=parts[-1] if len(parts) > 1 else "",
            remote="remote" in data.lower(),
        )
    if not isinstance(data, dict):
        return Location()
    lat = data.get("latitude")
    lon = data.get("longitude")
    return Location(
        city=data.get("city", "") or "",
        state=data.get("state", "") or "",
        country=data.get("country", "") or "",
        address=data.get("address", "") or "",
        latitude=_safe_float(lat) if lat is not None else None,
        longitude=_safe_float(lon) if lon is not None else None,
        remote=bool(data.get("remote", False)),
    )


def _parse_salary(data) -> Salary:
    if not isinstance(data, dict):
        return Salary()
    return Salary(
        min=_safe_float(data.get("min")),
        max=_safe_float(data.get("max")),
        currency=data.get("currency", "INR") or "INR",
        period=data.get("period", "yearly") or "yearly",
    )


def _parse_experience(data) -> ExperienceRange:
    if not isinstance(data, dict):
        return ExperienceRange()
    return ExperienceRange(
        min=_safe_float(data.get("min")),
        max=_safe_float(data.get("max")),
        level=_parse_enum(ExperienceLevel, data.get("level")),
    )


def parse_job(raw: Dict[str, Any]) -> Job:
    """
    Parse one job record into a domain Job.

    Raises:
        ValueError: If the record is not a dict or has no id or title
    """
    if not isinstance(raw, dict):
        raise ValueError(f"Job record must be an object, got {type(raw).__name__}")

    job_id = raw.get("id") or raw.get("_id")
    title = (raw.get("title") or "").strip()
    if not job_id:
        raise ValueError("Job record is missing 'id'")
    if not title:
        raise ValueError(f"Job {job_id} is missing 'title'")

    required = raw.get("requiredSkills")
    work_mode = _parse_enum(WorkMode, raw.get("workMode"))
    location = _parse_location(raw.get("location"))
    if work_mode is None:
        work_mode = WorkMode.REMOTE if location.remote else WorkMode.ONSITE

    return Job(
        id=str(job_id),
        title=title,
        company=_parse_company(raw.get("company")),
        description=raw.get("description", "") or "",
        location=location,
        salary=_parse_salary(raw.get("salary")),
        experience=_parse_experience(raw.get("experience")),
        work_mode=work_mode,
        job_type=_parse_enum(JobType, raw.get("jobType") or raw.get("type")),
        skills=_string_list(raw.get("skills")),
        required_skills=_string_list(required) if required is not None else None,
        preferred_skills=_string_list(raw.get("preferredSkills")),
        posted_date=parse_date(raw.get("postedDate")),
        application_deadline=parse_date(raw.get("applicationDeadline")),
        views=_safe_int(raw.get("views")),
        applicants=_safe_int(raw.get("applicants")),
        featured=bool(raw.get("featured", False)),
        urgent=bool(raw.get("urgent", False)),
    )


def parse_jobs(records: List[Dict[str, Any]]) -> List[Job]:
    """Parse many records, skipping (and logging) the malformed ones."""
    jobs = []
    for record in records:
        try:
            jobs.append(parse_job(record))
        except ValueError as e:
            logger.warning(f"Skipping job record: {e}")
    return jobs


def load_jobs(file_path: str) -> List[Job]:
    """
    Load jobs from a JSON file holding a list of jobs or ``{"jobs": [...]}``.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not valid JSON or holds no job list
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Jobs file not found: {file_path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("jobs")
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of jobs in {file_path}")

    jobs = parse_jobs(data)
    logger.info(f"Loaded {len(jobs)} jobs from {file_path}")
    return jobs
