"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime

import pytest

from models.schemas import (
    Company, ExperienceLevel, ExperienceRange, Job, JobType, Location, Resume,
    ResumeSkill, Salary, WorkExperience, WorkMode,
)

CLEAN_DESCRIPTION = (
    "We are looking for an experienced developer to join our mobile team. "
    "You will build and ship features across iOS and Android, review code, "
    "and mentor junior engineers."
)

NOW = datetime(2024, 1, 20, 12, 0, 0)


def build_job(**overrides) -> Job:
    """A clean, verified, onsite job; override any field."""
    fields = dict(
        id="j1",
        title="Senior React Native Developer",
        company=Company(id="c1", name="Tech Mahindra", industry="IT Services", verified=True),
        description=CLEAN_DESCRIPTION,
        location=Location(city="Bangalore", state="Karnataka", country="India",
                          latitude=12.9716, longitude=77.5946),
        salary=Salary(min=1_500_000, max=2_500_000),
        experience=ExperienceRange(min=2, max=5, level=ExperienceLevel.MID),
        work_mode=WorkMode.ONSITE,
        job_type=JobType.FULL_TIME,
        skills=["React Native", "TypeScript"],
        posted_date=datetime(2024, 1, 15),
        views=120,
    )
    fields.update(overrides)
    return Job(**fields)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clean_description() -> str:
    return CLEAN_DESCRIPTION


@pytest.fixture
def make_job():
    """Factory for jobs with per-test overrides."""
    return build_job


@pytest.fixture
def clean_job() -> Job:
    return build_job()


@pytest.fixture
def scam_job() -> Job:
    """Unverified, urgent, overpaid junior job with a 40-character description."""
    return build_job(
        id="scam1",
        title="URGENT Hiring!!",
        company=Company(name="Quick Jobs Ltd", verified=False),
        description="Earn big from home, apply today please!!",
        salary=Salary(min=6_000_000, max=7_000_000),
        experience=ExperienceRange(min=1, max=3),
    )


@pytest.fixture
def resume() -> Resume:
    return Resume(
        id="r1",
        name="Priya Sharma",
        skills=[ResumeSkill(name="React"), ResumeSkill(name="Node.js"), ResumeSkill(name="SQL")],
        experience=[
            WorkExperience(company="Infosys", role="Developer",
                           start_date=datetime(2020, 1, 1), end_date=datetime(2023, 1, 1)),
            WorkExperience(company="Flipkart", role="Senior Developer",
                           start_date=datetime(2023, 1, 1), current=True),
        ],
    )


@pytest.fixture
def job_payload() -> dict:
    """A job as the backend sends it (camelCase)."""
    return {
        "id": "job42",
        "title": "Backend Developer (Node.js)",
        "company": {"id": "c9", "name": "Paytm", "industry": "Fintech", "verified": True},
        "location": {"city": "Noida", "state": "UP", "country": "India",
                     "latitude": 28.5355, "longitude": 77.391, "remote": False},
        "salary": {"min": 1800000, "max": 2800000, "currency": "INR", "period": "yearly"},
        "experience": {"min": 3, "max": 6, "level": "senior"},
        "workMode": "hybrid",
        "jobType": "contract",
        "description": CLEAN_DESCRIPTION,
        "skills": ["Backend", "Node.js"],
        "requiredSkills": ["Node.js", "Express", "MongoDB"],
        "preferredSkills": ["Microservices"],
        "postedDate": "2024-01-09",
        "applicationDeadline": "2024-02-15T00:00:00Z",
        "views": 340,
        "applicants": 67,
    }
