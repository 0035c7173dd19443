"""
Unit tests for job and resume parsing.

Tests cover:
- Date parsing
- Job payload parsing and defaults
- Loading jobs and resumes from disk
- Resume experience and candidate context
"""

import json
from datetime import datetime

import pytest

from jobs.parser import load_jobs, parse_date, parse_job, parse_jobs
from models.schemas import (
    CandidateContext, ExperienceLevel, JobType, Resume, WorkExperience, WorkMode,
)
from resume.parser import ResumeParser, parse_resume


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("2024-01-15") == datetime(2024, 1, 15)

    def test_timezone_converted_to_naive_utc(self):
        assert parse_date("2024-01-15T10:00:00+05:30") == datetime(2024, 1, 15, 4, 30)

    def test_datetime_passthrough(self):
        value = datetime(2023, 6, 1, 9, 0)
        assert parse_date(value) == value

    @pytest.mark.parametrize("value", [None, "", "present", "Current", "not-a-date", 42])
    def test_missing_or_invalid(self, value):
        assert parse_date(value) is None


class TestParseJob:
    """Tests for parse_job()."""

    def test_full_payload(self, job_payload):
        job = parse_job(job_payload)

        assert job.id == "job42"
        assert job.title == "Backend Developer (Node.js)"
        assert job.company.name == "Paytm"
        assert job.company.verified is True
        assert job.location.city == "Noida"
        assert job.location.latitude == 28.5355
        assert job.salary.min == 1_800_000
        assert job.salary.average == 2_300_000
        assert job.experience.level == ExperienceLevel.SENIOR
        assert job.work_mode == WorkMode.HYBRID
        assert job.job_type == JobType.CONTRACT
        assert job.posted_date == datetime(2024, 1, 9)
        assert job.application_deadline == datetime(2024, 2, 15)
        assert job.views == 340
        assert job.applicants == 67

    def test_skill_requirements(self, job_payload):
        job = parse_job(job_payload)
        assert job.skill_requirements() == ["Node.js", "Express", "MongoDB", "Microservices"]

    def test_falls_back_to_skills(self, job_payload):
        del job_payload["requiredSkills"]
        job = parse_job(job_payload)

        assert job.required_skills is None
        assert job.skill_requirements() == ["Backend", "Node.js", "Microservices"]

    def test_minimal_payload_defaults(self):
        job = parse_job({"_id": "abc", "title": "  Designer  "})

        assert job.id == "abc"
        assert job.title == "Designer"
        assert job.company.verified is False
        assert job.work_mode == WorkMode.ONSITE
        assert job.job_type is None
        assert job.salary.min == 0
        assert job.posted_date is None

    def test_remote_location_implies_remote_mode(self):
        job = parse_job({"id": "1", "title": "QA", "location": {"city": "Anywhere", "remote": True}})
        assert job.work_mode == WorkMode.REMOTE

    def test_string_company_and_location(self):
        job = parse_job({"id": "1", "title": "QA", "company": "Swiggy", "location": "Pune, India"})

        assert job.company.name == "Swiggy"
        assert job.location.city == "Pune"
        assert job.location.country == "India"
        assert str(job.location) == "Pune, India"

    def test_enum_spellings(self):
        job = parse_job({"id": "1", "title": "QA", "type": "full_time", "workMode": "Remote"})
        assert job.job_type == JobType.FULL_TIME
        assert job.work_mode == WorkMode.REMOTE

    def test_unknown_enum_is_dropped(self):
        job = parse_job({"id": "1", "title": "QA", "jobType": "gig"})
        assert job.job_type is None

    def test_applicant_list_is_counted(self):
        job = parse_job({"id": "1", "title": "QA", "applicants": ["u1", "u2", "u3"]})
        assert job.applicants == 3

    @pytest.mark.parametrize("raw,message", [
        ({"title": "QA"}, "missing 'id'"),
        ({"id": "1"}, "missing 'title'"),
        (["not", "a", "dict"], "must be an object"),
    ])
    def test_invalid_records(self, raw, message):
        with pytest.raises(ValueError, match=message):
            parse_job(raw)

    def test_parse_jobs_skips_bad_records(self, job_payload):
        jobs = parse_jobs([job_payload, {"title": "no id"}, "junk"])
        assert [j.id for j in jobs] == ["job42"]


class TestLoadJobs:
    """Tests for load_jobs()."""

    def test_list_file(self, tmp_path, job_payload):
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps([job_payload]), encoding="utf-8")

        jobs = load_jobs(str(path))
        assert [j.id for j in jobs] == ["job42"]

    def test_wrapped_file(self, tmp_path, job_payload):
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps({"jobs": [job_payload], "total": 1}), encoding="utf-8")

        assert len(load_jobs(str(path))) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_jobs(str(tmp_path / "nope.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "jobs.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_jobs(str(path))

    def test_no_job_list(self, tmp_path):
        path = tmp_path / "jobs.json"
        path.write_text(json.dumps({"data": 1}), encoding="utf-8")

        with pytest.raises(ValueError, match="Expected a list of jobs"):
            load_jobs(str(path))


@pytest.fixture
def resume_payload():
    return {
        "id": "r7",
        "personalInfo": {"name": "Arjun Mehta", "email": "arjun@example.com"},
        "skills": [
            {"name": "React", "level": "expert", "category": "frontend"},
            "react",
            "SQL",
            42,
            {"level": "beginner"},
        ],
        "experience": [
            {"company": "TCS", "role": "Developer", "startDate": "2020-01-01", "endDate": "2022-01-01"},
            {"company": "Razorpay", "role": "Engineer", "startDate": "2022-01-01",
             "endDate": "Present", "current": True},
            {"company": "Side Gig", "role": "Freelancer"},
        ],
    }


class TestParseResume:
    """Tests for resume parsing."""

    def test_parse_resume(self, resume_payload):
        resume = parse_resume(resume_payload)

        assert resume.id == "r7"
        assert resume.name == "Arjun Mehta"
        assert resume.skill_names() == ["React", "SQL"]
        assert resume.skills[0].level == "expert"
        assert [e.company for e in resume.experience] == ["TCS", "Razorpay"]
        assert resume.experience[1].current is True
        assert resume.experience[1].end_date is None

    def test_non_dict(self):
        with pytest.raises(ValueError):
            parse_resume("resume")

    def test_parser_reads_file(self, tmp_path, resume_payload):
        path = tmp_path / "resume.json"
        path.write_text(json.dumps(resume_payload), encoding="utf-8")

        resume = ResumeParser().parse(str(path))
        assert resume.name == "Arjun Mehta"

    def test_parser_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ResumeParser().parse(str(tmp_path / "missing.json"))

    def test_parser_rejects_other_formats(self, tmp_path):
        path = tmp_path / "resume.pdf"
        path.write_bytes(b"%PDF-1.4")

        with pytest.raises(ValueError, match="Not a JSON file"):
            ResumeParser().parse(str(path))

    def test_parser_invalid_json(self, tmp_path):
        path = tmp_path / "resume.json"
        path.write_text("[1, 2", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            ResumeParser().parse(str(path))


class TestResumeExperience:
    """Tests for experience totals and candidate context."""

    def test_years_of_experience(self, resume, now):
        # 1096 days of closed role plus 384.5 days of current role
        assert resume.years_of_experience(now) == pytest.approx(1480.5 / 365)

    def test_inverted_range_counts_nothing(self, now):
        resume = Resume(experience=[
            WorkExperience(company="X", role="Dev", start_date=datetime(2023, 1, 1),
                           end_date=datetime(2022, 1, 1)),
        ])
        assert resume.years_of_experience(now) == 0

    def test_candidate_from_resume(self, resume, now):
        candidate = CandidateContext.from_resume(resume, ["SQL", "AWS"], now)

        assert candidate.skills == ["React", "Node.js", "SQL", "AWS"]
        assert candidate.experience_years == pytest.approx(1480.5 / 365)
