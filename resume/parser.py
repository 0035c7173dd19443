"""
Resume parsing module.

Loads the candidate side of a match from resume JSON as the resume builder
stores it: ``personalInfo``, a ``skills`` list (objects with a ``name`` or
plain strings), and an ``experience`` list of dated roles.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from jobs.parser import parse_date
from models.schemas import Resume, ResumeSkill, WorkExperience

logger = logging.getLogger(__name__)


def _parse_skills(raw_skills) -> List[ResumeSkill]:
    if not isinstance(raw_skills, list):
        return []
    skills = []
    seen = set()
    for item in raw_skills:
        if isinstance(item, str):
            skill = ResumeSkill(name=item.strip())
        elif isinstance(item, dict) and isinstance(item.get("name"), str):
            skill = ResumeSkill(
                name=item["name"].strip(),
                level=item.get("level", "") or "",
                category=item.get("category", "") or "",
            )
        else:
            continue
        key = skill.name.lower()
        if skill.name and key not in seen:
            seen.add(key)
            skills.append(skill)
    return skills


def _parse_experience(raw_experience) -> List[WorkExperience]:
    if not isinstance(raw_experience, list):
        return []
    experience = []
    for exp_data in raw_experience:
        if not isinstance(exp_data, dict):
            continue
        start_date = parse_date(exp_data.get("startDate"))
        if not start_date:
            logger.warning(
                f"Skipping experience at {exp_data.get('company', 'unknown')}: "
                f"no valid startDate"
            )
            continue
        experience.append(WorkExperience(
            company=exp_data.get("company", "") or "",
            role=exp_data.get("role", "") or "",
            start_date=start_date,
            end_date=parse_date(exp_data.get("endDate")),
            current=bool(exp_data.get("current", False)),
        ))
    return experience


def parse_resume(data: Dict[str, Any]) -> Resume:
    """
    Convert a raw resume dictionary into a Resume dataclass.

    Raises:
        ValueError: If ``data`` is not a dict
    """
    if not isinstance(data, dict):
        raise ValueError(f"Resume must be an object, got {type(data).__name__}")

    personal = data.get("personalInfo") if isinstance(data.get("personalInfo"), dict) else {}
    return Resume(
        id=str(data.get("id", "") or ""),
        name=personal.get("name", "") or data.get("name", "") or "",
        skills=_parse_skills(data.get("skills")),
        experience=_parse_experience(data.get("experience")),
    )


class ResumeParser:
    """
    Parser for JSON resume files.

    Responsibility: Loads and validates resumes from disk.
    """

    def parse(self, file_path: str) -> Resume:
        """
        Parse a JSON resume file.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is not JSON or its content is invalid
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Resume file not found: {file_path}")
        if not self.supports_format(file_path):
            raise ValueError(f"Not a JSON file: {file_path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}") from e

        resume = parse_resume(data)
        logger.info(
            f"Parsed resume '{resume.name or resume.id}': "
            f"{len(resume.skills)} skills, {len(resume.experience)} roles"
        )
        return resume

    def supports_format(self, file_path: str) -> bool:
        return Path(file_path).suffix.lower() == ".json"
