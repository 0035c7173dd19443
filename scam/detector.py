"""
Scam-risk detection for job postings.

Runs a fixed, ordered set of heuristics over a job. Each heuristic that fires
adds points to an unbounded score, raises one named flag, and appends one
reason. The score maps to a risk tier through two thresholds (see ScamConfig).
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from config.settings import ScamConfig
from models.schemas import Job, RiskLevel, ScamDetection, ScamFlags

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class ScamHeuristic(ABC):
    """
    Abstract base class for scam heuristics.

    Responsibility: Decides whether one warning sign is present in a job.
    ``flag`` names the ScamFlags field it raises.
    """

    flag: str = ""
    reason: str = ""

    def __init__(self, points: int):
        self.points = points

    @abstractmethod
    def check(self, job: Job) -> bool:
        """Return True if the warning sign is present."""
        pass

    def get_name(self) -> str:
        return self.flag


# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------

class UnrealisticSalaryHeuristic(ScamHeuristic):
    """Very high average pay offered for a junior experience requirement."""

    flag = "unrealistic_salary"
    reason = "Unrealistically high salary for experience level"

    def __init__(self, points: int, salary_threshold: float, max_experience: float):
        super().__init__(points)
        self.salary_threshold = salary_threshold
        self.max_experience = max_experience

    def check(self, job: Job) -> bool:
        return (
            job.salary.average > self.salary_threshold
            and job.experience.min < self.max_experience
        )


class PoorDescriptionHeuristic(ScamHeuristic):
    """Description shorter than a minimum character count (code points, so an emoji counts once)."""

    flag = "poor_description"
    reason = "Very brief job description"

    def __init__(self, points: int, min_length: int):
        super().__init__(points)
        self.min_length = min_length

    def check(self, job: Job) -> bool:
        return len(job.description or "") < self.min_length


class KeywordHeuristic(ScamHeuristic):
    """Fires when a job field contains any of a list of phrases, ignoring case."""

    field_name = "description"

    def __init__(self, points: int, keywords):
        super().__init__(points)
        self.keywords = [k.lower() for k in keywords]

    def check(self, job: Job) -> bool:
        text = (getattr(job, self.field_name) or "").lower()
        return any(keyword in text for keyword in self.keywords)


class UrgentHiringHeuristic(KeywordHeuristic):
    flag = "urgent_hiring"
    reason = "Urgent hiring pressure tactics"
    field_name = "title"


class UpfrontPaymentHeuristic(KeywordHeuristic):
    flag = "upfront_payment"
    reason = "Requests upfront payment or fees"
    field_name = "description"


class UnverifiedCompanyHeuristic(ScamHeuristic):
    flag = "suspicious_company"
    reason = "Company not verified"

    def check(self, job: Job) -> bool:
        return not job.company.verified


def default_heuristics(config: Optional[ScamConfig] = None) -> List[ScamHeuristic]:
    """The standard heuristics, in the order their reasons are reported."""
    config = config or ScamConfig()
    return [
        UnrealisticSalaryHeuristic(
            config.unrealistic_salary_points,
            config.high_salary_threshold,
            config.max_experience_for_high_salary,
        ),
        PoorDescriptionHeuristic(config.poor_description_points, config.min_description_length),
        UrgentHiringHeuristic(config.urgent_hiring_points, config.urgent_keywords),
        UpfrontPaymentHeuristic(config.upfront_payment_points, config.payment_keywords),
        UnverifiedCompanyHeuristic(config.unverified_company_points),
    ]


# ---------------------------------------------------------------------------
# Detector
# ---------------------------------------------------------------------------

class ScamDetector:
    """
    Applies scam heuristics in sequence.

    Responsibility: Accumulates points, flags and reasons from each heuristic
    and classifies the total into a risk tier.
    """

    def __init__(
        self,
        config: Optional[ScamConfig] = None,
        heuristics: Optional[List[ScamHeuristic]] = None,
    ):
        """
        Initialize detector.

        Args:
            config: Thresholds and keywords (defaults to ScamConfig())
            heuristics: Heuristics to run, in reporting order. Defaults to
                        default_heuristics(config).
        """
        self.config = config or ScamConfig()
        self.heuristics = heuristics if heuristics is not None else default_heuristics(self.config)

    def classify(self, score: int) -> RiskLevel:
        if score >= self.config.high_risk_threshold:
            return RiskLevel.HIGH
        if score >= self.config.medium_risk_threshold:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def detect(self, job: Job) -> ScamDetection:
        score = 0
        reasons = []
        flags = {}

        for heuristic in self.heuristics:
            if heuristic.check(job):
                score += heuristic.points
                flags[heuristic.flag] = True
                reasons.append(heuristic.reason)

        detection = ScamDetection(
            score=score,
            risk_level=self.classify(score),
            flags=ScamFlags(**flags),
            reasons=tuple(reasons),
        )
        if detection.should_show_warning:
            logger.info(
                f"Job '{job.title}' ({job.id}) flagged {detection.risk_level.value} risk: "
                f"score={score}, flags={detection.flags.triggered()}"
            )
        return detection


_default_detector = ScamDetector()


def detect_scam_risk(job: Job) -> ScamDetection:
    """Score a job with the default heuristics and thresholds."""
    return _default_detector.detect(job)


def should_show_warning(detection: ScamDetection) -> bool:
    return detection.risk_level in (RiskLevel.MEDIUM, RiskLevel.HIGH)


def risk_label(level: RiskLevel) -> str:
    labels = {
        RiskLevel.HIGH: "High Risk",
        RiskLevel.MEDIUM: "Medium Risk",
        RiskLevel.LOW: "Low Risk",
    }
    return labels.get(level, "Unknown")


def risk_color(level: RiskLevel) -> str:
    colors = {
        RiskLevel.HIGH: "#EF4444",
        RiskLevel.MEDIUM: "#F59E0B",
        RiskLevel.LOW: "#10B981",
    }
    return colors.get(level, "#6B7280")
