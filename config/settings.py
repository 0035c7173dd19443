"""
Configuration settings for Linsta job insights.

Handles environment variables, configuration loading, and default settings.
Follows the Single Responsibility Principle by centralizing all configuration.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import os


@dataclass
class MatchConfig:
    """Configuration for match scoring."""

    default_variant: str = "explanation"  # 'simple' or 'explanation'
    max_improvements: int = 5
    min_overall_match: int = 0


@dataclass
class ScamConfig:
    """
    Thresholds and keywords for the scam heuristics.

    Salary thresholds are INR-scale, matching the currency jobs are posted in.
    """

    high_salary_threshold: float = 5_000_000
    max_experience_for_high_salary: float = 2
    min_description_length: int = 100
    urgent_keywords: Tuple[str, ...] = ("urgent", "immediate", "asap", "hurry")
    payment_keywords: Tuple[str, ...] = (
        "registration fee", "training fee", "deposit", "upfront payment",
    )
    unrealistic_salary_points: int = 30
    poor_description_points: int = 20
    urgent_hiring_points: int = 15
    upfront_payment_points: int = 35
    unverified_company_points: int = 10
    high_risk_threshold: int = 50
    medium_risk_threshold: int = 25


@dataclass
class ApiConfig:
    """Configuration for the Linsta jobs backend."""

    base_url: str = "http://localhost:5000"
    token: Optional[str] = None
    timeout: int = 30


@dataclass
class AppSettings:
    """Main application settings aggregating all configurations."""

    match: MatchConfig = field(default_factory=MatchConfig)
    scam: ScamConfig = field(default_factory=ScamConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppSettings":
        """
        Load settings from environment variables.

        Raises:
            ValueError: If a numeric or enumerated variable holds an invalid value
        """
        variant = os.getenv("MATCH_VARIANT", "explanation").strip().lower()
        if variant not in ("simple", "explanation"):
            raise ValueError(f"MATCH_VARIANT must be 'simple' or 'explanation', got '{variant}'")

        match_config = MatchConfig(
            default_variant=variant,
            max_improvements=int(os.getenv("MAX_IMPROVEMENTS", "5")),
        )
        if match_config.max_improvements < 0:
            raise ValueError("MAX_IMPROVEMENTS cannot be negative")

        api_config = ApiConfig(
            base_url=os.getenv("LINSTA_API_URL", "http://localhost:5000").rstrip("/"),
            token=os.getenv("LINSTA_API_TOKEN") or None,
            timeout=int(os.getenv("LINSTA_API_TIMEOUT", "30")),
        )

        return cls(
            match=match_config,
            api=api_config,
            debug=os.getenv("DEBUG", "False").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
