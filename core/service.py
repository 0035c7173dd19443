"""
Job insights orchestration.

Coordinates match scoring, scam detection, filtering, and sorting into the
job insights a job list or job detail screen renders.
"""

import json
import logging
from datetime import datetime
from typing import List, Optional

from config.settings import AppSettings
from filters.job_filters import (
    JobFilterPipeline, ScamRiskFilter, build_filter_pipeline, sort_insights,
)
from jobs.client import LinstaJobsClient
from matching.matcher import MatchScorer, match_label
from models.schemas import CandidateContext, Job, JobFilters, JobInsight, RiskLevel
from scam.detector import ScamDetector, risk_label

logger = logging.getLogger(__name__)


class JobInsightsService:
    """
    Main facade over the scoring subsystems.

    Responsibility: Pairs every job with its match score and scam detection,
    and ranks, filters, or fetches jobs on request.
    """

    def __init__(
        self,
        scorer: MatchScorer,
        detector: ScamDetector,
        settings: AppSettings,
        client: Optional[LinstaJobsClient] = None,
    ):
        """
        Initialize the service.

        Args:
            scorer: Match scorer holding the default variant
            detector: Scam detector
            settings: Application configuration
            client: Optional jobs API client, required only by fetch_insight()
        """
        self.scorer = scorer
        self.detector = detector
        self.settings = settings
        self.client = client

    def analyze(self, job: Job, candidate: CandidateContext) -> JobInsight:
        match = self.scorer.score_job(job, candidate.skills, candidate.experience_years)
        scam = self.detector.detect(job)
        return JobInsight(job=job, match=match, scam=scam)

    def analyze_many(self, jobs: List[Job], candidate: CandidateContext) -> List[JobInsight]:
        """
        Analyze jobs and rank them by overall match, highest first.

        Jobs below ``settings.match.min_overall_match`` are dropped.
        """
        min_match = self.settings.match.min_overall_match
        insights = [self.analyze(job, candidate) for job in jobs]
        ranked = [i for i in insights if i.match.overall_match >= min_match]
        ranked.sort(key=lambda i: i.match.overall_match, reverse=True)

        flagged = sum(1 for i in ranked if i.show_warning)
        logger.info(
            f"Analyzed {len(jobs)} jobs: {len(ranked)} at or above {min_match}% match, "
            f"{flagged} with scam warnings"
        )
        return ranked

    def safe_jobs(self, jobs: List[Job], max_risk: RiskLevel = RiskLevel.MEDIUM) -> List[Job]:
        """
        Jobs whose scam risk stays below ``max_risk``.

        The default keeps exactly the jobs that would not show a scam warning.
        """
        safe, _ = ScamRiskFilter(max_risk, self.detector).apply(jobs)
        return safe

    def browse(
        self,
        jobs: List[Job],
        filters: JobFilters,
        candidate: CandidateContext,
        now: Optional[datetime] = None,
    ) -> List[JobInsight]:
        """
        Filter, score, and sort jobs the way a job search screen lists them.

        ``filters.sort_by == 'match'`` orders by overall match. ``filters.max_risk``
        is checked with this service's detector.
        """
        pipeline: JobFilterPipeline = build_filter_pipeline(filters, now, self.detector)
        filtered, report = pipeline.apply(jobs)
        if report["total_removed"]:
            logger.info(f"Browse: filters removed {report['total_removed']} of {len(jobs)} jobs")

        insights = [self.analyze(job, candidate) for job in filtered]
        return sort_insights(insights, filters.sort_by, filters.sort_order)

    def fetch_insight(self, job_id: str, candidate: CandidateContext) -> JobInsight:
        """
        Fetch a job from the backend and analyze it.

        Raises:
            ValueError: If no jobs API client is configured
            JobsApiError: If the backend call fails
        """
        if not self.client:
            raise ValueError("No jobs API client configured")
        job = self.client.get_job(job_id)
        return self.analyze(job, candidate)

    def save_report(self, insights: List[JobInsight], output_path: str) -> None:
        """
        Save insights to a JSON report.

        Args:
            insights: Ranked insights to save
            output_path: Path to save results
        """
        results = []
        for insight in insights:
            job = insight.job
            match = insight.match
            scam = insight.scam
            results.append({
                "rank": len(results) + 1,
                "job_id": job.id,
                "title": job.title,
                "company": job.company.name,
                "location": str(job.location),
                "work_mode": job.work_mode.value,
                "match": {
                    "variant": match.variant.value,
                    "label": match_label(match.overall_match),
                    "overall": match.overall_match,
                    "skills": match.skill_match,
                    "experience": match.experience_match,
                    "location": match.location_match,
                    "education": match.education_match,
                    "salary": match.salary_match,
                    "matching_skills": list(match.matching_skills),
                    "missing_skills": list(match.missing_skills),
                    "reasons": list(match.reasons),
                    "improvements": [
                        {"skill": i.skill, "importance": i.importance, "suggestion": i.suggestion}
                        for i in match.improvements
                    ],
                    "recommendation": match.recommendation,
                },
                "scam": {
                    "risk_level": scam.risk_level.value,
                    "label": risk_label(scam.risk_level),
                    "score": scam.score,
                    "flags": scam.flags.triggered(),
                    "reasons": list(scam.reasons),
                    "show_warning": scam.should_show_warning,
                },
            })

        output = {
            "generated_at": datetime.now().isoformat(),
            "total_jobs": len(results),
            "results": results,
        }

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(output, f, indent=2, default=str, ensure_ascii=False)
        logger.info(f"Results saved to: {output_path} ({len(results)} jobs)")


class ServiceBuilder:
    """
    Builder for constructing JobInsightsService instances.

    Responsibility: Simplifies service construction with default components
    while allowing customization. Implements Builder Pattern.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self.settings = settings or AppSettings()
        self.scorer: Optional[MatchScorer] = None
        self.detector: Optional[ScamDetector] = None
        self.client: Optional[LinstaJobsClient] = None

    def with_scorer(self, scorer: MatchScorer) -> "ServiceBuilder":
        self.scorer = scorer
        return self

    def with_detector(self, detector: ScamDetector) -> "ServiceBuilder":
        self.detector = detector
        return self

    def with_client(self, client: Optional[LinstaJobsClient] = None) -> "ServiceBuilder":
        """Attach a jobs API client (one built from settings.api when omitted)."""
        self.client = client or LinstaJobsClient(self.settings.api)
        return self

    def build(self) -> JobInsightsService:
        scorer = self.scorer or MatchScorer(
            variant=self.settings.match.default_variant,
            max_improvements=self.settings.match.max_improvements,
        )
        detector = self.detector or ScamDetector(self.settings.scam)
        logger.info(
            f"Built JobInsightsService (variant={scorer.variant.value}, "
            f"client={'yes' if self.client else 'no'})"
        )
        return JobInsightsService(scorer, detector, self.settings, self.client)
