"""
Command-line entry point for Linsta job insights.

Example usage:
    python main.py --jobs jobs.json --resume resume.json
    python main.py --jobs jobs.json --skills React "Node.js" AWS --years 3 --variant simple
"""

import argparse
import logging
import sys

from config.settings import AppSettings
from core.service import ServiceBuilder
from jobs.parser import load_jobs
from matching.matcher import match_label
from models.schemas import CandidateContext, RiskLevel
from resume.parser import ResumeParser
from scam.detector import risk_label


def setup_logging(debug: bool = False, log_level: str = "INFO") -> None:
    """
    Configure logging for the application.

    Args:
        debug: Enable debug mode
        log_level: Logging level
    """
    level = logging.DEBUG if debug else getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_arguments(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Linsta job insights - match scoring and scam-risk detection"
    )

    parser.add_argument(
        "--jobs",
        required=True,
        type=str,
        help="Path to a JSON file with a list of jobs"
    )

    parser.add_argument(
        "--resume",
        type=str,
        default=None,
        help="Path to a JSON resume (skills and experience are read from it)"
    )

    parser.add_argument(
        "--skills",
        type=str,
        nargs="+",
        default=[],
        help="Candidate skills (added to the resume's skills when --resume is given)"
    )

    parser.add_argument(
        "--years",
        type=float,
        default=0.0,
        help="Years of experience when no resume is given (default: 0)"
    )

    parser.add_argument(
        "--variant",
        choices=["simple", "explanation"],
        default=None,
        help="Match scoring variant (default: MATCH_VARIANT or 'explanation')"
    )

    parser.add_argument(
        "--hide-risky",
        action="store_true",
        help="Drop jobs that would show a scam warning"
    )

    parser.add_argument(
        "--max-risk",
        choices=["medium", "high"],
        default=None,
        help="Drop jobs at or above this scam risk (--hide-risky is the same as medium)"
    )

    parser.add_argument(
        "--output",
        type=str,
        default="insights.json",
        help="Output file for results (default: insights.json)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode"
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """
    Main application entry point.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        args = parse_arguments(argv)

        settings = AppSettings.from_env()
        settings.debug = settings.debug or args.debug
        if args.variant:
            settings.match.default_variant = args.variant

        setup_logging(debug=settings.debug, log_level=settings.log_level)
        logger = logging.getLogger(__name__)

        if args.resume:
            resume = ResumeParser().parse(args.resume)
            candidate = CandidateContext.from_resume(resume, args.skills)
        else:
            candidate = CandidateContext(skills=args.skills, experience_years=args.years)
        logger.info(
            f"Candidate: {len(candidate.skills)} skills, "
            f"{candidate.experience_years:.1f} years experience"
        )

        jobs = load_jobs(args.jobs)
        service = ServiceBuilder(settings).build()
        if args.max_risk:
            jobs = service.safe_jobs(jobs, RiskLevel(args.max_risk))
        elif args.hide_risky:
            jobs = service.safe_jobs(jobs)

        insights = service.analyze_many(jobs, candidate)
        service.save_report(insights, args.output)

        if insights:
            print(f"\nTop {min(5, len(insights))} matches:")
            for i, insight in enumerate(insights[:5], 1):
                match = insight.match
                warning = " [!]" if insight.show_warning else ""
                print(
                    f"  {i}. {insight.job.title} at {insight.job.company.name} "
                    f"- {match.overall_match}% {match_label(match.overall_match)}, "
                    f"{risk_label(insight.scam.risk_level)}{warning}"
                )
            print(f"\nFull results saved to: {args.output}")
        else:
            print("\nNo jobs to show.")

        return 0

    except FileNotFoundError as e:
        logging.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logging.error(f"Configuration error: {e}")
        return 1
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return 130
    except Exception as e:
        logging.error(f"Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
