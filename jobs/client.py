"""
Linsta jobs API client.

Thin wrapper over the Linsta backend's job endpoints. Responses are parsed
into domain Job objects; every failure surfaces as JobsApiError.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from config.settings import ApiConfig
from jobs.parser import parse_job, parse_jobs
from models.schemas import Job

logger = logging.getLogger(__name__)


class JobsApiError(RuntimeError):
    """Raised when the jobs backend cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class JobPage:
    """One page of job results."""

    jobs: List[Job] = field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0


class LinstaJobsClient:
    """
    Client for the Linsta jobs REST API.

    Responsibility: Issues job list, detail, and search requests and converts
    the payloads into domain objects.
    """

    FILTER_KEYS = ("type", "level", "location", "company")

    def __init__(self, config: Optional[ApiConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize client.

        Args:
            config: Backend URL, optional bearer token, and timeout
            session: Optional pre-configured requests session
        """
        self.config = config or ApiConfig()
        self.base_url = self.config.base_url.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if self.config.token:
            self.session.headers.update({"Authorization": f"Bearer {self.config.token}"})

    def get_jobs(self, page: int = 1, limit: int = 20, **filters) -> JobPage:
        """
        List jobs.

        Args:
            page: 1-based page number
            limit: Page size
            **filters: Optional type, level, location, company

        Raises:
            JobsApiError: On connection failure or a non-2xx response
        """
        params: Dict[str, Any] = {"page": page, "limit": limit}
        for key in self.FILTER_KEYS:
            if filters.get(key):
                params[key] = filters[key]

        data = self._get("/api/jobs", params, "Failed to fetch jobs")
        return self._to_page(data, page)

    def get_job(self, job_id: str) -> Job:
        """
        Fetch one job by id.

        Raises:
            JobsApiError: On connection failure, a non-2xx response, or a malformed job
        """
        data = self._get(f"/api/jobs/{job_id}", None, "Failed to fetch job")
        try:
            return parse_job(data.get("job"))
        except ValueError as e:
            raise JobsApiError(f"Malformed job payload for {job_id}: {e}") from e

    def search_jobs(self, query: str, page: int = 1, limit: int = 20) -> JobPage:
        if not query or not query.strip():
            raise ValueError("Search query cannot be empty")
        params = {"q": query.strip(), "page": page, "limit": limit}
        data = self._get("/api/jobs/search", params, "Failed to search jobs")
        return self._to_page(data, page)

    def _get(self, path: str, params: Optional[Dict[str, Any]], default_error: str) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} params={params}")

        try:
            response = self.session.get(url, params=params, timeout=self.config.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"Jobs API request timed out after {self.config.timeout}s: {url}")
            raise JobsApiError(f"Jobs API timed out after {self.config.timeout} seconds") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Jobs API request failed: {e}")
            raise JobsApiError(f"Could not reach jobs API at {self.base_url}: {e}") from e

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = default_error
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            logger.error(f"Jobs API returned {response.status_code} for {url}: {message}")
            raise JobsApiError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise JobsApiError(f"Invalid JSON from jobs API: {e}") from e
        if not isinstance(data, dict):
            raise JobsApiError("Unexpected response shape from jobs API")
        return data

    @staticmethod
    def _to_page(data: Dict[str, Any], page: int) -> JobPage:
        records = data.get("jobs") or []
        jobs = parse_jobs(records)
        logger.info(f"Jobs API: received {len(records)} records, parsed {len(jobs)} jobs")
        return JobPage(
            jobs=jobs,
            total=int(data.get("total", len(jobs)) or 0),
            page=int(data.get("page", page) or page),
            total_pages=int(data.get("totalPages", 0) or 0),
        )
