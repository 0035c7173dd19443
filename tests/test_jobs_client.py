"""
Unit tests for the Linsta jobs API client.

Tests cover:
- Session configuration
- Listing, fetching, and searching jobs
- Error handling for HTTP and network failures
"""

import pytest
from unittest.mock import Mock, patch
import requests

from config.settings import ApiConfig
from jobs.client import JobsApiError, LinstaJobsClient


def _response(payload=None, status_code=200):
    response = Mock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.json.return_value = payload
    return response


class TestClientInitialization:
    """Tests for LinstaJobsClient initialization."""

    def test_defaults(self):
        client = LinstaJobsClient()

        assert client.base_url == "http://localhost:5000"
        assert client.session.headers["Content-Type"] == "application/json"
        assert "Authorization" not in client.session.headers

    def test_token_and_trailing_slash(self):
        client = LinstaJobsClient(ApiConfig(base_url="https://api.linsta.app/", token="abc123"))

        assert client.base_url == "https://api.linsta.app"
        assert client.session.headers["Authorization"] == "Bearer abc123"


class TestGetJobs:
    """Tests for get_jobs() and search_jobs()."""

    @patch("jobs.client.requests.Session.get")
    def test_get_jobs(self, mock_get, job_payload):
        mock_get.return_value = _response({
            "jobs": [job_payload], "total": 41, "page": 2, "totalPages": 3,
        })

        client = LinstaJobsClient()
        page = client.get_jobs(page=2, limit=20, type="contract", level=None)

        assert [j.id for j in page.jobs] == ["job42"]
        assert page.total == 41
        assert page.page == 2
        assert page.total_pages == 3

        call_args = mock_get.call_args
        assert call_args[0][0] == "http://localhost:5000/api/jobs"
        assert call_args[1]["params"] == {"page": 2, "limit": 20, "type": "contract"}
        assert call_args[1]["timeout"] == 30

    @patch("jobs.client.requests.Session.get")
    def test_get_jobs_skips_malformed_records(self, mock_get, job_payload):
        mock_get.return_value = _response({"jobs": [job_payload, {"id": "x"}]})

        page = LinstaJobsClient().get_jobs()

        assert len(page.jobs) == 1
        assert page.total == 1

    @patch("jobs.client.requests.Session.get")
    def test_search_jobs(self, mock_get, job_payload):
        mock_get.return_value = _response({"jobs": [job_payload], "total": 1})

        page = LinstaJobsClient().search_jobs("  node  ")

        assert len(page.jobs) == 1
        assert mock_get.call_args[0][0].endswith("/api/jobs/search")
        assert mock_get.call_args[1]["params"]["q"] == "node"

    def test_search_requires_query(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            LinstaJobsClient().search_jobs("   ")


class TestGetJob:
    """Tests for get_job()."""

    @patch("jobs.client.requests.Session.get")
    def test_get_job(self, mock_get, job_payload):
        mock_get.return_value = _response({"job": job_payload})

        job = LinstaJobsClient().get_job("job42")

        assert job.title == "Backend Developer (Node.js)"
        assert mock_get.call_args[0][0] == "http://localhost:5000/api/jobs/job42"

    @patch("jobs.client.requests.Session.get")
    def test_not_found(self, mock_get):
        mock_get.return_value = _response({"error": "Job not found"}, status_code=404)

        with pytest.raises(JobsApiError, match="Job not found") as exc_info:
            LinstaJobsClient().get_job("missing")
        assert exc_info.value.status_code == 404

    @patch("jobs.client.requests.Session.get")
    def test_malformed_job(self, mock_get):
        mock_get.return_value = _response({"job": {"id": "1"}})

        with pytest.raises(JobsApiError, match="Malformed job payload"):
            LinstaJobsClient().get_job("1")


class TestErrorHandling:
    """Tests for transport and server errors."""

    @patch("jobs.client.requests.Session.get")
    def test_server_error_without_body(self, mock_get):
        response = _response(status_code=500)
        response.json.side_effect = ValueError("No JSON")
        mock_get.return_value = response

        with pytest.raises(JobsApiError, match="Failed to fetch jobs") as exc_info:
            LinstaJobsClient().get_jobs()
        assert exc_info.value.status_code == 500

    @patch("jobs.client.requests.Session.get")
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.Timeout("Request timed out")

        client = LinstaJobsClient(ApiConfig(timeout=5))
        with pytest.raises(JobsApiError, match="timed out after 5 seconds"):
            client.get_jobs()

    @patch("jobs.client.requests.Session.get")
    def test_connection_error(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(JobsApiError, match="Could not reach jobs API"):
            LinstaJobsClient().get_job("1")

    @patch("jobs.client.requests.Session.get")
    def test_invalid_json_body(self, mock_get):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response

        with pytest.raises(JobsApiError, match="Invalid JSON"):
            LinstaJobsClient().search_jobs("react")

    @patch("jobs.client.requests.Session.get")
    def test_unexpected_shape(self, mock_get):
        mock_get.return_value = _response(["not", "an", "object"])

        with pytest.raises(JobsApiError, match="Unexpected response shape"):
            LinstaJobsClient().get_jobs()
