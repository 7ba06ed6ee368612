"""
HTTP client for the job tracker API.

Thin wrapper over requests. No timeouts and no retries: a request either
settles or raises, and the caller decides what to tell the user.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class JobsApiError(Exception):
    """Raised for any non-2xx API response."""

    def __init__(self, message: str, status_code: int):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: requests.Response) -> str:
    """The `{error}` field of an error body, or a generic message."""
    fallback = f"Request failed: {response.status_code}"
    try:
        data = response.json()
    except ValueError:
        return fallback
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return fallback


class JobsClient:
    """Client for the /api/jobs endpoints."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        """
        Args:
            base_url: API root, e.g. "http://localhost:5000/api"
            session: Optional session to reuse connections
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        response = self.session.request(method, url, json=json)

        if not response.ok:
            raise JobsApiError(_error_message(response), response.status_code)

        return response.json()

    def list_jobs(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/jobs")

    def create_job(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/jobs", json=fields)

    def get_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/jobs/{job_id}")

    def update_job(self, job_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/jobs/{job_id}", json=fields)

    def delete_job(self, job_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/jobs/{job_id}")
