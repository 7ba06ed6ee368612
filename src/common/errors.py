"""
Error taxonomy for the job tracker.

Every failure the store adapter, service or HTTP surface reports is one of
these. Each error knows the HTTP status it maps to so the API boundary can
turn it into a JSON body without a lookup table.
"""

from typing import Any, Dict, List, Optional


class JobTrackerError(Exception):
    """Base class for all job tracker errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the `{error}` body returned by the API."""
        return {"error": self.message}


class ConfigurationError(JobTrackerError):
    """Raised when a required setting (e.g. MONGODB_URI) is missing."""

    status_code = 500


class ValidationError(JobTrackerError):
    """Raised when a job record field is missing or has the wrong shape."""

    status_code = 400

    def __init__(self, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.details:
            body["details"] = list(self.details)
        return body


class BadRequestError(JobTrackerError):
    """Raised when a required request parameter or body is missing."""

    status_code = 400


class NotFoundError(JobTrackerError):
    """Raised when no job record matches the requested id."""

    status_code = 404

    def __init__(self, message: str = "Job not found", job_id: Optional[str] = None):
        super().__init__(message)
        self.job_id = job_id


class InternalError(JobTrackerError):
    """Store or transport failure. Catch-all for everything unexpected."""

    status_code = 500
