"""
Job Service

The five job record operations behind the HTTP API: list, create, get,
update and delete. Each operation validates its input, performs exactly one
repository call and returns serialized records.

Error handling:
    - Input problems raise BadRequestError / ValidationError
    - A missing record raises NotFoundError
    - Everything the store throws (including a missing MONGODB_URI or a
      failed connection attempt) becomes InternalError with a
      per-operation message; the cause is logged with its traceback

Usage:
    service = JobService(get_job_repository())
    job = service.create_job({"companyName": "Acme", "role": "Engineer",
                              "dateApplied": "2024-01-10"})
    service.update_job(job["_id"], {"status": "Interviewing"})
"""

from typing import Any, Callable, Dict, List, Optional, TypeVar

from src.common.errors import BadRequestError, InternalError, JobTrackerError, NotFoundError
from src.common.job_schema import parse_job_create, parse_job_update, serialize_job
from src.common.logger import get_logger
from src.common.repositories.base import JobRepositoryInterface

logger = get_logger(__name__)

T = TypeVar("T")


class JobService:
    """CRUD operations over job records."""

    def __init__(self, repository: JobRepositoryInterface):
        """
        Args:
            repository: Job record storage
        """
        self.repository = repository

    def _run(self, operation: str, failure_message: str, action: Callable[[], T], job_id: Optional[str] = None) -> T:
        log = logger.bind(operation=operation, job_id=job_id)
        try:
            return action()
        except JobTrackerError as e:
            if isinstance(e, NotFoundError):
                log.info("Job not found")
                raise
            if e.status_code < 500:
                raise
            log.error(f"{failure_message}: {e.message}")
            raise InternalError(failure_message) from e
        except Exception as e:
            log.exception(f"{failure_message}: {e}")
            raise InternalError(failure_message) from e

    @staticmethod
    def _require_id(job_id: Optional[str]) -> str:
        if job_id is None or not str(job_id).strip():
            raise BadRequestError("No id provided")
        return str(job_id).strip()

    def list_jobs(self) -> List[Dict[str, Any]]:
        """Return all job records in store-native order."""
        def action():
            return [serialize_job(doc) for doc in self.repository.find_all()]

        return self._run("list", "Failed to fetch jobs", action)

    def create_job(self, payload: Any) -> Dict[str, Any]:
        """
        Create a job record.

        Args:
            payload: companyName, role, dateApplied and optional status

        Returns:
            The created record including its assigned id
        """
        job = parse_job_create(payload)

        def action():
            stored = self.repository.insert(job.to_document())
            logger.bind(operation="create", job_id=str(stored["_id"])).info(
                f"Created job {job.company_name} / {job.role} ({job.status.value})"
            )
            return serialize_job(stored)

        return self._run("create", "Failed to create job", action)

    def get_job(self, job_id: Optional[str]) -> Dict[str, Any]:
        """Return one job record or raise NotFoundError."""
        job_id = self._require_id(job_id)

        def action():
            doc = self.repository.find_by_id(job_id)
            if doc is None:
                raise NotFoundError(job_id=job_id)
            return serialize_job(doc)

        return self._run("get", "Failed to fetch job", action, job_id=job_id)

    def update_job(self, job_id: Optional[str], payload: Any) -> Dict[str, Any]:
        """
        Apply a partial or full update.

        Fields present in `payload` replace the stored ones, absent fields
        are left unchanged. An empty payload only refreshes updatedAt.
        """
        job_id = self._require_id(job_id)
        update = parse_job_update(payload)

        def action():
            doc = self.repository.update_by_id(job_id, update.to_update())
            if doc is None:
                raise NotFoundError(job_id=job_id)
            logger.bind(operation="update", job_id=job_id).info(
                f"Updated fields: {', '.join(sorted(update.to_update())) or 'none'}"
            )
            return serialize_job(doc)

        return self._run("update", "Failed to update job", action, job_id=job_id)

    def delete_job(self, job_id: Optional[str]) -> Dict[str, Any]:
        """
        Delete a job record.

        Returns:
            {"message": "Job deleted", "job": <deleted record>}
        """
        job_id = self._require_id(job_id)

        def action():
            doc = self.repository.delete_by_id(job_id)
            if doc is None:
                raise NotFoundError(job_id=job_id)
            logger.bind(operation="delete", job_id=job_id).info("Deleted job")
            return {"message": "Job deleted", "job": serialize_job(doc)}

        return self._run("delete", "Failed to delete job", action, job_id=job_id)
