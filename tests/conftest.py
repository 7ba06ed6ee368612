"""
Shared fixtures for all tests.

Provides an in-memory job repository so the service, API and end-to-end
tests run without MongoDB, and an autouse guard that stops any test from
opening a real MongoClient.
"""

import os
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock, patch

import pytest
from bson import ObjectId

# Set test environment BEFORE any imports so Config picks it up
os.environ["ENVIRONMENT"] = "development"
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/job_tracker_test")

from src.common.database import reset_connection
from src.common.repositories import JobRepositoryInterface, reset_repository
from src.services.job_service import JobService


class InMemoryJobRepository(JobRepositoryInterface):
    """Dict-backed repository with the same contract as MongoJobRepository."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self._ticks = count()
        self._epoch = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _now(self) -> datetime:
        # Strictly increasing so updatedAt refreshes are observable
        return self._epoch + timedelta(seconds=next(self._ticks))

    def find_all(self) -> List[Dict[str, Any]]:
        return [dict(doc) for doc in self.documents.values()]

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        now = self._now()
        stored = {**document, "_id": ObjectId(), "createdAt": now, "updatedAt": now}
        self.documents[str(stored["_id"])] = stored
        return dict(stored)

    def find_by_id(self, job_id: str) -> Optional[Dict[str, Any]]:
        doc = self.documents.get(job_id)
        return dict(doc) if doc is not None else None

    def update_by_id(self, job_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self.documents.get(job_id)
        if doc is None:
            return None
        doc.update(fields)
        doc["updatedAt"] = self._now()
        return dict(doc)

    def delete_by_id(self, job_id: str) -> Optional[Dict[str, Any]]:
        return self.documents.pop(job_id, None)


@pytest.fixture(autouse=True)
def mock_mongo_client():
    """
    Prevent MongoDB connection attempts in all tests.

    Yields the patched MongoClient class; its instances answer ping.
    """
    with patch("src.common.database.MongoClient") as mock_client:
        mock_instance = MagicMock()
        mock_instance.admin.command.return_value = {"ok": 1}
        mock_client.return_value = mock_instance
        yield mock_client


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop cached connection and repository between tests."""
    yield
    reset_repository()
    reset_connection()


@pytest.fixture
def repository() -> InMemoryJobRepository:
    return InMemoryJobRepository()


@pytest.fixture
def service(repository) -> JobService:
    return JobService(repository)


@pytest.fixture
def acme_fields() -> Dict[str, Any]:
    return {
        "companyName": "Acme",
        "role": "Engineer",
        "dateApplied": "2024-01-10",
        "status": "Applied",
    }


class ServiceBackedJobsClient:
    """
    Stand-in for frontend.board.JobsClient that calls JobService directly.

    Service errors surface as JobsApiError with the API's status code.
    Queue a failure for the next call of a method with fail_next().
    """

    def __init__(self, service: JobService):
        self.service = service
        self.calls: List[tuple] = []
        self._failures: Dict[str, List[Exception]] = {}

    def fail_next(self, method: str, error: Exception) -> None:
        self._failures.setdefault(method, []).append(error)

    def _call(self, method: str, action, *args):
        from frontend.board.client import JobsApiError
        from src.common.errors import JobTrackerError

        self.calls.append((method, *args))
        queued = self._failures.get(method)
        if queued:
            raise queued.pop(0)
        try:
            return action(*args)
        except JobTrackerError as e:
            raise JobsApiError(e.message, e.status_code) from e

    def list_jobs(self):
        return self._call("list_jobs", self.service.list_jobs)

    def create_job(self, fields):
        return self._call("create_job", self.service.create_job, fields)

    def get_job(self, job_id):
        return self._call("get_job", self.service.get_job, job_id)

    def update_job(self, job_id, fields):
        return self._call("update_job", self.service.update_job, job_id, fields)

    def delete_job(self, job_id):
        return self._call("delete_job", self.service.delete_job, job_id)


@pytest.fixture
def jobs_client(service) -> ServiceBackedJobsClient:
    return ServiceBackedJobsClient(service)
