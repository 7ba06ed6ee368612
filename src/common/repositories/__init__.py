"""
Repository Pattern for Job Records

Provides an abstraction layer over MongoDB so the service layer can be
exercised against an in-memory store in tests.

Public API:
- get_job_repository(): Factory to get job repository instance
- JobRepositoryInterface: Abstract interface for the jobs collection
- MongoJobRepository: MongoDB implementation

Usage:
    from src.common.repositories import get_job_repository

    repo = get_job_repository()
    job = repo.find_by_id(job_id)
"""

from .base import JobRepositoryInterface
from .config import (
    get_job_repository,
    reset_repository,
)
from .mongo_repository import MongoJobRepository

__all__ = [
    "get_job_repository",
    "reset_repository",
    "JobRepositoryInterface",
    "MongoJobRepository",
]
