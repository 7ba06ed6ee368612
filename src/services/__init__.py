"""
Services module for job record operations.

JobService is the single seam between the HTTP surface and storage.
"""

from src.services.job_service import JobService

__all__ = [
    "JobService",
]
