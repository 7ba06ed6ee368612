"""
Repository factory.

Hands out the process-wide job repository, bound to the shared database
connection and the collection named by JOBS_COLLECTION.
"""

import logging
from typing import Optional

from ..config import Config
from ..database import get_connection
from .base import JobRepositoryInterface

logger = logging.getLogger(__name__)

# Singleton repository instance
_repository_instance: Optional[JobRepositoryInterface] = None


def get_job_repository() -> JobRepositoryInterface:
    """
    Get the job repository instance.

    Uses singleton pattern so every request shares the cached connection.
    The collection name is read when the repository is first built.
    """
    global _repository_instance

    if _repository_instance is None:
        from .mongo_repository import MongoJobRepository
        _repository_instance = MongoJobRepository(
            connection=get_connection(),
            collection=Config.JOBS_COLLECTION,
        )
        logger.info(f"Initialized MongoDB job repository ({Config.JOBS_COLLECTION})")

    return _repository_instance


def reset_repository() -> None:
    """Reset the repository singleton."""
    global _repository_instance

    _repository_instance = None
    logger.info("Repository singleton reset")
