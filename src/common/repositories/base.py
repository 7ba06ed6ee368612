"""
Repository Interface Definitions

Defines the abstract interface for job record storage.
This enables swapping implementations (MongoDB, in-memory for tests)
without changing the service layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class JobRepositoryInterface(ABC):
    """
    Abstract interface for the jobs collection.

    Implementations:
    - MongoJobRepository: MongoDB via the cached DatabaseConnection

    All methods follow fail-fast semantics: store errors propagate to the
    caller. A missing record is reported as None, never as an exception.
    Documents use the stored layout (camelCase keys, `_id` primary key).
    """

    @abstractmethod
    def find_all(self) -> List[Dict[str, Any]]:
        """
        Return every job document in store-native order.

        Returns:
            List of documents (possibly empty)
        """
        pass

    @abstractmethod
    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a new job document.

        The store assigns `_id`; `createdAt` and `updatedAt` are stamped here.

        Args:
            document: Validated fields without `_id` or timestamps

        Returns:
            The stored document including `_id` and timestamps
        """
        pass

    @abstractmethod
    def find_by_id(self, job_id: str) -> Optional[Dict[str, Any]]:
        """
        Find one job document.

        Args:
            job_id: Opaque identifier as returned by insert()

        Returns:
            Document dict if found, None otherwise
        """
        pass

    @abstractmethod
    def update_by_id(self, job_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Replace the supplied fields of one job document.

        Fields not in `fields` are left unchanged; `updatedAt` is always
        refreshed, so an empty `fields` still touches the record.

        Returns:
            The document after the update, or None if no record matched
        """
        pass

    @abstractmethod
    def delete_by_id(self, job_id: str) -> Optional[Dict[str, Any]]:
        """
        Delete one job document.

        Returns:
            The deleted document, or None if no record matched
        """
        pass
