"""
MongoDB Job Repository

Stores job records in one collection of the database handed out by
DatabaseConnection. Every call goes through connect(), so the first
repository call is what opens the connection.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection

from ..database import DatabaseConnection
from .base import JobRepositoryInterface

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    # Millisecond precision, which is what BSON dates keep
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def _id_filter(job_id: str) -> Optional[Dict[str, Any]]:
    """Filter for one document, or None when the id cannot match anything."""
    if not ObjectId.is_valid(job_id):
        return None
    return {"_id": ObjectId(job_id)}


class MongoJobRepository(JobRepositoryInterface):
    """
    MongoDB-backed job repository.

    Connection Management:
    - Uses the shared DatabaseConnection, opened lazily on first call
    - PyMongo handles the connection pool internally

    Error Handling:
    - Fail-fast: all pymongo errors propagate to caller
    """

    def __init__(self, connection: DatabaseConnection, collection: str = "jobs"):
        """
        Args:
            connection: Cached database connection
            collection: Collection name (default: "jobs")
        """
        self._connection = connection
        self._collection_name = collection

    def _get_collection(self) -> Collection:
        return self._connection.connect()[self._collection_name]

    def find_all(self) -> List[Dict[str, Any]]:
        collection = self._get_collection()
        return list(collection.find({}))

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        collection = self._get_collection()
        now = _utc_now()
        stored = {**document, "createdAt": now, "updatedAt": now}
        result = collection.insert_one(stored)
        stored["_id"] = result.inserted_id
        logger.debug(f"Inserted job {result.inserted_id} into {self._collection_name}")
        return stored

    def find_by_id(self, job_id: str) -> Optional[Dict[str, Any]]:
        query = _id_filter(job_id)
        if query is None:
            return None
        collection = self._get_collection()
        return collection.find_one(query)

    def update_by_id(self, job_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        query = _id_filter(job_id)
        if query is None:
            return None
        collection = self._get_collection()
        return collection.find_one_and_update(
            query,
            {"$set": {**fields, "updatedAt": _utc_now()}},
            return_document=ReturnDocument.AFTER,
        )

    def delete_by_id(self, job_id: str) -> Optional[Dict[str, Any]]:
        query = _id_filter(job_id)
        if query is None:
            return None
        collection = self._get_collection()
        return collection.find_one_and_delete(query)
