"""
MongoDB connection management for the job tracker.

Owns the one process-wide database handle. The handle is opened lazily on
first use and cached for the life of the process; pymongo's own connection
pool handles everything below that.

Initialisation is single-flight: while the first connection attempt is in
progress, every other caller waits on that same attempt instead of opening
a second client. A failed attempt is not cached, so the next call retries
from scratch.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Optional, Tuple

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, PyMongoError

from .config import Config
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Lazily initialised, cached MongoDB database handle.

    Usage:
        connection = DatabaseConnection()
        db = connection.connect()        # opens and pings on first call
        db is connection.connect()       # True - cached handle
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        database: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        """
        Args:
            uri: MongoDB connection string (default: Config.MONGODB_URI,
                read at connect time)
            database: Database name used when the URI names none
                (default: Config.MONGODB_DATABASE)
            timeout_ms: Server selection / connect timeout
                (default: Config.MONGO_TIMEOUT_MS)
        """
        self._uri = uri
        self._database_name = database
        self._timeout_ms = timeout_ms
        self._lock = threading.Lock()
        self._pending: Optional[Future] = None
        self._client: Optional[MongoClient] = None
        self._db: Optional[Database] = None

    @property
    def uri(self) -> str:
        return self._uri if self._uri is not None else Config.MONGODB_URI

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    def connect(self) -> Database:
        """
        Return the cached database handle, opening it on first use.

        Raises:
            ConfigurationError: If no connection string is configured
            PyMongoError: If the connection attempt fails
        """
        if self._db is not None:
            return self._db

        uri = self.uri
        if not uri:
            raise ConfigurationError("Please define the MONGODB_URI environment variable")

        with self._lock:
            if self._db is not None:
                return self._db
            pending = self._pending
            owner = pending is None
            if owner:
                pending = Future()
                self._pending = pending

        if not owner:
            # Another caller is already connecting; share its outcome
            return pending.result()

        try:
            client, db = self._open(uri)
        except BaseException as e:
            with self._lock:
                if self._pending is pending:
                    self._pending = None
            pending.set_exception(e)
            raise

        with self._lock:
            # reset() while connecting discards this attempt
            superseded = self._pending is not pending
            if not superseded:
                self._client = client
                self._db = db
                self._pending = None

        if superseded:
            client.close()
            error = ConnectionFailure("MongoDB connection was reset while connecting")
            pending.set_exception(error)
            raise error

        pending.set_result(db)
        return db

    def _open(self, uri: str) -> Tuple[MongoClient, Database]:
        timeout_ms = self._timeout_ms if self._timeout_ms is not None else Config.MONGO_TIMEOUT_MS
        client = MongoClient(
            uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
        try:
            client.admin.command("ping")
        except PyMongoError:
            client.close()
            logger.error("MongoDB connection failed", exc_info=True)
            raise

        database_name = self._database_name or Config.MONGODB_DATABASE
        db = client.get_default_database(default=database_name)
        logger.info(f"Connected to MongoDB: {db.name}")
        return client, db

    def ping(self) -> bool:
        """Check the server is reachable. Opens the connection if needed."""
        try:
            db = self.connect()
            db.client.admin.command("ping")
            return True
        except (ConfigurationError, PyMongoError) as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def reset(self) -> None:
        """
        Close and forget the cached handle.

        Used for testing or connection recovery.
        """
        with self._lock:
            if self._client is not None:
                self._client.close()
            self._client = None
            self._db = None
            self._pending = None
        logger.info("MongoDB connection reset")


# Singleton connection instance
_connection: Optional[DatabaseConnection] = None
_connection_lock = threading.Lock()


def get_connection() -> DatabaseConnection:
    """Get the process-wide database connection."""
    global _connection

    with _connection_lock:
        if _connection is None:
            _connection = DatabaseConnection()
        return _connection


def reset_connection() -> None:
    """Reset the connection singleton."""
    global _connection

    with _connection_lock:
        if _connection is not None:
            _connection.reset()
        _connection = None
