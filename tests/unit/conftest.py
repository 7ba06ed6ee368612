"""
Fixtures for unit tests.

Config values are class attributes read once at import, so tests change
them with monkeypatch.setattr rather than through the environment.
"""

from unittest.mock import MagicMock

import pytest

from src.common.config import Config
from src.common.database import DatabaseConnection


@pytest.fixture
def unconfigured(monkeypatch):
    """Simulate a process started without MONGODB_URI."""
    monkeypatch.setattr(Config, "MONGODB_URI", "")
    return Config


@pytest.fixture
def production(monkeypatch):
    monkeypatch.setattr(Config, "ENVIRONMENT", "production")
    return Config


@pytest.fixture
def mock_collection():
    """MagicMock collection behind a DatabaseConnection stub."""
    collection = MagicMock()
    collection.find.return_value = []
    collection.find_one.return_value = None
    collection.find_one_and_update.return_value = None
    collection.find_one_and_delete.return_value = None
    return collection


@pytest.fixture
def mock_connection(mock_collection):
    connection = MagicMock(spec=DatabaseConnection)
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    connection.connect.return_value = db
    return connection
