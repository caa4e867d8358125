# tests/conftest.py
import sys
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path

# ---------------------------------------------------------
# Ensure project root is on PYTHONPATH BEFORE app imports
# ---------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# ---------------------------------------------------------
# Now safe to import project modules
# ---------------------------------------------------------
import pytest
from unittest.mock import MagicMock

from core.types import StorageType
from executors.base import BaseRepository
from executors.memory import MemoryRepository
from models.schema import SchemaCatalog
from services.collection import Collection


FRIEND_SCHEMA = {
    "id": StorageType.INTEGER,
    "name": StorageType.STRING,
    "gender": StorageType.STRING,
    "age": StorageType.INTEGER,
    "address": StorageType.STRING,
    "weight": StorageType.FLOAT,
    "income": StorageType.DECIMAL,
    "birthday": StorageType.DATE,
    "wake_up": StorageType.TIME,
    "created_at": StorageType.DATETIME,
}


@pytest.fixture
def catalog():
    return SchemaCatalog(FRIEND_SCHEMA)


@pytest.fixture
def friend_rows():
    return [
        {
            "id": 1, "name": "Ann", "gender": "female", "age": 30,
            "address": "1 Main St", "weight": 60.5, "income": Decimal("5000.00"),
            "birthday": date(1994, 5, 1), "wake_up": time(7, 0),
            "created_at": datetime(2024, 1, 1, 9, 0),
        },
        {
            "id": 2, "name": "Bob", "gender": "male", "age": 20,
            "address": None, "weight": 80.0, "income": Decimal("3000.00"),
            "birthday": date(2004, 2, 10), "wake_up": time(6, 30),
            "created_at": datetime(2024, 1, 2, 9, 0),
        },
        {
            "id": 3, "name": "Cid", "gender": "male", "age": 40,
            "address": "3 Oak Ave", "weight": 75.0, "income": Decimal("7000.00"),
            "birthday": date(1984, 8, 20), "wake_up": time(8, 15),
            "created_at": datetime(2024, 1, 3, 9, 0),
        },
        {
            "id": 4, "name": "Dee", "gender": "female", "age": 18,
            "address": None, "weight": 55.0, "income": Decimal("1000.00"),
            "birthday": date(2006, 11, 3), "wake_up": time(5, 45),
            "created_at": datetime(2024, 1, 4, 9, 0),
        },
    ]


@pytest.fixture
def repository(friend_rows):
    return MemoryRepository(friend_rows)


@pytest.fixture
def friends(catalog, repository):
    """Unscoped collection over the in-memory friend rows."""
    return Collection(catalog, repository)


@pytest.fixture
def spy_repository():
    """
    Repository double that records calls and never touches data.
    Returns a single (42,) row unless reconfigured.
    """
    repo = MagicMock(spec=BaseRepository)
    repo.execute.return_value = [(42,)]
    return repo


@pytest.fixture
def spied_friends(catalog, spy_repository):
    return Collection(catalog, spy_repository)
