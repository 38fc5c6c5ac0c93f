from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from finsaathi.api.deps import get_db
from finsaathi.db.queries.debts import COLUMN_MAP
from finsaathi.main import app


def _debt_row(**overrides) -> tuple:
    """A Debts table row in COLUMN_MAP order."""
    values = dict(
        id="d-card",
        user_id="user1",
        name="Credit Card",
        type="Credit Card",
        current_balance=50_000.0,
        interest_rate=36.0,
        minimum_payment=2_500.0,
        total_amount=None,
    )
    values.update(overrides)
    return tuple(values[field] for field in COLUMN_MAP)


@pytest.fixture
def conn():
    """pyodbc-like connection whose cursor describes the Debts table."""
    connection = MagicMock()
    cursor = connection.cursor.return_value
    cursor.description = [(column, None) for column in COLUMN_MAP.values()]
    cursor.fetchall.return_value = []
    cursor.fetchone.return_value = None
    cursor.rowcount = 1
    return connection


@pytest.fixture
def client(conn):
    app.dependency_overrides[get_db] = lambda: conn
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def debt_row():
    return _debt_row
