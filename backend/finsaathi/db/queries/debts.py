from fastapi import HTTPException

from finsaathi.db.connection import transaction
from finsaathi.models.debt import Debt, DebtCreate, DebtUpdate, new_debt_id

# Map Pydantic field names to SQL column names.
COLUMN_MAP = {
    "id": "DebtID",
    "user_id": "UserID",
    "name": "Name",
    "type": "DebtType",
    "current_balance": "CurrentBalance",
    "interest_rate": "InterestRate",
    "minimum_payment": "MinimumPayment",
    "total_amount": "TotalAmount",
}

_SQL_COLUMNS = ", ".join(COLUMN_MAP.values())
_REVERSE_MAP = {v: k for k, v in COLUMN_MAP.items()}


def _rows_to_debts(cursor, rows) -> list[Debt]:
    columns = [_REVERSE_MAP.get(desc[0], desc[0]) for desc in cursor.description]
    return [Debt(**dict(zip(columns, row))) for row in rows]


def _not_found(debt_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Debt {debt_id} not found")


def list_debts(conn, user_id: str) -> list[Debt]:
    """Fetch all debts belonging to a user."""
    query = f"""
        SELECT {_SQL_COLUMNS}
        FROM Debts
        WHERE UserID = ?
        ORDER BY Name
    """
    cursor = conn.cursor()
    cursor.execute(query, user_id)
    return _rows_to_debts(cursor, cursor.fetchall())


def get_debt(conn, user_id: str, debt_id: str) -> Debt:
    """Fetch one debt, scoped to its owner."""
    query = f"""
        SELECT {_SQL_COLUMNS}
        FROM Debts
        WHERE UserID = ? AND DebtID = ?
    """
    cursor = conn.cursor()
    cursor.execute(query, user_id, debt_id)
    row = cursor.fetchone()
    if not row:
        raise _not_found(debt_id)
    return _rows_to_debts(cursor, [row])[0]


def create_debt(conn, user_id: str, payload: DebtCreate) -> Debt:
    """Insert a new debt and return it with its assigned id."""
    debt = Debt(id=new_debt_id(), user_id=user_id, **payload.model_dump())
    record = debt.model_dump(mode="json")
    placeholders = ", ".join("?" for _ in COLUMN_MAP)
    query = f"INSERT INTO Debts ({_SQL_COLUMNS}) VALUES ({placeholders})"

    with transaction(conn) as cursor:
        cursor.execute(query, *(record[field] for field in COLUMN_MAP))
    return debt


def update_debt(conn, user_id: str, debt_id: str, payload: DebtUpdate) -> Debt:
    """Apply a partial update; id and owner are immutable."""
    changes = payload.model_dump(mode="json", exclude_unset=True)
    # Only the original loan amount may be cleared
    changes = {k: v for k, v in changes.items() if v is not None or k == "total_amount"}
    if not changes:
        return get_debt(conn, user_id, debt_id)

    assignments = ", ".join(f"{COLUMN_MAP[field]} = ?" for field in changes)
    query = f"UPDATE Debts SET {assignments} WHERE UserID = ? AND DebtID = ?"

    with transaction(conn) as cursor:
        cursor.execute(query, *changes.values(), user_id, debt_id)
        if cursor.rowcount == 0:
            raise _not_found(debt_id)
    return get_debt(conn, user_id, debt_id)


def delete_debt(conn, user_id: str, debt_id: str) -> None:
    query = "DELETE FROM Debts WHERE UserID = ? AND DebtID = ?"
    with transaction(conn) as cursor:
        cursor.execute(query, user_id, debt_id)
        if cursor.rowcount == 0:
            raise _not_found(debt_id)
