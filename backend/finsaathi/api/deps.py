import logging
from collections.abc import Generator

from fastapi import HTTPException, Path

from finsaathi.db.connection import db_pool

logger = logging.getLogger(__name__)


def get_db() -> Generator:
    """FastAPI dependency that yields a debt-store connection and closes it after use."""
    try:
        conn = db_pool.get_connection()
    except RuntimeError as e:
        logger.error("Debt storage unavailable: %s", e)
        raise HTTPException(status_code=503, detail="Debt storage is unavailable")
    try:
        yield conn
    finally:
        conn.close()


def get_user_id(
    user_id: str = Path(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_-]+$"),
) -> str:
    """Owner of the debts addressed by the route; records are always scoped to it."""
    return user_id
