from fastapi import APIRouter

from finsaathi.config import settings
from finsaathi.db.connection import db_pool

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    db_status = db_pool.test_connection()
    narrative_status = "enabled" if settings.GEMINI_API_KEY else "disabled"
    return {
        "status": "ok",
        "database": db_status,
        "narrative": {"status": narrative_status, "model": settings.GEMINI_MODEL},
    }
