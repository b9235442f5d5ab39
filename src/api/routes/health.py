"""
Health check endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from src.models.base import get_db
from src.utils.serialization import utcnow

router = APIRouter()

@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint.
    Verifies database connectivity.
    """
    try:
        # Test database connection
        db.execute(text("SELECT 1"))

        return {
            "status": "healthy",
            "timestamp": utcnow().isoformat(),
            "database": "connected"
        }
    except SQLAlchemyError as e:
        return {
            "status": "unhealthy",
            "timestamp": utcnow().isoformat(),
            "database": "disconnected",
            "error": str(e)
        }
