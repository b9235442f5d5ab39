"""
FastAPI dependencies wiring the signal service to a request-scoped store.
"""
from functools import lru_cache
from fastapi import Depends
from sqlalchemy.orm import Session
from config.settings import get_settings
from src.core.signal_service import SignalService
from src.models.base import get_db
from src.notifications.base_notifier import BaseNotifier
from src.notifications.factory import build_notifier
from src.storage.base_store import BaseSignalStore
from src.storage.sql_store import SqlSignalStore

@lru_cache()
def get_notifier() -> BaseNotifier:
    """Process-wide notifier built from settings."""
    return build_notifier(get_settings())

def get_store(db: Session = Depends(get_db)) -> BaseSignalStore:
    return SqlSignalStore(db)

def get_signal_service(
    store: BaseSignalStore = Depends(get_store),
    notifier: BaseNotifier = Depends(get_notifier)
) -> SignalService:
    settings = get_settings()
    return SignalService(
        store,
        notifier,
        owner_id=settings.OWNER_ID or None,
        confidence_threshold=settings.HIGH_CONFIDENCE_THRESHOLD
    )
