# tests/conftest.py
from datetime import datetime, timedelta
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.api.dependencies import get_notifier
from src.api.main import app
from src.core.signal_service import SignalService
from src.models.base import Base, get_db
from src.models.asset_configs import AssetConfig  # noqa: F401 (table registration)
from src.models.signal_history import SignalHistory  # noqa: F401
from src.models.signals import TradingSignal
from src.notifications.base_notifier import BaseNotifier
from src.storage.memory_store import MemorySignalStore
from src.storage.sql_store import SqlSignalStore

BASE_TIME = datetime(2025, 1, 15, 12, 0, 0)


@pytest.fixture
def sample_submission():
    """The EURUSD_otc submission from the robot."""
    return {
        "asset": "EURUSD_otc",
        "direction": "call",
        "entry_price": 1.085,
        "confidence": 85.5,
        "strength": 0.92,
        "reasons": ["EMA bullish cross"],
        "filters": {"volumeConfirmed": True},
    }


@pytest.fixture
def make_signal():
    """Factory for detached TradingSignal records."""
    counter = {"id": 0}

    def _make(asset="EURUSD_otc", direction="call", status="pending", confidence="75.00",
              minutes=0, signal_id=None, **extra):
        counter["id"] += 1
        return TradingSignal(
            id=signal_id if signal_id is not None else counter["id"],
            asset=asset,
            direction=direction,
            entry_price=Decimal("1.08500"),
            confidence=Decimal(str(confidence)),
            strength=Decimal("0.80"),
            timeframe="1M",
            status=status,
            result="pending",
            created_at=BASE_TIME + timedelta(minutes=minutes),
            updated_at=BASE_TIME + timedelta(minutes=minutes),
            **extra,
        )

    return _make


@pytest.fixture
def notifier():
    mock = MagicMock(spec=BaseNotifier)
    mock.notify.return_value = True
    mock.accepted_outcome = "sent"
    return mock


@pytest.fixture
def memory_store():
    return MemorySignalStore()


@pytest.fixture
def service(memory_store, notifier):
    return SignalService(memory_store, notifier, owner_id="owner-1", confidence_threshold=70)


@pytest.fixture
def sql_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(sql_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=sql_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def sql_store(db_session):
    return SqlSignalStore(db_session)


@pytest.fixture
def client(session_factory, notifier):
    """API client over an in-memory SQLite database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()
