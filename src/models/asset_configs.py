"""Monitored asset configuration database model."""
from sqlalchemy import Column, String, Numeric, TIMESTAMP, Integer, Enum
from sqlalchemy.sql import func
from src.models.base import Base
from src.utils.constants import MONITORED_FLAGS
from src.utils.serialization import utcnow

class AssetConfig(Base):
    """
    One row per monitored asset, keyed by symbol.
    """
    __tablename__ = 'asset_configs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    asset = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100))
    is_monitored = Column(Enum(*MONITORED_FLAGS, name='asset_monitored'), nullable=False, default='yes')
    category = Column(String(20))  # forex, commodity, stock
    last_signal_at = Column(TIMESTAMP)
    total_signals = Column(Integer, nullable=False, default=0)
    win_rate = Column(Numeric(5, 2), default=0)

    created_at = Column(TIMESTAMP, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)
