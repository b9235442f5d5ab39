"""Trading signal database model."""
from sqlalchemy import Column, String, Numeric, TIMESTAMP, Integer, Text, Enum
from sqlalchemy.sql import func
from src.models.base import Base
from src.utils.constants import DIRECTIONS, SIGNAL_STATUSES, SIGNAL_RESULTS
from src.utils.serialization import utcnow

class TradingSignal(Base):
    """
    Signals posted by the external robot, with their technical snapshot.
    """
    __tablename__ = 'trading_signals'

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Signal
    asset = Column(String(50), nullable=False, index=True)
    direction = Column(Enum(*DIRECTIONS, name='signal_direction'), nullable=False, index=True)
    entry_price = Column(Numeric(10, 5), nullable=False)
    confidence = Column(Numeric(5, 2), nullable=False)  # 0-100
    strength = Column(Numeric(3, 2), nullable=False)  # 0-1
    timeframe = Column(String(10), nullable=False, default='1M')

    # Technical indicators
    ema_9 = Column(Numeric(10, 5))
    ema_20 = Column(Numeric(10, 5))
    ema_50 = Column(Numeric(10, 5))
    rsi = Column(Numeric(5, 2))
    adx = Column(Numeric(5, 2))
    bb_upper = Column(Numeric(10, 5))
    bb_middle = Column(Numeric(10, 5))
    bb_lower = Column(Numeric(10, 5))
    volume_ratio = Column(Numeric(5, 2))

    # Candle pattern
    candle_pattern = Column(String(50))
    pattern_strength = Column(Numeric(3, 2))

    # JSON text
    reasons = Column(Text)
    filters = Column(Text)
    support_levels = Column(Text)
    resistance_levels = Column(Text)

    # State
    status = Column(Enum(*SIGNAL_STATUSES, name='signal_status'), nullable=False, default='pending', index=True)
    result = Column(Enum(*SIGNAL_RESULTS, name='signal_result'), nullable=False, default='pending')

    # Audit
    created_at = Column(TIMESTAMP, nullable=False, default=utcnow, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    def __repr__(self):
        return f"<TradingSignal id={self.id} {self.asset} {self.direction} confidence={self.confidence}>"
