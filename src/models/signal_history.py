"""Signal execution history database model."""
from sqlalchemy import Column, Numeric, TIMESTAMP, Integer, Text
from sqlalchemy.sql import func
from src.models.base import Base
from src.utils.serialization import utcnow

class SignalHistory(Base):
    """
    Execution outcome recorded for a signal.
    signal_id is a plain reference; rows survive their signal.
    """
    __tablename__ = 'signal_history'

    id = Column(Integer, primary_key=True, autoincrement=True)
    signal_id = Column(Integer, nullable=False, index=True)

    # Execution
    executed_at = Column(TIMESTAMP)
    amount = Column(Numeric(10, 2))

    # Result
    entry_price = Column(Numeric(10, 5))
    exit_price = Column(Numeric(10, 5))
    profit = Column(Numeric(10, 2))
    profit_percent = Column(Numeric(5, 2))

    duration = Column(Integer)  # seconds
    notes = Column(Text)

    created_at = Column(TIMESTAMP, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP, nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)
