"""
SQLAlchemy-backed signal store.
Pushes filtering, ordering, pagination and aggregation down to the database.
"""
from contextlib import contextmanager
from typing import Any, Dict, List, Optional
from sqlalchemy import case, desc, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from src.core.exceptions import StorageError
from src.core.signal_query import SignalFilters
from src.core.signal_stats import SignalStats, round_confidence
from src.models.asset_configs import AssetConfig
from src.models.signal_history import SignalHistory
from src.models.signals import TradingSignal
from src.storage.base_store import BaseSignalStore
from src.utils.logging import get_logger
from src.utils.metrics import record_storage_error
from src.utils.serialization import utcnow

logger = get_logger(__name__)

class SqlSignalStore(BaseSignalStore):
    """
    Signal store over a SQLAlchemy session.

    The session is owned by the caller (one per request); this store
    commits after each write and rolls back on failure.
    """

    supports_query_pushdown = True
    supports_aggregate_pushdown = True

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str, write: bool = False):
        try:
            yield
            if write:
                self.db.commit()
        except SQLAlchemyError as e:
            if write:
                self.db.rollback()
            record_storage_error(operation)
            logger.error("Signal store failure", operation=operation, error=str(e))
            raise StorageError(f"{operation} failed") from e

    def insert(self, values: Dict[str, Any]) -> TradingSignal:
        signal = TradingSignal(**values)
        with self._guard("insert", write=True):
            self.db.add(signal)
        with self._guard("insert"):
            self.db.refresh(signal)
        return signal

    def get_by_id(self, signal_id: int) -> Optional[TradingSignal]:
        with self._guard("get_by_id"):
            return self.db.query(TradingSignal).filter(TradingSignal.id == signal_id).first()

    def update(self, signal_id: int, fields: Dict[str, Any]) -> bool:
        values = {**fields, 'updated_at': utcnow()}
        with self._guard("update", write=True):
            matched = self.db.query(TradingSignal).filter(
                TradingSignal.id == signal_id
            ).update(values, synchronize_session=False)
        return matched > 0

    def scan_all(self) -> List[TradingSignal]:
        with self._guard("scan_all"):
            return self.db.query(TradingSignal).all()

    def query_signals(self, filters: SignalFilters) -> List[TradingSignal]:
        with self._guard("query_signals"):
            query = self.db.query(TradingSignal)

            for field, value in filters.active_filters().items():
                query = query.filter(getattr(TradingSignal, field) == value)

            return query.order_by(
                desc(TradingSignal.created_at), desc(TradingSignal.id)
            ).offset(filters.offset).limit(filters.limit).all()

    def aggregate_signals(self) -> SignalStats:
        with self._guard("aggregate_signals"):
            total, calls, puts, confidence_sum = self.db.query(
                func.count(TradingSignal.id),
                func.sum(case((TradingSignal.direction == 'call', 1), else_=0)),
                func.sum(case((TradingSignal.direction == 'put', 1), else_=0)),
                func.sum(TradingSignal.confidence),
            ).one()

            by_asset = self.db.query(
                TradingSignal.asset, func.count(TradingSignal.id)
            ).group_by(TradingSignal.asset).all()

        return SignalStats(
            total_signals=total or 0,
            call_signals=int(calls or 0),
            put_signals=int(puts or 0),
            avg_confidence=round_confidence(confidence_sum or 0, total or 0),
            by_asset=dict(sorted((asset, count) for asset, count in by_asset)),
        )

    def upsert_asset_config(self, asset: str, fields: Dict[str, Any]) -> AssetConfig:
        """
        Single-statement upsert keyed on the unique asset column.
        """
        now = utcnow()
        update_set = {**fields, 'updated_at': now}

        with self._guard("upsert_asset_config", write=True):
            dialect = self.db.get_bind().dialect.name

            if dialect == 'postgresql':
                from sqlalchemy.dialects.postgresql import insert
            elif dialect == 'sqlite':
                from sqlalchemy.dialects.sqlite import insert
            elif dialect in ('mysql', 'mariadb'):
                from sqlalchemy.dialects.mysql import insert
            else:
                insert = None

            if insert is None:
                logger.warning("No native upsert for dialect, using read-then-write", dialect=dialect)
                config = self.db.query(AssetConfig).filter(AssetConfig.asset == asset).first()
                if config is None:
                    self.db.add(AssetConfig(asset=asset, **fields))
                else:
                    for name, value in update_set.items():
                        setattr(config, name, value)
            else:
                stmt = insert(AssetConfig).values(asset=asset, **fields)
                if dialect in ('mysql', 'mariadb'):
                    stmt = stmt.on_duplicate_key_update(**update_set)
                else:
                    stmt = stmt.on_conflict_do_update(index_elements=['asset'], set_=update_set)
                self.db.execute(stmt)

        with self._guard("upsert_asset_config"):
            return self.db.query(AssetConfig).filter(AssetConfig.asset == asset).one()

    def list_asset_configs(self) -> List[AssetConfig]:
        with self._guard("list_asset_configs"):
            return self.db.query(AssetConfig).order_by(AssetConfig.asset).all()

    def insert_history(self, values: Dict[str, Any]) -> SignalHistory:
        entry = SignalHistory(**values)
        with self._guard("insert_history", write=True):
            self.db.add(entry)
        with self._guard("insert_history"):
            self.db.refresh(entry)
        return entry

    def history_for_signal(self, signal_id: int) -> List[SignalHistory]:
        with self._guard("history_for_signal"):
            return self.db.query(SignalHistory).filter(
                SignalHistory.signal_id == signal_id
            ).order_by(SignalHistory.id).all()
