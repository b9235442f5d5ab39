"""
Abstract signal store interface.
All store adapters must implement this interface.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from src.core.signal_query import SignalFilters
from src.core.signal_stats import SignalStats
from src.models.asset_configs import AssetConfig
from src.models.signal_history import SignalHistory
from src.models.signals import TradingSignal

class BaseSignalStore(ABC):
    """
    Abstract signal store.

    Stores that can filter, sort and paginate natively set
    supports_query_pushdown and implement query_signals(); stores that
    can aggregate natively set supports_aggregate_pushdown and implement
    aggregate_signals(). Otherwise callers scan and compute in memory.

    Implementations raise StorageError on backend failures.
    """

    supports_query_pushdown = False
    supports_aggregate_pushdown = False

    @abstractmethod
    def insert(self, values: Dict[str, Any]) -> TradingSignal:
        """Persist a new signal and return it with id and timestamps."""
        pass

    @abstractmethod
    def get_by_id(self, signal_id: int) -> Optional[TradingSignal]:
        """Get a signal by id, or None."""
        pass

    @abstractmethod
    def update(self, signal_id: int, fields: Dict[str, Any]) -> bool:
        """Apply a partial update. Returns False when the id is unknown."""
        pass

    @abstractmethod
    def scan_all(self) -> List[TradingSignal]:
        """Every stored signal, in no particular order."""
        pass

    @abstractmethod
    def upsert_asset_config(self, asset: str, fields: Dict[str, Any]) -> AssetConfig:
        """Insert the asset config if absent, else update it in place."""
        pass

    @abstractmethod
    def list_asset_configs(self) -> List[AssetConfig]:
        """All asset configs ordered by asset symbol."""
        pass

    @abstractmethod
    def insert_history(self, values: Dict[str, Any]) -> SignalHistory:
        """Persist an execution outcome."""
        pass

    @abstractmethod
    def history_for_signal(self, signal_id: int) -> List[SignalHistory]:
        """Execution outcomes recorded for a signal."""
        pass

    def query_signals(self, filters: SignalFilters) -> List[TradingSignal]:
        """Native filtered/sorted/paginated query."""
        raise NotImplementedError(f"{type(self).__name__} has no query pushdown")

    def aggregate_signals(self) -> SignalStats:
        """Native statistics aggregation."""
        raise NotImplementedError(f"{type(self).__name__} has no aggregate pushdown")
