"""
In-process signal store.
Keeps records in dictionaries; no query pushdown, so reads go through
the in-memory query and aggregation engines.
"""
import threading
from itertools import count
from typing import Any, Dict, List, Optional
from src.models.asset_configs import AssetConfig
from src.models.signal_history import SignalHistory
from src.models.signals import TradingSignal
from src.storage.base_store import BaseSignalStore
from src.utils.constants import DEFAULT_RESULT, DEFAULT_STATUS, DEFAULT_TIMEFRAME
from src.utils.logging import get_logger
from src.utils.serialization import utcnow

logger = get_logger(__name__)

ASSET_DEFAULTS = {
    'is_monitored': 'yes',
    'total_signals': 0,
    'win_rate': 0,
}

class MemorySignalStore(BaseSignalStore):
    """
    Signal store backed by process memory.

    Features:
    - Sequential ids per table
    - Timestamps and column defaults applied on insert
    - Lock-guarded upsert
    """

    def __init__(self):
        self.signals: Dict[int, TradingSignal] = {}
        self.history: Dict[int, SignalHistory] = {}
        self.assets: Dict[str, AssetConfig] = {}
        self._signal_ids = count(1)
        self._history_ids = count(1)
        self._asset_ids = count(1)
        self._lock = threading.Lock()

    def insert(self, values: Dict[str, Any]) -> TradingSignal:
        now = utcnow()
        signal = TradingSignal(**values)
        with self._lock:
            signal.id = next(self._signal_ids)
            signal.timeframe = signal.timeframe or DEFAULT_TIMEFRAME
            signal.status = signal.status or DEFAULT_STATUS
            signal.result = signal.result or DEFAULT_RESULT
            signal.created_at = signal.created_at or now
            signal.updated_at = now
            self.signals[signal.id] = signal
        logger.debug("Signal stored in memory", signal_id=signal.id)
        return signal

    def get_by_id(self, signal_id: int) -> Optional[TradingSignal]:
        return self.signals.get(signal_id)

    def update(self, signal_id: int, fields: Dict[str, Any]) -> bool:
        with self._lock:
            signal = self.signals.get(signal_id)
            if signal is None:
                return False
            for name, value in fields.items():
                setattr(signal, name, value)
            signal.updated_at = utcnow()
        return True

    def scan_all(self) -> List[TradingSignal]:
        return list(self.signals.values())

    def upsert_asset_config(self, asset: str, fields: Dict[str, Any]) -> AssetConfig:
        now = utcnow()
        with self._lock:
            config = self.assets.get(asset)
            if config is None:
                config = AssetConfig(asset=asset, **{**ASSET_DEFAULTS, **fields})
                config.id = next(self._asset_ids)
                config.created_at = now
                self.assets[asset] = config
            else:
                for name, value in fields.items():
                    setattr(config, name, value)
            config.updated_at = now
        return config

    def list_asset_configs(self) -> List[AssetConfig]:
        return [self.assets[asset] for asset in sorted(self.assets)]

    def insert_history(self, values: Dict[str, Any]) -> SignalHistory:
        now = utcnow()
        entry = SignalHistory(**values)
        with self._lock:
            entry.id = next(self._history_ids)
            entry.created_at = now
            entry.updated_at = now
            self.history[entry.id] = entry
        return entry

    def history_for_signal(self, signal_id: int) -> List[SignalHistory]:
        return [entry for entry in self.history.values() if entry.signal_id == signal_id]
