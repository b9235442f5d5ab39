"""
Signal service.

Entry point for the API: ingests robot submissions, serves filtered
lists and statistics, and records outcomes and asset configuration.
"""
from typing import Any, List, Optional
from src.core.exceptions import SignalNotFoundError, ValidationError
from src.core.signal_ingestion import (
    build_notification,
    is_high_confidence,
    normalize_submission,
    validate_submission,
)
from src.core.signal_query import SignalFilters, query_signals
from src.core.signal_stats import SignalStats, aggregate_signals
from src.core.validation import (
    AssetConfigInput,
    SignalHistoryEntry,
    SignalUpdate,
    provided_fields,
    validate,
)
from src.models.asset_configs import AssetConfig
from src.models.signal_history import SignalHistory
from src.models.signals import TradingSignal
from src.notifications.base_notifier import BaseNotifier
from src.storage.base_store import BaseSignalStore
from src.utils.constants import HIGH_CONFIDENCE_THRESHOLD
from src.utils.logging import get_logger
from src.utils.metrics import record_notification, record_signal_created, record_signal_rejected
from src.utils.serialization import to_decimal

logger = get_logger(__name__)

HISTORY_DECIMAL_FIELDS = ('amount', 'entry_price', 'exit_price', 'profit', 'profit_percent')


class SignalService:
    """
    Signal ingestion, querying and aggregation over a store.

    Args:
        store: Signal store
        notifier: Channel for high-confidence alerts
        owner_id: Recipient of the alerts
        confidence_threshold: Alerts fire strictly above this confidence
    """

    def __init__(
        self,
        store: BaseSignalStore,
        notifier: BaseNotifier,
        owner_id: Optional[str] = None,
        confidence_threshold: float = HIGH_CONFIDENCE_THRESHOLD
    ):
        self.store = store
        self.notifier = notifier
        self.owner_id = owner_id
        self.confidence_threshold = confidence_threshold

    # ========== INGESTION ==========

    def submit(self, payload: Any) -> TradingSignal:
        """
        Validate, persist and, above the threshold, announce a signal.

        Raises:
            ValidationError: before anything is written
            StorageError: the single insert failed (not retried)
        """
        try:
            submission = validate_submission(payload)
        except ValidationError as e:
            record_signal_rejected()
            logger.warning("Signal rejected", fields=e.fields)
            raise

        signal = self.store.insert(normalize_submission(submission))
        record_signal_created(signal.asset, signal.direction)
        logger.info(
            "Signal stored",
            signal_id=signal.id,
            asset=signal.asset,
            direction=signal.direction,
            confidence=submission.confidence
        )

        if is_high_confidence(submission, self.confidence_threshold):
            title, content = build_notification(submission, signal.created_at)
            self._notify(title, content, signal.id)

        return signal

    def _notify(self, title: str, content: str, signal_id: int):
        # The signal is already stored; delivery problems only get logged
        try:
            self.notifier.notify(title, content, recipient=self.owner_id)
        except Exception as e:
            record_notification("failed")
            logger.error("Notification failed", signal_id=signal_id, error=str(e))
            return
        record_notification(self.notifier.accepted_outcome)

    # ========== QUERIES ==========

    def list_signals(self, filters: Optional[SignalFilters] = None) -> List[TradingSignal]:
        """Filtered, newest-first page of signals."""
        if filters is None:
            filters = SignalFilters()

        if self.store.supports_query_pushdown:
            return self.store.query_signals(filters)
        return query_signals(self.store.scan_all(), filters)

    def get_signal(self, signal_id: int) -> TradingSignal:
        signal = self.store.get_by_id(signal_id)
        if signal is None:
            raise SignalNotFoundError(signal_id)
        return signal

    def stats(self) -> SignalStats:
        """Statistics over every stored signal."""
        if self.store.supports_aggregate_pushdown:
            return self.store.aggregate_signals()
        return aggregate_signals(self.store.scan_all())

    # ========== UPDATES ==========

    def update_signal(self, signal_id: int, payload: Any) -> TradingSignal:
        """
        Partial update of status/result/timeframe. Transitions are not
        checked; the external updater is trusted.
        """
        fields = provided_fields(validate(SignalUpdate, payload))
        fields = {name: value for name, value in fields.items() if value is not None}
        if not fields:
            raise ValidationError([{"field": "body", "message": "no updatable fields supplied"}])

        if not self.store.update(signal_id, fields):
            raise SignalNotFoundError(signal_id)

        logger.info("Signal updated", signal_id=signal_id, fields=sorted(fields))
        return self.get_signal(signal_id)

    # ========== HISTORY ==========

    def record_history(self, signal_id: int, payload: Any) -> SignalHistory:
        """Record an execution outcome; the signal itself is left untouched."""
        entry = validate(SignalHistoryEntry, payload)
        self.get_signal(signal_id)

        values = provided_fields(entry)
        for name in HISTORY_DECIMAL_FIELDS:
            if name in values:
                values[name] = to_decimal(values[name])
        values['signal_id'] = signal_id

        history = self.store.insert_history(values)
        logger.info("Signal history recorded", signal_id=signal_id, history_id=history.id)
        return history

    def get_history(self, signal_id: int) -> List[SignalHistory]:
        self.get_signal(signal_id)
        return self.store.history_for_signal(signal_id)

    # ========== ASSETS ==========

    def upsert_asset(self, asset: str, payload: Any) -> AssetConfig:
        if not asset or not asset.strip():
            raise ValidationError([{"field": "asset", "message": "asset is required"}])

        fields = provided_fields(validate(AssetConfigInput, payload))
        config = self.store.upsert_asset_config(asset, fields)
        logger.info("Asset config upserted", asset=asset, fields=sorted(fields))
        return config

    def list_assets(self) -> List[AssetConfig]:
        return self.store.list_asset_configs()
