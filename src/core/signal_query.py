"""
Signal query engine.

Filters a signal collection by exact asset/direction/status, orders it
newest first and applies offset/limit pagination. Works on any objects
exposing the TradingSignal attributes, so stores without native query
support can scan and delegate here.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional
from src.core.exceptions import ValidationError
from src.utils.constants import DEFAULT_QUERY_LIMIT

FILTER_FIELDS = ('asset', 'direction', 'status')


@dataclass
class SignalFilters:
    """List request: equality filters plus pagination."""
    asset: Optional[str] = None
    direction: Optional[str] = None
    status: Optional[str] = None
    limit: Optional[int] = DEFAULT_QUERY_LIMIT
    offset: Optional[int] = 0

    def __post_init__(self):
        # None or 0 fall back to the defaults
        if not self.limit:
            self.limit = DEFAULT_QUERY_LIMIT
        if not self.offset:
            self.offset = 0

        errors = []
        if self.limit < 0:
            errors.append({"field": "limit", "message": "must be >= 0"})
        if self.offset < 0:
            errors.append({"field": "offset", "message": "must be >= 0"})
        if errors:
            raise ValidationError(errors)

    def active_filters(self) -> dict:
        """Filter fields that were supplied."""
        return {
            field: getattr(self, field)
            for field in FILTER_FIELDS
            if getattr(self, field) is not None
        }


def matches(signal, filters: SignalFilters) -> bool:
    """True when the signal satisfies every supplied filter."""
    return all(
        getattr(signal, field) == value
        for field, value in filters.active_filters().items()
    )


def recency_key(signal):
    """Sort key for newest-first ordering, id breaking created_at ties."""
    return (signal.created_at or datetime.min, signal.id or 0)


def query_signals(signals: Iterable, filters: Optional[SignalFilters] = None) -> List:
    """
    Filter, sort and paginate signals.

    Args:
        signals: Full signal collection
        filters: Equality filters and pagination (defaults apply when None)

    Returns:
        Matching signals, newest first, sliced by offset/limit
    """
    if filters is None:
        filters = SignalFilters()

    matched = [signal for signal in signals if matches(signal, filters)]
    matched.sort(key=recency_key, reverse=True)

    start = filters.offset
    return matched[start:start + filters.limit]
