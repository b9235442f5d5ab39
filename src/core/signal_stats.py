"""
Signal statistics aggregation.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable
from src.utils.serialization import to_decimal

TWO_PLACES = Decimal('0.01')


@dataclass
class SignalStats:
    """Summary of the whole signal collection."""
    total_signals: int = 0
    call_signals: int = 0
    put_signals: int = 0
    avg_confidence: float = 0.0
    by_asset: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_signals": self.total_signals,
            "call_signals": self.call_signals,
            "put_signals": self.put_signals,
            "avg_confidence": self.avg_confidence,
            "by_asset": dict(self.by_asset),
        }


def round_confidence(total: Decimal, count: int) -> float:
    """Mean confidence rounded half-up to two places; 0 for no signals."""
    if not count:
        return 0.0
    mean = to_decimal(total) / count
    return float(mean.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def aggregate_signals(signals: Iterable) -> SignalStats:
    """
    Compute totals, direction counts, mean confidence and per-asset counts
    in a single pass over the signals.
    """
    total = 0
    calls = 0
    puts = 0
    confidence_sum = Decimal(0)
    by_asset: Dict[str, int] = {}

    for signal in signals:
        total += 1
        if signal.direction == 'call':
            calls += 1
        elif signal.direction == 'put':
            puts += 1
        confidence_sum += to_decimal(signal.confidence)
        by_asset[signal.asset] = by_asset.get(signal.asset, 0) + 1

    return SignalStats(
        total_signals=total,
        call_signals=calls,
        put_signals=puts,
        avg_confidence=round_confidence(confidence_sum, total),
        by_asset=dict(sorted(by_asset.items())),
    )
