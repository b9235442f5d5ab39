"""CSV export of signal lists."""
from typing import Iterable
import pandas as pd
from src.utils.constants import EXPORT_COLUMNS, EXPORT_TIMESTAMP_FORMAT
from src.utils.serialization import format_half_up, to_decimal


def _row(signal) -> list:
    created_at = signal.created_at.strftime(EXPORT_TIMESTAMP_FORMAT) if signal.created_at else ''
    return [
        created_at,
        signal.asset,
        signal.direction.upper(),
        format_half_up(signal.entry_price, 5),
        f"{format_half_up(signal.confidence, 2)}%",
        f"{format_half_up(to_decimal(signal.strength) * 100)}%",
        signal.status,
        signal.result,
    ]


def signals_to_csv(signals: Iterable) -> str:
    """
    Render signals as CSV in list order with a header row:
    timestamp, asset, direction, price, confidence, strength, status, result.
    """
    frame = pd.DataFrame([_row(signal) for signal in signals], columns=EXPORT_COLUMNS)
    return frame.to_csv(index=False, lineterminator="\n")
