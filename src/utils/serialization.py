"""JSON text encoding for structured signal fields."""
import json
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

def decimal_default(obj):
    """Convert Decimal to float for JSON serialization."""
    if isinstance(obj, Decimal):
        return float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

def encode_json_field(value: Any) -> Optional[str]:
    """
    Encode a list or mapping to JSON text for storage.
    None stays None so optional columns remain NULL.
    """
    if value is None:
        return None
    return json.dumps(value, default=decimal_default)

def decode_json_field(text: Optional[str], default: Any = None) -> Any:
    """Decode JSON text written by encode_json_field."""
    if text is None or text == "":
        return default
    if not isinstance(text, str):
        # Already structured (e.g. passed straight through a response model)
        return text
    return json.loads(text)

def to_decimal(value) -> Optional[Decimal]:
    """
    Convert a number to Decimal through its shortest string form,
    keeping the precision the caller sent (1.085 -> Decimal('1.085')).
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))

def format_half_up(value, places: int = 0) -> str:
    """
    Fixed-point text with halves rounded away from zero (85.25 -> '85.3').
    Python's own float and Decimal formatting round halves to even.
    """
    quantum = Decimal(1).scaleb(-places)
    return str(to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))

def utcnow() -> datetime:
    """Naive UTC timestamp, matching TIMESTAMP columns without time zone."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
