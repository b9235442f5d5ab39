"""
Signal ingestion: validation, normalization and the high-confidence
notification message.

Numbers arrive as JSON floats and are stored as Decimal built from their
shortest repr, so 1.085 is stored as Decimal('1.085') rather than the
binary expansion. Lists and mappings are stored as JSON text.
"""
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple
from pydantic import Field, StrictBool, StrictStr, field_validator
from src.core.validation import InputModel, FiniteNumber, validate
from src.utils.constants import (
    DEFAULT_RESULT,
    DEFAULT_STATUS,
    DEFAULT_TIMEFRAME,
    SIGNAL_DECIMAL_FIELDS,
    SIGNAL_JSON_FIELDS,
)
from src.utils.serialization import encode_json_field, format_half_up, to_decimal, utcnow


class SignalSubmission(InputModel):
    """A signal as posted by the robot."""
    asset: Annotated[StrictStr, Field(min_length=1, max_length=50)]
    direction: Literal['call', 'put']
    entry_price: FiniteNumber
    confidence: FiniteNumber
    strength: FiniteNumber
    reasons: List[StrictStr]
    filters: Dict[StrictStr, StrictBool]
    timeframe: Annotated[StrictStr, Field(min_length=1, max_length=10)] = DEFAULT_TIMEFRAME

    # Technical snapshot
    ema_9: Optional[FiniteNumber] = None
    ema_20: Optional[FiniteNumber] = None
    ema_50: Optional[FiniteNumber] = None
    rsi: Optional[FiniteNumber] = None
    adx: Optional[FiniteNumber] = None
    bb_upper: Optional[FiniteNumber] = None
    bb_middle: Optional[FiniteNumber] = None
    bb_lower: Optional[FiniteNumber] = None
    volume_ratio: Optional[FiniteNumber] = None
    candle_pattern: Optional[Annotated[StrictStr, Field(max_length=50)]] = None
    pattern_strength: Optional[FiniteNumber] = None
    support_levels: Optional[List[FiniteNumber]] = None
    resistance_levels: Optional[List[FiniteNumber]] = None

    @field_validator('asset')
    @classmethod
    def asset_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("asset must not be blank")
        return value


def validate_submission(payload: Any) -> SignalSubmission:
    """Validate a raw submission, raising ValidationError on bad fields."""
    return validate(SignalSubmission, payload)


def normalize_submission(submission: SignalSubmission) -> Dict[str, Any]:
    """
    Map a validated submission onto TradingSignal column values.
    """
    record = {
        'asset': submission.asset,
        'direction': submission.direction,
        'timeframe': submission.timeframe,
        'candle_pattern': submission.candle_pattern,
        'status': DEFAULT_STATUS,
        'result': DEFAULT_RESULT,
    }
    for name in SIGNAL_JSON_FIELDS:
        record[name] = encode_json_field(getattr(submission, name))
    for name in SIGNAL_DECIMAL_FIELDS:
        record[name] = to_decimal(getattr(submission, name))
    return record


def is_high_confidence(submission: SignalSubmission, threshold: float) -> bool:
    """Strictly above the threshold; a confidence equal to it does not count."""
    return submission.confidence > threshold


def build_notification(submission: SignalSubmission, created_at: Optional[datetime]) -> Tuple[str, str]:
    """Title and body of the high-confidence alert."""
    title = f"🎯 High-confidence signal: {submission.asset}"
    timestamp = (created_at or utcnow()).strftime('%Y-%m-%d %H:%M:%S UTC')
    content = "\n".join([
        f"Direction: {submission.direction.upper()}",
        f"Confidence: {format_half_up(submission.confidence, 1)}%",
        f"Strength: {format_half_up(to_decimal(submission.strength) * 100)}%",
        f"Price: ${format_half_up(submission.entry_price, 5)}",
        f"Time: {timestamp}",
    ])
    return title, content
