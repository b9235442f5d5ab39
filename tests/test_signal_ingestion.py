# tests/test_signal_ingestion.py
import json
import math
from datetime import datetime
from decimal import Decimal

import pytest

from src.core.exceptions import ValidationError
from src.utils.serialization import utcnow
from src.core.signal_ingestion import (
    build_notification,
    is_high_confidence,
    normalize_submission,
    validate_submission,
)


def test_valid_submission_gets_defaults(sample_submission):
    submission = validate_submission(sample_submission)

    assert submission.asset == "EURUSD_otc"
    assert submission.timeframe == "1M"
    assert submission.ema_9 is None
    assert submission.support_levels is None


def test_camel_case_keys_are_accepted():
    submission = validate_submission({
        "asset": "Gold_otc",
        "direction": "put",
        "entryPrice": 2050.0,
        "confidence": 75,
        "strength": 0.85,
        "reasons": [],
        "filters": {},
        "ema9": 2049.5,
        "bbUpper": 2060.1,
        "volumeRatio": 1.4,
        "candlePattern": "bearish_engulfing",
        "patternStrength": 0.7,
        "supportLevels": [2040.0, 2035.5],
        "resistanceLevels": [2060.0],
    })

    assert submission.entry_price == 2050.0
    assert submission.ema_9 == 2049.5
    assert submission.bb_upper == 2060.1
    assert submission.candle_pattern == "bearish_engulfing"
    assert submission.support_levels == [2040.0, 2035.5]


def test_missing_fields_are_all_listed():
    with pytest.raises(ValidationError) as exc_info:
        validate_submission({"asset": "EURUSD_otc"})

    assert set(exc_info.value.fields) == {
        "direction", "entry_price", "confidence", "strength", "reasons", "filters",
    }


@pytest.mark.parametrize("field, value", [
    ("asset", ""),
    ("asset", "   "),
    ("asset", 42),
    ("direction", "CALL"),
    ("direction", "buy"),
    ("entry_price", "1.085"),
    ("entry_price", math.inf),
    ("confidence", math.nan),
    ("confidence", True),
    ("strength", None),
    ("reasons", "EMA bullish cross"),
    ("reasons", ["ok", 3]),
    ("filters", ["volumeConfirmed"]),
    ("filters", {"volumeConfirmed": "yes"}),
    ("rsi", "55"),
    ("support_levels", [1.08, "1.07"]),
    ("resistance_levels", 1.09),
    ("candle_pattern", 5),
])
def test_bad_field_is_rejected(sample_submission, field, value):
    payload = {**sample_submission, field: value}

    with pytest.raises(ValidationError) as exc_info:
        validate_submission(payload)

    assert exc_info.value.fields == [field]


def test_non_object_payload_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_submission(["EURUSD_otc"])

    assert exc_info.value.fields == ["body"]


def test_empty_reasons_and_filters_are_valid(sample_submission):
    submission = validate_submission({**sample_submission, "reasons": [], "filters": {}})

    assert submission.reasons == []
    assert submission.filters == {}


def test_normalize_keeps_input_precision(sample_submission):
    record = normalize_submission(validate_submission({**sample_submission, "rsi": 61.37}))

    assert record["entry_price"] == Decimal("1.085")
    assert str(record["entry_price"]) == "1.085"
    assert record["confidence"] == Decimal("85.5")
    assert record["strength"] == Decimal("0.92")
    assert record["rsi"] == Decimal("61.37")
    assert record["ema_9"] is None


def test_normalize_encodes_structured_fields(sample_submission):
    payload = {
        **sample_submission,
        "reasons": ["RSI above 50", "RSI above 50", "EMA bullish cross"],
        "support_levels": [1.08, 1.075],
    }

    record = normalize_submission(validate_submission(payload))

    assert json.loads(record["reasons"]) == ["RSI above 50", "RSI above 50", "EMA bullish cross"]
    assert json.loads(record["filters"]) == {"volumeConfirmed": True}
    assert json.loads(record["support_levels"]) == [1.08, 1.075]
    assert record["resistance_levels"] is None


def test_normalize_sets_initial_state(sample_submission):
    record = normalize_submission(validate_submission(sample_submission))

    assert record["status"] == "pending"
    assert record["result"] == "pending"
    assert record["timeframe"] == "1M"


@pytest.mark.parametrize("confidence, expected", [
    (70.0, False),
    (70, False),
    (69.99, False),
    (70.01, True),
    (100, True),
])
def test_threshold_is_strict(sample_submission, confidence, expected):
    submission = validate_submission({**sample_submission, "confidence": confidence})

    assert is_high_confidence(submission, 70) is expected


def test_notification_message(sample_submission):
    submission = validate_submission(sample_submission)

    title, content = build_notification(submission, datetime(2025, 1, 15, 14, 30, 5))

    assert "EURUSD_otc" in title
    assert "CALL" in content
    assert "85.5%" in content
    assert "92%" in content
    assert "1.08500" in content
    assert "2025-01-15 14:30:05" in content


@pytest.mark.parametrize("confidence, strength, expected_confidence, expected_strength", [
    (85.25, 0.125, "Confidence: 85.3%", "Strength: 13%"),
    (70.05, 0.845, "Confidence: 70.1%", "Strength: 85%"),
    (99.95, 0.005, "Confidence: 100.0%", "Strength: 1%"),
    (85.5, 0.92, "Confidence: 85.5%", "Strength: 92%"),
])
def test_notification_rounds_halves_up(sample_submission, confidence, strength,
                                       expected_confidence, expected_strength):
    submission = validate_submission({**sample_submission, "confidence": confidence, "strength": strength})

    _, content = build_notification(submission, datetime(2025, 1, 15, 14, 30, 5))

    lines = content.splitlines()
    assert expected_confidence in lines
    assert expected_strength in lines


def test_notification_without_timestamp_uses_now(sample_submission):
    _, content = build_notification(validate_submission(sample_submission), None)

    assert f"Time: {utcnow():%Y-%m-%d}" in content
