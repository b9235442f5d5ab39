# tests/test_serialization.py
from decimal import Decimal

import pytest

from src.utils.serialization import decode_json_field, encode_json_field, to_decimal


@pytest.mark.parametrize("value", [
    ["EMA bullish cross", "RSI above 50", "EMA bullish cross"],
    [],
    {"volumeConfirmed": True, "adxStrong": False, "noDivergence": True},
    {},
    [1.0845, 1.0832, 1.08],
    [2050, 2035.5],
    ["Preço acima da EMA 50 ✓"],
])
def test_structured_fields_round_trip(value):
    assert decode_json_field(encode_json_field(value)) == value


def test_reason_order_is_kept():
    reasons = ["b", "a", "c", "a"]

    assert decode_json_field(encode_json_field(reasons)) == ["b", "a", "c", "a"]


def test_none_stays_null():
    assert encode_json_field(None) is None
    assert decode_json_field(None) is None
    assert decode_json_field(None, default=[]) == []
    assert decode_json_field("", default={}) == {}


def test_decode_passes_structured_values_through():
    assert decode_json_field(["a"]) == ["a"]


def test_decimals_encode_as_numbers():
    assert decode_json_field(encode_json_field([Decimal("1.5")])) == [1.5]


@pytest.mark.parametrize("value, expected", [
    (1.085, "1.085"),
    (85.5, "85.5"),
    (0.92, "0.92"),
    (2050, "2050"),
    (Decimal("1.08500"), "1.08500"),
])
def test_to_decimal_keeps_shortest_form(value, expected):
    assert str(to_decimal(value)) == expected


def test_to_decimal_none():
    assert to_decimal(None) is None
