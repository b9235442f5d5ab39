# tests/test_signal_export.py
from decimal import Decimal

import pytest

from src.core.signal_export import signals_to_csv


def test_header_only_for_empty_list():
    assert signals_to_csv([]) == "Timestamp,Asset,Direction,Price,Confidence,Strength,Status,Result\n"


def test_row_formatting(make_signal):
    signal = make_signal(asset="Gold_otc", direction="put", confidence="85.5", minutes=30)
    signal.entry_price = Decimal("2050.1")
    signal.strength = Decimal("0.92")
    signal.status = "closed"
    signal.result = "win"

    lines = signals_to_csv([signal]).splitlines()

    assert lines[1] == "15/01/2025 12:30:00,Gold_otc,PUT,2050.10000,85.50%,92%,closed,win"


def test_rows_keep_list_order(make_signal):
    signals = [make_signal(asset="B", minutes=1), make_signal(asset="A", minutes=2)]

    lines = signals_to_csv(signals).splitlines()

    assert [line.split(",")[1] for line in lines[1:]] == ["B", "A"]


@pytest.mark.parametrize("price, confidence, strength, expected", [
    (Decimal("1.085005"), Decimal("85.125"), Decimal("0.125"), "1.08501,85.13%,13%"),
    (Decimal("1.08500"), Decimal("70.00"), Decimal("0.845"), "1.08500,70.00%,85%"),
    (Decimal("2050.1"), Decimal("99.995"), Decimal("0.005"), "2050.10000,100.00%,1%"),
])
def test_numbers_round_halves_up(make_signal, price, confidence, strength, expected):
    signal = make_signal(confidence=confidence)
    signal.entry_price = price
    signal.strength = strength

    row = signals_to_csv([signal]).splitlines()[1]

    assert f",CALL,{expected},pending,pending" in row
