from __future__ import annotations

import pytest

from cdex.core.errors import ArithmeticOverflow
from cdex.integration.units import format_units, parse_units


@pytest.mark.parametrize(
    "text,decimals,expected",
    [
        ("1", 18, 10**18),
        ("1.5", 18, 15 * 10**17),
        ("0.000000000000000001", 18, 1),
        ("", 18, 0),
        ("  2  ", 0, 2),
        ("12.34", 2, 1234),
        ("123456789012345678901234567890.123456789012345678", 18, 123456789012345678901234567890123456789012345678),
    ],
)
def test_parse_units(text: str, decimals: int, expected: int) -> None:
    assert parse_units(text, decimals) == expected


@pytest.mark.parametrize("text", ["abc", "-1", "NaN", "Infinity", "1.0000000000000000001"])
def test_parse_units_rejects(text: str) -> None:
    with pytest.raises(ValueError):
        parse_units(text, 18)


def test_parse_units_rejects_floats_and_overflow() -> None:
    with pytest.raises(TypeError):
        parse_units(1.5)
    with pytest.raises(ArithmeticOverflow):
        parse_units("1" + "0" * 80, 0)


@pytest.mark.parametrize("text,decimals", [("1e999999", 18), ("1e60", 18), ("1e78", 0)])
def test_parse_units_huge_exponent_overflows(text: str, decimals: int) -> None:
    with pytest.raises(ArithmeticOverflow):
        parse_units(text, decimals)


@pytest.mark.parametrize("text", ["1e-999999999", "1e-19", "5e-1000000"])
def test_parse_units_tiny_amounts_are_rejected_not_zeroed(text: str) -> None:
    with pytest.raises(ValueError, match="fractional digits"):
        parse_units(text, 18)


def test_parse_units_exponent_forms() -> None:
    assert parse_units("1e-18", 18) == 1
    assert parse_units("2.5e3", 0) == 2500
    assert parse_units("0e-999999999", 18) == 0


@pytest.mark.parametrize(
    "amount,decimals,expected",
    [
        (10**18, 18, "1.0"),
        (15 * 10**17, 18, "1.5"),
        (1, 18, "0.000000000000000001"),
        (0, 18, "0.0"),
        (1234, 2, "12.34"),
        (7, 0, "7"),
    ],
)
def test_format_units(amount: int, decimals: int, expected: str) -> None:
    assert format_units(amount, decimals) == expected
