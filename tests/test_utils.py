import pytest

from search_helper._utils import (
    bool_or,
    is_integer,
    is_number,
    non_negative_int_or,
    parse_bool,
    parse_decimal,
    parse_non_negative_int,
    str_or_none,
)


@pytest.mark.parametrize(
    "value, expected",
    [("666", 666), ("0", 0), ("007", 7), ("-1", None), ("+1", None), (" 1", None), ("1_000", None), ("６", None), ("", None)],
)
def test_parse_non_negative_int(value, expected):
    assert parse_non_negative_int(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12.34", 12.34),
        ("-12", -12.0),
        (".5", 0.5),
        ("1.", 1.0),
        ("1e3", 1000.0),
        ("123.456XYZ", None),
        ("1e999", None),
        ("inf", None),
        ("nan", None),
        ("", None),
        (" 1", None),
    ],
)
def test_parse_decimal(value, expected):
    assert parse_decimal(value) == expected


@pytest.mark.parametrize("value, expected", [("true", True), ("false", False), ("True", None), ("1", None)])
def test_parse_bool(value, expected):
    assert parse_bool(value) is expected


@pytest.mark.parametrize("value, expected", [(1, True), (True, False), (1.0, False), ("1", False)])
def test_is_integer(value, expected):
    assert is_integer(value) is expected


@pytest.mark.parametrize(
    "value, expected", [(1, True), (1.5, True), (True, False), (float("inf"), False), ("1", False), (None, False)]
)
def test_is_number(value, expected):
    assert is_number(value) is expected


@pytest.mark.parametrize("value, expected", [(5, 5), (0, 0), (-5, 3), ("5", 3), (False, 3), (None, 3)])
def test_non_negative_int_or(value, expected):
    assert non_negative_int_or(value, 3) == expected


def test_bool_or():
    assert bool_or(True) is True
    assert bool_or("true") is False
    assert bool_or(None, True) is True


def test_str_or_none():
    assert str_or_none("abc") == "abc"
    assert str_or_none(1) is None
