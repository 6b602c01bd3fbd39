import pytest

from zonealloc.numfmt import (
    format_hex,
    hexa_itoa,
    hexa_ltoa,
    itoa,
    ltoa,
    ltoa_base,
    ultoa,
)


@pytest.mark.parametrize("n", [0, 1, 15, 16, 255, 4096, 2**32 - 1])
def test_hexa_itoa_round_trip(n):
    assert int(hexa_itoa(n, False), 16) == n
    assert int(hexa_itoa(n, True), 16) == n


def test_hexa_itoa_case():
    lower = hexa_itoa(0xABCDEF, False)
    upper = hexa_itoa(0xABCDEF, True)
    assert lower == lower.lower()
    assert upper == upper.upper()
    assert lower.upper() == upper


def test_hexa_itoa_wraps_to_32_bits():
    assert hexa_itoa(-1, False) == hexa_itoa(2**32 - 1, False)
    assert int(hexa_itoa(2**32 + 5, False), 16) == 5


@pytest.mark.parametrize("n", [0, 9, 10, 2**40, 2**64 - 1])
def test_hexa_ltoa_round_trip(n):
    assert int(hexa_ltoa(n, True), 16) == n


def test_hexa_ltoa_wraps_to_64_bits():
    assert hexa_ltoa(-1, False) == "f" * 16


def test_hexa_zero_is_single_digit():
    assert hexa_itoa(0, True) == "0"
    assert hexa_ltoa(0, False) == "0"


def test_itoa_min_int():
    assert itoa(-2147483648) == "-2147483648"


@pytest.mark.parametrize("n", [0, 7, -7, 123456, -2147483647, 2147483647])
def test_itoa_round_trip(n):
    assert int(itoa(n)) == n


def test_itoa_out_of_range():
    with pytest.raises(OverflowError):
        itoa(2**31)
    with pytest.raises(OverflowError):
        itoa(-(2**31) - 1)


@pytest.mark.parametrize("n", [0, -2147483648, 2**40, -(2**62), 2**63 - 1])
def test_ltoa_round_trip(n):
    assert int(ltoa(n)) == n


def test_ltoa_out_of_range():
    with pytest.raises(OverflowError):
        ltoa(2**63)


@pytest.mark.parametrize("n", [0, 1, 1024, 2**64 - 1])
def test_ultoa_round_trip(n):
    assert int(ultoa(n)) == n


def test_ultoa_rejects_negative():
    with pytest.raises(OverflowError):
        ultoa(-1)


@pytest.mark.parametrize("base", [2, 8, 10, 16, 36])
@pytest.mark.parametrize("value", [0, 1, 35, -35, 123456789, -987654321])
def test_ltoa_base_round_trip(value, base):
    text = ltoa_base(value, base)
    assert int(text, base) == value
    assert text == text.lower()


def test_ltoa_base_negative_has_sign():
    assert ltoa_base(-255, 16).startswith("-")
    assert ltoa_base(-255, 16)[1:] == ltoa_base(255, 16)


def test_ltoa_base_invalid_base():
    with pytest.raises(ValueError):
        ltoa_base(10, 1)
    with pytest.raises(ValueError):
        ltoa_base(10, 37)


def test_format_hex_pinned():
    assert format_hex(255) == "0xFF"


@pytest.mark.parametrize("n", [0, 1, 0xDEADBEEF, 2**64 - 1])
def test_format_hex_round_trip(n):
    text = format_hex(n)
    assert text.startswith("0x")
    assert int(text, 16) == n
    assert text[2:] == text[2:].upper()


def test_format_hex_matches_hexa_ltoa():
    assert format_hex(0x1A2B) == "0x" + hexa_ltoa(0x1A2B, True)