"""Integer-to-text conversions in decimal, hexadecimal and arbitrary bases."""

from __future__ import annotations

import string

_DIGITS = string.digits + string.ascii_lowercase

_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1
_UINT32_MASK = 2**32 - 1
_UINT64_MASK = 2**64 - 1


def _check_range(n: int, low: int, high: int, kind: str) -> None:
    if not low <= n <= high:
        raise OverflowError(f"{n} does not fit in {kind}")


def _to_base(n: int, base: int) -> str:
    """Digits of a non-negative ``n`` in ``base`` using 0-9a-z."""
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, base)
        digits.append(_DIGITS[rem])
    return "".join(reversed(digits))


def _hex(n: int, up: bool) -> str:
    text = _to_base(n, 16)
    return text.upper() if up else text


def hexa_itoa(n: int, up: bool) -> str:
    """Hexadecimal text of ``n`` taken as an unsigned 32-bit value."""
    return _hex(n & _UINT32_MASK, up)


def hexa_ltoa(n: int, up: bool) -> str:
    """Hexadecimal text of ``n`` taken as an unsigned 64-bit value."""
    return _hex(n & _UINT64_MASK, up)


def itoa(n: int) -> str:
    """Decimal text of a signed 32-bit integer."""
    _check_range(n, _INT32_MIN, _INT32_MAX, "a 32-bit signed integer")
    return str(n)


def ltoa(n: int) -> str:
    """Decimal text of a signed 64-bit integer."""
    _check_range(n, _INT64_MIN, _INT64_MAX, "a 64-bit signed integer")
    return str(n)


def ultoa(n: int) -> str:
    """Decimal text of an unsigned 64-bit integer."""
    _check_range(n, 0, _UINT64_MASK, "a 64-bit unsigned integer")
    return str(n)


def ltoa_base(value: int, base: int) -> str:
    """Text of a signed 64-bit ``value`` in ``base`` (2 to 36), lowercase digits."""
    if not 2 <= base <= len(_DIGITS):
        raise ValueError(f"base must be between 2 and {len(_DIGITS)}, got {base}")
    _check_range(value, _INT64_MIN, _INT64_MAX, "a 64-bit signed integer")
    sign = "-" if value < 0 else ""
    return sign + _to_base(abs(value), base)


def format_hex(n: int) -> str:
    """``0x``-prefixed uppercase hexadecimal of ``n`` as an unsigned long."""
    return "0x" + _hex(n & _UINT64_MASK, True)