"""Render amounts in words using the Indian crore/lakh grouping."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from .utils import parse_decimal

OVERFLOW = "overflow"
SUFFIX = "ONLY"

_ONES = (
    "", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
    "seventeen", "eighteen", "nineteen",
)
_TENS = (
    "", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty",
    "ninety",
)

# (slice of the zero-padded 9 digit string, unit word)
_GROUPS = (
    (slice(0, 2), "crore"),
    (slice(2, 4), "lakh"),
    (slice(4, 6), "thousand"),
    (slice(6, 7), "hundred"),
)
_MAX_DIGITS = 9
_LIMIT = 10**_MAX_DIGITS
_CENT = Decimal("0.01")


def _two_digits(value: int) -> str:
    if value < 20:
        return _ONES[value]
    tens, ones = divmod(value, 10)
    return f"{_TENS[tens]} {_ONES[ones]}".strip()


def _rupees_in_words(rupees: int) -> str:
    digits = str(rupees).zfill(_MAX_DIGITS)
    parts: list[str] = []
    for group, unit in _GROUPS:
        value = int(digits[group])
        if value:
            parts.append(f"{_two_digits(value)} {unit}")

    remainder = int(digits[7:])
    if remainder:
        if parts:
            parts.append("and")
        parts.append(_two_digits(remainder))
    return " ".join(parts)


def amount_to_words(amount: Decimal | int | float | str) -> str:
    """Return ``amount`` spelled out in upper case with a trailing ``ONLY``.

    The integer part is grouped as crore, lakh, thousand and hundred. Any
    paisa left after rounding to two decimals is appended with ``AND``.
    Zero renders as an empty string and integer parts above nine digits as
    :data:`OVERFLOW`.
    """

    value = amount if isinstance(amount, Decimal) and amount.is_finite() else parse_decimal(amount)
    if value < 0:
        raise ValueError(f"Cannot render a negative amount in words: {value}")

    if value >= _LIMIT:
        return OVERFLOW

    value = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    rupees = int(value)
    paisa = int((value - rupees) * 100)

    # 999999999.995 rounds up past the nine digit ceiling.
    if rupees >= _LIMIT:
        return OVERFLOW

    words = _rupees_in_words(rupees)
    if paisa:
        paisa_words = f"{_two_digits(paisa)} paisa"
        words = f"{words} and {paisa_words}" if words else paisa_words

    if not words:
        return ""
    return f"{words.upper()} {SUFFIX}"


__all__ = ["OVERFLOW", "SUFFIX", "amount_to_words"]
