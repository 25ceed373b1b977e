from __future__ import annotations

from decimal import Decimal

import pytest

from billease.words import OVERFLOW, amount_to_words


def test_two_hundred_thirty_six() -> None:
    words = amount_to_words(236)

    assert words == "TWO HUNDRED AND THIRTY SIX ONLY"
    assert "two hundred and thirty six" in words.lower()


def test_zero_renders_nothing() -> None:
    assert amount_to_words(0) == ""
    assert amount_to_words(Decimal("0.001")) == ""


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (7, "SEVEN ONLY"),
        (19, "NINETEEN ONLY"),
        (40, "FORTY ONLY"),
        (100, "ONE HUNDRED ONLY"),
        (1000, "ONE THOUSAND ONLY"),
        (100000, "ONE LAKH ONLY"),
        (10000000, "ONE CRORE ONLY"),
        (
            1234567,
            "TWELVE LAKH THIRTY FOUR THOUSAND FIVE HUNDRED AND SIXTY SEVEN ONLY",
        ),
        (
            987654321,
            "NINETY EIGHT CRORE SEVENTY SIX LAKH FIFTY FOUR THOUSAND "
            "THREE HUNDRED AND TWENTY ONE ONLY",
        ),
        (1005, "ONE THOUSAND AND FIVE ONLY"),
    ],
)
def test_indian_grouping(amount: int, expected: str) -> None:
    assert amount_to_words(amount) == expected


def test_paisa_is_joined_with_and() -> None:
    assert amount_to_words(Decimal("236.50")) == "TWO HUNDRED AND THIRTY SIX AND FIFTY PAISA ONLY"


def test_paisa_only() -> None:
    assert amount_to_words(Decimal("0.75")) == "SEVENTY FIVE PAISA ONLY"


def test_paisa_rounds_half_up_without_carry_artifacts() -> None:
    assert amount_to_words(Decimal("9.999")) == "TEN ONLY"
    assert amount_to_words(Decimal("1.005")) == "ONE AND ONE PAISA ONLY"


def test_overflow_above_nine_digits() -> None:
    assert amount_to_words(999999999) != OVERFLOW
    assert amount_to_words(1000000000) == OVERFLOW
    assert amount_to_words(Decimal("999999999.999")) == OVERFLOW


def test_negative_amount_is_rejected() -> None:
    with pytest.raises(ValueError):
        amount_to_words(Decimal("-1"))


def test_very_large_computed_total_is_overflow() -> None:
    assert amount_to_words(Decimal("1e150")) == OVERFLOW
