"""Utility helpers shared across the billing modules."""

from __future__ import annotations

import secrets
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

_ID_ALPHABET = "useandom-26T198340PX75pxJACKVERYMINDBUSHWOLF_GQZbfghjklqvwyzrict"
_ID_LENGTH = 21
_MAX_ADJUSTED = 100


def new_id(size: int = _ID_LENGTH) -> str:
    """Return a random URL-safe identifier."""

    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(size))


def parse_decimal(
    value: str | int | float | Decimal | None, *, default: Decimal = Decimal("0")
) -> Decimal:
    """Convert the provided value to :class:`~decimal.Decimal`.

    Empty strings, invalid text, ``None``, non-finite numbers and magnitudes
    of ``1e100`` or more return the ``default`` provided. Floats go through
    :func:`str` so ``0.1`` stays ``Decimal("0.1")``.
    """

    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if _usable(value) else default
    if isinstance(value, int):
        parsed = Decimal(value)
        return parsed if _usable(parsed) else default

    text = str(value).strip()
    if not text:
        return default

    try:
        parsed = Decimal(text)
    except (InvalidOperation, ValueError):
        return default
    if not _usable(parsed):
        return default
    return parsed


def _usable(value: Decimal) -> bool:
    # Larger magnitudes would overflow the default context in the engine.
    if not value.is_finite():
        return False
    return value.is_zero() or value.adjusted() < _MAX_ADJUSTED


def optional_decimal(value: str | int | float | Decimal | None) -> Decimal | None:
    """Like :func:`parse_decimal` but keep ``None`` for absent values."""

    if value is None:
        return None
    return parse_decimal(value)


def parse_date(value: str | date | None) -> date | None:
    """Parse an ISO ``YYYY-MM-DD`` date, returning ``None`` when invalid."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


__all__ = ["new_id", "parse_decimal", "optional_decimal", "parse_date"]
