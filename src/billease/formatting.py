"""Display helpers for currency values (en-IN conventions)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

from .utils import parse_decimal

CURRENCY_SYMBOL = "₹"
AMT2 = Decimal("0.01")


def round_currency(value: Decimal | int | float | str | None) -> Decimal:
    """Round ``value`` half-up to two decimals; malformed input becomes zero."""

    number = value if isinstance(value, Decimal) and value.is_finite() else parse_decimal(value)
    with localcontext() as ctx:
        # Enough digits for the integer part plus two decimals.
        ctx.prec = max(ctx.prec, number.adjusted() + 3)
        return number.quantize(AMT2, rounding=ROUND_HALF_UP)


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_amount(value: Decimal | int | float | str | None) -> str:
    """Return ``value`` as ``12,34,567.89`` using lakh/crore grouping."""

    rounded = round_currency(value)
    sign = "-" if rounded < 0 else ""
    integer, _, fraction = f"{abs(rounded):.2f}".partition(".")
    return f"{sign}{_group_indian(integer)}.{fraction}"


def format_currency(value: Decimal | int | float | str | None) -> str:
    """Return ``value`` prefixed with the rupee symbol, e.g. ``₹1,18,000.00``."""

    text = format_amount(value)
    if text.startswith("-"):
        return f"-{CURRENCY_SYMBOL}{text[1:]}"
    return f"{CURRENCY_SYMBOL}{text}"


__all__ = ["AMT2", "CURRENCY_SYMBOL", "format_amount", "format_currency", "round_currency"]
