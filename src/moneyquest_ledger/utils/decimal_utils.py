"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

CENT = Decimal("0.01")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL rows or adapters.

    Returns:
        Decimal: Normalized numeric value. Unparseable input yields zero.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return Decimal("0")
    if not result.is_finite():
        return Decimal("0")
    return result


def round_money(value: Decimal, places: Decimal = CENT) -> Decimal:
    """Round a monetary value half-up to the given quantum.

    Precision is widened for the call so large amounts never overflow the
    context.
    """
    if not value.is_finite():
        return value
    digits = max(value.adjusted(), 0) - places.as_tuple().exponent + 2
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, digits)
        return value.quantize(places, rounding=ROUND_HALF_UP)


__all__ = ["CENT", "coerce_decimal", "round_money"]
