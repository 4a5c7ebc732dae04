from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

# Amounts are stored as integer counts of 1/10_000 of a currency unit.
SCALE = 10_000
PRECISION = Decimal("0.0001")


def to_money(text: str) -> int:
    """
    Convert decimal text to fixed-point money.
    Rounds half away from zero at the 4th decimal place.

    Raises:
        ValueError: text is not a finite decimal number
    """
    try:
        value = Decimal(text)
        if not value.is_finite():
            raise ValueError(f"not a finite amount: {text!r}")
        # quantize signals InvalidOperation past the context's 28 digits
        return int(value.quantize(PRECISION, rounding=ROUND_HALF_UP) * SCALE)
    except InvalidOperation:
        raise ValueError(f"not a decimal amount: {text!r}") from None


def format_money(amount: int) -> str:
    """Format fixed-point money with up to 4 decimal places, removing trailing zeros."""
    normalized = Decimal(amount).scaleb(-4).normalize()
    return f"{normalized:f}"
