from decimal import Decimal, InvalidOperation

CENTS = Decimal("0.01")


def safe_string(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def safe_key(value: object) -> str:
    """Text form of an identifier column, which may be text or a bigint."""
    if value is None or isinstance(value, bool):
        return ""
    return str(value).strip()


def to_decimal(value: object) -> Decimal | None:
    """Coerce a numeric column value, returning None for anything non-finite."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int | float):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return parsed if parsed.is_finite() else None


def sum_amounts(rows: list[dict], column: str = "amount") -> Decimal:
    total = Decimal("0")
    for row in rows:
        total += to_decimal(row.get(column)) or Decimal("0")
    try:
        return total.quantize(CENTS)
    except InvalidOperation:
        # More significant digits than the context allows; keep the unrounded sum.
        return total
