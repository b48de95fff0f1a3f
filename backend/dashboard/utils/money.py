from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from dashboard.core.errors import ValidationError

Q2 = Decimal("0.01")
CENTS = Decimal("100")


def d2(x: Decimal) -> Decimal:
    return x.quantize(Q2, rounding=ROUND_HALF_UP)


def to_dec(v, field: str = "amount") -> Decimal:
    if isinstance(v, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        out = Decimal(str(v))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field} must be a number")
    if not out.is_finite():
        raise ValidationError(f"{field} must be finite")
    return out


def to_cents(v: Decimal) -> int:
    return int(d2(v) * CENTS)


def from_cents(cents: int) -> float:
    return float(Decimal(int(cents)) / CENTS)
