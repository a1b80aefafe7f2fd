from decimal import Decimal, ROUND_HALF_UP, getcontext

getcontext().prec = 28
CENTS = Decimal("0.01")
ZERO = Decimal("0")

# exact splits may be off from the total by at most one cent
SPLIT_TOLERANCE = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def qround(d: Decimal) -> Decimal:
    return to_decimal(d).quantize(CENTS, rounding=ROUND_HALF_UP)
