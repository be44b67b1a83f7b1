from decimal import Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal(0)
ONE = Decimal(1)


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal, going through str so 0.1 stays 0.1 and numpy scalars work"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, str)):
        return Decimal(value)
    return Decimal(str(value))
