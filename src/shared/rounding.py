from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, str, Decimal]


def round_half_up(value: float, digits: int = 0) -> float:
    # Ties go up (2.5 -> 3, -2.5 -> -2); the built-in round() would give 2.
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def round_percent(numerator: float, denominator: float) -> int:
    return int(round_half_up(numerator / denominator * 100))


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal, places: int = 2) -> Decimal:
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
