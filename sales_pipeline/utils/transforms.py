"""Numeric helpers shared by the validator, aggregator and ranker."""

import math
import sys
from decimal import Decimal, ROUND_HALF_UP

import numpy as np

type Number = int | float

_CENT = Decimal("0.01")
_FLOAT_MAX = sys.float_info.max


def is_number(value: object) -> bool:
    """True for finite ints and floats, including numpy scalars. Booleans are not numbers."""
    if isinstance(value, (bool, np.bool_)):
        return False
    if isinstance(value, (int, np.integer)):
        # ints past float range cannot take part in money arithmetic
        return abs(int(value)) <= _FLOAT_MAX
    if not isinstance(value, (float, np.floating)):
        return False
    return bool(np.isfinite(value))


def is_integral(value: Number) -> bool:
    return float(value).is_integer()


def round_money(value: Number) -> float:
    """Round to 2 decimals, halves away from zero.

    Rounds the shortest decimal repr of the float, so 2.675 becomes 2.68
    rather than the 2.67 that round() gives for its binary value.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite amount: {value!r}")
    rounded = float(Decimal(repr(float(value))).quantize(_CENT, rounding=ROUND_HALF_UP))
    # avoid reporting -0.0
    return rounded + 0.0
