""" Conversion of compact proof of work targets ("bits") to difficulties. """

import math
from typing import Tuple

from .config import MAX_TARGET_BITS

__all__ = ['split_compact_target', 'target_from_compact', 'difficulty_from_compact_target']


def split_compact_target(bits: int) -> Tuple[int, int]:
    """ Splits a compact target into its 8 bit exponent and 24 bit mantissa. """
    return (bits >> 24) & 0xff, bits & 0xffffff


def target_from_compact(bits: int) -> float:
    """
    The target encoded by `bits`, as a float.

    The exponent counts bytes, so the value is `mantissa * 256 ** (exponent - 3)`. Exponents
    below 3 shift the mantissa to the right, hence the float arithmetic. Targets too large for a
    float come out as `math.inf`.
    """
    exponent, mantissa = split_compact_target(bits)
    try:
        return mantissa * 256.0 ** (exponent - 3)
    except OverflowError:
        return math.inf if mantissa else 0.0


def difficulty_from_compact_target(bits: int) -> float:
    """
    The difficulty of a block with target `bits`, relative to the maximum target.

    A zero mantissa encodes a zero target, which no hash can meet; this returns `math.inf` for it.
    Targets far above the maximum give a difficulty that rounds to 0.0. Callers have to reject
    both.
    """
    exponent, mantissa = split_compact_target(bits)
    if mantissa == 0:
        return math.inf
    max_exponent, max_mantissa = split_compact_target(MAX_TARGET_BITS)
    # the ratio of the powers only underflows, it never overflows
    return (max_mantissa / mantissa) * 256.0 ** (max_exponent - exponent)
