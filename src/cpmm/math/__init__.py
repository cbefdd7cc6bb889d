"""
Core math modules для CPMM калькулятора

Float-примитивы с гарантией численной корректности.
"""

from src.cpmm.math.numerical_safeguards import (
    # Epsilon constants
    RESERVE_ROUNDING_REL,
    ZERO_TRADE_NOISE_FACTOR,
    ZERO_TRADE_REL_EPS,
    # NaN/Inf checks
    is_valid_float,
    # Relative deltas
    is_negligible,
    relative_change,
    sign_with_tolerance,
    # Fee conversions
    percent_to_fraction,
)

__all__ = [
    # Epsilon constants
    "RESERVE_ROUNDING_REL",
    "ZERO_TRADE_NOISE_FACTOR",
    "ZERO_TRADE_REL_EPS",
    # NaN/Inf checks
    "is_valid_float",
    # Relative deltas
    "is_negligible",
    "relative_change",
    "sign_with_tolerance",
    # Fee conversions
    "percent_to_fraction",
]
