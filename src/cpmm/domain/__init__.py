"""
Domain models and value objects.

Contains the CPMM value types: PoolState, TradeOutcome and the input error taxonomy.
"""

from src.cpmm.domain.errors import (
    InputErrorKind,
    InvalidFeeRateError,
    InvalidInputError,
    NegativeLiquidityError,
    NonPositivePriceError,
    NonSwapTransitionError,
    ReserveOverflowError,
)
from src.cpmm.domain.pool_state import PoolState
from src.cpmm.domain.trade_outcome import (
    TokenSide,
    TradeOutcome,
    TradeOutcomeConfig,
    is_zero_transition,
    validate_fee_rate,
)

__all__ = [
    # Errors
    "InputErrorKind",
    "InvalidInputError",
    "NonPositivePriceError",
    "NegativeLiquidityError",
    "InvalidFeeRateError",
    "ReserveOverflowError",
    "NonSwapTransitionError",
    # Pool state
    "PoolState",
    # Trade outcome
    "TokenSide",
    "TradeOutcome",
    "TradeOutcomeConfig",
    "is_zero_transition",
    "validate_fee_rate",
]
