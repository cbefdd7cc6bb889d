"""
TradeOutcome — Результат свопа между двумя снапшотами пула

Трейдер переводит пул из start в end. Модуль вычисляет wallet deltas
(с точки зрения трейдера) и собранную комиссию.

КОНВЕНЦИЯ ЗНАКОВ (wallet perspective):
    > 0 — трейдер получает токен
    < 0 — трейдер платит токен

АЛГОРИТМ:
    raw_base  = end.x - start.x
    raw_quote = end.y - start.y

    input side  = сторона, резервы которой в пуле растут (трейдер поставляет токен)
    output side = сторона, резервы которой в пуле уменьшаются

    fee_collected       = pool_in * f / (1 - f)       (= pool_in / (1 - f) - pool_in)
    input wallet delta  = -(pool_in + fee_collected)  (= -pool_in / (1 - f))
    output wallet delta = -pool_out                   (комиссия не взимается)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Комиссия только на input стороне, никогда на output
2. Ровно одна wallet delta отрицательная, другая неотрицательная
   (кроме нулевой сделки: всё равно нулю, fee = 0)
3. Нулевая сделка определяется явно по относительному epsilon для пары
   дельт целиком, до выбора стороны
4. fee_rate вне [0, 1) → InvalidFeeRateError
5. NaN/Inf никогда не возвращаются
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.cpmm.domain.errors import (
    InvalidFeeRateError,
    NonSwapTransitionError,
    ReserveOverflowError,
)
from src.cpmm.domain.pool_state import PoolState
from src.cpmm.math.numerical_safeguards import (
    RESERVE_ROUNDING_REL,
    ZERO_TRADE_NOISE_FACTOR,
    ZERO_TRADE_REL_EPS,
    is_valid_float,
    relative_change,
    sign_with_tolerance,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class TokenSide(str, Enum):
    """Сторона торговой пары"""

    BASE = "base"  # x
    QUOTE = "quote"  # y


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class TradeOutcomeConfig:
    """Конфигурация расчёта TradeOutcome.

    zero_trade_rel_eps: относительная толерантность, ниже которой дельта
    резервов считается нулевой (масштаб: max резерва стороны до/после).

    Raises:
        ValueError: zero_trade_rel_eps отрицательный, NaN или Inf
    """

    zero_trade_rel_eps: float = ZERO_TRADE_REL_EPS

    def __post_init__(self) -> None:
        eps = self.zero_trade_rel_eps
        if not is_valid_float(eps) or eps < 0:
            raise ValueError(
                f"zero_trade_rel_eps must be non-negative and finite, got {eps}"
            )

    @property
    def noise_floor(self) -> float:
        """Эффективный порог: не ниже погрешности округления резервов."""
        return max(self.zero_trade_rel_eps, RESERVE_ROUNDING_REL)


# =============================================================================
# VALIDATION
# =============================================================================


def validate_fee_rate(fee_rate: float) -> float:
    """
    Валидация fee rate.

    Args:
        fee_rate: Комиссия как доля (например, 0.003 для 0.3%)

    Returns:
        fee_rate как float

    Raises:
        InvalidFeeRateError: fee_rate < 0, fee_rate >= 1 или NaN
    """
    # NaN не проходит ни одно сравнение, поэтому проверка через "not in range"
    if not (0.0 <= fee_rate < 1.0):
        raise InvalidFeeRateError(
            f"fee_rate must be in [0, 1), got {fee_rate}", value=fee_rate
        )
    return float(fee_rate)


def is_zero_transition(rel_base: float, rel_quote: float, rel_tol: float) -> bool:
    """
    Решение "нулевая сделка" для пары относительных дельт резервов.

    Пара нулевая, если обе дельты в пределах rel_tol, либо одна в пределах
    rel_tol, а другая не больше ZERO_TRADE_NOISE_FACTOR * rel_tol. Вторая
    ветка покрывает сдвиг цены на уровне порога: округление может поставить
    одну сторону чуть ниже порога, а другую чуть выше.

    Args:
        rel_base: relative_change дельты base резервов
        rel_quote: relative_change дельты quote резервов
        rel_tol: Относительная толерантность

    Returns:
        True если переход start → end считается нулевой сделкой
    """
    low, high = sorted((rel_base, rel_quote))
    if high <= rel_tol:
        return True
    return low <= rel_tol and high <= ZERO_TRADE_NOISE_FACTOR * rel_tol


# =============================================================================
# TRADE OUTCOME
# =============================================================================


@dataclass(frozen=True)
class TradeOutcome:
    """
    Wallet deltas и комиссия для перехода пула start → end.

    fee_collected номинирована в токене fee_side (input сторона сделки).
    Для нулевой сделки fee_side = None.
    """

    base_delta: float
    quote_delta: float
    fee_collected: float
    fee_rate: float
    fee_side: Optional[TokenSide]
    price_delta: float

    @classmethod
    def compute(
        cls,
        start: PoolState,
        end: PoolState,
        fee_rate: float,
        config: TradeOutcomeConfig | None = None,
    ) -> "TradeOutcome":
        """
        Расчёт результата свопа.

        Args:
            start: Снапшот пула до сделки
            end: Снапшот пула после сделки
            fee_rate: Комиссия как доля в [0, 1)
            config: Конфигурация (опционально, используется default)

        Returns:
            TradeOutcome с wallet deltas и комиссией

        Raises:
            InvalidFeeRateError: fee_rate вне [0, 1)
            NonSwapTransitionError: оба резерва двигаются в одном направлении,
                либо один фиксирован, а другой явно меняется
            ReserveOverflowError: gross-up комиссии переполняет float
        """
        config = config or TradeOutcomeConfig()
        fee_rate = validate_fee_rate(fee_rate)

        start_base = start.base_reserves()
        start_quote = start.quote_reserves()
        end_base = end.base_reserves()
        end_quote = end.quote_reserves()

        # Дельты с точки зрения пула
        raw_base = end_base - start_base
        raw_quote = end_quote - start_quote
        price_delta = end.price - start.price

        base_scale = max(start_base, end_base)
        quote_scale = max(start_quote, end_quote)
        rel_tol = config.noise_floor

        # Решение о нулевой сделке принимается для пары целиком, до знаков
        if is_zero_transition(
            relative_change(raw_base, base_scale),
            relative_change(raw_quote, quote_scale),
            rel_tol,
        ):
            logger.debug(
                "Zero trade: raw_base=%r, raw_quote=%r within rel_eps=%r",
                raw_base,
                raw_quote,
                rel_tol,
            )
            return cls.zero(fee_rate=fee_rate, price_delta=price_delta)

        base_sign = sign_with_tolerance(raw_base, base_scale, rel_tol)
        quote_sign = sign_with_tolerance(raw_quote, quote_scale, rel_tol)

        if base_sign > 0 and quote_sign < 0:
            fee_side = TokenSide.BASE
            pool_in, pool_out = raw_base, raw_quote
        elif base_sign < 0 and quote_sign > 0:
            fee_side = TokenSide.QUOTE
            pool_in, pool_out = raw_quote, raw_base
        else:
            logger.warning(
                "Rejecting non-swap transition: raw_base=%r, raw_quote=%r "
                "(start L=%r, end L=%r)",
                raw_base,
                raw_quote,
                start.liquidity,
                end.liquidity,
            )
            raise NonSwapTransitionError(
                f"pool transition is not a swap: base reserves change by {raw_base}, "
                f"quote reserves change by {raw_quote}",
                value=(raw_base, raw_quote),
            )

        if fee_rate == 0.0:
            fee_collected = 0.0
        else:
            fee_collected = pool_in * fee_rate / (1.0 - fee_rate)

        input_delta = -(pool_in + fee_collected)
        output_delta = -pool_out

        if not (is_valid_float(fee_collected) and is_valid_float(input_delta)):
            raise ReserveOverflowError(
                f"fee gross-up overflows: pool_in={pool_in}, fee_rate={fee_rate}",
                value=(pool_in, fee_rate),
            )

        logger.debug(
            "Swap: input=%s pool_in=%r pool_out=%r fee=%r",
            fee_side.value,
            pool_in,
            pool_out,
            fee_collected,
        )

        if fee_side is TokenSide.BASE:
            base_delta, quote_delta = input_delta, output_delta
        else:
            base_delta, quote_delta = output_delta, input_delta

        return cls(
            base_delta=base_delta,
            quote_delta=quote_delta,
            fee_collected=fee_collected,
            fee_rate=fee_rate,
            fee_side=fee_side,
            price_delta=price_delta,
        )

    @classmethod
    def zero(cls, fee_rate: float = 0.0, price_delta: float = 0.0) -> "TradeOutcome":
        """Нулевая сделка: все deltas 0, fee 0, сторона не определена."""
        return cls(
            base_delta=0.0,
            quote_delta=0.0,
            fee_collected=0.0,
            fee_rate=fee_rate,
            fee_side=None,
            price_delta=price_delta,
        )

    @property
    def input_side(self) -> Optional[TokenSide]:
        """Токен, который платит трейдер (None для нулевой сделки)."""
        return self.fee_side

    @property
    def output_side(self) -> Optional[TokenSide]:
        """Токен, который получает трейдер (None для нулевой сделки)."""
        if self.fee_side is None:
            return None
        return TokenSide.QUOTE if self.fee_side is TokenSide.BASE else TokenSide.BASE

    @property
    def base_fee_collected(self) -> float:
        """Комиссия в base токене."""
        return self.fee_collected if self.fee_side is TokenSide.BASE else 0.0

    @property
    def quote_fee_collected(self) -> float:
        """Комиссия в quote токене."""
        return self.fee_collected if self.fee_side is TokenSide.QUOTE else 0.0

    def is_zero_trade(self) -> bool:
        return self.fee_side is None

    def to_dict(self) -> dict:
        """Примитивное представление для presentation layer."""
        return {
            "base_delta": self.base_delta,
            "quote_delta": self.quote_delta,
            "fee_collected": self.fee_collected,
            "fee_rate": self.fee_rate,
            "fee_side": self.fee_side.value if self.fee_side is not None else None,
            "price_delta": self.price_delta,
            "base_fee_collected": self.base_fee_collected,
            "quote_fee_collected": self.quote_fee_collected,
        }
