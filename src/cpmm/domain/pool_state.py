"""
PoolState — Снапшот CPMM пула

Immutable value type: (liquidity, price) → резервы.

ФОРМУЛЫ:
    x = L / sqrt(P)    (base reserves)
    y = L * sqrt(P)    (quote reserves)
    k = x * y = L^2    (constant product invariant)
    P = y / x          (quote per base)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. price finite и > 0, liquidity finite и >= 0, проверяется явно при создании
2. Резервы всегда finite и неотрицательные (иначе ReserveOverflowError)
3. x * y == L^2 и y / x == P с относительной точностью < 1e-9
"""

import math
from dataclasses import dataclass

from src.cpmm.domain.errors import (
    NegativeLiquidityError,
    NonPositivePriceError,
    ReserveOverflowError,
)
from src.cpmm.math.numerical_safeguards import is_valid_float


@dataclass(frozen=True)
class PoolState:
    """
    Снапшот пула: ликвидность L и цена P (quote per base).

    Резервы не хранятся, вычисляются по запросу (одна операция sqrt).

    Raises:
        NonPositivePriceError: price <= 0, NaN или Inf
        NegativeLiquidityError: liquidity < 0, NaN или Inf
        ReserveOverflowError: резервы не представимы как finite float
    """

    liquidity: float
    price: float

    def __post_init__(self) -> None:
        price = self.price
        liquidity = self.liquidity

        if not is_valid_float(price) or price <= 0:
            raise NonPositivePriceError(
                f"price must be positive and finite, got {price}", value=price
            )

        if not is_valid_float(liquidity) or liquidity < 0:
            raise NegativeLiquidityError(
                f"liquidity must be non-negative and finite, got {liquidity}",
                value=liquidity,
            )

        # Нормализация: int/bool → float, чтобы to_dict() и сравнения были однородны
        object.__setattr__(self, "price", float(price))
        object.__setattr__(self, "liquidity", float(liquidity))

        base = self.base_reserves()
        quote = self.quote_reserves()
        if not (is_valid_float(base) and is_valid_float(quote)):
            raise ReserveOverflowError(
                f"reserves overflow for liquidity={liquidity}, price={price}: "
                f"base={base}, quote={quote}",
                value=(liquidity, price),
            )

    @classmethod
    def from_reserves(cls, base_reserves: float, quote_reserves: float) -> "PoolState":
        """
        Восстановление снапшота по резервам.

        L = sqrt(x * y), P = y / x

        Args:
            base_reserves: Резервы base токена (x > 0)
            quote_reserves: Резервы quote токена (y > 0)

        Returns:
            PoolState с эквивалентными резервами

        Raises:
            NegativeLiquidityError: резерв <= 0, NaN или Inf
            NonPositivePriceError: y / x не представима как положительная цена
        """
        for name, reserve in (("base_reserves", base_reserves), ("quote_reserves", quote_reserves)):
            if not is_valid_float(reserve) or reserve <= 0:
                raise NegativeLiquidityError(
                    f"{name} must be positive and finite, got {reserve}", value=reserve
                )

        # sqrt(x) * sqrt(y) вместо sqrt(x * y): произведение может переполниться
        liquidity = math.sqrt(base_reserves) * math.sqrt(quote_reserves)
        price = quote_reserves / base_reserves
        return cls(liquidity=liquidity, price=price)

    def base_reserves(self) -> float:
        """Base reserves: x = L / sqrt(P)"""
        return self.liquidity / math.sqrt(self.price)

    def quote_reserves(self) -> float:
        """Quote reserves: y = L * sqrt(P)"""
        return self.liquidity * math.sqrt(self.price)

    def invariant(self) -> float:
        """
        Constant product k = L^2 = x * y

        Raises:
            ReserveOverflowError: L^2 не представимо как finite float (L > ~1.3e154)
        """
        k = self.liquidity * self.liquidity
        if not is_valid_float(k):
            raise ReserveOverflowError(
                f"invariant overflows for liquidity={self.liquidity}", value=self.liquidity
            )
        return k

    def to_dict(self) -> dict[str, float]:
        """
        Примитивное представление для presentation layer.

        Returns:
            {liquidity, price, base_reserves, quote_reserves}
        """
        return {
            "liquidity": self.liquidity,
            "price": self.price,
            "base_reserves": self.base_reserves(),
            "quote_reserves": self.quote_reserves(),
        }
