"""
InvalidInputError — Таксономия ошибок валидации входных данных

Все ошибки синхронные и recoverable: вызывающий код исправляет вход и
повторяет вызов. Ядро никогда не перехватывает эти ошибки и не подставляет
значения по умолчанию.
"""

from enum import Enum


class InputErrorKind(str, Enum):
    """Вид ошибки входных данных"""

    NON_POSITIVE_PRICE = "non_positive_price"  # price <= 0, NaN или Inf
    NEGATIVE_LIQUIDITY = "negative_liquidity"  # liquidity < 0, NaN или Inf
    INVALID_FEE_RATE = "invalid_fee_rate"  # fee rate вне [0, 1)
    RESERVE_OVERFLOW = "reserve_overflow"  # резервы вне диапазона float
    NON_SWAP_TRANSITION = "non_swap_transition"  # переход не является свопом


class InvalidInputError(ValueError):
    """
    Базовая ошибка невалидного входа.

    Attributes:
        kind: Вид ошибки (InputErrorKind)
        value: Отвергнутое значение (для диагностики)
    """

    kind: InputErrorKind

    def __init__(self, message: str, value: object = None):
        super().__init__(message)
        self.value = value


class NonPositivePriceError(InvalidInputError):
    """Цена равна нулю, отрицательная, NaN или Inf."""

    kind = InputErrorKind.NON_POSITIVE_PRICE


class NegativeLiquidityError(InvalidInputError):
    """Ликвидность отрицательная, NaN или Inf."""

    kind = InputErrorKind.NEGATIVE_LIQUIDITY


class InvalidFeeRateError(InvalidInputError):
    """Fee rate вне диапазона [0, 1) или NaN."""

    kind = InputErrorKind.INVALID_FEE_RATE


class ReserveOverflowError(InvalidInputError):
    """
    Результат вычисления вышел за пределы finite float.

    Возникает для формально валидных (L, P), чьи резервы переполняются
    (например, L = 1e300, P = 1e300), либо при gross-up комиссии.
    """

    kind = InputErrorKind.RESERVE_OVERFLOW


class NonSwapTransitionError(InvalidInputError):
    """
    Два снапшота пула не связаны свопом.

    У свопа ровно одна входная и одна выходная сторона. Если оба резерва
    двигаются в одном направлении (например, изменилась ликвидность),
    wallet deltas и fee не определены.
    """

    kind = InputErrorKind.NON_SWAP_TRANSITION
