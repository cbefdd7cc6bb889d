"""
Numerical Safeguards — Float-примитивы для CPMM расчётов

Модуль обеспечивает численную корректность расчётов пула:
- Проверка finite (NaN/Inf никогда не принимаются как входные данные)
- Относительная толерантность для классификации дельт резервов
- Конверсия fee rate из процентов в долю

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf не пропагируют: вызывающий код отвергает их через is_valid_float
2. Сравнения дельт резервов всегда относительны к масштабу резервов
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для ветки "нулевая сделка":
# |delta| <= ZERO_TRADE_REL_EPS * max(reserve_start, reserve_end)
# Резервы из (L, P) почти никогда не совпадают побитово, поэтому точное
# равенство не используется.
ZERO_TRADE_REL_EPS: Final[float] = 1e-12

# Нижняя граница относительной погрешности дельты резервов.
# x = L / sqrt(P) и y = L * sqrt(P) несут ~1 ulp ошибки каждый, разность двух
# снапшотов ~2 ulp; изменения ниже этой границы неизмеримы при любом epsilon.
RESERVE_ROUNDING_REL: Final[float] = 1e-14

# Во сколько раз относительная дельта одной стороны может превышать порог,
# пока другая сторона пренебрежима, чтобы пара всё ещё считалась шумом.
# При сдвиге цены с фиксированной L обе относительные дельты равны ~|dP/P| / 2
# и расходятся только на ошибку округления.
ZERO_TRADE_NOISE_FACTOR: Final[float] = 4.0


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение finite, False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# ОТНОСИТЕЛЬНЫЕ ДЕЛЬТЫ
# =============================================================================


def relative_change(delta: float, scale: float) -> float:
    """
    Относительная величина изменения: abs(delta) / abs(scale).

    Точный ноль даёт 0.0 при любом масштабе (в том числе scale == 0, т.е.
    для пустого пула с L = 0). Ненулевая дельта при нулевом масштабе даёт inf.

    Examples:
        >>> relative_change(0.0, 0.0)
        0.0
        >>> relative_change(-5.0, 100.0)
        0.05
        >>> relative_change(1e-300, 0.0)
        inf
    """
    if delta == 0.0:
        return 0.0
    if scale == 0.0:
        return math.inf
    return abs(delta) / abs(scale)


def is_negligible(
    delta: float,
    scale: float,
    rel_tol: float = ZERO_TRADE_REL_EPS,
) -> bool:
    """
    Проверка, пренебрежимо ли мало изменение относительно масштаба.

    Args:
        delta: Изменение (например, дельта резервов)
        scale: Масштаб величины (например, max резервов до/после)
        rel_tol: Относительная толерантность (default: ZERO_TRADE_REL_EPS)

    Returns:
        True если relative_change(delta, scale) <= rel_tol

    Raises:
        ValueError: Если rel_tol отрицательный или NaN

    Examples:
        >>> is_negligible(0.0, 0.0)
        True
        >>> is_negligible(1e-11, 100.0)
        True
        >>> is_negligible(1e-6, 100.0)
        False
    """
    if not rel_tol >= 0:
        raise ValueError(f"rel_tol must be non-negative, got {rel_tol}")

    return relative_change(delta, scale) <= rel_tol


def sign_with_tolerance(
    delta: float,
    scale: float,
    rel_tol: float = ZERO_TRADE_REL_EPS,
) -> int:
    """
    Знак изменения с учётом относительной толерантности.

    Returns:
        -1 если delta < 0 (вне толерантности)
         0 если delta пренебрежимо мало
        +1 если delta > 0 (вне толерантности)

    Examples:
        >>> sign_with_tolerance(-50.0, 100.0)
        -1
        >>> sign_with_tolerance(1e-14, 100.0)
        0
        >>> sign_with_tolerance(100.0, 200.0)
        1
    """
    if is_negligible(delta, scale, rel_tol):
        return 0
    return 1 if delta > 0 else -1


# =============================================================================
# КОНВЕРСИЯ FEE RATE
# =============================================================================


def percent_to_fraction(pct: float) -> float:
    """
    Конверсия процентов в долю.

    Args:
        pct: Проценты (например, 0.3 = 0.3%)

    Returns:
        Доля (например, 0.3% → 0.003)
    """
    return pct / 100.0
