"""
Calculator session — оценка параметров и отчёт для presentation layer

evaluate(params): чистая функция, строит start/end снапшоты с общей
ликвидностью и вычисляет TradeOutcome. evaluate_contract(data) делает то же
для сырого mapping и проверяет вход и выход по JSON контрактам.

CpmmCalculator — держатель текущего CalculatorParams. Новое значение
принимается только если оно успешно вычисляется; при ошибке предыдущее
состояние сохраняется, ошибка пробрасывается вызывающему коду без изменений.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from src.cpmm.calculator.params import CalculatorParams
from src.cpmm.contracts import validate_trade_report
from src.cpmm.domain.errors import InvalidInputError
from src.cpmm.domain.pool_state import PoolState
from src.cpmm.domain.trade_outcome import TradeOutcome, TradeOutcomeConfig

logger = logging.getLogger(__name__)


# =============================================================================
# REPORT
# =============================================================================


@dataclass(frozen=True)
class TradeReport:
    """Снапшоты до/после и результат сделки."""

    start: PoolState
    end: PoolState
    outcome: TradeOutcome

    def to_dict(self) -> dict[str, Any]:
        """
        Плоское представление для отображения.

        Соответствует контракту trade_report.json (см. to_contract).
        """
        outcome = self.outcome
        return {
            "initial_base_reserves": self.start.base_reserves(),
            "initial_quote_reserves": self.start.quote_reserves(),
            "final_base_reserves": self.end.base_reserves(),
            "final_quote_reserves": self.end.quote_reserves(),
            "price_delta": outcome.price_delta,
            "base_wallet_delta": outcome.base_delta,
            "quote_wallet_delta": outcome.quote_delta,
            "fee_collected": outcome.fee_collected,
            "fee_side": outcome.fee_side.value if outcome.fee_side is not None else None,
            "base_fee_collected": outcome.base_fee_collected,
            "quote_fee_collected": outcome.quote_fee_collected,
        }

    def to_contract(self) -> dict[str, Any]:
        """
        to_dict(), проверенный по контракту trade_report.json.

        Raises:
            jsonschema.ValidationError: отчёт нарушает контракт
        """
        data = self.to_dict()
        validate_trade_report(data)
        return data


# =============================================================================
# EVALUATION
# =============================================================================


def evaluate(
    params: CalculatorParams,
    config: TradeOutcomeConfig | None = None,
) -> TradeReport:
    """
    Вычисление отчёта по параметрам калькулятора.

    Args:
        params: Параметры пула и сделки
        config: Конфигурация TradeOutcome (опционально)

    Returns:
        TradeReport

    Raises:
        InvalidInputError: любая ошибка валидации из PoolState/TradeOutcome
    """
    start = PoolState(liquidity=params.liquidity, price=params.initial_price)
    end = PoolState(liquidity=params.liquidity, price=params.final_price)
    outcome = TradeOutcome.compute(start, end, params.fee_rate, config=config)
    return TradeReport(start=start, end=end, outcome=outcome)


def evaluate_contract(
    data: Mapping[str, Any],
    config: TradeOutcomeConfig | None = None,
) -> dict[str, Any]:
    """
    Полный цикл на границе: сырой mapping параметров → mapping отчёта.

    Вход проверяется по calculator_params.json, выход по trade_report.json.

    Raises:
        jsonschema.ValidationError: вход или выход нарушает контракт
        InvalidInputError: ошибка доменной валидации
    """
    return evaluate(CalculatorParams.from_contract(data), config).to_contract()


# =============================================================================
# CALCULATOR
# =============================================================================


class CpmmCalculator:
    """
    Держатель текущих параметров калькулятора.

    Параметры и отчёт являются immutable значениями, update() заменяет их целиком.
    Экземпляр не потокобезопасен: синхронизацию обработчиков событий UI
    обеспечивает presentation layer.
    """

    def __init__(
        self,
        params: CalculatorParams | None = None,
        config: TradeOutcomeConfig | None = None,
    ):
        """
        Инициализация калькулятора.

        Args:
            params: начальные параметры (опционально, используются default)
            config: конфигурация TradeOutcome (опционально)

        Raises:
            InvalidInputError: начальные параметры не вычисляются
        """
        self.config = config or TradeOutcomeConfig()
        self._params = params or CalculatorParams()
        self._report = evaluate(self._params, self.config)

    @property
    def params(self) -> CalculatorParams:
        return self._params

    def report(self) -> TradeReport:
        return self._report

    def update(self, **changes: Any) -> TradeReport:
        """
        Замена параметров новым значением.

        Сначала вычисляется отчёт для нового значения; состояние меняется
        только при успехе.

        Args:
            **changes: поля CalculatorParams для замены

        Returns:
            Новый TradeReport

        Raises:
            InvalidInputError: новое значение не вычисляется (состояние не изменено)
            pydantic.ValidationError: неизвестное поле или нечисловое значение
        """
        new_params = self._params.with_updates(**changes)
        try:
            new_report = evaluate(new_params, self.config)
        except InvalidInputError:
            logger.debug("Rejected calculator update %r, keeping previous params", changes)
            raise

        self._params = new_params
        self._report = new_report
        return new_report
