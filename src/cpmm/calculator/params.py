"""
CalculatorParams — Параметры калькулятора от presentation layer

Immutable Pydantic модель "текущего состояния калькулятора". Владеет ей
вызывающий код; при каждом обновлении значение заменяется целиком
(with_updates), а не мутируется на месте.

Поля — простые float: доменная валидация (price > 0, liquidity >= 0,
fee в [0, 1)) выполняется в PoolState/TradeOutcome, чтобы вызывающий код
получал таксономию InvalidInputError, а не ошибки схемы.
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field

from src.cpmm.contracts import validate_calculator_params
from src.cpmm.math.numerical_safeguards import percent_to_fraction


class CalculatorParams(BaseModel):
    """
    Параметры пула и сделки.

    Default значения соответствуют начальному состоянию UI калькулятора.
    """

    liquidity: float = Field(1000.0, description="Ликвидность пула L (общая для start и end)")
    initial_price: float = Field(1.0, description="Цена до сделки (quote per base)")
    final_price: float = Field(1.1, description="Цена после сделки (quote per base)")
    fee_percent: float = Field(0.3, description="Комиссия в процентах (0.3 = 0.3%)")

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def fee_rate(self) -> float:
        """Комиссия как доля (fee_percent / 100)."""
        return percent_to_fraction(self.fee_percent)

    def with_updates(self, **changes: Any) -> "CalculatorParams":
        """
        Новое значение параметров с заменой указанных полей.

        Исходный объект не изменяется. Изменения проходят ту же
        Pydantic валидацию типов, что и конструктор.

        Raises:
            pydantic.ValidationError: неизвестное поле или нечисловое значение
        """
        return type(self).model_validate({**self.model_dump(), **changes})

    @classmethod
    def from_contract(cls, data: Mapping[str, Any]) -> "CalculatorParams":
        """
        Параметры из сырого mapping presentation layer (например, JSON).

        Mapping сначала проверяется по контракту calculator_params.json:
        все четыре поля обязательны, типы строго числовые, диапазоны
        совпадают с доменными.

        Raises:
            jsonschema.ValidationError: mapping не соответствует контракту
        """
        validate_calculator_params(data)
        return cls.model_validate(dict(data))
