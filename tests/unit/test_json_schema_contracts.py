"""
Tests for JSON Schema Contract Validators

Тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей
- Детекция нарушений типов и constraints
- Интеграция с Pydantic моделью CalculatorParams
- Расположение схем внутри пакета (package data)
"""

from pathlib import Path

import pytest
from jsonschema import ValidationError

from src.cpmm.calculator import CalculatorParams, evaluate
from src.cpmm.contracts import (
    CALCULATOR_PARAMS_SCHEMA,
    SCHEMA_DIR,
    TRADE_REPORT_SCHEMA,
    load_schema,
    validate_calculator_params,
    validate_trade_report,
    validator_for,
)
from src.cpmm.contracts import validators as validators_module


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_params():
    """Валидные параметры калькулятора."""
    return {
        "liquidity": 1000.0,
        "initial_price": 1.0,
        "final_price": 1.1,
        "fee_percent": 0.3,
    }


@pytest.fixture
def valid_report():
    """Валидный отчёт о сделке."""
    return evaluate(CalculatorParams()).to_dict()


# =============================================================================
# ТЕСТЫ: Загрузка схем
# =============================================================================


class TestSchemaLoading:
    """Тесты загрузки схем."""

    @pytest.mark.parametrize("schema_name", [CALCULATOR_PARAMS_SCHEMA, TRADE_REPORT_SCHEMA])
    def test_schemas_load(self, schema_name):
        """Схемы загружаются и проходят meta-validation."""
        schema = load_schema(schema_name)
        assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schemas_shipped_inside_package(self):
        """Схемы лежат рядом с модулем validators, а не в корне репозитория."""
        package_dir = Path(validators_module.__file__).parent
        assert SCHEMA_DIR == package_dir / "schema"
        assert sorted(p.name for p in SCHEMA_DIR.glob("*.json")) == [
            "calculator_params.json",
            "trade_report.json",
        ]

    def test_schema_cached(self):
        """Повторная загрузка возвращает кэшированную схему и валидатор."""
        assert load_schema(TRADE_REPORT_SCHEMA) is load_schema(TRADE_REPORT_SCHEMA)
        assert validator_for(TRADE_REPORT_SCHEMA) is validator_for(TRADE_REPORT_SCHEMA)

    def test_missing_schema(self):
        """Несуществующая схема → FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Schema not found"):
            load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        """Несуществующая директория → FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Schema not found"):
            load_schema(TRADE_REPORT_SCHEMA, tmp_path / "missing")

    def test_invalid_schema(self, tmp_path):
        """Схема, не проходящая meta-validation → ValueError."""
        (tmp_path / "broken.json").write_text('{"type": 42}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
            load_schema("broken", tmp_path)


# =============================================================================
# ТЕСТЫ: calculator_params
# =============================================================================


class TestCalculatorParamsContract:
    """Тесты контракта calculator_params."""

    def test_valid(self, valid_params):
        """Валидные параметры проходят."""
        validate_calculator_params(valid_params)
        assert validator_for(CALCULATOR_PARAMS_SCHEMA).is_valid(valid_params)

    def test_pydantic_dump_matches_contract(self):
        """model_dump() default параметров соответствует схеме."""
        validate_calculator_params(CalculatorParams().model_dump())

    @pytest.mark.parametrize("field", ["liquidity", "initial_price", "final_price", "fee_percent"])
    def test_missing_required(self, valid_params, field):
        """Отсутствие required поля → ValidationError."""
        del valid_params[field]
        with pytest.raises(ValidationError):
            validate_calculator_params(valid_params)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("liquidity", -1.0),
            ("initial_price", 0.0),
            ("final_price", -2.0),
            ("fee_percent", 100.0),
            ("fee_percent", -0.1),
            ("liquidity", "1000"),
        ],
    )
    def test_constraint_violations(self, valid_params, field, value):
        """Нарушения constraints и типов → ValidationError."""
        valid_params[field] = value
        with pytest.raises(ValidationError):
            validate_calculator_params(valid_params)

    def test_additional_properties_rejected(self, valid_params):
        """Лишние поля (например, параметры слайдера) отвергаются."""
        valid_params["decades"] = 3.0
        with pytest.raises(ValidationError):
            validate_calculator_params(valid_params)

    def test_all_violations_reported(self, valid_params):
        """Валидатор видит все нарушения сразу."""
        valid_params["liquidity"] = -1.0
        valid_params["final_price"] = 0.0
        errors = list(validator_for(CALCULATOR_PARAMS_SCHEMA).iter_errors(valid_params))
        assert len(errors) == 2


# =============================================================================
# ТЕСТЫ: trade_report
# =============================================================================


class TestTradeReportContract:
    """Тесты контракта trade_report."""

    def test_valid(self, valid_report):
        """Отчёт evaluate() проходит."""
        validate_trade_report(valid_report)
        assert validator_for(TRADE_REPORT_SCHEMA).is_valid(valid_report)

    def test_zero_trade_null_fee_side(self):
        """Нулевая сделка: fee_side = null допустим."""
        report = evaluate(CalculatorParams(final_price=1.0)).to_dict()
        assert report["fee_side"] is None
        validate_trade_report(report)

    def test_invalid_fee_side(self, valid_report):
        """Неизвестная сторона комиссии → ValidationError."""
        valid_report["fee_side"] = "eth"
        with pytest.raises(ValidationError):
            validate_trade_report(valid_report)

    def test_negative_fee_rejected(self, valid_report):
        """Отрицательная комиссия → ValidationError."""
        valid_report["fee_collected"] = -0.1
        with pytest.raises(ValidationError):
            validate_trade_report(valid_report)

    def test_missing_delta(self, valid_report):
        """Отсутствие wallet delta → ValidationError."""
        del valid_report["base_wallet_delta"]
        with pytest.raises(ValidationError):
            validate_trade_report(valid_report)
