"""
JSON Schema Contract Validators

Проверка примитивных данных на границе с presentation layer
(JSON Schema Draft 2020-12, библиотека jsonschema).

Схемы лежат внутри пакета, в schema/ рядом с этим модулем:
- calculator_params.json (входящий mapping параметров калькулятора)
- trade_report.json (исходящий TradeReport.to_dict())

Схемы читаются лениво при первом обращении и кэшируются.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Final, Mapping

import jsonschema
from jsonschema import Draft202012Validator

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"

CALCULATOR_PARAMS_SCHEMA: Final[str] = "calculator_params"
TRADE_REPORT_SCHEMA: Final[str] = "trade_report"


# =============================================================================
# SCHEMA LOADING
# =============================================================================


@lru_cache(maxsize=None)
def load_schema(schema_name: str, schema_dir: Path = SCHEMA_DIR) -> dict[str, Any]:
    """
    Чтение схемы <schema_dir>/<schema_name>.json с meta-validation.

    Raises:
        FileNotFoundError: файла схемы нет
        ValueError: схема не проходит meta-validation Draft 2020-12
    """
    schema_path = schema_dir / f"{schema_name}.json"
    if not schema_path.is_file():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e
    return schema


@lru_cache(maxsize=None)
def validator_for(schema_name: str) -> Draft202012Validator:
    """Скомпилированный валидатор для схемы из SCHEMA_DIR."""
    return Draft202012Validator(load_schema(schema_name))


# =============================================================================
# BOUNDARY CHECKS
# =============================================================================


def validate_calculator_params(data: Mapping[str, Any]) -> None:
    """
    Проверка входящих параметров калькулятора.

    Raises:
        jsonschema.ValidationError: данные не соответствуют calculator_params.json
    """
    validator_for(CALCULATOR_PARAMS_SCHEMA).validate(dict(data))


def validate_trade_report(data: Mapping[str, Any]) -> None:
    """
    Проверка исходящего отчёта о сделке.

    Raises:
        jsonschema.ValidationError: данные не соответствуют trade_report.json
    """
    validator_for(TRADE_REPORT_SCHEMA).validate(dict(data))
