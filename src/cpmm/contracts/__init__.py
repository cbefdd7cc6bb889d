"""
Contract Validation Module

Валидация JSON контрактов на границе CPMM калькулятора.
"""

from .validators import (
    CALCULATOR_PARAMS_SCHEMA,
    SCHEMA_DIR,
    TRADE_REPORT_SCHEMA,
    load_schema,
    validate_calculator_params,
    validate_trade_report,
    validator_for,
)

__all__ = [
    # Schema location
    "SCHEMA_DIR",
    "CALCULATOR_PARAMS_SCHEMA",
    "TRADE_REPORT_SCHEMA",
    # Loading
    "load_schema",
    "validator_for",
    # Boundary checks
    "validate_calculator_params",
    "validate_trade_report",
]
