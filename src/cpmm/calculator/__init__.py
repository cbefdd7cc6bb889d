"""
Calculator session: externally owned parameters, evaluation and report.
"""

from src.cpmm.calculator.params import CalculatorParams
from src.cpmm.calculator.session import (
    CpmmCalculator,
    TradeReport,
    evaluate,
    evaluate_contract,
)

__all__ = [
    "CalculatorParams",
    "CpmmCalculator",
    "TradeReport",
    "evaluate",
    "evaluate_contract",
]
