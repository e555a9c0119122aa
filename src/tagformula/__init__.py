"""
tagformula: interactive formula builder core.

Free text fragments are classified into tokens (numbers, percentages,
operators, tags), edited at a cursor, and re-evaluated after every edit.
"""

from tagformula.config import FormulaConfig
from tagformula.session import FormulaSession

__all__ = ["FormulaConfig", "FormulaSession"]
