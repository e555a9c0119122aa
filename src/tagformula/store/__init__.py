"""
Formula sequence store with cursor-addressed editing.
"""

from tagformula.store.formula_store import FormulaStore, StoreListener

__all__ = ["FormulaStore", "StoreListener"]
