"""
Error Taxonomy
==============
Exceptions raised by the model layer.

InvalidGeometryInput and FormulaCompileError reject a render-start request
before any state changes. FormulaEvaluationError is raised per evaluation and
is recovered by the animation driver.
"""
from __future__ import annotations


class InvalidGeometryInput(ValueError):
    """Render settings are non-numeric, degenerate, or out of range."""


class FormulaCompileError(ValueError):
    """A projection formula could not be compiled."""

    def __init__(self, message: str, channel: str = "", formula: str = "") -> None:
        super().__init__(message)
        self.channel = channel
        self.formula = formula


class FormulaEvaluationError(ArithmeticError):
    """A compiled formula failed for a concrete variable binding."""

    def __init__(self, message: str, bindings: dict[str, float] | None = None) -> None:
        super().__init__(message)
        self.bindings = dict(bindings or {})
