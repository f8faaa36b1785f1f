"""
Projection Evaluator
====================
Compiles user-written formulas over x, y, z into fast scalar callables.

Why is this file needed?
------------------------
1. Parsing: Formula text is parsed once with SymPy (implicit multiplication
   and ``^`` as power are accepted) and turned into a plain Python callable
   with ``lambdify``, so per-frame evaluation does not touch SymPy.
2. Isolation: Every evaluation failure (division by zero, math domain error,
   overflow, non-finite or complex result) surfaces as a single exception
   type the animation driver can recover from per point.

Classes:
    Evaluator: Formula factory.
    Formula: One compiled scalar formula.
    ProjectionFormulas: The X and Y channel pair.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Callable, Mapping, Sequence

import sympy as sp
from sympy.core.function import AppliedUndef
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    standard_transformations,
)
from sympy.printing.pycode import PythonCodePrinter

from wireframeprojector.config import FORMULA_VARIABLES
from wireframeprojector.model.errors import FormulaCompileError, FormulaEvaluationError
from wireframeprojector.model.geometry_primitives import Point2D, Point3D

logger = logging.getLogger(__name__)

_TRANSFORMATIONS = standard_transformations + (implicit_multiplication_application, convert_xor)


@dataclass(frozen=True)
class Formula:
    """A compiled scalar formula."""
    text: str
    variables: tuple[str, ...]
    expression: sp.Expr
    _func: Callable[..., object] = field(repr=False, compare=False)

    def evaluate(self, bindings: Mapping[str, float]) -> float:
        """
        Evaluate the formula for one variable binding.

        Args:
            bindings: Value for every variable name of the formula.

        Returns:
            A finite real number.

        Raises:
            FormulaEvaluationError: If the evaluation fails or the result is
                not a finite real number.
        """
        try:
            args = [float(bindings[name]) for name in self.variables]
        except KeyError as e:
            raise FormulaEvaluationError(f"Missing value for variable {e}.", dict(bindings)) from e

        try:
            value = self._func(*args)
        except (ArithmeticError, ValueError, TypeError, NameError) as e:
            raise FormulaEvaluationError(f"'{self.text}' failed: {e}", dict(bindings)) from e

        if isinstance(value, complex):
            if value.imag != 0.0:
                raise FormulaEvaluationError(f"'{self.text}' is complex ({value}).", dict(bindings))
            value = value.real

        try:
            result = float(value)
        except (TypeError, ValueError) as e:
            raise FormulaEvaluationError(f"'{self.text}' is not a number ({value!r}).", dict(bindings)) from e

        if not math.isfinite(result):
            raise FormulaEvaluationError(f"'{self.text}' is undefined ({result}).", dict(bindings))
        return result


class Evaluator:
    """Compiles formula text into `Formula` objects."""

    def __init__(self, variables: Sequence[str] = FORMULA_VARIABLES) -> None:
        self.variables: tuple[str, ...] = tuple(variables)
        self._symbols = {name: sp.Symbol(name) for name in self.variables}

    def compile(self, text: str, channel: str = "") -> Formula:
        """
        Parse and compile formula text.

        Args:
            text: Formula in plain math notation, e.g. ``x/y`` or ``2x/(y+1)``.
            channel: Output channel name used in error messages.

        Returns:
            The compiled formula.

        Raises:
            FormulaCompileError: If the text is empty, malformed, not a scalar
                expression, or references unknown variables or functions.
        """
        source = (text or "").strip()
        label = f"{channel} formula" if channel else "Formula"
        if not source:
            raise FormulaCompileError(f"{label} is empty.", channel, text)

        try:
            expr = parse_expr(source, local_dict=dict(self._symbols), transformations=_TRANSFORMATIONS)
        except Exception as e:
            raise FormulaCompileError(f"{label} '{source}' could not be parsed: {e}", channel, text) from e

        if not isinstance(expr, sp.Expr):
            raise FormulaCompileError(f"{label} '{source}' is not a scalar expression.", channel, text)

        unknown = sorted(str(s) for s in expr.free_symbols if str(s) not in self._symbols)
        if unknown:
            raise FormulaCompileError(
                f"{label} '{source}' uses unknown variables: {', '.join(unknown)}.", channel, text
            )

        undefined = sorted(str(f.func) for f in expr.atoms(AppliedUndef))
        if undefined:
            raise FormulaCompileError(
                f"{label} '{source}' uses unknown functions: {', '.join(undefined)}.", channel, text
            )

        # functions the plain `math` printer cannot emit would fail with NameError on every call
        _, not_supported, _ = PythonCodePrinter({"human": False}).doprint(expr)
        if not_supported:
            names = sorted({getattr(e.func, "__name__", str(e)) for e in not_supported})
            raise FormulaCompileError(
                f"{label} '{source}' uses functions that cannot be evaluated: {', '.join(names)}.", channel, text
            )

        args = [self._symbols[name] for name in self.variables]
        func = sp.lambdify(args, expr, modules="math")
        logger.debug(f"Compiled {label.lower()} '{source}' -> {expr}")
        return Formula(text=source, variables=self.variables, expression=expr, _func=func)


@dataclass(frozen=True)
class ProjectionFormulas:
    """The pair of formulas mapping a 3D point to the projection plane."""
    x: Formula
    y: Formula

    @classmethod
    def compile(cls, text_x: str, text_y: str, evaluator: Evaluator | None = None) -> ProjectionFormulas:
        """Compile both channels; nothing is returned unless both succeed."""
        evaluator = evaluator or Evaluator()
        return cls(
            x=evaluator.compile(text_x, channel="X"),
            y=evaluator.compile(text_y, channel="Y"),
        )

    def project(self, point: Point3D) -> Point2D:
        """
        Project one point.

        Raises:
            FormulaEvaluationError: If either channel fails for this point.
        """
        bindings = point.as_bindings()
        return Point2D(self.x.evaluate(bindings), self.y.evaluate(bindings))
