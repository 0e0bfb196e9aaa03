"""Tests for the SymPy conversion used for LaTeX output."""

import pytest
import sympy as sp

from calculi_pkg.evaluator import evaluate
from calculi_pkg.expression import End, Number
from calculi_pkg.parser import parse
from calculi_pkg.sympy_bridge import to_latex, to_sympy

x, y = sp.symbols("x y")


class TestToSympy:
    def test_polynomial(self):
        assert to_sympy(parse("x ^ 2 + 3 * x - 1")) == x**2 + 3 * x - 1

    def test_functions(self):
        assert to_sympy(parse("sin(x) * exp(y)")) == sp.sin(x) * sp.exp(y)
        assert to_sympy(parse("log(x, 2)")) == sp.log(x, 2)
        assert to_sympy(parse("max(x, y)")) == sp.Max(x, y)

    def test_division(self):
        assert sp.simplify(to_sympy(parse("x / y")) - x / y) == 0

    def test_numbers(self):
        assert to_sympy(Number(2)) == sp.Integer(2)
        assert to_sympy(Number(2.5)) == sp.Float(2.5)

    def test_modulo_sign_follows_dividend(self):
        converted = to_sympy(parse("x % y"))
        for a, b in [(-7, 3), (7, -3), (7, 3), (-7, -3)]:
            folded = evaluate(parse("x % y"), {"x": a, "y": b}).to_float()
            assert converted.subs({x: a, y: b}) == float(folded)

    def test_end_rejected(self):
        with pytest.raises(ValueError):
            to_sympy(End())

    def test_unknown_function_rejected(self):
        with pytest.raises(ValueError):
            to_sympy(parse("foo(x)"))

    def test_wrong_operand_count_rejected(self):
        with pytest.raises(ValueError):
            to_sympy(parse("sin(x, y)"))


class TestToLatex:
    def test_sqrt(self):
        assert to_latex(parse("sqrt(x)")) == "\\sqrt{x}"

    def test_power(self):
        assert to_latex(parse("x ^ 2")) == "x^{2}"
