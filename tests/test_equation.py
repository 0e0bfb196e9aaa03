"""Tests for the Equation value type."""

from dataclasses import FrozenInstanceError

import pytest

from calculi_pkg.equation import Equation
from calculi_pkg.expression import Number, Variable
from calculi_pkg.parser import parse


class TestEquationScenarios:
    """End-to-end behaviour of the six reference scenarios."""

    def test_evaluate_with_bindings(self):
        eq = Equation.new("x - 2 * a + 4 ^ b")
        assert float(eq.solve_with({"x": 10, "a": 4.5, "b": 1}).to_float()) == 5.0

    def test_solve_with_bindings(self):
        eq = Equation.new("x - 2 * a + 4 ^ b")
        residual, value = eq.solve_for(10.0, {"a": 4.5, "b": 1})
        assert residual == Variable("x")
        assert float(value) == 15.0

    def test_solve_grouped(self):
        residual, value = Equation.new("(16 + x) / 4").solve_for(8.0)
        assert residual == Variable("x")
        assert float(value) == 16.0

    def test_solve_exponent(self):
        residual, value = Equation.new("4 ^ x * 3").solve_for(192.0)
        assert residual == Variable("x")
        assert float(value) == pytest.approx(3.0, abs=1e-5)

    def test_zero_product(self):
        assert Equation.new("x * 0").solve_with({}) == Number(0.0)

    def test_derivative_text(self):
        assert Equation.new("x ^ 3").derive().text == "3 * x ^ 2"


class TestEquationValue:
    def test_keeps_source_text(self):
        eq = Equation.new("2 + 3")
        assert eq.text == "2 + 3"
        assert str(eq) == "2 + 3"
        assert eq.expression == Number(5)

    def test_from_expression_uses_canonical_text(self):
        eq = Equation.from_expression(parse("(a+b)*c"))
        assert eq.text == "(a + b) * c"

    def test_simplify(self):
        assert Equation.new("sin(x * 1)").simplify().text == "sin(x)"

    def test_free_variables(self):
        assert Equation.new("a * sqrt(x + 1)").free_variables() == {"a", "x"}
        assert Equation.new("2 * 3").free_variables() == set()

    def test_solve_with_without_bindings(self):
        eq = Equation.new("y + 2 * 3")
        assert str(eq.solve_with()) == "y + 6"

    def test_frozen(self):
        eq = Equation.new("x")
        with pytest.raises(FrozenInstanceError):
            eq.text = "y"

    def test_structural_equality(self):
        assert Equation.new("x + 1") == Equation.new("x + 1")
        assert Equation.new("x + 1") != Equation.new("x+1")

    def test_long_flat_sum_folds(self):
        eq = Equation.new(" + ".join(["1"] * 120))
        assert eq.solve_with({}) == Number(120)

    def test_long_flat_sum_of_variables(self):
        eq = Equation.new(" + ".join(f"x{i}" for i in range(120)))
        bindings = {f"x{i}": 1 for i in range(120)}
        assert eq.solve_with(bindings) == Number(120)
        assert eq.derive().solve_with({}) == Number(120)
