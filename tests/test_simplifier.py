"""Unit tests for the identity simplifier."""

import unittest

from calculi_pkg.expression import End, Function, Number, Variable
from calculi_pkg.operators import Operator
from calculi_pkg.simplifier import Simplified, combine, simplify, simplify_binary

x = Variable("x")
y = Variable("y")


def node(operator, *operands):
    return Function(operator, operands)


class TestSimplifyBinary(unittest.TestCase):
    """Test the identity table one rule at a time."""

    def test_zero_factor(self):
        self.assertEqual(simplify_binary(Operator.MULTIPLY, Number(0), x), Number(0))
        self.assertEqual(simplify_binary(Operator.MULTIPLY, x, Number(0)), Number(0))

    def test_zero_power(self):
        self.assertEqual(simplify_binary(Operator.EXPONENT, Number(0), x), Number(0))
        self.assertEqual(simplify_binary(Operator.EXPONENT, x, Number(0)), Number(1))

    def test_unit_factor(self):
        self.assertIs(simplify_binary(Operator.MULTIPLY, Number(1), x), Simplified.RIGHT)
        self.assertIs(simplify_binary(Operator.MULTIPLY, x, Number(1)), Simplified.LEFT)

    def test_unit_power(self):
        self.assertEqual(simplify_binary(Operator.EXPONENT, Number(1), x), Number(1))
        self.assertIs(simplify_binary(Operator.EXPONENT, x, Number(1)), Simplified.LEFT)

    def test_additive_zero(self):
        self.assertIs(simplify_binary(Operator.ADD, Number(0), x), Simplified.RIGHT)
        self.assertIs(simplify_binary(Operator.ADD, x, Number(0)), Simplified.LEFT)
        self.assertIs(simplify_binary(Operator.SUBTRACT, x, Number(0)), Simplified.LEFT)

    def test_subtract_from_zero_is_kept(self):
        self.assertIs(simplify_binary(Operator.SUBTRACT, Number(0), x), Simplified.NONE)

    def test_divide_by_one(self):
        self.assertIs(simplify_binary(Operator.DIVIDE, x, Number(1)), Simplified.LEFT)
        self.assertIs(simplify_binary(Operator.DIVIDE, Number(1), x), Simplified.NONE)

    def test_symbolic_operands_untouched(self):
        self.assertIs(simplify_binary(Operator.MULTIPLY, x, y), Simplified.NONE)
        self.assertIs(simplify_binary(Operator.MODULO, x, Number(1)), Simplified.NONE)


class TestCombine(unittest.TestCase):
    def test_collapses(self):
        self.assertEqual(combine(Operator.MULTIPLY, x, Number(1)), x)
        self.assertEqual(combine(Operator.ADD, Number(0), y), y)

    def test_builds_node(self):
        self.assertEqual(combine(Operator.ADD, x, y), node(Operator.ADD, x, y))

    def test_end_operand(self):
        self.assertEqual(combine(Operator.ADD, x, End()), End())


class TestSimplifyTree(unittest.TestCase):
    """Test the bottom-up pass over finished trees."""

    def test_nested_identities(self):
        tree = node(Operator.ADD, node(Operator.MULTIPLY, x, Number(1)), Number(0))
        self.assertEqual(simplify(tree), x)

    def test_collapse_propagates_upwards(self):
        # (x * 0) + y -> 0 + y -> y
        tree = node(Operator.ADD, node(Operator.MULTIPLY, x, Number(0)), y)
        self.assertEqual(simplify(tree), y)

    def test_inside_named_functions(self):
        tree = node(Operator.SIN, node(Operator.MULTIPLY, Number(1), x))
        self.assertEqual(simplify(tree), node(Operator.SIN, x))

    def test_non_table_operator_kept(self):
        tree = node(Operator.MODULO, x, Number(1))
        self.assertEqual(simplify(tree), tree)

    def test_leaves(self):
        self.assertEqual(simplify(x), x)
        self.assertEqual(simplify(Number(2)), Number(2))
        self.assertEqual(simplify(End()), End())

    def test_idempotent(self):
        trees = [
            node(Operator.ADD, node(Operator.MULTIPLY, x, Number(1)), Number(0)),
            node(
                Operator.MULTIPLY,
                node(Operator.EXPONENT, x, Number(1)),
                node(Operator.SUBTRACT, y, Number(0)),
            ),
            node(Operator.DIVIDE, node(Operator.COS, x), Number(1)),
            node(Operator.MAX, node(Operator.ADD, Number(0), x), y),
        ]
        for tree in trees:
            with self.subTest(tree=str(tree)):
                once = simplify(tree)
                self.assertEqual(simplify(once), once)


if __name__ == "__main__":
    unittest.main()
