"""Unit tests for the operator catalog."""

import unittest

from calculi_pkg.operators import (
    ARITY,
    COMMUTATIVE,
    INFIX_PRECEDENCE,
    TOKEN_MAP,
    Arity,
    Operator,
    display,
    operator_from_token,
    precedence,
)


class TestOperatorLookup(unittest.TestCase):
    """Test token resolution."""

    def test_infix_symbols(self):
        self.assertIs(operator_from_token("+"), Operator.ADD)
        self.assertIs(operator_from_token("-"), Operator.SUBTRACT)
        self.assertIs(operator_from_token("*"), Operator.MULTIPLY)
        self.assertIs(operator_from_token("/"), Operator.DIVIDE)
        self.assertIs(operator_from_token("%"), Operator.MODULO)
        self.assertIs(operator_from_token("^"), Operator.EXPONENT)

    def test_function_names(self):
        self.assertIs(operator_from_token("log"), Operator.LOG)
        self.assertIs(operator_from_token("root"), Operator.ROOT)
        self.assertIs(operator_from_token("max"), Operator.MAX)

    def test_function_names_ignore_case(self):
        self.assertIs(operator_from_token("SIN"), Operator.SIN)
        self.assertIs(operator_from_token("Sqrt"), Operator.SQRT)

    def test_unknown_tokens(self):
        self.assertIs(operator_from_token("foo"), Operator.ERROR)
        self.assertIs(operator_from_token(""), Operator.ERROR)
        # "error" is not a spelling users can reach
        self.assertIs(operator_from_token("error"), Operator.ERROR)
        self.assertNotIn("error", TOKEN_MAP)


class TestOperatorProperties(unittest.TestCase):
    """Test precedence, arity and display text."""

    def test_precedence_levels(self):
        self.assertEqual(precedence("+"), 1)
        self.assertEqual(precedence("-"), 1)
        self.assertEqual(precedence("*"), 3)
        self.assertEqual(precedence("/"), 3)
        self.assertEqual(precedence("%"), 3)
        self.assertEqual(precedence("^"), 5)

    def test_precedence_of_non_operators(self):
        self.assertEqual(precedence(None), -1)
        self.assertEqual(precedence("x"), -1)
        self.assertEqual(precedence("("), -1)
        self.assertEqual(Operator.SIN.precedence, -1)

    def test_arity(self):
        self.assertIs(Operator.SIN.arity, Arity.UNARY)
        self.assertIs(Operator.LN.arity, Arity.UNARY)
        self.assertIs(Operator.LOG.arity, Arity.BINARY)
        self.assertIs(Operator.ADD.arity, Arity.BINARY)
        self.assertIs(Operator.MAX.arity, Arity.VARIADIC)
        self.assertEqual(set(ARITY), set(Operator))

    def test_display(self):
        self.assertEqual(display(Operator.EXPONENT), "^")
        self.assertEqual(display(Operator.LOG), "log")
        self.assertEqual(str(Operator.CEIL), "ceil")

    def test_infix_flag(self):
        self.assertTrue(Operator.MODULO.is_infix)
        self.assertFalse(Operator.POW.is_infix)

    def test_commutative_set(self):
        self.assertEqual(COMMUTATIVE, {Operator.ADD, Operator.MULTIPLY})

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            INFIX_PRECEDENCE["&"] = 2
        with self.assertRaises(TypeError):
            TOKEN_MAP["plus"] = Operator.ADD


if __name__ == "__main__":
    unittest.main()
