"""Fuzzing tests for parser, evaluator and solver with random inputs."""

import random
import string
import unittest

from calculi_pkg.calculus import derive
from calculi_pkg.evaluator import evaluate
from calculi_pkg.expression import End, Expression
from calculi_pkg.parser import parse
from calculi_pkg.solver import solve_for
from calculi_pkg.types import ValidationError

MATH_ALPHABET = "0123456789.xyab+-*/%^(), " + "sincoslogmaxsqrt"


class TestParserFuzzing(unittest.TestCase):
    """Parsing is total: random input never raises anything but ValidationError."""

    def setUp(self):
        self.rng = random.Random(20240611)

    def check(self, text):
        try:
            tree = parse(text)
        except ValidationError:
            return
        self.assertIsInstance(tree, Expression)
        folded = evaluate(tree, {"x": 1.5, "a": -2})
        self.assertIsInstance(folded, Expression)
        residual, _ = solve_for(tree, 3.0, {"a": 2})
        self.assertIsInstance(residual, Expression)
        self.assertIsInstance(derive(tree), Expression)
        self.assertIsInstance(str(folded), str)

    def test_random_strings(self):
        """Test parser on random garbage strings."""
        for _ in range(200):
            length = self.rng.randint(1, 100)
            self.check("".join(self.rng.choices(string.printable, k=length)))

    def test_random_math_like_strings(self):
        for _ in range(300):
            length = self.rng.randint(1, 60)
            self.check("".join(self.rng.choices(MATH_ALPHABET, k=length)))

    def test_malformed_expressions(self):
        """Test parser handles malformed expressions."""
        malformed = [
            "(((",
            ")))",
            "x++y",
            "x^^",
            "*/x",
            "",
            "   ",
            ",,,",
            "sin(",
            "max(,)",
            "1..2",
        ]
        for expr in malformed:
            with self.subTest(expr=expr):
                self.check(expr)

    def test_empty_input_is_end(self):
        self.assertEqual(parse(""), End())


if __name__ == "__main__":
    unittest.main()
