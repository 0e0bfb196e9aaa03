"""Tests for configuration values and structured logging."""

import logging
import unittest

from calculi_pkg import config
from calculi_pkg.logging_config import (
    StructuredFormatter,
    get_logger,
    parse_module_levels,
    setup_logging,
)


class TestConfig(unittest.TestCase):
    def test_limits_are_positive(self):
        self.assertGreater(config.MAX_INPUT_LENGTH, 0)
        self.assertGreater(config.MAX_EXPRESSION_DEPTH, 0)
        self.assertGreater(config.MAX_TREE_DEPTH, config.MAX_EXPRESSION_DEPTH)
        self.assertGreater(config.MAX_EXPRESSION_NODES, 0)
        self.assertGreater(config.MAX_SOLVE_ITERATIONS, 0)
        self.assertLess(config.PLOT_X_MIN, config.PLOT_X_MAX)

    def test_version(self):
        self.assertIsInstance(config.VERSION, str)
        self.assertTrue(config.VERSION)

    def test_binding_pattern(self):
        self.assertIsNotNone(config.BINDING_RE.match("x = -4.5e2"))
        self.assertIsNone(config.BINDING_RE.match("2x = 1"))

    def test_with_clause_pattern(self):
        self.assertEqual(
            config.WITH_CLAUSE_RE.split("x + a WITH a=1", maxsplit=1), ["x + a", "a=1"]
        )


class TestLogging(unittest.TestCase):
    def setUp(self):
        self.logger = logging.getLogger("calculi")
        self.saved = (list(self.logger.handlers), self.logger.level)

    def tearDown(self):
        handlers, level = self.saved
        for handler in self.logger.handlers:
            if handler not in handlers:
                handler.close()
        self.logger.handlers[:] = handlers
        self.logger.setLevel(level)

    def test_get_logger_hierarchy(self):
        self.assertEqual(get_logger("solver").name, "calculi.solver")

    def test_structured_format(self):
        record = logging.LogRecord(
            "calculi.test", logging.INFO, __file__, 1, "hello %s", ("world",), None
        )
        line = StructuredFormatter().format(record)
        self.assertTrue(line.endswith("[INFO] calculi.test: hello world"))

    def test_setup_logging_with_file(self):
        import os
        import tempfile

        handle, path = tempfile.mkstemp(suffix=".log")
        os.close(handle)
        try:
            logger = setup_logging(level="DEBUG", log_file=path)
            self.assertEqual(logger.level, logging.DEBUG)
            get_logger("test").debug("written to file")
            for handler in logger.handlers:
                handler.flush()
            with open(path, encoding="utf-8") as f:
                self.assertIn("calculi.test: written to file", f.read())
        finally:
            for handler in list(self.logger.handlers):
                handler.close()
            os.remove(path)

    def test_module_levels(self):
        setup_logging(level="WARNING", module_levels={"solver": "debug"})
        try:
            self.assertTrue(get_logger("solver").isEnabledFor(logging.DEBUG))
            self.assertFalse(get_logger("parser").isEnabledFor(logging.DEBUG))
        finally:
            setup_logging(level="WARNING")
        self.assertEqual(get_logger("solver").level, logging.NOTSET)

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            setup_logging(level="LOUD")

    def test_parse_module_levels(self):
        self.assertEqual(
            parse_module_levels(["solver=debug", "parser=ERROR, api=info"]),
            {"solver": "DEBUG", "parser": "ERROR", "api": "INFO"},
        )
        with self.assertRaises(ValueError):
            parse_module_levels(["solver"])
        with self.assertRaises(ValueError):
            parse_module_levels(["solver=LOUD"])


if __name__ == "__main__":
    unittest.main()
