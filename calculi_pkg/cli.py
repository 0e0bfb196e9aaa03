"""Command-line interface: one-shot evaluation and an interactive REPL."""

from __future__ import annotations

import argparse
import json

from . import api, config
from .config import VERSION, WITH_CLAUSE_RE
from .formatting import format_number, prettify_expr
from .logging_config import get_logger, parse_module_levels, setup_logging
from .parser import clear_cache, parse_bindings
from .types import EvalResult, SolveResult, ValidationError

logger = get_logger("cli")


def print_result_pretty(
    res: EvalResult | SolveResult,
    output_format: str = "human",
    show_unbound: bool = True,
) -> None:
    """Print result in specified format.

    Args:
        res: Result object from the API
        output_format: "json" for JSON output, "human" for human-readable
        show_unbound: List variables left in the result; off for derivatives,
            whose variables are the ones differentiated against
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), indent=2, ensure_ascii=False))
        return
    if not res.ok:
        print("Error:", res.error)
        return
    if isinstance(res, SolveResult):
        if res.solved:
            print(f"{res.variable} = {format_number(res.value)}")
        else:
            print(f"Partial: {prettify_expr(res.residual)} = {format_number(res.value)}")
        return
    if res.value is not None:
        print(format_number(res.value))
    elif res.free_variables is None:
        # LaTeX source, plot text or plot file path
        print(res.result)
    else:
        print(prettify_expr(res.result))
    if show_unbound and res.free_variables:
        print("Unbound:", ", ".join(res.free_variables))


def _split_with_clause(text: str) -> tuple[str, dict]:
    """Split ``"<expr> with a=1, b=2"`` into the expression and its bindings."""
    parts = WITH_CLAUSE_RE.split(text, maxsplit=1)
    if len(parts) == 1:
        return text.strip(), {}
    return parts[0].strip(), parse_bindings(parts[1])


def _solve_command(text: str) -> SolveResult:
    expr_text, bindings = _split_with_clause(text)
    if "=" not in expr_text:
        return SolveResult(ok=False, error="Usage: solve <expr> = <outcome> [with a=1, b=2]")
    expression, outcome_text = expr_text.rsplit("=", 1)
    try:
        outcome = float(outcome_text)
    except ValueError:
        return SolveResult(ok=False, error=f"Outcome must be a number, got '{outcome_text.strip()}'")
    return api.solve(expression, outcome, bindings)


def handle_command(raw: str) -> EvalResult | SolveResult:
    """Dispatch one REPL line to the API."""
    command, _, rest = raw.partition(" ")
    command = command.lower()
    if command == "derive":
        return api.diff(*_split_with_clause(rest))
    if command == "solve":
        return _solve_command(rest)
    if command == "latex":
        return api.latex(rest)
    if command == "simplify":
        return api.simplify_expression(rest)
    if command == "plot":
        return api.plot(rest, ascii=True)
    expression, bindings = _split_with_clause(raw)
    return api.evaluate(expression, bindings)


def _is_derive(raw: str) -> bool:
    return raw.partition(" ")[0].lower() == "derive"


def repl_loop(output_format: str = "human") -> None:
    """Interactive REPL loop with graceful interrupt handling."""
    try:
        import readline  # noqa: F401
    except (ImportError, ModuleNotFoundError):
        # readline not available on Windows - that's fine
        pass

    print("Calculi: type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        if raw.lower() in ("quit", "exit"):
            print("Goodbye.")
            break
        if raw.lower() == "help":
            print_help_text()
            continue
        try:
            res = handle_command(raw)
        except ValidationError as e:
            print("Error:", e)
            continue
        print_result_pretty(res, output_format, show_unbound=not _is_derive(raw))


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""Calculi version {VERSION}

Expressions:
  x - 2 * a + 4 ^ b with x=10, a=4.5, b=1    evaluate with bindings
  3x + 2                                       folds what it can, keeps the rest
  sin(x), log(x, 2), root(x, 3), max(a, b, c)  named functions

Commands:
  derive <expr> [with a=1]                     derivative with respect to the unbound variables
  solve <expr> = <outcome> [with a=1, b=2]     solve for the one remaining unknown
  simplify <expr>                              apply identity simplifications
  latex <expr>                                 render as LaTeX
  plot <expr>                                  ASCII plot of a single-variable expression
  help                                         show this text
  quit                                         exit

Operators: + - * / % ^ (unary minus binds looser than ^)
Functions: pow log ln exp sqrt root sin cos tan sec csc cot abs floor round ceil max min
"""
    print(help_text)


def _apply_config_overrides(args: argparse.Namespace) -> None:
    if args.precision and args.precision > 0:
        config.OUTPUT_PRECISION = int(args.precision)
    if args.max_depth and args.max_depth > 0:
        config.MAX_EXPRESSION_DEPTH = int(args.max_depth)
        # Cached parses were validated against the previous limit
        clear_cache()
    if args.max_solve_iterations and args.max_solve_iterations > 0:
        config.MAX_SOLVE_ITERATIONS = int(args.max_solve_iterations)


def _run_once(expr: str, args: argparse.Namespace, bindings: dict) -> EvalResult | SolveResult:
    if args.plot:
        x_min, x_max = args.range if args.range else (None, None)
        return api.plot(
            expr,
            x_min=x_min,
            x_max=x_max,
            ascii=args.ascii,
            derivative=args.derive,
            output=args.output,
        )
    if args.derive:
        return api.diff(expr, bindings)
    if args.latex:
        return api.latex(expr)
    if args.solve_for is not None:
        return api.solve(expr, args.solve_for, bindings)
    return api.evaluate(expr, bindings)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Calculi CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    parser = argparse.ArgumentParser(prog="calculi")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "-b",
        "--bind",
        action="append",
        default=[],
        metavar="NAME=VALUE[,...]",
        help="Bind variables (repeatable), e.g. -b x=10 -b a=4.5,b=1",
    )
    parser.add_argument(
        "-s",
        "--solve-for",
        type=float,
        metavar="OUTCOME",
        help="Solve the expression for its remaining unknown",
    )
    parser.add_argument(
        "-d", "--derive", action="store_true", help="Differentiate the expression"
    )
    parser.add_argument("--latex", action="store_true", help="Render as LaTeX")
    parser.add_argument("--plot", action="store_true", help="Plot the expression")
    parser.add_argument(
        "--range",
        type=float,
        nargs=2,
        metavar=("MIN", "MAX"),
        help="Plot range for x (default: -10 10)",
    )
    parser.add_argument(
        "--ascii", action="store_true", help="Draw the plot as ASCII text"
    )
    parser.add_argument("--output", type=str, help="PNG file for the plot")
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--max-depth", type=int, help="Maximum nesting depth of an expression"
    )
    parser.add_argument(
        "--max-solve-iterations",
        type=int,
        help="Maximum inversion steps when solving",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument(
        "--log-module",
        action="append",
        default=[],
        metavar="MODULE=LEVEL[,...]",
        help="Per-module log level (repeatable), e.g. --log-module solver=DEBUG",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    args = parser.parse_args(argv)

    try:
        module_levels = parse_module_levels(args.log_module)
    except ValueError as e:
        print("Error:", e)
        return 1
    setup_logging(
        level=args.log_level, log_file=args.log_file, module_levels=module_levels
    )
    _apply_config_overrides(args)

    if args.version:
        print(VERSION)
        return 0

    try:
        bindings: dict = {}
        for entry in args.bind:
            bindings.update(parse_bindings(entry))
    except ValidationError as e:
        print("Error:", e)
        return 1

    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        if not expr:
            print("Error: Empty input. Please enter a valid expression.")
            return 1
        logger.debug("Running %r once", expr)
        res = _run_once(expr, args, bindings)
        print_result_pretty(res, args.format, show_unbound=not args.derive)
        return 0 if res.ok else 1

    repl_loop(args.format)
    return 0
