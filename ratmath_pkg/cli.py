from __future__ import annotations

import argparse
import json
from typing import Any

from .api import evaluate
from .config import VERSION
from .logging_config import get_logger, setup_logging

logger = get_logger("cli")

_REPL_EXIT_WORDS = ("quit", "exit")


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running ratmath health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    checks = [
        ("Rational arithmetic", "1/2 + 1/3", "5/6"),
        ("Repeating decimals", "0.#3 * 3", "1"),
        ("Interval arithmetic", "(-1:1)^2", "0:1"),
        ("Uncertainty literals", "1.5[+-0.2]", "13/10:17/10"),
    ]
    for label, expression, expected in checks:
        result = evaluate(expression)
        if result.ok and result.result == expected:
            print(f"[OK] {label} works")
            checks_passed += 1
        else:
            print(f"[FAIL] {label}: expected {expected}, got {result.result or result.error}")
            checks_failed += 1

    try:
        import sympy as sp

        from .api import to_sympy
        from .parser import parse

        if to_sympy(parse("3/4")) == sp.Rational(3, 4):
            print("[OK] SymPy conversion works")
            checks_passed += 1
        else:
            print("[FAIL] SymPy conversion returned an unexpected value")
            checks_failed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy conversion failed: {e}")
        checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result_pretty(res: dict[str, Any], output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result dictionary (see EvalResult.to_dict)
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res, indent=2, ensure_ascii=False))
        return
    if not res.get("ok"):
        print("Error:", res.get("error"))
        return
    print(f"Result: {res.get('result')}")
    if res.get("kind") == "interval":
        print(f"Decimal: {res.get('decimal')}")
        print(f"Repeating: {res.get('repeating')}")
        print(f"Mixed: {res.get('mixed')}")
        return
    if res.get("kind") == "rational":
        print(f"Decimal: {res.get('repeating')}")
        if res.get("mixed") != res.get("result"):
            print(f"Mixed: {res.get('mixed')}")
    if res.get("scientific"):
        print(f"Scientific: {res.get('scientific')}")


def repl_loop(output_format: str = "human", type_aware: bool = True) -> None:
    """Interactive loop: evaluate one expression per line until quit, exit or EOF."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("ratmath - exact rational calculator. Type 'quit' to exit.")
    while True:
        try:
            line = input(">>> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        expression = line.strip()
        if not expression:
            continue
        if expression.lower() in _REPL_EXIT_WORDS:
            logger.debug("REPL exit requested")
            break
        result = evaluate(expression, type_aware=type_aware)
        print_result_pretty(result.to_dict(), output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the ratmath CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="ratmath")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--no-type-aware",
        action="store_true",
        help="Keep every value as an interval and read decimals as measurements",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()

    type_aware = not args.no_type_aware
    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        # Remove ">>>" prompt if present
        if expr.startswith(">>>"):
            expr = expr[3:].strip()
        logger.debug("Evaluating %r (type_aware=%s)", expr, type_aware)
        result = evaluate(expr, type_aware=type_aware)
        print_result_pretty(result.to_dict(), args.format)
        return 0 if result.ok else 1

    repl_loop(args.format, type_aware=type_aware)
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m ratmath_pkg.cli"""
    import sys

    sys.exit(main_entry())
