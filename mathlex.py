# Ethan Doughty
# mathlex.py
"""Command-line interface for mathlex, the math expression tokenizer."""

import argparse
import logging
import re
import time
from pathlib import Path
from typing import List, Optional

from frontend import patterns
from frontend.classifier import ClassifierRules
from frontend.errors import InvalidArgument
from frontend.splitter import split, split_lexemes
from frontend.tokenizer import tokenize
from analysis.diagnostics import Diagnostic, diagnose, has_errors, STRICT_ONLY_CODES
from analysis.functions import build_registry, load_function_names


def report_expression(expr: str, pattern, rules: ClassifierRules,
                      strict: bool = False, show_lexemes: bool = False) -> List[Diagnostic]:
    """Tokenize one expression and print tokens and diagnostics.

    Args:
        expr: Expression text
        pattern: Delimiter pattern for the splitter
        rules: Classifier collaborators
        strict: If True, advisory diagnostics are shown and any diagnostic fails
        show_lexemes: If True, dump the raw lexemes before the tokens

    Returns:
        Reported diagnostics
    """
    tokens = list(tokenize(split(expr, pattern), rules))

    print(f"=== Tokens for {expr!r} ===")

    if show_lexemes:
        print("Lexemes:")
        for lex in split_lexemes(expr, pattern):
            print(f"  {lex.offset:4d} {lex.text!r}")

    for tok in tokens:
        print("  ", tok)

    diagnostics = diagnose(tokens)
    if not strict:
        diagnostics = [d for d in diagnostics if d.code not in STRICT_ONLY_CODES]

    if diagnostics:
        print("Diagnostics:")
        for d in diagnostics:
            print("  -", d)

    return diagnostics


def read_expressions(file_path: str) -> List[str]:
    """Read expressions from a file, one per non-blank, non-comment line.

    Raises:
        OSError: The file cannot be read
    """
    src = Path(file_path).read_text(errors='replace')
    return [line for line in src.splitlines()
            if line.strip() and not line.lstrip().startswith("#")]


def build_rules(functions: Optional[str] = None, functions_file: Optional[str] = None,
                include_defaults: bool = True) -> ClassifierRules:
    """Build classifier rules from the CLI registry options.

    Raises:
        OSError: The functions file cannot be read
    """
    extra: List[str] = []
    if functions:
        extra.extend(name.strip() for name in functions.split(",") if name.strip())
    if functions_file:
        extra.extend(load_function_names(functions_file))
    return ClassifierRules().with_functions(build_registry(extra, include_defaults=include_defaults))


def run_tests(benchmark: bool = False) -> int:
    """Run the fixture and structural test suite.

    Returns:
        Exit code (0 for all tests passed, 1 otherwise)
    """
    import run_all_tests

    if not benchmark:
        return run_all_tests.main(return_code=True)

    t_start = time.perf_counter()
    result = run_all_tests.main(return_code=True)
    t_end = time.perf_counter()

    total_ms = (t_end - t_start) * 1000
    n_tests = max(len(run_all_tests.TEST_FILES), 1)

    print(f"\n--- Benchmark ---")
    print(f"  Fixture files: {len(run_all_tests.TEST_FILES)}")
    print(f"  Total:         {total_ms:.0f}ms")
    print(f"  Per-file:      {total_ms / n_tests:.1f}ms avg")

    return result


def main() -> int:
    """Main entry point for the mathlex CLI tool.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = argparse.ArgumentParser(
        prog="mathlex",
        description="mathlex: split and tokenize mathematical expressions"
    )
    parser.add_argument("expression", nargs="?", help="Expression to tokenize")
    parser.add_argument(
        "--file",
        metavar="PATH",
        help="Tokenize every non-blank, non-comment line of PATH"
    )
    parser.add_argument(
        "--pattern",
        metavar="REGEX",
        help="Delimiter pattern for the splitter (delimiters in a capturing group)"
    )
    parser.add_argument(
        "--functions",
        metavar="NAMES",
        help="Comma-separated extra function names"
    )
    parser.add_argument(
        "--functions-file",
        metavar="PATH",
        help="File with extra function names, one per line"
    )
    parser.add_argument(
        "--no-default-functions",
        action="store_true",
        help="Do not preload the builtin function names"
    )
    parser.add_argument(
        "--lexemes",
        action="store_true",
        help="Also print the raw lexemes with their offsets"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Show advisory diagnostics and exit with error on any diagnostic"
    )
    parser.add_argument(
        "--tests",
        action="store_true",
        help="Run test suite"
    )
    parser.add_argument(
        "--benchmark",
        action="store_true",
        help="Print timing summary (with --tests or --file)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.tests:
        return run_tests(benchmark=args.benchmark)

    if args.expression is None and args.file is None:
        parser.print_help()
        return 1

    pattern = patterns.ALL
    if args.pattern is not None:
        try:
            pattern = re.compile(args.pattern)
        except re.error as e:
            print(f"ERROR: invalid pattern {args.pattern!r}: {e}")
            return 1

    try:
        rules = build_rules(args.functions, args.functions_file,
                            include_defaults=not args.no_default_functions)
        expressions = read_expressions(args.file) if args.file else [args.expression]
    except OSError as e:
        print(f"ERROR: {e}")
        return 1

    t_start = time.perf_counter()
    reported: List[Diagnostic] = []
    try:
        for expr in expressions:
            reported += report_expression(expr, pattern, rules,
                                          strict=args.strict, show_lexemes=args.lexemes)
    except InvalidArgument as e:
        print(f"ERROR: {e}")
        return 1
    t_end = time.perf_counter()

    if args.benchmark:
        total_ms = (t_end - t_start) * 1000
        print(f"\n--- Benchmark ({len(expressions)} expressions) ---")
        print(f"  Total:     {total_ms:7.1f}ms")

    if has_errors(reported):
        print("\nUnrecognized or unbalanced input detected (W_UNKNOWN_TOKEN, W_UNBALANCED_PARENTHESIS)")

    if args.strict and reported:
        print(f"\nSTRICT MODE: {len(reported)} diagnostic(s) reported")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
