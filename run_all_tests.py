# Ethan Doughty
# run_all_tests.py

import sys
import re
import glob
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from frontend.classifier import ClassifierRules
from frontend.errors import InvalidArgument
from frontend.pipeline import lex_expression
from frontend.tokens import Token
from analysis.diagnostics import diagnose, STRICT_ONLY_CODES
from analysis.functions import build_registry

_REPO_ROOT = Path(__file__).resolve().parent


def test_sort_key(path: str) -> str:
    """Sort test files alphabetically by full path."""
    return path


TEST_FILES = sorted(glob.glob(str(_REPO_ROOT / "tests/**/*.expr"), recursive=True), key=test_sort_key)

EXPECT_RE = re.compile(r"#\s*EXPECT:\s*(.+)$")
FUNCTIONS_RE = re.compile(r"#\s*FUNCTIONS:\s*(.*)$")
EXPECT_FIELD_RE = re.compile(r"(tokens|kinds|positions|diagnostics|codes)\s*=\s*(.*)$")


def normalize_list_str(s: str) -> str:
    return " ".join(s.split())


def token_kind_str(tok: Token) -> str:
    """Render a token's kind the way fixture files spell it."""
    if tok.subkind is None:
        return str(tok.kind)
    return f"{tok.kind}.{tok.subkind}"


def parse_fixture(src: str) -> Tuple[Optional[str], Dict[str, str], Optional[List[str]]]:
    """Split a fixture file into expression, expectations and extra functions.

    The expression is the first line that is not a '#' comment line.

    Returns:
        (expression or None, field -> expected value, extra function names or None)
    """
    expression: Optional[str] = None
    expected: Dict[str, str] = {}
    functions: Optional[List[str]] = None

    for line in src.splitlines():
        stripped = line.strip()

        m_fn = FUNCTIONS_RE.match(stripped)
        if m_fn:
            functions = [n.strip() for n in m_fn.group(1).split(",") if n.strip()]
            continue

        m = EXPECT_RE.match(stripped)
        if m:
            m_field = EXPECT_FIELD_RE.match(m.group(1).strip())
            if m_field:
                expected[m_field.group(1)] = normalize_list_str(m_field.group(2))
            continue

        if stripped.startswith("#"):
            continue

        if expression is None and stripped:
            expression = line

    return expression, expected, functions


def run_test(path: str) -> bool:
    """Run a fixture file and return whether all expectations held."""
    print(f"===== Tokens for {path}")
    if not Path(path).exists():
        print("ERROR: file not found\n")
        return False

    src = Path(path).read_text(errors='replace')
    expression, expected, functions = parse_fixture(src)
    if expression is None:
        print("ERROR: no expression in fixture\n")
        return False

    rules = ClassifierRules()
    if functions is not None:
        rules = rules.with_functions(build_registry(functions))

    try:
        tokens = lex_expression(expression, rules=rules)
    except InvalidArgument as e:
        print(f"Error while tokenizing {path}: {e}\n")
        return False

    diagnostics = [d for d in diagnose(tokens) if d.code not in STRICT_ONLY_CODES]

    for tok in tokens:
        print("   ", tok)
    for d in diagnostics:
        print("-", d)

    actual = {
        "tokens": str(len(tokens)),
        "kinds": " ".join(token_kind_str(t) for t in tokens),
        "positions": " ".join(str(t.position) for t in tokens),
        "diagnostics": str(len(diagnostics)),
        "codes": " ".join(d.code for d in diagnostics),
    }

    passed = True
    for field, want in expected.items():
        got = actual[field]
        if got != want:
            print(f"ASSERT FAIL: expected {field} = {want}, got {got}")
            passed = False

    print("ASSERTIONS:", "PASS" if passed else "FAIL")
    print()
    return passed


def _run_structural_tests() -> tuple[int, int]:
    """Run structural Python tests and return (total, passed) counts."""
    import importlib.util
    structural_dir = _REPO_ROOT / "tests" / "structural"
    test_files = sorted(structural_dir.glob("test_*.py"))
    total = 0
    ok = 0
    for tf in test_files:
        spec = importlib.util.spec_from_file_location(tf.stem, tf)
        mod = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(mod)
        test_fns = [
            (name, obj)
            for name, obj in vars(mod).items()
            if name.startswith("test_") and callable(obj)
        ]
        for name, func in test_fns:
            total += 1
            try:
                func()
                print(f"===== Structural: {tf.stem}.{name}: PASS")
                ok += 1
            except AssertionError as e:
                print(f"===== Structural: {tf.stem}.{name}: FAIL: {e}")
            except Exception as e:
                print(f"===== Structural: {tf.stem}.{name}: ERROR: {type(e).__name__}: {e}")
    return total, ok


def main(return_code: bool = False) -> int:
    """Run all tests.

    Args:
        return_code: If True, return exit code instead of exiting

    Returns:
        Exit code (0 for all tests passed, 1 otherwise)
    """
    total = 0
    ok = 0

    for path in TEST_FILES:
        total += 1
        if run_test(path):
            ok += 1

    structural_total, structural_ok = _run_structural_tests()
    total += structural_total
    ok += structural_ok

    print(f"===== Summary: {ok}/{total} tests passed =====")

    rc = 0 if ok == total else 1
    if return_code:
        return rc
    sys.exit(rc)


if __name__ == "__main__":
    main()
