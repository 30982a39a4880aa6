# Ethan Doughty
# functions.py
"""Function-name registry for the expression classifier.

KNOWN_FUNCTIONS is the default catalogue of names classified as function
operators. Registries are frozensets so a single instance can be shared
read-only between tokenizer calls.
"""

from __future__ import annotations
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Union

# Sorted alphabetically for maintainability.
KNOWN_FUNCTIONS = {
    "abs", "acos", "asin", "atan",
    "ceil", "cos", "cosh",
    "exp",
    "floor",
    "ln", "log", "log10",
    "max", "min",
    "pow",
    "round",
    "sign", "sin", "sinh", "sqrt",
    "tan", "tanh",
}

DEFAULT_REGISTRY: FrozenSet[str] = frozenset(KNOWN_FUNCTIONS)


def parse_function_names(text: str) -> List[str]:
    """Extract function names from registry file text.

    One name per line; blank lines and '#' comments are ignored.
    """
    names: List[str] = []
    for line in text.splitlines():
        name = line.split("#", 1)[0].strip()
        if name:
            names.append(name)
    return names


def load_function_names(path: Union[str, Path]) -> List[str]:
    """Read function names from a registry file.

    Raises:
        OSError: The file cannot be read
    """
    source = Path(path).read_text(encoding="utf-8", errors="replace")
    return parse_function_names(source)


def build_registry(extra: Optional[Iterable[str]] = None,
                   include_defaults: bool = True) -> FrozenSet[str]:
    """Build a read-only registry from the defaults plus extra names.

    Args:
        extra: Additional function names (case-sensitive)
        include_defaults: If False, start from an empty registry

    Returns:
        Frozen set of known function names
    """
    names = set(KNOWN_FUNCTIONS) if include_defaults else set()
    if extra:
        names.update(extra)
    return frozenset(names)
