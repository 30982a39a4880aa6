# Ethan Doughty
# analysis/__init__.py
"""Analysis package: function registry and token diagnostics."""

from analysis.diagnostics import Diagnostic, diagnose, has_errors, STRICT_ONLY_CODES
from analysis.functions import KNOWN_FUNCTIONS, DEFAULT_REGISTRY, build_registry, load_function_names

__all__ = [
    "Diagnostic", "diagnose", "has_errors", "STRICT_ONLY_CODES",
    "KNOWN_FUNCTIONS", "DEFAULT_REGISTRY", "build_registry", "load_function_names",
]
