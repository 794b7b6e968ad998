"""Centralized configuration for object_expressions.

Settings are module-level constants. Each can be overridden through an
environment variable prefixed with OBJECT_EXPRESSIONS_.
"""

import importlib.metadata
import os

try:
    VERSION = importlib.metadata.version("object-expressions")
except importlib.metadata.PackageNotFoundError:
    # Fallback if package not installed
    VERSION = "0.1.0"

# Trees deeper than this are rejected by ExpressionValidator
MAX_EXPRESSION_DEPTH = int(os.getenv("OBJECT_EXPRESSIONS_MAX_DEPTH", "500"))

# One of SILENT, MINIMAL, MODERATE, DETAILED, VERBOSE
LOG_LEVEL = os.getenv("OBJECT_EXPRESSIONS_LOG_LEVEL", "MODERATE").upper()

# Derivative cross-checks against sympy
VERIFY_TOLERANCE = float(os.getenv("OBJECT_EXPRESSIONS_VERIFY_TOLERANCE", "1e-9"))
VERIFY_SAMPLES = int(os.getenv("OBJECT_EXPRESSIONS_VERIFY_SAMPLES", "5"))
