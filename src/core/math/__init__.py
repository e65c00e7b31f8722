"""
Core math modules для круговой геометрии

Математические примитивы и численные алгоритмы с гарантией стабильности.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_ARC_CONTAINMENT,
    EPS_ROUNDTRIP,
    # NaN/Inf sanitization
    is_valid_float,
    sanitize_float,
    # Modular arithmetic
    positive_mod,
    # Utilities
    clamp,
    # Float comparisons
    exact_equal,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_ARC_CONTAINMENT",
    "EPS_ROUNDTRIP",
    # Numerical Safeguards — NaN/Inf sanitization
    "is_valid_float",
    "sanitize_float",
    # Numerical Safeguards — Modular arithmetic
    "positive_mod",
    # Numerical Safeguards — Utilities
    "clamp",
    # Numerical Safeguards — Float comparisons
    "exact_equal",
]
