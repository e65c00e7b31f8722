"""
Domain models and value objects.

Contains fundamental circular-geometry value types: RangeDescriptor,
CircularValue, ArcLength, Arc.
"""

from src.core.domain.arc import Arc
from src.core.domain.arc_length import ArcLength, clamp_length, convert_length
from src.core.domain.circular_trig import acos, asin, atan, atan2, cos, sin, tan
from src.core.domain.circular_value import CircularValue, convert_value, wrap
from src.core.domain.ranges import (
    DEFAULT_RANGES,
    DEFAULT_REGISTRY,
    SIGNED_DEGREES,
    SIGNED_RADIANS,
    TEST_RANGE_0,
    TEST_RANGE_1,
    TEST_RANGE_2,
    TEST_RANGE_3,
    UNSIGNED_DEGREES,
    UNSIGNED_RADIANS,
    RangeDescriptor,
    RangeRegistry,
    get_range,
    make_range,
)

__all__ = [
    # Ranges
    "RangeDescriptor",
    "RangeRegistry",
    "make_range",
    "get_range",
    "DEFAULT_RANGES",
    "DEFAULT_REGISTRY",
    "SIGNED_DEGREES",
    "UNSIGNED_DEGREES",
    "SIGNED_RADIANS",
    "UNSIGNED_RADIANS",
    "TEST_RANGE_0",
    "TEST_RANGE_1",
    "TEST_RANGE_2",
    "TEST_RANGE_3",
    # Circular value
    "CircularValue",
    "wrap",
    "convert_value",
    # Trig
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "atan2",
    # Arc length
    "ArcLength",
    "clamp_length",
    "convert_length",
    # Arc
    "Arc",
]
