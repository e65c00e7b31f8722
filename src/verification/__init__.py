"""Verification — exhaustive и сеточные проверки инвариантов круговой геометрии.

- ArcInvariantTester: полный перебор пар дискретных дуг, сверка с замкнутыми формулами
- CircularValueInvariantTester: нормализация, расстояния, арифметика, конверсия
"""

from .arc_invariant_tester import (
    REFERENCE_N_STEPS,
    ArcInvariantTester,
    ArcInvariantViolation,
    ArcSweepConfig,
    ArcSweepCounts,
    ArcSweepResult,
    discretized_arcs,
    expected_arc_counts,
    partition_starts,
)
from .circular_value_tester import (
    CircularValueInvariantTester,
    CircularValueInvariantViolation,
    ValueSweepConfig,
    ValueSweepResult,
)

__all__ = [
    "REFERENCE_N_STEPS",
    "ArcInvariantTester",
    "ArcInvariantViolation",
    "ArcSweepConfig",
    "ArcSweepCounts",
    "ArcSweepResult",
    "discretized_arcs",
    "expected_arc_counts",
    "partition_starts",
    "CircularValueInvariantTester",
    "CircularValueInvariantViolation",
    "ValueSweepConfig",
    "ValueSweepResult",
]
