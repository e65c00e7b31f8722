"""CircularValueInvariantTester — сеточная проверка инвариантов CircularValue.

Для диапазона строится сетка из n значений L + i·R/n и проверяется:
1. Нормализация: сырые значения, сдвинутые на k·R (|k| <= revolutions),
   попадают в [L, H) и совпадают с исходной точкой сетки (до EPS_ROUNDTRIP·R)
2. pdist(a, a) = 0; pdist(a, b) + pdist(b, a) = R при a != b
3. sdist ∈ (-R/2, R/2]; sdist(a, b) = -sdist(b, a) вне антипода,
   на антиподе sdist = +R/2 в обе стороны
4. a + (b - a) == b (до EPS_ROUNDTRIP·R)
5. Конверсия в каждый диапазон из conversion_ranges и обратно
   возвращает исходное значение (до EPS_ROUNDTRIP·R)

Сравнения на окружности делаются через |sdist|, поэтому значения
по разные стороны от L (например, L и H - ulp) считаются близкими.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from src.core.domain.circular_value import CircularValue
from src.core.domain.ranges import DEFAULT_RANGES, RangeDescriptor
from src.core.math.numerical_safeguards import EPS_ROUNDTRIP

logger = logging.getLogger(__name__)


class CircularValueInvariantViolation(Exception):
    """Нарушение инварианта CircularValue в сеточной проверке."""
    pass


@dataclass(frozen=True)
class ValueSweepConfig:
    """Конфигурация сеточной проверки.

    revolutions — на сколько полных оборотов в каждую сторону
    сдвигаются сырые значения при проверке нормализации.
    """
    n_steps: int = 36
    revolutions: int = 3

    def __post_init__(self) -> None:
        if self.n_steps < 1:
            raise ValueError(f"n_steps must be >= 1, got {self.n_steps}")
        if self.revolutions < 0:
            raise ValueError(f"revolutions must be >= 0, got {self.revolutions}")


@dataclass(frozen=True)
class ValueSweepResult:
    """Результат сеточной проверки для одного диапазона."""

    range_name: str
    n_steps: int
    checks: int


class CircularValueInvariantTester:
    """Сеточный тестер инвариантов CircularValue для одного диапазона."""

    def __init__(
        self,
        circ_range: RangeDescriptor,
        config: Optional[ValueSweepConfig] = None,
        conversion_ranges: Iterable[RangeDescriptor] = DEFAULT_RANGES,
    ):
        self.circ_range = circ_range
        self.config = config or ValueSweepConfig()
        self.conversion_ranges: Tuple[RangeDescriptor, ...] = tuple(conversion_ranges)
        self._tolerance = EPS_ROUNDTRIP * circ_range.circumference
        self._checks = 0

    # -------------------------------------------------------------------------
    # Вспомогательные
    # -------------------------------------------------------------------------

    def _check(self, condition: bool, message: str) -> None:
        self._checks += 1
        if not condition:
            raise CircularValueInvariantViolation(f"{self.circ_range.name}: {message}")

    def _close(self, a: CircularValue, b: CircularValue) -> bool:
        return abs(CircularValue.sdist(a, b)) <= self._tolerance

    def _in_domain(self, v: CircularValue) -> bool:
        return self.circ_range.lower <= v.value < self.circ_range.upper

    def grid(self) -> List[CircularValue]:
        """Значения сетки L + i·R/n, i = 0..n-1."""
        step = self.circ_range.circumference / self.config.n_steps
        return [
            CircularValue(self.circ_range.lower + i * step, self.circ_range)
            for i in range(self.config.n_steps)
        ]

    # -------------------------------------------------------------------------
    # Проверки
    # -------------------------------------------------------------------------

    def _check_normalisation(self, values: List[CircularValue]) -> None:
        r = self.circ_range.circumference
        revolutions = self.config.revolutions
        for v in values:
            for k in range(-revolutions, revolutions + 1):
                wrapped = CircularValue(v.value + k * r, self.circ_range)
                self._check(
                    self._in_domain(wrapped),
                    f"wrap({v.value} + {k}R) = {wrapped.value} outside domain",
                )
                self._check(
                    self._close(wrapped, v),
                    f"wrap({v.value} + {k}R) = {wrapped.value} drifted from {v.value}",
                )

        for raw in (float("nan"), float("inf"), float("-inf")):
            self._check(
                CircularValue(raw, self.circ_range).value == self.circ_range.zero,
                f"non-finite input {raw} not mapped to zero",
            )

    def _check_distances(self, values: List[CircularValue]) -> None:
        r = self.circ_range.circumference
        half = self.circ_range.half_circumference
        for a in values:
            self._check(CircularValue.pdist(a, a) == 0.0, f"pdist({a.value}, itself) != 0")
            for b in values:
                if a == b:
                    continue

                forward = CircularValue.pdist(a, b)
                backward = CircularValue.pdist(b, a)
                self._check(
                    0.0 <= forward < r,
                    f"pdist({a.value}, {b.value}) = {forward} outside [0, R)",
                )
                self._check(
                    abs(forward + backward - r) <= self._tolerance,
                    f"pdist({a.value}, {b.value}) + pdist back = {forward + backward} != R",
                )

                d_ab = CircularValue.sdist(a, b)
                d_ba = CircularValue.sdist(b, a)
                self._check(
                    -half < d_ab <= half,
                    f"sdist({a.value}, {b.value}) = {d_ab} outside (-R/2, R/2]",
                )
                if d_ab == half or d_ba == half:
                    self._check(
                        d_ab == half and d_ba == half,
                        f"antipodal sdist not positive: {d_ab}, {d_ba}",
                    )
                else:
                    self._check(
                        abs(d_ab + d_ba) <= self._tolerance,
                        f"sdist not antisymmetric: {d_ab}, {d_ba}",
                    )

    def _check_arithmetic(self, values: List[CircularValue]) -> None:
        for a in values:
            for b in values:
                restored = a + (b - a)
                self._check(
                    self._in_domain(restored) and self._close(restored, b),
                    f"{a.value} + ({b.value} - {a.value}) = {restored.value}",
                )

    def _check_conversion(self, values: List[CircularValue]) -> None:
        for other in self.conversion_ranges:
            for v in values:
                there = v.to_range(other)
                back = there.to_range(self.circ_range)
                self._check(
                    self._close(back, v),
                    f"round trip via {other.name}: {v.value} -> {there.value} -> {back.value}",
                )

    def run(self) -> ValueSweepResult:
        """Все проверки на сетке.

        Raises:
            CircularValueInvariantViolation: На первом нарушенном инварианте
        """
        logger.info(
            "Value sweep started: range=%s n_steps=%d revolutions=%d",
            self.circ_range.name,
            self.config.n_steps,
            self.config.revolutions,
        )
        self._checks = 0
        values = self.grid()

        self._check_normalisation(values)
        self._check_distances(values)
        self._check_arithmetic(values)
        self._check_conversion(values)

        result = ValueSweepResult(
            range_name=self.circ_range.name,
            n_steps=self.config.n_steps,
            checks=self._checks,
        )
        logger.info("Value sweep finished: range=%s checks=%d", result.range_name, result.checks)
        return result
