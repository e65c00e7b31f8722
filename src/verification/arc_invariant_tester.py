"""ArcInvariantTester — exhaustive проверка комбинаторных инвариантов Arc.

Окружность дискретизируется на n позиций старта L + i·R/n (i = 0..n-1)
и n+1 длин j·R/n (j = 0..n, последняя длина ровно R — полная окружность).
Для КАЖДОЙ пары дискретных дуг (a1, a2) из полного декартова произведения
проверяется:
- a1 == a2  ⇒  a1.contains(a2) и a2.contains(a1)
- a1 != a2  ⇒  НЕ (a1.contains(a2) и a2.contains(a1))

и накапливаются счётчики, сверяемые с замкнутыми формулами.

ЗАМКНУТЫЕ ФОРМУЛЫ (n шагов, длины в шагах, старты по модулю n):

p — число пар a1 == a2:
    Неполные дуги (j < n) равны только себе: n·n пар.
    Полные дуги (j = n) равны друг другу: n·n пар.
    p = 2n²

m — число пар, где a1 содержит a2 (n' — где a2 содержит a1; по симметрии
перебора n' = m):
    Полная a1 (n штук) содержит все n(n+1) дуг: n²(n+1).
    Неполная a1 длины j содержит неполные a2 длины l <= j, лежащие внутри:
    (j - l + 1) стартов на каждую l, т.е. Σ_{l=0..j} (j-l+1) = (j+1)(j+2)/2.
    m = n²(n+1) + n·Σ_{j=0..n-1} (j+1)(j+2)/2
      = n²(n+1) + n·n(n+1)(n+2)/6
      = n²(n² + 9n + 8) / 6

q[j] — число пересекающихся пар для a1 длины j:
    При фиксированном старте a1 и длинах j, l дуги пересекаются при
    смещении d старта a2 таком, что d <= j или d >= n - l, т.е. для
    min(n, j + l + 1) из n смещений (полная дуга пересекает всё).
    q[j] = n · Σ_{l=0..n} min(n, j + l + 1)
         = n · ((n(n+1) - j(j+1)) / 2 + n(j+1))

Перебор разбивается по индексу старта a1 на чанки, по одному на воркер;
чанки независимы и выполняются параллельно (joblib), счётчики
объединяются суммой.
"""

import logging
from dataclasses import dataclass
from typing import Final, List, Optional, Sequence, Tuple

from joblib import Parallel, delayed, effective_n_jobs

from src.core.domain.arc import Arc
from src.core.domain.ranges import RangeDescriptor

logger = logging.getLogger(__name__)


# Эталонное число шагов дискретизации
REFERENCE_N_STEPS: Final[int] = 36


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ArcInvariantViolation(Exception):
    """
    Нарушение инварианта Arc в exhaustive переборе.

    Возникает при:
    1. Равных дугах без взаимного содержания
    2. Взаимном содержании неравных дуг
    3. Расхождении счётчиков с замкнутыми формулами (регрессия
       в логике contains/intersects)
    """
    pass


# =============================================================================
# CONFIG & RESULTS
# =============================================================================


@dataclass(frozen=True)
class ArcSweepConfig:
    """Конфигурация перебора.

    n_jobs — как в joblib: 1 — последовательно, -1 — все ядра.
    """
    n_steps: int = REFERENCE_N_STEPS
    n_jobs: int = 1

    def __post_init__(self) -> None:
        if self.n_steps < 1:
            raise ValueError(f"n_steps must be >= 1, got {self.n_steps}")
        if self.n_jobs == 0:
            raise ValueError("n_jobs must be non-zero")


@dataclass(frozen=True)
class ArcSweepCounts:
    """Счётчики перебора (наблюдаемые или ожидаемые)."""

    identical: int  # p — пары a1 == a2
    a1_contains_a2: int  # m — a2 является под-дугой a1
    a2_contains_a1: int  # n' — a1 является под-дугой a2
    intersections_by_length: Tuple[int, ...]  # q[j] — пересечения по длине a1

    @property
    def total_intersections(self) -> int:
        return sum(self.intersections_by_length)


@dataclass(frozen=True)
class ArcSweepResult:
    """Результат перебора для одного диапазона."""

    range_name: str
    n_steps: int
    pairs_checked: int
    counts: ArcSweepCounts


def expected_arc_counts(n_steps: int) -> ArcSweepCounts:
    """
    Ожидаемые счётчики для равномерной дискретизации (см. docstring модуля).

    Args:
        n_steps: Число шагов n (>= 1)

    Returns:
        ArcSweepCounts с p, m, n' и q[j]

    Examples:
        >>> expected_arc_counts(1).a1_contains_a2
        3
        >>> expected_arc_counts(2).intersections_by_length
        (10, 12, 12)
    """
    n = n_steps
    p = 2 * n * n
    m = n * n * (n * n + 9 * n + 8) // 6
    q = tuple(n * ((n * (n + 1) - j * (j + 1)) // 2 + n * (j + 1)) for j in range(n + 1))
    return ArcSweepCounts(
        identical=p,
        a1_contains_a2=m,
        a2_contains_a1=m,
        intersections_by_length=q,
    )


# =============================================================================
# ДИСКРЕТИЗАЦИЯ И ПЕРЕБОР
# =============================================================================


def discretized_arcs(circ_range: RangeDescriptor, n_steps: int) -> List[Arc]:
    """
    Все n·(n+1) дискретных дуг диапазона, индекс i·(n+1) + j.

    Длина j = n задаётся ровно как R, чтобы полная окружность
    не превратилась в "почти полную" из-за округления n·(R/n).
    """
    r = circ_range.circumference
    step = r / n_steps
    arcs = []
    for i in range(n_steps):
        start = circ_range.lower + i * step
        for j in range(n_steps + 1):
            length = r if j == n_steps else j * step
            arcs.append(Arc(start, length, circ_range))
    return arcs


def partition_starts(n_steps: int, n_jobs: int) -> List[Tuple[int, ...]]:
    """
    Разбиение стартовых индексов 0..n-1 на чанки, по одному на воркер.

    Индексы раздаются по кругу, чтобы чанки были равны по размеру
    с точностью до одного старта.

    Examples:
        >>> partition_starts(5, 2)
        [(0, 2, 4), (1, 3)]
    """
    n_chunks = max(1, min(n_steps, effective_n_jobs(n_jobs)))
    return [tuple(range(k, n_steps, n_chunks)) for k in range(n_chunks)]


def _sweep_partition(
    circ_range: RangeDescriptor,
    n_steps: int,
    start_indices: Sequence[int],
) -> Tuple[int, int, int, int, List[int]]:
    # Счётчики (pairs, p, m, n', q) для дуг a1 со стартами start_indices;
    # список дуг строится один раз на чанк
    arcs = discretized_arcs(circ_range, n_steps)
    pairs = identical = a1_contains = a2_contains = 0
    intersections = [0] * (n_steps + 1)

    for i in start_indices:
        for j in range(n_steps + 1):
            a1 = arcs[i * (n_steps + 1) + j]
            for a2 in arcs:
                pairs += 1

                b1 = a1.contains(a2)  # a2 — под-дуга a1
                b2 = a2.contains(a1)  # a1 — под-дуга a2
                if b1:
                    a1_contains += 1
                if b2:
                    a2_contains += 1

                if a1 == a2:
                    if not (b1 and b2):
                        raise ArcInvariantViolation(
                            f"{circ_range.name}: equal arcs without mutual containment: "
                            f"{a1!r} contains={b1}, {a2!r} contains={b2}"
                        )
                    identical += 1
                elif b1 and b2:
                    raise ArcInvariantViolation(
                        f"{circ_range.name}: mutual containment of distinct arcs: {a1!r}, {a2!r}"
                    )

                if a1.intersects(a2):
                    intersections[j] += 1

    return pairs, identical, a1_contains, a2_contains, intersections


class ArcInvariantTester:
    """Exhaustive тестер инвариантов Arc для одного диапазона.

    Пример:
        >>> ArcInvariantTester(UNSIGNED_DEGREES, ArcSweepConfig(n_steps=4)).verify().n_steps
        4
    """

    def __init__(
        self,
        circ_range: RangeDescriptor,
        config: Optional[ArcSweepConfig] = None,
    ):
        """
        Args:
            circ_range: Проверяемый диапазон
            config: Конфигурация перебора (default: ArcSweepConfig())
        """
        self.circ_range = circ_range
        self.config = config or ArcSweepConfig()

    def run(self) -> ArcSweepResult:
        """Перебор всех пар дискретных дуг.

        Raises:
            ArcInvariantViolation: Если нарушен попарный инвариант равенства/содержания
        """
        n = self.config.n_steps
        logger.info(
            "Arc sweep started: range=%s n_steps=%d n_jobs=%d",
            self.circ_range.name,
            n,
            self.config.n_jobs,
        )

        chunks = partition_starts(n, self.config.n_jobs)
        partials = Parallel(n_jobs=self.config.n_jobs)(
            delayed(_sweep_partition)(self.circ_range, n, chunk) for chunk in chunks
        )

        pairs = identical = a1_contains = a2_contains = 0
        intersections = [0] * (n + 1)
        for chunk, (part_pairs, part_identical, part_m, part_n, part_q) in zip(chunks, partials):
            logger.debug(
                "Partition starts=%s: pairs=%d identical=%d contains=%d/%d",
                chunk,
                part_pairs,
                part_identical,
                part_m,
                part_n,
            )
            pairs += part_pairs
            identical += part_identical
            a1_contains += part_m
            a2_contains += part_n
            for j, count in enumerate(part_q):
                intersections[j] += count

        result = ArcSweepResult(
            range_name=self.circ_range.name,
            n_steps=n,
            pairs_checked=pairs,
            counts=ArcSweepCounts(
                identical=identical,
                a1_contains_a2=a1_contains,
                a2_contains_a1=a2_contains,
                intersections_by_length=tuple(intersections),
            ),
        )
        logger.info(
            "Arc sweep finished: range=%s pairs=%d identical=%d contains=%d/%d intersections=%d",
            result.range_name,
            pairs,
            identical,
            a1_contains,
            a2_contains,
            result.counts.total_intersections,
        )
        return result

    def verify(self, result: Optional[ArcSweepResult] = None) -> ArcSweepResult:
        """Сверка счётчиков перебора с замкнутыми формулами.

        Args:
            result: Готовый результат run() (если None — перебор выполняется)

        Returns:
            Проверенный ArcSweepResult

        Raises:
            ArcInvariantViolation: При нарушении инварианта или расхождении счётчиков
        """
        if result is None:
            result = self.run()

        expected = expected_arc_counts(result.n_steps)
        if result.counts != expected:
            raise ArcInvariantViolation(
                f"{result.range_name}: sweep counts {result.counts} "
                f"differ from closed-form {expected}"
            )

        logger.debug("Arc sweep counts match closed form for %s", result.range_name)
        return result
