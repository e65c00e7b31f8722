"""
ArcLength — Длина дуги на окружности

Скаляр в [0, R]. Значения ОГРАНИЧИВАЮТСЯ (clamp), а не оборачиваются:
длина не может превысить полный оборот. R — маркер "вся окружность".

Конверсия между диапазонами масштабирует длину на R_T / R_S.
Специальный случай: длина ровно R_S отображается ровно в R_T, иначе
округление превратило бы полную окружность в "почти полную".
"""

import math
from functools import total_ordering
from numbers import Real
from typing import Any, Union

from src.core.domain.ranges import RangeDescriptor
from src.core.math.numerical_safeguards import clamp, exact_equal


# =============================================================================
# CLAMP И КОНВЕРСИЯ
# =============================================================================


def clamp_length(raw: float, circ_range: RangeDescriptor) -> float:
    """
    Ограничение длины в [0, R].

    NaN → 0; +Inf → R; -Inf → 0.

    Examples:
        >>> clamp_length(400.0, UNSIGNED_DEGREES)
        360.0
        >>> clamp_length(-5.0, UNSIGNED_DEGREES)
        0.0
    """
    value = float(raw)
    if math.isnan(value):
        return 0.0
    return clamp(value, 0.0, circ_range.circumference)


def convert_length(
    raw: float,
    from_range: RangeDescriptor,
    to_range: RangeDescriptor,
) -> float:
    """
    Конверсия длины между диапазонами.

    Args:
        raw: Длина в единицах from_range
        from_range: Исходный диапазон
        to_range: Целевой диапазон

    Returns:
        Длина в [0, R_T]; полная окружность отображается точно

    Examples:
        >>> convert_length(360.0, UNSIGNED_DEGREES, UNSIGNED_RADIANS) == 2 * math.pi
        True
    """
    if from_range is to_range or from_range == to_range:
        return clamp_length(raw, to_range)

    if exact_equal(raw, from_range.circumference):
        return to_range.circumference

    return clamp_length(to_range.circumference / from_range.circumference * raw, to_range)


# =============================================================================
# ARC LENGTH
# =============================================================================


@total_ordering
class ArcLength:
    """
    Длина дуги в [0, R] диапазона circ_range.

    Immutable value type. Длины разных диапазонов не равны друг другу,
    сравнение с числом идёт без ограничения.
    """

    __slots__ = ("_value", "_range")

    def __init__(
        self,
        value: Union[float, "ArcLength"],
        circ_range: RangeDescriptor,
    ) -> None:
        """
        Args:
            value: Сырое значение (ограничивается) или ArcLength
                любого диапазона (масштабируется)
            circ_range: Диапазон длины
        """
        if isinstance(value, ArcLength):
            length = convert_length(value._value, value._range, circ_range)
        else:
            length = clamp_length(value, circ_range)

        object.__setattr__(self, "_value", length)
        object.__setattr__(self, "_range", circ_range)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @classmethod
    def full_circle(cls, circ_range: RangeDescriptor) -> "ArcLength":
        """Длина полной окружности (R)."""
        return cls(circ_range.circumference, circ_range)

    @property
    def value(self) -> float:
        """Длина в [0, R]."""
        return self._value

    @property
    def circ_range(self) -> RangeDescriptor:
        """Диапазон длины."""
        return self._range

    @property
    def is_full_circle(self) -> bool:
        """True если длина ровно R (точное сравнение)."""
        return exact_equal(self._value, self._range.circumference)

    def to_range(self, circ_range: RangeDescriptor) -> "ArcLength":
        """Та же доля окружности в другом диапазоне."""
        return ArcLength(self, circ_range)

    def __float__(self) -> float:
        return self._value

    def _same_range(self, other: "ArcLength") -> bool:
        return other._range is self._range or other._range == self._range

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArcLength):
            return self._same_range(other) and exact_equal(self._value, other._value)
        if isinstance(other, Real) and not isinstance(other, bool):
            return exact_equal(self._value, float(other))
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, ArcLength):
            if not self._same_range(other):
                raise TypeError(
                    f"cannot order lengths of ranges {self._range.name!r} and {other._range.name!r}"
                )
            return self._value < other._value
        if isinstance(other, Real) and not isinstance(other, bool):
            return self._value < float(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"ArcLength({self._value!r}, {self._range.name})"

    def __reduce__(self):
        return (ArcLength, (self._value, self._range))
