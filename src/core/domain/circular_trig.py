"""
Circular Trig — тригонометрия над круговыми значениями

Прямые функции (sin, cos, tan) интерпретируют значение как физический угол:
    angle_rad = (value - Z) * 2π / R

Обратные функции (asin, acos, atan, atan2) вычисляют главное значение
в радианах и отображают его в ЯВНО заданный целевой диапазон.

ВАЖНО: целевой диапазон у обратных функций — обязательный аргумент.
Результат math.asin(x) без указания диапазона неоднозначен
(радианы? градусы? какой ноль?).
"""

import math

from src.core.domain.circular_value import CircularValue
from src.core.domain.ranges import RangeDescriptor


# =============================================================================
# ПРЯМЫЕ ФУНКЦИИ
# =============================================================================


def sin(c: CircularValue) -> float:
    """Синус физического угла c."""
    return math.sin(c.to_radians())


def cos(c: CircularValue) -> float:
    """Косинус физического угла c."""
    return math.cos(c.to_radians())


def tan(c: CircularValue) -> float:
    """Тангенс физического угла c."""
    return math.tan(c.to_radians())


# =============================================================================
# ОБРАТНЫЕ ФУНКЦИИ
# =============================================================================


def asin(x: float, circ_range: RangeDescriptor) -> CircularValue:
    """
    Арксинус в целевом диапазоне.

    Args:
        x: Аргумент в [-1, 1]
        circ_range: Целевой диапазон результата

    Returns:
        CircularValue в circ_range

    Raises:
        ValueError: Если x вне [-1, 1] (как math.asin)

    Examples:
        >>> round(asin(0.5, SIGNED_DEGREES).value, 9)
        30.0
        >>> round(asin(-0.5, UNSIGNED_DEGREES).value, 9)
        330.0
    """
    return CircularValue.from_radians(math.asin(x), circ_range)


def acos(x: float, circ_range: RangeDescriptor) -> CircularValue:
    """
    Арккосинус в целевом диапазоне.

    Raises:
        ValueError: Если x вне [-1, 1] (как math.acos)
    """
    return CircularValue.from_radians(math.acos(x), circ_range)


def atan(x: float, circ_range: RangeDescriptor) -> CircularValue:
    """Арктангенс в целевом диапазоне."""
    return CircularValue.from_radians(math.atan(x), circ_range)


def atan2(y: float, x: float, circ_range: RangeDescriptor) -> CircularValue:
    """
    Угол вектора (x, y) в целевом диапазоне.

    Используется, например, для усреднения: atan2(Σ sin, Σ cos).

    Args:
        y: Ордината
        x: Абсцисса
        circ_range: Целевой диапазон результата

    Returns:
        CircularValue в circ_range
    """
    return CircularValue.from_radians(math.atan2(y, x), circ_range)
