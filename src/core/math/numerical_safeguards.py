"""
Numerical Safeguards — Safe Math Primitives для круговой арифметики

Модуль обеспечивает численную устойчивость операций над значениями на окружности:
- Epsilon-параметры для геометрических предикатов и проверок round-trip
- NaN/Inf санитизация (невалидный вход никогда не нарушает инвариант диапазона)
- Истинный (неотрицательный) модуль вместо усекающего остатка
- Clamp и точное сравнение float

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. positive_mod(x, m) всегда ∈ [0, m] (значение m возможно только из-за округления,
   вызывающий код обязан это обработать)
2. NaN/Inf никогда не пропагируют (заменяются на fallback)
3. Epsilon используется ТОЛЬКО в геометрических предикатах (contains/intersects);
   все остальные сравнения точные
4. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Допуск для предикатов contains/intersects дуг
# Поглощает ошибку округления: точка, вычисленная ровно на конце дуги,
# не должна ложно исключаться
EPS_ARC_CONTAINMENT: Final[float] = 1e-12

# Допуск для проверок round-trip конверсии между диапазонами
# и для сумм расстояний pdist(a, b) + pdist(b, a) = R
EPS_ROUNDTRIP: Final[float] = 1e-9


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Санитизация float: замена NaN/Inf на fallback значение.

    Args:
        value: Исходное значение
        fallback: Значение для замены NaN/Inf (default: 0.0)

    Returns:
        value если валидное, иначе fallback

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


# =============================================================================
# МОДУЛЬНАЯ АРИФМЕТИКА
# =============================================================================


def positive_mod(value: float, modulus: float) -> float:
    """
    Истинный математический модуль (результат всегда неотрицательный).

    В отличие от math.fmod (знак делимого) результат лежит в [0, modulus).
    Для очень малых отрицательных value сложение с modulus может округлиться
    ровно до modulus; вызывающий код обязан обработать этот случай.

    Args:
        value: Делимое
        modulus: Модуль (> 0)

    Returns:
        value mod modulus ∈ [0, modulus]

    Raises:
        ValueError: Если modulus <= 0

    Examples:
        >>> positive_mod(370.0, 360.0)
        10.0
        >>> positive_mod(-10.0, 360.0)
        350.0
        >>> positive_mod(-730.0, 360.0)
        350.0
    """
    if modulus <= 0:
        raise ValueError(f"modulus must be positive, got {modulus}")

    result = math.fmod(value, modulus)
    if result < 0:
        result += modulus
    return result


# =============================================================================
# УТИЛИТЫ
# =============================================================================


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


# =============================================================================
# СРАВНЕНИЯ FLOAT
# =============================================================================


def exact_equal(a: float, b: float) -> bool:
    """
    Точное (побитовое по значению) сравнение двух float без epsilon.

    Используется там, где сравнение намеренно точное (равенство дуг,
    детекция полной окружности). Явная функция вместо голого `==`
    помечает такие места для ревью.

    Args:
        a: Первое значение
        b: Второе значение

    Returns:
        True если a и b равны как числа (0.0 == -0.0)
    """
    return a == b
