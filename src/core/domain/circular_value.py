"""
CircularValue — Значение на окружности

Скаляр, который ВСЕГДА лежит в [L, H) своего диапазона. Любой сырой вход
нормализуется оборачиванием по модулю R, исключений нет (тотальные функции).

Операции:
- Конверсия между диапазонами с сохранением физического угла
- Арифметика (+, -, унарный -, масштабирование) с ренормализацией
- pdist: расстояние при движении в сторону возрастания, [0, R)
- sdist: кратчайшее знаковое расстояние, (-R/2, R/2]

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value ∈ [L, H) после любой операции
2. NaN/Inf на входе → Z (инвариант диапазона не нарушается)
3. pdist(a, a) = 0; pdist(a, b) < R; pdist(a, b) + pdist(b, a) = R при a != b (на шве до ulp)
4. sdist на антиподе (|d| = R/2) всегда возвращает +R/2

ФОРМУЛЫ:
    wrap(x)             = L + ((x - L) mod R)
    convert(x, S -> T)  = wrap_T((x - Z_S) * R_T / R_S + Z_T)
    a + b               = wrap(a + b - Z)        (Z — аддитивный ноль)
    a + x (float)       = wrap(a + x)            (x — смещение)
"""

import math
from functools import total_ordering
from numbers import Real
from typing import Any, Dict, Union

from src.core.contracts.validators import validate_circular_value
from src.core.domain.ranges import RangeDescriptor
from src.core.math.numerical_safeguards import positive_mod, sanitize_float


# =============================================================================
# НОРМАЛИЗАЦИЯ И КОНВЕРСИЯ
# =============================================================================


def wrap(raw: float, circ_range: RangeDescriptor) -> float:
    """
    Нормализация сырого значения в [L, H).

    Значения внутри домена возвращаются без изменений; значения в пределах
    одного оборота сдвигаются ровно на R (точнее общего модуля); остальные
    оборачиваются через positive_mod.

    Args:
        raw: Сырое значение (любое, включая NaN/Inf)
        circ_range: Диапазон

    Returns:
        Значение в [L, H); NaN/Inf → Z

    Examples:
        >>> wrap(190.0, SIGNED_DEGREES)
        -170.0
        >>> wrap(-10.0, UNSIGNED_DEGREES)
        350.0
    """
    lower = circ_range.lower
    upper = circ_range.upper
    value = sanitize_float(float(raw), fallback=circ_range.zero)

    if lower <= value < upper:
        return value

    r = upper - lower
    if upper <= value < upper + r:
        result = value - r
    elif lower - r <= value < lower:
        result = value + r
    else:
        result = lower + positive_mod(value - lower, r)

    # Округление может вывести результат ровно на H (или чуть ниже L)
    if result >= upper or result < lower:
        result = lower

    return result


def convert_value(
    raw: float,
    from_range: RangeDescriptor,
    to_range: RangeDescriptor,
) -> float:
    """
    Конверсия значения между диапазонами с сохранением физического угла.

    Физический угол отсчитывается от Z своего диапазона, поэтому Z_S
    отображается в Z_T, а смещение масштабируется на R_T / R_S.

    Args:
        raw: Значение в диапазоне from_range
        from_range: Исходный диапазон
        to_range: Целевой диапазон

    Returns:
        Значение в [L_T, H_T)

    Examples:
        >>> convert_value(-90.0, SIGNED_DEGREES, UNSIGNED_DEGREES)
        270.0
        >>> convert_value(180.0, UNSIGNED_DEGREES, UNSIGNED_RADIANS)
        3.141592653589793
    """
    if from_range is to_range or from_range == to_range:
        return wrap(raw, to_range)

    offset = (raw - from_range.zero) * (to_range.circumference / from_range.circumference)
    return wrap(offset + to_range.zero, to_range)


def _pdist(a: float, b: float, r: float) -> float:
    # a, b уже нормализованы в один диапазон
    d = b - a if b >= a else r - a + b
    # На шве округление может дать ровно R
    if d >= r:
        return math.nextafter(r, 0.0)
    return d


def _sdist(a: float, b: float, r: float) -> float:
    d = b - a
    half = r / 2.0
    if d > half:
        d -= r
    elif d <= -half:
        d += r
    return d


def _is_scalar(x: object) -> bool:
    # bool — не угол и не смещение
    return isinstance(x, Real) and not isinstance(x, bool)


# =============================================================================
# CIRCULAR VALUE
# =============================================================================


@total_ordering
class CircularValue:
    """
    Значение на окружности диапазона circ_range.

    Immutable value type: все операции возвращают новый экземпляр,
    `a += x` перепривязывает имя к новому значению.

    В арифметике и расстояниях операнд другого диапазона конвертируется
    в диапазон левого операнда (с сохранением физического угла), сырое
    число для + и - является смещением.

    Сравнения не конвертируют: значения разных диапазонов не равны
    (и не упорядочиваются), сырое число сравнивается с value как есть.
    Поэтому hash(value) согласован с ==.
    """

    __slots__ = ("_value", "_range")

    def __init__(
        self,
        value: Union[float, "CircularValue"],
        circ_range: RangeDescriptor,
    ) -> None:
        """
        Args:
            value: Сырое значение (оборачивается) или CircularValue
                любого диапазона (конвертируется)
            circ_range: Диапазон нового значения
        """
        if isinstance(value, CircularValue):
            normalized = convert_value(value._value, value._range, circ_range)
        else:
            normalized = wrap(value, circ_range)

        object.__setattr__(self, "_value", normalized)
        object.__setattr__(self, "_range", circ_range)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls, circ_range: RangeDescriptor) -> "CircularValue":
        """Значение Z (значение по умолчанию) диапазона."""
        return cls(circ_range.zero, circ_range)

    @classmethod
    def from_radians(cls, angle_rad: float, circ_range: RangeDescriptor) -> "CircularValue":
        """
        Построение из физического угла в радианах.

        Угол 0 отображается в Z диапазона.
        """
        return cls(angle_rad / circ_range.radians_per_unit + circ_range.zero, circ_range)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CircularValue":
        """
        Десериализация из payload контракта circular_value.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту
            pydantic.ValidationError: Если диапазон некорректен
        """
        validate_circular_value(data)
        return cls(data["value"], RangeDescriptor(**data["range"]))

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def value(self) -> float:
        """Нормализованное значение в [L, H)."""
        return self._value

    @property
    def circ_range(self) -> RangeDescriptor:
        """Диапазон значения."""
        return self._range

    def to_range(self, circ_range: RangeDescriptor) -> "CircularValue":
        """Тот же физический угол в другом диапазоне."""
        return CircularValue(self, circ_range)

    def to_radians(self) -> float:
        """Физический угол в радианах: (value - Z) * 2π / R."""
        return (self._value - self._range.zero) * self._range.radians_per_unit

    def to_dict(self) -> Dict[str, Any]:
        """JSON-совместимый payload (контракт circular_value)."""
        return {"range": self._range.model_dump(), "value": self._value}

    def _coerce(self, other: Union[float, "CircularValue"]) -> float:
        # Сырое значение other в диапазоне self
        if isinstance(other, CircularValue):
            if other._range is self._range:
                return other._value
            return convert_value(other._value, other._range, self._range)
        return wrap(other, self._range)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def __add__(self, other: Union[float, "CircularValue"]) -> "CircularValue":
        if isinstance(other, CircularValue):
            return CircularValue(self._value + self._coerce(other) - self._range.zero, self._range)
        if _is_scalar(other):
            return CircularValue(self._value + float(other), self._range)
        return NotImplemented

    def __radd__(self, other: float) -> "CircularValue":
        if _is_scalar(other):
            return CircularValue(self._value + float(other), self._range)
        return NotImplemented

    def __sub__(self, other: Union[float, "CircularValue"]) -> "CircularValue":
        if isinstance(other, CircularValue):
            return CircularValue(self._value - self._coerce(other) + self._range.zero, self._range)
        if _is_scalar(other):
            return CircularValue(self._value - float(other), self._range)
        return NotImplemented

    def __neg__(self) -> "CircularValue":
        # Отражение относительно нуля
        return CircularValue(2.0 * self._range.zero - self._value, self._range)

    def __pos__(self) -> "CircularValue":
        return self

    def __mul__(self, factor: float) -> "CircularValue":
        if _is_scalar(factor):
            zero = self._range.zero
            return CircularValue((self._value - zero) * float(factor) + zero, self._range)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "CircularValue":
        if _is_scalar(divisor):
            zero = self._range.zero
            return CircularValue((self._value - zero) / float(divisor) + zero, self._range)
        return NotImplemented

    def opposite(self) -> "CircularValue":
        """Антиподальная точка: value + R/2."""
        return CircularValue(self._value + self._range.half_circumference, self._range)

    # -------------------------------------------------------------------------
    # Расстояния
    # -------------------------------------------------------------------------

    @staticmethod
    def pdist(
        a: Union[float, "CircularValue"],
        b: Union[float, "CircularValue"],
    ) -> float:
        """
        Положительное расстояние: путь от a до b в сторону возрастания.

        Диапазон берётся у первого CircularValue среди операндов,
        второй операнд приводится к нему.

        Returns:
            Расстояние в [0, R)

        Raises:
            TypeError: Если ни один операнд не CircularValue

        Examples:
            >>> CircularValue.pdist(CircularValue(350.0, UNSIGNED_DEGREES), 10.0)
            20.0
        """
        va, vb, r = _distance_operands(a, b)
        return _pdist(va, vb, r)

    @staticmethod
    def sdist(
        a: Union[float, "CircularValue"],
        b: Union[float, "CircularValue"],
    ) -> float:
        """
        Кратчайшее знаковое расстояние от a до b.

        Положительное — короче идти в сторону возрастания. На антиподе
        (|d| = R/2) результат всегда +R/2.

        Returns:
            Расстояние в (-R/2, R/2]

        Raises:
            TypeError: Если ни один операнд не CircularValue

        Examples:
            >>> CircularValue.sdist(CircularValue(350.0, UNSIGNED_DEGREES), 10.0)
            20.0
            >>> CircularValue.sdist(CircularValue(10.0, UNSIGNED_DEGREES), 350.0)
            -20.0
        """
        va, vb, r = _distance_operands(a, b)
        return _sdist(va, vb, r)

    # -------------------------------------------------------------------------
    # Сравнения и протоколы
    # -------------------------------------------------------------------------

    def __float__(self) -> float:
        return self._value

    def _same_range(self, other: "CircularValue") -> bool:
        return other._range is self._range or other._range == self._range

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CircularValue):
            # Разные диапазоны — разные домены, сравнение только после to_range()
            return self._same_range(other) and self._value == other._value
        if _is_scalar(other):
            return self._value == float(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, CircularValue):
            if not self._same_range(other):
                raise TypeError(
                    f"cannot order values of ranges {self._range.name!r} and {other._range.name!r}"
                )
            return self._value < other._value
        if _is_scalar(other):
            return self._value < float(other)
        return NotImplemented

    def __hash__(self) -> int:
        # Совпадает с hash(float): значение равно своему float
        return hash(self._value)

    def __repr__(self) -> str:
        return f"CircularValue({self._value!r}, {self._range.name})"

    def __reduce__(self):
        return (CircularValue, (self._value, self._range))


def _distance_operands(
    a: Union[float, CircularValue],
    b: Union[float, CircularValue],
) -> tuple[float, float, float]:
    if isinstance(a, CircularValue):
        return a._value, a._coerce(b), a._range.circumference
    if isinstance(b, CircularValue):
        return b._coerce(a), b._value, b._range.circumference
    raise TypeError(
        "at least one operand must be a CircularValue to define the range, "
        f"got {type(a).__name__} and {type(b).__name__}"
    )
