"""
Arc — Дуга на окружности

Дуга задаётся тройкой (c1, c2, l):
- c1: начальная точка [L, H)
- c2: конечная точка [L, H)
- l:  длина [0, R]

Дуга [c1, c1 + l] — путь от c1 в сторону возрастания длиной l.
Исключение: l = R — ПОЛНАЯ окружность (c1 == c2 по построению, но дуга
покрывает всю окружность, а не точку). Две полные дуги равны независимо
от начальных точек.

Асимметрия конструкторов (намеренная):
- Arc(start, length): length = R → полная окружность
- Arc.from_endpoints(start, end): start == end → длина 0 (точка), НЕ полная

ПРЕДИКАТЫ:
    contains(p)   : l - pdist(c1, p) >= -eps
    contains(arc) : полная содержит всё; полную содержит только полная;
                    иначе l2 - l1 >= -eps и l - l2 >= -eps,
                    где l1 = pdist(c1, a.c1), l2 = pdist(c1, a.c2)
    intersects(a) : contains(a.c1) or a.contains(c1)

eps = EPS_ARC_CONTAINMENT (1e-12) используется ТОЛЬКО в предикатах;
равенство дуг точное.

ИНВАРИАНТ:
    a.contains(b) and b.contains(a)  <=>  a == b   (a, b одного диапазона)
"""

from numbers import Real
from typing import Any, Dict, Union

from src.core.contracts.validators import validate_arc
from src.core.domain.arc_length import ArcLength
from src.core.domain.circular_value import CircularValue, _pdist, wrap
from src.core.domain.ranges import RangeDescriptor
from src.core.math.numerical_safeguards import EPS_ARC_CONTAINMENT, exact_equal


class Arc:
    """
    Дуга на окружности диапазона circ_range.

    Immutable value type: производные величины (c2 или l) вычисляются
    один раз при конструировании.
    """

    __slots__ = ("_start", "_end", "_length")

    def __init__(
        self,
        start: Union[float, CircularValue],
        length: Union[float, ArcLength],
        circ_range: RangeDescriptor,
    ) -> None:
        """
        Конструирование по начальной точке и длине.

        Args:
            start: Начальная точка (сырое значение оборачивается,
                CircularValue другого диапазона конвертируется)
            length: Длина (сырое значение ограничивается в [0, R],
                ArcLength другого диапазона масштабируется)
            circ_range: Диапазон дуги
        """
        c1 = CircularValue(start, circ_range)
        l = ArcLength(length, circ_range)
        c2 = c1 if l.is_full_circle else c1 + l.value
        self._init(c1, c2, l)

    def _init(self, c1: CircularValue, c2: CircularValue, l: ArcLength) -> None:
        object.__setattr__(self, "_start", c1)
        object.__setattr__(self, "_end", c2)
        object.__setattr__(self, "_length", l)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -------------------------------------------------------------------------
    # Альтернативные конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_endpoints(
        cls,
        start: Union[float, CircularValue],
        end: Union[float, CircularValue],
        circ_range: RangeDescriptor,
    ) -> "Arc":
        """
        Конструирование по двум точкам: l = pdist(start, end).

        ВАЖНО: start == end даёт дугу нулевой длины, а не полную окружность.
        """
        c1 = CircularValue(start, circ_range)
        c2 = CircularValue(end, circ_range)
        arc = cls.__new__(cls)
        arc._init(c1, c2, ArcLength(CircularValue.pdist(c1, c2), circ_range))
        return arc

    @classmethod
    def from_arc(cls, other: "Arc", circ_range: RangeDescriptor) -> "Arc":
        """
        Конструирование из дуги другого диапазона.

        c1, c2 и l конвертируются покомпонентно (полная окружность
        остаётся полной благодаря точной конверсии длины).
        """
        arc = cls.__new__(cls)
        arc._init(
            CircularValue(other._start, circ_range),
            CircularValue(other._end, circ_range),
            ArcLength(other._length, circ_range),
        )
        return arc

    @classmethod
    def zero(cls, circ_range: RangeDescriptor) -> "Arc":
        """Дуга по умолчанию: точка Z нулевой длины."""
        return cls(circ_range.zero, 0.0, circ_range)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Arc":
        """
        Десериализация из payload контракта arc.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту
            pydantic.ValidationError: Если диапазон некорректен
        """
        validate_arc(data)
        return cls(data["start"], data["length"], RangeDescriptor(**data["range"]))

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def start(self) -> CircularValue:
        """Начальная точка c1."""
        return self._start

    @property
    def end(self) -> CircularValue:
        """Конечная точка c2 (c2 == c1 при l = 0 и при l = R)."""
        return self._end

    @property
    def length(self) -> ArcLength:
        """Длина l в [0, R]."""
        return self._length

    @property
    def circ_range(self) -> RangeDescriptor:
        """Диапазон дуги."""
        return self._start.circ_range

    @property
    def is_full_circle(self) -> bool:
        """True если дуга покрывает всю окружность (l = R)."""
        return self._length.is_full_circle

    @property
    def is_point(self) -> bool:
        """True если дуга вырождена в точку (l = 0)."""
        return exact_equal(self._length.value, 0.0)

    def to_range(self, circ_range: RangeDescriptor) -> "Arc":
        """Та же дуга в другом диапазоне."""
        return Arc.from_arc(self, circ_range)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-совместимый payload (контракт arc)."""
        return {
            "range": self.circ_range.model_dump(),
            "start": self._start.value,
            "length": self._length.value,
        }

    def _coerce_arc(self, other: "Arc") -> "Arc":
        if other.circ_range is self.circ_range or other.circ_range == self.circ_range:
            return other
        return other.to_range(self.circ_range)

    def _point_value(self, point: Union[float, CircularValue]) -> float:
        if isinstance(point, CircularValue):
            return CircularValue(point, self.circ_range).value
        return wrap(point, self.circ_range)

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def _contains_point(self, p: float) -> bool:
        r = self.circ_range.circumference
        return self._length.value - _pdist(self._start.value, p, r) >= -EPS_ARC_CONTAINMENT

    def _contains_arc(self, other: "Arc") -> bool:
        if self.is_full_circle:
            return True
        if other.is_full_circle:
            return False

        # Порядок обхода от c1: c1 --- a.c1 --- a.c2 --- c2
        r = self.circ_range.circumference
        c1 = self._start.value
        l1 = _pdist(c1, other._start.value, r)
        l2 = _pdist(c1, other._end.value, r)
        return (l2 - l1 >= -EPS_ARC_CONTAINMENT) and (
            self._length.value - l2 >= -EPS_ARC_CONTAINMENT
        )

    def contains(self, item: Union[float, CircularValue, "Arc"]) -> bool:
        """
        Проверка содержания точки или дуги (концы дуги принадлежат дуге).

        Args:
            item: Точка (float или CircularValue любого диапазона)
                или дуга (любого диапазона)

        Returns:
            True если item лежит в дуге (с допуском EPS_ARC_CONTAINMENT)

        Raises:
            TypeError: Если item не точка и не дуга

        Examples:
            >>> arc = Arc(100.0, 100.0, UNSIGNED_DEGREES)
            >>> arc.contains(150.0), arc.contains(200.0), arc.contains(250.0)
            (True, True, False)
        """
        if isinstance(item, Arc):
            return self._contains_arc(self._coerce_arc(item))
        if isinstance(item, (CircularValue, Real)):
            return self._contains_point(self._point_value(item))
        raise TypeError(f"Arc.contains expects a point or an Arc, got {type(item).__name__}")

    def __contains__(self, item: Union[float, CircularValue, "Arc"]) -> bool:
        return self.contains(item)

    def intersects(self, other: "Arc") -> bool:
        """
        Проверка пересечения дуг (касание концами — пересечение).

        Две дуги пересекаются тогда и только тогда, когда одна из них
        содержит начальную точку другой.
        """
        other = self._coerce_arc(other)
        return self._contains_point(other._start.value) or other._contains_point(
            self._start.value
        )

    # -------------------------------------------------------------------------
    # Равенство
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Arc):
            return NotImplemented

        # Дуги разных диапазонов не равны, сравнение только после to_range()
        if not (other.circ_range is self.circ_range or other.circ_range == self.circ_range):
            return False

        # Обе полные: начальная точка не имеет значения
        if self.is_full_circle and other.is_full_circle:
            return True

        return exact_equal(self._start.value, other._start.value) and exact_equal(
            self._length.value, other._length.value
        )

    def __hash__(self) -> int:
        if self.is_full_circle:
            return hash((self.circ_range, "full_circle"))
        return hash((self.circ_range, self._start.value, self._length.value))

    def __repr__(self) -> str:
        return (
            f"Arc(start={self._start.value!r}, end={self._end.value!r}, "
            f"length={self._length.value!r}, {self.circ_range.name})"
        )

    def __reduce__(self):
        return (_rebuild_arc, (self._start, self._end, self._length))


def _rebuild_arc(start: CircularValue, end: CircularValue, length: ArcLength) -> Arc:
    arc = Arc.__new__(Arc)
    arc._init(start, end, length)
    return arc
