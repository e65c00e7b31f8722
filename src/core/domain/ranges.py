"""
RangeDescriptor — Дескрипторы диапазонов круговых значений

Диапазон задаётся неизменяемым набором констант {L, H, Z}:
- L (lower): нижняя граница домена (включительно)
- H (upper): верхняя граница домена (исключительно)
- Z (zero): представитель физического нуля внутри [L, H)

Производные величины:
- R = H - L: длина окружности (circumference), всегда > 0

Два диапазона считаются одним доменом ТОЛЬКО если дескрипторы равны
по всем полям (включая name). Дескрипторы с одинаковым R, но разными
полями — разные домены, переход между ними только через явную конверсию.

Модуль также содержит статический реестр именованных диапазонов
(signed/unsigned degrees/radians + тестовые диапазоны) и загрузку
пользовательских диапазонов из JSON-конфигурации.
"""

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Final, Iterable, Iterator, List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.contracts.validators import (
    contract_errors,
    validate_range_config,
    validate_range_descriptor,
)
from src.core.math.numerical_safeguards import is_valid_float

logger = logging.getLogger(__name__)


# =============================================================================
# RANGE DESCRIPTOR MODEL
# =============================================================================


class RangeDescriptor(BaseModel):
    """
    Дескриптор диапазона [L, H) с представителем нуля Z.

    Immutable модель (frozen=True): дескриптор — это набор констант,
    runtime-состояния нет. Некорректный дескриптор (R <= 0, Z вне домена,
    NaN/Inf границы) — ошибка программиста, ловится при конструировании.
    """

    name: str = Field(..., min_length=1, description="Имя диапазона (например, 'signed_degrees')")
    lower: float = Field(..., description="Нижняя граница L (включительно)")
    upper: float = Field(..., description="Верхняя граница H (исключительно)")
    zero: float = Field(..., description="Представитель нуля Z ∈ [L, H)")

    model_config = {"frozen": True}

    @field_validator("lower", "upper", "zero")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        """Границы и ноль должны быть конечными числами."""
        if not is_valid_float(v):
            raise ValueError(f"range constant must be finite, got {v}")
        return v

    @model_validator(mode="after")
    def validate_bounds(self) -> "RangeDescriptor":
        """
        Проверка инвариантов домена.

        - upper > lower (R > 0)
        - lower <= zero < upper
        """
        if self.upper <= self.lower:
            raise ValueError(
                f"range '{self.name}': upper {self.upper} must be greater than lower {self.lower}"
            )
        if not (self.lower <= self.zero < self.upper):
            raise ValueError(
                f"range '{self.name}': zero {self.zero} outside [{self.lower}, {self.upper})"
            )
        return self

    @property
    def circumference(self) -> float:
        """Длина окружности R = H - L."""
        return self.upper - self.lower

    @property
    def half_circumference(self) -> float:
        """Половина окружности R / 2 (антиподальное расстояние)."""
        return self.circumference / 2.0

    @property
    def radians_per_unit(self) -> float:
        """Масштаб единицы диапазона в радианах: 2π / R."""
        return 2.0 * math.pi / self.circumference

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RangeDescriptor":
        """
        Десериализация из payload контракта range_descriptor.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту
            pydantic.ValidationError: Если нарушены инварианты домена
        """
        validate_range_descriptor(data)
        return cls(**data)

    def __str__(self) -> str:
        return f"{self.name}[{self.lower}, {self.upper})"


def make_range(
    name: str,
    lower: float,
    upper: float,
    zero: Optional[float] = None,
) -> RangeDescriptor:
    """
    Фабрика дескрипторов диапазона.

    Если zero не задан: 0.0 когда 0 ∈ [lower, upper), иначе lower.

    Args:
        name: Имя диапазона
        lower: Нижняя граница L
        upper: Верхняя граница H
        zero: Представитель нуля Z (optional)

    Returns:
        Валидированный RangeDescriptor

    Raises:
        pydantic.ValidationError: Если дескриптор некорректен

    Examples:
        >>> make_range("compass", 0.0, 360.0).zero
        0.0
        >>> make_range("hours", 1.0, 13.0).zero
        1.0
    """
    if zero is None:
        zero = 0.0 if lower <= 0.0 < upper else lower
    return RangeDescriptor(name=name, lower=lower, upper=upper, zero=zero)


# =============================================================================
# ИМЕНОВАННЫЕ ДИАПАЗОНЫ
# =============================================================================

# Градусы со знаком: [-180, 180)
SIGNED_DEGREES: Final[RangeDescriptor] = make_range("signed_degrees", -180.0, 180.0, 0.0)

# Градусы без знака: [0, 360)
UNSIGNED_DEGREES: Final[RangeDescriptor] = make_range("unsigned_degrees", 0.0, 360.0, 0.0)

# Радианы со знаком: [-π, π)
SIGNED_RADIANS: Final[RangeDescriptor] = make_range("signed_radians", -math.pi, math.pi, 0.0)

# Радианы без знака: [0, 2π)
UNSIGNED_RADIANS: Final[RangeDescriptor] = make_range("unsigned_radians", 0.0, 2.0 * math.pi, 0.0)

# Тестовые диапазоны: нецелые R, ноль не на границе, домен целиком отрицательный
TEST_RANGE_0: Final[RangeDescriptor] = make_range("test_range_0", 3.0, 10.0, 5.3)
TEST_RANGE_1: Final[RangeDescriptor] = make_range("test_range_1", -3.0, 10.0, -3.0)
TEST_RANGE_2: Final[RangeDescriptor] = make_range("test_range_2", -3.0, 10.0, 7.0)
TEST_RANGE_3: Final[RangeDescriptor] = make_range("test_range_3", -13.0, -3.0, -10.0)

DEFAULT_RANGES: Final[tuple[RangeDescriptor, ...]] = (
    SIGNED_DEGREES,
    UNSIGNED_DEGREES,
    SIGNED_RADIANS,
    UNSIGNED_RADIANS,
    TEST_RANGE_0,
    TEST_RANGE_1,
    TEST_RANGE_2,
    TEST_RANGE_3,
)


# =============================================================================
# RANGE REGISTRY
# =============================================================================


class RangeRegistry:
    """
    Реестр именованных дескрипторов диапазонов.

    Имя уникально в пределах реестра. Повторная регистрация идентичного
    дескриптора — no-op, регистрация другого дескриптора под занятым
    именем — ошибка.
    """

    def __init__(self, ranges: Iterable[RangeDescriptor] = ()):
        self._ranges: Dict[str, RangeDescriptor] = {}
        for descriptor in ranges:
            self.register(descriptor)

    def register(self, descriptor: RangeDescriptor) -> RangeDescriptor:
        """
        Регистрация дескриптора.

        Args:
            descriptor: Дескриптор диапазона

        Returns:
            Зарегистрированный дескриптор

        Raises:
            ValueError: Если имя уже занято другим дескриптором
        """
        existing = self._ranges.get(descriptor.name)
        if existing is not None:
            if existing == descriptor:
                return existing
            raise ValueError(
                f"range '{descriptor.name}' already registered with different bounds: {existing}"
            )

        self._ranges[descriptor.name] = descriptor
        logger.debug("Registered range %s", descriptor)
        return descriptor

    def get(self, name: str) -> RangeDescriptor:
        """
        Получение дескриптора по имени.

        Raises:
            KeyError: Если диапазон не зарегистрирован
        """
        try:
            return self._ranges[name]
        except KeyError:
            raise KeyError(
                f"unknown range '{name}', registered: {sorted(self._ranges)}"
            ) from None

    def names(self) -> List[str]:
        """Имена зарегистрированных диапазонов в порядке регистрации."""
        return list(self._ranges)

    def __contains__(self, name: object) -> bool:
        return name in self._ranges

    def __iter__(self) -> Iterator[RangeDescriptor]:
        return iter(self._ranges.values())

    def __len__(self) -> int:
        return len(self._ranges)

    @classmethod
    def from_config(
        cls,
        data: Dict[str, Any],
        include_defaults: bool = True,
    ) -> "RangeRegistry":
        """
        Построение реестра из конфигурации {"ranges": [...]}.

        Конфигурация валидируется против контракта range_config
        до построения дескрипторов.

        Args:
            data: Конфигурация (dict)
            include_defaults: Добавить именованные диапазоны по умолчанию

        Returns:
            Новый RangeRegistry

        Raises:
            jsonschema.ValidationError: Если конфигурация не соответствует контракту
            pydantic.ValidationError: Если диапазон некорректен (R <= 0 и т.п.)
            ValueError: Если имя диапазона конфликтует с уже зарегистрированным
        """
        errors = contract_errors("range_config", data)
        if errors:
            logger.error("Range config rejected: %s", "; ".join(errors))
        validate_range_config(data)

        registry = cls(DEFAULT_RANGES if include_defaults else ())
        for entry in data["ranges"]:
            registry.register(
                make_range(
                    name=entry["name"],
                    lower=entry["lower"],
                    upper=entry["upper"],
                    zero=entry.get("zero"),
                )
            )

        logger.info("Loaded %d custom range(s), registry size %d", len(data["ranges"]), len(registry))
        return registry

    @classmethod
    def from_json_file(
        cls,
        path: Union[str, Path],
        include_defaults: bool = True,
    ) -> "RangeRegistry":
        """
        Загрузка реестра из JSON-файла конфигурации.

        Raises:
            FileNotFoundError: Если файл не найден
            json.JSONDecodeError: Если файл не является валидным JSON
        """
        config_path = Path(path)
        logger.debug("Loading range config from %s", config_path)

        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        return cls.from_config(data, include_defaults=include_defaults)


# Глобальный реестр именованных диапазонов (только чтение)
DEFAULT_REGISTRY: Final[RangeRegistry] = RangeRegistry(DEFAULT_RANGES)


def get_range(name: str) -> RangeDescriptor:
    """
    Получение именованного диапазона из глобального реестра.

    Raises:
        KeyError: Если диапазон не зарегистрирован
    """
    return DEFAULT_REGISTRY.get(name)
