"""
Contracts — JSON Schema контракты круговой геометрии

Схемы (Draft 2020-12) поставляются как данные пакета в schema/:
- range_descriptor.json (дескриптор диапазона {name, lower, upper, zero})
- circular_value.json (значение с диапазоном)
- arc.json (дуга: диапазон, начальная точка, длина)
- range_config.json (файл конфигурации пользовательских диапазонов)

Диапазон описан один раз в range_descriptor.json; остальные контракты
ссылаются на него через $ref, ссылки разрешаются по $id через
referencing.Registry. Валидаторы строятся один раз при импорте модуля.
"""

import json
import logging
from importlib import resources
from typing import Any, Dict, Final, Iterable, List, Mapping, Tuple

from jsonschema import Draft202012Validator, SchemaError, ValidationError
from referencing import Registry
from referencing.jsonschema import DRAFT202012

logger = logging.getLogger(__name__)

# Все контракты пакета (имя файла без .json)
CONTRACT_NAMES: Final[Tuple[str, ...]] = (
    "range_descriptor",
    "circular_value",
    "arc",
    "range_config",
)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик схем контрактов из данных пакета.

    Каждая схема читается один раз, проходит meta-валидацию и кэшируется.
    """

    def __init__(self, package: str = __package__):
        """
        Args:
            package: Пакет, содержащий каталог schema/
        """
        self._root = resources.files(package) / "schema"
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, name: str) -> Dict[str, Any]:
        """
        Загрузка схемы контракта.

        Args:
            name: Имя контракта без расширения (например, 'arc')

        Raises:
            FileNotFoundError: Если схема не найдена в пакете
            ValueError: Если схема не проходит meta-валидацию
        """
        if name in self._schemas:
            return self._schemas[name]

        source = self._root / f"{name}.json"
        if not source.is_file():
            raise FileNotFoundError(f"Contract schema not found: {name}.json")

        schema = json.loads(source.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as e:
            raise ValueError(f"Invalid contract schema {name}.json: {e.message}") from e

        logger.debug("Loaded contract schema %s", name)
        self._schemas[name] = schema
        return schema

    def registry(self, names: Iterable[str] = CONTRACT_NAMES) -> Registry:
        """Registry схем по их $id, для разрешения $ref между контрактами."""
        schemas = [self.load_schema(name) for name in names]
        return Registry().with_resources(
            (schema["$id"], DRAFT202012.create_resource(schema)) for schema in schemas
        )


def build_validators(loader: SchemaLoader) -> Dict[str, Draft202012Validator]:
    """Валидатор на каждый контракт, все с общим Registry."""
    registry = loader.registry()
    return {
        name: Draft202012Validator(loader.load_schema(name), registry=registry)
        for name in CONTRACT_NAMES
    }


_VALIDATORS: Final[Mapping[str, Draft202012Validator]] = build_validators(SchemaLoader())


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def get_validator(name: str) -> Draft202012Validator:
    """
    Готовый валидатор контракта.

    Raises:
        KeyError: Если контракт неизвестен
    """
    try:
        return _VALIDATORS[name]
    except KeyError:
        raise KeyError(f"Unknown contract {name!r}, expected one of {CONTRACT_NAMES}") from None


def validate_contract(name: str, data: Any) -> None:
    """
    Проверка payload против контракта.

    Raises:
        ValidationError: Если payload не соответствует контракту
    """
    get_validator(name).validate(data)


def contract_errors(name: str, data: Any) -> List[str]:
    """
    Все нарушения контракта в виде "путь: сообщение", по порядку путей.

    Пустой список — payload соответствует контракту.
    """
    errors = sorted(get_validator(name).iter_errors(data), key=lambda e: e.json_path)
    return [f"{e.json_path}: {e.message}" for e in errors]


def validate_range_descriptor(data: Dict[str, Any]) -> None:
    """Контракт range_descriptor (RangeDescriptor.from_dict)."""
    validate_contract("range_descriptor", data)


def validate_circular_value(data: Dict[str, Any]) -> None:
    """Контракт circular_value (CircularValue.from_dict)."""
    validate_contract("circular_value", data)


def validate_arc(data: Dict[str, Any]) -> None:
    """Контракт arc (Arc.from_dict)."""
    validate_contract("arc", data)


def validate_range_config(data: Dict[str, Any]) -> None:
    """Контракт range_config (RangeRegistry.from_config)."""
    validate_contract("range_config", data)


__all__ = [
    "CONTRACT_NAMES",
    "ValidationError",
    "SchemaLoader",
    "build_validators",
    "get_validator",
    "validate_contract",
    "contract_errors",
    "validate_range_descriptor",
    "validate_circular_value",
    "validate_arc",
    "validate_range_config",
]
