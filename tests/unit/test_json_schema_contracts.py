"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных данных
- Детекция нарушений required полей и лишних полей
- Детекция нарушений типов и constraints (minimum/minItems/minLength)
- Интеграция с value-типами (to_dict генерирует валидный payload)
"""

import logging
import math
from importlib import resources

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    CONTRACT_NAMES,
    SchemaLoader,
    contract_errors,
    get_validator,
    validate_contract,
    validate_arc,
    validate_circular_value,
    validate_range_config,
    validate_range_descriptor,
)
from src.core.domain import (
    DEFAULT_RANGES,
    SIGNED_RADIANS,
    TEST_RANGE_0,
    Arc,
    CircularValue,
    RangeRegistry,
)


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_range_descriptor():
    """Валидный range_descriptor для тестирования."""
    return {"name": "unsigned_degrees", "lower": 0.0, "upper": 360.0, "zero": 0.0}


@pytest.fixture
def valid_circular_value(valid_range_descriptor):
    """Валидный circular_value для тестирования."""
    return {"range": valid_range_descriptor, "value": 123.5}


@pytest.fixture
def valid_arc(valid_range_descriptor):
    """Валидный arc для тестирования."""
    return {"range": valid_range_descriptor, "start": 350.0, "length": 20.0}


@pytest.fixture
def valid_range_config():
    """Валидный range_config для тестирования."""
    return {
        "ranges": [
            {"name": "hours", "lower": 0.0, "upper": 24.0},
            {"name": "compass", "lower": 0.0, "upper": 360.0, "zero": 90.0},
        ]
    }


# =============================================================================
# TESTS - SCHEMA LOADING
# =============================================================================


def test_schema_loader_loads_all_schemas():
    """Проверка загрузки всех схем."""
    loader = SchemaLoader()

    range_schema = loader.load_schema("range_descriptor")
    value_schema = loader.load_schema("circular_value")
    arc_schema = loader.load_schema("arc")
    config_schema = loader.load_schema("range_config")

    assert range_schema["title"] == "RangeDescriptor"
    assert value_schema["title"] == "CircularValue"
    assert arc_schema["title"] == "Arc"
    assert config_schema["title"] == "RangeConfig"


def test_schema_loader_caches_schemas():
    """Проверка кэширования схем."""
    loader = SchemaLoader()

    schema1 = loader.load_schema("arc")
    schema2 = loader.load_schema("arc")

    # Должен вернуть тот же объект (кэш)
    assert schema1 is schema2


def test_schema_loader_raises_on_missing_schema():
    """Проверка ошибки при отсутствующей схеме."""
    loader = SchemaLoader()

    with pytest.raises(FileNotFoundError):
        loader.load_schema("non_existent_schema")


def test_schemas_ship_as_package_data():
    """Схемы лежат в данных пакета src.core.contracts."""
    schema_dir = resources.files("src.core.contracts") / "schema"
    for name in CONTRACT_NAMES:
        assert (schema_dir / f"{name}.json").is_file()


def test_validators_are_built_once():
    """Валидатор контракта создаётся один раз и переиспользуется."""
    assert get_validator("arc") is get_validator("arc")


def test_unknown_contract_raises():
    """Неизвестный контракт — KeyError."""
    with pytest.raises(KeyError, match="Unknown contract"):
        validate_contract("position", {})


def test_range_defined_once_and_referenced():
    """Вложенный диапазон в контрактах — $ref на range_descriptor.json."""
    loader = SchemaLoader()

    assert loader.load_schema("arc")["properties"]["range"] == {"$ref": "range_descriptor.json"}
    assert loader.load_schema("circular_value")["properties"]["range"] == {
        "$ref": "range_descriptor.json"
    }
    assert loader.load_schema("range_config")["properties"]["ranges"]["items"] == {
        "$ref": "range_descriptor.json#/$defs/range_fields"
    }


# =============================================================================
# TESTS - RANGE DESCRIPTOR VALIDATION
# =============================================================================


def test_range_descriptor_validator_accepts_valid_data(valid_range_descriptor):
    """Валидация правильного range_descriptor."""
    validate_range_descriptor(valid_range_descriptor)  # Не должно выбросить исключение
    assert get_validator("range_descriptor").is_valid(valid_range_descriptor)


@pytest.mark.parametrize("rng", DEFAULT_RANGES, ids=lambda r: r.name)
def test_named_ranges_dump_to_valid_descriptors(rng):
    """model_dump() именованных диапазонов проходит контракт."""
    validate_range_descriptor(rng.model_dump())


def test_range_descriptor_rejects_missing_zero(valid_range_descriptor):
    """Валидация отклоняет дескриптор без zero."""
    data = valid_range_descriptor.copy()
    del data["zero"]

    with pytest.raises(ValidationError) as exc_info:
        validate_range_descriptor(data)
    assert "'zero' is a required property" in str(exc_info.value)


def test_range_descriptor_rejects_wrong_type(valid_range_descriptor):
    """Валидация отклоняет нечисловую границу."""
    data = valid_range_descriptor.copy()
    data["upper"] = "360"

    with pytest.raises(ValidationError) as exc_info:
        validate_range_descriptor(data)
    assert "is not of type 'number'" in str(exc_info.value)


def test_range_descriptor_rejects_empty_name(valid_range_descriptor):
    """Валидация отклоняет пустое имя."""
    data = valid_range_descriptor.copy()
    data["name"] = ""

    with pytest.raises(ValidationError):
        validate_range_descriptor(data)


def test_range_descriptor_rejects_additional_properties(valid_range_descriptor):
    """Валидация отклоняет лишние поля."""
    data = valid_range_descriptor.copy()
    data["units"] = "degrees"

    with pytest.raises(ValidationError):
        validate_range_descriptor(data)


# =============================================================================
# TESTS - CIRCULAR VALUE VALIDATION
# =============================================================================


def test_circular_value_validator_accepts_valid_data(valid_circular_value):
    """Валидация правильного circular_value."""
    validate_circular_value(valid_circular_value)
    assert get_validator("circular_value").is_valid(valid_circular_value)


def test_circular_value_accepts_out_of_domain_raw_value(valid_circular_value):
    """Сырое значение вне домена допустимо (нормализуется при загрузке)."""
    data = valid_circular_value.copy()
    data["value"] = -725.0
    validate_circular_value(data)


def test_circular_value_rejects_missing_range(valid_circular_value):
    """Валидация отклоняет значение без диапазона."""
    data = valid_circular_value.copy()
    del data["range"]

    with pytest.raises(ValidationError) as exc_info:
        validate_circular_value(data)
    assert "'range' is a required property" in str(exc_info.value)


def test_circular_value_rejects_incomplete_range(valid_circular_value):
    """Валидация отклоняет неполный вложенный диапазон."""
    data = valid_circular_value.copy()
    data["range"] = {"name": "x", "lower": 0.0, "upper": 1.0}

    with pytest.raises(ValidationError):
        validate_circular_value(data)


def test_circular_value_nested_range_follows_descriptor_contract(valid_circular_value):
    """Вложенный диапазон проверяется контрактом range_descriptor через $ref."""
    data = valid_circular_value.copy()
    data["range"] = {**data["range"], "units": "degrees"}

    with pytest.raises(ValidationError) as exc_info:
        validate_circular_value(data)
    assert "Additional properties are not allowed" in str(exc_info.value)


# =============================================================================
# TESTS - ARC VALIDATION
# =============================================================================


def test_arc_validator_accepts_valid_data(valid_arc):
    """Валидация правильного arc."""
    validate_arc(valid_arc)
    assert get_validator("arc").is_valid(valid_arc)


def test_arc_rejects_negative_length(valid_arc):
    """Валидация отклоняет отрицательную длину."""
    data = valid_arc.copy()
    data["length"] = -1.0

    with pytest.raises(ValidationError) as exc_info:
        validate_arc(data)
    assert "is less than the minimum of 0" in str(exc_info.value)


def test_arc_rejects_missing_start(valid_arc):
    """Валидация отклоняет дугу без начальной точки."""
    data = valid_arc.copy()
    del data["start"]

    with pytest.raises(ValidationError):
        validate_arc(data)


# =============================================================================
# TESTS - RANGE CONFIG VALIDATION
# =============================================================================


def test_range_config_validator_accepts_valid_data(valid_range_config):
    """Валидация правильного range_config."""
    validate_range_config(valid_range_config)
    assert get_validator("range_config").is_valid(valid_range_config)


def test_range_config_rejects_empty_ranges():
    """Валидация отклоняет пустой список диапазонов."""
    with pytest.raises(ValidationError):
        validate_range_config({"ranges": []})


def test_range_config_rejects_entry_without_upper(valid_range_config):
    """Валидация отклоняет диапазон без верхней границы."""
    data = {"ranges": [{"name": "x", "lower": 0.0}]}

    with pytest.raises(ValidationError) as exc_info:
        validate_range_config(data)
    assert "'upper' is a required property" in str(exc_info.value)


# =============================================================================
# TESTS - VALUE TYPE INTEGRATION
# =============================================================================


def test_circular_value_generates_valid_json():
    """Проверка, что CircularValue.to_dict() генерирует валидный payload."""
    value = CircularValue(math.pi / 3, SIGNED_RADIANS)
    validate_circular_value(value.to_dict())


def test_arc_generates_valid_json():
    """Проверка, что Arc.to_dict() генерирует валидный payload."""
    validate_arc(Arc(6.0, 7.0, TEST_RANGE_0).to_dict())
    validate_arc(Arc.zero(TEST_RANGE_0).to_dict())


def test_contract_errors_returns_all_errors():
    """Проверка, что contract_errors возвращает все нарушения."""

    invalid_data = {
        "range": {"name": "", "lower": "0", "upper": 360.0, "zero": 0.0},  # 2 НАРУШЕНИЯ
        "start": "350",  # type violation - НАРУШЕНИЕ
        "length": -20.0,  # minimum: 0 - НАРУШЕНИЕ
    }

    errors = contract_errors("arc", invalid_data)
    # Должно быть как минимум 4 ошибки, по порядку путей
    assert len(errors) >= 4
    paths = [error.split(":")[0] for error in errors]
    assert paths == sorted(paths)
    assert any(error.startswith("$.range.name:") for error in errors)
    assert any(error.startswith("$.length:") for error in errors)


def test_rejected_range_config_is_logged(caplog):
    """Нарушения конфигурации диапазонов логируются до исключения."""
    data = {"ranges": [{"name": "x", "lower": 0.0, "scale": 2.0}]}

    with caplog.at_level(logging.ERROR, logger="src.core.domain.ranges"):
        with pytest.raises(ValidationError):
            RangeRegistry.from_config(data)

    assert "Range config rejected" in caplog.text
    assert "'upper' is a required property" in caplog.text
