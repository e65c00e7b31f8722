"""
Contract Validation Module

Модуль для валидации JSON контрактов: сериализованные диапазоны,
круговые значения, дуги и файлы конфигурации диапазонов.
"""

from .validators import (
    CONTRACT_NAMES,
    SchemaLoader,
    build_validators,
    contract_errors,
    get_validator,
    validate_arc,
    validate_circular_value,
    validate_contract,
    validate_range_config,
    validate_range_descriptor,
)

__all__ = [
    # Loading
    "CONTRACT_NAMES",
    "SchemaLoader",
    "build_validators",
    "get_validator",
    # Validation
    "validate_contract",
    "contract_errors",
    "validate_range_descriptor",
    "validate_circular_value",
    "validate_arc",
    "validate_range_config",
]
