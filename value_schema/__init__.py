"""Schema-driven validation of primitive values."""

from .types import (
    DEFAULT_DAYS_RANGE,
    DEFAULT_MAX_CHARS,
    DEFAULT_MAX_NUMBER,
    DEFAULT_MIN_CHARS,
    DEFAULT_MIN_NUMBER,
    DEFAULT_NBR_DECIMALS,
    ErrorCode,
    InvalidSchemaError,
    ValidationFn,
    ValidationResult,
    ValueSchema,
    ValueSchemaError,
    ValueType,
)
from .config import ValidatorSettings, load_settings
from .compiler import compile_schema, create_validation_fn, create_validator
from .lists import KeyedList, KeyedLists, ListEntry, ListSource, SimpleList

__all__ = [
    "DEFAULT_DAYS_RANGE",
    "DEFAULT_MAX_CHARS",
    "DEFAULT_MAX_NUMBER",
    "DEFAULT_MIN_CHARS",
    "DEFAULT_MIN_NUMBER",
    "DEFAULT_NBR_DECIMALS",
    "ErrorCode",
    "InvalidSchemaError",
    "ValidationFn",
    "ValidationResult",
    "ValueSchema",
    "ValueSchemaError",
    "ValueType",
    "ValidatorSettings",
    "load_settings",
    "compile_schema",
    "create_validation_fn",
    "create_validator",
    "KeyedList",
    "KeyedLists",
    "ListEntry",
    "ListSource",
    "SimpleList",
]
