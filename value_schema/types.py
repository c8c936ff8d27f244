"""Primitive definitions: value types, schemas, error codes and results."""
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MIN_CHARS = 0
DEFAULT_MAX_CHARS = 1000
DEFAULT_MIN_NUMBER = 0
DEFAULT_MAX_NUMBER = 2**53 - 1  # largest integer a float holds exactly
DEFAULT_NBR_DECIMALS = 2
DEFAULT_DAYS_RANGE = 365000

# Primitives are str | int | float | bool. Dates and timestamps travel as strings
# like "yyyy-mm-dd" and "yyyy-mm-ddThh:mm:ss.fffZ".
Value = Any


class InvalidSchemaError(ValueError):
    """Raised when a schema cannot be turned into a validation function."""


class ValueType(str, Enum):
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DATE = "date"
    TIMESTAMP = "timestamp"
    # structured values, accepted as-is
    DS = "ds"
    ARRAY = "array"


class ErrorCode(str, Enum):
    """Error codes returned by validation functions.

    The values are stable ids meant to be mapped to (localized) messages by
    whoever renders them.
    """

    INVALID_TEXT = "_invalidText"
    INVALID_BOOLEAN = "_invalidBoolean"
    INVALID_NUMBER = "_invalidNumber"
    INVALID_DATE = "_invalidDate"
    INVALID_TIMESTAMP = "_invalidTimestamp"
    MIN_LENGTH = "_minLength"
    MAX_LENGTH = "_maxLength"
    MIN_VALUE = "_minValue"
    MAX_VALUE = "_maxValue"
    EARLIEST_DATE = "_earliestDate"
    LATEST_DATE = "_latestDate"


# JSON key -> attribute name
_SCHEMA_KEYS = {
    "valueType": "value_type",
    "minLength": "min_length",
    "maxLength": "max_length",
    "regex": "regex",
    "minValue": "min_value",
    "maxValue": "max_value",
    "nbrDecimalPlaces": "nbr_decimal_places",
    "errorId": "error_id",
}


@dataclass(frozen=True)
class ValueSchema:
    """Describes an expected primitive value.

    Only the fields relevant to ``value_type`` are consulted; the rest are
    ignored. ``None`` means "use the default".

    Attributes:
        value_type: Selects the validator and its defaults.
        min_length: Lower bound on the number of characters (default 0).
        max_length: Upper bound on the number of characters (default 1000).
        regex: Pattern the text must match. Text only.
        min_value: Lowest number, or for dates the earliest day relative to
            today (-10 means "up to 10 days ago").
        max_value: Highest number, or for dates the latest day relative to
            today (10 means "up to 10 days from now").
        nbr_decimal_places: Rounding precision for decimals (default 2).
        error_id: Replaces the type's invalid-value error code.
    """

    value_type: ValueType
    min_length: int | None = None
    max_length: int | None = None
    regex: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    nbr_decimal_places: int | None = None
    error_id: str | None = None

    def __post_init__(self):
        try:
            object.__setattr__(self, "value_type", ValueType(self.value_type))
        except ValueError:
            raise InvalidSchemaError(f"Invalid value type: {self.value_type!r}") from None

    def to_dict(self) -> dict[str, Any]:
        """Convert schema to its JSON form, leaving out unset fields."""
        data: dict[str, Any] = {}
        for key, attr in _SCHEMA_KEYS.items():
            val = getattr(self, attr)
            if val is None:
                continue
            data[key] = val.value if isinstance(val, Enum) else val
        return data

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ValueSchema":
        """Create a schema from its JSON form. snake_case keys are accepted too."""
        attrs = set(_SCHEMA_KEYS.values())
        kwargs: dict[str, Any] = {}
        for key, val in data.items():
            attr = _SCHEMA_KEYS.get(key, key)
            if attr not in attrs:
                logger.debug("Ignoring schema key %s", key)
                continue
            kwargs[attr] = val

        if kwargs.get("value_type") is None:
            raise InvalidSchemaError(f"Schema has no valueType: {data!r}")
        return ValueSchema(**kwargs)


@dataclass(frozen=True)
class ValueSchemaError:
    code: str
    # values for message interpolation, e.g. the violated bound
    params: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation. Exactly one of value/error is set."""

    value: Value = None
    error: ValueSchemaError | None = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("ValidationResult needs exactly one of value or error")

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @staticmethod
    def ok(value: Value) -> "ValidationResult":
        return ValidationResult(value=value)

    @staticmethod
    def fail(code: str, params: list[str] | None = None) -> "ValidationResult":
        code = code.value if isinstance(code, Enum) else code
        return ValidationResult(error=ValueSchemaError(code, list(params or [])))

    def __str__(self):
        if self.error is None:
            return f"ValidationResult(value={self.value!r})"
        return f"ValidationResult(error={self.error.code}, params={self.error.params})"


ValidationFn = Callable[[Value], ValidationResult]
