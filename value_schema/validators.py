"""Per-type validators.

Every validator follows the same pipeline: turn the input into a trimmed
string, check its length, match it against a pattern, and then parse it into
the type's canonical value. Failures are returned as results, never raised.
"""
import datetime
import decimal
import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from value_schema.config import utc_today
from value_schema.types import (
    DEFAULT_DAYS_RANGE,
    DEFAULT_MAX_NUMBER,
    DEFAULT_MIN_NUMBER,
    ErrorCode,
    ValidationResult,
    Value,
)

BOOLEAN_PATTERN = re.compile(r"^(true|false|1|0)$")
NUMBER_PATTERN = re.compile(r"^-?[0-9]*\.?[0-9]*$")
DATE_PATTERN = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")
TIMESTAMP_PATTERN = re.compile(
    r"^([0-9]{4}-[0-9]{2}-[0-9]{2})T([0-9]{2}):([0-9]{2}):([0-9]{2})\.([0-9]{3})Z$"
)

TRUE_STRINGS = ("true", "1")


@dataclass(frozen=True)
class TextParams:
    invalid_code: str
    min_length: int
    max_length: int
    pattern: re.Pattern | None = None
    # False for fixed formats, where a wrong length is just a malformed value
    report_length: bool = True


@dataclass(frozen=True)
class NumberParams(TextParams):
    min_value: float = DEFAULT_MIN_NUMBER
    max_value: float = DEFAULT_MAX_NUMBER
    factor: int = 1
    as_integer: bool = True


@dataclass(frozen=True)
class DateParams(TextParams):
    # offsets in days relative to today
    min_days: int = -DEFAULT_DAYS_RANGE
    max_days: int = DEFAULT_DAYS_RANGE
    today: Callable[[], datetime.date] = utc_today


def is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def is_primitive(value: Any) -> bool:
    return isinstance(value, (str, bool, int, float))


def format_number(n: float) -> str:
    """Render a number in fixed-point notation, without trailing zeros."""
    if isinstance(n, float) and math.isfinite(n) and n.is_integer():
        return str(int(n))
    if isinstance(n, float) and math.isfinite(n):
        text = format(decimal.Decimal(repr(n)), "f")
        return text.rstrip("0").rstrip(".") if "." in text else text
    if isinstance(n, float):
        return repr(n)
    return str(n)


def stringify(value: str | bool | int | float) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return value


def round_to_factor(n: float, factor: int) -> float:
    """Round half away from zero to a resolution of 1/factor."""
    try:
        scaled = n * factor
    except OverflowError:
        return n
    if not math.isfinite(scaled):
        return n
    rounded = math.floor(abs(scaled) + 0.5)
    if scaled < 0:
        rounded = -rounded
    if factor == 1:
        return rounded
    return rounded / factor


def shift_date(day: datetime.date, days: int) -> datetime.date:
    """Add days to a date, clamping to the range datetime.date supports."""
    try:
        return day + datetime.timedelta(days=days)
    except OverflowError:
        return datetime.date.max if days > 0 else datetime.date.min


def parse_date(text: str) -> datetime.date | None:
    """Parse 'yyyy-mm-dd'; None if the string is not an existing calendar day."""
    match = DATE_PATTERN.match(text)
    if match is None:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None


def _is_valid_time(hours: int, minutes: int, seconds: int, millis: int) -> bool:
    if (hours, minutes, seconds, millis) == (24, 0, 0, 0):
        return True  # end of day
    return hours <= 23 and minutes <= 59 and seconds <= 59


def validate_text(params: TextParams, value: Value) -> ValidationResult:
    if is_absent(value) or not is_primitive(value):
        return ValidationResult.fail(params.invalid_code)

    text = stringify(value).strip()
    length = len(text)
    if length < params.min_length:
        if not params.report_length:
            return ValidationResult.fail(params.invalid_code)
        return ValidationResult.fail(ErrorCode.MIN_LENGTH, [str(params.min_length)])

    if length > params.max_length:
        if not params.report_length:
            return ValidationResult.fail(params.invalid_code)
        return ValidationResult.fail(ErrorCode.MAX_LENGTH, [str(params.max_length)])

    if params.pattern is not None and params.pattern.search(text) is None:
        return ValidationResult.fail(params.invalid_code)

    return ValidationResult.ok(text)


def validate_number(params: NumberParams, value: Value) -> ValidationResult:
    res = validate_text(params, value)
    if not res.is_ok:
        return res

    try:
        nbr = float(res.value)
    except ValueError:
        # '', '-', '.' get past the pattern
        return ValidationResult.fail(params.invalid_code)
    if not math.isfinite(nbr):
        return ValidationResult.fail(params.invalid_code)

    nbr = round_to_factor(nbr, params.factor)
    nbr = int(nbr) if params.as_integer else float(nbr)

    if nbr < params.min_value:
        return ValidationResult.fail(ErrorCode.MIN_VALUE, [format_number(params.min_value)])
    if nbr > params.max_value:
        return ValidationResult.fail(ErrorCode.MAX_VALUE, [format_number(params.max_value)])

    return ValidationResult.ok(nbr)


def validate_boolean(params: TextParams, value: Value) -> ValidationResult:
    if is_absent(value):
        return ValidationResult.ok(False)

    res = validate_text(params, value)
    if not res.is_ok:
        return res
    return ValidationResult.ok(res.value in TRUE_STRINGS)


def _check_date_range(params: DateParams, day: datetime.date, text: str) -> ValidationResult:
    today = params.today()
    earliest = shift_date(today, params.min_days)
    if day < earliest:
        return ValidationResult.fail(ErrorCode.EARLIEST_DATE, [earliest.isoformat()])

    latest = shift_date(today, params.max_days)
    if day > latest:
        return ValidationResult.fail(ErrorCode.LATEST_DATE, [latest.isoformat()])

    # the validated input string is the canonical form
    return ValidationResult.ok(text)


def validate_date(params: DateParams, value: Value) -> ValidationResult:
    res = validate_text(params, value)
    if not res.is_ok:
        return res

    day = parse_date(res.value)
    if day is None:
        return ValidationResult.fail(params.invalid_code)
    return _check_date_range(params, day, res.value)


def validate_timestamp(params: DateParams, value: Value) -> ValidationResult:
    res = validate_text(params, value)
    if not res.is_ok:
        return res

    match = TIMESTAMP_PATTERN.match(res.value)
    if match is None:
        return ValidationResult.fail(params.invalid_code)

    date_part, *time_parts = match.groups()
    if not _is_valid_time(*(int(part) for part in time_parts)):
        return ValidationResult.fail(params.invalid_code)

    day = parse_date(date_part)
    if day is None:
        return ValidationResult.fail(params.invalid_code)
    # only the date part is range checked
    return _check_date_range(params, day, res.value)


def validate_opaque(params: TextParams, value: Value) -> ValidationResult:
    if is_absent(value):
        return ValidationResult.fail(params.invalid_code)
    return ValidationResult.ok(value)


class Validator:
    """Binds a resolved parameter record to one validation function."""

    def __init__(self, params: TextParams):
        self.params = params

    def validate(self, value: Value) -> ValidationResult:
        raise NotImplementedError

    def __call__(self, value: Value) -> ValidationResult:
        return self.validate(value)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.params})"


class TextValidator(Validator):
    def validate(self, value: Value) -> ValidationResult:
        return validate_text(self.params, value)


class NumberValidator(Validator):
    def validate(self, value: Value) -> ValidationResult:
        return validate_number(self.params, value)


class BooleanValidator(Validator):
    def validate(self, value: Value) -> ValidationResult:
        return validate_boolean(self.params, value)


class DateValidator(Validator):
    def validate(self, value: Value) -> ValidationResult:
        return validate_date(self.params, value)


class TimestampValidator(Validator):
    def validate(self, value: Value) -> ValidationResult:
        return validate_timestamp(self.params, value)


class OpaqueValidator(Validator):
    def validate(self, value: Value) -> ValidationResult:
        return validate_opaque(self.params, value)
