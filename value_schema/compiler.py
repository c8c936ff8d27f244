"""Schema compiler: turns a ValueSchema into a reusable validation function."""
import datetime
import logging
import re
from collections.abc import Callable

from value_schema.config import ValidatorSettings, load_settings
from value_schema.types import (
    DEFAULT_MAX_NUMBER,
    DEFAULT_MIN_CHARS,
    DEFAULT_MIN_NUMBER,
    DEFAULT_NBR_DECIMALS,
    ErrorCode,
    InvalidSchemaError,
    ValidationFn,
    ValueSchema,
    ValueType,
)
from value_schema.validators import (
    BOOLEAN_PATTERN,
    DATE_PATTERN,
    NUMBER_PATTERN,
    TIMESTAMP_PATTERN,
    BooleanValidator,
    DateParams,
    DateValidator,
    NumberParams,
    NumberValidator,
    OpaqueValidator,
    TextParams,
    TextValidator,
    TimestampValidator,
    Validator,
    round_to_factor,
)

logger = logging.getLogger(__name__)

BOOLEAN_MAX_LENGTH = 5
DATE_MAX_LENGTH = 10
TIMESTAMP_MAX_LENGTH = 25
MAX_NBR_DECIMALS = 15

Clock = Callable[[], datetime.date]


def _lengths(schema: ValueSchema, settings: ValidatorSettings) -> tuple[int, int]:
    min_length = DEFAULT_MIN_CHARS if schema.min_length is None else schema.min_length
    max_length = settings.max_chars if schema.max_length is None else schema.max_length
    return min_length, max_length


def _build_text(schema: ValueSchema, settings: ValidatorSettings, today: Clock) -> Validator:
    pattern = None
    if schema.regex:
        try:
            pattern = re.compile(schema.regex)
        except re.error as e:
            raise InvalidSchemaError(f"Invalid regex {schema.regex!r}: {e}") from e

    min_length, max_length = _lengths(schema, settings)
    return TextValidator(
        TextParams(
            invalid_code=schema.error_id or ErrorCode.INVALID_TEXT.value,
            min_length=min_length,
            max_length=max_length,
            pattern=pattern,
        )
    )


def _build_number(schema: ValueSchema, settings: ValidatorSettings, today: Clock) -> Validator:
    is_integer = schema.value_type == ValueType.INTEGER
    if is_integer:
        factor = 1
    else:
        places = schema.nbr_decimal_places
        if places is None or places < 0:
            if places is not None:
                logger.debug("nbr_decimal_places=%s reset to %d", places, DEFAULT_NBR_DECIMALS)
            places = DEFAULT_NBR_DECIMALS
        if places > MAX_NBR_DECIMALS:
            # a float carries no more precision than this
            logger.debug("nbr_decimal_places=%s capped at %d", places, MAX_NBR_DECIMALS)
            places = MAX_NBR_DECIMALS
        factor = 10 ** int(places)

    # author-given bounds share the output precision, so comparisons are exact
    min_value = DEFAULT_MIN_NUMBER
    if schema.min_value is not None:
        min_value = round_to_factor(schema.min_value, factor)
    max_value = DEFAULT_MAX_NUMBER
    if schema.max_value is not None:
        max_value = round_to_factor(schema.max_value, factor)

    min_length, max_length = _lengths(schema, settings)
    return NumberValidator(
        NumberParams(
            invalid_code=schema.error_id or ErrorCode.INVALID_NUMBER.value,
            min_length=min_length,
            max_length=max_length,
            pattern=NUMBER_PATTERN,
            min_value=min_value,
            max_value=max_value,
            factor=factor,
            as_integer=is_integer,
        )
    )


def _build_boolean(schema: ValueSchema, settings: ValidatorSettings, today: Clock) -> Validator:
    # schema lengths and regex do not apply to the fixed boolean format
    return BooleanValidator(
        TextParams(
            invalid_code=schema.error_id or ErrorCode.INVALID_BOOLEAN.value,
            min_length=1,
            max_length=BOOLEAN_MAX_LENGTH,
            pattern=BOOLEAN_PATTERN,
            report_length=False,
        )
    )


def _date_params(
    schema: ValueSchema,
    settings: ValidatorSettings,
    today: Clock,
    invalid_code: ErrorCode,
    pattern: re.Pattern,
    max_length: int,
) -> DateParams:
    min_days = -settings.days_range if schema.min_value is None else int(schema.min_value)
    max_days = settings.days_range if schema.max_value is None else int(schema.max_value)
    return DateParams(
        invalid_code=schema.error_id or invalid_code.value,
        min_length=1,
        max_length=max_length,
        pattern=pattern,
        report_length=False,
        min_days=min_days,
        max_days=max_days,
        today=today,
    )


def _build_date(schema: ValueSchema, settings: ValidatorSettings, today: Clock) -> Validator:
    return DateValidator(
        _date_params(schema, settings, today, ErrorCode.INVALID_DATE, DATE_PATTERN, DATE_MAX_LENGTH)
    )


def _build_timestamp(schema: ValueSchema, settings: ValidatorSettings, today: Clock) -> Validator:
    return TimestampValidator(
        _date_params(
            schema, settings, today, ErrorCode.INVALID_TIMESTAMP, TIMESTAMP_PATTERN, TIMESTAMP_MAX_LENGTH
        )
    )


def _build_opaque(schema: ValueSchema, settings: ValidatorSettings, today: Clock) -> Validator:
    min_length, max_length = _lengths(schema, settings)
    return OpaqueValidator(
        TextParams(
            invalid_code=schema.error_id or ErrorCode.INVALID_TEXT.value,
            min_length=min_length,
            max_length=max_length,
        )
    )


VALIDATOR_BUILDERS: dict[ValueType, Callable[[ValueSchema, ValidatorSettings, Clock], Validator]] = {
    ValueType.TEXT: _build_text,
    ValueType.INTEGER: _build_number,
    ValueType.DECIMAL: _build_number,
    ValueType.BOOLEAN: _build_boolean,
    ValueType.DATE: _build_date,
    ValueType.TIMESTAMP: _build_timestamp,
    ValueType.DS: _build_opaque,
    ValueType.ARRAY: _build_opaque,
}


def create_validator(
    schema: ValueSchema,
    settings: ValidatorSettings | None = None,
    today: Clock | None = None,
) -> Validator:
    """Resolve a schema's defaults once and return the matching validator object."""
    if settings is None:
        settings = load_settings()
    if today is None:
        today = settings.today_clock()

    builder = VALIDATOR_BUILDERS.get(schema.value_type)
    if builder is None:
        raise InvalidSchemaError(f"Invalid value type: {schema.value_type!r}")

    validator = builder(schema, settings, today)
    logger.debug("Compiled %s schema: %r", schema.value_type.value, validator)
    return validator


def create_validation_fn(
    schema: ValueSchema,
    settings: ValidatorSettings | None = None,
    today: Clock | None = None,
) -> ValidationFn:
    """Compile a schema into a function that validates one value per call.

    Compile once per schema and call the result for every value. The returned
    function holds only frozen parameters and is safe to share between threads.

    Args:
        schema: Description of the expected value.
        settings: Defaults for unset schema fields; read from the environment
            when omitted.
        today: Clock for relative date bounds, called on every date
            validation. Defaults to the settings' date reference.

    Raises:
        InvalidSchemaError: If the schema's regex does not compile.
    """
    return create_validator(schema, settings, today).validate


compile_schema = create_validation_fn
