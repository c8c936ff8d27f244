import datetime
import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from dotenv import load_dotenv

from value_schema.types import DEFAULT_DAYS_RANGE, DEFAULT_MAX_CHARS

logger = logging.getLogger(__name__)

DATE_REFERENCES = ("utc", "local")

# Furthest any date can be from today while staying inside datetime.date
MAX_DAYS_RANGE = 3_000_000


@dataclass(frozen=True)
class ValidatorSettings:
    """Process-wide defaults applied when a schema leaves a field unset."""

    max_chars: int = DEFAULT_MAX_CHARS
    days_range: int = DEFAULT_DAYS_RANGE
    # calendar that "today" is taken from for relative date bounds
    date_reference: str = "utc"

    def today_clock(self) -> Callable[[], datetime.date]:
        if self.date_reference == "local":
            return datetime.date.today
        return utc_today


def utc_today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


def _int_from_env(name: str, default: int, minimum: int, maximum: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < minimum or value > maximum:
        logger.warning("Ignoring %s=%d: must be between %d and %d", name, value, minimum, maximum)
        return default
    return value


def load_settings() -> ValidatorSettings:
    """Read settings from the environment (and a .env file, if present).

    VALUE_SCHEMA_MAX_CHARS: default max length of text values.
    VALUE_SCHEMA_DAYS_RANGE: default date window, in days either side of today.
    VALUE_SCHEMA_DATE_REFERENCE: "utc" or "local".
    """
    load_dotenv()

    reference = os.getenv("VALUE_SCHEMA_DATE_REFERENCE", "utc").strip().lower()
    if reference not in DATE_REFERENCES:
        logger.warning("Ignoring VALUE_SCHEMA_DATE_REFERENCE=%r: expected one of %s", reference, DATE_REFERENCES)
        reference = "utc"

    return ValidatorSettings(
        max_chars=_int_from_env("VALUE_SCHEMA_MAX_CHARS", DEFAULT_MAX_CHARS, 0, 2**31 - 1),
        days_range=_int_from_env("VALUE_SCHEMA_DAYS_RANGE", DEFAULT_DAYS_RANGE, 0, MAX_DAYS_RANGE),
        date_reference=reference,
    )
