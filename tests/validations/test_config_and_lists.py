"""Unit tests for settings loading and option lists."""
import datetime
import os
import unittest
from unittest.mock import patch

from value_schema import (
    DEFAULT_DAYS_RANGE,
    DEFAULT_MAX_CHARS,
    ListEntry,
    ListSource,
    ValidatorSettings,
    load_settings,
)
from value_schema.config import utc_today

ENV_KEYS = ("VALUE_SCHEMA_MAX_CHARS", "VALUE_SCHEMA_DAYS_RANGE", "VALUE_SCHEMA_DATE_REFERENCE")


def _env(**values: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in ENV_KEYS}
    env.update(values)
    return env


@patch("value_schema.config.load_dotenv")
class TestLoadSettings(unittest.TestCase):
    def test_defaults(self, load_dotenv) -> None:
        with patch.dict(os.environ, _env(), clear=True):
            settings = load_settings()
        load_dotenv.assert_called_once()
        self.assertEqual(settings, ValidatorSettings())
        self.assertEqual(settings.max_chars, DEFAULT_MAX_CHARS)
        self.assertEqual(settings.days_range, DEFAULT_DAYS_RANGE)
        self.assertEqual(settings.date_reference, "utc")

    def test_environment_overrides(self, load_dotenv) -> None:
        env = _env(
            VALUE_SCHEMA_MAX_CHARS="50",
            VALUE_SCHEMA_DAYS_RANGE="30",
            VALUE_SCHEMA_DATE_REFERENCE="Local",
        )
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings()
        self.assertEqual(settings, ValidatorSettings(max_chars=50, days_range=30, date_reference="local"))

    def test_bad_values_fall_back_with_warning(self, load_dotenv) -> None:
        env = _env(
            VALUE_SCHEMA_MAX_CHARS="lots",
            VALUE_SCHEMA_DAYS_RANGE="-4",
            VALUE_SCHEMA_DATE_REFERENCE="mars",
        )
        with patch.dict(os.environ, env, clear=True):
            with self.assertLogs("value_schema.config", level="WARNING") as logs:
                settings = load_settings()
        self.assertEqual(settings, ValidatorSettings())
        self.assertEqual(len(logs.records), 3)


class TestTodayClock(unittest.TestCase):
    def test_local_reference_uses_local_date(self) -> None:
        self.assertIs(ValidatorSettings(date_reference="local").today_clock(), datetime.date.today)

    def test_utc_reference(self) -> None:
        self.assertIs(ValidatorSettings().today_clock(), utc_today)
        self.assertIsInstance(utc_today(), datetime.date)


class TestListSource(unittest.TestCase):
    def test_simple_list_round_trip(self) -> None:
        data = {
            "name": "genders",
            "listType": "simple",
            "isKeyed": False,
            "list": [{"value": "f", "text": "Female"}, {"value": "m", "text": "Male"}],
        }
        source = ListSource.from_dict(data)
        self.assertEqual(source.list[0], ListEntry(value="f", text="Female"))
        self.assertEqual(source.entries_for(), source.list)
        self.assertEqual(source.to_dict(), data)

    def test_keyed_list(self) -> None:
        source = ListSource.from_dict(
            {
                "name": "states",
                "listType": "keyed",
                "keyedLists": {"in": [{"value": "KA", "text": "Karnataka"}], "au": [{"value": 3, "text": "Victoria"}]},
            }
        )
        self.assertTrue(source.is_keyed)
        self.assertEqual(source.entries_for("au"), [ListEntry(value=3, text="Victoria")])
        self.assertEqual(source.entries_for("nz"), [])

    def test_runtime_list_has_no_entries(self) -> None:
        source = ListSource(name="customers", list_type="runtime")
        self.assertEqual(source.entries_for(), [])
        self.assertEqual(source.to_dict(), {"name": "customers", "listType": "runtime", "isKeyed": False})

    def test_invalid_list_type(self) -> None:
        with self.assertRaises(ValueError):
            ListSource(name="x", list_type="tree")


if __name__ == "__main__":
    unittest.main()
