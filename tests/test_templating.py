"""Tests for notification command template expansion."""

import pytest

from conftest import CPU_TEMP, celsius
from sensorwatch.exceptions import TemplateError
from sensorwatch.watch.models import WatchConfig, WatchState, WatchStatus
from sensorwatch.watch.templating import CommandFields, expand_command


def _fields(current: str = "80.00 degC") -> CommandFields:
    return CommandFields(
        device_name="cpu0",
        type_name="temp",
        index=0,
        current=current,
        lower="10.00 degC",
        upper="75.00 degC",
    )


class TestExpandCommand:
    def test_placeholders(self):
        assert expand_command("%x-%t%n:%2", _fields()) == "cpu0-temp0:80.00 degC"

    def test_bounds(self):
        assert expand_command("%3..%4", _fields()) == "10.00 degC..75.00 degC"

    def test_literal_text_untouched(self):
        cmd = "/usr/bin/logger -t sensors 'alert'"
        assert expand_command(cmd, _fields()) == cmd

    def test_double_percent(self):
        assert expand_command("100%%", _fields()) == "100%"

    def test_unknown_placeholder_passes_through(self):
        assert expand_command("%q %x", _fields()) == "%q cpu0"

    def test_trailing_percent_dropped(self):
        assert expand_command("load 5%", _fields()) == "load 5"

    def test_empty_template(self):
        assert expand_command("", _fields()) == ""

    def test_exact_fit(self):
        assert expand_command("a" * 10, _fields(), max_length=10) == "a" * 10

    def test_literal_overflow_fails(self):
        with pytest.raises(TemplateError):
            expand_command("a" * 11, _fields(), max_length=10)

    def test_substitution_overflow_fails(self):
        """A placeholder that does not fit fails the whole expansion."""
        with pytest.raises(TemplateError):
            expand_command("run %2", _fields(), max_length=12)


class TestCommandFields:
    def test_for_watch_formats_values(self):
        config = WatchConfig(
            lower=celsius(10), upper=celsius(80), command="x", enabled=True
        )
        state = WatchState(last_value=celsius(85), status=WatchStatus.CRIT)
        fields = CommandFields.for_watch(CPU_TEMP, config, state)
        assert fields.device_name == "cpu0"
        assert fields.type_name == "temp"
        assert fields.index == 0
        assert fields.current == "85.00 degC"
        assert fields.lower == "10.00 degC"
        assert fields.upper == "80.00 degC"
