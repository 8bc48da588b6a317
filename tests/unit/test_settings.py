"""Tests for Settings."""

from __future__ import annotations

import os
import tempfile

import pytest

from messagecenter.lib.settings import Settings


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    fd, path = tempfile.mkstemp(suffix=".ini")
    os.close(fd)
    yield path
    # Cleanup
    if os.path.exists(path):
        os.remove(path)


def write_config(path, body):
    with open(path, "w", encoding="utf-8") as f:
        f.write(body)


def test_defaults_without_file():
    settings = Settings()

    assert settings.get_or_default("strict_names") is False
    assert settings.get_or_default("trace_deliveries") is False
    assert settings.as_dict() == Settings.DEFAULTS


def test_missing_file_falls_back_to_defaults(tmp_path):
    settings = Settings(str(tmp_path / "missing.ini"))

    assert settings.as_dict() == Settings.DEFAULTS


def test_file_without_section_falls_back_to_defaults(temp_config_file):
    write_config(temp_config_file, "[OTHER]\nstrict_names = true\n")
    settings = Settings(temp_config_file)

    assert settings.get_or_default("strict_names") is False


def test_file_without_section_header_falls_back_to_defaults(temp_config_file):
    write_config(temp_config_file, "strict_names = true\n")
    settings = Settings(temp_config_file)

    assert settings.as_dict() == Settings.DEFAULTS


def test_values_read_from_file(temp_config_file):
    write_config(temp_config_file, "[MESSAGECENTER]\nstrict_names = yes\ntrace_deliveries = off\n")
    settings = Settings(temp_config_file)

    assert settings.get_or_default("strict_names") is True
    assert settings.get_or_default("trace_deliveries") is False


def test_get_unknown_option_returns_default(temp_config_file):
    write_config(temp_config_file, "[MESSAGECENTER]\nstrict_names = yes\n")
    settings = Settings(temp_config_file)

    assert settings.get("nonexistent") is None
    assert settings.get("nonexistent", "default") == "default"


def test_set_overrides_file_value(temp_config_file):
    write_config(temp_config_file, "[MESSAGECENTER]\nstrict_names = yes\n")
    settings = Settings(temp_config_file)

    settings.set("strict_names", "false")

    assert settings.get_or_default("strict_names") is False
    with open(temp_config_file, encoding="utf-8") as f:
        assert "strict_names = yes" in f.read()


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("True", True),
        ("on", True),
        ("No", False),
        ("42", 42),
        ("-10", -10),
        ("--5", "--5"),
        ("3.5", 3.5),
        ("hello", "hello"),
    ],
)
def test_value_conversion(raw, expected):
    settings = Settings()
    settings.set("option", raw)

    result = settings.get("option")
    assert result == expected
    assert type(result) is type(expected)
