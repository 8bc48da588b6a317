"""Message center options with optional config file backing."""

from __future__ import annotations

import configparser
import logging
import os
from typing import Any

SECTION = "MESSAGECENTER"


class Settings:
    """Options read from the [MESSAGECENTER] section of an ini file.

    Values not present in the file fall back to DEFAULTS. Overrides made with
    set() live in memory only.
    """

    # Default values for all options (single source of truth)
    DEFAULTS = {
        "strict_names": False,
        "trace_deliveries": False,
    }

    def __init__(self, config_file_path: str | None = None) -> None:
        self._config_obj = configparser.ConfigParser()
        self._overrides: dict[str, Any] = {}
        self.config_file_path = config_file_path

        if config_file_path is not None:
            # Silently ignores missing files
            try:
                self._config_obj.read(config_file_path, encoding="utf-8")
            except configparser.Error as e:
                logging.debug(f"Ignoring unreadable config file {config_file_path}: {e}")
                self._config_obj = configparser.ConfigParser()
            else:
                if os.path.exists(config_file_path):
                    logging.debug(f"Using message center config file: {config_file_path}")

    def get(self, option: str, default_value: Any = None) -> Any:
        """Get an option value, auto-converting to bool/int/float."""
        if option in self._overrides:
            return self._overrides[option]

        if not self._config_obj.has_section(SECTION):
            return default_value

        try:
            return self._convert_value(self._config_obj.get(SECTION, option))
        except (configparser.NoOptionError, ValueError):
            return default_value

    def get_or_default(self, option: str) -> Any:
        """Get an option value, falling back to DEFAULTS if not set."""
        return self.get(option, self.DEFAULTS.get(option))

    def set(self, option: str, val: Any) -> None:
        logging.debug(f"Changing message center option << {option} >> to {val}")
        self._overrides[option] = self._convert_value(val)

    def as_dict(self) -> dict[str, Any]:
        return {option: self.get_or_default(option) for option in self.DEFAULTS}

    def _convert_value(self, val: Any) -> Any:
        """Convert a string to bool/int/float if applicable, otherwise return as-is."""
        if not isinstance(val, str):
            return val

        val_lower = val.lower()
        if val_lower in ("true", "yes", "on"):
            return True
        if val_lower in ("false", "no", "off"):
            return False

        stripped = val.removeprefix("-")
        if stripped.isdigit():
            return int(val)
        if stripped.replace(".", "", 1).isdigit():
            return float(val)

        return val
