"""
Layered configuration for statboard.

Values resolve with this precedence (highest wins):
    1. Environment variables (PREFIX_SECTION__KEY)
    2. Config file (YAML or JSON)
    3. Built-in defaults

Usage:
    config = Config(config_file="~/.statboard/config.yaml")

    config.get("log.level")            # dot-notation access
    config.get_section("fitbit")       # collector keyword arguments

Secrets such as the Fitbit client secret can stay out of the file entirely:
    STATBOARD_FITBIT__CLIENT_SECRET=... statboard collect fitbit steps
"""

import json
import os
from typing import Any

import yaml

_DEFAULT_ENV_PREFIX = "STATBOARD_"


def _default_config() -> dict[str, Any]:
    # Credentials are always empty by default.
    return {
        "fitbit": {
            "client_id": "",
            "client_secret": "",
            "cache_file": "",
        },
        "log": {
            "level": "WARNING",
            "file": "",
        },
    }


def _merge(target: dict, source: dict) -> None:
    """Recursively merge ``source`` into ``target``."""
    for key, value in source.items():
        if isinstance(target.get(key), dict) and isinstance(value, dict):
            _merge(target[key], value)
        else:
            target[key] = value


class Config:
    """
    Configuration read once at startup.

    Each top-level section of the file names a collector (``fitbit``) or a
    CLI concern (``log``).  Env vars use double-underscore to denote nesting:
    STATBOARD_FITBIT__CLIENT_ID=abc -> config["fitbit"]["client_id"] = "abc"
    """

    def __init__(self, config_file: str | None = None, env_prefix: str = _DEFAULT_ENV_PREFIX):
        """
        Args:
            config_file: Path to YAML or JSON configuration file. A missing file is not an error.
            env_prefix: Prefix for environment variable overrides; empty disables them.
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""

        self.config_data = _default_config()
        if self.config_file and os.path.exists(self.config_file):
            _merge(self.config_data, self._load_file(self.config_file))
        self._apply_env()

    @staticmethod
    def _load_file(path: str) -> dict[str, Any]:
        ext = os.path.splitext(path)[1].lower()
        with open(path) as f:
            if ext in (".yaml", ".yml"):
                return yaml.safe_load(f) or {}
            elif ext == ".json":
                return json.load(f)
        return {}

    def _apply_env(self) -> None:
        if not self.env_prefix:
            return
        for env_key, env_value in os.environ.items():
            if not env_key.startswith(self.env_prefix):
                continue
            *sections, leaf = env_key[len(self.env_prefix) :].lower().split("__")

            current = self.config_data
            for part in sections:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                current = current[part]
            current[leaf] = env_value

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dot-notation path.

        Args:
            key_path: e.g. "fitbit.client_id", "log.level"
            default: Returned when key is not found.
        """
        current = self.config_data
        for part in key_path.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def get_section(self, name: str) -> dict[str, Any]:
        """Return a copy of a top-level section, or an empty dict."""
        section = self.config_data.get(name, {})
        return dict(section) if isinstance(section, dict) else {}
