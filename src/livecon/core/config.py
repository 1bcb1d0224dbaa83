"""Console configuration.

Values resolve with priority: explicit argument > environment > YAML
config file > default.

Environment Variables:
    LIVECON_CONFIG: Path to a YAML config file
    LIVECON_HISTORY_LIMIT: Number of commands kept in history
    LIVECON_AUTOSTART_FILE: Statement file run when the console starts
    LIVECON_CAPTURE_OUTPUT: "0" to let snippets print to the real stdout
    LIVECON_INSTALLED_MODULES: "1" to offer installed modules as completions
    LIVECON_TRANSCRIPT_LOG_LEVEL: Minimum level of log records echoed
        into the transcript
    LIVECON_THEME: Console theme name
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from livecon.core.history import HISTORY_LIMIT

CONFIG_ENV = "LIVECON_CONFIG"
ENV_PREFIX = "LIVECON_"

DEFAULT_AUTOSTART_FILE = "livecon_autostart.py"

DEFAULT_STARTUP_STATEMENTS = (
    "import sys",
    "import os",
    "import itertools",
    "import collections",
)

# Environment variable names that don't follow LIVECON_<FIELD>
_ENV_ALIASES = {
    "include_installed_modules": "LIVECON_INSTALLED_MODULES",
}

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigError(ValueError):
    """Invalid configuration value or unreadable config file."""


@dataclass
class ConsoleConfig:
    """Settings for one console session.

    Attributes:
        history_limit: Number of submitted commands kept for recall.
        autostart_file: Statement file fed to the console on startup.
        startup_statements: Statements evaluated when the session is built.
        import_keywords: Leading keywords stripped before namespace matching.
        include_installed_modules: Also offer importable, not yet imported,
            top-level modules as namespace completions.
        capture_output: Route snippet stdout/stderr into the transcript.
        transcript_log_level: Log records at or above this level are
            echoed into the transcript.
        theme: Console theme name.
    """

    history_limit: int = HISTORY_LIMIT
    autostart_file: str = DEFAULT_AUTOSTART_FILE
    startup_statements: tuple[str, ...] = DEFAULT_STARTUP_STATEMENTS
    import_keywords: tuple[str, ...] = ("using", "import", "from")
    include_installed_modules: bool = False
    capture_output: bool = True
    transcript_log_level: str = "WARNING"
    theme: str = "default"

    def __post_init__(self) -> None:
        if self.history_limit < 1:
            raise ConfigError(f"history_limit must be positive, got {self.history_limit}")
        level = self.transcript_log_level.upper()
        if level not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.transcript_log_level}")
        self.transcript_log_level = level
        self.startup_statements = tuple(self.startup_statements)
        self.import_keywords = tuple(self.import_keywords)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ConfigError(f"Expected a boolean, got {value!r}")


def _parse_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Expected an integer, got {value!r}") from e


def _parse_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        # Environment form: one entry per line or separated by ";"
        parts = value.replace(";", "\n").splitlines()
        return tuple(p.strip() for p in parts if p.strip())
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    raise ConfigError(f"Expected a list, got {value!r}")


_PARSERS: dict[str, Callable[[Any], Any]] = {
    "history_limit": _parse_int,
    "autostart_file": str,
    "startup_statements": _parse_list,
    "import_keywords": _parse_list,
    "include_installed_modules": _parse_bool,
    "capture_output": _parse_bool,
    "transcript_log_level": str,
    "theme": str,
}


def _read_config_file(config_path: str | None) -> dict[str, Any]:
    """Read the YAML config file, if any.

    Raises:
        ConfigError: If the file is given but cannot be read or parsed.
    """
    if not config_path:
        return {}
    try:
        content = Path(config_path).read_text(encoding="utf-8")
        data = yaml.safe_load(content) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def load_config(config_file: str | None = None, **overrides: Any) -> ConsoleConfig:
    """Build a ConsoleConfig from arguments, environment and config file.

    Args:
        config_file: YAML file path. Defaults to LIVECON_CONFIG.
        **overrides: Field values that win over every other source.
            None values are ignored.

    Returns:
        Resolved configuration.

    Raises:
        ConfigError: On unknown keys, bad values or an unreadable file.
    """
    file_config = _read_config_file(config_file or os.environ.get(CONFIG_ENV))

    known = {f.name for f in fields(ConsoleConfig)}
    unknown = (set(overrides) | set(file_config)) - known
    if unknown:
        raise ConfigError(f"Unknown config option(s): {', '.join(sorted(unknown))}")

    values: dict[str, Any] = {}
    for name in known:
        parse = _PARSERS[name]
        arg = overrides.get(name)
        if arg is not None:
            values[name] = parse(arg)
            continue
        env_val = os.environ.get(_ENV_ALIASES.get(name, ENV_PREFIX + name.upper()))
        if env_val:
            values[name] = parse(env_val)
            continue
        if name in file_config and file_config[name] is not None:
            values[name] = parse(file_config[name])

    return ConsoleConfig(**values)
