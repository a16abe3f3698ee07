"""
System configuration for tradestats.

One configuration object for the whole tool, loaded from YAML and merged
over built-in defaults:

    statistics:
      risk_free_rate: 0.02
      default_timeframe: day
      starting_equity: 0.0

    report:
      detail_level: standard
      max_bucket_rows: 31

    logging:
      level: INFO
      format: console

Lookup order for the config file:
1. Explicit path passed to SystemConfig.load() / get_system_config()
2. $TRADESTATS_CONFIG
3. config/system.yaml in the working directory

Values of the form ${VAR} are replaced from the environment; undefined
variables keep their placeholder. Substituted values are strings, so each
section converts them to the declared float, int or bool field type.
"""

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal

import yaml

from tradestats.system.log_system import LoggingConfig as LoggerConfig

DEFAULT_CONFIG_PATH = Path("config/system.yaml")
CONFIG_ENV_VAR = "TRADESTATS_CONFIG"

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


@dataclass
class StatisticsConfig:
    """Defaults used when computing statistics from the CLI."""

    risk_free_rate: float = 0.02
    default_timeframe: Literal["day", "week", "month"] = "day"
    starting_equity: float = 0.0


@dataclass
class ReportConfig:
    """Terminal report settings."""

    detail_level: Literal["summary", "standard", "full"] = "standard"
    max_bucket_rows: int = 31


@dataclass
class LoggingConfig:
    """Logging section of system.yaml.

    Kept as a plain dataclass so YAML maps onto it directly; converted to the
    pydantic log_system.LoggingConfig via to_logger_config().
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json"] = "console"
    timestamp_format: Literal["iso", "compact", "time", "short"] = "compact"
    enable_file: bool = False
    file_path: str = "logs/tradestats.log"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    file_rotation: bool = True
    max_file_size_mb: int = 10
    backup_count: int = 3

    def to_logger_config(self) -> LoggerConfig:
        """Convert to the LoggerFactory configuration model."""
        return LoggerConfig(
            level=self.level,
            format=self.format,
            timestamp_format=self.timestamp_format,
            enable_file=self.enable_file,
            file_path=Path(self.file_path),
            file_level=self.file_level,
            file_rotation=self.file_rotation,
            max_file_size_mb=self.max_file_size_mb,
            backup_count=self.backup_count,
        )


@dataclass
class SystemConfig:
    """Container for all configuration sections."""

    statistics: StatisticsConfig = field(default_factory=StatisticsConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | str | None = None) -> "SystemConfig":
        """
        Load configuration from YAML, falling back to defaults.

        Args:
            path: Config file path. If None, uses $TRADESTATS_CONFIG or
                config/system.yaml.

        Returns:
            SystemConfig with file values merged over defaults. A missing or
            empty file yields the defaults.

        Raises:
            yaml.YAMLError: If the file is not valid YAML
        """
        if path is None:
            env_path = os.environ.get(CONFIG_ENV_VAR)
            path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

        config_path = Path(path)
        if not config_path.exists():
            return cls()

        with config_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        return cls._from_dict(_substitute_env_vars(raw))

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "SystemConfig":
        """Build config from a (possibly partial) dictionary."""
        defaults = {
            "statistics": StatisticsConfig().__dict__,
            "report": ReportConfig().__dict__,
            "logging": LoggingConfig().__dict__,
        }
        merged = _deep_merge(defaults, data)

        return cls(
            statistics=StatisticsConfig(**_coerce_section(StatisticsConfig, merged["statistics"])),
            report=ReportConfig(**_coerce_section(ReportConfig, merged["report"])),
            logging=LoggingConfig(**_coerce_section(LoggingConfig, merged["logging"])),
        )


def _coerce_section(section: type, values: dict[str, Any]) -> dict[str, Any]:
    """
    Convert string values of float, int and bool fields to their field type.

    Raises:
        ValueError: If a value cannot be converted
    """
    types = {f.name: f.type for f in fields(section)}
    result = dict(values)
    for name, value in values.items():
        target = types.get(name)
        if target is bool:
            if isinstance(value, str):
                parsed = yaml.safe_load(value)
                if not isinstance(parsed, bool):
                    raise ValueError(f"{section.__name__}.{name}: expected a boolean, got {value!r}")
                result[name] = parsed
        elif target in (int, float) and not isinstance(value, bool):
            try:
                result[name] = target(value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"{section.__name__}.{name}: expected {target.__name__}, got {value!r}") from e
    return result


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into a copy of base (override wins)."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _substitute_env_vars(value: Any) -> Any:
    """Replace ${VAR} placeholders in strings, recursing into dicts and lists."""
    if isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env_vars(v) for v in value]
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)
    return value


_system_config: SystemConfig | None = None


def get_system_config(path: Path | str | None = None) -> SystemConfig:
    """Get the cached system config, loading it on first use.

    An explicit path always reloads and replaces the cached instance.
    """
    global _system_config
    if path is not None:
        _system_config = SystemConfig.load(path)
    elif _system_config is None:
        _system_config = SystemConfig.load()
    return _system_config


def reload_system_config(path: Path | str | None = None) -> SystemConfig:
    """Force a reload of the system config."""
    global _system_config
    _system_config = SystemConfig.load(path)
    return _system_config
