"""
SYSQL Configuration

Settings come from, in increasing priority:
1. Defaults on SysqlConfig
2. An optional YAML file (load_config(path) or SYSQL_CONFIG)
3. Environment variables:
   - SYSQL_FUNCTIONS: comma-separated string functions to register
   - SYSQL_DATABASE: DuckDB database path for the CLI
   - SYSQL_LOG_LEVEL: logging level name for the CLI

Example sysql.yaml:

    functions: [split, regex_split]
    database: /var/lib/sysql/state.duckdb
    log_level: INFO
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

log = logging.getLogger(__name__)

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _default_functions() -> List[str]:
    from .sql_tools.registry import get_function_names
    return get_function_names()


class SysqlConfig(BaseModel):
    """Settings for string extension registration and the CLI."""
    model_config = ConfigDict(extra="forbid")

    functions: List[str] = Field(default_factory=_default_functions)
    database: str = ":memory:"
    log_level: str = "WARNING"

    @field_validator("functions")
    @classmethod
    def _known_functions(cls, value: List[str]) -> List[str]:
        from .sql_tools.registry import get_function_names

        known = set(get_function_names())
        names = [name.strip().lower() for name in value if name.strip()]
        unknown = [name for name in names if name not in known]
        if unknown:
            raise ValueError(f"Unknown string functions: {', '.join(unknown)} (known: {', '.join(sorted(known))})")
        return names

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level {value!r}, expected one of {', '.join(_LOG_LEVELS)}")
        return level


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    return data


def _env_overrides() -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}

    functions = os.getenv("SYSQL_FUNCTIONS")
    if functions is not None:
        overrides["functions"] = functions.split(",")

    database = os.getenv("SYSQL_DATABASE")
    if database:
        overrides["database"] = database

    log_level = os.getenv("SYSQL_LOG_LEVEL")
    if log_level:
        overrides["log_level"] = log_level

    return overrides


def load_config(path: Optional[str] = None) -> SysqlConfig:
    """
    Build the effective configuration.

    Args:
        path: YAML config file; falls back to SYSQL_CONFIG, then defaults only

    Raises:
        FileNotFoundError: If an explicitly named config file does not exist
        ValueError: If the config file is not a YAML mapping
        pydantic.ValidationError: If a setting is invalid
    """
    path = path or os.getenv("SYSQL_CONFIG")

    data: Dict[str, Any] = {}
    if path:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        data.update(_read_yaml(config_path))
        log.debug(f"Loaded config from {config_path}")

    data.update(_env_overrides())
    return SysqlConfig(**data)
