"""Analyzer thresholds and configuration file loading."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigurationError
from .utils import read_yaml_file

CONFIG_SECTION = "analyzer"

# Option names as they appear in hand-written config files.
CAMEL_CASE_ALIASES = {
    "longMethodStatementThreshold": "long_method_statement_threshold",
    "refactoringMethodStatementThreshold": "refactoring_method_statement_threshold",
    "maxParameterCount": "max_parameter_count",
    "maxNestedConditionals": "max_nested_conditionals",
}


@dataclass(frozen=True)
class AnalyzerConfig:
    """Thresholds read by the detector rules."""

    long_method_statement_threshold: int = 20
    refactoring_method_statement_threshold: int = 30
    max_parameter_count: int = 5
    max_nested_conditionals: int = 2

    def validate(self) -> "AnalyzerConfig":
        for option in fields(self):
            value = getattr(self, option.name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{option.name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"{option.name} must not be negative, got {value}")
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AnalyzerConfig":
        known = {option.name for option in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = CAMEL_CASE_ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown configuration option: {key}")
            values[name] = value
        return cls(**values).validate()

    def to_dict(self) -> Dict[str, int]:
        return {option.name: getattr(self, option.name) for option in fields(self)}


def load_config(path: Optional[str] = None) -> AnalyzerConfig:
    """Load configuration from a YAML or JSON file, or return the defaults."""

    if path is None:
        return AnalyzerConfig().validate()
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")
    try:
        data = read_yaml_file(config_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read configuration {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration {path}: {exc}") from exc
    if data is None:
        return AnalyzerConfig().validate()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration at {path} is not a mapping")
    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{CONFIG_SECTION}' section in {path} is not a mapping")
    return AnalyzerConfig.from_mapping(section)
