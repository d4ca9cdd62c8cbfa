"""
Interpreter configuration for vectorCalc.

Defaults reproduce the language's historical behaviour.  The two
hardening switches (`symmetric_equality`, `guard_division`) change
semantics and are off unless a configuration turns them on.

A configuration file is a YAML mapping, for example::

    epsilon: 0.0001
    symmetric_equality: true
    guard_division: false
    max_errors: 20
    precision: 2
    log_level: DEBUG
"""

import logging
import math
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Union

from .vecmath import EPSILON

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class InterpreterConfig:
    """Settings consulted by the interpreter and the program runner."""
    epsilon: float = EPSILON
    symmetric_equality: bool = False
    guard_division: bool = False
    max_errors: int = 20
    precision: int = 2
    log_level: str = "WARNING"

    def __post_init__(self):
        if not (self.epsilon > 0 and math.isfinite(self.epsilon)):
            raise ValueError(f"epsilon must be a positive finite number, got {self.epsilon!r}")
        if self.max_errors < 1:
            raise ValueError(f"max_errors must be at least 1, got {self.max_errors!r}")
        if self.precision < 0:
            raise ValueError(f"precision must be non-negative, got {self.precision!r}")
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {self.log_level!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InterpreterConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(f"unknown configuration key(s): {', '.join(unknown)}")
        kwargs = {}
        for key, value in data.items():
            kwargs[key] = _coerce(key, known[key].type, value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce(key: str, target: type, value: Any) -> Any:
    # PyYAML reads exponent floats such as 1e-4 as strings; float() fixes that.
    if target is bool:
        if not isinstance(value, bool):
            raise ValueError(f"configuration key '{key}' must be true or false, got {value!r}")
        return value
    if target in (int, float) and isinstance(value, bool):
        raise ValueError(f"configuration key '{key}' must be a number, got {value!r}")
    try:
        coerced = float(value) if target is int else target(value)
    except (TypeError, ValueError):
        raise ValueError(f"configuration key '{key}' has invalid value {value!r}")
    if target is int:
        if not coerced.is_integer():
            raise ValueError(f"configuration key '{key}' must be a whole number, got {value!r}")
        coerced = int(coerced)
    return coerced


def load_config(path: Union[Path, str]) -> InterpreterConfig:
    """Load a YAML configuration file and return the ``InterpreterConfig``."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration file not found: {config_path}")
    import yaml

    with config_path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML in {config_path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"configuration must be a mapping, got {type(data)!r}")
    return InterpreterConfig.from_dict(data)


def configure_logging(config: InterpreterConfig) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    logger = logging.getLogger("vectorcalc")
    logger.setLevel(config.log_level)
    return logger
