"""Gadget configuration loaded from YAML."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DISTGADGET_CONFIG"


@dataclass(frozen=True, slots=True)
class LimitRange:
    """Accepted interval for a limit input."""

    minimum: float
    maximum: float

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


@dataclass(slots=True)
class GadgetConfig:
    """Start-up selections and limit inputs for a gadget session."""

    default_distribution: str = "Beta"
    default_parameterization: str | None = None
    x_limit_min: float = -1.0
    x_limit_max: float = 1.0
    y_limit_max: float = 10.0
    x_min_range: LimitRange = field(default_factory=lambda: LimitRange(-100.0, 0.0))
    x_max_range: LimitRange = field(default_factory=lambda: LimitRange(0.0, 100.0))
    y_max_range: LimitRange = field(default_factory=lambda: LimitRange(0.0, 100.0))
    figure_size: tuple[float, float] = (10.0, 8.0)


_RANGE_FIELDS = {"x_min_range", "x_max_range", "y_max_range"}


def _coerce(name: str, value: Any) -> Any:
    if name in _RANGE_FIELDS:
        if isinstance(value, Mapping):
            return LimitRange(float(value["min"]), float(value["max"]))
        low, high = value
        return LimitRange(float(low), float(high))
    if name == "figure_size":
        width, height = value
        return (float(width), float(height))
    if name in {"default_distribution", "default_parameterization"}:
        return None if value is None else str(value)
    return float(value)


def config_from_mapping(data: Mapping[str, Any]) -> GadgetConfig:
    """Build a :class:`GadgetConfig` from a mapping, ignoring unknown keys."""
    known = {f.name for f in fields(GadgetConfig)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown gadget config key '%s'", key)
            continue
        try:
            kwargs[key] = _coerce(key, value)
        except (KeyError, TypeError, ValueError) as exc:
            message = f"Invalid value for '{key}': {value!r}"
            raise ConfigError(message, details={"key": key}) from exc
    config = GadgetConfig(**kwargs)
    _check_limits(config)
    return config


def _check_limits(config: GadgetConfig) -> None:
    for name, value, limits in (
        ("x_limit_min", config.x_limit_min, config.x_min_range),
        ("x_limit_max", config.x_limit_max, config.x_max_range),
        ("y_limit_max", config.y_limit_max, config.y_max_range),
    ):
        if not limits.contains(value):
            message = f"'{name}' = {value:g} is outside [{limits.minimum:g}, {limits.maximum:g}]"
            raise ConfigError(message, details={"key": name})
    if config.x_limit_min >= config.x_limit_max:
        message = f"x_limit_min ({config.x_limit_min:g}) must be below x_limit_max"
        raise ConfigError(message, details={"key": "x_limit_min"})


def load_config(path: str | os.PathLike[str] | None = None) -> GadgetConfig:
    """Load gadget settings from ``path`` or from ``$DISTGADGET_CONFIG``."""
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return GadgetConfig()
    path = Path(path)
    if not path.exists():
        logger.debug("Skipping gadget config %s (file not found)", path)
        return GadgetConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse gadget config {path}: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError(f"Gadget config {path} must contain a mapping.")
    section = data.get("gadget", data)
    if not isinstance(section, Mapping):
        raise ConfigError(f"'gadget' section in {path} must be a mapping.")
    config = config_from_mapping(section)
    logger.debug("Loaded gadget config from %s", path)
    return config


__all__ = ["CONFIG_ENV_VAR", "GadgetConfig", "LimitRange", "config_from_mapping", "load_config"]
