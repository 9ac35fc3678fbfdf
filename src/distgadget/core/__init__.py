"""Core dataclasses and enums shared by the registry, controller and UI shell."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field, replace
from enum import Enum

import numpy as np


class DistributionId(str, Enum):
    """Supported distribution families, in UI order."""

    BETA = "Beta"
    CAUCHY = "Cauchy"
    CHI_SQUARED = "ChiSquared"
    EXPONENTIAL = "Exponential"
    GAMMA = "Gamma"
    INVERSE_GAMMA = "InverseGamma"
    LOG_NORMAL = "LogNormal"
    NORMAL = "Normal"
    STUDENT_T = "StudentT"
    WEIBULL = "Weibull"

    def __str__(self) -> str:
        return self.value


class Parameterization(str, Enum):
    CLASSIC = "Classic"
    INTUITIVE = "Intuitive"

    def __str__(self) -> str:
        return self.value


class Axis(str, Enum):
    X = "x"
    Y = "y"


class Bound(str, Enum):
    MIN = "min"
    MAX = "max"


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One slider: internal key, display label, range, step and default."""

    name: str
    label: str
    minimum: float
    maximum: float
    step: float
    default: float

    def contains(self, value: float) -> bool:
        return self.minimum <= value <= self.maximum


@dataclass(slots=True)
class SelectionState:
    """Mutable, session-scoped user selections."""

    distribution: DistributionId
    parameterization: Parameterization
    values: dict[str, float] = field(default_factory=dict)
    x_limit_enabled: bool = False
    x_limit_min: float = -1.0
    x_limit_max: float = 1.0
    y_limit_enabled: bool = False
    y_limit_max: float = 10.0

    def snapshot(self) -> SelectionState:
        """Return a copy that does not share the value mapping."""
        return replace(self, values=dict(self.values))


@dataclass(frozen=True, slots=True)
class WidgetState:
    spec: ParameterSpec
    value: float | None

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def label(self) -> str:
        return self.spec.label


@dataclass(frozen=True, slots=True)
class ViewState:
    """Derived widget set and control flags for one selection."""

    distribution: DistributionId
    parameterization: Parameterization
    parameterizations: tuple[Parameterization, ...]
    widgets: tuple[WidgetState, ...]
    parameterization_enabled: bool
    x_limit_toggle_enabled: bool
    x_limit_min_enabled: bool
    y_limit_toggle_enabled: bool
    x_limit_enabled: bool
    y_limit_enabled: bool
    note: str | None = None


@dataclass(frozen=True, slots=True)
class Curve:
    """Lazy, restartable sampling of a density over ``[start, stop]``.

    Iterating evaluates the density on a fresh grid every time and yields
    ``(x, y)`` pairs, skipping samples where the density is not finite
    (``nan`` outside the parameter domain, ``inf`` at singular points).
    """

    density: Callable[[np.ndarray], np.ndarray]
    start: float
    stop: float
    samples: int

    def grid(self) -> np.ndarray:
        return np.linspace(self.start, self.stop, self.samples)

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        xs = self.grid()
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            ys = np.asarray(self.density(xs), dtype=float)
        mask = np.isfinite(ys)
        return xs[mask], ys[mask]

    def __iter__(self) -> Iterator[tuple[float, float]]:
        xs, ys = self.to_arrays()
        for x, y in zip(xs, ys, strict=True):
            yield float(x), float(y)


@dataclass(frozen=True, slots=True)
class ReferenceLine:
    x: float
    label: str


@dataclass(frozen=True, slots=True)
class DrawRequest:
    """Everything the rendering layer needs to draw one plot."""

    curve: Curve
    x_range: tuple[float, float]
    y_range: tuple[float, float] | None
    title: str
    x_label: str
    y_label: str
    reference_lines: tuple[ReferenceLine, ...] = ()


__all__ = [
    "DistributionId",
    "Parameterization",
    "Axis",
    "Bound",
    "ParameterSpec",
    "SelectionState",
    "WidgetState",
    "ViewState",
    "Curve",
    "ReferenceLine",
    "DrawRequest",
]
