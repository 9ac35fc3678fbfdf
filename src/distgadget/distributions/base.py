"""Core distribution registry infrastructure."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

import numpy as np

from ..core import DistributionId, ParameterSpec, Parameterization, ReferenceLine
from ..errors import UnknownDistribution, UnknownParameterization

Pdf = Callable[[np.ndarray, Mapping[str, float]], np.ndarray]
Transform = Callable[[Mapping[str, float]], dict[str, float]]

logger = logging.getLogger(__name__)


def identity(values: Mapping[str, float]) -> dict[str, float]:
    return {name: float(value) for name, value in values.items()}


def rename(**mapping: str) -> Transform:
    """Build a transform that renames widget keys, keeping declaration order."""

    def transform(values: Mapping[str, float]) -> dict[str, float]:
        return {target: float(values[source]) for source, target in mapping.items()}

    return transform


@dataclass(frozen=True, slots=True)
class Variant:
    """One parameterization: its widgets and how their values are translated.

    ``transform`` maps widget values onto the keyword parameters of the family
    density; ``output`` maps them onto the names handed back on confirmation.
    """

    name: Parameterization
    parameters: tuple[ParameterSpec, ...]
    transform: Transform = identity
    output: Transform = identity


@dataclass(frozen=True, slots=True)
class Distribution:
    """Describe a distribution family with its widgets and plot defaults."""

    id: DistributionId
    label: str
    variants: tuple[Variant, ...]
    pdf: Pdf
    x_range: tuple[float, float]
    samples: int
    title: Callable[[Mapping[str, float]], str]
    y_label: str
    y_range: tuple[float, float] | None = None
    custom_x_limits: bool = True
    custom_y_limit: bool = False
    x_floor: float | None = None
    reference_lines: Callable[[Mapping[str, float]], tuple[ReferenceLine, ...]] | None = None
    hint: str | None = None
    notes: str | None = None

    @property
    def parameterizations(self) -> tuple[Parameterization, ...]:
        return tuple(variant.name for variant in self.variants)

    def variant(self, parameterization: Parameterization | str | None = None) -> Variant:
        if parameterization is None:
            return self.variants[0]
        for variant in self.variants:
            if variant.name.value.lower() == str(parameterization).lower():
                return variant
        raise UnknownParameterization(
            self.id.value, str(parameterization), tuple(p.value for p in self.parameterizations)
        )


@dataclass(frozen=True, slots=True)
class DistributionSpec:
    """A registry entry resolved to one parameterization."""

    distribution: Distribution
    variant: Variant

    @property
    def id(self) -> DistributionId:
        return self.distribution.id

    @property
    def label(self) -> str:
        return self.distribution.label

    @property
    def parameterization(self) -> Parameterization:
        return self.variant.name

    @property
    def parameterizations(self) -> tuple[Parameterization, ...]:
        return self.distribution.parameterizations

    @property
    def parameters(self) -> tuple[ParameterSpec, ...]:
        return self.variant.parameters

    @property
    def parameter_names(self) -> tuple[str, ...]:
        return tuple(param.name for param in self.variant.parameters)

    @property
    def default_x_range(self) -> tuple[float, float]:
        return self.distribution.x_range

    @property
    def default_y_range(self) -> tuple[float, float] | None:
        return self.distribution.y_range

    @property
    def samples(self) -> int:
        return self.distribution.samples

    @property
    def supports_custom_x_limits(self) -> bool:
        return self.distribution.custom_x_limits

    @property
    def supports_custom_y_limit(self) -> bool:
        return self.distribution.custom_y_limit

    @property
    def supports_parameterization_choice(self) -> bool:
        return len(self.distribution.variants) > 1

    def defaults(self) -> dict[str, float]:
        return {param.name: float(param.default) for param in self.variant.parameters}

    def parameter(self, name: str) -> ParameterSpec | None:
        for param in self.variant.parameters:
            if param.name == name:
                return param
        return None

    def density_parameters(self, values: Mapping[str, float]) -> dict[str, float]:
        return self.variant.transform(values)

    def density(self, x: np.ndarray | float, values: Mapping[str, float]) -> np.ndarray:
        """Evaluate the family density at ``x`` for the given widget values."""
        arr = np.asarray(x, dtype=float)
        return self.distribution.pdf(arr, self.density_parameters(values))

    def output_mapping(self, values: Mapping[str, float]) -> dict[str, float]:
        return self.variant.output(values)

    def title(self, values: Mapping[str, float]) -> str:
        return self.distribution.title(self.density_parameters(values))

    def reference_lines(self, values: Mapping[str, float]) -> tuple[ReferenceLine, ...]:
        if self.distribution.reference_lines is None:
            return ()
        return self.distribution.reference_lines(self.density_parameters(values))


_REGISTRY: dict[DistributionId, Distribution] = {}

_ALIASES: dict[str, DistributionId] = {}


def _normalise(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


def _resolve_id(name: DistributionId | str) -> DistributionId:
    if isinstance(name, DistributionId):
        return name
    key = _normalise(str(name))
    if key in _ALIASES:
        return _ALIASES[key]
    raise UnknownDistribution(str(name))


def list_distributions() -> list[DistributionId]:
    """Return registered distribution ids in registration (UI) order."""
    return list(_REGISTRY.keys())


def get_distribution(name: DistributionId | str) -> Distribution:
    """Retrieve a distribution by id, enum value or display label."""
    key = _resolve_id(name)
    if key not in _REGISTRY:
        raise UnknownDistribution(str(name))
    return _REGISTRY[key]


def get_spec(
    name: DistributionId | str,
    parameterization: Parameterization | str | None = None,
) -> DistributionSpec:
    """Resolve a distribution and parameterization into a :class:`DistributionSpec`."""
    dist = get_distribution(name)
    return DistributionSpec(distribution=dist, variant=dist.variant(parameterization))


def density(
    name: DistributionId | str,
    parameterization: Parameterization | str | None,
    x: np.ndarray | float,
    values: Mapping[str, float],
) -> np.ndarray:
    return get_spec(name, parameterization).density(x, values)


def register_distribution(distribution: Distribution, *, overwrite: bool = False) -> None:
    """Register a distribution in the global registry."""
    key = distribution.id
    if key in _REGISTRY and not overwrite:
        raise ValueError(f"Distribution '{key.value}' already registered.")
    _REGISTRY[key] = distribution
    for alias in (key.value, key.name, distribution.label):
        _ALIASES[_normalise(alias)] = key
    logger.debug("Registered distribution %s (%s)", key.value, distribution.label)


def clear_registry() -> None:
    """Reset the registry (primarily for testing)."""
    _REGISTRY.clear()
    _ALIASES.clear()


def iter_specs() -> Iterable[DistributionSpec]:
    """Yield every registered distribution resolved to each of its variants."""
    for dist in _REGISTRY.values():
        for variant in dist.variants:
            yield DistributionSpec(distribution=dist, variant=variant)


__all__ = [
    "Distribution",
    "DistributionSpec",
    "Pdf",
    "Transform",
    "Variant",
    "identity",
    "rename",
    "list_distributions",
    "get_distribution",
    "get_spec",
    "density",
    "iter_specs",
    "register_distribution",
    "clear_registry",
]
