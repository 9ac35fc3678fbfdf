"""Error hierarchy for the distribution gadget."""

from __future__ import annotations

from typing import Any


class GadgetError(Exception):
    """Base exception for all gadget errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class UnknownDistribution(GadgetError, KeyError):
    """Distribution identifier is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown distribution '{name}'.", details={"distribution": name})


class UnknownParameterization(GadgetError, KeyError):
    """Parameterization is not declared by the distribution."""

    def __init__(self, distribution: str, parameterization: str, available: tuple[str, ...]):
        super().__init__(
            f"Distribution '{distribution}' has no parameterization '{parameterization}' "
            f"(available: {', '.join(available)}).",
            details={
                "distribution": distribution,
                "parameterization": parameterization,
                "available": list(available),
            },
        )


class UnknownParameter(GadgetError, KeyError):
    """Parameter name is not part of the active widget set."""

    def __init__(self, name: str, active: tuple[str, ...]) -> None:
        super().__init__(
            f"Unknown parameter '{name}' (active: {', '.join(active)}).",
            details={"parameter": name, "active": list(active)},
        )


class InvalidParameterization(GadgetError, ValueError):
    """Parameterization control used on a single-variant distribution."""

    def __init__(self, distribution: str, parameterization: str) -> None:
        super().__init__(
            f"Distribution '{distribution}' does not offer a parameterization choice "
            f"(requested '{parameterization}').",
            details={"distribution": distribution, "parameterization": parameterization},
        )


class OutOfRange(GadgetError, ValueError):
    """Value lies outside the allowed interval."""

    def __init__(self, name: str, value: float, minimum: float, maximum: float) -> None:
        super().__init__(
            f"Value {value!r} for '{name}' is outside [{minimum}, {maximum}].",
            details={"name": name, "value": value, "min": minimum, "max": maximum},
        )


class IncompleteSelection(GadgetError, ValueError):
    """Required parameter values are missing."""

    def __init__(self, distribution: str, missing: tuple[str, ...]) -> None:
        self.missing = missing
        super().__init__(
            f"Missing values for {distribution}: {', '.join(missing)}.",
            details={"distribution": distribution, "missing": list(missing)},
        )


class UnsupportedLimit(GadgetError, ValueError):
    """Axis limit input that the gadget does not offer."""

    def __init__(self, axis: str, bound: str) -> None:
        super().__init__(
            f"The {axis} axis has no custom {bound} limit.",
            details={"axis": axis, "bound": bound},
        )


class SessionFinished(GadgetError, RuntimeError):
    """Event received after the selection was confirmed."""

    def __init__(self, event: str) -> None:
        super().__init__(
            f"Cannot handle {event}: the selection was already confirmed.",
            details={"event": event},
        )


class ConfigError(GadgetError, ValueError):
    """Gadget configuration could not be parsed."""


__all__ = [
    "GadgetError",
    "UnknownDistribution",
    "UnknownParameterization",
    "UnknownParameter",
    "InvalidParameterization",
    "OutOfRange",
    "IncompleteSelection",
    "UnsupportedLimit",
    "SessionFinished",
    "ConfigError",
]
