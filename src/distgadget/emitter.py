"""Translate confirmed widget values into canonical parameter names."""

from __future__ import annotations

import logging

from .core import SelectionState
from .distributions import get_spec
from .errors import IncompleteSelection

logger = logging.getLogger(__name__)


def missing_values(state: SelectionState) -> tuple[str, ...]:
    """Return active parameter names that have no value in ``state``."""
    spec = get_spec(state.distribution, state.parameterization)
    return tuple(name for name in spec.parameter_names if state.values.get(name) is None)


def confirm(state: SelectionState) -> dict[str, float]:
    """Return the ordered output mapping for the active selection.

    Raises :class:`IncompleteSelection` when any active parameter is missing;
    missing values are never replaced by defaults. ``state`` is not modified.
    """
    spec = get_spec(state.distribution, state.parameterization)
    missing = missing_values(state)
    if missing:
        raise IncompleteSelection(spec.id.value, missing)
    values = {name: float(state.values[name]) for name in spec.parameter_names}
    result = {name: float(value) for name, value in spec.output_mapping(values).items()}
    logger.debug("Confirmed %s/%s: %s", spec.id.value, spec.parameterization.value, result)
    return result


__all__ = ["confirm", "missing_values"]
