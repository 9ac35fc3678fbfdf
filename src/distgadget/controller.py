"""Event handlers that own the selection state and derive the view."""

from __future__ import annotations

import logging
from functools import partial

from .config import GadgetConfig, LimitRange
from .core import (
    Axis,
    Bound,
    Curve,
    DistributionId,
    DrawRequest,
    Parameterization,
    SelectionState,
    ViewState,
    WidgetState,
)
from .distributions import DistributionSpec, get_spec
from .emitter import confirm as emit_result
from .emitter import missing_values
from .errors import (
    IncompleteSelection,
    InvalidParameterization,
    OutOfRange,
    SessionFinished,
    UnknownParameter,
    UnsupportedLimit,
)

logger = logging.getLogger(__name__)


def active_spec(state: SelectionState) -> DistributionSpec:
    return get_spec(state.distribution, state.parameterization)


def derive_view(state: SelectionState) -> ViewState:
    """Derive widgets and control flags from ``state`` alone."""
    spec = active_spec(state)
    widgets = tuple(
        WidgetState(spec=param, value=state.values.get(param.name)) for param in spec.parameters
    )
    return ViewState(
        distribution=spec.id,
        parameterization=spec.parameterization,
        parameterizations=spec.parameterizations,
        widgets=widgets,
        parameterization_enabled=spec.supports_parameterization_choice,
        x_limit_toggle_enabled=spec.supports_custom_x_limits,
        x_limit_min_enabled=spec.supports_custom_x_limits and spec.distribution.x_floor is None,
        y_limit_toggle_enabled=spec.supports_custom_y_limit,
        x_limit_enabled=state.x_limit_enabled,
        y_limit_enabled=state.y_limit_enabled,
        note=spec.distribution.hint,
    )


def _enforce_limits(state: SelectionState, spec: DistributionSpec, x_limit_min: float) -> None:
    if not spec.supports_custom_x_limits:
        state.x_limit_enabled = False
    if not spec.supports_custom_y_limit:
        state.y_limit_enabled = False
    floor = spec.distribution.x_floor
    state.x_limit_min = x_limit_min if floor is None else floor


class GadgetController:
    """Own a :class:`SelectionState` and apply one user event at a time.

    Every handler validates its input before touching the state, so a
    rejected event leaves the selection exactly as it was.
    """

    def __init__(
        self,
        config: GadgetConfig | None = None,
        *,
        distribution: DistributionId | str | None = None,
        parameterization: Parameterization | str | None = None,
    ) -> None:
        self.config = config or GadgetConfig()
        if distribution is None:
            distribution = self.config.default_distribution
            parameterization = parameterization or self.config.default_parameterization
        spec = get_spec(distribution, parameterization)
        self._state = SelectionState(
            distribution=spec.id,
            parameterization=spec.parameterization,
            values=spec.defaults(),
            x_limit_min=self.config.x_limit_min,
            x_limit_max=self.config.x_limit_max,
            y_limit_max=self.config.y_limit_max,
        )
        # last x minimum entered by the user, restored when a floored distribution is left
        self._x_limit_min_input = self.config.x_limit_min
        _enforce_limits(self._state, spec, self._x_limit_min_input)
        self.result: dict[str, float] | None = None
        self.finished = False

    @property
    def state(self) -> SelectionState:
        """Copy of the current selection."""
        return self._state.snapshot()

    @property
    def spec(self) -> DistributionSpec:
        return active_spec(self._state)

    def view(self) -> ViewState:
        return derive_view(self._state)

    def _check_open(self, event: str) -> None:
        if self.finished:
            raise SessionFinished(event)

    def on_distribution_changed(self, distribution: DistributionId | str) -> ViewState:
        self._check_open("distribution change")
        spec = get_spec(distribution)
        self._state.distribution = spec.id
        self._state.parameterization = spec.parameterization
        self._state.values = spec.defaults()
        _enforce_limits(self._state, spec, self._x_limit_min_input)
        logger.debug("Distribution -> %s/%s", spec.id.value, spec.parameterization.value)
        return self.view()

    def on_parameterization_changed(self, parameterization: Parameterization | str) -> ViewState:
        self._check_open("parameterization change")
        current = self.spec
        if not current.supports_parameterization_choice:
            raise InvalidParameterization(current.id.value, str(parameterization))
        spec = get_spec(current.id, parameterization)
        self._state.parameterization = spec.parameterization
        self._state.values = spec.defaults()
        logger.debug("Parameterization -> %s/%s", spec.id.value, spec.parameterization.value)
        return self.view()

    def on_parameter_value_changed(self, name: str, value: float) -> None:
        self._check_open("parameter change")
        spec = self.spec
        param = spec.parameter(name)
        if param is None:
            raise UnknownParameter(name, spec.parameter_names)
        value = float(value)
        if not param.contains(value):
            raise OutOfRange(name, value, param.minimum, param.maximum)
        self._state.values[name] = value

    def on_limit_toggle(self, axis: Axis | str, enabled: bool) -> bool:
        """Toggle a custom axis limit; returns False when the toggle is disabled."""
        self._check_open("limit toggle")
        axis = Axis(axis)
        view = self.view()
        allowed = view.x_limit_toggle_enabled if axis is Axis.X else view.y_limit_toggle_enabled
        if not allowed:
            logger.debug("Ignoring %s-limit toggle for %s", axis.value, view.distribution.value)
            return False
        if axis is Axis.X:
            self._state.x_limit_enabled = bool(enabled)
        else:
            self._state.y_limit_enabled = bool(enabled)
        return True

    def on_limit_value_changed(self, axis: Axis | str, bound: Bound | str, value: float) -> bool:
        """Update a limit input; returns False when the input is disabled."""
        self._check_open("limit change")
        axis = Axis(axis)
        bound = Bound(bound)
        value = float(value)
        if axis is Axis.Y and bound is Bound.MIN:
            raise UnsupportedLimit(axis.value, bound.value)
        floor = self.spec.distribution.x_floor
        if axis is Axis.X and bound is Bound.MIN and floor is not None:
            logger.debug("Keeping x minimum at %g for %s", floor, self._state.distribution.value)
            return False
        limits = self._limit_range(axis, bound)
        name = f"{axis.value}_limit_{bound.value}"
        if not limits.contains(value):
            raise OutOfRange(name, value, limits.minimum, limits.maximum)
        setattr(self._state, name, value)
        if axis is Axis.X and bound is Bound.MIN:
            self._x_limit_min_input = value
        return True

    def _limit_range(self, axis: Axis, bound: Bound) -> LimitRange:
        if axis is Axis.Y:
            return self.config.y_max_range
        return self.config.x_min_range if bound is Bound.MIN else self.config.x_max_range

    def effective_x_range(self) -> tuple[float, float]:
        spec = self.spec
        if self._state.x_limit_enabled and spec.supports_custom_x_limits:
            low, high = self._state.x_limit_min, self._state.x_limit_max
        else:
            low, high = spec.default_x_range
        if spec.distribution.x_floor is not None:
            low = spec.distribution.x_floor
        return float(low), float(high)

    def effective_y_range(self) -> tuple[float, float] | None:
        spec = self.spec
        if self._state.y_limit_enabled and spec.supports_custom_y_limit:
            return 0.0, float(self._state.y_limit_max)
        return spec.default_y_range

    def _complete_values(self) -> dict[str, float]:
        missing = missing_values(self._state)
        if missing:
            raise IncompleteSelection(self._state.distribution.value, missing)
        return {name: float(self._state.values[name]) for name in self.spec.parameter_names}

    def current_curve(self) -> Curve:
        spec = self.spec
        values = self._complete_values()
        start, stop = self.effective_x_range()
        return Curve(
            density=partial(spec.density, values=values),
            start=start,
            stop=stop,
            samples=spec.samples,
        )

    def draw_request(self) -> DrawRequest:
        spec = self.spec
        values = self._complete_values()
        return DrawRequest(
            curve=self.current_curve(),
            x_range=self.effective_x_range(),
            y_range=self.effective_y_range(),
            title=spec.title(values),
            x_label="x",
            y_label=spec.distribution.y_label,
            reference_lines=spec.reference_lines(values),
        )

    def confirm(self) -> dict[str, float]:
        """Emit the result and end the session."""
        self._check_open("confirm")
        result = emit_result(self._state)
        self.result = result
        self.finished = True
        logger.info("Gadget confirmed %s: %s", self._state.distribution.value, result)
        return result


__all__ = ["GadgetController", "active_spec", "derive_view"]
