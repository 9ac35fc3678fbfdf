"""Matplotlib widget shell around :class:`~distgadget.controller.GadgetController`."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.widgets import AxesWidget, Button, CheckButtons, RadioButtons, Slider, TextBox

from .config import GadgetConfig, load_config
from .controller import GadgetController
from .core import Axis, Bound, DistributionId, DrawRequest, Parameterization, ViewState
from .distributions import get_distribution, list_distributions
from .errors import IncompleteSelection, InvalidParameterization

logger = logging.getLogger(__name__)

TITLE = "Univariate Continuous Distribution"
INACTIVE_ALPHA = 0.35
PARAMETERIZATION_LABELS = [p.value for p in Parameterization]

SLIDER_LEFT = 0.45
SLIDER_TOP = 0.31
SLIDER_HEIGHT = 0.03
SLIDER_GAP = 0.05


def render(ax: Axes, request: DrawRequest) -> None:
    """Draw one density curve request onto ``ax``."""
    xs, ys = request.curve.to_arrays()
    ax.plot(xs, ys, linewidth=2, color="C0")
    ax.set_xlim(*request.x_range)
    if request.y_range is not None:
        ax.set_ylim(*request.y_range)
    ax.set_title(request.title)
    ax.set_xlabel(request.x_label)
    ax.set_ylabel(request.y_label)
    for line in request.reference_lines:
        ax.axvline(line.x, linestyle="--", color="black", label=line.label)
    if request.reference_lines:
        ax.legend(loc="upper right", frameon=False)


def _set_enabled(widget: AxesWidget, enabled: bool) -> None:
    widget.active = enabled
    alpha = 1.0 if enabled else INACTIVE_ALPHA
    for artist in widget.ax.get_children():
        artist.set_alpha(alpha)


class DistributionGadget:
    """Figure with distribution pickers, parameter sliders and a density plot."""

    def __init__(self, controller: GadgetController | None = None, *, figure: Figure | None = None):
        self.controller = controller or GadgetController()
        self.figure = figure or plt.figure(figsize=self.controller.config.figure_size)
        self.figure.suptitle(TITLE)
        manager = self.figure.canvas.manager
        if manager is not None:
            manager.set_window_title(TITLE)
        self.cancelled = False
        self._syncing = False
        self._ids = list_distributions()
        self._labels = [get_distribution(dist_id).label for dist_id in self._ids]
        self._sliders: dict[str, Slider] = {}
        self._slider_key: tuple[DistributionId, Parameterization] | None = None
        self._build()
        self.refresh()

    @property
    def result(self) -> dict[str, float] | None:
        return self.controller.result

    def _build(self) -> None:
        fig = self.figure
        self.plot_ax = fig.add_axes([0.33, 0.45, 0.62, 0.44])

        self.distribution_radio = RadioButtons(fig.add_axes([0.02, 0.45, 0.22, 0.44]), self._labels)
        self.distribution_radio.on_clicked(self._on_distribution)

        self.parameterization_radio = RadioButtons(
            fig.add_axes([0.02, 0.32, 0.22, 0.1]), PARAMETERIZATION_LABELS
        )
        self.parameterization_radio.on_clicked(self._on_parameterization)

        self.y_check = CheckButtons(
            fig.add_axes([0.02, 0.2, 0.22, 0.05]), ["Custom Y limit"], [False]
        )
        self.y_check.on_clicked(partial(self._on_toggle, Axis.Y))
        self.x_check = CheckButtons(
            fig.add_axes([0.02, 0.14, 0.22, 0.05]), ["Custom X limits"], [False]
        )
        self.x_check.on_clicked(partial(self._on_toggle, Axis.X))

        self.y_max_box = TextBox(fig.add_axes([0.33, 0.04, 0.1, 0.04]), "Max Y ")
        self.y_max_box.on_submit(partial(self._on_limit, Axis.Y, Bound.MAX))
        self.x_min_box = TextBox(fig.add_axes([0.52, 0.04, 0.1, 0.04]), "Min X ")
        self.x_min_box.on_submit(partial(self._on_limit, Axis.X, Bound.MIN))
        self.x_max_box = TextBox(fig.add_axes([0.71, 0.04, 0.1, 0.04]), "Max X ")
        self.x_max_box.on_submit(partial(self._on_limit, Axis.X, Bound.MAX))

        self.done_button = Button(fig.add_axes([0.84, 0.1, 0.11, 0.05]), "Done")
        self.done_button.on_clicked(self._on_done)
        self.cancel_button = Button(fig.add_axes([0.84, 0.03, 0.11, 0.05]), "Cancel")
        self.cancel_button.on_clicked(self._on_cancel)

        self.note = fig.text(SLIDER_LEFT, 0.12, "", fontsize=9, style="italic")

    def refresh(self) -> None:
        """Bring every control in line with the controller's view, then redraw."""
        view = self.controller.view()
        self._syncing = True
        try:
            self._sync_controls(view)
            self._sync_sliders(view)
        finally:
            self._syncing = False
        self.redraw()

    def _sync_controls(self, view: ViewState) -> None:
        label = get_distribution(view.distribution).label
        if self.distribution_radio.value_selected != label:
            self.distribution_radio.set_active(self._labels.index(label))
        if self.parameterization_radio.value_selected != view.parameterization.value:
            self.parameterization_radio.set_active(
                PARAMETERIZATION_LABELS.index(view.parameterization.value)
            )
        _set_enabled(self.parameterization_radio, view.parameterization_enabled)

        for check, checked, enabled in (
            (self.x_check, view.x_limit_enabled, view.x_limit_toggle_enabled),
            (self.y_check, view.y_limit_enabled, view.y_limit_toggle_enabled),
        ):
            if check.get_status()[0] != checked:
                check.set_active(0)
            _set_enabled(check, enabled)

        state = self.controller.state
        for box, value, enabled in (
            (self.x_min_box, state.x_limit_min, view.x_limit_enabled and view.x_limit_min_enabled),
            (self.x_max_box, state.x_limit_max, view.x_limit_enabled),
            (self.y_max_box, state.y_limit_max, view.y_limit_enabled),
        ):
            box.set_val(f"{value:g}")
            _set_enabled(box, enabled)
        self.note.set_text(view.note or "")

    def _sync_sliders(self, view: ViewState) -> None:
        key = (view.distribution, view.parameterization)
        if key == self._slider_key:
            for widget in view.widgets:
                slider = self._sliders[widget.name]
                if widget.value is not None and slider.val != widget.value:
                    slider.set_val(widget.value)
            return
        for slider in self._sliders.values():
            slider.ax.remove()
        self._sliders = {}
        for index, widget in enumerate(view.widgets):
            param = widget.spec
            ax = self.figure.add_axes(
                [SLIDER_LEFT, SLIDER_TOP - index * SLIDER_GAP, 0.45, SLIDER_HEIGHT]
            )
            slider = Slider(
                ax,
                param.label,
                param.minimum,
                param.maximum,
                valinit=param.default if widget.value is None else widget.value,
                valstep=param.step,
            )
            slider.on_changed(partial(self._on_slider, param.name))
            # valinit is snapped to valstep; show the exact stored value
            if widget.value is not None and slider.val != widget.value:
                slider.set_val(widget.value)
            self._sliders[param.name] = slider
        self._slider_key = key

    def redraw(self) -> None:
        self.plot_ax.clear()
        try:
            request = self.controller.draw_request()
        except IncompleteSelection as exc:
            self.plot_ax.text(
                0.5, 0.5, str(exc), ha="center", va="center", transform=self.plot_ax.transAxes
            )
        else:
            render(self.plot_ax, request)
        self.figure.canvas.draw_idle()

    def _on_distribution(self, label: str | None) -> None:
        if self._syncing or label is None:
            return
        self.controller.on_distribution_changed(self._ids[self._labels.index(label)])
        self.refresh()

    def _on_parameterization(self, label: str | None) -> None:
        if self._syncing or label is None:
            return
        try:
            self.controller.on_parameterization_changed(label)
        except InvalidParameterization as exc:
            logger.debug("%s", exc)
        self.refresh()

    def _on_slider(self, name: str, value: float) -> None:
        if self._syncing:
            return
        param = self.controller.spec.parameter(name)
        if param is None:
            return
        self.controller.on_parameter_value_changed(
            name, float(np.clip(value, param.minimum, param.maximum))
        )
        self.redraw()

    def _on_toggle(self, axis: Axis, label: str | None) -> None:
        if self._syncing:
            return
        check = self.x_check if axis is Axis.X else self.y_check
        self.controller.on_limit_toggle(axis, check.get_status()[0])
        self.refresh()

    def _on_limit(self, axis: Axis, bound: Bound, text: str) -> None:
        if self._syncing:
            return
        try:
            self.controller.on_limit_value_changed(axis, bound, float(text))
        except ValueError as exc:
            logger.warning("Rejected %s-axis %s limit %r: %s", axis.value, bound.value, text, exc)
        self.refresh()

    def _on_done(self, event: Any) -> None:
        try:
            self.controller.confirm()
        except IncompleteSelection as exc:
            logger.warning("Cannot confirm: %s", exc)
            return
        plt.close(self.figure)

    def _on_cancel(self, event: Any) -> None:
        self.cancelled = True
        logger.info("Gadget cancelled")
        plt.close(self.figure)

    def show(self) -> dict[str, float] | None:
        """Block until the figure is closed and return the confirmed mapping."""
        plt.show(block=True)
        return self.result


def run_gadget(
    distribution: DistributionId | str | None = None,
    *,
    parameterization: Parameterization | str | None = None,
    config: GadgetConfig | None = None,
) -> dict[str, float] | None:
    """Open the gadget and return the confirmed parameters, or ``None`` when dismissed."""
    config = config or load_config()
    controller = GadgetController(
        config, distribution=distribution, parameterization=parameterization
    )
    gadget = DistributionGadget(controller)
    return gadget.show()


__all__ = ["DistributionGadget", "render", "run_gadget"]
