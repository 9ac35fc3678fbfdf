import matplotlib.pyplot as plt
import pytest

from distgadget.controller import GadgetController
from distgadget.core import Axis, Bound, DistributionId
from distgadget.gui import DistributionGadget, render


@pytest.fixture
def gadget():
    instance = DistributionGadget(GadgetController())
    yield instance
    plt.close(instance.figure)


def _select(gadget: DistributionGadget, label: str) -> None:
    gadget.distribution_radio.set_active(gadget._labels.index(label))


def test_initial_layout(gadget: DistributionGadget) -> None:
    assert list(gadget._sliders) == ["a", "b"]
    assert gadget.plot_ax.get_title() == "x ~ Beta(1.50,1.50)"
    assert gadget.distribution_radio.value_selected == "Beta"
    assert gadget.parameterization_radio.active
    assert not gadget.x_check.active
    assert not gadget.y_check.active


def test_switching_distribution_rebuilds_sliders(gadget: DistributionGadget) -> None:
    _select(gadget, "Normal")
    assert gadget.controller.state.distribution is DistributionId.NORMAL
    assert list(gadget._sliders) == ["mean", "sd"]
    assert gadget.plot_ax.get_title() == "x ~ Normal(0.00,1.00)"
    assert not gadget.parameterization_radio.active
    assert gadget.x_check.active


def test_switching_parameterization(gadget: DistributionGadget) -> None:
    gadget.parameterization_radio.set_active(1)
    assert list(gadget._sliders) == ["expectation", "precision"]
    assert gadget.controller.state.values == {"expectation": 0.5, "precision": 3.0}


def test_slider_updates_plot(gadget: DistributionGadget) -> None:
    gadget._sliders["a"].set_val(2.0)
    assert gadget.controller.state.values["a"] == 2.0
    assert gadget.plot_ax.get_title() == "x ~ Beta(2.00,1.50)"


def test_weibull_shows_hint(gadget: DistributionGadget) -> None:
    _select(gadget, "Weibull (incl. exponentiated)")
    assert "α = 1" in gadget.note.get_text()
    assert gadget.plot_ax.get_title() == "x ~ Weibull(1.00,1.00)"


def test_student_t_y_limit(gadget: DistributionGadget) -> None:
    _select(gadget, "Student-t")
    assert gadget.y_check.active
    gadget.y_check.set_active(0)
    assert gadget.controller.state.y_limit_enabled
    assert gadget.plot_ax.get_ylim() == pytest.approx((0.0, 10.0))

    gadget._on_limit(Axis.Y, Bound.MAX, "2.5")
    assert gadget.plot_ax.get_ylim() == pytest.approx((0.0, 2.5))


def test_custom_x_limits(gadget: DistributionGadget) -> None:
    _select(gadget, "Normal")
    gadget.x_check.set_active(0)
    gadget._on_limit(Axis.X, Bound.MAX, "4")
    assert gadget.plot_ax.get_xlim() == pytest.approx((-1.0, 4.0))


def test_rejected_limit_text(gadget: DistributionGadget) -> None:
    _select(gadget, "Normal")
    gadget._on_limit(Axis.X, Bound.MAX, "wide")
    gadget._on_limit(Axis.X, Bound.MAX, "500")
    assert gadget.controller.state.x_limit_max == 1.0
    assert gadget.x_max_box.text == "1"


def test_incomplete_selection_replaces_plot(gadget: DistributionGadget) -> None:
    del gadget.controller._state.values["b"]
    gadget.redraw()
    assert not gadget.plot_ax.lines
    assert "b" in gadget.plot_ax.texts[0].get_text()


def test_done_confirms(gadget: DistributionGadget) -> None:
    _select(gadget, "Normal")
    gadget._on_done(None)
    assert gadget.result == {"mean": 0.0, "std.dev": 1.0}
    assert gadget.controller.finished
    assert not gadget.cancelled


def test_cancel_leaves_no_result(gadget: DistributionGadget) -> None:
    gadget._on_cancel(None)
    assert gadget.cancelled
    assert gadget.result is None


def test_render_draws_reference_line() -> None:
    controller = GadgetController(distribution="ChiSquared")
    controller.on_parameter_value_changed("ncp", 3.0)
    fig, ax = plt.subplots()
    try:
        render(ax, controller.draw_request())
        assert len(ax.lines) == 2
        assert ax.lines[1].get_xdata()[0] == pytest.approx(3.0)
        assert ax.get_legend() is not None
    finally:
        plt.close(fig)


def test_slider_shows_unstepped_default(gadget: DistributionGadget) -> None:
    _select(gadget, "Gamma")
    gadget.parameterization_radio.set_active(1)
    assert gadget._sliders["rate"].val == pytest.approx(0.667)
    gadget._on_done(None)
    assert gadget.result == {"shape": 2.0, "rate": 0.667}
