import importlib

import numpy as np
import pytest
from scipy import stats
from scipy.special import gamma as gamma_fn

from distgadget.core import DistributionId, Parameterization
from distgadget.distributions import (
    WEIBULL_EPSILON,
    clear_registry,
    density,
    exponentiated_weibull_pdf,
    get_distribution,
    get_spec,
    iter_specs,
    list_distributions,
    register_distribution,
)
from distgadget.errors import UnknownDistribution, UnknownParameterization


def _reload_registry() -> None:
    """Reload the distributions module to restore built-ins after tests."""
    import distgadget.distributions as dist_module

    importlib.reload(dist_module)


def test_registry_lists_ten_distributions_in_ui_order() -> None:
    assert list_distributions() == [
        DistributionId.BETA,
        DistributionId.CAUCHY,
        DistributionId.CHI_SQUARED,
        DistributionId.EXPONENTIAL,
        DistributionId.GAMMA,
        DistributionId.INVERSE_GAMMA,
        DistributionId.LOG_NORMAL,
        DistributionId.NORMAL,
        DistributionId.STUDENT_T,
        DistributionId.WEIBULL,
    ]


@pytest.mark.parametrize("spec", list(iter_specs()), ids=lambda s: f"{s.id}-{s.parameterization}")
def test_default_density_is_defined_over_default_range(spec) -> None:
    assert spec.parameters
    assert spec.samples in {201, 401}
    low, high = spec.default_x_range
    xs = np.linspace(low, high, spec.samples)
    values = spec.density(xs, spec.defaults())
    assert values.shape == xs.shape
    finite = values[np.isfinite(values)]
    assert finite.size > spec.samples // 2
    assert np.all(finite >= 0)


def test_only_beta_and_gamma_offer_two_parameterizations() -> None:
    multi = {
        dist_id
        for dist_id in list_distributions()
        if len(get_distribution(dist_id).parameterizations) > 1
    }
    assert multi == {DistributionId.BETA, DistributionId.GAMMA}
    for dist_id in multi:
        assert get_distribution(dist_id).parameterizations == (
            Parameterization.CLASSIC,
            Parameterization.INTUITIVE,
        )


def test_limit_support_flags() -> None:
    assert not get_spec("Beta").supports_custom_x_limits
    custom_y = {d for d in list_distributions() if get_spec(d).supports_custom_y_limit}
    assert custom_y == {DistributionId.STUDENT_T, DistributionId.WEIBULL}


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Student-t", DistributionId.STUDENT_T),
        ("studentt", DistributionId.STUDENT_T),
        ("Chi-squared", DistributionId.CHI_SQUARED),
        ("Weibull (incl. exponentiated)", DistributionId.WEIBULL),
        ("INVERSE_GAMMA", DistributionId.INVERSE_GAMMA),
        (DistributionId.LOG_NORMAL, DistributionId.LOG_NORMAL),
    ],
)
def test_lookup_accepts_ids_and_labels(name, expected: DistributionId) -> None:
    assert get_spec(name).id is expected


def test_unknown_distribution_raises() -> None:
    with pytest.raises(UnknownDistribution):
        get_spec("Poisson")
    with pytest.raises(KeyError):
        get_distribution("Binomial")


@pytest.mark.parametrize("name,variant", [("Normal", "Intuitive"), ("Gamma", "Bogus")])
def test_unknown_parameterization_raises(name: str, variant: str) -> None:
    with pytest.raises(UnknownParameterization):
        get_spec(name, variant)


@pytest.mark.parametrize(
    "expectation,precision",
    [(0.5, 3.0), (0.1, 0.5), (0.25, 40.0), (0.99, 100.0), (0.01, 0.1)],
)
def test_beta_intuitive_output_maps_to_shapes(expectation: float, precision: float) -> None:
    spec = get_spec("Beta", "Intuitive")
    result = spec.output_mapping({"expectation": expectation, "precision": precision})
    assert list(result) == ["shape1", "shape2"]
    assert result["shape1"] == pytest.approx(expectation * precision)
    assert result["shape2"] == pytest.approx((1 - expectation) * precision)
    assert result["shape1"] > 0
    assert result["shape2"] > 0


def test_beta_intuitive_reuses_classic_density() -> None:
    xs = np.linspace(0.0, 1.0, 201)
    intuitive = get_spec("Beta", "Intuitive").density(xs, {"expectation": 0.3, "precision": 10.0})
    classic = get_spec("Beta", "Classic").density(xs, {"a": 3.0, "b": 7.0})
    assert np.allclose(intuitive, classic)


@pytest.mark.parametrize("shape,rate", [(2.0, 0.667), (0.5, 2.0), (7.5, 10.0)])
def test_gamma_intuitive_scale_is_inverse_rate(shape: float, rate: float) -> None:
    intuitive = get_spec("Gamma", "Intuitive")
    classic = get_spec("Gamma", "Classic")
    params = intuitive.density_parameters({"shape": shape, "rate": rate})
    assert params["scale"] == pytest.approx(1.0 / rate)
    xs = np.linspace(0.0, 20.0, 201)
    assert np.allclose(
        intuitive.density(xs, {"shape": shape, "rate": rate}),
        classic.density(xs, {"shape": shape, "scale": 1.0 / rate}),
        equal_nan=True,
    )
    assert intuitive.output_mapping({"shape": shape, "rate": rate}) == {
        "shape": shape,
        "rate": rate,
    }


@pytest.mark.parametrize("k", [0.3, 1.0, 2.5, 7.0])
@pytest.mark.parametrize("lam", [0.5, 1.0, 3.0])
def test_exponentiated_weibull_reduces_to_weibull(k: float, lam: float) -> None:
    xs = np.linspace(WEIBULL_EPSILON, 10.0, 201)
    values = exponentiated_weibull_pdf(xs, {"k": k, "alpha": 1.0, "lam": lam})
    expected = stats.weibull_min.pdf(xs, k, scale=lam)
    assert np.allclose(values, expected, rtol=1e-9, atol=1e-300)


def test_exponentiated_weibull_matches_scipy_general_form() -> None:
    xs = np.linspace(0.01, 10.0, 101)
    values = exponentiated_weibull_pdf(xs, {"k": 1.7, "alpha": 2.5, "lam": 2.0})
    expected = stats.exponweib.pdf(xs, 2.5, 1.7, scale=2.0)
    assert np.allclose(values, expected, rtol=1e-9)


@pytest.mark.parametrize("k", [1.5, 4.0])
@pytest.mark.parametrize("alpha", [0.5, 0.8])
def test_exponentiated_weibull_near_lower_bound(k: float, alpha: float) -> None:
    xs = np.array([WEIBULL_EPSILON, 1e-4, 1e-3, 0.1, 1.0])
    values = exponentiated_weibull_pdf(xs, {"k": k, "alpha": alpha, "lam": 1.0})
    expected = stats.exponweib.pdf(xs, alpha, k)
    assert np.all(np.isfinite(values))
    assert np.allclose(values, expected, rtol=1e-6, atol=0.0)


def test_exponentiated_weibull_invalid_parameters_are_nan() -> None:
    values = exponentiated_weibull_pdf(np.array([0.5, 1.0]), {"k": -1.0, "alpha": 1.0, "lam": 1.0})
    assert np.all(np.isnan(values))


def test_density_helper_matches_scipy() -> None:
    xs = np.linspace(-5.0, 5.0, 11)
    values = density("Normal", None, xs, {"mean": 1.0, "sd": 2.0})
    assert np.allclose(values, stats.norm.pdf(xs, loc=1.0, scale=2.0))


def test_inverse_gamma_uses_beta_as_scale() -> None:
    xs = np.linspace(0.1, 5.0, 50)
    a, b = 3.0, 2.0
    values = density("InverseGamma", None, xs, {"a": a, "b": b})
    expected = b**a / gamma_fn(a) * xs ** (-a - 1) * np.exp(-b / xs)
    assert np.allclose(values, expected)


@pytest.mark.parametrize(
    "name,variant,values,title",
    [
        ("Beta", "Classic", {"a": 1.5, "b": 1.5}, "x ~ Beta(1.50,1.50)"),
        ("Beta", "Intuitive", {"expectation": 0.5, "precision": 3.0}, "x ~ Beta(1.50,1.50)"),
        ("Gamma", "Intuitive", {"shape": 2.0, "rate": 0.5}, "x ~ Gamma(2.00,0.50)"),
        ("Gamma", "Classic", {"shape": 2.0, "scale": 2.0}, "x ~ Gamma(2.00,0.50)"),
        ("StudentT", None, {"df": 0.5}, "x ~ t(0.500)"),
        ("Weibull", None, {"shape1": 1.0, "shape2": 1.0, "scale": 1.0}, "x ~ Weibull(1.00,1.00)"),
        (
            "Weibull",
            None,
            {"shape1": 1.0, "shape2": 2.0, "scale": 1.0},
            "x ~ ExpWeibull(1.00,2.00,1.00)",
        ),
    ],
)
def test_plot_titles(name: str, variant, values: dict[str, float], title: str) -> None:
    assert get_spec(name, variant).title(values) == title


def test_chi_squared_marks_non_centrality() -> None:
    lines = get_spec("ChiSquared").reference_lines({"df": 3.0, "ncp": 2.5})
    assert [(line.x, line.label) for line in lines] == [(2.5, "λ")]
    assert get_spec("Normal").reference_lines({"mean": 0.0, "sd": 1.0}) == ()


def test_duplicate_registration_rejected() -> None:
    with pytest.raises(ValueError):
        register_distribution(get_distribution("Normal"))


def test_clear_registry_and_reload() -> None:
    clear_registry()
    assert list_distributions() == []
    with pytest.raises(UnknownDistribution):
        get_spec("Normal")
    _reload_registry()
    assert len(list_distributions()) == 10
