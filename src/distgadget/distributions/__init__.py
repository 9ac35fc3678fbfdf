"""Distribution registry and the built-in continuous families."""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np
from scipy import stats

from ..core import DistributionId, ParameterSpec, Parameterization, ReferenceLine
from .base import (
    Distribution,
    DistributionSpec,
    Pdf,
    Variant,
    clear_registry,
    density,
    get_distribution,
    get_spec,
    iter_specs,
    list_distributions,
    register_distribution,
    rename,
)

__all__ = [
    "Distribution",
    "DistributionSpec",
    "Pdf",
    "Variant",
    "BUILTIN_DISTRIBUTIONS",
    "WEIBULL_EPSILON",
    "density",
    "get_distribution",
    "get_spec",
    "iter_specs",
    "list_distributions",
    "register_distribution",
    "clear_registry",
    "exponentiated_weibull_pdf",
]

# Lower x bound for Weibull plots; the density diverges at 0 when k < 1.
WEIBULL_EPSILON = 1e-6


def _as_array(x: np.ndarray | float) -> np.ndarray:
    return np.asarray(x, dtype=float)


def beta_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    return stats.beta.pdf(_as_array(x), params["a"], params["b"])


def cauchy_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    return stats.cauchy.pdf(_as_array(x), loc=params["location"], scale=params["scale"])


def chi_squared_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    """Non-central chi-squared; ``inf`` at x = 0 when k < 2."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return stats.ncx2.pdf(_as_array(x), params["df"], params["ncp"])


def exponential_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    rate = params["rate"]
    scale = 1.0 / rate if rate > 0 else np.nan
    return stats.expon.pdf(_as_array(x), scale=scale)


def gamma_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return stats.gamma.pdf(_as_array(x), params["shape"], scale=params["scale"])


def inverse_gamma_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore", over="ignore", under="ignore"):
        return stats.invgamma.pdf(_as_array(x), params["a"], scale=params["b"])


def log_normal_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    return stats.lognorm.pdf(_as_array(x), params["sd"], scale=np.exp(params["mean"]))


def normal_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    return stats.norm.pdf(_as_array(x), loc=params["mean"], scale=params["sd"])


def student_t_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    return stats.t.pdf(_as_array(x), params["df"])


def exponentiated_weibull_pdf(x: np.ndarray, params: Mapping[str, float]) -> np.ndarray:
    """Exponentiated Weibull density with shapes ``k``, ``alpha`` and scale ``lam``.

    ``alpha = 1`` gives the ordinary two-parameter Weibull. Non-positive
    parameters yield ``nan``; samples at x <= 0 are ``nan`` or ``inf`` when
    ``k < 1`` and are expected to be skipped by the caller.
    """
    arr = _as_array(x)
    k = float(params["k"])
    alpha = float(params["alpha"])
    lam = float(params["lam"])
    if k <= 0 or alpha <= 0 or lam <= 0:
        return np.full_like(arr, np.nan)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        z = arr / lam
        zk = np.power(z, k)
        cdf = -np.expm1(-zk)
        body = np.power(z, k - 1.0) * np.exp(-zk)
        return alpha * (k / lam) * body * np.power(cdf, alpha - 1.0)


def _beta_intuitive(values: Mapping[str, float]) -> dict[str, float]:
    expectation = float(values["expectation"])
    precision = float(values["precision"])
    return {"a": expectation * precision, "b": (1.0 - expectation) * precision}


def _beta_intuitive_output(values: Mapping[str, float]) -> dict[str, float]:
    shapes = _beta_intuitive(values)
    return {"shape1": shapes["a"], "shape2": shapes["b"]}


def _gamma_intuitive(values: Mapping[str, float]) -> dict[str, float]:
    return {"shape": float(values["shape"]), "scale": 1.0 / float(values["rate"])}


def _weibull_title(params: Mapping[str, float]) -> str:
    if params["alpha"] == 1:
        return f"x ~ Weibull({params['k']:0.2f},{params['lam']:0.2f})"
    return f"x ~ ExpWeibull({params['k']:0.2f},{params['alpha']:0.2f},{params['lam']:0.2f})"


def _ncp_line(params: Mapping[str, float]) -> tuple[ReferenceLine, ...]:
    return (ReferenceLine(x=float(params["ncp"]), label="λ"),)


BUILTIN_DISTRIBUTIONS = [
    Distribution(
        id=DistributionId.BETA,
        label="Beta",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("a", "α", 0.1, 100.0, 0.01, 1.5),
                    ParameterSpec("b", "β", 0.1, 100.0, 0.01, 1.5),
                ),
                output=rename(a="shape1", b="shape2"),
            ),
            Variant(
                name=Parameterization.INTUITIVE,
                parameters=(
                    ParameterSpec("expectation", "Expected Response", 0.0, 1.0, 0.01, 0.5),
                    ParameterSpec("precision", "Precision", 0.1, 100.0, 0.1, 3.0),
                ),
                transform=_beta_intuitive,
                output=_beta_intuitive_output,
            ),
        ),
        pdf=beta_pdf,
        x_range=(0.0, 1.0),
        samples=201,
        title=lambda p: f"x ~ Beta({p['a']:0.2f},{p['b']:0.2f})",
        y_label="f(x | α, β)",
        custom_x_limits=False,
        notes="Support fixed to [0, 1]; Intuitive uses expectation and precision.",
    ),
    Distribution(
        id=DistributionId.CAUCHY,
        label="Cauchy",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("location", "x₀: location", -10.0, 10.0, 1.0, 0.0),
                    ParameterSpec("scale", "γ: scale", 0.001, 10.0, 0.001, 5.0),
                ),
            ),
        ),
        pdf=cauchy_pdf,
        x_range=(-20.0, 20.0),
        samples=401,
        title=lambda p: f"x ~ Cauchy({p['location']:0.2f},{p['scale']:0.2f})",
        y_label="f(x | x₀, γ)",
    ),
    Distribution(
        id=DistributionId.CHI_SQUARED,
        label="Chi-squared",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("df", "k: degrees of freedom", 0.001, 10.0, 0.001, 0.01),
                    ParameterSpec("ncp", "λ: non-centrality parameter", 0.001, 10.0, 0.001, 0.01),
                ),
            ),
        ),
        pdf=chi_squared_pdf,
        x_range=(0.0, 50.0),
        samples=401,
        title=lambda p: f"x ~ χ²({p['df']:0.2f},{p['ncp']:0.2f})",
        y_label="f(x | k, λ)",
        reference_lines=_ncp_line,
        notes="Non-central chi-squared; dashed line marks the non-centrality parameter.",
    ),
    Distribution(
        id=DistributionId.EXPONENTIAL,
        label="Exponential",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(ParameterSpec("rate", "λ: rate", 0.001, 2.0, 0.001, 0.01),),
            ),
        ),
        pdf=exponential_pdf,
        x_range=(0.0, 20.0),
        samples=401,
        title=lambda p: f"x ~ Exp({p['rate']:0.2f})",
        y_label="f(x | λ)",
    ),
    Distribution(
        id=DistributionId.GAMMA,
        label="Gamma",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("shape", "k: shape", 0.01, 10.0, 0.01, 2.0),
                    ParameterSpec("scale", "θ: scale", 0.1, 2.0, 0.1, 1.5),
                ),
            ),
            Variant(
                name=Parameterization.INTUITIVE,
                parameters=(
                    ParameterSpec("shape", "α: shape", 0.01, 10.0, 0.01, 2.0),
                    ParameterSpec("rate", "β: rate", 0.5, 10.0, 0.1, 0.667),
                ),
                transform=_gamma_intuitive,
            ),
        ),
        pdf=gamma_pdf,
        x_range=(0.0, 20.0),
        samples=201,
        title=lambda p: f"x ~ Gamma({p['shape']:0.2f},{1.0 / p['scale']:0.2f})",
        y_label="f(x | α, β)",
        notes="Classic uses shape/scale, Intuitive uses shape/rate (scale = 1/rate).",
    ),
    Distribution(
        id=DistributionId.INVERSE_GAMMA,
        label="Inverse-gamma",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("a", "α: shape", 0.001, 10.0, 0.001, 0.01),
                    ParameterSpec("b", "β: scale", 0.001, 10.0, 0.001, 0.01),
                ),
                output=rename(a="alpha", b="beta"),
            ),
        ),
        pdf=inverse_gamma_pdf,
        x_range=(0.0, 10.0),
        samples=201,
        title=lambda p: f"x ~ Inv-Gamma({p['a']:0.2f},{p['b']:0.2f})",
        y_label="f(x | α, β)",
    ),
    Distribution(
        id=DistributionId.LOG_NORMAL,
        label="Log-Normal",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("mean", "μ", -2.0, 10.0, 0.1, 0.0),
                    ParameterSpec("sd", "σ", 0.1, 4.0, 0.1, 1.0),
                ),
                output=rename(mean="meanlog", sd="sdlog"),
            ),
        ),
        pdf=log_normal_pdf,
        x_range=(0.0, 10.0),
        samples=201,
        title=lambda p: f"x ~ Log-Normal({p['mean']:0.2f},{p['sd']:0.2f})",
        y_label="f(x | μ, σ)",
        notes="Parameters are the mean and standard deviation on the log scale.",
    ),
    Distribution(
        id=DistributionId.NORMAL,
        label="Normal",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("mean", "μ", -10.0, 10.0, 0.1, 0.0),
                    ParameterSpec("sd", "σ", 0.1, 100.0, 0.1, 1.0),
                ),
                output=rename(mean="mean", sd="std.dev"),
            ),
        ),
        pdf=normal_pdf,
        x_range=(-20.0, 20.0),
        samples=401,
        title=lambda p: f"x ~ Normal({p['mean']:0.2f},{p['sd']:0.2f})",
        y_label="f(x | μ, σ)",
    ),
    Distribution(
        id=DistributionId.STUDENT_T,
        label="Student-t",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("df", "ν: degrees of freedom", 0.001, 10.0, 0.001, 0.5),
                ),
            ),
        ),
        pdf=student_t_pdf,
        x_range=(-20.0, 20.0),
        samples=401,
        title=lambda p: f"x ~ t({p['df']:0.3f})",
        y_label="f(x | ν)",
        custom_y_limit=True,
    ),
    Distribution(
        id=DistributionId.WEIBULL,
        label="Weibull (incl. exponentiated)",
        variants=(
            Variant(
                name=Parameterization.CLASSIC,
                parameters=(
                    ParameterSpec("shape1", "k: first shape parameter", 0.01, 10.0, 0.01, 1.0),
                    ParameterSpec("shape2", "α: second shape parameter", 0.5, 10.0, 0.1, 1.0),
                    ParameterSpec("scale", "λ: scale parameter", 0.5, 10.0, 0.1, 1.0),
                ),
                transform=rename(shape1="k", shape2="alpha", scale="lam"),
                output=rename(
                    shape1="k (shape 1)", shape2="alpha (shape 2)", scale="lambda (scale)"
                ),
            ),
        ),
        pdf=exponentiated_weibull_pdf,
        x_range=(WEIBULL_EPSILON, 10.0),
        samples=201,
        title=_weibull_title,
        y_label="f(x | k, α, λ)",
        custom_y_limit=True,
        x_floor=WEIBULL_EPSILON,
        hint="Setting α = 1 yields the regular, non-exponentiated Weibull distribution",
        notes="Exponentiated Weibull; second shape α = 1 is the ordinary Weibull.",
    ),
]


def _register_builtin() -> None:
    for dist in BUILTIN_DISTRIBUTIONS:
        register_distribution(dist, overwrite=True)


_register_builtin()
