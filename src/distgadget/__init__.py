"""Top-level package exports for distgadget."""

from __future__ import annotations

from importlib import metadata

__version__ = "0.1.0"

try:
    __version__ = metadata.version("distgadget")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev fallback
    pass

from . import core as core  # noqa: F401
from . import distributions as distributions  # noqa: F401
from .config import GadgetConfig, load_config  # noqa: F401
from .controller import GadgetController, derive_view  # noqa: F401
from .core import DistributionId, Parameterization, SelectionState  # noqa: F401
from .distributions import get_spec, list_distributions  # noqa: F401
from .emitter import confirm  # noqa: F401

__all__ = [
    "__version__",
    "core",
    "distributions",
    "DistributionId",
    "Parameterization",
    "SelectionState",
    "GadgetConfig",
    "GadgetController",
    "confirm",
    "derive_view",
    "get_spec",
    "list_distributions",
    "load_config",
]
