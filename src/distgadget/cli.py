"""Typer-based CLI entry point."""

from __future__ import annotations

import logging
import math
import numbers
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import load_config
from .distributions import get_distribution, get_spec, list_distributions
from .errors import GadgetError

app = typer.Typer(help="Pick parameters of a univariate continuous distribution.")
console = Console()

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output.")
VERSION_OPTION = typer.Option(False, "--version", help="Show version and exit.")

DISTRIBUTION_ARGUMENT = typer.Argument(
    ...,
    help="Distribution id or label, e.g. Beta, Normal, Student-t.",
)

DISTRIBUTION_OPTION = typer.Option(
    None,
    "--distribution",
    "-d",
    help="Distribution selected when the gadget opens (defaults to the config value).",
    show_default=False,
)

PARAMETERIZATION_OPTION = typer.Option(
    None,
    "--parameterization",
    "-p",
    help="Parameterization variant (Classic or Intuitive; Beta and Gamma only).",
    show_default=False,
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="YAML file with gadget settings (defaults to $DISTGADGET_CONFIG).",
    show_default=False,
)


@app.callback(invoke_without_command=True)
def cli_callback(  # noqa: B008
    ctx: typer.Context,
    verbose: bool = VERBOSE_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )
    if verbose or version:
        console.print(f"[bold green]distgadget {__version__}[/bold green]")
    if ctx.invoked_subcommand is None and not ctx.resilient_parsing:
        raise typer.Exit()


@app.command()
def registry() -> None:
    """List registered distributions."""
    table = Table(title="Registered Distributions")
    table.add_column("Name")
    table.add_column("Parameterizations")
    table.add_column("Parameters")
    table.add_column("X range", no_wrap=True)
    table.add_column("Description", overflow="fold")
    for dist_id in list_distributions():
        dist = get_distribution(dist_id)
        params = "; ".join(
            ", ".join(param.name for param in variant.parameters) for variant in dist.variants
        )
        low, high = dist.x_range
        table.add_row(
            dist.label,
            ", ".join(p.value for p in dist.parameterizations),
            params,
            f"[{_format_metric(low)}, {_format_metric(high)}]",
            dist.notes or "",
        )
    console.print(table)


@app.command()
def describe(  # noqa: B008
    distribution: str = DISTRIBUTION_ARGUMENT,
    parameterization: str | None = PARAMETERIZATION_OPTION,
) -> None:
    """Show the parameter widgets of one distribution and its default result."""
    try:
        spec = get_spec(distribution, parameterization)
    except GadgetError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{spec.label} ({spec.parameterization.value})", expand=True)
    table.add_column("Parameter", no_wrap=True)
    table.add_column("Label")
    for column in ("Min", "Max", "Step", "Default"):
        table.add_column(column, justify="right", no_wrap=True)
    for param in spec.parameters:
        table.add_row(
            param.name,
            param.label,
            _format_metric(param.minimum),
            _format_metric(param.maximum),
            _format_metric(param.step),
            _format_metric(param.default),
        )
    console.print(table)

    defaults = spec.defaults()
    console.print(f"Plot: {spec.title(defaults)} ({spec.samples} samples)")
    _print_result(spec.output_mapping(defaults), title="Result at Defaults")


@app.command()
def launch(  # noqa: B008
    distribution: str | None = DISTRIBUTION_OPTION,
    parameterization: str | None = PARAMETERIZATION_OPTION,
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Open the interactive gadget and print the confirmed parameters."""
    from .gui import run_gadget

    try:
        settings = load_config(config)
        result = run_gadget(distribution, parameterization=parameterization, config=settings)
    except GadgetError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    if result is None:
        console.print("[yellow]No parameters confirmed.[/yellow]")
        raise typer.Exit(code=1)
    _print_result(result, title="Chosen Parameters")


def _print_result(result: dict[str, float], *, title: str) -> None:
    table = Table(title=title)
    table.add_column("Name", no_wrap=True)
    table.add_column("Value", justify="right", no_wrap=True)
    for name, value in result.items():
        table.add_row(name, _format_metric(value))
    console.print(table)


def _format_metric(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, numbers.Real):
        val = float(value)
        if math.isnan(val) or math.isinf(val):
            return "-"
        return f"{val:g}"
    return str(value)


def main_entry() -> None:
    app()


def main() -> None:  # pragma: no cover - console entry
    main_entry()
