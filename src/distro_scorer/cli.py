"""CLI for the Distro Scoring Engine.

Provides command-line interface for scoring profile signals against
the distro catalog.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from distro_catalog.catalog import validate_catalog_file
from distro_catalog.schema import Trend

from . import __version__
from .config import find_config_file, get_config, load_config
from .engine import ScoringEngine, validate_signals
from .explainer import summarize
from .schema import AXES, FitCategory, ScoringResult

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name="distro-scorer")
def main():
    """Distro Fit Scoring Engine.

    Ranks a catalog of Linux distributions against extracted profile
    signals and returns a reproducible 0-100 fit score.
    """
    pass


@main.command("score")
@click.option(
    "--signals", "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to signals JSON file"
)
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True),
    help="Path to distro catalog JSON (default: shipped catalog)"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    help="Path to scorer config YAML"
)
@click.option(
    "--out", "-o",
    type=click.Path(),
    help="Output file for JSON results (default: stdout)"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show detailed output and debug logging"
)
@click.option(
    "--json-output", "-j",
    is_flag=True,
    help="Output raw JSON instead of formatted text"
)
def score_cmd(
    signals: str,
    catalog: Optional[str],
    config_path: Optional[str],
    out: Optional[str],
    verbose: bool,
    json_output: bool,
):
    """Score profile signals against the distro catalog.

    Examples:
        distro-scorer score -s signals.json
        distro-scorer score -s signals.json -c distros.json -v
        distro-scorer score -s signals.json -j -o result.json
    """
    if verbose:
        configure_logging(logging.DEBUG)

    try:
        engine = ScoringEngine(resolve_config(config_path))
        if catalog:
            engine.load_catalog(catalog)

        if not json_output:
            console.print("\n[bold blue]Distro Scoring Engine[/bold blue]")
            console.print(f"Catalog: {engine.catalog.source} ({engine.catalog.total_distros} distros)")
            console.print(f"Signals: {signals}")
            console.print()

        result = engine.score(signals)

        if json_output:
            output_json(result, out)
        else:
            display_result(result, verbose)
            if out:
                output_json(result, out)
                console.print(f"\n[green]Results saved to {out}[/green]")

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("validate")
@click.option(
    "--catalog", "-c",
    type=click.Path(),
    help="Path to distro catalog JSON"
)
@click.option(
    "--signals", "-s",
    type=click.Path(),
    help="Path to signals JSON file"
)
def validate_cmd(catalog: Optional[str], signals: Optional[str]):
    """Validate catalog and/or signals files.

    Examples:
        distro-scorer validate -c distros.json
        distro-scorer validate -s signals.json
    """
    if not catalog and not signals:
        console.print("[yellow]Please specify --catalog and/or --signals to validate[/yellow]")
        return

    all_valid = True

    if catalog:
        is_valid, issues = validate_catalog_file(catalog)
        if is_valid:
            console.print(f"[green]✓ Catalog valid: {catalog}[/green]")
        else:
            console.print(f"[red]✗ Catalog invalid: {catalog}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    if signals:
        is_valid, issues = validate_signals(signals)
        if is_valid:
            console.print(f"[green]✓ Signals valid: {signals}[/green]")
        else:
            console.print(f"[red]✗ Signals invalid: {signals}[/red]")
            for issue in issues:
                console.print(f"  - {issue}")
            all_valid = False

    sys.exit(0 if all_valid else 1)


@main.command("inspect")
@click.option(
    "--catalog", "-c",
    type=click.Path(exists=True),
    help="Path to distro catalog JSON (default: shipped catalog)"
)
@click.option(
    "--id", "distro_id",
    help="Show details for a specific distro ID"
)
@click.option(
    "--trend", "-t",
    type=click.Choice([t.value for t in Trend]),
    help="Filter by popularity trend"
)
def inspect_cmd(catalog: Optional[str], distro_id: Optional[str], trend: Optional[str]):
    """Inspect the distro catalog.

    Entries are listed in catalog order, which is also the tie-break order.
    """
    try:
        engine = ScoringEngine()
        if catalog:
            engine.load_catalog(catalog)
        cat = engine.catalog

        console.print("\n[bold blue]Distro Catalog[/bold blue]")
        console.print(f"Version: {cat.version}")
        console.print(f"Total Distros: {cat.total_distros}")
        console.print()

        if distro_id:
            distro = cat.get(distro_id)
            if not distro:
                console.print(f"[red]Distro not found: {distro_id}[/red]")
                sys.exit(1)
            display_distro_detail(distro)
            return

        filtered = [d for d in cat.distros if not trend or d.trend.value == trend]

        table = Table(show_header=True, header_style="bold")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name")
        table.add_column("Roll", justify="right")
        table.add_column("Easy", justify="right")
        table.add_column("DIY", justify="right")
        table.add_column("Perf", justify="right")
        table.add_column("Dev", justify="right")
        table.add_column("Popularity", justify="right")
        table.add_column("Trend")

        for d in filtered:
            table.add_row(
                d.distro_id, d.name, str(d.rolling), str(d.easy), str(d.diy),
                str(d.performance), str(d.dev_focus), str(d.popularity), d.trend.value,
            )

        console.print(f"Showing {len(filtered)} distros:\n")
        console.print(table)

    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


@main.command("init-config")
@click.option(
    "--out", "-o",
    type=click.Path(),
    default="scorer-config.yaml",
    help="Output path for the configuration file"
)
@click.option(
    "--force", "-f",
    is_flag=True,
    help="Overwrite existing config file"
)
def init_config_cmd(out: str, force: bool):
    """Generate a default scorer configuration file.

    Example:
        distro-scorer init-config --out my-config.yaml
    """
    from .config import save_default_config

    out_path = Path(out)
    if out_path.exists() and not force:
        console.print(f"[red]Error:[/red] Config file already exists: {out}")
        console.print("Use --force to overwrite")
        sys.exit(1)

    try:
        save_default_config(out_path)
        console.print(f"[green]✓[/green] Config file created: {out}")
        console.print("\nThis file configures:")
        console.print("  • baselines - Starting value of each user axis")
        console.print("  • matching - Similarity/popularity weights and trend multipliers")
        console.print("  • eligibility - Senior popularity floor and empty-set fallback")
        console.print("  • senior_penalties - Post-selection penalties for senior profiles")
        console.print("  • category_thresholds - Strong/potential score cut-offs")
        console.print("\nThe scorer will look for config in this order:")
        console.print("  1. DISTRO_SCORER_CONFIG environment variable")
        console.print("  2. ./scorer-config.yaml (current directory)")
        console.print("  3. ~/.config/distro-scorer/config.yaml")
    except Exception as e:
        console.print(f"[red]Error creating config:[/red] {e}")
        sys.exit(1)


def resolve_config(config_path: Optional[str]):
    """Load an explicit config, else a discovered one, else defaults."""
    if config_path:
        return load_config(Path(config_path))
    found = find_config_file()
    if found:
        return load_config(found)
    return get_config()


def configure_logging(level: int) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def display_result(result: ScoringResult, verbose: bool):
    """Display scoring result in formatted text."""
    score = result.result
    category_color = {
        FitCategory.STRONG: "green",
        FitCategory.POTENTIAL: "yellow",
        FitCategory.NONE: "red",
    }[score.category]

    console.print(Panel(
        f"Recommended Distro: [bold cyan]{score.distro_name}[/bold cyan] ({score.distro_id})\n"
        f"Score: [bold]{score.score}/100[/bold]\n"
        f"Category: [{category_color}]{score.category.value}[/{category_color}]\n"
        f"Confidence: {score.confidence:.2f} ({result.confidence_band})\n"
        f"Eligible: {result.match.eligible_count} | Excluded: {result.match.excluded_count}",
        title="Scoring Summary",
    ))

    console.print("\n[bold]Summary:[/bold]")
    for line in summarize(result):
        console.print(f"  [green]•[/green] {line}")

    vector_table = Table(title="User Vector vs Distro", show_header=True, header_style="bold")
    vector_table.add_column("Axis")
    vector_table.add_column("User", justify="right")
    vector_table.add_column("Distro", justify="right")
    distro = result.match.distro
    for axis, user, attr in zip(
        AXES,
        result.vector.as_tuple(),
        distro.attributes(),
    ):
        vector_table.add_row(axis, str(user), str(attr))
    console.print()
    console.print(vector_table)

    if result.adjustments:
        console.print(f"\n[bold]Score Adjustments[/bold] (base {result.base_score}):")
        for adj in result.adjustments:
            color = "green" if adj.delta > 0 else "yellow"
            console.print(f"  [{color}]{adj.delta:+d}[/{color}] {adj.rule}: {adj.reason}")

    if result.match.penalties:
        console.print("\n[bold]Match Penalties:[/bold]")
        for penalty in result.match.penalties:
            console.print(f"  [yellow]x{penalty.multiplier:.2f}[/yellow] {penalty.rule}: {penalty.reason}")

    if verbose and result.contributions:
        console.print("\n[bold]Dimension Contributions:[/bold]")
        for c in result.contributions:
            term = f" ({c.term})" if c.term else ""
            console.print(f"  [dim]{c.axis}[/dim] {c.delta:+d} {c.rule}{term}")


def display_distro_detail(distro):
    """Display detailed distro information."""
    tree = Tree(f"[bold cyan]{distro.name}[/bold cyan]")

    identity = tree.add("[bold]Identity[/bold]")
    identity.add(f"ID: {distro.distro_id}")

    attributes = tree.add("[bold]Attributes[/bold]")
    attributes.add(f"Rolling: {distro.rolling}")
    attributes.add(f"Easy: {distro.easy}")
    attributes.add(f"DIY: {distro.diy}")
    attributes.add(f"Performance: {distro.performance}")
    attributes.add(f"Dev Focus: {distro.dev_focus}")

    community = tree.add("[bold]Community[/bold]")
    community.add(f"Popularity: {distro.popularity}")
    community.add(f"Trend: {distro.trend.value}")

    console.print(tree)


def output_json(result: ScoringResult, out_path: Optional[str]):
    """Output result as JSON."""
    json_str = result.model_dump_json(indent=2)

    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(json_str)
    else:
        print(json_str)


if __name__ == "__main__":
    main()
