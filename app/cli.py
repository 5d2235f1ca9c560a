"""Typer-based command line harness for the venue viability engine."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from analytics.decisions import generate_viability_report
from analytics.results import SimulationResult
from core.errors import ScenarioConfigError, SimulationAborted
from data_prep.loader import dump_scenario, load_scenario
from data_prep.validators import validate_scenario
from engine.runner import run_simulation
from scenarios.presets import PRESETS, get_preset
from scenarios.stress import STRESS_TESTS, get_stress_test, run_stress_suite

app = typer.Typer(help="Monte Carlo venue viability simulator")
console = Console()


@app.callback()
def _configure(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine logs")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _display_frame(df: pd.DataFrame, title: str, money_cols=()) -> None:
    table = Table(title=title, show_lines=False)
    for column in df.columns:
        table.add_column(str(column), justify="right" if column in money_cols else "left")
    for _, row in df.iterrows():
        cells = []
        for column, value in row.items():
            if column in money_cols and isinstance(value, (int, float)):
                cells.append(f"{value:,.0f}")
            else:
                cells.append(str(value))
        table.add_row(*cells)
    console.print(table)


def _load_or_exit(path: Path):
    try:
        return load_scenario(path)
    except ScenarioConfigError as exc:
        for err in exc.errors:
            console.print(f"[red]{err}[/red]")
        raise typer.Exit(code=2)


def _histogram_lines(result: SimulationResult, width: int = 40) -> None:
    peak = max(b.count for b in result.histogram) or 1
    for b in result.histogram:
        colour = "red" if b.is_loss else "green"
        bar = "█" * int(round(b.count / peak * width))
        console.print(f"{b.lower:>12,.0f}  [{colour}]{bar}[/{colour}] {b.count}")


@app.command()
def run(
    scenario_file: Path = typer.Argument(..., exists=True, help="Scenario JSON file"),
    seed: Optional[int] = typer.Option(None, help="Random seed for a reproducible run"),
    iterations: Optional[int] = typer.Option(None, help="Override the scenario's iteration count"),
    workers: int = typer.Option(1, min=1, help="Worker threads"),
    stress: Optional[str] = typer.Option(
        None, help=f"Apply a stress test first ({', '.join(STRESS_TESTS)})"
    ),
    json_out: Optional[Path] = typer.Option(None, "--json", help="Write the full result as JSON"),
    bands: bool = typer.Option(False, help="Print the monthly P10/P50/P90 cash bands"),
) -> None:
    """Simulate one scenario and print the viability summary."""
    scenario = _load_or_exit(scenario_file)
    if iterations is not None:
        scenario = scenario.replace(iterations=iterations)
    if stress:
        try:
            scenario = get_stress_test(stress).apply(scenario)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=2)

    try:
        result = run_simulation(scenario, seed=seed, workers=workers)
    except ScenarioConfigError as exc:
        for err in exc.errors:
            console.print(f"[red]{err}[/red]")
        raise typer.Exit(code=2)
    except SimulationAborted as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(code=130)

    console.print(
        f"\n[bold]{result.scenario_name}[/bold]  "
        f"{result.iterations} runs x {result.periods} months  (seed {result.seed})"
    )
    _display_frame(result.summary_table(), "Summary")
    console.print("\n[bold]Weekly profit distribution[/bold]")
    _histogram_lines(result)
    _display_frame(result.sensitivity_frame(), "Sensitivity (static, $/week)", money_cols=("impact",))
    if bands:
        _display_frame(
            result.cash_flow_frame(), "Cash position by month", money_cols=("p10", "p50", "p90")
        )
    _display_frame(generate_viability_report(result).to_dataframe(), "Verdict")

    if json_out is not None:
        json_out.write_text(json.dumps(result.to_dict(), indent=2) + "\n", encoding="utf-8")
        console.print(f"Result exported to: {json_out}")


@app.command("stress")
def stress_suite(
    scenario_file: Path = typer.Argument(..., exists=True, help="Scenario JSON file"),
    seed: int = typer.Option(42, help="Seed shared by every case"),
    workers: int = typer.Option(1, min=1, help="Worker threads"),
) -> None:
    """Compare the baseline against every stress test."""
    scenario = _load_or_exit(scenario_file)
    try:
        table = run_stress_suite(scenario, seed=seed, workers=workers)
    except ScenarioConfigError as exc:
        for err in exc.errors:
            console.print(f"[red]{err}[/red]")
        raise typer.Exit(code=2)
    _display_frame(
        table, f"Stress tests: {scenario.name}",
        money_cols=("Weekly P10", "Weekly P50", "Weekly P90"),
    )


@app.command()
def validate(
    scenario_file: Path = typer.Argument(..., exists=True, help="Scenario JSON file"),
) -> None:
    """Check a scenario without running it."""
    scenario = _load_or_exit(scenario_file)
    result = validate_scenario(scenario)
    console.print(result.summary())
    if not result.is_valid:
        raise typer.Exit(code=2)


@app.command()
def template(
    output: Path = typer.Argument(Path("scenario.json"), help="Where to write the template"),
    preset: str = typer.Option("wine_bar", help=f"Preset venue ({', '.join(PRESETS)})"),
) -> None:
    """Write a preset venue scenario as a starting point."""
    try:
        scenario = get_preset(preset)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)
    dump_scenario(scenario, output)
    console.print(f"Template scenario written to: {output}")


def main() -> None:
    """Entry point for CLI execution."""
    app()


if __name__ == "__main__":
    main()
