"""Main CLI entry point using Typer."""

import json
from pathlib import Path
from typing import NoReturn

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from waveplan import __version__
from waveplan.core.config import get_settings
from waveplan.core.exceptions import CircularDependencyError, PlanFileError
from waveplan.core.logging import configure_logging
from waveplan.scheduling import (
    TaskGraph,
    calculate_critical_path,
    calculate_parallelization_score,
    calculate_time_savings,
    detect_cycles,
    format_duration,
    generate_execution_plan,
    get_next_wave,
    parse_dependency_graph,
    topological_sort,
    validate_dependencies,
)

app = typer.Typer(
    name="waveplan",
    help="waveplan - schedule plan tasks into parallel execution waves",
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()

PLAN_FILE = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    help="Plan document (e.g. PLAN.md)",
)
JSON_OUTPUT = typer.Option(False, "--json", help="Print machine-readable JSON.")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]waveplan[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    waveplan - turn an implementation plan into waves of parallel work.

    Parses task declarations, validates their dependencies, and reports
    how much time parallel execution saves.
    """
    configure_logging(get_settings())


def load_graph(plan_file: Path) -> TaskGraph:
    """Read and parse a plan file using the configured grammar."""
    try:
        text = plan_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PlanFileError(f"Cannot read {plan_file}: {e}") from e

    graph = parse_dependency_graph(text, get_settings().plan_grammar())
    if not len(graph):
        logger.warning(f"No task declarations found in {plan_file}")
    return graph


def _print_json(data: object) -> None:
    typer.echo(json.dumps(data, indent=2))


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]{escape(message)}[/bold red]")
    raise typer.Exit(code=1)


@app.command()
def plan(plan_file: Path = PLAN_FILE) -> None:
    """
    Print the parallel execution plan.

    Example:
        waveplan plan PLAN.md
    """
    try:
        graph = load_graph(plan_file)
    except PlanFileError as e:
        _fail(str(e))

    typer.echo(generate_execution_plan(graph))

    if detect_cycles(graph):
        raise typer.Exit(code=1)


@app.command()
def validate(plan_file: Path = PLAN_FILE, as_json: bool = JSON_OUTPUT) -> None:
    """
    Check that every dependency exists and that there are no cycles.

    Exits with status 1 when the plan is invalid.
    """
    try:
        graph = load_graph(plan_file)
    except PlanFileError as e:
        _fail(str(e))

    report = validate_dependencies(graph)

    if as_json:
        _print_json({"tasks": len(graph), **report.model_dump()})
    elif report.valid:
        console.print(f"[green]Dependencies valid ({len(graph)} tasks)[/green]")
    else:
        console.print(f"[bold red]{len(report.errors)} dependency error(s):[/bold red]")
        for error in report.errors:
            console.print(f"  - {error}", markup=False)

    if not report.valid:
        raise typer.Exit(code=1)


@app.command()
def waves(plan_file: Path = PLAN_FILE, as_json: bool = JSON_OUTPUT) -> None:
    """
    Show the execution waves with their time metrics.

    Example:
        waveplan waves PLAN.md --json
    """
    try:
        graph = load_graph(plan_file)
        partition = topological_sort(graph)
        savings = calculate_time_savings(graph, partition)
        critical = calculate_critical_path(graph, partition)
        score = calculate_parallelization_score(graph, partition)
    except (PlanFileError, CircularDependencyError) as e:
        _fail(str(e))

    if as_json:
        _print_json({
            "waves": partition,
            "parallelization_score": score,
            "time_savings": savings.model_dump(),
            "critical_path": critical.model_dump(),
        })
        return

    table = Table(title="Execution Waves")
    table.add_column("Wave", style="cyan")
    table.add_column("Task", style="bold")
    table.add_column("Name")
    table.add_column("Estimate", justify="right")
    table.add_column("Dependencies")

    for index, wave in enumerate(partition, start=1):
        for task_id in wave:
            task = graph[task_id]
            table.add_row(
                str(index),
                task_id,
                task.name,
                format_duration(task.estimated_time),
                ", ".join(task.dependencies) or "-",
            )

    console.print(table)
    console.print(
        f"Score: [bold]{score}/100[/bold]  "
        f"Sequential: {format_duration(savings.sequential)}  "
        f"Parallel: {format_duration(savings.parallel)}  "
        f"Saved: {format_duration(savings.saved)} ({savings.percentage:.1f}%)"
    )


@app.command(name="next")
def next_wave(
    plan_file: Path = PLAN_FILE,
    completed: list[str] | None = typer.Option(
        None,
        "--completed",
        "-c",
        help="Completed task ID (repeatable, or comma-separated).",
    ),
    as_json: bool = JSON_OUTPUT,
) -> None:
    """
    List the tasks that are ready once the given tasks are complete.

    Example:
        waveplan next PLAN.md -c TASK-001 -c TASK-002
    """
    try:
        graph = load_graph(plan_file)
    except PlanFileError as e:
        _fail(str(e))

    done = [item.strip() for value in completed or [] for item in value.split(",") if item.strip()]
    ready = get_next_wave(graph, done)

    if as_json:
        _print_json(ready)
    elif ready:
        for task_id in ready:
            typer.echo(f"{task_id}: {graph[task_id].name}")
    else:
        console.print("[dim]No tasks ready[/dim]")


if __name__ == "__main__":
    app()
