"""Execution plan rendering."""

from waveplan.scheduling.metrics import (
    calculate_critical_path,
    calculate_parallelization_score,
    calculate_time_savings,
)
from waveplan.scheduling.models import TaskGraph
from waveplan.scheduling.scheduler import topological_sort
from waveplan.scheduling.validator import validate_dependencies

BANNER = "═" * 43


def format_duration(minutes: int) -> str:
    """
    Format minutes as a short duration.

    Example:
        >>> format_duration(150)
        '2h 30m'
    """
    if minutes < 60:
        return f"{minutes}m"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m" if mins else f"{hours}h"


def generate_execution_plan(graph: TaskGraph) -> str:
    """
    Generate a human-readable execution plan.

    Never raises. A cyclic graph renders the validation errors in place
    of the waves.

    Args:
        graph: Task graph to describe.

    Returns:
        Multi-line plan summary.
    """
    lines = [BANNER, "Parallel Execution Plan", BANNER, ""]
    report = validate_dependencies(graph)

    if report.cycles:
        lines.extend([
            f"Total Tasks: {len(graph)}",
            "",
            "Cannot build execution plan:",
            *[f"  - {error}" for error in report.errors],
            "",
        ])
        return "\n".join(lines)

    waves = topological_sort(graph)
    savings = calculate_time_savings(graph, waves)
    critical = calculate_critical_path(graph, waves)

    lines.extend([
        f"Total Tasks: {len(graph)}",
        f"Execution Waves: {len(waves)}",
        f"Parallelization Score: {calculate_parallelization_score(graph, waves)}/100",
        "",
    ])

    if not waves:
        lines.extend(["No tasks found.", ""])
        return "\n".join(lines)

    lines.extend([
        "Time Estimates:",
        f"  Sequential: {format_duration(savings.sequential)}",
        f"  Parallel: {format_duration(savings.parallel)}",
        f"  Time Saved: {format_duration(savings.saved)} ({savings.percentage:.1f}%)",
        f"  Critical Path: {' -> '.join(critical.task_ids)} "
        f"({format_duration(critical.total_minutes)})",
        "",
        "Execution Waves:",
        "",
    ])

    for index, wave in enumerate(waves, start=1):
        label = "task in parallel" if len(wave) == 1 else "tasks in parallel"
        lines.append(f"Wave {index} ({len(wave)} {label}):")
        for task_id in wave:
            task = graph[task_id]
            title = f": {task.name}" if task.name else ""
            lines.append(f"  - {task_id}{title} [{format_duration(task.estimated_time)}]")
        lines.append("")

    if report.errors:
        lines.extend(["Warnings:", *[f"  - {error}" for error in report.errors], ""])

    return "\n".join(lines)
