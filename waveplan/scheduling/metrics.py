"""Parallelization metrics for task graphs.

Provides:
- calculate_parallelization_score: 0-100 summary of parallel opportunity
- calculate_time_savings: sequential vs. wave-parallel duration
- calculate_critical_path: longest chain by cumulative estimated time

Each accepts waves already computed by topological_sort. Without them
the graph is scheduled first, raising CircularDependencyError on a cycle.
"""

from loguru import logger

from waveplan.scheduling.models import CriticalPath, TaskGraph, TimeSavings
from waveplan.scheduling.scheduler import topological_sort


def calculate_parallelization_score(
    graph: TaskGraph, waves: list[list[str]] | None = None
) -> int:
    """
    Score how much parallel work a graph offers.

    With N tasks in W waves the score is ``100 * (N - W) / (N - 1)``,
    rounded. One wave holding every task scores 100, and a chain with one
    task per wave scores 0. For a fixed N the score never decreases as
    the average wave width N / W grows. An empty graph scores 0 and a
    single task scores 100.

    Args:
        graph: Task graph to score.
        waves: Waves already computed for graph. Scheduled here if not provided.

    Returns:
        Integer score from 0 to 100.

    Raises:
        CircularDependencyError: If the graph contains a cycle.
    """
    total = len(graph)
    if total == 0:
        return 0

    if waves is None:
        waves = topological_sort(graph)
    if total == 1:
        return 100

    score = round(100 * (total - len(waves)) / (total - 1))
    logger.debug(f"Parallelization score {score} ({total} tasks, {len(waves)} waves)")
    return score


def calculate_time_savings(
    graph: TaskGraph, waves: list[list[str]] | None = None
) -> TimeSavings:
    """
    Estimate the time saved by running each wave in parallel.

    A wave takes as long as its slowest task and waves run one after
    another.

    Args:
        graph: Task graph with estimated times (missing estimates count as 0).
        waves: Waves already computed for graph. Scheduled here if not provided.

    Returns:
        TimeSavings with sequential, parallel and saved minutes.

    Raises:
        CircularDependencyError: If the graph contains a cycle.

    Example:
        >>> savings = calculate_time_savings(graph)
        >>> savings.sequential, savings.parallel, savings.saved
        (210, 120, 90)
    """
    sequential = sum(task.estimated_time for task in graph.tasks.values())
    if waves is None:
        waves = topological_sort(graph)
    parallel = sum(max(graph[task_id].estimated_time for task_id in wave) for wave in waves)
    saved = sequential - parallel

    return TimeSavings(
        sequential=sequential,
        parallel=parallel,
        saved=saved,
        percentage=(saved / sequential * 100) if sequential > 0 else 0.0,
    )


def calculate_critical_path(
    graph: TaskGraph, waves: list[list[str]] | None = None
) -> CriticalPath:
    """
    Find the critical path through the task graph.

    The critical path is the dependency chain with the largest total
    estimated time. It bounds how fast the plan can finish with
    unlimited parallelism. Ties go to the end task declared first and
    to the dependency listed first.

    Args:
        graph: Task graph to analyze.
        waves: Waves already computed for graph. Scheduled here if not provided.

    Returns:
        CriticalPath with task IDs from first to last and the total minutes.

    Raises:
        CircularDependencyError: If the graph contains a cycle.
    """
    if waves is None:
        waves = topological_sort(graph)

    finish: dict[str, int] = {}
    previous: dict[str, str | None] = {}

    for wave in waves:
        for task_id in wave:
            task = graph[task_id]
            best: str | None = None
            for dep in task.dependencies:
                if dep in finish and (best is None or finish[dep] > finish[best]):
                    best = dep
            finish[task_id] = task.estimated_time + (finish[best] if best is not None else 0)
            previous[task_id] = best

    if not finish:
        return CriticalPath()

    end: str | None = None
    for task_id in graph.task_ids:
        if end is None or finish[task_id] > finish[end]:
            end = task_id

    path: list[str] = []
    while end is not None:
        path.append(end)
        end = previous[end]

    return CriticalPath(task_ids=list(reversed(path)), total_minutes=finish[path[0]])
