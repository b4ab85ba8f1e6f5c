"""Wave scheduler - partitions a task graph into parallel execution waves.

``topological_sort`` is the fail-fast entry point: a cyclic graph raises
CircularDependencyError instead of producing a partial schedule.
"""

from collections.abc import Iterable

from loguru import logger

from waveplan.core.exceptions import CircularDependencyError
from waveplan.scheduling.models import TaskGraph
from waveplan.scheduling.validator import detect_circular_dependencies

# =============================================================================
# WAVE CALCULATION
# =============================================================================


def topological_sort(graph: TaskGraph) -> list[list[str]]:
    """
    Partition tasks into execution waves using topological levels.

    Each round emits every unscheduled task whose dependencies were all
    emitted in earlier rounds. Tasks in the same wave can execute in
    parallel. Within a wave, declaration order is kept.

    Dependencies on tasks missing from the graph do not block
    scheduling. validate_dependencies reports them.

    Args:
        graph: Task graph to schedule.

    Returns:
        List of waves, where each wave is a list of task IDs.

    Raises:
        CircularDependencyError: If the graph contains a cycle.

    Example:
        >>> topological_sort(graph)
        [['TASK-001', 'TASK-002'], ['TASK-003']]
    """
    task_ids = graph.task_ids
    deps: dict[str, list[str]] = {}
    for task_id in task_ids:
        known = [d for d in graph[task_id].dependencies if d in graph]
        if len(known) != len(graph[task_id].dependencies):
            missing = [d for d in graph[task_id].dependencies if d not in graph]
            logger.warning(f"Task {task_id} has unknown dependencies: {missing}")
        deps[task_id] = known

    waves: list[list[str]] = []
    scheduled: set[str] = set()

    while len(scheduled) < len(task_ids):
        wave = [
            task_id
            for task_id in task_ids
            if task_id not in scheduled and all(d in scheduled for d in deps[task_id])
        ]

        if not wave:
            # Remaining tasks wait on each other
            remaining = [t for t in task_ids if t not in scheduled]
            cycle = detect_circular_dependencies(graph)
            logger.error(f"Cannot schedule remaining tasks {remaining}: cycle {cycle}")
            raise CircularDependencyError(cycle)

        waves.append(wave)
        scheduled.update(wave)

    for i, wave in enumerate(waves):
        logger.debug(f"Wave {i}: {len(wave)} tasks")
    logger.info(f"Organized {len(task_ids)} tasks into {len(waves)} waves")

    return waves


def wave_assignments(waves: list[list[str]]) -> dict[str, int]:
    """
    Map each task to the index of its wave.

    Args:
        waves: Output of topological_sort.

    Returns:
        Dictionary of task ID -> 0-based wave index.
    """
    return {task_id: index for index, wave in enumerate(waves) for task_id in wave}


# =============================================================================
# INCREMENTAL QUERY
# =============================================================================


def get_next_wave(graph: TaskGraph, completed_ids: Iterable[str] = ()) -> list[str]:
    """
    Get the tasks that are ready to run now.

    The caller tracks completion. Nothing is remembered between calls.

    Args:
        graph: Task graph being executed.
        completed_ids: IDs of tasks that have finished.

    Returns:
        IDs of incomplete tasks whose dependencies are all completed,
        in declaration order.

    Example:
        >>> get_next_wave(graph, ["TASK-001"])
        ['TASK-002', 'TASK-003']
    """
    completed = frozenset(completed_ids)
    return [
        task_id
        for task_id, task in graph.tasks.items()
        if task_id not in completed and task.is_ready(completed)
    ]
