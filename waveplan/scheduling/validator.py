"""Graph validation - referential integrity and cycle detection.

``validate_dependencies`` is the reporting entry point: it never raises
and collects every problem so callers can show them all at once.
"""

from loguru import logger

from waveplan.scheduling.models import TaskGraph, ValidationReport

# =============================================================================
# CYCLE DETECTION
# =============================================================================

UNVISITED, ON_STACK, DONE = 0, 1, 2


def detect_cycles(graph: TaskGraph) -> list[list[str]]:
    """
    Detect cycles in the dependency graph using depth-first search.

    Each back edge found during one full traversal yields one cycle: the
    part of the current DFS path from the revisited task to the task
    whose dependency closed the loop. References to unknown tasks are
    skipped.

    Args:
        graph: Task graph to inspect.

    Returns:
        List of cycle paths, empty for an acyclic graph.

    Example:
        >>> detect_cycles(TaskGraph.from_mapping({"a": {"dependencies": ["b"]},
        ...                                       "b": {"dependencies": ["a"]}}))
        [['a', 'b']]
    """
    state: dict[str, int] = {task_id: UNVISITED for task_id in graph.task_ids}
    cycles: list[list[str]] = []

    for root in graph.task_ids:
        if state[root] != UNVISITED:
            continue

        state[root] = ON_STACK
        path = [root]
        pending = [iter(graph[root].dependencies)]

        while pending:
            for dep in pending[-1]:
                if dep not in state:
                    continue  # Reported by validate_dependencies
                if state[dep] == ON_STACK:
                    cycles.append(path[path.index(dep):])
                elif state[dep] == UNVISITED:
                    state[dep] = ON_STACK
                    path.append(dep)
                    pending.append(iter(graph[dep].dependencies))
                    break
            else:
                state[path.pop()] = DONE
                pending.pop()

    if cycles:
        logger.debug(f"Found {len(cycles)} cycle(s): {cycles}")

    return cycles


def detect_circular_dependencies(graph: TaskGraph) -> list[str]:
    """
    Find one circular dependency.

    Args:
        graph: Task graph to inspect.

    Returns:
        Task IDs on the first detected cycle, or an empty list.
    """
    cycles = detect_cycles(graph)
    return cycles[0] if cycles else []


def format_cycle(cycle: list[str]) -> str:
    """Render a cycle as "A -> B -> A"."""
    return " -> ".join([*cycle, cycle[0]])


# =============================================================================
# VALIDATION
# =============================================================================


def validate_dependencies(graph: TaskGraph) -> ValidationReport:
    """
    Validate that all dependencies exist and that there are no cycles.

    Args:
        graph: Task graph to validate.

    Returns:
        ValidationReport listing every missing reference and every cycle.

    Example:
        >>> report = validate_dependencies(graph)
        >>> report.valid
        True
    """
    errors: list[str] = []

    for task_id, task in graph.tasks.items():
        for dep in task.dependencies:
            if dep not in graph:
                errors.append(f"Task {task_id} references non-existent task {dep}")

    cycles = detect_cycles(graph)
    for cycle in cycles:
        errors.append(f"Circular dependency detected: {format_cycle(cycle)}")

    if errors:
        logger.warning(f"Dependency validation found {len(errors)} error(s)")
    else:
        logger.debug(f"Dependency graph with {len(graph)} tasks is valid")

    return ValidationReport(errors=errors, cycles=cycles)
