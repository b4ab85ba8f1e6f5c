"""
waveplan - task-dependency scheduling for phased delivery plans.

Turns an implementation plan into a validated task graph, partitions it
into waves of parallel work, and measures what parallelism saves.
"""

__version__ = "0.1.0"

from waveplan.core.exceptions import CircularDependencyError, WaveplanError
from waveplan.scheduling import (
    PlanGrammar,
    TaskGraph,
    TaskNode,
    calculate_critical_path,
    calculate_parallelization_score,
    calculate_time_savings,
    detect_circular_dependencies,
    generate_execution_plan,
    get_next_wave,
    parse_dependency_graph,
    topological_sort,
    validate_dependencies,
)

__all__ = [
    "CircularDependencyError",
    "PlanGrammar",
    "TaskGraph",
    "TaskNode",
    "WaveplanError",
    "__version__",
    "calculate_critical_path",
    "calculate_parallelization_score",
    "calculate_time_savings",
    "detect_circular_dependencies",
    "generate_execution_plan",
    "get_next_wave",
    "parse_dependency_graph",
    "topological_sort",
    "validate_dependencies",
]
