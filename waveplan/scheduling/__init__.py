"""Task scheduling - plan text to validated, wave-partitioned task graphs.

This module provides the complete scheduling pipeline:
- Parsing (plan text -> task graph)
- Validation (missing references, cycles)
- Wave scheduling (task graph -> execution waves)
- Metrics (parallelization score, time savings, critical path)
- Rendering (human-readable execution plan)
- Incremental query (completed tasks -> next ready set)
"""

from waveplan.scheduling.grammar import PlanGrammar
from waveplan.scheduling.metrics import (
    calculate_critical_path,
    calculate_parallelization_score,
    calculate_time_savings,
)
from waveplan.scheduling.models import (
    CriticalPath,
    TaskGraph,
    TaskNode,
    TimeSavings,
    ValidationReport,
)
from waveplan.scheduling.parser import PlanParser, parse_dependency_graph, parse_estimated_time
from waveplan.scheduling.renderer import format_duration, generate_execution_plan
from waveplan.scheduling.scheduler import get_next_wave, topological_sort, wave_assignments
from waveplan.scheduling.validator import (
    detect_circular_dependencies,
    detect_cycles,
    validate_dependencies,
)

__all__ = [
    # Grammar
    "PlanGrammar",
    # Models
    "CriticalPath",
    "TaskGraph",
    "TaskNode",
    "TimeSavings",
    "ValidationReport",
    # Parser
    "PlanParser",
    "parse_dependency_graph",
    "parse_estimated_time",
    # Validation
    "detect_circular_dependencies",
    "detect_cycles",
    "validate_dependencies",
    # Scheduling
    "get_next_wave",
    "topological_sort",
    "wave_assignments",
    # Metrics
    "calculate_critical_path",
    "calculate_parallelization_score",
    "calculate_time_savings",
    # Rendering
    "format_duration",
    "generate_execution_plan",
]
