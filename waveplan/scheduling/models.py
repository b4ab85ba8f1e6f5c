"""Pydantic models for task scheduling.

This module defines the data structures shared by the scheduling
pipeline: task nodes, the id-keyed task graph, validation reports,
and the derived time metrics.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

# =============================================================================
# TASK NODES
# =============================================================================


class TaskNode(BaseModel):
    """A single task declared in a plan.

    Example:
        >>> task = TaskNode(
        ...     id="TASK-002",
        ...     name="User Model",
        ...     dependencies=["TASK-001"],
        ...     estimated_time=60,
        ... )
        >>> task.is_ready({"TASK-001"})
        True
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Task identifier, unique within a graph",
    )
    name: str = Field(
        default="",
        description="Human-readable task title",
    )
    dependencies: tuple[str, ...] = Field(
        default_factory=tuple,
        description="IDs of tasks that must complete first, in listed order",
    )
    estimated_time: int = Field(
        default=0,
        ge=0,
        description="Estimated duration in minutes",
    )
    description: str = Field(
        default="",
        description="Free text from the task block",
    )

    def is_ready(self, completed: set[str] | frozenset[str]) -> bool:
        """Check if all dependencies are satisfied.

        Args:
            completed: Set of completed task IDs.

        Returns:
            True if all dependencies are in completed.
        """
        return all(dep in completed for dep in self.dependencies)


# =============================================================================
# TASK GRAPH
# =============================================================================


class TaskGraph(BaseModel):
    """Id-keyed mapping of tasks, in declaration order.

    The graph is never mutated once built. Every scheduling operation
    takes it as input and returns new derived structures.

    Example:
        >>> graph = TaskGraph.from_mapping({
        ...     "TASK-001": {"dependencies": []},
        ...     "TASK-002": {"dependencies": ["TASK-001"]},
        ... })
        >>> graph.task_ids
        ['TASK-001', 'TASK-002']
        >>> graph.get_dependents("TASK-001")
        ['TASK-002']
    """

    model_config = ConfigDict(frozen=True)

    tasks: dict[str, TaskNode] = Field(
        default_factory=dict,
        description="Task ID -> TaskNode mapping",
    )

    @model_validator(mode="after")
    def check_keys_match_ids(self) -> "TaskGraph":
        """Ensure every key equals the id of its node."""
        for key, task in self.tasks.items():
            if key != task.id:
                raise ValueError(f"Key {key!r} does not match task id {task.id!r}")
        return self

    @classmethod
    def from_tasks(cls, tasks: Iterable[TaskNode]) -> "TaskGraph":
        """Build a graph from task nodes, keeping their order.

        Args:
            tasks: TaskNode objects with unique ids.

        Returns:
            TaskGraph keyed by task id.

        Raises:
            ValueError: If two tasks share an id.
        """
        nodes: dict[str, TaskNode] = {}
        for task in tasks:
            if task.id in nodes:
                raise ValueError(f"Duplicate task id: {task.id}")
            nodes[task.id] = task
        return cls(tasks=nodes)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, TaskNode | Mapping[str, Any]]) -> "TaskGraph":
        """Build a graph from an id-keyed mapping.

        Values may be TaskNode objects or plain dicts. A dict without an
        ``id`` takes its key, and missing fields take their defaults.

        Args:
            raw: Mapping of task id to node or node fields.

        Returns:
            TaskGraph with the same key order.
        """
        nodes: dict[str, TaskNode] = {}
        for task_id, value in raw.items():
            if isinstance(value, TaskNode):
                nodes[task_id] = value
            else:
                nodes[task_id] = TaskNode(**{"id": task_id, **value})
        return cls(tasks=nodes)

    def __len__(self) -> int:
        return len(self.tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.tasks

    def __getitem__(self, task_id: str) -> TaskNode:
        return self.tasks[task_id]

    @property
    def task_ids(self) -> list[str]:
        """Task IDs in declaration order."""
        return list(self.tasks)

    def get_task(self, task_id: str) -> TaskNode | None:
        """Get a task by ID.

        Args:
            task_id: Task identifier.

        Returns:
            TaskNode if found, None otherwise.
        """
        return self.tasks.get(task_id)

    def get_dependents(self, task_id: str) -> list[str]:
        """Get tasks that depend on this task.

        Args:
            task_id: Task identifier.

        Returns:
            List of task IDs that depend on this task.
        """
        return [tid for tid, task in self.tasks.items() if task_id in task.dependencies]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {tid: task.model_dump(mode="json") for tid, task in self.tasks.items()}


# =============================================================================
# DERIVED RESULTS
# =============================================================================


class ValidationReport(BaseModel):
    """Result of validating a task graph."""

    model_config = ConfigDict(frozen=True)

    errors: list[str] = Field(
        default_factory=list,
        description="Human-readable validation errors",
    )
    cycles: list[list[str]] = Field(
        default_factory=list,
        description="Cycle paths found, in traversal order",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        """True when no errors were found."""
        return not self.errors


class TimeSavings(BaseModel):
    """Sequential versus wave-parallel duration of a graph, in minutes."""

    model_config = ConfigDict(frozen=True)

    sequential: int = Field(default=0, ge=0, description="Sum of all estimates")
    parallel: int = Field(default=0, ge=0, description="Sum of per-wave maxima")
    saved: int = Field(default=0, ge=0, description="sequential - parallel")
    percentage: float = Field(default=0.0, ge=0, le=100, description="saved / sequential * 100")


class CriticalPath(BaseModel):
    """Longest dependency chain by cumulative estimated time."""

    model_config = ConfigDict(frozen=True)

    task_ids: list[str] = Field(default_factory=list)
    total_minutes: int = Field(default=0, ge=0)
