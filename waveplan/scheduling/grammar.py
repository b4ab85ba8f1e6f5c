"""Declarative grammar for task declarations in plan documents.

The grammar describes how a task heading and its fields look. It holds
the only format knowledge in the scheduling package, so a new heading
style or field label only needs a new ``PlanGrammar``. The parser and
the graph algorithms stay unchanged.

Example:
    >>> grammar = PlanGrammar(heading_marker=r"#{2,3}", time_label="Effort")
    >>> compiled = grammar.compile()
    >>> bool(compiled.heading.match("## T001: Setup"))
    True
"""

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Emphasis that may wrap a label or an id: **bold** or __bold__
_EMPHASIS = r"(?:\*\*|__)?"


@dataclass(frozen=True)
class CompiledGrammar:
    """Compiled regular expressions for a PlanGrammar."""

    heading: re.Pattern[str]
    any_heading: re.Pattern[str]
    task_id: re.Pattern[str]
    dependencies_field: re.Pattern[str]
    time_field: re.Pattern[str]
    none_markers: frozenset[str]


class PlanGrammar(BaseModel):
    """Description of the task declaration format.

    Attributes:
        heading_marker: Regex for the heading prefix (e.g. ``###``).
        task_id_pattern: Regex matching one task identifier.
        dependencies_label: Label introducing the dependency list.
        time_label: Label introducing the time estimate.
        none_markers: Values meaning "no dependencies" (case-insensitive).
    """

    model_config = ConfigDict(frozen=True)

    heading_marker: str = Field(
        default=r"#{1,6}",
        description="Regex for the heading prefix",
    )
    task_id_pattern: str = Field(
        default=r"TASK-\d+(?:\.\d+)*|T\d{3}",
        description="Regex matching a task identifier",
    )
    dependencies_label: str = Field(
        default="Dependencies",
        min_length=1,
        description="Label of the dependencies field",
    )
    time_label: str = Field(
        default="Estimated Time",
        min_length=1,
        description="Label of the estimated time field",
    )
    none_markers: list[str] = Field(
        default_factory=lambda: ["none"],
        description="Dependency values that mean no dependencies",
    )

    @field_validator("heading_marker", "task_id_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Ensure the pattern is a valid, non-empty regex."""
        if not v:
            raise ValueError("pattern must not be empty")
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression {v!r}: {e}") from e
        return v

    def compile(self) -> CompiledGrammar:
        """Compile the grammar into regular expressions.

        Returns:
            CompiledGrammar ready for line matching.
        """
        task_id = f"(?:{self.task_id_pattern})"
        # An id ends at anything but a word char, a dash, or ".<digit>"
        id_end = r"(?![\w-]|\.\d)"

        heading = re.compile(
            rf"^\s*(?:{self.heading_marker})\s+{_EMPHASIS}(?P<task_id>{task_id}){id_end}"
            rf"{_EMPHASIS}[\s:.\-–—]*(?P<title>.*?)\s*$"
        )
        any_heading = re.compile(rf"^\s*(?:{self.heading_marker})\s")

        return CompiledGrammar(
            heading=heading,
            any_heading=any_heading,
            task_id=re.compile(rf"{task_id}{id_end}"),
            dependencies_field=self._field(self.dependencies_label),
            time_field=self._field(self.time_label),
            none_markers=frozenset(m.strip().lower() for m in self.none_markers),
        )

    @staticmethod
    def _field(label: str) -> re.Pattern[str]:
        # Matches "Label: v", "**Label**: v", "**Label:** v", "- **Label**: v"
        return re.compile(
            rf"^\s*(?:[-*+]\s+)?{_EMPHASIS}{re.escape(label)}{_EMPHASIS}\s*:"
            rf"{_EMPHASIS}\s*(?P<value>.*?)\s*$",
            re.IGNORECASE,
        )
