"""Plan parser - extracts a task graph from semi-structured plan text.

Task blocks look like this::

    ### TASK-001: Database Schema
    **Dependencies**: None
    **Estimated Time**: 2 hours

    Create database schema for users and products.

Parsing is best-effort. Missing or malformed optional fields fall back
to defaults (no dependencies, zero minutes) and never raise.
"""

import math
import re

from loguru import logger

from waveplan.scheduling.grammar import CompiledGrammar, PlanGrammar
from waveplan.scheduling.models import TaskGraph, TaskNode

TIME_AMOUNT = re.compile(
    r"(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>hours?|hrs?|h|minutes?|mins?|m)(?![a-z])",
    re.IGNORECASE,
)

# "(...)" note, or an unclosed "(..." running to the end of the value
NOTE = re.compile(r"\s*\([^)]*\)?")


def strip_notes(value: str) -> str:
    """
    Remove parenthetical notes from a field value.

    Example:
        >>> strip_notes("TASK-001 (needs schema, seed data), TASK-003")
        'TASK-001, TASK-003'
    """
    return NOTE.sub("", value)


class PlanParser:
    """
    Parse plan documents into TaskGraph objects.

    Example:
        >>> parser = PlanParser()
        >>> graph = parser.parse(plan_text)
        >>> graph["TASK-002"].dependencies
        ['TASK-001']
    """

    def __init__(self, grammar: PlanGrammar | None = None) -> None:
        """
        Initialize the parser.

        Args:
            grammar: Declaration format. Uses the default grammar if not provided.
        """
        self.grammar = grammar or PlanGrammar()
        self._compiled: CompiledGrammar = self.grammar.compile()

    def parse(self, text: str) -> TaskGraph:
        """
        Parse plan text into a task graph.

        Args:
            text: Plan document content.

        Returns:
            TaskGraph in declaration order. Empty if no task headings are found.
        """
        g = self._compiled
        blocks: dict[str, dict] = {}
        current: dict | None = None

        for line in text.splitlines():
            heading = g.heading.match(line)
            if heading:
                task_id = heading.group("task_id")
                if task_id in blocks:
                    logger.warning(f"Duplicate declaration of {task_id} ignored")
                    current = None
                    continue
                current = {
                    "id": task_id,
                    "name": heading.group("title").strip("*_ ").strip(),
                    "dependencies": [],
                    "estimated_time": 0,
                    "description": [],
                }
                blocks[task_id] = current
                continue

            if g.any_heading.match(line):
                # Any other heading closes the current task block
                current = None
                continue

            if current is None:
                continue

            deps_field = g.dependencies_field.match(line)
            if deps_field:
                current["dependencies"] = self.parse_dependencies(deps_field.group("value"))
                continue

            time_field = g.time_field.match(line)
            if time_field:
                current["estimated_time"] = parse_estimated_time(time_field.group("value"))
                continue

            if line.strip():
                current["description"].append(line.strip())

        tasks = [
            TaskNode(**{**block, "description": "\n".join(block["description"])})
            for block in blocks.values()
        ]
        for task in tasks:
            logger.debug(
                f"Parsed {task.id}: deps={task.dependencies} time={task.estimated_time}m"
            )
        logger.info(f"Parsed {len(tasks)} tasks from plan")

        return TaskGraph.from_tasks(tasks)

    def parse_dependencies(self, value: str) -> list[str]:
        """
        Parse a dependencies field value.

        Args:
            value: Text after the label, e.g. "TASK-001 (needs schema), TASK-003".

        Returns:
            Dependency IDs in order of first appearance.

        Example:
            >>> PlanParser().parse_dependencies("TASK-001 (needs database)")
            ['TASK-001']
        """
        g = self._compiled
        # Notes may contain commas: "TASK-001 (needs schema, seed data)"
        value = strip_notes(value)
        if value.strip(" .*_`").lower() in g.none_markers:
            return []

        deps: list[str] = []
        for entry in value.split(","):
            entry = entry.strip(" \t*_`.")
            if not entry:
                continue
            match = g.task_id.search(entry)
            if match is None:
                logger.warning(f"Ignoring dependency entry without a task id: {entry!r}")
                continue
            if match.group(0) not in deps:
                deps.append(match.group(0))
        return deps


def parse_estimated_time(value: str) -> int:
    """
    Parse an estimated time value into whole minutes.

    Every amount in the value is summed, so "1 hour 30 minutes" is 90.
    Amounts inside parentheses restate the estimate and are skipped, so
    "2 hours (120 minutes)" is 120. Fractional totals are rounded down.

    Args:
        value: e.g. "2 hours", "30 minutes", "1.5 hours", "45 min".

    Returns:
        Minutes, or 0 when no amount is recognized.

    Example:
        >>> parse_estimated_time("1.5 hours")
        90
    """
    total = 0.0
    for match in TIME_AMOUNT.finditer(strip_notes(value)):
        amount = float(match.group("amount"))
        if match.group("unit").lower().startswith("h"):
            total += amount * 60
        else:
            total += amount
    # 2.3 * 60 is 137.99999999999997 in binary floating point
    return math.floor(round(total, 6))


def parse_dependency_graph(text: str, grammar: PlanGrammar | None = None) -> TaskGraph:
    """
    Convenience function to parse plan text.

    Args:
        text: Plan document content.
        grammar: Optional declaration format.

    Returns:
        TaskGraph of the declared tasks.

    Example:
        >>> graph = parse_dependency_graph(plan_text)
        >>> len(graph)
        4
    """
    return PlanParser(grammar).parse(text)
