"""Exception hierarchy for waveplan."""


class WaveplanError(Exception):
    """Base exception for waveplan errors."""

    pass


class CircularDependencyError(WaveplanError, ValueError):
    """A task graph cannot be scheduled because it contains a cycle.

    Attributes:
        cycle: Task IDs on the cycle, in traversal order.
    """

    def __init__(self, cycle: list[str] | None = None) -> None:
        self.cycle = list(cycle or [])
        if self.cycle:
            path = " -> ".join([*self.cycle, self.cycle[0]])
            message = f"Circular dependency detected: {path}"
        else:
            message = "Circular dependency detected"
        super().__init__(message)


class PlanFileError(WaveplanError):
    """A plan file could not be read."""

    pass
