"""Derived protein progress values."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProteinProgress:
    """Protein totals for a day relative to its goal."""

    goal: float
    total: float
    remaining: float
    percent: float

    @property
    def goal_reached(self) -> bool:
        """Return True once the goal has been met."""
        return self.total >= self.goal
