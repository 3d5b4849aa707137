"""Summary statistics over a collection of goals."""

from collections.abc import Iterable
from dataclasses import dataclass

from domain.entities.goal import Goal


@dataclass(frozen=True, slots=True)
class GoalSummary:
    """Read-only value object shown on the dashboard and the public profile."""

    total: int
    completed: int
    overall_progress: int


def summarize(goals: Iterable[Goal]) -> GoalSummary:
    """Count goals, count completed goals and average their progress.

    The mean is rounded half-up to a whole percentage (2.5 -> 3), using
    integer arithmetic so the result never depends on float representation.
    An empty collection has an overall progress of 0.
    """
    total = 0
    completed = 0
    progress_sum = 0
    for goal in goals:
        total += 1
        progress_sum += goal.progress
        if goal.is_completed:
            completed += 1

    if total == 0:
        return GoalSummary(total=0, completed=0, overall_progress=0)

    # floor(sum / total + 1/2)
    overall = (2 * progress_sum + total) // (2 * total)
    return GoalSummary(total=total, completed=completed, overall_progress=overall)
