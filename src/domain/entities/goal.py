"""Goal domain entities.

A goal is either a one-time goal (done or not) or a progress goal (0-100%).
Each variant stores only the state it owns and derives the other field, so a
goal can never be "completed at 37%".
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import ClassVar
from uuid import UUID, uuid4

from core.exceptions import ErrorCode, ValidationError

TITLE_MAX_LENGTH = 255
PROGRESS_MIN = 0
PROGRESS_MAX = 100


class GoalType(StrEnum):
    """How a goal's completion is tracked."""

    ONE_TIME = "one_time"
    PROGRESS = "progress"


def validate_progress(value: object) -> int:
    """Return ``value`` if it is an integer percentage, reject it otherwise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            "Progress must be an integer",
            ErrorCode.INVALID_PROGRESS,
            {"progress": value},
        )
    if not PROGRESS_MIN <= value <= PROGRESS_MAX:
        raise ValidationError(
            f"Progress must be between {PROGRESS_MIN} and {PROGRESS_MAX}",
            ErrorCode.INVALID_PROGRESS,
            {"progress": value},
        )
    return value


def validate_title(raw: str) -> str:
    """Strip a goal title and make sure something is left."""
    title = raw.strip()
    if not title:
        raise ValidationError("Goal title cannot be empty", ErrorCode.INVALID_TITLE)
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Goal title must be at most {TITLE_MAX_LENGTH} characters",
            ErrorCode.INVALID_TITLE,
        )
    return title


@dataclass
class _GoalBase:
    """Fields shared by every goal variant. Title, type and year never change."""

    goal_type: ClassVar[GoalType]

    user_id: UUID
    title: str
    year: int
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def _touch(self) -> None:
        self.updated_at = datetime.utcnow()


@dataclass
class OneTimeGoal(_GoalBase):
    """A goal that is either done or not done."""

    goal_type: ClassVar[GoalType] = GoalType.ONE_TIME

    is_completed: bool = False

    @property
    def progress(self) -> int:
        return PROGRESS_MAX if self.is_completed else PROGRESS_MIN

    def toggle(self) -> None:
        """Flip between incomplete (0%) and complete (100%)."""
        self.is_completed = not self.is_completed
        self._touch()


@dataclass
class ProgressGoal(_GoalBase):
    """A goal tracked as a whole-number percentage."""

    goal_type: ClassVar[GoalType] = GoalType.PROGRESS

    progress: int = 0

    @property
    def is_completed(self) -> bool:
        return self.progress >= PROGRESS_MAX

    def set_progress(self, progress: int) -> None:
        """Store a new percentage; out-of-range values are rejected, not clamped."""
        self.progress = validate_progress(progress)
        self._touch()

    def __post_init__(self) -> None:
        validate_progress(self.progress)
        super().__post_init__()


Goal = OneTimeGoal | ProgressGoal


def create_goal(user_id: UUID, title: str, goal_type: GoalType | str, year: int) -> Goal:
    """Build a brand-new goal; every goal starts at 0% and not completed."""
    clean_title = validate_title(title)
    try:
        kind = GoalType(goal_type)
    except ValueError:
        raise ValidationError(
            f"Unknown goal type: {goal_type}",
            details={"goal_type": str(goal_type)},
        ) from None

    if kind is GoalType.ONE_TIME:
        return OneTimeGoal(user_id=user_id, title=clean_title, year=year)
    return ProgressGoal(user_id=user_id, title=clean_title, year=year)
