"""Wall clock bound to the timezone that decides the goal year."""

from collections.abc import Callable
from datetime import datetime, timezone, tzinfo

from domain.services.year_progress import YearProgress, current_year, year_progress


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Clock:
    """Reads "now" once per call; tests pass a fixed ``now`` function."""

    def __init__(
        self,
        tz: tzinfo = timezone.utc,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.tz = tz
        self._now = now

    def now(self) -> datetime:
        return self._now()

    def current_year(self) -> int:
        """The year every read and every new goal is filed under."""
        return current_year(self._now(), self.tz)

    def year_progress(self, year: int | None = None) -> YearProgress:
        now = self._now()
        return year_progress(now, year if year is not None else current_year(now, self.tz), self.tz)
