"""Year-progress clock: how much of a calendar year has elapsed."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR


@dataclass(frozen=True, slots=True)
class YearProgress:
    """Elapsed share of a year plus the elapsed time split into units."""

    year: int
    percent: float
    days: int
    hours: int
    minutes: int
    seconds: int

    @property
    def display(self) -> str:
        return format_percent(self.percent)


def year_window(year: int, tz: tzinfo = timezone.utc) -> tuple[datetime, datetime]:
    """First and last millisecond of ``year`` in ``tz``."""
    start = datetime(year, 1, 1, tzinfo=tz)
    end = datetime(year, 12, 31, 23, 59, 59, 999000, tzinfo=tz)
    return start, end


def _aware(moment: datetime) -> datetime:
    # Naive datetimes are taken to be UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _elapsed(later: datetime, earlier: datetime) -> timedelta:
    """Real time between two aware datetimes, whatever their zones.

    Works on wall-clock differences and UTC offsets only, so it never has to
    build a datetime outside years 1..9999 (Jan 1 of year 1 east of UTC, or
    Dec 31 of 9999 west of it, has no UTC representation).
    """
    wall = later.replace(tzinfo=None) - earlier.replace(tzinfo=None)
    return wall - (later.utcoffset() - earlier.utcoffset())


def year_progress(now: datetime, year: int, tz: tzinfo = timezone.utc) -> YearProgress:
    """Compute how far ``now`` is through ``year``.

    The result is exactly 0 before the year starts and exactly 100 once its
    last millisecond has been reached. Durations are measured between real
    instants, so days are always 24 hours long.
    """
    start, end = year_window(year, tz)
    span = _elapsed(end, start)
    elapsed = min(max(_elapsed(_aware(now), start), timedelta(0)), span)

    percent = 100.0 if elapsed == span else (elapsed / span) * 100

    elapsed_ms = elapsed // timedelta(milliseconds=1)
    days, rest = divmod(elapsed_ms, _MS_PER_DAY)
    hours, rest = divmod(rest, _MS_PER_HOUR)
    minutes, rest = divmod(rest, _MS_PER_MINUTE)
    seconds = rest // _MS_PER_SECOND

    return YearProgress(
        year=year,
        percent=percent,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
    )


def current_year(now: datetime, tz: tzinfo = timezone.utc) -> int:
    """The calendar year ``now`` falls in, as seen from ``tz``."""
    return _aware(now).astimezone(tz).year


def format_percent(value: float) -> str:
    """Six significant digits, trailing zeros kept: 0.00000, 45.1234, 100.000."""
    return f"{value:#.6g}"
