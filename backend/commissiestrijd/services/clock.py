from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone as dt_tz
from zoneinfo import ZoneInfo


def one_year_before(dt: datetime, years: int = 1) -> datetime:
    """Same wall-clock instant `years` calendar years earlier; Feb 29 falls back to Feb 28."""
    try:
        return dt.replace(year=dt.year - years)
    except ValueError:
        return dt.replace(year=dt.year - years, day=28)


def next_run_utc(now_utc: datetime, run_at: time, tz: ZoneInfo) -> datetime:
    """
    Next UTC instant at which the local wall clock of `tz` reads `run_at`.

    DST rules:
      - A nonexistent local time (spring forward) resolves to the instant zoneinfo
        maps it to, which lies after the gap.
      - An ambiguous local time (fall back) uses the first occurrence (fold=0).

    Examples:
        >>> from datetime import datetime, time, timezone
        >>> now = datetime(2025, 1, 10, 22, 30, tzinfo=timezone.utc)  # 23:30 in Amsterdam
        >>> next_run_utc(now, time(0, 0), ZoneInfo("Europe/Amsterdam")).isoformat()
        '2025-01-10T23:00:00+00:00'
    """
    local_now = now_utc.astimezone(tz)
    candidate = datetime.combine(local_now.date(), run_at, tzinfo=tz)
    if candidate.astimezone(dt_tz.utc) <= now_utc:
        candidate = datetime.combine(local_now.date() + timedelta(days=1), run_at, tzinfo=tz)
    # compare in UTC: same-tzinfo subtraction in Python ignores the offset change
    return candidate.astimezone(dt_tz.utc)


class Clock:
    """Wall clock bound to one IANA zone, passed to whatever needs local time."""

    def __init__(self, tz_name: str):
        self.tz_name = tz_name
        self.tz = ZoneInfo(tz_name)

    def utc_now(self) -> datetime:
        return datetime.now(dt_tz.utc)

    def local_now(self) -> datetime:
        return self.utc_now().astimezone(self.tz)

    def local_now_as_utc(self) -> datetime:
        # Submission timestamps keep the local wall-clock reading but are stored labelled UTC
        return self.local_now().replace(tzinfo=dt_tz.utc)

    def local_today(self) -> date:
        return self.local_now().date()

    def seconds_until(self, run_at: time) -> float:
        now = self.utc_now()
        return max(0.0, (next_run_utc(now, run_at, self.tz) - now).total_seconds())
