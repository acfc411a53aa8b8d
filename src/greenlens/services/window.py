"""Seven-day emissions window construction.

Dates are matched as ISO calendar-date strings without any timezone
arithmetic. Callers pick ``today`` in the timezone they report in.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from greenlens.domain.activities import Activity, PeriodEmission, treat_missing_as_zero
from greenlens.domain.history import ChartSeries, DailyBucket, Window

WINDOW_DAYS = 7
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def window_dates(today: date | None = None) -> list[date]:
    """Return the seven calendar dates ending at ``today``, oldest first."""
    end = today or date.today()
    return [end - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]


def build_window(
    today: date | None = None, emissions: Iterable[PeriodEmission] = ()
) -> Window:
    """Merge external per-day totals into a zero-filled seven-day window."""
    days = window_dates(today)
    totals: dict[str, float] = {}
    in_window = {day.isoformat() for day in days}
    for item in emissions:
        if item.date not in in_window or item.date in totals:
            continue
        totals[item.date] = treat_missing_as_zero(item.co2e)
    return tuple(
        DailyBucket(date=day, co2e=totals.get(day.isoformat(), 0.0)) for day in days
    )


def build_window_from_activities(
    activities: Iterable[Activity], today: date | None = None
) -> Window:
    """Build the window by summing activity emissions per calendar date."""
    days = window_dates(today)
    totals = {day.isoformat(): 0.0 for day in days}
    for activity in activities:
        key = activity.date.isoformat()
        if key in totals:
            totals[key] += treat_missing_as_zero(activity.co2e)
    return tuple(DailyBucket(date=day, co2e=totals[day.isoformat()]) for day in days)


def chart_series(window: Window) -> ChartSeries:
    """Return weekday labels and bucket values for charting."""
    return ChartSeries(
        labels=[WEEKDAY_LABELS[bucket.date.weekday()] for bucket in window],
        values=[bucket.co2e for bucket in window],
    )
