"""Summary statistics for the history view."""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from greenlens.domain.activities import Activity, treat_missing_as_zero
from greenlens.domain.history import Stats, Window

# Daily average always divides by the window length, populated or not.
DAILY_AVERAGE_DIVISOR = 7


def round_half_away(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals with halves going away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def total_co2e(activities: Sequence[Activity]) -> float:
    """Return the unrounded sum of activity emissions."""
    return sum(treat_missing_as_zero(activity.co2e) for activity in activities)


def compute_stats(activities: Sequence[Activity], window: Window) -> Stats:
    """Compute stats from the full activity set and a seven-day window.

    ``total_co2`` covers every activity, not only those inside the window.
    """
    daily = [treat_missing_as_zero(bucket.co2e) for bucket in window]
    daily_average = sum(daily) / DAILY_AVERAGE_DIVISOR if daily else 0.0
    highest_day = max(daily) if daily else 0.0
    return Stats(
        total_co2=round_half_away(total_co2e(activities)),
        daily_average=round_half_away(daily_average),
        highest_day=round_half_away(highest_day),
        total_entries=len(activities),
    )
