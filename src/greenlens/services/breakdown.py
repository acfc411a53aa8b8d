"""Per-category emissions breakdown."""

from collections.abc import Iterable

from greenlens.domain.activities import (
    Activity,
    ActivityCategory,
    treat_missing_as_zero,
)
from greenlens.domain.history import CategoryTotal
from greenlens.services.stats import round_half_away


def category_breakdown(
    activities: Iterable[Activity], total_co2: float
) -> dict[ActivityCategory, CategoryTotal]:
    """Return totals and percentages for every category.

    ``total_co2`` is the overall total of the unfiltered activity set, so a
    filtered input still reports its share of everything.
    """
    totals = dict.fromkeys(ActivityCategory, 0.0)
    for activity in activities:
        category = activity.category
        if category is not None:
            totals[category] += treat_missing_as_zero(activity.co2e)

    return {
        category: CategoryTotal(
            category=category,
            total=total,
            percent=_percent_of(total, total_co2),
        )
        for category, total in totals.items()
    }


def _percent_of(value: float, total: float) -> float:
    if total == 0:
        return 0.0
    return min(round_half_away(value / total * 100, places=1), 100.0)
