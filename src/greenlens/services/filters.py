"""Category filtering for activity lists."""

from collections.abc import Sequence

from greenlens.domain.activities import Activity, CategoryFilter


def parse_selector(raw: str | None) -> CategoryFilter:
    """Parse a user-supplied category selector."""
    if raw is None or not raw.strip():
        return CategoryFilter.ALL
    return CategoryFilter(raw.strip().lower())


def filter_activities(
    activities: Sequence[Activity], selector: CategoryFilter | str
) -> list[Activity]:
    """Return activities of the selected category, keeping input order."""
    wanted = str(selector).lower()
    if wanted == CategoryFilter.ALL:
        return list(activities)
    return [
        activity for activity in activities if activity.activity_type.lower() == wanted
    ]
