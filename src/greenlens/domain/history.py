"""Domain models for history reports."""

from dataclasses import dataclass
from datetime import date

from greenlens.domain.activities import Activity, ActivityCategory, CategoryFilter


@dataclass(frozen=True)
class DailyBucket:
    """Emissions total for one calendar day."""

    date: date
    co2e: float = 0.0


Window = tuple[DailyBucket, ...]


@dataclass(frozen=True)
class Stats:
    """Summary figures for a history view."""

    total_co2: float
    daily_average: float
    highest_day: float
    total_entries: int


@dataclass(frozen=True)
class CategoryTotal:
    """Emissions total and share of the overall total for a category."""

    category: ActivityCategory
    total: float
    percent: float


@dataclass(frozen=True)
class ChartSeries:
    """Labels and values for a daily emissions chart."""

    labels: list[str]
    values: list[float]


@dataclass(frozen=True)
class FootprintEquivalents:
    """Relatable equivalents for a CO2e total."""

    tonnes: float
    trees_per_year: int
    car_miles: int


@dataclass(frozen=True)
class HistoryReport:
    """A complete recomputation of the history view.

    ``activities`` is the full set behind the stats; ``filtered`` is the
    category-scoped subset that the breakdown and the exports use.
    """

    today: date
    category: CategoryFilter
    activities: list[Activity]
    filtered: list[Activity]
    window: Window
    stats: Stats
    breakdown: dict[ActivityCategory, CategoryTotal]
    chart: ChartSeries
    equivalents: FootprintEquivalents
