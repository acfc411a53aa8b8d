"""History service that ties fetching, aggregation and export together."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Protocol
from zoneinfo import ZoneInfo

import httpx

from greenlens.domain.activities import Activity, CategoryFilter, PeriodEmission
from greenlens.domain.history import HistoryReport, Window
from greenlens.services.breakdown import category_breakdown
from greenlens.services.csv_export import export_csv
from greenlens.services.equivalents import footprint_equivalents
from greenlens.services.export_rows import export_filename
from greenlens.services.filters import filter_activities
from greenlens.services.pdf_export import (
    LIGHT_THEME,
    PdfLayout,
    ReportTheme,
    render_pdf,
)
from greenlens.services.stats import compute_stats
from greenlens.services.window import (
    WINDOW_DAYS,
    build_window,
    build_window_from_activities,
    chart_series,
)

if TYPE_CHECKING:
    from greenlens.adapters.activity_payloads import ActivityInput

logger = logging.getLogger(__name__)


class ActivityStore(Protocol):
    """External store holding activity records."""

    async def list_activities(
        self, limit: int = 1000, activity_type: str | None = None
    ) -> list[Activity]:
        """Return stored activities, optionally of one type."""

    async def create_activity(self, activity: "ActivityInput") -> Activity:
        """Create an activity and return it."""

    async def delete_activity(self, activity_id: str) -> bool:
        """Delete an activity and return whether it succeeded."""


class PeriodEmissionsSource(Protocol):
    """External feed of pre-aggregated emissions per period."""

    async def get_emissions_by_period(
        self, period: str = "day", days: int = 7
    ) -> list[PeriodEmission]:
        """Return per-period emission totals."""


@dataclass(frozen=True)
class ActivityChange:
    """Notification sent to subscribers after a store mutation."""

    kind: str
    activity_id: str


ChangeListener = Callable[[ActivityChange], None]


@dataclass
class HistoryService:
    """Service that builds history reports and exports."""

    store: ActivityStore
    emissions_source: PeriodEmissionsSource
    fetch_limit: int = 1000
    timezone_name: str = "UTC"
    theme: ReportTheme = LIGHT_THEME
    layout: PdfLayout = field(default_factory=PdfLayout)
    _listeners: list[ChangeListener] = field(default_factory=list, repr=False)

    def today(self) -> date:
        """Return today's date in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()

    async def load(
        self,
        category: CategoryFilter = CategoryFilter.ALL,
        today: date | None = None,
    ) -> HistoryReport:
        """Fetch activities and the period feed, then build a report."""
        activities = await self.store.list_activities(limit=self.fetch_limit)
        emissions = await self.emissions_source.get_emissions_by_period(
            "day", WINDOW_DAYS
        )
        resolved_today = today or self.today()
        window = build_window(resolved_today, emissions)
        logger.info(
            "Loaded %d activities and %d period totals",
            len(activities),
            len(emissions),
        )
        return self.report_from(activities, window, category, resolved_today)

    def report_from(
        self,
        activities: Sequence[Activity],
        window: Window,
        category: CategoryFilter = CategoryFilter.ALL,
        today: date | None = None,
    ) -> HistoryReport:
        """Build a report from already fetched data."""
        all_activities = list(activities)
        filtered = filter_activities(all_activities, category)
        stats = compute_stats(all_activities, window)
        return HistoryReport(
            today=today or self.today(),
            category=category,
            activities=all_activities,
            filtered=filtered,
            window=window,
            stats=stats,
            breakdown=category_breakdown(filtered, stats.total_co2),
            chart=chart_series(window),
            equivalents=footprint_equivalents(stats.total_co2),
        )

    def without_activity(
        self, report: HistoryReport, activity_id: str
    ) -> HistoryReport:
        """Recompute a report after an activity was removed.

        The period feed is not fetched again; the window is rebuilt from the
        remaining activities instead.
        """
        remaining = [a for a in report.activities if a.id != activity_id]
        window = build_window_from_activities(remaining, report.today)
        return self.report_from(remaining, window, report.category, report.today)

    async def create_activity(self, activity: "ActivityInput") -> Activity:
        """Create an activity in the store and notify subscribers."""
        created = await self.store.create_activity(activity)
        self._notify(ActivityChange(kind="created", activity_id=created.id))
        return created

    async def delete_activity(self, activity_id: str) -> bool:
        """Delete an activity in the store and notify subscribers on success."""
        try:
            deleted = await self.store.delete_activity(activity_id)
        except (httpx.HTTPError, ValueError):
            logger.exception("Failed to delete activity %s", activity_id)
            return False
        if not deleted:
            logger.warning("Store refused to delete activity %s", activity_id)
            return False
        self._notify(ActivityChange(kind="deleted", activity_id=activity_id))
        return True

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener and return a function removing it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def csv_export(self, report: HistoryReport) -> tuple[str, str]:
        """Return the CSV filename and text for a report."""
        return export_filename("csv", self.today()), export_csv(report.filtered)

    def pdf_export(
        self, report: HistoryReport, theme: ReportTheme | None = None
    ) -> tuple[str, bytes]:
        """Return the PDF filename and bytes for a report."""
        exported_on = self.today()
        content = render_pdf(
            report.filtered,
            report.stats,
            theme=theme or self.theme,
            layout=self.layout,
            generated_on=exported_on,
        )
        return export_filename("pdf", exported_on), content

    def _notify(self, change: ActivityChange) -> None:
        for listener in list(self._listeners):
            listener(change)
