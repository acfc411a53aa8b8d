"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

import httpx
import pytest

from greenlens.adapters.activity_payloads import ActivityInput
from greenlens.config import Settings
from greenlens.containers import AppContainer
from greenlens.domain.activities import (
    Activity,
    CommuteDetails,
    ElectricityDetails,
    FoodDetails,
    PeriodEmission,
)
from greenlens.services.history import (
    ActivityStore,
    HistoryService,
    PeriodEmissionsSource,
)


def make_activity(  # noqa: PLR0913
    activity_id: str,
    activity_type: str,
    day: date,
    co2e: float | None,
    notes: str | None = None,
    created_at: datetime | None = None,
) -> Activity:
    """Build an activity with plausible details for its type."""
    details = None
    if activity_type == "commute":
        details = CommuteDetails(distance=12.5, transport_mode="car")
    elif activity_type == "food":
        details = FoodDetails(food_type="beef", quantity=0.5, unit="kg")
    elif activity_type == "electricity":
        details = ElectricityDetails(energy_consumed=30, energy_unit="kwh")
    return Activity(
        id=activity_id,
        activity_type=activity_type,
        date=day,
        created_at=created_at
        or datetime(day.year, day.month, day.day, 9, 30, tzinfo=UTC),
        co2e=co2e,
        notes=notes,
        details=details,
    )


@dataclass
class InMemoryActivityStore(ActivityStore):
    """In-memory activity store for tests."""

    activities: list[Activity] = field(default_factory=list)
    refuse_delete: bool = False
    fail_delete: bool = False
    limits: list[int] = field(default_factory=list)

    async def list_activities(
        self, limit: int = 1000, activity_type: str | None = None
    ) -> list[Activity]:
        self.limits.append(limit)
        matching = [
            a
            for a in self.activities
            if activity_type is None or a.activity_type == activity_type
        ]
        return matching[:limit]

    async def create_activity(self, activity: ActivityInput) -> Activity:
        created = make_activity(
            f"act-{len(self.activities) + 1}",
            str(activity.activity_type),
            activity.date,
            1.0,
            notes=activity.notes,
        )
        self.activities.append(created)
        return created

    async def delete_activity(self, activity_id: str) -> bool:
        if self.fail_delete:
            raise httpx.ConnectError("store unreachable")
        if self.refuse_delete:
            return False
        before = len(self.activities)
        self.activities = [a for a in self.activities if a.id != activity_id]
        return len(self.activities) < before


@dataclass
class FakePeriodEmissions(PeriodEmissionsSource):
    """Period feed returning fixed totals."""

    emissions: list[PeriodEmission] = field(default_factory=list)
    fail: bool = False

    async def get_emissions_by_period(
        self, period: str = "day", days: int = 7
    ) -> list[PeriodEmission]:
        if self.fail:
            raise httpx.ConnectError("feed unreachable")
        return list(self.emissions)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        activity_api_url="https://greenlens.test/api",
        activity_fetch_limit=500,
        timezone="UTC",
    )


@pytest.fixture
def activity_store() -> InMemoryActivityStore:
    return InMemoryActivityStore()


@pytest.fixture
def period_emissions() -> FakePeriodEmissions:
    return FakePeriodEmissions()


@pytest.fixture
def history_service(
    settings: Settings,
    activity_store: InMemoryActivityStore,
    period_emissions: FakePeriodEmissions,
) -> HistoryService:
    return HistoryService(
        store=activity_store,
        emissions_source=period_emissions,
        fetch_limit=settings.activity_fetch_limit,
        timezone_name=settings.timezone,
    )


@pytest.fixture
def container(settings: Settings, history_service: HistoryService) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        history_service=history_service,
        close_resources=close_resources,
    )
