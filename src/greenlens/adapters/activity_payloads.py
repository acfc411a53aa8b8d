"""Pydantic models for Activity Store payloads."""

from datetime import date, datetime, time

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from greenlens.domain.activities import (
    Activity,
    ActivityCategory,
    ActivityDetails,
    CommuteDetails,
    ElectricityDetails,
    FoodDetails,
    PeriodEmission,
)


class ActivityPayloadError(ValueError):
    """Raised when the store returns a payload that cannot be parsed."""


class ActivityInput(BaseModel):
    """Fields sent to the store when creating an activity."""

    model_config = ConfigDict(populate_by_name=True)

    activity_type: ActivityCategory = Field(alias="activityType")
    date: date
    notes: str | None = None
    distance: float | None = Field(default=None, ge=0)
    transport_mode: str | None = Field(default=None, alias="transportMode")
    food_type: str | None = Field(default=None, alias="foodType")
    quantity: float | None = Field(default=None, ge=0)
    unit: str | None = None
    energy_consumed: float | None = Field(
        default=None, ge=0, alias="energyConsumed"
    )
    energy_unit: str | None = Field(default=None, alias="energyUnit")


class ActivityPayload(BaseModel):
    """Activity as returned by the store."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    activity_type: str = Field(default="", alias="activityType")
    date: str
    created_at: datetime | None = Field(default=None, alias="createdAt")
    co2e: float | None = Field(default=None, ge=0)
    notes: str | None = None
    distance: float | None = None
    transport_mode: str | None = Field(default=None, alias="transportMode")
    food_type: str | None = Field(default=None, alias="foodType")
    quantity: float | None = None
    unit: str | None = None
    energy_consumed: float | None = Field(default=None, alias="energyConsumed")
    energy_unit: str | None = Field(default=None, alias="energyUnit")

    def to_domain(self) -> Activity:
        """Convert to the domain activity."""
        day = date.fromisoformat(self.date[:10])
        return Activity(
            id=self.id,
            activity_type=self.activity_type,
            date=day,
            created_at=self.created_at or datetime.combine(day, time.min),
            co2e=self.co2e,
            notes=self.notes,
            details=self._details(),
        )

    def _details(self) -> ActivityDetails | None:
        kind = self.activity_type.lower()
        if kind == ActivityCategory.COMMUTE:
            return CommuteDetails(
                distance=self.distance, transport_mode=self.transport_mode
            )
        if kind == ActivityCategory.FOOD:
            return FoodDetails(
                food_type=self.food_type, quantity=self.quantity, unit=self.unit
            )
        if kind == ActivityCategory.ELECTRICITY:
            return ElectricityDetails(
                energy_consumed=self.energy_consumed, energy_unit=self.energy_unit
            )
        return None


class PeriodEmissionPayload(BaseModel):
    """One day of the period emissions feed."""

    date: str
    co2e: float | None = None

    def to_domain(self) -> PeriodEmission:
        """Convert to the domain value."""
        return PeriodEmission(date=self.date[:10], co2e=self.co2e)


def parse_activities(rows: list[dict[str, object]]) -> list[Activity]:
    """Parse raw store rows into activities."""
    try:
        return [ActivityPayload.model_validate(row).to_domain() for row in rows]
    except (ValidationError, ValueError) as exc:
        raise ActivityPayloadError(f"Invalid activity payload: {exc}") from exc


def parse_period_emissions(rows: list[dict[str, object]]) -> list[PeriodEmission]:
    """Parse raw period feed rows."""
    try:
        return [PeriodEmissionPayload.model_validate(row).to_domain() for row in rows]
    except ValidationError as exc:
        raise ActivityPayloadError(f"Invalid period emissions payload: {exc}") from exc
