"""Domain models for tracked activities."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum


class ActivityCategory(StrEnum):
    """Fixed activity categories, in breakdown order."""

    COMMUTE = "commute"
    ELECTRICITY = "electricity"
    FOOD = "food"


class CategoryFilter(StrEnum):
    """Selector accepted by the activity filter."""

    ALL = "all"
    COMMUTE = "commute"
    ELECTRICITY = "electricity"
    FOOD = "food"


@dataclass(frozen=True)
class CommuteDetails:
    """Commute-specific activity fields."""

    distance: float | None
    transport_mode: str | None


@dataclass(frozen=True)
class FoodDetails:
    """Food-specific activity fields."""

    food_type: str | None
    quantity: float | None
    unit: str | None


@dataclass(frozen=True)
class ElectricityDetails:
    """Electricity-specific activity fields."""

    energy_consumed: float | None
    energy_unit: str | None


ActivityDetails = CommuteDetails | FoodDetails | ElectricityDetails


@dataclass(frozen=True)
class Activity:
    """A logged activity with its computed emissions in kg CO2e.

    ``activity_type`` keeps the raw value reported by the store so that
    unrecognized types survive parsing; ``details`` is ``None`` for them.
    """

    id: str
    activity_type: str
    date: date
    created_at: datetime
    co2e: float | None
    notes: str | None = None
    details: ActivityDetails | None = None

    @property
    def category(self) -> ActivityCategory | None:
        """Return the matching category, ignoring case."""
        try:
            return ActivityCategory(self.activity_type.lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class PeriodEmission:
    """Pre-aggregated emissions total for one calendar day."""

    date: str
    co2e: float | None


def treat_missing_as_zero(value: float | None) -> float:
    """Coerce a missing numeric value to zero."""
    if value is None:
        return 0.0
    return float(value)
