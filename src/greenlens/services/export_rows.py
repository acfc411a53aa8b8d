"""Row mapping shared by the CSV and PDF exporters."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from greenlens.domain.activities import (
    Activity,
    CommuteDetails,
    ElectricityDetails,
    FoodDetails,
    treat_missing_as_zero,
)

EXPORT_PREFIX = "GreenLens_History"


@dataclass(frozen=True)
class ExportRow:
    """Stringified export fields for one activity."""

    date: str
    category: str
    type: str
    value: str
    unit: str
    co2e: str
    notes: str

    def table_cells(self) -> list[str]:
        """Return the six cells shown in the PDF table."""
        return [self.date, self.category, self.type, self.value, self.unit, self.co2e]


def activity_row(activity: Activity) -> ExportRow:
    """Map an activity to its export fields."""
    kind, value, unit = _details_fields(activity)
    return ExportRow(
        date=format_locale_date(activity.created_at),
        category=activity.activity_type or "",
        type=kind,
        value=value,
        unit=unit,
        co2e=f"{treat_missing_as_zero(activity.co2e):.2f}",
        notes=activity.notes or "",
    )


def format_locale_date(value: datetime | date) -> str:
    """Render a date the way an en-US locale prints it, e.g. ``1/2/2024``."""
    return f"{value.month}/{value.day}/{value.year}"


def format_number(value: float | None) -> str:
    """Render a number in plain notation without a trailing ``.0``."""
    if value is None:
        return ""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return format(Decimal(repr(number)), "f")


def export_filename(extension: str, exported_on: date | None = None) -> str:
    """Return the export filename for the given day."""
    day = exported_on or date.today()
    return f"{EXPORT_PREFIX}_{day.isoformat()}.{extension}"


def _details_fields(activity: Activity) -> tuple[str, str, str]:
    details = activity.details
    if isinstance(details, CommuteDetails):
        return details.transport_mode or "", format_number(details.distance), "km"
    if isinstance(details, FoodDetails):
        return (
            details.food_type or "",
            format_number(details.quantity),
            details.unit or "",
        )
    if isinstance(details, ElectricityDetails):
        return (
            "Electricity",
            format_number(details.energy_consumed),
            details.energy_unit or "",
        )
    return "", "", ""
