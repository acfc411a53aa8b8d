"""CSV export of activity history."""

import csv
import io
from collections.abc import Iterable

from greenlens.domain.activities import Activity
from greenlens.services.export_rows import activity_row

CSV_HEADERS = ["Date", "Category", "Type", "Value", "Unit", "CO2e (kg)", "Notes"]


def export_csv(activities: Iterable[Activity]) -> str:
    """Serialize activities to CSV text with every field quoted.

    Rows are separated by ``\\n`` and the text has no trailing newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for activity in activities:
        row = activity_row(activity)
        writer.writerow(
            [row.date, row.category, row.type, row.value, row.unit, row.co2e, row.notes]
        )
    return buffer.getvalue().removesuffix("\n")
