"""Tests for the seven-day window."""

from datetime import date, timedelta

from greenlens.domain.activities import PeriodEmission
from greenlens.services.window import (
    build_window,
    build_window_from_activities,
    chart_series,
)
from tests.conftest import make_activity

TODAY = date(2024, 1, 2)


def test_window_has_seven_consecutive_days_ending_today() -> None:
    window = build_window(TODAY)

    assert len(window) == 7
    assert window[-1].date == TODAY
    assert window[0].date == date(2023, 12, 27)
    for previous, current in zip(window, window[1:], strict=False):
        assert current.date - previous.date == timedelta(days=1)
    assert all(bucket.co2e == 0 for bucket in window)


def test_window_defaults_to_current_day() -> None:
    window = build_window()

    assert window[-1].date == date.today()


def test_window_merges_external_totals() -> None:
    window = build_window(
        TODAY,
        [
            PeriodEmission(date="2024-01-01", co2e=5),
            PeriodEmission(date="2024-01-02", co2e=3),
        ],
    )

    by_day = {bucket.date.isoformat(): bucket.co2e for bucket in window}
    assert by_day["2024-01-01"] == 5
    assert by_day["2024-01-02"] == 3
    assert sum(by_day.values()) == 8


def test_window_first_duplicate_wins_and_outside_dates_are_ignored() -> None:
    window = build_window(
        TODAY,
        [
            PeriodEmission(date="2024-01-02", co2e=4),
            PeriodEmission(date="2024-01-02", co2e=9),
            PeriodEmission(date="2023-12-01", co2e=100),
            PeriodEmission(date="2024-01-03", co2e=100),
            PeriodEmission(date="2023-12-30", co2e=None),
        ],
    )

    assert window[-1].co2e == 4
    assert sum(bucket.co2e for bucket in window) == 4


def test_window_from_activities_sums_per_date() -> None:
    activities = [
        make_activity("a", "food", date(2024, 1, 1), 2.5),
        make_activity("b", "commute", date(2024, 1, 1), 1.5),
        make_activity("c", "electricity", date(2024, 1, 2), None),
        make_activity("d", "food", date(2023, 11, 1), 50),
    ]

    window = build_window_from_activities(activities, TODAY)

    assert window[-2].co2e == 4.0
    assert window[-1].co2e == 0.0
    assert sum(bucket.co2e for bucket in window) == 4.0


def test_chart_series_uses_weekday_labels() -> None:
    window = build_window(TODAY, [PeriodEmission(date="2024-01-01", co2e=5)])

    series = chart_series(window)

    assert series.labels == ["Wed", "Thu", "Fri", "Sat", "Sun", "Mon", "Tue"]
    assert series.values == [0, 0, 0, 0, 0, 5, 0]
