"""Tests for the category breakdown."""

from datetime import date

from greenlens.domain.activities import ActivityCategory
from greenlens.services.breakdown import category_breakdown
from greenlens.services.filters import filter_activities
from greenlens.services.stats import round_half_away, total_co2e
from tests.conftest import make_activity

DAY = date(2024, 1, 2)


def test_breakdown_percent_of_total() -> None:
    activities = [
        make_activity("a", "commute", DAY, 10 / 3),
        make_activity("b", "food", DAY, 20 / 3),
    ]

    breakdown = category_breakdown(activities, 10)

    assert breakdown[ActivityCategory.COMMUTE].percent == 33.3
    assert breakdown[ActivityCategory.FOOD].percent == 66.7
    assert breakdown[ActivityCategory.ELECTRICITY].percent == 0


def test_breakdown_order_and_empty_input() -> None:
    breakdown = category_breakdown([], 0)

    assert list(breakdown) == [
        ActivityCategory.COMMUTE,
        ActivityCategory.ELECTRICITY,
        ActivityCategory.FOOD,
    ]
    assert all(entry.total == 0 and entry.percent == 0 for entry in breakdown.values())


def test_breakdown_totals_sum_to_overall_total() -> None:
    activities = [
        make_activity("a", "commute", DAY, 1.111),
        make_activity("b", "Food", DAY, 2.222),
        make_activity("c", "ELECTRICITY", DAY, 3.333),
        make_activity("d", "food", DAY, None),
    ]
    total = round(total_co2e(activities), 2)

    breakdown = category_breakdown(activities, total)

    assert abs(sum(entry.total for entry in breakdown.values()) - total) <= 0.01
    assert breakdown[ActivityCategory.FOOD].total == 2.222


def test_breakdown_of_filtered_set_uses_overall_total() -> None:
    activities = [
        make_activity("a", "commute", DAY, 4),
        make_activity("b", "food", DAY, 6),
    ]

    breakdown = category_breakdown(filter_activities(activities, "food"), 10)

    assert breakdown[ActivityCategory.FOOD].percent == 60.0
    assert breakdown[ActivityCategory.COMMUTE].total == 0


def test_breakdown_ignores_unknown_types() -> None:
    activities = [make_activity("a", "flight", DAY, 100)]

    breakdown = category_breakdown(activities, 100)

    assert sum(entry.total for entry in breakdown.values()) == 0


def test_breakdown_percent_is_capped_when_total_was_rounded_down() -> None:
    activities = [make_activity("a", "food", DAY, 0.0149)]

    breakdown = category_breakdown(activities, round_half_away(0.0149, places=2))

    assert breakdown[ActivityCategory.FOOD].percent == 100.0
    assert all(0 <= entry.percent <= 100 for entry in breakdown.values())
