"""Tests for recurrence resolution and cadence stepping."""

from __future__ import annotations

from datetime import date

import pytest

from flowfund.models import CustomCadence, CustomUnit, FixedCadence, Recurrence, cadence_from
from flowfund.services.occurrences import expand
from flowfund.services.recurrence import (
    add_months,
    allows_multiple_per_period,
    days_until,
    describe_cadence,
    get_next_occurrence,
    iter_occurrences,
    step_forward,
)

WEEKLY = FixedCadence(Recurrence.WEEKLY)
MONTHLY = FixedCadence(Recurrence.MONTHLY)


class TestAddMonths:
    """Calendar month arithmetic."""

    def test_simple_month_step(self):
        assert add_months(date(2024, 1, 15), 1) == date(2024, 2, 15)

    def test_year_rollover(self):
        assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)

    def test_end_of_month_clamps_to_last_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_negative_months(self):
        assert add_months(date(2024, 1, 15), -1) == date(2023, 12, 15)


class TestGetNextOccurrence:
    """Next due date on or after today."""

    def test_future_base_date_returned_unchanged(self):
        base = date(2024, 7, 1)
        assert get_next_occurrence(base, MONTHLY, today=date(2024, 6, 1)) == base

    def test_base_date_today_returned_unchanged(self):
        base = date(2024, 6, 1)
        assert get_next_occurrence(base, WEEKLY, today=base) == base

    def test_one_time_past_date_is_not_rolled_forward(self):
        base = date(2024, 3, 1)
        assert get_next_occurrence(base, None, today=date(2024, 6, 1)) == base

    def test_weekly_steps_until_on_or_after_today(self):
        # 2024-01-01 is a Monday; 2024-06-01 is a Saturday
        result = get_next_occurrence(date(2024, 1, 1), WEEKLY, today=date(2024, 6, 1))
        assert result == date(2024, 6, 3)

    def test_weekly_lands_exactly_on_today(self):
        result = get_next_occurrence(date(2024, 1, 1), WEEKLY, today=date(2024, 6, 3))
        assert result == date(2024, 6, 3)

    def test_monthly_uses_calendar_months(self):
        result = get_next_occurrence(date(2024, 1, 15), MONTHLY, today=date(2024, 3, 16))
        assert result == date(2024, 4, 15)

    def test_monthly_end_of_month_does_not_drift(self):
        result = get_next_occurrence(date(2024, 1, 31), MONTHLY, today=date(2024, 3, 1))
        assert result == date(2024, 3, 31)

    def test_quarterly_and_yearly(self):
        quarterly = FixedCadence(Recurrence.QUARTERLY)
        yearly = FixedCadence(Recurrence.YEARLY)
        assert get_next_occurrence(date(2024, 1, 10), quarterly, today=date(2024, 5, 1)) == date(
            2024, 7, 10
        )
        assert get_next_occurrence(date(2020, 2, 29), yearly, today=date(2023, 1, 1)) == date(
            2023, 2, 28
        )

    def test_custom_every_three_days(self):
        cadence = CustomCadence(interval=3, unit=CustomUnit.DAY)
        result = get_next_occurrence(date(2024, 6, 1), cadence, today=date(2024, 6, 5))
        assert result == date(2024, 6, 7)

    def test_custom_every_two_months(self):
        cadence = CustomCadence(interval=2, unit=CustomUnit.MONTH)
        result = get_next_occurrence(date(2024, 1, 20), cadence, today=date(2024, 4, 1))
        assert result == date(2024, 5, 20)

    def test_custom_every_year(self):
        cadence = CustomCadence(interval=1, unit=CustomUnit.YEAR)
        result = get_next_occurrence(date(2021, 8, 1), cadence, today=date(2024, 6, 1))
        assert result == date(2024, 8, 1)


class TestStepForward:
    """Single-period stepping without clamping to today."""

    def test_steps_exactly_one_period(self):
        assert step_forward(date(2020, 1, 1), WEEKLY) == date(2020, 1, 8)
        assert step_forward(date(2020, 1, 31), MONTHLY) == date(2020, 2, 29)

    def test_custom_weeks(self):
        cadence = CustomCadence(interval=2, unit=CustomUnit.WEEK)
        assert step_forward(date(2024, 1, 1), cadence) == date(2024, 1, 15)

    def test_one_time_is_unchanged(self):
        assert step_forward(date(2024, 1, 1), None) == date(2024, 1, 1)
        assert step_forward(date(2024, 1, 1), None, anchor=date(2023, 1, 1)) == date(2024, 1, 1)

    def test_anchor_restores_month_end(self):
        anchor = date(2024, 1, 31)
        assert step_forward(date(2024, 2, 29), MONTHLY, anchor=anchor) == date(2024, 3, 31)
        assert step_forward(date(2024, 3, 31), MONTHLY, anchor=anchor) == date(2024, 4, 30)

    def test_anchor_with_day_steps(self):
        anchor = date(2024, 1, 1)
        assert step_forward(date(2024, 1, 15), WEEKLY, anchor=anchor) == date(2024, 1, 22)

    def test_stepping_matches_expanded_schedule(self, outgoing_factory):
        outgoing = outgoing_factory(due_date=date(2024, 1, 31), recurrence=Recurrence.MONTHLY)
        today = date(2024, 2, 1)
        first = get_next_occurrence(outgoing.due_date, outgoing.cadence, today=today)
        second = step_forward(first, outgoing.cadence, anchor=outgoing.due_date)

        february = expand(outgoing, date(2024, 2, 1), date(2024, 2, 29), today=today)
        march = expand(outgoing, date(2024, 3, 1), date(2024, 3, 31), today=today)
        assert [o.date for o in february] == [first] == [date(2024, 2, 29)]
        assert [o.date for o in march] == [second] == [date(2024, 3, 31)]

    def test_stepping_matches_weekly_expansion(self, outgoing_factory):
        outgoing = outgoing_factory(due_date=date(2024, 1, 3), recurrence=Recurrence.WEEKLY)
        today = date(2024, 1, 8)
        occurrences = expand(outgoing, date(2024, 1, 8), date(2024, 1, 31), today=today)
        assert len(occurrences) == 4
        dates = [get_next_occurrence(outgoing.due_date, outgoing.cadence, today=today)]
        while len(dates) < len(occurrences):
            dates.append(step_forward(dates[-1], outgoing.cadence, anchor=outgoing.due_date))
        assert [o.date for o in occurrences] == dates


class TestIterOccurrences:
    def test_occurrences_are_computed_from_anchor(self):
        dates = iter_occurrences(date(2024, 1, 31), MONTHLY)
        assert [next(dates) for _ in range(4)] == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
            date(2024, 4, 30),
        ]


class TestCadenceHelpers:
    def test_cadence_from_record_fields(self):
        assert cadence_from(Recurrence.NONE) is None
        assert cadence_from(Recurrence.BIWEEKLY) == FixedCadence(Recurrence.BIWEEKLY)
        assert cadence_from("custom", 3, "week") == CustomCadence(3, CustomUnit.WEEK)

    def test_custom_without_unit_is_rejected(self):
        with pytest.raises(ValueError):
            cadence_from(Recurrence.CUSTOM, 3, None)

    def test_custom_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            CustomCadence(interval=0, unit=CustomUnit.DAY)

    @pytest.mark.parametrize(
        "cadence,label",
        [
            (None, "One-time"),
            (FixedCadence(Recurrence.BIWEEKLY), "Bi-weekly"),
            (FixedCadence(Recurrence.YEARLY), "Yearly"),
            (CustomCadence(1, CustomUnit.WEEK), "Every week"),
            (CustomCadence(3, CustomUnit.MONTH), "Every 3 months"),
        ],
    )
    def test_describe_cadence(self, cadence, label):
        assert describe_cadence(cadence) == label

    @pytest.mark.parametrize(
        "cadence,expected",
        [
            (FixedCadence(Recurrence.WEEKLY), True),
            (FixedCadence(Recurrence.BIWEEKLY), True),
            (FixedCadence(Recurrence.DAILY), False),
            (FixedCadence(Recurrence.MONTHLY), False),
            (CustomCadence(2, CustomUnit.WEEK), True),
            (CustomCadence(3, CustomUnit.WEEK), False),
            (CustomCadence(5, CustomUnit.DAY), False),
            (None, False),
        ],
    )
    def test_allows_multiple_per_period(self, cadence, expected):
        assert allows_multiple_per_period(cadence) is expected

    def test_days_until(self):
        assert days_until(date(2024, 6, 10), today=date(2024, 6, 1)) == 9
        assert days_until(date(2024, 5, 30), today=date(2024, 6, 1)) == -2
