# tests/test_recurrence.py
from __future__ import annotations

from datetime import date, datetime

from homepro.domain.recurrence import add_months, calculate_next_due_date, format_recurrence


def test_standard_frequencies_advance_by_calendar_months():
    base = datetime(2026, 1, 15, 9, 30)
    assert calculate_next_due_date("MONTHLY", base) == datetime(2026, 2, 15, 9, 30)
    assert calculate_next_due_date("QUARTERLY", base) == datetime(2026, 4, 15, 9, 30)
    assert calculate_next_due_date("BIANNUAL", base) == datetime(2026, 7, 15, 9, 30)
    assert calculate_next_due_date("ANNUAL", base) == datetime(2027, 1, 15, 9, 30)
    assert calculate_next_due_date("SEASONAL", base) == datetime(2026, 4, 15, 9, 30)
    assert calculate_next_due_date("AS_NEEDED", base) == datetime(2026, 7, 15, 9, 30)


def test_weekly_is_seven_days():
    assert calculate_next_due_date("WEEKLY", date(2026, 12, 28)) == date(2027, 1, 4)


def test_unknown_frequency_falls_back_to_monthly():
    assert calculate_next_due_date("FORTNIGHTLY", date(2026, 3, 1)) == date(2026, 4, 1)


def test_month_end_is_clamped():
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2028, 1, 31), 1) == date(2028, 2, 29)
    assert add_months(date(2026, 3, 31), -1) == date(2026, 2, 28)


def test_custom_recurrence_wins_over_frequency():
    base = date(2026, 5, 10)
    assert calculate_next_due_date("ANNUAL", base, {"interval": 10, "unit": "days"}) == date(2026, 5, 20)
    assert calculate_next_due_date("ANNUAL", base, {"interval": 2, "unit": "weeks"}) == date(2026, 5, 24)
    assert calculate_next_due_date("WEEKLY", base, {"interval": 2, "unit": "months"}) == date(2026, 7, 10)


def test_custom_months_roll_into_the_next_year():
    assert calculate_next_due_date("MONTHLY", date(2024, 12, 15), {"interval": 2, "unit": "months"}) == date(2025, 2, 15)
    assert calculate_next_due_date("MONTHLY", datetime(2025, 11, 30, 8, 0), {"interval": 3, "unit": "months"}) == datetime(
        2026, 2, 28, 8, 0
    )


def test_custom_recurrence_with_unknown_unit_counts_days():
    assert calculate_next_due_date("MONTHLY", date(2026, 5, 10), {"interval": 3, "unit": "fortnights"}) == date(2026, 5, 13)


def test_empty_custom_recurrence_is_ignored():
    assert calculate_next_due_date("MONTHLY", date(2026, 5, 10), {}) == date(2026, 6, 10)
    assert calculate_next_due_date("MONTHLY", date(2026, 5, 10), {"unit": "days"}) == date(2026, 6, 10)


def test_recurrence_labels():
    assert format_recurrence("QUARTERLY") == "Every 3 months"
    assert format_recurrence("ANNUAL") == "Annually"
    assert format_recurrence("MONTHLY", {"interval": 1, "unit": "weeks"}) == "Every 1 week"
    assert format_recurrence("MONTHLY", {"interval": 5, "unit": "days"}) == "Every 5 days"
