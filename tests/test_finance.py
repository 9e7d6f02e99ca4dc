"""Tests for the weekly finance aggregation."""

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from groomdesk.app.logic.finance import (
    WEEKDAY_LABELS,
    format_week_range,
    get_start_of_week,
    max_daily_total,
    shift_week,
    summarize_week,
)
from groomdesk.core.domain_models import Appointment

TZ = ZoneInfo("America/Sao_Paulo")
WEEK = date(2024, 3, 4)  # Monday


def make_appointment(id: str, when: str, price: float, is_paid: bool = False) -> Appointment:
    return Appointment.model_validate(
        {
            "id": id,
            "client_name": "Ana",
            "pet_name": "Rex",
            "service": "Banho",
            "price": price,
            "date": when,
            "is_paid": is_paid,
        }
    )


@pytest.fixture
def appointments() -> list[Appointment]:
    return [
        make_appointment("mon", "2024-03-04T10:00:00-03:00", 50, is_paid=True),
        make_appointment("wed", "2024-03-06T14:00:00-03:00", 80),
        # Sunday 23:30 local, already Monday in UTC
        make_appointment("sun", "2024-03-11T02:30:00+00:00", 30),
        make_appointment("next-mon", "2024-03-11T09:00:00-03:00", 999, is_paid=True),
        # same day of month as the Monday, previous month
        make_appointment("feb", "2024-02-04T10:00:00-03:00", 500, is_paid=True),
        make_appointment("prev-sun", "2024-03-03T23:59:00-03:00", 700),
    ]


@pytest.mark.parametrize(
    "anchor, expected",
    [
        (date(2024, 3, 4), date(2024, 3, 4)),
        (date(2024, 3, 6), date(2024, 3, 4)),
        (date(2024, 3, 10), date(2024, 3, 4)),
        (datetime(2024, 3, 11, 8, 0), date(2024, 3, 11)),
    ],
)
def test_get_start_of_week_returns_monday(anchor: date, expected: date) -> None:
    assert get_start_of_week(anchor) == expected


def test_start_of_week_is_at_most_six_days_back() -> None:
    for offset in range(21):
        anchor = date(2024, 2, 20) + timedelta(days=offset)
        start = get_start_of_week(anchor)
        assert start.weekday() == 0
        assert 0 <= (anchor - start).days <= 6


def test_shift_week_moves_in_both_directions() -> None:
    assert shift_week(WEEK, 1) == date(2024, 3, 11)
    assert shift_week(WEEK, -1) == date(2024, 2, 26)
    assert shift_week(WEEK, -52) == date(2023, 3, 6)


def test_summarize_week_splits_received_and_pending(appointments: list[Appointment]) -> None:
    summary = summarize_week(appointments, WEEK, today=date(2024, 3, 6), tz=TZ)

    assert summary.received == pytest.approx(50)
    assert summary.pending == pytest.approx(110)
    assert summary.total == pytest.approx(160)
    assert summary.appointment_count == 3
    assert summary.week_end == date(2024, 3, 10)


def test_summarize_week_buckets_by_full_date(appointments: list[Appointment]) -> None:
    summary = summarize_week(appointments, WEEK, today=date(2024, 3, 6), tz=TZ)

    assert [b.label for b in summary.daily] == WEEKDAY_LABELS
    assert [b.total for b in summary.daily] == [50, 0, 80, 0, 0, 0, 30]
    assert sum(b.total for b in summary.daily) == pytest.approx(summary.total)


def test_summarize_week_flags_today(appointments: list[Appointment]) -> None:
    summary = summarize_week(appointments, WEEK, today=date(2024, 3, 6), tz=TZ)
    assert [b.is_today for b in summary.daily] == [False, False, True, False, False, False, False]

    other_week = summarize_week(appointments, WEEK, today=date(2024, 3, 20), tz=TZ)
    assert not any(b.is_today for b in other_week.daily)


def test_summarize_week_lists_week_appointments_in_order(
    appointments: list[Appointment],
) -> None:
    summary = summarize_week(list(reversed(appointments)), WEEK, today=WEEK, tz=TZ)
    assert [a.id for a in summary.appointments] == ["mon", "wed", "sun"]


def test_summarize_empty_week() -> None:
    summary = summarize_week([], WEEK, today=WEEK, tz=TZ)

    assert summary.received == 0
    assert summary.pending == 0
    assert [b.total for b in summary.daily] == [0.0] * 7
    assert summary.appointments == []
    assert summary.appointment_count == 0
    assert max_daily_total(summary) == 1.0


def test_max_daily_total_uses_largest_day(appointments: list[Appointment]) -> None:
    summary = summarize_week(appointments, WEEK, today=WEEK, tz=TZ)
    assert max_daily_total(summary) == 80


def test_format_week_range() -> None:
    assert format_week_range(WEEK) == "04/03 - 10/03"
    assert format_week_range(date(2024, 12, 30)) == "30/12 - 05/01"
