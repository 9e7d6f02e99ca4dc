"""Logic layer for the weekly finance dashboard.

Aggregates the appointment list already held in memory into the totals of
one Monday-to-Sunday week. Works in naive local time of the business.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo

import polars as pl

from groomdesk.core.domain_models import APPOINTMENT_FRAME_SCHEMA, Appointment

WEEKDAY_LABELS = ["Seg", "Ter", "Qua", "Qui", "Sex", "Sáb", "Dom"]


@dataclass(frozen=True)
class DayBucket:
    """Revenue potential (paid + unpaid) of one day of the week."""

    day: date
    label: str
    total: float
    is_today: bool


@dataclass
class WeekSummary:
    """Totals of one week."""

    week_start: date
    received: float
    pending: float
    daily: list[DayBucket]
    appointments: list[Appointment] = field(default_factory=list)

    @property
    def total(self) -> float:
        return self.received + self.pending

    @property
    def appointment_count(self) -> int:
        return len(self.appointments)

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)


def get_start_of_week(anchor: date | datetime) -> date:
    """Monday of the anchor's week. Sunday belongs to the week that started six days earlier."""
    day = anchor.date() if isinstance(anchor, datetime) else anchor
    return day - timedelta(days=day.weekday())


def shift_week(week_start: date, weeks: int) -> date:
    """Move by whole weeks. Unbounded in both directions."""
    return week_start + timedelta(days=7 * weeks)


def week_bounds(week_start: date) -> tuple[datetime, datetime]:
    """Inclusive [Monday 00:00, Sunday 23:59:59.999999] range of a week."""
    start = datetime.combine(week_start, time.min)
    end = datetime.combine(week_start + timedelta(days=6), time.max)
    return start, end


def appointments_to_frame(appointments: list[Appointment], tz: tzinfo) -> pl.DataFrame:
    """Convert appointments to a polars frame with local naive timestamps."""
    rows = [
        {
            "id": a.id,
            "date": a.local_date(tz),
            "price": a.price,
            "is_paid": a.is_paid,
        }
        for a in appointments
    ]
    return pl.DataFrame(rows, schema=APPOINTMENT_FRAME_SCHEMA)


def summarize_week(
    appointments: list[Appointment],
    week_start: date,
    today: date,
    tz: tzinfo,
) -> WeekSummary:
    """Compute received, pending and daily totals of a week.

    Days are matched on the full calendar date, so the daily totals always
    add up to the week total.

    Args:
        appointments: Every appointment held in memory, unfiltered
        week_start: Monday of the week to summarize
        today: Date to flag in the daily buckets
        tz: Business time zone used to localize timestamps

    Returns:
        Summary with the filtered appointments in chronological order
    """
    start, end = week_bounds(week_start)
    df_week = appointments_to_frame(appointments, tz).filter(
        pl.col("date").is_between(start, end, closed="both")
    )

    received = df_week.filter(pl.col("is_paid")).select(pl.col("price").sum()).item()
    pending = df_week.filter(~pl.col("is_paid")).select(pl.col("price").sum()).item()

    df_daily = df_week.group_by(pl.col("date").dt.date().alias("day")).agg(
        pl.col("price").sum().alias("total")
    )
    totals_by_day = dict(zip(df_daily["day"].to_list(), df_daily["total"].to_list()))

    daily = []
    for offset, label in enumerate(WEEKDAY_LABELS):
        day = week_start + timedelta(days=offset)
        daily.append(
            DayBucket(
                day=day,
                label=label,
                total=float(totals_by_day.get(day, 0.0)),
                is_today=day == today,
            )
        )

    week_ids = set(df_week["id"].to_list())
    in_week = sorted((a for a in appointments if a.id in week_ids), key=lambda a: a.date)

    return WeekSummary(
        week_start=week_start,
        received=float(received or 0.0),
        pending=float(pending or 0.0),
        daily=daily,
        appointments=in_week,
    )


def max_daily_total(summary: WeekSummary) -> float:
    """Scale for the daily bar chart. Never below 1 so empty weeks still render."""
    return max([bucket.total for bucket in summary.daily] + [1.0])


def format_week_range(week_start: date) -> str:
    end = week_start + timedelta(days=6)
    return f"{week_start:%d/%m} - {end:%d/%m}"
