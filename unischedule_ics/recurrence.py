"""
Weekly recurrence and break exceptions.

Weekdays are numbered 1=Monday ... 7=Sunday (ISO numbering).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List

from unischedule_ics.dates import combine, format_timestamp, parse_calendar_date
from unischedule_ics.model import PaperBreak

ONE_WEEK = timedelta(days=7)


def first_occurrence_on_or_after(day: date, weekday: int) -> date:
    """
    Earliest date >= day that falls on weekday (day itself if it matches).
    """
    offset = (weekday - day.isoweekday() + 7) % 7
    return day + timedelta(days=offset)


def weekly_recurrence_rule(end_date: date) -> str:
    """
    RRULE value that repeats weekly until the end of end_date.
    """
    until = datetime(end_date.year, end_date.month, end_date.day, 23, 59, 59)
    return f"FREQ=WEEKLY;UNTIL={format_timestamp(until)}"


def exception_dates(
    course_start: date,
    course_end: date,
    weekday: int,
    session_start_time: str,
    breaks: Iterable[PaperBreak],
) -> List[str]:
    """
    Timestamps of the weekly occurrences that fall inside a break.

    Every break is walked on its own bounds, in input order. Results are
    concatenated as they come: overlapping breaks may produce duplicates,
    and breaks outside the course range are not clipped to it.
    """
    out: List[str] = []
    for brk in breaks:
        break_end = parse_calendar_date(brk.end_date)
        current = first_occurrence_on_or_after(parse_calendar_date(brk.start_date), weekday)
        while current <= break_end:
            out.append(format_timestamp(combine(current, session_start_time)))
            if break_end - current < ONE_WEEK:
                break
            current += ONE_WEEK
    return out
