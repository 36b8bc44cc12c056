"""
Central data model definitions used across the project.

Input side (what a scheduling tool hands us):
- Paper: one course with its term dates, breaks and weekly sessions
- PaperBreak: a closed date interval without teaching
- PaperEvent: one weekly session pattern of a paper

Output side (derived, built fresh per conversion):
- CalendarEvent: one recurring VEVENT
- CalendarDocument: the events plus calendar-level metadata

Input records may also arrive as JSON-shaped dicts with camelCase keys;
the from_dict constructors map them onto the dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class PaperBreak:
    """
    Represents a break (e.g. mid-semester break), both dates inclusive.
    """

    title: str
    start_date: str
    end_date: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperBreak:
        return cls(
            title=data.get("title") or "",
            start_date=data["startDate"],
            end_date=data["endDate"],
        )


@dataclass
class PaperEvent:
    """
    Represents one weekly session of a paper.

    weekday uses 1=Monday ... 7=Sunday, times are "H:MM" or "HH:MM".
    """

    title: str
    weekday: int
    start_time: str
    end_time: str
    location: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaperEvent:
        return cls(
            title=data["title"],
            weekday=data["weekday"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            location=data.get("location") or "",
        )


@dataclass
class Paper:
    """
    Represents one university paper (course) for a single term.
    """

    code: str
    title: str
    start_date: str
    end_date: str
    breaks: List[PaperBreak] = field(default_factory=list)
    # PaperEvent instances, or raw session dicts coerced at render time
    events: List[Any] = field(default_factory=list)
    memo: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Paper:
        """
        Build a Paper from a JSON object.

        Sessions are kept as raw dicts here so that one broken session
        only costs that session when the calendar is rendered.
        """
        return cls(
            code=data["code"],
            title=data["title"],
            start_date=data["startDate"],
            end_date=data["endDate"],
            breaks=[PaperBreak.from_dict(b) for b in data.get("breaks") or []],
            events=list(data.get("events") or []),
            memo=data.get("memo"),
        )


@dataclass(frozen=True)
class CalendarEvent:
    """
    One recurring calendar event, ready to be serialized.

    dtstart/dtend are ICS timestamps (YYYYMMDDTHHMMSS, local wall-clock).
    exdate is None rather than an empty list.
    """

    uid: str
    summary: str
    description: str
    location: str
    dtstart: str
    dtend: str
    rrule: Optional[str] = None
    exdate: Optional[List[str]] = None


@dataclass
class CalendarDocument:
    events: List[CalendarEvent] = field(default_factory=list)
    prodid: str = "-//unischedule-ics//EN"
    version: str = "2.0"
    calscale: str = "GREGORIAN"
