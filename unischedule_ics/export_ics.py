"""
iCalendar (.ics) export.

We convert papers into one calendar document with one recurring weekly
event per paper session. The result imports into:
- Google Calendar
- Outlook
- Apple Calendar

Text fields are only escaped for newlines; commas, semicolons and
backslashes are written as-is.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

from unischedule_ics.dates import Clock, SystemClock, combine, current_timestamp, format_timestamp, parse_calendar_date
from unischedule_ics.model import CalendarDocument, CalendarEvent, Paper, PaperEvent
from unischedule_ics.recurrence import exception_dates, first_occurrence_on_or_after, weekly_recurrence_rule
from unischedule_ics.storage import write_calendar

log = logging.getLogger(__name__)

PRODID = "-//unischedule-ics//EN"
VERSION = "2.0"
CALSCALE = "GREGORIAN"
UID_DOMAIN = "unischedule-ics"

# ICS standard uses CRLF
CRLF = "\r\n"


def _ics_escape(text: str) -> str:
    return text.replace("\n", "\\n")


def unique_id(
    course_code: str,
    session_title: str,
    weekday: int,
    start_time: str,
    clock: Optional[Clock] = None,
) -> str:
    """
    Best-effort unique UID: readable prefix + invocation time + random suffix.
    """
    clock = clock or SystemClock()
    stamp = clock.now().strftime("%Y%m%d%H%M%S%f")
    hour, _, minute = start_time.partition(":")
    hhmm = f"{hour.strip().zfill(2)}{minute.strip().zfill(2)}"
    return f"{course_code}-{session_title}-{weekday}-{hhmm}-{stamp}-{clock.suffix()}@{UID_DOMAIN}"


def build_event(paper: Paper, session: PaperEvent, clock: Optional[Clock] = None) -> CalendarEvent:
    """
    Map one paper session onto a recurring CalendarEvent.

    Start and end share the first occurrence date (no overnight sessions).
    """
    first_day = first_occurrence_on_or_after(parse_calendar_date(paper.start_date), session.weekday)

    description = paper.title
    if paper.memo:
        description = f"{paper.title}\n\n{paper.memo}"

    exdate = exception_dates(
        parse_calendar_date(paper.start_date),
        parse_calendar_date(paper.end_date),
        session.weekday,
        session.start_time,
        paper.breaks,
    )

    return CalendarEvent(
        uid=unique_id(paper.code, session.title, session.weekday, session.start_time, clock),
        summary=f"{paper.code} - {session.title}",
        description=description,
        location=session.location,
        dtstart=format_timestamp(combine(first_day, session.start_time)),
        dtend=format_timestamp(combine(first_day, session.end_time)),
        rrule=weekly_recurrence_rule(parse_calendar_date(paper.end_date)),
        exdate=exdate or None,
    )


def render_event(event: CalendarEvent, clock: Optional[Clock] = None) -> str:
    """
    Serialize one VEVENT block (CRLF-separated, no trailing CRLF).
    """
    lines: list[str] = []
    lines.append("BEGIN:VEVENT")
    lines.append(f"UID:{event.uid}")
    lines.append(f"DTSTAMP:{current_timestamp(clock)}")
    lines.append(f"DTSTART:{event.dtstart}")
    lines.append(f"DTEND:{event.dtend}")
    lines.append(f"SUMMARY:{event.summary}")
    lines.append(f"DESCRIPTION:{_ics_escape(event.description)}")
    lines.append(f"LOCATION:{event.location}")
    if event.rrule:
        lines.append(f"RRULE:{event.rrule}")
    if event.exdate:
        lines.append(f"EXDATE:{','.join(event.exdate)}")
    lines.append("END:VEVENT")
    return CRLF.join(lines)


def _calendar_lines(document: CalendarDocument, rendered_events: Iterable[str]) -> List[str]:
    lines: List[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append(f"VERSION:{document.version}")
    lines.append(f"PRODID:{document.prodid}")
    lines.append(f"CALSCALE:{document.calscale}")
    lines.extend(rendered_events)
    lines.append("END:VCALENDAR")
    return lines


def format_calendar(document: CalendarDocument, clock: Optional[Clock] = None) -> str:
    """
    Serialize a whole CalendarDocument.
    """
    rendered = [render_event(ev, clock) for ev in document.events]
    return CRLF.join(_calendar_lines(document, rendered))


def _as_paper(value: Any) -> Paper:
    return value if isinstance(value, Paper) else Paper.from_dict(value)


def _as_session(value: Any) -> PaperEvent:
    return value if isinstance(value, PaperEvent) else PaperEvent.from_dict(value)


def _label(value: Any, key: str) -> str:
    if isinstance(value, dict):
        return str(value.get(key, "?"))
    return str(getattr(value, key, "?"))


def render(papers: Optional[Iterable[Any]], clock: Optional[Clock] = None) -> str:
    """
    Convert papers into a complete .ics document.

    Papers may be Paper instances or JSON-shaped dicts. A session that
    fails to build or render is logged and skipped; everything else is
    still converted. Event order follows paper order, then session order.
    """
    document = CalendarDocument(prodid=PRODID, version=VERSION, calscale=CALSCALE)
    rendered: list[str] = []
    papers = list(papers or [])

    for raw_paper in papers:
        try:
            paper = _as_paper(raw_paper)
        except Exception as exc:
            log.warning("Failed to read paper %s: %s", _label(raw_paper, "code"), exc)
            continue

        for raw_session in paper.events or []:
            try:
                session = _as_session(raw_session)
                event = build_event(paper, session, clock)
                rendered.append(render_event(event, clock))
            except Exception as exc:
                log.warning(
                    "Failed to create event for %s - %s: %s",
                    paper.code,
                    _label(raw_session, "title"),
                    exc,
                )

    log.info("Converted %d papers into %d events", len(papers), len(rendered))
    return CRLF.join(_calendar_lines(document, rendered))


def convert_to_ics(papers: Optional[Iterable[Any]], clock: Optional[Clock] = None) -> str:
    """
    Public entry point: papers in, .ics text out. Never raises for bad sessions.
    """
    return render(papers, clock)


def export_papers_to_ics(papers: Optional[Iterable[Any]], out_path: str | Path) -> int:
    """
    Convert papers and write the calendar to out_path. Returns number of exported events.
    """
    text = convert_to_ics(papers)
    write_calendar(text, out_path)
    return text.count("BEGIN:VEVENT")
