"""
unischedule-ics: convert university paper timetables into iCalendar files.

    from unischedule_ics import convert_to_ics

    ics_text = convert_to_ics(papers)
"""

from unischedule_ics.model import Paper, PaperBreak, PaperEvent
from unischedule_ics.export_ics import convert_to_ics


def hello_world() -> str:
    return "Hello World from unischedule-ics!"


__all__ = ["Paper", "PaperBreak", "PaperEvent", "convert_to_ics", "hello_world"]
