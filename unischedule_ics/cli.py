"""
CLI (Command Line Interface).

Quick terminal commands around the converter, e.g.:

    unischedule-ics convert papers.json -o timetable.ics
    unischedule-ics check papers.json
    unischedule-ics hello

Note:
- papers.json is a JSON list of papers or {"papers": [...]}
- This CLI prints plain text; warnings about skipped sessions go to stderr
"""

from __future__ import annotations

import argparse
import logging

from unischedule_ics import hello_world
from unischedule_ics.export_ics import convert_to_ics, export_papers_to_ics
from unischedule_ics.storage import load_papers


def _cmd_convert(args: argparse.Namespace) -> int:
    """
    Convert papers.json into an .ics file (or print it to stdout).
    """
    src = (args.papers or "").strip()
    if not src:
        print("Please provide a papers JSON path.")
        return 1

    papers = load_papers(src)

    out_path = (args.out or "").strip()
    if not out_path:
        print(convert_to_ics(papers))
        return 0

    n = export_papers_to_ics(papers, out_path)
    print(f"Exported {n} events to: {out_path}")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """
    Convert without writing and print a short analysis of the result.
    """
    src = (args.papers or "").strip()
    if not src:
        print("Please provide a papers JSON path.")
        return 1

    papers = load_papers(src)
    text = convert_to_ics(papers)

    print(f"Input papers: {len(papers)}")
    print(f"Total lines: {len(text.splitlines())}")
    print(f"Event count: {text.count('BEGIN:VEVENT')}")
    print(f"Recurrence rules: {text.count('RRULE:')}")
    print(f"Exception dates: {text.count('EXDATE:')}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="unischedule-ics", description="Convert university papers to iCalendar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress information")
    sub = parser.add_subparsers(dest="command", required=True)

    p_convert = sub.add_parser("convert", help="Convert papers JSON to .ics")
    p_convert.add_argument("papers", type=str, help="Papers JSON file")
    p_convert.add_argument("-o", "--out", type=str, default="", help="Output file path (default: stdout)")

    p_check = sub.add_parser("check", help="Convert and print a summary of the calendar")
    p_check.add_argument("papers", type=str, help="Papers JSON file")

    sub.add_parser("hello", help="Print a greeting")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "convert":
        raise SystemExit(_cmd_convert(args))
    if args.command == "check":
        raise SystemExit(_cmd_check(args))
    if args.command == "hello":
        print(hello_world())
        raise SystemExit(0)

    raise SystemExit(2)
