"""
Tests for CLI entry points.

These tests focus on:
- Sub-command dispatch and exit codes
- convert writing a real .ics file into a temporary directory
- check printing the analysis summary
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from unischedule_ics.cli import main

PAPERS = {
    "papers": [
        {
            "code": "CS101",
            "title": "Introduction to Computer Science",
            "startDate": "2025-02-01",
            "endDate": "2025-06-30",
            "breaks": [{"title": "Mid-semester Break", "startDate": "2025-04-01", "endDate": "2025-04-07"}],
            "events": [
                {"title": "Lecture", "weekday": 1, "startTime": "09:00", "endTime": "10:30", "location": "A101"},
                {"title": "Lab", "weekday": 3, "startTime": "14:00", "endTime": "16:00", "location": "B201"},
            ],
        }
    ]
}


def _run(argv: list[str]) -> tuple[int, str]:
    buf = io.StringIO()
    with redirect_stdout(buf):
        try:
            main(argv)
        except SystemExit as exc:
            return exc.code, buf.getvalue()
    return -1, buf.getvalue()


class TestCLI(unittest.TestCase):
    def test_cli_requires_command(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            main([])
        self.assertNotEqual(ctx.exception.code, 0)

    def test_cli_convert_requires_path(self) -> None:
        code, out = _run(["convert", ""])
        self.assertEqual(code, 1)
        self.assertIn("papers JSON path", out)

    def test_cli_hello(self) -> None:
        code, out = _run(["hello"])
        self.assertEqual(code, 0)
        self.assertIn("Hello World from unischedule-ics!", out)

    def test_cli_convert_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = Path(d) / "papers.json"
            src.write_text(json.dumps(PAPERS), encoding="utf-8")
            out_path = Path(d) / "out.ics"

            code, out = _run(["convert", str(src), "-o", str(out_path)])

            self.assertEqual(code, 0)
            self.assertIn("Exported 2 events", out)
            text = out_path.read_bytes().decode("utf-8")
            self.assertIn("SUMMARY:CS101 - Lecture\r\n", text)
            self.assertIn("EXDATE:20250407T090000", text)

    def test_cli_convert_to_stdout(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = Path(d) / "papers.json"
            src.write_text(json.dumps(PAPERS), encoding="utf-8")
            code, out = _run(["convert", str(src)])
            self.assertEqual(code, 0)
            self.assertIn("BEGIN:VCALENDAR", out)
            self.assertEqual(out.count("BEGIN:VEVENT"), 2)

    def test_cli_check_summary(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            src = Path(d) / "papers.json"
            src.write_text(json.dumps(PAPERS), encoding="utf-8")
            code, out = _run(["--verbose", "check", str(src)])
            self.assertEqual(code, 0)
            self.assertIn("Input papers: 1", out)
            self.assertIn("Event count: 2", out)
            self.assertIn("Recurrence rules: 2", out)
            self.assertIn("Exception dates: 2", out)


if __name__ == "__main__":
    unittest.main()
