"""
Package entry point.

Allows running the application via:

    python -m unischedule_ics

This simply forwards execution to unischedule_ics.cli.main().
"""

from unischedule_ics.cli import main

if __name__ == "__main__":
    main()
