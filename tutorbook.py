#!/usr/bin/env python3
"""TutorBook: roster and tuition session manager.

Keeps students, parents and each student's weekly tuition sessions in a
JSON file, driven by short text commands such as
``addsession 1 d/Mon ti/12pm-1pm``.
"""

import argparse
import logging
import os
import sys
from datetime import date, datetime
from typing import Optional

from logic import CommandResult, RosterParser
from roster import Roster, Student
from roster.errors import RosterError
from storage import JsonRosterStorage
from transformer import ICalTransformer


DEFAULT_DATA_PATH = "data/roster.json"
PROMPT = "> "


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def get_default_data_path() -> str:
    """Data file from the TUTORBOOK_DATA environment variable, if set."""
    return os.getenv("TUTORBOOK_DATA") or DEFAULT_DATA_PATH


def run_command(
    line: str,
    parser: RosterParser,
    roster: Roster,
    storage: JsonRosterStorage,
) -> CommandResult:
    """Parse and execute one command line, then save the roster.

    Args:
        line: Raw command text.
        parser: Parser turning the text into a command.
        roster: Roster the command runs against.
        storage: Where the roster is saved after success.

    Returns:
        Result of the executed command.

    Raises:
        RosterError: If parsing or execution fails; nothing is saved then.
    """
    command = parser.parse_command(line)
    result = command.execute(roster)
    storage.save(roster)
    return result


def export_sessions(roster: Roster, output_path: str, week_of: date) -> int:
    """Write every student's sessions for one week to an .ics file.

    Returns:
        Number of exported sessions.
    """
    students = [person for person in roster.persons if isinstance(person, Student)]
    transformer = ICalTransformer()
    transformer.transform(students, week_of)
    transformer.save(output_path)
    return sum(len(student.sessions) for student in students)


def interactive_loop(parser: RosterParser, roster: Roster, storage: JsonRosterStorage) -> None:
    """Read commands from stdin until ``exit`` or end of input."""
    print("Welcome to TutorBook. Type 'help' to see all commands.")

    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            break

        if not line.strip():
            continue

        try:
            result = run_command(line, parser, roster, storage)
        except RosterError as e:
            print(f"Error: {e}", file=sys.stderr)
            continue

        print(result.feedback)
        if result.should_exit:
            break


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the roster manager."""
    arg_parser = argparse.ArgumentParser(
        description="Manage students, parents and weekly tuition sessions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 tutorbook.py
  python3 tutorbook.py -c "addsession 1 d/Mon ti/12pm-1pm"
  python3 tutorbook.py --export sessions.ics --week-of 2026-10-19
        """
    )

    arg_parser.add_argument(
        "--data",
        default=get_default_data_path(),
        help=f"Roster JSON file (default: $TUTORBOOK_DATA or {DEFAULT_DATA_PATH})"
    )

    arg_parser.add_argument(
        "-c", "--command",
        default=None,
        help="Run a single command and exit"
    )

    arg_parser.add_argument(
        "--export",
        metavar="OUTPUT",
        default=None,
        help="Export all sessions of one week to an iCalendar file and exit"
    )

    arg_parser.add_argument(
        "--week-of",
        type=parse_date,
        default=None,
        help="Any date in the week to export (format: YYYY-MM-DD). Default: today"
    )

    arg_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print debug logging"
    )

    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    storage = JsonRosterStorage(args.data)
    parser = RosterParser()

    try:
        roster = storage.load()

        if args.export:
            output_path = args.export
            if not output_path.lower().endswith(".ics"):
                output_path = f"{output_path}.ics"
            week_of = args.week_of or date.today()
            count = export_sessions(roster, output_path, week_of)
            print(f"Exported {count} sessions to: {output_path}")
            print(f"Week of: {ICalTransformer.week_start(week_of)}")
            return

        if args.command:
            result = run_command(args.command, parser, roster, storage)
            print(result.feedback)
            return

        interactive_loop(parser, roster, storage)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except (RosterError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
