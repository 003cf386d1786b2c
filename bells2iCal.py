#!/usr/bin/env python3
"""Bell schedule to iCalendar converter.

Reads a month of the school calendar, as exported from the calendar
service, and either reports the period in session right now or generates
an iCalendar (.ics) file with every period of the month.
"""

import argparse
import json
import logging
import sys
from datetime import datetime

from bells import FormatError, build_calendar, day_for
from transformer import ICalTransformer


def parse_datetime(value: str) -> datetime:
    """Parse a datetime string in ISO 8601 format."""
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{value}'. Expected YYYY-MM-DDTHH:MM."
        )


def load_month(path: str) -> dict:
    """Read a month of the calendar from a JSON file.

    The file maps days of the month ("1", "2", ...) to days in JSON.
    """
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def describe_now(days: dict, now: datetime) -> str:
    """Describe the school day and period at ``now``."""
    day = day_for(days, now)
    if day is None or not day.school:
        return f"There is no school on {now:%A, %B %d}."
    period = day.period(now)
    description = f"Today is {day.article} {day.name}."
    if period is None:
        return f"{description} School is not in session."
    return f"{description} Period index {period} ({day.special.periods[period]})."


def main() -> None:
    """Main entry point for the converter."""
    parser = argparse.ArgumentParser(
        description="Convert a month of the school calendar to iCalendar format.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 bells2iCal.py --calendar october.json
  python3 bells2iCal.py --calendar october.json --now 2026-10-19T10:25 --today
  python3 bells2iCal.py --calendar october.json --output bells.ics
        """
    )

    parser.add_argument(
        "--calendar",
        required=True,
        help="JSON file with the calendar for the month"
    )

    parser.add_argument(
        "--now",
        type=parse_datetime,
        default=None,
        help="Current date and time (format: YYYY-MM-DDTHH:MM). "
             "Decides the month of the calendar. Default: now"
    )

    parser.add_argument(
        "-o", "--output",
        default="bells.ics",
        help="Output file path (default: bells.ics)"
    )

    parser.add_argument(
        "--today",
        action="store_true",
        help="Print today's schedule and current period instead of exporting"
    )

    parser.add_argument(
        "--include-skipped",
        action="store_true",
        help="Export periods that the day's special skips"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Ensure output file has .ics extension
    output_path = args.output
    if not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    now = args.now or datetime.now()

    try:
        days = build_calendar(load_month(args.calendar), now)

        if args.today:
            print(describe_now(days, now))
            return

        print(f"Found {len(days)} days in {now:%B %Y}.")

        if not days:
            print("Warning: No days found. The output file will be empty.")

        transformer = ICalTransformer(include_skipped=args.include_skipped)
        transformer.transform(days)
        transformer.save(output_path)

        print(f"Schedule saved to: {output_path}")

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: {args.calendar} is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)
    except FormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
