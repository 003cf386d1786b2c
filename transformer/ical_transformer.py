"""iCalendar transformer for school days."""

import hashlib
import logging
from datetime import date, datetime, time
from typing import Mapping, Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event

from bells import Day, Special, Time
from .base import BaseTransformer

logger = logging.getLogger(__name__)


class ICalTransformer(BaseTransformer):
    """Transformer that converts school days to iCalendar format."""

    TIMEZONE = ZoneInfo("America/New_York")
    PRODID = "-//Bell Schedule to iCal//bells2ical//EN"

    def __init__(self, include_skipped: bool = False) -> None:
        """Initialize the iCalendar transformer.

        Args:
            include_skipped: If True, also create events for periods the
                special skips (such as lunch on fast days).
        """
        self._calendar: Optional[Calendar] = None
        self._include_skipped = include_skipped

    @staticmethod
    def _to_time(clock_time: Time) -> time:
        """Convert a school-day time to a 24-hour time.

        Hours before 8 on the school clock are afternoon hours.
        """
        hour = clock_time.hour + 12 if clock_time.hour < 8 else clock_time.hour
        return time(hour, clock_time.minutes)

    @staticmethod
    def _labels(special: Special) -> list[str]:
        """Name every period of a special.

        Homeroom and mincha are named as such and don't count toward the
        period numbers.
        """
        labels = []
        number = 0
        for index in range(len(special.periods)):
            if index == special.homeroom:
                labels.append("Homeroom")
            elif index == special.mincha:
                labels.append("Mincha")
            else:
                number += 1
                labels.append(f"Period {number}")
        return labels

    def _generate_uid(self, when: date, index: int, special: Special) -> str:
        """Generate a unique identifier for a period.

        Args:
            when: Date of the school day.
            index: Index of the period in the special.
            special: The special in use that day.

        Returns:
            Unique identifier string.
        """
        unique_string = f"{when.isoformat()}-{index}-{special.name}"
        return hashlib.md5(unique_string.encode()).hexdigest() + "@bells"

    def transform(self, days: Mapping[date, Day]) -> Calendar:
        """Transform school days into iCalendar format.

        Days without school produce no events.

        Args:
            days: School days keyed by date.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", self.PRODID)
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", "Bell Schedule")
        self._calendar.add("x-wr-timezone", str(self.TIMEZONE))

        for when, day in sorted(days.items()):
            if not day.school or day.special is None:
                continue
            special = day.special
            labels = self._labels(special)

            for index, period in enumerate(special.periods):
                if index in special.skip and not self._include_skipped:
                    continue

                ical_event = Event()
                ical_event.add("uid", self._generate_uid(when, index, special))
                ical_event.add(
                    "dtstart",
                    datetime.combine(when, self._to_time(period.start), tzinfo=self.TIMEZONE)
                )
                ical_event.add(
                    "dtend",
                    datetime.combine(when, self._to_time(period.end), tzinfo=self.TIMEZONE)
                )
                ical_event.add("dtstamp", datetime.now(self.TIMEZONE))

                # Summary format: A day - Period 1
                ical_event.add("summary", f"{day.name} - {labels[index]}")
                ical_event.add("description", f"{special.name}, {period}")

                self._calendar.add_component(ical_event)

        logger.debug("Created %d events", len(self._calendar.subcomponents))
        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
