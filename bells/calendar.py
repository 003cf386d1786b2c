"""The school calendar for a month."""

import logging
import re
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from .day import Day
from .errors import FormatError
from .specials import SpecialCatalog

logger = logging.getLogger(__name__)

# One or two ASCII digits.
_DAY_OF_MONTH = re.compile(r"[0-9]{1,2}")


def _to_date(moment: Union[date, datetime]) -> date:
    return moment.date() if isinstance(moment, datetime) else moment


def build_calendar(
    data: Mapping[str, Any],
    now: Union[date, datetime],
    catalog: Optional[SpecialCatalog] = None,
) -> dict[date, Day]:
    """Parse a month of the calendar.

    Keys of ``data`` are days of the month, as strings, in the month and
    year of ``now``. Values are days in JSON. See :meth:`Day.from_json`.

    Raises:
        FormatError: If any key is not a day of the month or any value is
            not a valid day. Nothing is returned for a partially valid month.
    """
    if not isinstance(data, Mapping):
        raise FormatError(f"calendar must be a JSON object, got {data!r}", data, "calendar")
    today = _to_date(now)
    result: dict[date, Day] = {}
    for key, value in data.items():
        message = f"{key!r} is not a day of {today:%B %Y}"
        if not isinstance(key, str) or not _DAY_OF_MONTH.fullmatch(key):
            raise FormatError(message, key, "calendar")
        try:
            when = date(today.year, today.month, int(key))
        except ValueError:
            raise FormatError(message, key, "calendar") from None
        if when in result:
            raise FormatError(f"{key!r} repeats {when:%B} {when.day}", key, "calendar")
        result[when] = Day.from_json(value, today=today, catalog=catalog)
    logger.debug("Parsed %d days for %s", len(result), f"{today:%B %Y}")
    return result


def calendar_to_json(days: Mapping[date, Day]) -> dict[str, dict[str, Any]]:
    """Serialize a month of the calendar, keyed by day of the month."""
    months = {(when.year, when.month) for when in days}
    if len(months) > 1:
        raise ValueError("A calendar can only hold days from a single month")
    return {str(when.day): day.to_json() for when, day in sorted(days.items())}


def day_for(days: Mapping[date, Day], now: Union[date, datetime]) -> Optional[Day]:
    """Return the day in ``days`` that falls on ``now``, if there is one."""
    return days.get(_to_date(now))
