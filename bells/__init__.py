"""Bell schedules for letter days at school."""

from .calendar import build_calendar, calendar_to_json, day_for
from .constants import DEFAULT_SCHOOL_YEAR, SchoolYear
from .day import Day
from .errors import FormatError
from .letters import Letter, article
from .publication import Publication, PublicationMetadata
from .specials import DEFAULT_CATALOG, Special, SpecialCatalog, resolve_friday
from .times import Range, Time

__all__ = [
    "DEFAULT_CATALOG",
    "DEFAULT_SCHOOL_YEAR",
    "Day",
    "FormatError",
    "Letter",
    "Publication",
    "PublicationMetadata",
    "Range",
    "SchoolYear",
    "Special",
    "SpecialCatalog",
    "Time",
    "article",
    "build_calendar",
    "calendar_to_json",
    "day_for",
    "resolve_friday",
]
