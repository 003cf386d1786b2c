"""Months and dates that mark the school year."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SchoolYear:
    """Calendar boundaries used to pick between Friday schedules.

    Months are 1-12 and days are days of the month. Winter Fridays run from
    ``winter_friday_day_start`` of ``winter_friday_month_start`` until the day
    before ``winter_friday_day_end`` of ``winter_friday_month_end``.
    """

    school_start: int = 9  # September
    school_end: int = 7  # July
    winter_friday_month_start: int = 11  # November
    winter_friday_month_end: int = 3  # March
    winter_friday_day_start: int = 1
    winter_friday_day_end: int = 1

    def __post_init__(self) -> None:
        for name in (
            "school_start",
            "school_end",
            "winter_friday_month_start",
            "winter_friday_month_end",
        ):
            month = getattr(self, name)
            if not 1 <= month <= 12:
                raise ValueError(f"{name} must be a month (1-12), got {month}")
        for name in ("winter_friday_day_start", "winter_friday_day_end"):
            day = getattr(self, name)
            if not 1 <= day <= 31:
                raise ValueError(f"{name} must be a day of the month, got {day}")


DEFAULT_SCHOOL_YEAR = SchoolYear()
