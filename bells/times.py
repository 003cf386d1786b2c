"""Clock times and time ranges on the school-day clock."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Mapping

from .errors import FormatError

# Order of the hours in a school day. Hours ignore AM and PM and are
# compared by their position in this list, so 1:00 comes after 12:00.
CLOCK = (8, 9, 10, 11, 12, 1, 2, 3, 4, 5)

# Stand-in hour for any time outside of school hours.
AFTER_HOURS = 5


def _require_mapping(json: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(json, Mapping):
        raise FormatError(f"{what} must be a JSON object, got {json!r}", json, what)
    return json


def _require_int(json: Mapping[str, Any], key: str, what: str) -> int:
    if key not in json:
        raise FormatError(f"{what} is missing the '{key}' field", json, key)
    value = json[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(f"{what}.{key} must be an integer, got {value!r}", value, key)
    return value


@dataclass(frozen=True)
class Time:
    """An hour and minute of the school day, in 12-hour format."""

    hour: int
    minutes: int

    def __post_init__(self) -> None:
        if self.hour not in CLOCK:
            raise FormatError(
                f"Hour must be one of {', '.join(map(str, CLOCK))}, got {self.hour}",
                self.hour,
                "hour",
            )
        if not 0 <= self.minutes <= 59:
            raise FormatError(
                f"Minutes must be 0-59, got {self.minutes}", self.minutes, "minutes"
            )

    @classmethod
    def from_datetime(cls, moment: datetime) -> "Time":
        """Simplify a datetime to a school-day time.

        Any hour outside of 8:00-17:00 becomes 5 o'clock, which sorts after
        every period of the day. Only this method knows about that rule.
        """
        hour = moment.hour
        if hour >= 17 or hour < 8:
            hour = AFTER_HOURS
        elif hour > 12:
            hour -= 12
        return cls(hour, moment.minute)

    @classmethod
    def from_json(cls, json: Any) -> "Time":
        """Parse a time from ``{"hour": int, "minutes": int}``."""
        json = _require_mapping(json, "time")
        return cls(_require_int(json, "hour", "time"), _require_int(json, "minutes", "time"))

    def to_json(self) -> dict[str, int]:
        return {"hour": self.hour, "minutes": self.minutes}

    @property
    def _position(self) -> tuple[int, int]:
        return CLOCK.index(self.hour), self.minutes

    def __lt__(self, other: "Time") -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._position < other._position

    def __le__(self, other: "Time") -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._position <= other._position

    def __gt__(self, other: "Time") -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._position > other._position

    def __ge__(self, other: "Time") -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._position >= other._position

    def __str__(self) -> str:
        return f"{self.hour}:{self.minutes:02d}"


@dataclass(frozen=True)
class Range:
    """A closed range of school-day times."""

    start: Time
    end: Time

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise FormatError(
                f"Range must not end before it starts: {self.start}-{self.end}",
                (self.start, self.end),
                "end",
            )

    @classmethod
    def nums(cls, start_hour: int, start_minutes: int, end_hour: int, end_minutes: int) -> "Range":
        """Build a range from raw hours and minutes."""
        return cls(Time(start_hour, start_minutes), Time(end_hour, end_minutes))

    @classmethod
    def from_json(cls, json: Any) -> "Range":
        """Parse a range from ``{"start": <time>, "end": <time>}``."""
        json = _require_mapping(json, "range")
        for key in ("start", "end"):
            if key not in json:
                raise FormatError(f"range is missing the '{key}' field", json, key)
        return cls(Time.from_json(json["start"]), Time.from_json(json["end"]))

    @classmethod
    def get_list(cls, json: Iterable[Any]) -> list["Range"]:
        """Parse a list of ranges. See :meth:`from_json`."""
        if isinstance(json, (str, bytes, Mapping)) or not isinstance(json, Iterable):
            raise FormatError(f"periods must be a list of ranges, got {json!r}", json, "periods")
        return [cls.from_json(element) for element in json]

    def to_json(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_json(), "end": self.end.to_json()}

    def contains(self, time: Time) -> bool:
        """Whether ``time`` falls within this range, ends included."""
        return self.start <= time <= self.end

    def is_before(self, time: Time) -> bool:
        """Whether this range is over by ``time``."""
        return self.end < time

    def is_after(self, time: Time) -> bool:
        """Whether this range has not started by ``time``."""
        return self.start > time

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"
