"""Bell schedules ("specials") and the catalog of built-in schedules.

A special describes the time allotment of a day: the ranges of every period,
which periods are skipped altogether, and which periods are used for
homeroom and mincha. Regular days use the "M or R day" and "A, B, or C day"
specials; anything else (fast days, assemblies, early dismissals) is a
special day.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Iterator, Mapping, Optional

from .constants import DEFAULT_SCHOOL_YEAR, SchoolYear
from .errors import FormatError
from .letters import Letter
from .times import Range

logger = logging.getLogger(__name__)

REGULAR = "M or R day"
ROTATE = "A, B, or C day"
FRIDAY = "Friday"
WINTER_FRIDAY = "Winter Friday"


def _optional_index(json: Mapping[str, Any], key: str) -> Optional[int]:
    value = json.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(f"special.{key} must be an integer, got {value!r}", value, key)
    return value


@dataclass(frozen=True, eq=False)
class Special:
    """A named bell schedule.

    Two specials are equal when they have the same name.
    """

    name: str
    periods: tuple[Range, ...]
    homeroom: Optional[int] = None
    mincha: Optional[int] = None
    skip: tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "periods", tuple(self.periods))
        object.__setattr__(self, "skip", tuple(self.skip) if self.skip is not None else ())
        if not isinstance(self.name, str) or not self.name:
            raise FormatError(f"Special name must be a non-empty string, got {self.name!r}", self.name, "name")
        if not self.periods:
            raise FormatError(f"Special '{self.name}' has no periods", self.periods, "periods")
        for previous, current in zip(self.periods, self.periods[1:]):
            if current.start < previous.end:
                raise FormatError(
                    f"Special '{self.name}': period {current} starts before {previous} ends",
                    current,
                    "periods",
                )
        markers = [("homeroom", self.homeroom), ("mincha", self.mincha)]
        markers.extend(("skip", index) for index in self.skip)
        for key, index in markers:
            if index is not None and not 0 <= index < len(self.periods):
                raise FormatError(
                    f"Special '{self.name}': {key} index {index} is out of range",
                    index,
                    key,
                )

    @classmethod
    def from_json(cls, value: Any, catalog: "Optional[SpecialCatalog]" = None) -> Optional["Special"]:
        """Parse a special from JSON.

        The value must be either:

        - ``None``, in which case ``None`` is returned,
        - a string naming one of the specials in ``catalog``, or
        - an object with ``name`` and ``periods`` fields, and optionally
          ``homeroom``, ``mincha`` and ``skip``.

        Raises:
            FormatError: If the value is none of the above.
        """
        if value is None:
            return None
        if isinstance(value, str):
            return (catalog if catalog is not None else DEFAULT_CATALOG)[value]
        if not isinstance(value, Mapping):
            raise FormatError(f"{value!r} is not a valid special", value, "special")
        for key in ("name", "periods"):
            if key not in value:
                raise FormatError(f"special is missing the '{key}' field", value, key)
        skip = value.get("skip")
        if skip is None:
            skip = ()
        if isinstance(skip, (str, Mapping)) or not isinstance(skip, Iterable):
            raise FormatError(f"special.skip must be a list of integers, got {skip!r}", skip, "skip")
        skip = tuple(skip)
        if any(isinstance(index, bool) or not isinstance(index, int) for index in skip):
            raise FormatError(f"special.skip must be a list of integers, got {list(skip)!r}", skip, "skip")
        return cls(
            value["name"],
            tuple(Range.get_list(value["periods"])),
            homeroom=_optional_index(value, "homeroom"),
            mincha=_optional_index(value, "mincha"),
            skip=skip,
        )

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "periods": [period.to_json() for period in self.periods],
        }
        if self.homeroom is not None:
            result["homeroom"] = self.homeroom
        if self.mincha is not None:
            result["mincha"] = self.mincha
        if self.skip:
            result["skip"] = list(self.skip)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Special):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name


def _table(*rows: tuple[int, int, int, int]) -> tuple[Range, ...]:
    return tuple(Range.nums(*row) for row in rows)


ROSH_CHODESH = Special(
    "Rosh Chodesh",
    _table(
        (8, 0, 9, 5),
        (9, 10, 9, 50),
        (9, 55, 10, 35),
        (10, 35, 10, 50),
        (10, 50, 11, 30),
        (11, 35, 12, 15),
        (12, 20, 12, 55),
        (1, 0, 1, 35),
        (1, 40, 2, 15),
        (2, 30, 3, 0),
        (3, 0, 3, 20),
        (3, 20, 4, 0),
        (4, 5, 4, 45),
    ),
    homeroom=3,
    mincha=10,
)

# Lunch periods are skipped on fast days.
FAST_DAY = Special(
    "Tzom",
    _table(
        (8, 0, 8, 55),
        (9, 0, 9, 35),
        (9, 40, 10, 15),
        (10, 20, 10, 55),
        (11, 0, 11, 35),
        (11, 40, 12, 15),
        (12, 20, 12, 55),
        (1, 0, 1, 35),
        (1, 35, 2, 5),
    ),
    mincha=8,
    skip=(6, 7, 8),
)

FRIDAY_SPECIAL = Special(
    FRIDAY,
    _table(
        (8, 0, 8, 45),
        (8, 50, 9, 30),
        (9, 35, 10, 15),
        (10, 20, 11, 0),
        (11, 0, 11, 20),
        (11, 20, 12, 0),
        (12, 5, 12, 45),
        (12, 50, 1, 30),
    ),
    homeroom=4,
)

FRIDAY_ROSH_CHODESH = Special(
    "Friday Rosh Chodesh",
    _table(
        (8, 0, 9, 5),
        (9, 10, 9, 45),
        (9, 50, 10, 25),
        (10, 30, 11, 5),
        (11, 5, 11, 25),
        (11, 25, 12, 0),
        (12, 5, 12, 40),
        (12, 45, 1, 20),
    ),
    homeroom=4,
)

WINTER_FRIDAY_SPECIAL = Special(
    WINTER_FRIDAY,
    _table(
        (8, 0, 8, 45),
        (8, 50, 9, 25),
        (9, 30, 10, 5),
        (10, 10, 10, 45),
        (10, 45, 11, 5),
        (11, 5, 11, 40),
        (11, 45, 12, 20),
        (12, 25, 1, 0),
    ),
    homeroom=4,
)

WINTER_FRIDAY_ROSH_CHODESH = Special(
    "Winter Friday Rosh Chodesh",
    _table(
        (8, 0, 9, 5),
        (9, 10, 9, 40),
        (9, 45, 10, 15),
        (10, 20, 10, 50),
        (10, 50, 11, 10),
        (11, 10, 11, 40),
        (11, 45, 12, 15),
        (12, 20, 12, 50),
    ),
    homeroom=4,
)

# Assembly during homeroom.
AM_ASSEMBLY = Special(
    "AM Assembly",
    _table(
        (8, 0, 8, 50),
        (8, 55, 9, 30),
        (9, 35, 10, 10),
        (10, 10, 11, 10),
        (11, 10, 11, 45),
        (11, 50, 12, 25),
        (12, 30, 1, 5),
        (1, 10, 1, 45),
        (1, 50, 2, 25),
        (2, 30, 3, 5),
        (3, 5, 3, 25),
        (3, 25, 4, 0),
        (4, 5, 4, 45),
    ),
    homeroom=3,
    mincha=10,
)

# Assembly during mincha.
PM_ASSEMBLY = Special(
    "PM Assembly",
    _table(
        (8, 0, 8, 50),
        (8, 55, 9, 30),
        (9, 35, 10, 10),
        (10, 15, 10, 50),
        (10, 55, 11, 30),
        (11, 35, 12, 10),
        (12, 15, 12, 50),
        (12, 55, 1, 30),
        (1, 35, 2, 10),
        (2, 10, 3, 30),
        (3, 30, 4, 5),
        (4, 10, 4, 45),
    ),
    mincha=9,
)

REGULAR_SPECIAL = Special(
    REGULAR,
    _table(
        (8, 0, 8, 50),
        (8, 55, 9, 35),
        (9, 40, 10, 20),
        (10, 20, 10, 35),
        (10, 35, 11, 15),
        (11, 20, 12, 0),
        (12, 5, 12, 45),
        (12, 50, 1, 30),
        (1, 35, 2, 15),
        (2, 20, 3, 0),
        (3, 0, 3, 20),
        (3, 20, 4, 0),
        (4, 5, 4, 45),
    ),
    homeroom=3,
    mincha=10,
)

ROTATE_SPECIAL = Special(
    ROTATE,
    _table(
        (8, 0, 8, 45),
        (8, 50, 9, 30),
        (9, 35, 10, 15),
        (10, 15, 10, 35),
        (10, 35, 11, 15),
        (11, 20, 12, 0),
        (12, 5, 12, 45),
        (12, 50, 1, 30),
        (1, 35, 2, 15),
        (2, 20, 3, 0),
        (3, 0, 3, 20),
        (3, 20, 4, 0),
        (4, 5, 4, 45),
    ),
    homeroom=3,
    mincha=10,
)

EARLY_DISMISSAL = Special(
    "Early Dismissal",
    _table(
        (8, 0, 8, 45),
        (8, 50, 9, 25),
        (9, 30, 10, 5),
        (10, 5, 10, 20),
        (10, 20, 10, 55),
        (11, 0, 11, 35),
        (11, 40, 12, 15),
        (12, 20, 12, 55),
        (1, 0, 1, 35),
        (1, 40, 2, 15),
        (2, 15, 2, 35),
        (2, 35, 3, 10),
        (3, 15, 3, 50),
    ),
    homeroom=3,
    mincha=10,
)

BUILTIN_SPECIALS = (
    REGULAR_SPECIAL,
    ROSH_CHODESH,
    FAST_DAY,
    FRIDAY_SPECIAL,
    FRIDAY_ROSH_CHODESH,
    WINTER_FRIDAY_SPECIAL,
    WINTER_FRIDAY_ROSH_CHODESH,
    AM_ASSEMBLY,
    PM_ASSEMBLY,
    ROTATE_SPECIAL,
    EARLY_DISMISSAL,
)

# Letters with a fixed default special. E and F days depend on the date.
_LETTER_DEFAULTS = {
    Letter.A: ROTATE,
    Letter.B: ROTATE,
    Letter.C: ROTATE,
    Letter.M: REGULAR,
    Letter.R: REGULAR,
}


class SpecialCatalog:
    """An immutable collection of specials, looked up by name.

    The catalog must contain specials named :data:`REGULAR`, :data:`ROTATE`,
    :data:`FRIDAY` and :data:`WINTER_FRIDAY` to provide defaults for every
    letter.
    """

    def __init__(
        self,
        specials: Iterable[Special],
        school_year: SchoolYear = DEFAULT_SCHOOL_YEAR,
    ) -> None:
        self._specials: dict[str, Special] = {}
        for special in specials:
            if special.name in self._specials:
                raise ValueError(f"Duplicate special name: {special.name!r}")
            self._specials[special.name] = special
        self.school_year = school_year

    @property
    def names(self) -> list[str]:
        return list(self._specials)

    def __getitem__(self, name: str) -> Special:
        try:
            return self._specials[name]
        except KeyError:
            raise FormatError(
                f"'{name}' needs to be one of {', '.join(self._specials)}",
                name,
                "special",
            ) from None

    def get(self, name: str, default: Optional[Special] = None) -> Optional[Special]:
        return self._specials.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._specials

    def __iter__(self) -> Iterator[Special]:
        return iter(self._specials.values())

    def __len__(self) -> int:
        return len(self._specials)

    def default_for(self, letter: Letter, today: date) -> Special:
        """Return the special used on a ``letter`` day when none is given.

        E and F days get a Friday or Winter Friday schedule depending on
        ``today``. See :func:`resolve_friday`.
        """
        if letter in (Letter.E, Letter.F):
            return resolve_friday(today, self)
        return self[_LETTER_DEFAULTS[letter]]


def resolve_friday(
    today: date,
    catalog: Optional[SpecialCatalog] = None,
    school_year: Optional[SchoolYear] = None,
) -> Special:
    """Decide between the Friday and Winter Friday schedules.

    Winter Fridays have shorter periods and an earlier dismissal. Outside of
    the school year (the summer months) the regular Friday schedule is used.
    """
    if catalog is None:
        catalog = DEFAULT_CATALOG
    year = school_year or catalog.school_year
    month, day = today.month, today.day
    if year.school_start <= month < year.winter_friday_month_start:
        winter = False
    elif month > year.winter_friday_month_start or month < year.winter_friday_month_end:
        winter = True
    elif year.winter_friday_month_end < month <= year.school_end:
        winter = False
    elif month == year.winter_friday_month_start:
        winter = day >= year.winter_friday_day_start
    elif month == year.winter_friday_month_end:
        winter = day < year.winter_friday_day_end
    else:
        winter = False
    logger.debug("Using %s schedule for Fridays on %s", "winter" if winter else "regular", today)
    return catalog[WINTER_FRIDAY if winter else FRIDAY]


DEFAULT_CATALOG = SpecialCatalog(BUILTIN_SPECIALS)
