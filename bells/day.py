"""A single school day: its letter, its schedule and the period right now."""

import logging
from dataclasses import InitVar, dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from .errors import FormatError
from .letters import Letter, article as letter_article
from .specials import DEFAULT_CATALOG, REGULAR, ROTATE, Special, SpecialCatalog
from .times import Time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Day:
    """A day at school.

    The letter decides which of a student's schedules is shown, while the
    special decides the time slots of the periods. A day without a letter
    has no school.

    When ``special`` is omitted, the catalog's default for the letter is
    used. For E and F days that default depends on ``today``. When
    ``today`` is omitted the system clock is read, so an E or F day built
    without it can change schedules depending on when it is created. Pass
    ``today`` wherever the result must not depend on the wall clock.
    """

    letter: Optional[Letter]
    special: Optional[Special] = None
    today: InitVar[Optional[date]] = None
    catalog: InitVar[Optional[SpecialCatalog]] = None

    def __post_init__(self, today: Optional[date], catalog: Optional[SpecialCatalog]) -> None:
        if self.letter is not None and not isinstance(self.letter, Letter):
            raise FormatError(f"{self.letter!r} is not a valid letter", self.letter, "letter")
        if self.special is not None and not isinstance(self.special, Special):
            raise FormatError(f"{self.special!r} is not a valid special", self.special, "special")
        if self.special is None and self.letter is not None:
            catalog = catalog if catalog is not None else DEFAULT_CATALOG
            special = catalog.default_for(self.letter, today or date.today())
            object.__setattr__(self, "special", special)

    @classmethod
    def from_json(
        cls,
        json: Any,
        today: Optional[date] = None,
        catalog: Optional[SpecialCatalog] = None,
    ) -> "Day":
        """Parse a day from ``{"letter": ..., "special": ...}``.

        ``letter`` is required and must be one of the letters, or null for a
        day without school. ``special`` may be the name of a special in
        ``catalog``, a full special object, or missing for the default.

        Raises:
            FormatError: If the letter is missing or unknown, or the special
                cannot be parsed.
        """
        if not isinstance(json, Mapping):
            raise FormatError(f"day must be a JSON object, got {json!r}", json, "day")
        if "letter" not in json:
            raise FormatError("day is missing the 'letter' field", json, "letter")
        letter = None if json["letter"] is None else Letter.parse(json["letter"])
        special = Special.from_json(json.get("special"), catalog)
        return cls(letter, special, today=today, catalog=catalog)

    def to_json(self) -> dict[str, Any]:
        result: dict[str, Any] = {"letter": self.letter.value if self.letter else None}
        if self.special is not None:
            result["special"] = self.special.to_json()
        return result

    @property
    def school(self) -> bool:
        """Whether there is school on this day."""
        return self.letter is not None

    @property
    def name(self) -> Optional[str]:
        """A human-readable name, such as "A day" or "A day Tzom".

        The special is left out when it is a letter's everyday schedule.
        Days without school have no name.
        """
        if self.letter is None:
            return None
        name = f"{self.letter.value} day"
        if self.special is not None and self.special.name not in (REGULAR, ROTATE):
            name += f" {self.special.name}"
        return name

    @property
    def article(self) -> str:
        """Whether to say "a" or "an" before :attr:`name`."""
        return letter_article(self.letter) if self.letter is not None else "a"

    def period(self, now: datetime) -> Optional[int]:
        """Return the index of the period in session at ``now``.

        Time between two periods counts toward the upcoming one, and so does
        the moment one period ends. Returns ``None`` when school is out.
        """
        if not self.school or self.special is None:
            return None
        time = Time.from_datetime(now)
        periods = self.special.periods
        for index, current in enumerate(periods):
            is_last = index == len(periods) - 1
            if current.contains(time) and (is_last or time != current.end):
                return index
            if index:
                previous = periods[index - 1]
                ended = previous.is_before(time) or previous.end == time
                if ended and current.is_after(time):
                    return index
        logger.debug("No period in session on %s at %s", self, time)
        return None

    def __str__(self) -> str:
        return self.name or "No school"
