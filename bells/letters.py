"""Letter days of the school week."""

from enum import Enum
from typing import Any

from .errors import FormatError


class Letter(Enum):
    """The letter of a school day.

    M days fall on Mondays and R days on Thursdays. Tuesdays and Wednesdays
    rotate between A, B and C days, and Fridays rotate between E and F days.
    """

    M = "M"
    R = "R"
    A = "A"
    B = "B"
    C = "C"
    E = "E"
    F = "F"

    @classmethod
    def parse(cls, value: Any) -> "Letter":
        """Return the letter named by ``value``.

        Raises:
            FormatError: If ``value`` is not one of the letters.
        """
        try:
            return cls(value)
        except ValueError:
            raise FormatError(
                f"{value!r} is not a valid letter, expected one of "
                f"{', '.join(letter.value for letter in cls)}",
                value,
                "letter",
            ) from None

    def __str__(self) -> str:
        return self.value


# Letters whose spoken name starts with a vowel sound.
_VOWEL_SOUNDS = frozenset({Letter.A, Letter.E, Letter.M, Letter.R, Letter.F})


def article(letter: Letter) -> str:
    """Return "a" or "an", whichever reads right before ``letter``."""
    return "an" if letter in _VOWEL_SOUNDS else "a"
