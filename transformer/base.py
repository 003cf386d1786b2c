"""Abstract base class for calendar transformers."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Mapping

from bells import Day


class BaseTransformer(ABC):
    """Abstract base class defining the interface for calendar transformers.

    Extend this class to implement transformers for different output formats
    (e.g., iCalendar, CSV, etc.).
    """

    @abstractmethod
    def transform(self, days: Mapping[date, Day]) -> Any:
        """Transform a month of school days into the target format.

        Args:
            days: School days keyed by date. See bells.build_calendar.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass
