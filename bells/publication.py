"""Publications (school newspapers and magazines) and their issues."""

import posixpath
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .errors import FormatError

# Lists in publication metadata are stored as joined strings.
DELIMITER = ", "


def _split(value: Any, key: str) -> frozenset[str]:
    if value is None:
        return frozenset()
    if not isinstance(value, str):
        raise FormatError(f"metadata.{key} must be a string, got {value!r}", value, key)
    return frozenset(item for item in value.split(DELIMITER) if item)


def get_issues_by_month(issues: Iterable[str]) -> dict[int, dict[int, list[str]]]:
    """Group issue paths by year and then by month.

    Issue file names start with their date, as in
    ``rampage/2019_09_15.pdf``. Issues within a month are sorted by path.

    Raises:
        FormatError: If a file name does not start with a year and month.
    """
    result: dict[int, dict[int, list[str]]] = {}
    for issue in sorted(issues):
        stem = posixpath.splitext(posixpath.basename(issue))[0]
        parts = stem.split("_")
        try:
            year, month = int(parts[0]), int(parts[1])
        except (IndexError, ValueError):
            raise FormatError(
                f"Issue {issue!r} is not named <year>_<month>_<day>", issue, "issues"
            ) from None
        if not 1 <= month <= 12:
            raise FormatError(f"Issue {issue!r} has an invalid month", issue, "issues")
        result.setdefault(year, {}).setdefault(month, []).append(issue)
    return result


@dataclass(frozen=True)
class PublicationMetadata:
    """The description and issues of a publication.

    ``issues_by_month`` maps years to months to issues, so
    ``issues_by_month[2019][1]`` holds every issue from January 2019.
    """

    issues: frozenset[str]
    description: str
    issues_by_month: dict[int, dict[int, list[str]]] = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "issues", frozenset(self.issues))
        if self.issues_by_month is None:
            object.__setattr__(self, "issues_by_month", get_issues_by_month(self.issues))

    @classmethod
    def from_json(cls, json: Any) -> "PublicationMetadata":
        """Parse metadata from ``{"description", "issues", "allIssues"?}``.

        ``issues`` and ``allIssues`` are comma-separated lists of paths. Issues
        are grouped by month from ``allIssues`` when it is present.
        """
        if not isinstance(json, Mapping):
            raise FormatError(f"metadata must be a JSON object, got {json!r}", json, "metadata")
        for key in ("description", "issues"):
            if key not in json:
                raise FormatError(f"metadata is missing the '{key}' field", json, key)
        description = json["description"]
        if not isinstance(description, str):
            raise FormatError(
                f"metadata.description must be a string, got {description!r}",
                description,
                "description",
            )
        issues = _split(json["issues"], "issues")
        all_issues = _split(json["allIssues"], "allIssues") if "allIssues" in json else issues
        return cls(issues, description, get_issues_by_month(all_issues))

    def to_json(self) -> dict[str, str]:
        return {
            "description": self.description,
            "issues": DELIMITER.join(sorted(self.issues)),
        }


@dataclass(frozen=True)
class Publication:
    """A publication club, such as a school newspaper."""

    name: str
    downloaded_issues: frozenset[str]
    metadata: PublicationMetadata

    def __post_init__(self) -> None:
        object.__setattr__(self, "downloaded_issues", frozenset(self.downloaded_issues))

    @classmethod
    def from_json(cls, json: Any) -> "Publication":
        """Parse a publication from ``{"name", "issues", "metadata"}``."""
        if not isinstance(json, Mapping):
            raise FormatError(f"publication must be a JSON object, got {json!r}", json, "publication")
        for key in ("name", "issues", "metadata"):
            if key not in json:
                raise FormatError(f"publication is missing the '{key}' field", json, key)
        issues = json["issues"]
        if isinstance(issues, (str, Mapping)) or not isinstance(issues, Iterable):
            raise FormatError(f"publication.issues must be a list, got {issues!r}", issues, "issues")
        return cls(
            json["name"],
            frozenset(issues),
            PublicationMetadata.from_json(json["metadata"]),
        )

    @classmethod
    def get_list(cls, json: Iterable[Any]) -> list["Publication"]:
        return [cls.from_json(element) for element in json]

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "issues": sorted(self.downloaded_issues),
            "metadata": self.metadata.to_json(),
        }
