"""Interfaces to the data services that hold calendars and publications.

The services only move raw data around. Parsing into schedule objects
happens in the functions at the bottom of this module, so a store never
needs to know about days or specials.
"""

import logging
from abc import ABC, abstractmethod
from copy import deepcopy
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Union

from .calendar import build_calendar, calendar_to_json
from .day import Day
from .publication import DELIMITER, Publication, PublicationMetadata, get_issues_by_month
from .specials import SpecialCatalog

logger = logging.getLogger(__name__)


class DocumentStore(ABC):
    """A store of JSON documents keyed by an identifier."""

    @abstractmethod
    def get(self, key: str) -> Mapping[str, Any]:
        """Return the document stored under ``key``.

        Raises:
            KeyError: If there is no such document.
        """
        pass

    @abstractmethod
    def set(self, key: str, document: Mapping[str, Any]) -> bool:
        """Store ``document`` under ``key``, returning whether it was saved."""
        pass


class BlobStore(ABC):
    """A store of named binary files, such as publication issues."""

    @abstractmethod
    def list_names(self) -> list[str]:
        pass

    @abstractmethod
    def fetch(self, name: str) -> bytes:
        """Return the contents of ``name``.

        Raises:
            KeyError: If there is no such file.
        """
        pass

    @abstractmethod
    def store(self, name: str, data: bytes) -> bool:
        pass


class InMemoryDocumentStore(DocumentStore):
    """A :class:`DocumentStore` backed by a dict. Documents are copied in and out."""

    def __init__(self, documents: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._documents: dict[str, Mapping[str, Any]] = deepcopy(dict(documents or {}))

    def get(self, key: str) -> Mapping[str, Any]:
        return deepcopy(self._documents[key])

    def set(self, key: str, document: Mapping[str, Any]) -> bool:
        self._documents[key] = deepcopy(dict(document))
        return True


class InMemoryBlobStore(BlobStore):
    """A :class:`BlobStore` backed by a dict."""

    def __init__(self, blobs: Optional[Mapping[str, bytes]] = None) -> None:
        self._blobs: dict[str, bytes] = dict(blobs or {})

    def list_names(self) -> list[str]:
        return sorted(self._blobs)

    def fetch(self, name: str) -> bytes:
        return self._blobs[name]

    def store(self, name: str, data: bytes) -> bool:
        self._blobs[name] = bytes(data)
        return True


def calendar_key(month: int) -> str:
    """The document key of a month's calendar."""
    return str(month)


def fetch_calendar(
    store: DocumentStore,
    now: Union[date, datetime],
    catalog: Optional[SpecialCatalog] = None,
) -> dict[date, Day]:
    """Download and parse the calendar for the month of ``now``."""
    return build_calendar(store.get(calendar_key(now.month)), now, catalog)


def save_calendar(store: DocumentStore, days: Mapping[date, Day]) -> bool:
    """Upload a month of the calendar. An empty calendar is not saved."""
    if not days:
        logger.warning("Refusing to save an empty calendar")
        return False
    month = next(iter(days)).month
    return store.set(calendar_key(month), calendar_to_json(days))


def publication_key(name: str) -> str:
    """The document key of a publication's metadata."""
    return f"publications/{name}"


def _is_issue(path: str, name: str) -> bool:
    return path.startswith(f"{name}/") and path != f"{name}/{name}.png"


def fetch_publication(
    documents: DocumentStore,
    blobs: BlobStore,
    name: str,
) -> Publication:
    """Assemble a publication from its metadata and its stored issues."""
    metadata = PublicationMetadata.from_json(documents.get(publication_key(name)))
    issues = [path for path in blobs.list_names() if _is_issue(path, name)]
    logger.debug("Found %d stored issues for %s", len(issues), name)
    return Publication(name, frozenset(issues), metadata)


def upload_issue(
    documents: DocumentStore,
    blobs: BlobStore,
    publication: Publication,
    issue: str,
    data: bytes,
) -> Optional[Publication]:
    """Store a new issue and list it in the publication's metadata.

    Returns the updated publication, or ``None`` if either store refused
    the write.
    """
    if not _is_issue(issue, publication.name):
        raise ValueError(f"Issue {issue!r} does not belong to {publication.name}")
    if not blobs.store(issue, data):
        return None
    all_issues = {
        path
        for months in publication.metadata.issues_by_month.values()
        for paths in months.values()
        for path in paths
    }
    all_issues.add(issue)
    metadata = PublicationMetadata(
        publication.metadata.issues | {issue},
        publication.metadata.description,
        get_issues_by_month(all_issues),
    )
    document = metadata.to_json()
    document["allIssues"] = DELIMITER.join(sorted(all_issues))
    if not documents.set(publication_key(publication.name), document):
        return None
    return Publication(publication.name, publication.downloaded_issues | {issue}, metadata)


def publication_names(blobs: Iterable[str]) -> list[str]:
    """Return the names of the publications that have stored files."""
    return sorted({path.split("/", 1)[0] for path in blobs if "/" in path})
