from dataclasses import dataclass
from enum import Enum


class FileFetchStatus(Enum):
    """Outcome of fetching a file from a repository."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class FileFetchResult:
    """A repository file fetch, successful or not."""

    path: str
    status: FileFetchStatus
    content: str | None = None
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.status is FileFetchStatus.FOUND

    @classmethod
    def hit(cls, path: str, content: str) -> "FileFetchResult":
        return cls(path=path, status=FileFetchStatus.FOUND, content=content)

    @classmethod
    def not_found(cls, path: str) -> "FileFetchResult":
        return cls(path=path, status=FileFetchStatus.NOT_FOUND)

    @classmethod
    def transport_error(cls, path: str, error: str) -> "FileFetchResult":
        return cls(path=path, status=FileFetchStatus.TRANSPORT_ERROR, error=error)
