"""
States reported for libraries and download operations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .library_descriptors import LibraryDescriptor


class LibraryStatus(str, Enum):
    """Installation state of a library, derived each time it is queried."""

    NOT_INSTALLED = "not_installed"
    OUTDATED = "outdated"
    CURRENT = "current"


class DownloadOutcome(str, Enum):
    """Result of a download or update call."""

    SKIPPED = "skipped"
    DOWNLOADED = "downloaded"
    SOURCE_UNREACHABLE = "source_unreachable"
    ARCHIVE_EMPTY = "archive_empty"
    VERSION_UNKNOWN = "version_unknown"

    def is_failure(self) -> bool:
        return self in (
            DownloadOutcome.SOURCE_UNREACHABLE,
            DownloadOutcome.ARCHIVE_EMPTY,
            DownloadOutcome.VERSION_UNKNOWN,
        )


@dataclass(frozen=True)
class LibraryReport:
    """
    Status of a library as listed by LibraryManager.get_all().
    """

    name: str
    descriptor: LibraryDescriptor
    status: LibraryStatus
    installed_version: Optional[str] = None
    directory_exists: bool = False
