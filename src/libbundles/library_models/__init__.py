"""
Library bundle models.

This package provides Pydantic data models for the library catalog and the
version marker file, and the enumerations used to report library states.
"""

from .library_descriptors import (
    LibraryCatalog,
    LibraryDescriptor,
    VersionInfo,
)
from .library_status import (
    DownloadOutcome,
    LibraryReport,
    LibraryStatus,
)

__all__ = [
    # Descriptors
    "LibraryCatalog",
    "LibraryDescriptor",
    "VersionInfo",
    # Status
    "DownloadOutcome",
    "LibraryReport",
    "LibraryStatus",
]
