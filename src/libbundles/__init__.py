"""
This file exposes the main classes of libbundles.
"""

from .libbundles_config import LibbundlesConfig
from .libbundles_exceptions import LibbundlesException, UnknownLibraryException
from .libbundles_logger import LibbundlesLogger
from .library_manager import LibraryManager
from .library_models import DownloadOutcome, LibraryDescriptor, LibraryReport, LibraryStatus
from .library_registry import LibraryRegistry, StatusResolver, VersionPolicy
from .library_downloader import LibraryAcquirer, LibraryUpdater

__all__ = [
    "DownloadOutcome",
    "LibbundlesConfig",
    "LibbundlesException",
    "LibbundlesLogger",
    "LibraryAcquirer",
    "LibraryDescriptor",
    "LibraryManager",
    "LibraryRegistry",
    "LibraryReport",
    "LibraryStatus",
    "LibraryUpdater",
    "StatusResolver",
    "UnknownLibraryException",
    "VersionPolicy",
]
