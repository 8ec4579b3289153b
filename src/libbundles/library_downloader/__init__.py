"""
Library downloader.

This package handles:
1. Checking that a library archive is reachable
2. Downloading and verifying archives
3. Installing and updating library directories
"""

from .acquirer import LibraryAcquirer
from .updater import LibraryUpdater

__all__ = ["LibraryAcquirer", "LibraryUpdater"]
