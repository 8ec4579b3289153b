"""
Library updater implementation.
"""

import logging
from typing import Dict

from libbundles.libbundles_logger import LibbundlesLogger
from libbundles.library_models import DownloadOutcome, LibraryStatus
from libbundles.library_downloader.acquirer import LibraryAcquirer


class LibraryUpdater:
    """
    Replaces installed libraries with a fresh download.

    The previous installation is kept until the new one has been fetched and
    staged, so a failed update leaves the old version in place.
    """

    def __init__(self, acquirer: LibraryAcquirer, logger: LibbundlesLogger):
        self.acquirer = acquirer
        self.logger = logger

    def update(self, name: str) -> DownloadOutcome:
        """
        Re-download a library over its current installation.

        Raises:
            UnknownLibraryException: If name is not registered
        """
        self.acquirer.registry.get(name)
        self.logger.log(f"Updating library: {name}", logging.INFO)

        outcome = self.acquirer.download(name, force=True)
        if outcome.is_failure():
            self.logger.log(
                f"Update of library {name} failed ({outcome.value}), previous installation kept",
                logging.WARNING,
            )
        return outcome

    def update_outdated(self) -> Dict[str, DownloadOutcome]:
        """
        Update every library whose status is OUTDATED.

        Returns:
            Dictionary mapping updated library names to their outcome
        """
        resolver = self.acquirer.status_resolver
        outcomes = {}
        for name in self.acquirer.registry.names():
            if resolver.resolve_status(name) == LibraryStatus.OUTDATED:
                outcomes[name] = self.update(name)
        return outcomes
