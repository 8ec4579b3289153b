"""
Entry point for installers: wires the registry, status resolver, acquirer and
updater together from a LibbundlesConfig.
"""

import logging
from typing import Dict, List, Optional

import requests

from libbundles.libbundles_config import LibbundlesConfig
from libbundles.libbundles_logger import LibbundlesLogger
from libbundles.library_downloader import LibraryAcquirer, LibraryUpdater
from libbundles.library_models import DownloadOutcome, LibraryReport, LibraryStatus
from libbundles.library_registry import LibraryRegistry, StatusResolver, VersionPolicy


class LibraryManager:
    """
    Checks, downloads and updates the optional library bundles of an installation.
    """

    def __init__(
        self,
        config: LibbundlesConfig,
        logger: Optional[LibbundlesLogger] = None,
        registry: Optional[LibraryRegistry] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            config: The libbundles configuration
            logger: Logger, a LibbundlesLogger by default
            registry: Libraries to manage; loaded from config.catalog_path or
                the bundled catalog when omitted
            session: HTTP session; the manager creates and owns one when omitted
        """
        self.config = config
        self.logger = logger or LibbundlesLogger()

        if registry is None:
            if config.catalog_path:
                registry = LibraryRegistry.from_json(
                    str(config.resolve_path(config.catalog_path)), config.root_path
                )
            else:
                registry = LibraryRegistry.default(config.root_path)
        self.registry = registry

        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

        self.version_policy = VersionPolicy(config.versions, config.developer_mode)
        self.status_resolver = StatusResolver(
            self.registry,
            self.version_policy,
            self.logger,
            marker_file_name=config.marker_file_name,
        )
        self.acquirer = LibraryAcquirer(
            self.registry,
            self.status_resolver,
            self.version_policy,
            config,
            self.logger,
            session=self.session,
        )
        self.updater = LibraryUpdater(self.acquirer, self.logger)

    @classmethod
    def from_toml(cls, path: str, logger: Optional[LibbundlesLogger] = None) -> "LibraryManager":
        return cls(LibbundlesConfig.from_toml(path), logger=logger)

    def resolve_status(self, name: str) -> LibraryStatus:
        return self.status_resolver.resolve_status(name)

    def check_library(self, name: str) -> bool:
        """True if the library is missing or outdated."""
        return self.resolve_status(name) != LibraryStatus.CURRENT

    def get_all(self) -> List[LibraryReport]:
        """Report the status of every registered library."""
        return [self.status_resolver.report(name) for name in self.registry.names()]

    def download(self, name: str) -> DownloadOutcome:
        return self.acquirer.download(name)

    def download_all(self) -> Dict[str, DownloadOutcome]:
        outcomes = self.acquirer.download_all()
        failed = [name for name, outcome in outcomes.items() if outcome.is_failure()]
        if failed:
            self.logger.log(
                f"Some libraries failed to download: {', '.join(failed)}",
                logging.ERROR,
            )
        return outcomes

    def update(self, name: str) -> DownloadOutcome:
        return self.updater.update(name)

    def update_outdated(self) -> Dict[str, DownloadOutcome]:
        return self.updater.update_outdated()

    def clear_cache(self) -> None:
        self.status_resolver.invalidate()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "LibraryManager":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
