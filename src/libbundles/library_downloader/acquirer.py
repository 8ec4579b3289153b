"""
Library acquirer implementation.

Handles downloading library archives and installing them.
"""

import logging
import pathlib
import shutil
from typing import Dict, Optional

import requests

from libbundles.libbundles_config import LibbundlesConfig
from libbundles.libbundles_exceptions import LibbundlesException
from libbundles.libbundles_logger import LibbundlesLogger
from libbundles.libbundles_utils import FileUtils, HttpUtils
from libbundles.library_models import DownloadOutcome, LibraryDescriptor
from libbundles.library_registry import LibraryRegistry, StatusResolver, VersionPolicy


class LibraryAcquirer:
    """
    Downloads library archives and installs them into their install directory.

    An install directory is only ever replaced as a whole: the archive folder
    is extracted into a staging directory and swapped into place once it holds
    a version marker, so an aborted download leaves the directory untouched.
    """

    def __init__(
        self,
        registry: LibraryRegistry,
        status_resolver: StatusResolver,
        version_policy: VersionPolicy,
        config: LibbundlesConfig,
        logger: LibbundlesLogger,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the library acquirer.

        Args:
            registry: The libraries that can be downloaded
            status_resolver: Used to detect installed libraries and invalidated after installs
            version_policy: Supplies the archive mode tag per package
            config: Temp directory, timeout and TLS settings
            logger: Logger for progress and error messages
            session: HTTP session; a new requests.Session when omitted
        """
        self.registry = registry
        self.status_resolver = status_resolver
        self.version_policy = version_policy
        self.config = config
        self.logger = logger
        self.session = session if session is not None else requests.Session()

    def archive_path(self, name: str) -> pathlib.Path:
        return self.config.get_temp_directory() / f"{name}.zip"

    def download(self, name: str, force: bool = False) -> DownloadOutcome:
        """
        Download and install a library.

        Args:
            name: The library name
            force: Download even if the library is already installed

        Returns:
            SKIPPED if already installed, DOWNLOADED on success,
            SOURCE_UNREACHABLE or ARCHIVE_EMPTY on a failed fetch,
            VERSION_UNKNOWN if no archive tag can be built for the package

        Raises:
            UnknownLibraryException: If name is not registered
            OSError: On filesystem errors while installing
        """
        descriptor = self.registry.get(name)

        if not force and self.status_resolver.is_installed(name):
            self.logger.log(
                f"Library has already been downloaded: {name}", logging.INFO
            )
            return DownloadOutcome.SKIPPED

        if not self.version_policy.has_mode(descriptor.package_name):
            self.logger.log(
                f"No expected version configured for library {name} ({descriptor.package_name})",
                logging.WARNING,
            )
            return DownloadOutcome.VERSION_UNKNOWN

        mode = self.version_policy.get_mode(descriptor.package_name)
        url = descriptor.archive_url(mode)
        archive_path = self.archive_path(name)

        outcome = self._fetch_archive(name, url, archive_path)
        if outcome is not None:
            return outcome

        try:
            return self._install_archive(descriptor, archive_path, descriptor.archive_folder(mode))
        finally:
            FileUtils.remove_file(archive_path)
            self.status_resolver.invalidate(name)

    def download_all(self) -> Dict[str, DownloadOutcome]:
        """
        Download all registered libraries that are not installed yet.

        Returns:
            Dictionary mapping library names to their download outcome
        """
        outcomes = {}
        for name in self.registry.names():
            outcomes[name] = self.download(name)
        return outcomes

    def _fetch_archive(
        self, name: str, url: str, archive_path: pathlib.Path
    ) -> Optional[DownloadOutcome]:
        """
        Fetch the archive into archive_path.

        Returns:
            None when archive_path holds a non-empty archive, the failure outcome otherwise
        """
        verify = self.config.verify_tls_for(url)
        timeout = self.config.request_timeout

        try:
            reachable = HttpUtils.check_redirect(self.session, url, verify, timeout)
        except requests.RequestException as e:
            self.logger.log(f"Can not connect to the server {url}: {e}", logging.WARNING)
            return DownloadOutcome.SOURCE_UNREACHABLE

        if not reachable:
            self.logger.log(f"Can not connect to the server {url}", logging.WARNING)
            return DownloadOutcome.SOURCE_UNREACHABLE

        # an archive left by an earlier attempt must never be installed
        FileUtils.remove_file(archive_path)
        self.logger.log(f"Started downloading library: {name}", logging.DEBUG)
        try:
            HttpUtils.download_file(self.logger, self.session, url, archive_path, verify, timeout)
            self.logger.log(f"Completed downloading library: {name}", logging.DEBUG)
        except (requests.RequestException, LibbundlesException) as e:
            self.logger.log(f"Download of library {name} failed: {e}", logging.WARNING)
            FileUtils.remove_file(archive_path)
            return DownloadOutcome.ARCHIVE_EMPTY

        if not FileUtils.is_non_empty_file(archive_path):
            self.logger.log(f"No import file: {name}", logging.WARNING)
            FileUtils.remove_file(archive_path)
            return DownloadOutcome.ARCHIVE_EMPTY

        return None

    def _install_archive(
        self, descriptor: LibraryDescriptor, archive_path: pathlib.Path, folder_name: str
    ) -> DownloadOutcome:
        install_dir = pathlib.Path(descriptor.install_dir)
        staging_dir = FileUtils.create_staging_directory(install_dir)

        try:
            try:
                found = FileUtils.extract_archive_folder(archive_path, folder_name, staging_dir)
            except LibbundlesException as e:
                self.logger.log(f"Invalid archive for library {descriptor.name}: {e}", logging.WARNING)
                return DownloadOutcome.ARCHIVE_EMPTY

            if not found:
                self.logger.log(
                    f"Archive for library {descriptor.name} has no folder {folder_name}",
                    logging.WARNING,
                )
                return DownloadOutcome.ARCHIVE_EMPTY

            if not (staging_dir / self.status_resolver.marker_file_name).is_file():
                self.logger.log(
                    f"Archive for library {descriptor.name} has no version marker",
                    logging.WARNING,
                )
                return DownloadOutcome.ARCHIVE_EMPTY

            FileUtils.swap_directory(staging_dir, install_dir)
        finally:
            if staging_dir.exists():
                shutil.rmtree(staging_dir)

        self.logger.log(
            f"Successfully installed library {descriptor.name} to {install_dir}",
            logging.INFO,
        )
        return DownloadOutcome.DOWNLOADED
