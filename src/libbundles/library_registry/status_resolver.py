"""
Installation state of registered libraries.
"""

import json
import logging
import pathlib
from typing import Dict, Optional

from packaging.version import InvalidVersion
from pydantic import ValidationError

from libbundles.libbundles_logger import LibbundlesLogger
from libbundles.library_models import (
    LibraryDescriptor,
    LibraryReport,
    LibraryStatus,
    VersionInfo,
)
from libbundles.library_registry.registry import LibraryRegistry
from libbundles.library_registry.version_policy import VersionPolicy


class StatusResolver:
    """
    Determines whether a library is not installed, outdated or current.

    The version marker file inside the install directory is authoritative: a
    directory without it counts as not installed. Results are memoized in
    `cache`, which is owned by the caller and cleared through invalidate().
    """

    def __init__(
        self,
        registry: LibraryRegistry,
        version_policy: VersionPolicy,
        logger: LibbundlesLogger,
        marker_file_name: str = "version.json",
        cache: Optional[Dict[str, LibraryStatus]] = None,
    ):
        self.registry = registry
        self.version_policy = version_policy
        self.logger = logger
        self.marker_file_name = marker_file_name
        self.cache: Dict[str, LibraryStatus] = cache if cache is not None else {}

    def marker_path(self, descriptor: LibraryDescriptor) -> pathlib.Path:
        return pathlib.Path(descriptor.install_dir) / self.marker_file_name

    def is_installed(self, name: str) -> bool:
        return self.marker_path(self.registry.get(name)).is_file()

    def read_version(self, name: str) -> Optional[VersionInfo]:
        """
        Parse the marker file of a library.

        Returns:
            None if the marker file does not exist

        Raises:
            ValueError: If the marker is not valid JSON or has no version
        """
        marker = self.marker_path(self.registry.get(name))
        if not marker.is_file():
            return None
        with open(marker, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Version marker {marker} is not a JSON object")
        return VersionInfo(**data)

    def resolve_status(self, name: str) -> LibraryStatus:
        """
        Raises:
            UnknownLibraryException: If name is not registered
        """
        descriptor = self.registry.get(name)
        if name in self.cache:
            return self.cache[name]

        status = self._compute_status(descriptor)
        self.cache[name] = status
        return status

    def _compute_status(self, descriptor: LibraryDescriptor) -> LibraryStatus:
        if not self.marker_path(descriptor).is_file():
            return LibraryStatus.NOT_INSTALLED

        try:
            version_info = self.read_version(descriptor.name)
            behind = self.version_policy.is_behind(
                version_info.version, descriptor.package_name
            )
        except (ValueError, ValidationError, InvalidVersion) as e:
            self.logger.log(
                f"Unreadable version marker for library {descriptor.name}: {e}",
                logging.WARNING,
            )
            return LibraryStatus.OUTDATED

        return LibraryStatus.OUTDATED if behind else LibraryStatus.CURRENT

    def invalidate(self, name: Optional[str] = None) -> None:
        """Drop the memoized status of one library, or of all libraries."""
        if name is None:
            self.cache.clear()
        else:
            self.cache.pop(name, None)

    def report(self, name: str) -> LibraryReport:
        descriptor = self.registry.get(name)
        status = self.resolve_status(name)

        installed_version = None
        if status != LibraryStatus.NOT_INSTALLED:
            try:
                version_info = self.read_version(name)
                installed_version = version_info.version if version_info else None
            except (ValueError, ValidationError):
                installed_version = None

        return LibraryReport(
            name=name,
            descriptor=descriptor,
            status=status,
            installed_version=installed_version,
            directory_exists=pathlib.Path(descriptor.install_dir).is_dir(),
        )
