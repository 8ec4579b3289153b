"""
Expected versions of library packages.
"""

from typing import Dict, Mapping, Optional

from packaging.version import Version

from libbundles.libbundles_exceptions import LibbundlesException

DEVELOPER_MODE_TAG = "developer"


class VersionPolicy:
    """
    Supplies the version each package is expected at, the archive mode tag to
    download, and the comparison between an installed and an expected version.
    """

    def __init__(self, expected_versions: Mapping[str, str], developer_mode: bool = False):
        self.expected_versions: Dict[str, str] = dict(expected_versions)
        self.developer_mode = developer_mode

    def find_version(self, package_name: str) -> Optional[str]:
        return self.expected_versions.get(package_name)

    def get_version(self, package_name: str) -> str:
        version = self.find_version(package_name)
        if version is None:
            raise LibbundlesException(f"No expected version configured for {package_name}")
        return version

    def get_mode(self, package_name: str) -> str:
        """
        The archive tag to download: the developer branch in developer mode,
        the expected release version otherwise.
        """
        if self.developer_mode:
            return DEVELOPER_MODE_TAG
        return self.get_version(package_name)

    def has_mode(self, package_name: str) -> bool:
        """Whether get_mode can build an archive tag for the package."""
        return self.developer_mode or self.find_version(package_name) is not None

    def is_behind(self, installed_version: str, package_name: str) -> bool:
        """
        Check whether installed_version is older than the expected version.

        Packages without an expected version are never behind.

        Raises:
            packaging.version.InvalidVersion: If either version cannot be parsed
        """
        expected = self.find_version(package_name)
        if expected is None:
            return False
        return Version(installed_version) < Version(expected)
