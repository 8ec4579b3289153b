"""
Configuration parameters for libbundles.

The configuration is usually loaded from a `libbundles.toml` file:

    [libbundles]
    root_path = "/var/www/crm"
    temp_dir = "cache/upload"
    developer_mode = false
    insecure_hosts = []
    request_timeout = 30.0
    marker_file_name = "version.json"
    # catalog_path = "config/libraries.json"

    [libbundles.versions]
    lib_mPDF = "6.1.5"
    lib_roundcube = "1.2.3"
"""

import os
import pathlib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

try:
    import tomllib
except ModuleNotFoundError:
    # Python < 3.11
    import tomli as tomllib

from libbundles.libbundles_exceptions import LibbundlesException


@dataclass
class LibbundlesConfig:
    """
    Configuration parameters
    """

    root_path: str = "."
    temp_dir: str = os.path.join("cache", "upload")
    developer_mode: bool = False
    insecure_hosts: List[str] = field(default_factory=list)
    request_timeout: float = 30.0
    marker_file_name: str = "version.json"
    catalog_path: Optional[str] = None
    versions: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "LibbundlesConfig":
        """
        Create a LibbundlesConfig instance from a dictionary

        Raises:
            LibbundlesException: If a value has the wrong type
        """
        unknown = set(env.keys()) - set(cls.__dataclass_fields__.keys())
        if unknown:
            raise LibbundlesException(
                f"Unknown configuration options: {', '.join(sorted(unknown))}"
            )

        config = cls(**env)
        config.validate()
        return config

    @classmethod
    def from_toml(cls, path: str) -> "LibbundlesConfig":
        """
        Load the [libbundles] section of a TOML file.

        Relative `root_path` values are resolved against the directory of the file.
        """
        with open(path, "rb") as f:
            data = tomllib.load(f)

        section = dict(data.get("libbundles", {}))
        root_path = section.get("root_path", ".")
        if not os.path.isabs(root_path):
            section["root_path"] = str(
                pathlib.Path(path).resolve().parent / root_path
            )
        return cls.from_dict(section)

    def validate(self) -> None:
        if not isinstance(self.developer_mode, bool):
            raise LibbundlesException("developer_mode must be a boolean")
        if not isinstance(self.request_timeout, (int, float)) or self.request_timeout <= 0:
            raise LibbundlesException("request_timeout must be a positive number")
        if not isinstance(self.insecure_hosts, list) or not all(
            isinstance(h, str) for h in self.insecure_hosts
        ):
            raise LibbundlesException("insecure_hosts must be a list of host names")
        if not isinstance(self.versions, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in self.versions.items()
        ):
            raise LibbundlesException("versions must map package names to version strings")
        if not self.marker_file_name or os.sep in self.marker_file_name:
            raise LibbundlesException("marker_file_name must be a plain file name")

    def resolve_path(self, path: str) -> pathlib.Path:
        """Resolve a path relative to root_path."""
        candidate = pathlib.Path(path)
        if candidate.is_absolute():
            return candidate
        return pathlib.Path(self.root_path) / candidate

    def get_temp_directory(self) -> pathlib.Path:
        return self.resolve_path(self.temp_dir)

    def verify_tls_for(self, url: str) -> bool:
        """TLS verification is skipped only for hosts listed in insecure_hosts."""
        host = urlsplit(url).hostname or ""
        return host.lower() not in {h.lower() for h in self.insecure_hosts}
