"""
Read-only catalog of the library bundles known to the installer.
"""

import json
import pathlib
from importlib import resources
from typing import Dict, Iterator, List, Mapping, Optional

from libbundles.libbundles_exceptions import UnknownLibraryException
from libbundles.library_models import LibraryCatalog, LibraryDescriptor

DEFAULT_CATALOG = "libraries.json"


class LibraryRegistry:
    """
    Maps library names to their LibraryDescriptor.

    The set of libraries is fixed when the registry is built; there are no
    mutation operations.
    """

    def __init__(self, descriptors: Mapping[str, LibraryDescriptor]):
        self._descriptors: Dict[str, LibraryDescriptor] = dict(descriptors)

    @classmethod
    def from_catalog(
        cls, catalog: LibraryCatalog, root_path: Optional[str] = None
    ) -> "LibraryRegistry":
        """
        Build a registry from a parsed catalog.

        Args:
            catalog: The parsed libraries.json
            root_path: Base directory for relative install directories
        """
        descriptors = {}
        for name, descriptor in catalog.to_descriptors().items():
            install_dir = pathlib.Path(descriptor.install_dir)
            if root_path is not None and not install_dir.is_absolute():
                descriptor = descriptor.model_copy(
                    update={"install_dir": str(pathlib.Path(root_path) / install_dir)}
                )
            descriptors[name] = descriptor
        return cls(descriptors)

    @classmethod
    def from_json(cls, path: str, root_path: Optional[str] = None) -> "LibraryRegistry":
        with open(path, "r") as f:
            catalog = LibraryCatalog.from_dict(json.load(f))
        return cls.from_catalog(catalog, root_path)

    @classmethod
    def default(cls, root_path: Optional[str] = None) -> "LibraryRegistry":
        """The registry of the bundled libraries.json."""
        data = resources.files("libbundles").joinpath("data").joinpath(DEFAULT_CATALOG).read_text()
        return cls.from_catalog(LibraryCatalog.from_dict(json.loads(data)), root_path)

    def find(self, name: str) -> Optional[LibraryDescriptor]:
        return self._descriptors.get(name)

    def get(self, name: str) -> LibraryDescriptor:
        """
        Raises:
            UnknownLibraryException: If name is not registered
        """
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise UnknownLibraryException(name)
        return descriptor

    def names(self) -> List[str]:
        return list(self._descriptors.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __iter__(self) -> Iterator[LibraryDescriptor]:
        return iter(list(self._descriptors.values()))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"LibraryRegistry(libraries={self.names()})"
