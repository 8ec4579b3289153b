"""
Pydantic data models for libraries.json and the per-library version marker.

libraries.json structure:
{
  "_description": "...",
  "libraries": {
    "mPDF": {
      "installDir": "libraries/mPDF/",
      "sourceUrl": "https://github.com/YetiForceCompany/lib_mPDF",
      "packageName": "lib_mPDF"
    },
    ...
  }
}
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class LibraryDescriptor(BaseModel):
    """
    An optional library bundle known to the registry.

    Immutable once created.
    """

    name: str = Field(..., description="Unique library name")
    install_dir: str = Field(
        ..., alias="installDir", description="Directory the library is installed into"
    )
    source_url: str = Field(
        ..., alias="sourceUrl", description="Base URL of the archive repository"
    )
    package_name: str = Field(
        ...,
        alias="packageName",
        description="Name used to build archive folder names and to look up versions",
    )
    description: Optional[str] = Field(None, alias="_description")

    class Config:
        frozen = True
        populate_by_name = True

    def archive_url(self, mode: str) -> str:
        """URL of the zip archive for a mode tag."""
        return f"{self.source_url.rstrip('/')}/archive/{mode}.zip"

    def archive_folder(self, mode: str) -> str:
        """Top-level folder inside the archive that holds the library."""
        return f"{self.package_name}-{mode}"


class LibraryEntry(BaseModel):
    """A catalog entry; the name comes from the key in the catalog."""

    install_dir: str = Field(..., alias="installDir")
    source_url: str = Field(..., alias="sourceUrl")
    package_name: str = Field(..., alias="packageName")
    description: Optional[str] = Field(None, alias="_description")

    class Config:
        extra = "allow"
        populate_by_name = True


class LibraryCatalog(BaseModel):
    """
    The complete libraries.json file.
    """

    description: Optional[str] = Field(None, alias="_description")
    libraries: Dict[str, LibraryEntry] = Field(default_factory=dict)

    class Config:
        extra = "allow"
        populate_by_name = True

    @classmethod
    def from_dict(cls, data: dict) -> "LibraryCatalog":
        return cls(**data)

    def to_descriptors(self) -> Dict[str, LibraryDescriptor]:
        return {
            name: LibraryDescriptor(
                name=name,
                install_dir=entry.install_dir,
                source_url=entry.source_url,
                package_name=entry.package_name,
                description=entry.description,
            )
            for name, entry in self.libraries.items()
        }


class VersionInfo(BaseModel):
    """
    Contents of the version marker file written into an installed library.
    """

    version: str = Field(..., description="Installed version")

    class Config:
        extra = "allow"
