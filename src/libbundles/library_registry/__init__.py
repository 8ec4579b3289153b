"""
Library registry and status resolution.

This package handles:
1. Loading the catalog of known library bundles
2. Supplying expected versions and archive mode tags
3. Determining whether a library is missing, outdated or current
"""

from .registry import LibraryRegistry
from .status_resolver import StatusResolver
from .version_policy import VersionPolicy

__all__ = ["LibraryRegistry", "StatusResolver", "VersionPolicy"]
