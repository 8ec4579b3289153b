"""
This file contains the exceptions raised by libbundles.
"""


class LibbundlesException(Exception):
    """
    Exceptions raised by libbundles.
    """

    def __init__(self, message: str):
        super().__init__(message)


class UnknownLibraryException(LibbundlesException):
    """
    Raised when a library name is not present in the registry.
    """

    def __init__(self, name: str):
        super().__init__(f"Library does not exist: {name}")
        self.name = name
