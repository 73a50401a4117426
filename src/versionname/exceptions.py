"""Exception classes raised while parsing version resources.

These never escape the public lookup functions; the resolver catches them
and degrades to the error sentinel. They are public so that the parsers
can be used on their own.
"""

from typing import Optional


class VersionNameError(Exception):
    """Base class for all versionname errors."""


class ResourceFormatError(VersionNameError, ValueError):
    """Raised when resource content cannot be parsed.

    Attributes:
        line_number: 1-based line where parsing failed, if known.
    """

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class PropertiesFormatError(ResourceFormatError):
    """Raised for malformed ``.properties`` content."""


class ManifestFormatError(ResourceFormatError):
    """Raised for malformed manifest content."""
