"""Result types for version name lookups."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

VERSION_STRING_ON_ERROR = "?"


class LookupStatus(str, Enum):
    """Outcome of a single lookup."""

    OK = "ok"
    KEY_MISSING_ARGUMENT = "key_missing_argument"
    PATH_MISSING_ARGUMENT = "path_missing_argument"
    RESOURCE_NOT_FOUND = "resource_not_found"
    READ_ERROR = "read_error"
    KEY_NOT_FOUND = "key_not_found"


class VersionLookup(BaseModel):
    """Outcome of reading a version name from a resource.

    ``version_name`` gives the plain string contract: the value that was
    found, or :data:`VERSION_STRING_ON_ERROR`.
    """

    status: LookupStatus
    value: Optional[str] = None
    path: Optional[str] = None
    key: Optional[str] = None
    close_failed: bool = Field(
        default=False,
        description="Closing the resource failed after it was read",
    )

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.OK

    @property
    def version_name(self) -> str:
        if self.ok and self.value is not None:
            return self.value
        return VERSION_STRING_ON_ERROR

    def __str__(self) -> str:
        return self.version_name
