"""Parser for jar-style manifest resources.

Only the main section is read: the ``Name: Value`` header lines before the
first blank line. A line starting with a single space continues the value
of the previous header. Attribute names are matched case-insensitively.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from typing import BinaryIO, Optional

from versionname.exceptions import ManifestFormatError

MANIFEST_ENCODING = "utf-8"
MANIFEST_VERSION = "Manifest-Version"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_NAME = re.compile(r"[A-Za-z0-9_-]{1,70}")
_HEADER_SEPARATOR = ": "


class ManifestAttributes(Mapping[str, str]):
    """Read-only, case-insensitive view of manifest main attributes.

    Iteration yields names in the spelling they had in the manifest.
    """

    def __init__(self, items: Optional[Mapping[str, str]] = None) -> None:
        self._items: dict[str, tuple[str, str]] = {}
        for name, value in (items or {}).items():
            self._items[name.lower()] = (name, value)

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()][1]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __repr__(self) -> str:
        return f"ManifestAttributes({dict(self.items())!r})"


def parse_manifest(stream: BinaryIO) -> ManifestAttributes:
    """Read and parse the main section of a manifest from a binary stream.

    Args:
        stream: Open binary stream positioned at the start of the manifest.

    Returns:
        Main-section attributes.

    Raises:
        OSError: If reading from the stream fails.
        UnicodeDecodeError: If the content is not valid UTF-8.
        ManifestFormatError: If the main section is malformed or lacks
            the ``Manifest-Version`` header.
    """
    return loads_manifest(stream.read().decode(MANIFEST_ENCODING))


def loads_manifest(text: str) -> ManifestAttributes:
    """Parse the main section of a manifest from decoded text."""
    headers: dict[str, str] = {}
    current: Optional[str] = None

    for number, line in enumerate(_LINE_BREAK.split(text), start=1):
        if not line:
            break

        if line.startswith(" "):
            if current is None:
                raise ManifestFormatError(
                    f"Continuation without a preceding header on line {number}",
                    line_number=number,
                )
            headers[current] += line[1:]
            continue

        name, separator, value = line.partition(_HEADER_SEPARATOR)
        if not separator:
            raise ManifestFormatError(
                f"Invalid header on line {number}: {line!r}", line_number=number
            )
        if not _NAME.fullmatch(name):
            raise ManifestFormatError(
                f"Invalid header name on line {number}: {name!r}",
                line_number=number,
            )

        # Later headers win; drop an earlier spelling of the same name.
        for existing in [n for n in headers if n.lower() == name.lower()]:
            del headers[existing]
        headers[name] = value
        current = name

    attributes = ManifestAttributes(headers)
    if MANIFEST_VERSION not in attributes:
        raise ManifestFormatError(f"Missing {MANIFEST_VERSION} header")
    return attributes
