"""Parser for Java-style ``.properties`` resources.

The byte stream is decoded as ISO-8859-1 and split into logical lines.
Supported syntax:

- ``#`` and ``!`` comment lines, blank lines
- ``key=value``, ``key:value`` and ``key value`` separators
- trailing backslash line continuations
- ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes
"""

from __future__ import annotations

import re
import string
from typing import BinaryIO, Iterator

from versionname.exceptions import PropertiesFormatError

PROPERTIES_ENCODING = "iso-8859-1"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_COMMENT_MARKERS = "#!"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(stream: BinaryIO) -> dict[str, str]:
    """Read and parse a properties document from a binary stream.

    Args:
        stream: Open binary stream positioned at the start of the document.

    Returns:
        Mapping of property keys to values.

    Raises:
        OSError: If reading from the stream fails.
        PropertiesFormatError: If the content contains a malformed escape.
    """
    return loads_properties(stream.read().decode(PROPERTIES_ENCODING))


def loads_properties(text: str) -> dict[str, str]:
    """Parse properties from already decoded text.

    Later occurrences of a key override earlier ones.
    """
    properties: dict[str, str] = {}
    for line_number, line in _logical_lines(text):
        key, value = _split_key_value(line)
        properties[_unescape(key, line_number)] = _unescape(value, line_number)
    return properties


def _logical_lines(text: str) -> Iterator[tuple[int, str]]:
    buffer: list[str] = []
    start = 0
    for number, raw in enumerate(_LINE_BREAK.split(text), start=1):
        line = raw.lstrip(_WHITESPACE)
        if not buffer:
            if not line or line[0] in _COMMENT_MARKERS:
                continue
            start = number
        if _continues(line):
            buffer.append(line[:-1])
            continue
        buffer.append(line)
        yield start, "".join(buffer)
        buffer = []
    if buffer:
        yield start, "".join(buffer)


def _continues(line: str) -> bool:
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def _split_key_value(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str, line_number: int) -> str:
    if "\\" not in text:
        return text

    chars: list[str] = []
    index = 0
    while index < len(text):
        char = text[index]
        index += 1
        if char != "\\":
            chars.append(char)
            continue
        if index >= len(text):
            break

        char = text[index]
        index += 1
        if char == "u":
            digits = text[index : index + 4]
            if len(digits) != 4 or any(d not in string.hexdigits for d in digits):
                raise PropertiesFormatError(
                    f"Malformed \\uxxxx encoding on line {line_number}",
                    line_number=line_number,
                )
            chars.append(chr(int(digits, 16)))
            index += 4
        else:
            chars.append(_ESCAPES.get(char, char))
    return "".join(chars)
