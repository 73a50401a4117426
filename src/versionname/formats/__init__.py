"""Parsers for the resource formats a version name can be read from."""

from versionname.formats.manifest import (
    MANIFEST_VERSION,
    ManifestAttributes,
    loads_manifest,
    parse_manifest,
)
from versionname.formats.properties import loads_properties, parse_properties

__all__ = [
    "MANIFEST_VERSION",
    "ManifestAttributes",
    "loads_manifest",
    "loads_properties",
    "parse_manifest",
    "parse_properties",
]
