"""Best-effort lookup of an application's version name.

The resolver opens a resource through its :class:`ResourceLoader`, parses it
as properties or as a manifest, and returns the value stored under the
requested key. Lookups never raise: every failure is logged once, at the
point where it is detected, and the error sentinel is returned instead.
"""

import logging
from enum import Enum
from types import TracebackType
from typing import BinaryIO, Callable, Mapping, Optional, Union

from versionname.config import ResolverConfig
from versionname.formats import parse_manifest, parse_properties
from versionname.loaders import ResourceLoader, SearchPathResourceLoader
from versionname.models import LookupStatus, VersionLookup
from versionname.utils.logging import configure_module_logger

logger = configure_module_logger(__name__, level=logging.INFO)

LOG_KEY_NULL = "Version name key must not be None"
LOG_RESOURCE_PATH_NULL = "Resource path must not be None"
LOG_RESOURCE_NOT_FOUND = "Resource not found: %s"
LOG_EXCEPTION_READING_FROM_RESOURCE = "Exception reading from resource %s: %s"
LOG_NOT_FOUND_IN_RESOURCE = "%s not found in resource %s"
LOG_EXCEPTION_ON_CLOSE = "Exception on close of resource %s: %s"

Parser = Callable[[BinaryIO], Mapping[str, str]]


class _Default(Enum):
    """Marks an argument that was not passed, as opposed to ``None``."""

    TOKEN = "default"


DEFAULT = _Default.TOKEN

Argument = Union[str, None, _Default]


class _ResourceGuard:
    """Closes a resource stream on exit and logs, but swallows, close errors."""

    def __init__(self, stream: BinaryIO, path: str) -> None:
        self.stream = stream
        self.path = path
        self.close_failed = False

    def __enter__(self) -> BinaryIO:
        return self.stream

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        try:
            self.stream.close()
        except Exception as close_exc:
            self.close_failed = True
            logger.warning(LOG_EXCEPTION_ON_CLOSE, self.path, close_exc)


class VersionResolver:
    """Reads version names from properties and manifest resources.

    Example::

        from versionname import VersionResolver
        from versionname.loaders import DirectoryResourceLoader

        resolver = VersionResolver(DirectoryResourceLoader("build/resources"))
        resolver.from_properties()              # "app.properties" / "versionName"
        resolver.from_manifest("META-INF/MANIFEST.MF", "Implementation-Version")

    Calling a lookup without arguments uses the configured default path and
    key. Passing ``None`` explicitly is an invalid argument and yields the
    error sentinel.
    """

    def __init__(
        self,
        loader: Optional[ResourceLoader] = None,
        config: Optional[ResolverConfig] = None,
    ) -> None:
        """Initialize a resolver.

        Args:
            loader: Resource loader used for every lookup. Defaults to a
                ``SearchPathResourceLoader`` over the configured search paths.
            config: Default paths and keys. Defaults to ``ResolverConfig()``.
        """
        self.config = config or ResolverConfig()
        self.loader = loader or SearchPathResourceLoader(self.config.search_paths)

    def from_properties(
        self, path: Argument = DEFAULT, key: Argument = DEFAULT
    ) -> str:
        """Return the version name stored under *key* in a properties resource."""
        return self.resolve_properties(path, key).version_name

    def from_manifest(
        self, path: Argument = DEFAULT, attribute: Argument = DEFAULT
    ) -> str:
        """Return the version name stored in a main manifest attribute."""
        return self.resolve_manifest(path, attribute).version_name

    def resolve_properties(
        self, path: Argument = DEFAULT, key: Argument = DEFAULT
    ) -> VersionLookup:
        """Look up *key* in a properties resource.

        Args:
            path: Resource path (default: ``config.properties_path``).
            key: Property key (default: ``config.property_key``).

        Returns:
            VersionLookup describing the value or the reason it is missing.
        """
        if path is DEFAULT:
            path = self.config.properties_path
        if key is DEFAULT:
            key = self.config.property_key
        return self._resolve(path, key, parse_properties)

    def resolve_manifest(
        self, path: Argument = DEFAULT, attribute: Argument = DEFAULT
    ) -> VersionLookup:
        """Look up a main attribute in a manifest resource.

        Args:
            path: Resource path (default: ``config.manifest_path``).
            attribute: Attribute name (default: ``config.manifest_attribute``).

        Returns:
            VersionLookup describing the value or the reason it is missing.
        """
        if path is DEFAULT:
            path = self.config.manifest_path
        if attribute is DEFAULT:
            attribute = self.config.manifest_attribute
        return self._resolve(path, attribute, parse_manifest)

    def _resolve(
        self, path: Optional[str], key: Optional[str], parse: Parser
    ) -> VersionLookup:
        if key is None:
            logger.error(LOG_KEY_NULL)
            return VersionLookup(status=LookupStatus.KEY_MISSING_ARGUMENT, path=path)
        if path is None:
            logger.error(LOG_RESOURCE_PATH_NULL)
            return VersionLookup(status=LookupStatus.PATH_MISSING_ARGUMENT, key=key)

        try:
            stream = self.loader.open_resource(path)
        except Exception as exc:
            logger.error(LOG_EXCEPTION_READING_FROM_RESOURCE, path, exc)
            return VersionLookup(status=LookupStatus.READ_ERROR, path=path, key=key)

        if stream is None:
            logger.error(LOG_RESOURCE_NOT_FOUND, path)
            return VersionLookup(
                status=LookupStatus.RESOURCE_NOT_FOUND, path=path, key=key
            )

        document: Optional[Mapping[str, str]] = None
        guard = _ResourceGuard(stream, path)
        with guard:
            try:
                document = parse(stream)
            except Exception as exc:
                logger.error(LOG_EXCEPTION_READING_FROM_RESOURCE, path, exc)

        if document is None:
            return VersionLookup(
                status=LookupStatus.READ_ERROR,
                path=path,
                key=key,
                close_failed=guard.close_failed,
            )

        value = document.get(key)
        if value is None:
            logger.error(LOG_NOT_FOUND_IN_RESOURCE, key, path)
            return VersionLookup(
                status=LookupStatus.KEY_NOT_FOUND,
                path=path,
                key=key,
                close_failed=guard.close_failed,
            )

        if self.config.verbose:
            logger.info("Read version name %s from %s in %s", value, key, path)
        return VersionLookup(
            status=LookupStatus.OK,
            value=value,
            path=path,
            key=key,
            close_failed=guard.close_failed,
        )

    def __repr__(self) -> str:
        return f"VersionResolver(loader={self.loader!r})"
