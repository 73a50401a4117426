"""Resolve an application's version name from bundled resources.

Quick start::

    import versionname

    versionname.get_version_name_from_properties()   # app.properties / versionName
    versionname.get_version_name_from_manifest()     # META-INF/MANIFEST.MF / versionName

Both return the error sentinel ``"?"`` instead of raising; the log says why.
"""

from typing import Optional

from versionname._version import __version__
from versionname.config import (
    DEFAULT_MANIFEST_ATTRIBUTE,
    DEFAULT_MANIFEST_PATH,
    DEFAULT_PROPERTIES_FILE_PATH,
    DEFAULT_PROPERTY,
    ResolverConfig,
    load_config,
    load_config_or_defaults,
)
from versionname.loaders import (
    DirectoryResourceLoader,
    PackageResourceLoader,
    ResourceLoader,
    SearchPathResourceLoader,
)
from versionname.models import VERSION_STRING_ON_ERROR, LookupStatus, VersionLookup
from versionname.resolver import DEFAULT, Argument, VersionResolver

__all__ = [
    "__version__",
    "DEFAULT_MANIFEST_ATTRIBUTE",
    "DEFAULT_MANIFEST_PATH",
    "DEFAULT_PROPERTIES_FILE_PATH",
    "DEFAULT_PROPERTY",
    "VERSION_STRING_ON_ERROR",
    "DirectoryResourceLoader",
    "LookupStatus",
    "PackageResourceLoader",
    "ResolverConfig",
    "ResourceLoader",
    "SearchPathResourceLoader",
    "VersionLookup",
    "VersionResolver",
    "get_resolver",
    "get_version_name_from_manifest",
    "get_version_name_from_properties",
    "load_config",
]

_RESOLVER_INSTANCE: Optional[VersionResolver] = None


def get_resolver(loader: Optional[ResourceLoader] = None) -> VersionResolver:
    """Get the shared VersionResolver, or a dedicated one for *loader*.

    When called without arguments, returns a lazily created singleton that
    uses the default search-path loader. Both kinds of instance read their
    defaults from ``load_config()`` (``pyproject.toml`` and ``VERSIONNAME_*``
    environment variables).

    Args:
        loader: Resource loader for a dedicated resolver instance.

    Returns:
        VersionResolver instance.
    """
    global _RESOLVER_INSTANCE

    if loader is not None:
        return VersionResolver(loader, config=load_config_or_defaults())

    if _RESOLVER_INSTANCE is None:
        _RESOLVER_INSTANCE = VersionResolver(config=load_config_or_defaults())
    return _RESOLVER_INSTANCE


def get_version_name_from_properties(
    path: Argument = DEFAULT,
    key: Argument = DEFAULT,
    loader: Optional[ResourceLoader] = None,
) -> str:
    """Read the version name from a properties resource.

    Args:
        path: Resource path (default: ``"app.properties"``).
        key: Property key (default: ``"versionName"``).
        loader: Optional resource loader (default: search ``sys.path``).

    Returns:
        The version name, or ``VERSION_STRING_ON_ERROR``.
    """
    return get_resolver(loader).from_properties(path, key)


def get_version_name_from_manifest(
    path: Argument = DEFAULT,
    attribute: Argument = DEFAULT,
    loader: Optional[ResourceLoader] = None,
) -> str:
    """Read the version name from a main manifest attribute.

    Args:
        path: Resource path (default: ``"META-INF/MANIFEST.MF"``).
        attribute: Attribute name (default: ``"versionName"``).
        loader: Optional resource loader (default: search ``sys.path``).

    Returns:
        The version name, or ``VERSION_STRING_ON_ERROR``.
    """
    return get_resolver(loader).from_manifest(path, attribute)
