"""Resource loaders used to open version resources.

A loader turns a resource path such as ``"META-INF/MANIFEST.MF"`` into an
open binary stream, or ``None`` when no such resource exists. Resource paths
are always ``/``-separated and relative; a leading ``/`` is ignored.

Loaders are passed to :class:`versionname.resolver.VersionResolver` when it is
constructed, so tests can swap in their own implementation.
"""

import sys
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union


def normalize_resource_path(path: str) -> str:
    """Strip leading slashes so the path is relative to a resource root."""
    return path.lstrip("/")


def resolve_within(root: Path, path: str) -> Optional[Path]:
    """Return the file for *path* below *root*, or None if it is not one.

    Paths that escape *root* (``..`` segments, symlinks pointing elsewhere)
    are treated as absent.
    """
    candidate = (root / normalize_resource_path(path)).resolve()
    if not candidate.is_relative_to(root.resolve()):
        return None
    if not candidate.is_file():
        return None
    return candidate


class ResourceLoader(ABC):
    """Abstract base class for all resource loaders."""

    @abstractmethod
    def open_resource(self, path: str) -> Optional[BinaryIO]:
        """Open a named resource for binary reading.

        Args:
            path: ``/``-separated resource path.

        Returns:
            Open binary stream owned by the caller, or ``None`` if the
            resource does not exist.

        Raises:
            OSError: If the resource exists but cannot be opened.
        """
        ...


class DirectoryResourceLoader(ResourceLoader):
    """Loads resources from files below a single root directory."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def open_resource(self, path: str) -> Optional[BinaryIO]:
        candidate = resolve_within(self.root, path)
        if candidate is None:
            return None
        return candidate.open("rb")

    def __repr__(self) -> str:
        return f"DirectoryResourceLoader(root={str(self.root)!r})"


class SearchPathResourceLoader(ResourceLoader):
    """Searches a list of directories in order, like a class path.

    By default the entries of ``sys.path`` are searched at lookup time, so
    resources shipped next to the application's top-level modules are found.
    Entries that are not directories (zip archives, eggs) are skipped.
    """

    def __init__(self, paths: Optional[Iterable[Union[str, Path]]] = None) -> None:
        self._paths = None if paths is None else [Path(p) for p in paths]

    @property
    def paths(self) -> list[Path]:
        if self._paths is not None:
            return list(self._paths)
        return [Path(entry or ".") for entry in sys.path]

    def open_resource(self, path: str) -> Optional[BinaryIO]:
        for directory in self.paths:
            if not directory.is_dir():
                continue
            candidate = resolve_within(directory, path)
            if candidate is not None:
                return candidate.open("rb")
        return None

    def __repr__(self) -> str:
        return f"SearchPathResourceLoader(paths={self._paths!r})"


class PackageResourceLoader(ResourceLoader):
    """Loads resources bundled inside an importable package.

    Uses ``importlib.resources`` so it also works for zip-apps and frozen
    binaries.
    """

    def __init__(self, package: str) -> None:
        self.package = package

    def open_resource(self, path: str) -> Optional[BinaryIO]:
        try:
            root = resources.files(self.package)
        except (ModuleNotFoundError, TypeError):
            # Unknown name or a plain module without resources.
            return None

        parts = normalize_resource_path(path).split("/")
        if ".." in parts:
            return None

        candidate = root
        for part in parts:
            if part and part != ".":
                candidate = candidate.joinpath(part)
        if not candidate.is_file():
            return None
        stream: BinaryIO = candidate.open("rb")
        return stream

    def __repr__(self) -> str:
        return f"PackageResourceLoader(package={self.package!r})"
