"""Command-line interface for versionname.

Prints the version name read from a properties or manifest resource. The
exit code is 1 when the lookup fell back to the error sentinel.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from versionname.config import load_config
from versionname.loaders import DirectoryResourceLoader, ResourceLoader
from versionname.models import VersionLookup
from versionname.resolver import DEFAULT, VersionResolver

app = typer.Typer(
    name="versionname",
    help="versionname - read an application's version name from its resources",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()


def _build_resolver(root: Optional[Path], verbose: bool) -> VersionResolver:
    config = load_config(verbose=verbose or None)

    loader: Optional[ResourceLoader] = None
    if root is not None:
        loader = DirectoryResourceLoader(root)
    return VersionResolver(loader=loader, config=config)


def _report(lookup: VersionLookup) -> None:
    console.print(lookup.version_name, markup=False, highlight=False)
    if not lookup.ok:
        raise typer.Exit(code=1)


@app.command()
def properties(
    path: Optional[str] = typer.Option(
        None, "--path", "-p", help="Resource path of the properties file"
    ),
    key: Optional[str] = typer.Option(
        None, "--key", "-k", help="Property holding the version name"
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Directory to load resources from"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
) -> None:
    """Print the version name from a properties resource."""
    resolver = _build_resolver(root, verbose)
    _report(
        resolver.resolve_properties(
            DEFAULT if path is None else path, DEFAULT if key is None else key
        )
    )


@app.command()
def manifest(
    path: Optional[str] = typer.Option(
        None, "--path", "-p", help="Resource path of the manifest"
    ),
    attribute: Optional[str] = typer.Option(
        None, "--attribute", "-a", help="Main attribute holding the version name"
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Directory to load resources from"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
) -> None:
    """Print the version name from a manifest resource."""
    resolver = _build_resolver(root, verbose)
    _report(
        resolver.resolve_manifest(
            DEFAULT if path is None else path,
            DEFAULT if attribute is None else attribute,
        )
    )


if __name__ == "__main__":
    app()
