"""Cyclopts CLI entrypoint for assembling documentation sites.

The ``assemble-docs`` console script defined here builds the site described by
a YAML configuration and can print the sidebar nav outline for inspection.

Examples
--------
Build the site for the default configuration:

>>> from docs_assembly.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from docs_assembly.cli import app
>>> app(["build", "--output-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_site_config
from .models import NavGroup
from .renderer import BuildError
from .site_builder import SiteBuilder

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import NavEntry

DEFAULT_CONFIG = Path("site.yaml")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(
    name="assemble-docs",
    config=cyclopts.config.Env("DOCS_ASSEMBLY_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def format_nav_outline(entries: cabc.Sequence[NavEntry]) -> list[str]:
    """Return printable lines describing the nav tree, one per link or title."""
    lines: list[str] = []
    for entry in entries:
        if isinstance(entry, NavGroup):
            lines.append(entry.collection_title or f"[{entry.key}]")
            lines.extend(f"  {link.nav_text} -> {link.path}" for link in entry.members)
        else:
            lines.append(f"{entry.nav_text} -> {entry.path}")
    return lines


@app.command(help="Assemble content units into pages and write the site.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="DOCS_ASSEMBLY_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="DOCS_ASSEMBLY_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Build every page for the configured content directory.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file.
    output_dir : Path or None, optional
        Override for the configured output directory.
    verbose : bool, optional
        Log debug records from the assembly pipeline.

    Raises
    ------
    SystemExit
        With status 1 when the build is blocked (content query failure or
        conflicting page routes); nothing is written in that case.
    """
    _configure_logging(verbose=verbose)
    site_config = load_site_config(config)
    builder = SiteBuilder(site_config, output_dir=output_dir)
    try:
        written = builder.run()
    except BuildError as exc:
        cause = f" ({exc.__cause__})" if exc.__cause__ else ""
        print(f"error: {exc}{cause}", file=sys.stderr)
        raise SystemExit(1) from exc
    for path in written:
        print(f"wrote {_format_path(path)}")


@app.command(help="Print the sidebar navigation outline.")
def nav(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="DOCS_ASSEMBLY_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print the nav tree derived from content metadata."""
    site_config = load_site_config(config)
    try:
        entries = SiteBuilder(site_config).nav_tree()
    except BuildError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    for line in format_nav_outline(entries):
        print(line)


def main() -> None:
    """Invoke the Cyclopts application behind the ``assemble-docs`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
