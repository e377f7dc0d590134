"""Render assembled pages into themed HTML files on disk."""

from __future__ import annotations

import collections
import typing as typ

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from ._constants import PAGE_INDEX_FILENAME
from .merger import DEFAULT_TEMPLATES_DIR

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .models import NavEntry, Page


class BuildError(RuntimeError):
    """Raised when a site build cannot produce a complete page set."""


class PageConflictError(BuildError):
    """Raised when two assembled pages claim the same route."""


def output_path_for(route: str, output_dir: Path) -> Path:
    """Return the file a page served at ``route`` is written to.

    ``/guide/install`` maps to ``<output_dir>/guide/install/index.html`` and
    ``/`` to ``<output_dir>/index.html``.

    Raises
    ------
    BuildError
        If a ``.`` or ``..`` segment would place the file outside
        ``output_dir``.
    """
    segments = [segment for segment in route.split("/") if segment]
    if any(segment in {".", ".."} for segment in segments):
        msg = f"Route '{route}' escapes the output directory."
        raise BuildError(msg)
    return output_dir.joinpath(*segments, PAGE_INDEX_FILENAME)


class PageRenderer:
    """Render pages and the sidebar nav through the page template."""

    def __init__(
        self, site_name: str = "Documentation", *, templates_dir: Path | None = None
    ) -> None:
        """Initialize the renderer.

        Parameters
        ----------
        site_name : str, optional
            Title placed in every page head.
        templates_dir : Path, optional
            Directory containing ``page.jinja``; defaults to the package
            templates.
        """
        self.site_name = site_name
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page.jinja")

    def render(self, page: Page, nav_entries: cabc.Sequence[NavEntry]) -> str:
        """Return the full HTML document for ``page``."""
        return self.template.render(
            site_name=self.site_name,
            page=page,
            nav_entries=nav_entries,
            content=Markup(page.html),  # noqa: S704 - assembled markup is trusted
        )

    def render_all(
        self,
        pages: cabc.Sequence[Page],
        nav_entries: cabc.Sequence[NavEntry],
        output_dir: Path,
    ) -> dict[Path, str]:
        """Render every page in memory, keyed by destination file.

        Raises
        ------
        PageConflictError
            If two pages share a route; nothing is rendered in that case.
        BuildError
            If a route would be written outside ``output_dir``.
        """
        targets = [(output_path_for(page.path, output_dir), page) for page in pages]
        counts = collections.Counter(target for target, _page in targets)
        duplicates = sorted(
            page.path for target, page in targets if counts[target] > 1
        )
        if duplicates:
            msg = f"Multiple pages claim the same path: {', '.join(duplicates)}"
            raise PageConflictError(msg)
        return {target: self.render(page, nav_entries) for target, page in targets}


def write_documents(documents: cabc.Mapping[Path, str]) -> list[Path]:
    """Write each rendered document to its path and return the paths written."""
    written: list[Path] = []
    for path, html in documents.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding="utf-8")
        written.append(path)
    return written


__all__ = [
    "BuildError",
    "PageConflictError",
    "PageRenderer",
    "output_path_for",
    "write_documents",
]
