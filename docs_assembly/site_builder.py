"""High-level orchestration for a documentation site build.

:class:`SiteBuilder` consumes a :class:`~docs_assembly.config.SiteConfig`,
queries the content snapshot once, assembles pages, derives the nav tree, and
renders every page in memory before writing anything. A failed content query
or a route conflict therefore leaves the output directory untouched.

Example
-------
>>> from pathlib import Path
>>> from docs_assembly.config import load_site_config
>>> from docs_assembly.site_builder import SiteBuilder
>>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> SiteBuilder(config).run()  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import logging
import typing as typ

from .assembler import PageAssembler
from .content_source import ContentQueryError, DirectoryContentSource
from .merger import SectionMerger
from .nav import build_nav_tree
from .renderer import BuildError, PageRenderer, write_documents

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import SiteConfig
    from .models import ContentUnit, NavEntry

LOG = logging.getLogger(__name__)


class ContentSource(typ.Protocol):
    """Anything that returns the content snapshot for a build."""

    def query(self) -> list[ContentUnit]:
        """Return every content unit or raise ``ContentQueryError``."""
        ...


class SiteBuilder:
    """Build every page of a documentation site."""

    def __init__(
        self,
        config: SiteConfig,
        *,
        source: ContentSource | None = None,
        output_dir: Path | None = None,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        config : SiteConfig
            Resolved site configuration.
        source : ContentSource, optional
            Content query; defaults to a :class:`DirectoryContentSource` over
            ``config.content_dir``.
        output_dir : Path, optional
            Override for the output directory in ``config``.
        """
        self.config = config
        self.source = source or DirectoryContentSource(
            config.content_dir, limit=config.query_limit
        )
        self.output_dir = output_dir or config.output_dir
        self.assembler = PageAssembler(
            SectionMerger(templates_dir=config.templates_dir)
        )
        self.renderer = PageRenderer(
            config.site_name, templates_dir=config.templates_dir
        )

    def load_units(self) -> list[ContentUnit]:
        """Run the content query, turning its failure into a :class:`BuildError`."""
        try:
            return self.source.query()
        except ContentQueryError as exc:
            LOG.error("Content query failed; no pages will be created")  # noqa: TRY400
            msg = "Error while running the content query."
            raise BuildError(msg) from exc

    def nav_tree(self) -> list[NavEntry]:
        """Return the sidebar nav tree for the current content snapshot."""
        return build_nav_tree(self.load_units())

    def run(self) -> list[Path]:
        """Assemble, render, and write the site.

        Returns
        -------
        list[Path]
            Files written, one per assembled page.

        Raises
        ------
        BuildError
            If the content query fails or pages collide; no file is written.
        """
        units = self.load_units()
        pages = self.assembler.assemble(units)
        nav_entries = build_nav_tree(units)
        documents = self.renderer.render_all(pages, nav_entries, self.output_dir)
        written = write_documents(documents)
        LOG.info("Wrote %d pages to %s", len(written), self.output_dir)
        return written


__all__ = ["ContentSource", "SiteBuilder"]
