"""Turn a content snapshot into the final set of renderable pages.

The assembler normalizes table widths on every unit, partitions the snapshot
into merged collections and standalone units, and emits one :class:`Page`
per standalone unit plus one per collection. A collection's page takes the
route of its first member; the other members survive only as in-page anchors.

Example
-------
>>> from docs_assembly.models import ContentUnit
>>> pages = assemble_pages([ContentUnit(path="/about", html="<h1>About</h1>")])
>>> [page.path for page in pages]
['/about']
"""

from __future__ import annotations

import logging
import typing as typ

from .grouping import group_units
from .merger import SectionMerger
from .models import Page
from .tables import normalize_table_widths

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import ContentUnit

LOG = logging.getLogger(__name__)


class PageAssembler:
    """Assemble content units into pages."""

    def __init__(self, merger: SectionMerger | None = None) -> None:
        self.merger = merger or SectionMerger()

    def assemble(self, units: cabc.Sequence[ContentUnit]) -> list[Page]:
        """Return the pages for ``units``.

        Parameters
        ----------
        units : Sequence[ContentUnit]
            The complete content snapshot for this run.

        Returns
        -------
        list[Page]
            Standalone pages followed by merged collection pages. The order
            carries no meaning for consumers.
        """
        normalized = [normalize_table_widths(unit) for unit in units]
        grouping = group_units(normalized)

        pages = [
            Page(path=unit.path, html=self.merger.wrap_standalone(unit))
            for unit in grouping.standalone
        ]
        for group in grouping.groups:
            LOG.debug(
                "Merging %d units of collection %r into %s",
                len(group.members),
                group.key,
                group.primary.path,
            )
            pages.append(Page(path=group.primary.path, html=self.merger.merge(group)))

        LOG.info(
            "Assembled %d pages (%d standalone, %d merged) from %d units",
            len(pages),
            len(grouping.standalone),
            len(grouping.groups),
            len(units),
        )
        return pages


def assemble_pages(units: cabc.Sequence[ContentUnit]) -> list[Page]:
    """Assemble ``units`` with a default :class:`PageAssembler`."""
    return PageAssembler().assemble(units)


__all__ = ["PageAssembler", "assemble_pages"]
