"""Wrap documents in section shells and merge collections into one page.

Every rendered page body is a sequence of section shells: a sticky side panel
listing the document's ``h2`` headings followed by the document itself. A
standalone unit produces one shell titled "On this Page:". A merged
collection produces one shell per member, titled "In this Section:", after
anchoring each member's ``h1`` to the fragment derived from its route so the
sidebar can link into the merged page.

Example
-------
>>> from docs_assembly.models import Collection, ContentUnit
>>> merger = SectionMerger()
>>> group = Collection(
...     key="guide",
...     members=(
...         ContentUnit(path="/a", html="<h1>A</h1>"),
...         ContentUnit(path="/b", html="<h1>B</h1>"),
...     ),
... )
>>> 'id="b"' in merger.merge(group)
True
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from ._constants import (
    HEADING_ANCHOR_CLASS,
    PAGE_TOC_TITLE,
    SECTION_ANCHOR_CLASS,
    SECTION_TOC_TITLE,
    TOC_LINK_CLASS_TEMPLATE,
)
from .document import HtmlDocument
from .fragments import path_fragment

if typ.TYPE_CHECKING:
    from .models import Collection, ContentUnit

LOG = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class SectionMerger:
    """Render section shells around documents and collections."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the merger with the section shell template.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing ``section.jinja``; defaults to the package
            templates.
        """
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("section.jinja")

    def merge(self, collection: Collection) -> str:
        """Concatenate the section shells of every member of ``collection``.

        Parameters
        ----------
        collection : Collection
            Members already sorted by :func:`~docs_assembly.grouping.collection_order`.

        Returns
        -------
        str
            Merged HTML. The first member's ``h1`` gets an empty fragment;
            every later member is anchored at its route with separators
            removed.
        """
        sections: list[str] = []
        used: set[str] = set()
        for index, member in enumerate(collection.members):
            fragment = "" if index == 0 else path_fragment(member.path)
            if fragment in used:
                LOG.warning(
                    "Duplicate fragment %r in collection %r (path %s)",
                    fragment,
                    collection.key,
                    member.path,
                )
            used.add(fragment)
            doc = HtmlDocument.parse(member.html)
            self.anchor_heading(doc, fragment, path=member.path)
            sections.append(self.wrap(doc, SECTION_TOC_TITLE))
        return "".join(sections)

    def wrap_standalone(self, unit: ContentUnit) -> str:
        """Return the single section shell for a unit outside any collection."""
        return self.wrap(HtmlDocument.parse(unit.html), PAGE_TOC_TITLE)

    def wrap(self, doc: HtmlDocument, toc_title: str) -> str:
        """Render ``doc`` inside a section shell headed by ``toc_title``."""
        return self.template.render(
            toc_title=toc_title,
            toc_items=build_toc(doc),
            body=Markup(str(doc)),  # noqa: S704 - body is trusted pre-rendered HTML
        )

    @staticmethod
    def anchor_heading(doc: HtmlDocument, fragment: str, *, path: str = "") -> bool:
        """Point the first ``h1`` of ``doc`` at ``fragment``.

        Sets the heading ``id``, adds the section anchor class, and retargets
        the heading's own link to ``#<fragment>``. Documents without an
        ``h1`` are left alone.

        Returns
        -------
        bool
            ``True`` when a heading was anchored.
        """
        heading = doc.find("h1")
        if heading is None:
            LOG.debug("No h1 to anchor in %s; skipping fragment %r", path, fragment)
            return False
        heading["id"] = fragment
        classes = list(heading.get("class") or [])
        if SECTION_ANCHOR_CLASS not in classes:
            classes.append(SECTION_ANCHOR_CLASS)
        heading["class"] = classes
        link = heading.find("a", class_=HEADING_ANCHOR_CLASS) or heading.find("a")
        if link is not None:
            link["href"] = f"#{fragment}"
        return True


def build_toc(doc: HtmlDocument) -> list[dict[str, str]]:
    """Return table-of-contents entries for every ``h2`` in ``doc``.

    Each entry carries ``label``, ``href`` (taken from the heading's anchor
    link, else its ``id``) and ``css_class`` (``level-H2``).
    """
    items: list[dict[str, str]] = []
    for heading in doc.find_all("h2"):
        link = heading.find("a", class_=HEADING_ANCHOR_CLASS)
        href = link.get("href") if link is not None else None
        if not href:
            heading_id = heading.get("id")
            href = f"#{heading_id}" if heading_id else "#"
        items.append(
            {
                "label": " ".join(heading.get_text().split()),
                "href": str(href),
                "css_class": TOC_LINK_CLASS_TEMPLATE.format(tag=heading.name.upper()),
            }
        )
    return items


__all__ = ["DEFAULT_TEMPLATES_DIR", "SectionMerger", "build_toc"]
