"""Shared dataclasses used by the content assembly pipeline."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True, frozen=True)
class ContentUnit:
    """One authored document plus its front matter.

    Attributes
    ----------
    path : str
        Unique output route for the document (for example ``"/docs/foo"``).
    nav_text : str
        Label shown in navigation.
    nav_index : float | None
        Top-level navigation order; ``None`` sorts after numbered entries.
    collection_key : str | None
        Identifies membership in a collection.
    collection_index : float | None
        Ordering within the collection.
    collection_merge : bool
        When ``True`` the collection renders as one physical page.
    collection_title : str | None
        Heading shown above a grouped navigation entry.
    html : str
        Pre-rendered markup body. Unused when building the nav tree.
    """

    path: str
    nav_text: str = ""
    nav_index: float | None = None
    collection_key: str | None = None
    collection_index: float | None = None
    collection_merge: bool = False
    collection_title: str | None = None
    html: str = ""

    @property
    def merges(self) -> bool:
        """Return whether this unit asks for its collection to be merged."""
        return self.collection_merge is True and bool(self.collection_key)


@dc.dataclass(slots=True, frozen=True)
class Collection:
    """Ordered content units sharing a ``collection_key``."""

    key: str
    members: tuple[ContentUnit, ...]

    @property
    def primary(self) -> ContentUnit:
        """Return the first member, whose route the merged page takes."""
        return self.members[0]


@dc.dataclass(slots=True, frozen=True)
class Page:
    """Assembled page handed to the rendering layer."""

    path: str
    html: str


@dc.dataclass(slots=True, frozen=True)
class NavLink:
    """Leaf navigation entry."""

    path: str
    nav_text: str
    nav_index: float | None = None


@dc.dataclass(slots=True, frozen=True)
class NavGroup:
    """Titled navigation entry listing the links of one collection."""

    key: str
    collection_title: str | None
    nav_index: float | None
    members: tuple[NavLink, ...]


NavEntry = NavLink | NavGroup


__all__ = ["Collection", "ContentUnit", "NavEntry", "NavGroup", "NavLink", "Page"]
