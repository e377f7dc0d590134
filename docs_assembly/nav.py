"""Build the sidebar navigation tree from content metadata.

The nav tree only needs front matter: units sharing a ``collection_key``
become one titled group, everything else without collection metadata becomes
a top-level link, and the result is ordered by ``nav_index``. Members after
the first in a merged collection link to their anchor inside the merged page
instead of a standalone route.

Example
-------
>>> from docs_assembly.models import ContentUnit
>>> tree = build_nav_tree(
...     [
...         ContentUnit(path="/a", collection_key="g", collection_index=1,
...                     collection_merge=True, nav_text="A", nav_index=2),
...         ContentUnit(path="/b", collection_key="g", collection_index=2,
...                     collection_merge=True, nav_text="B"),
...         ContentUnit(path="/", nav_text="Home", nav_index=1),
...     ]
... )
>>> [link.path for link in tree[1].members]
['/a', '/a#b']
"""

from __future__ import annotations

import math
import typing as typ

from .fragments import fragment_href
from .grouping import collection_order, merges_collection
from .models import NavEntry, NavGroup, NavLink

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import ContentUnit


def _nav_index(entry: NavEntry) -> float:
    return math.inf if entry.nav_index is None else entry.nav_index


def _link(unit: ContentUnit, path: str | None = None) -> NavLink:
    return NavLink(
        path=path if path is not None else unit.path,
        nav_text=unit.nav_text,
        nav_index=unit.nav_index,
    )


def build_nav_group(key: str, units: cabc.Sequence[ContentUnit]) -> NavGroup:
    """Return the nav group for every unit in ``units`` carrying ``key``."""
    members = sorted(
        (unit for unit in units if unit.collection_key == key), key=collection_order
    )
    primary = members[0]
    merged = merges_collection(members)
    links = [_link(primary)]
    for member in members[1:]:
        if merged:
            links.append(_link(member, fragment_href(primary.path, member.path)))
        else:
            links.append(_link(member))
    return NavGroup(
        key=key,
        collection_title=primary.collection_title,
        nav_index=primary.nav_index,
        members=tuple(links),
    )


def build_nav_tree(units: cabc.Sequence[ContentUnit]) -> list[NavEntry]:
    """Return the ordered sidebar entries for ``units``.

    Parameters
    ----------
    units : Sequence[ContentUnit]
        Content metadata; ``html`` is ignored.

    Returns
    -------
    list[NavGroup | NavLink]
        Groups (one per ``collection_key``, positioned by first appearance
        before sorting) and ungrouped links, sorted by ``nav_index`` with
        entries lacking one placed last.
    """
    groups: list[NavEntry] = []
    seen: set[str] = set()
    for unit in units:
        key = unit.collection_key
        if not key or key in seen:
            continue
        seen.add(key)
        groups.append(build_nav_group(key, units))

    # Units with an index but no key belong nowhere and are left out.
    ungrouped: list[NavEntry] = [
        _link(unit)
        for unit in units
        if unit.collection_index is None and not unit.collection_key
    ]
    return sorted([*groups, *ungrouped], key=_nav_index)


__all__ = ["build_nav_group", "build_nav_tree"]
