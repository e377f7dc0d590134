"""Partition content units into merged collections and standalone pages."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .models import Collection, ContentUnit

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dc.dataclass(slots=True, frozen=True)
class GroupingResult:
    """Outcome of :func:`group_units`.

    Attributes
    ----------
    groups : tuple[Collection, ...]
        One collection per distinct merging ``collection_key``, in order of
        first appearance.
    standalone : tuple[ContentUnit, ...]
        Every unit that is not a member of any group, in source order.
    """

    groups: tuple[Collection, ...]
    standalone: tuple[ContentUnit, ...]


MemberOrder = tuple[int, float, str]


def collection_order(unit: ContentUnit) -> MemberOrder:
    """Return the ordering key for a unit within its collection.

    Units with a ``collection_index`` come first and compare numerically.
    The rest follow, compared case-insensitively by ``nav_text``. Merged pages
    and the nav tree both sort with this key so they agree on the first member.
    """
    if unit.collection_index is not None:
        return (0, float(unit.collection_index), "")
    return (1, 0.0, unit.nav_text.casefold())


def merges_collection(members: cabc.Iterable[ContentUnit]) -> bool:
    """Return whether any of ``members`` asks for the collection to be merged."""
    return any(member.merges for member in members)


def group_units(units: cabc.Sequence[ContentUnit]) -> GroupingResult:
    """Split ``units`` into merged collections and standalone units.

    A collection is formed for every ``collection_key`` carried by at least one
    unit with ``collection_merge`` set. It holds every unit sharing that key,
    sorted by :func:`collection_order`; ties keep source order.

    Parameters
    ----------
    units : Sequence[ContentUnit]
        The content snapshot for this run.

    Returns
    -------
    GroupingResult
        Groups and standalone units. Membership is tracked by identity so no
        unit appears twice and none is dropped.
    """
    groups: list[Collection] = []
    seen_keys: set[str] = set()
    for unit in units:
        key = unit.collection_key
        if not unit.merges or key in seen_keys:
            continue
        seen_keys.add(key)
        members = sorted(
            (candidate for candidate in units if candidate.collection_key == key),
            key=collection_order,
        )
        groups.append(Collection(key=key, members=tuple(members)))

    grouped_ids = {id(member) for group in groups for member in group.members}
    standalone = tuple(unit for unit in units if id(unit) not in grouped_ids)
    return GroupingResult(groups=tuple(groups), standalone=standalone)


__all__ = [
    "GroupingResult",
    "MemberOrder",
    "collection_order",
    "group_units",
    "merges_collection",
]
