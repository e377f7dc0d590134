"""Derive in-page fragment identifiers from content routes.

The section merger writes these identifiers onto merged headings and the nav
builder links to them, so both sides must go through :func:`path_fragment`.

Example
-------
>>> path_fragment("/docs/foo")
'docsfoo'
>>> fragment_href("/a", "/b")
'/a#b'
"""

from __future__ import annotations

PATH_SEPARATOR = "/"


def path_fragment(path: str) -> str:
    """Return ``path`` with every path separator removed."""
    return path.replace(PATH_SEPARATOR, "")


def fragment_href(page_path: str, member_path: str) -> str:
    """Return the link to ``member_path`` once merged into ``page_path``."""
    return f"{page_path}#{path_fragment(member_path)}"


__all__ = ["PATH_SEPARATOR", "fragment_href", "path_fragment"]
