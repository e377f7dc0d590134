"""Parsed, mutable markup fragments backed by BeautifulSoup.

``HtmlDocument`` is the small surface the table normalizer and section merger
rely on: tag and CSS queries, attribute edits through the returned ``Tag``
objects, and serialization back to text. Fragments stay fragments; the
``html.parser`` backend never injects ``<html>`` or ``<body>`` wrappers.

Example
-------
>>> doc = HtmlDocument.parse("<h1>Title</h1><p>Body</p>")
>>> doc.find("h1").get_text()
'Title'
>>> str(doc)
'<h1>Title</h1><p>Body</p>'
"""

from __future__ import annotations

import copy
import typing as typ

from bs4 import BeautifulSoup

if typ.TYPE_CHECKING:
    from bs4 import Tag

PARSER = "html.parser"


class HtmlDocument:
    """Mutable tree for one fragment of markup."""

    __slots__ = ("_soup",)

    def __init__(self, soup: BeautifulSoup) -> None:
        self._soup = soup

    @classmethod
    def parse(cls, html: str) -> HtmlDocument:
        """Parse ``html`` into a new document."""
        return cls(BeautifulSoup(html or "", PARSER))

    def find(self, name: str) -> Tag | None:
        """Return the first element named ``name`` in document order."""
        return self._soup.find(name)

    def find_all(self, name: str | list[str]) -> list[Tag]:
        """Return every element named ``name`` in document order."""
        return list(self._soup.find_all(name))

    def select(self, selector: str) -> list[Tag]:
        """Return every element matching the CSS ``selector``."""
        return list(self._soup.select(selector))

    def copy(self) -> HtmlDocument:
        """Return a deep copy that can be edited independently."""
        return HtmlDocument(copy.copy(self._soup))

    def __str__(self) -> str:
        return str(self._soup)


__all__ = ["PARSER", "HtmlDocument"]
