r"""Rewrite bracket-encoded column width rows into inline cell widths.

Authors hint column widths by making the first body row of a table a run of
bracketed percentages, one per column::

    | Name | Type | Notes |
    | ---- | ---- | ----- |
    | [25] | [25] | [50]  |

The normalizer copies those values onto the header cells (or, for tables
without a header, onto the row that follows) as ``width: <pct>%;`` and drops
the hint row. Tables without a hint row are left untouched, which makes the
rewrite idempotent.

Example
-------
>>> html = (
...     "<table><thead><tr><th>A</th><th>B</th></tr></thead>"
...     "<tbody><tr><td>[30]</td><td>[70]</td></tr></tbody></table>"
... )
>>> normalize_html(html)
'<table><thead><tr><th style="width: 30%;">A</th><th style="width: 70%;">B</th></tr></thead><tbody></tbody></table>'
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from .document import HtmlDocument

if typ.TYPE_CHECKING:
    from bs4 import Tag

    from .models import ContentUnit

WIDTH_HINT_PATTERN = re.compile(r"^(\[\d+\])+$")
WIDTH_STYLE_TEMPLATE = "width: {width}%;"


def parse_width_hints(text: str) -> list[str] | None:
    """Return the percentages encoded in ``text`` or ``None`` if it is no hint.

    Parameters
    ----------
    text : str
        Concatenated cell text of a candidate row, e.g. ``"[25][25][50]"``.

    Returns
    -------
    list[str] | None
        One percentage string per column, in column order.
    """
    if not WIDTH_HINT_PATTERN.match(text):
        return None
    return [segment.strip("[]") for segment in text.split("][")]


def normalize_table_widths(unit: ContentUnit) -> ContentUnit:
    """Return ``unit`` with width hint rows in its body applied and removed."""
    html = normalize_html(unit.html)
    if html == unit.html:
        return unit
    return dc.replace(unit, html=html)


def normalize_html(html: str) -> str:
    """Apply every width hint row found in ``html``.

    Each table is evaluated independently. When nothing changes the input
    string is returned as-is so untouched documents keep their exact markup.
    """
    if "<table" not in html:
        return html
    doc = HtmlDocument.parse(html)
    changed = False
    for table in doc.find_all("table"):
        changed = _normalize_table(table) or changed
    return str(doc) if changed else html


def _normalize_table(table: Tag) -> bool:
    changed = False
    # Leading hint rows are all consumed now so a second pass finds none.
    while (row := _first_body_row(table)) is not None:
        widths = parse_width_hints(_row_text(row))
        if widths is None:
            break
        targets = _own_elements(table, "th")
        if not targets:
            next_row = row.find_next_sibling("tr")
            targets = _row_cells(next_row) if next_row is not None else []
        # Mismatched lengths style the overlapping prefix only.
        for cell, width in zip(targets, widths, strict=False):
            cell["style"] = WIDTH_STYLE_TEMPLATE.format(width=width)
        row.decompose()
        changed = True
    return changed


def _own_elements(table: Tag, name: str) -> list[Tag]:
    """Return ``name`` descendants of ``table`` that are not in a nested table."""
    return [el for el in table.find_all(name) if el.find_parent("table") is table]


def _first_body_row(table: Tag) -> Tag | None:
    bodies = _own_elements(table, "tbody")
    if bodies:
        return bodies[0].find("tr", recursive=False)
    for row in _own_elements(table, "tr"):
        if row.find_parent("thead") is not None or row.find("th") is not None:
            continue
        return row
    return None


def _row_cells(row: Tag) -> list[Tag]:
    return list(row.find_all("td", recursive=False))


def _row_text(row: Tag) -> str:
    return "".join(cell.get_text(strip=True) for cell in _row_cells(row))


__all__ = [
    "WIDTH_HINT_PATTERN",
    "normalize_html",
    "normalize_table_widths",
    "parse_width_hints",
]
