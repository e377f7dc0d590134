"""Common literal values used across docs_assembly.

These constants keep the section shell labels, marker classes, and query
limits centralized so the merger, nav builder, and tests agree.

Examples
--------
>>> from docs_assembly import _constants
>>> _constants.SECTION_TOC_TITLE
'In this Section:'
>>> _constants.TOC_LINK_CLASS_TEMPLATE.format(tag="h2".upper())
'level-H2'
"""

SECTION_TOC_TITLE = "In this Section:"
PAGE_TOC_TITLE = "On this Page:"
SECTION_ANCHOR_CLASS = "section-anchor"
HEADING_ANCHOR_CLASS = "anchor"
TOC_LINK_CLASS_TEMPLATE = "level-{tag}"
DEFAULT_QUERY_LIMIT = 1000
PAGE_INDEX_FILENAME = "index.html"
