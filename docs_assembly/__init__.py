"""Assemble documentation content units into rendered pages.

The package takes a snapshot of independently authored content units,
normalizes their table markup, merges collections into single composite
pages, and derives the grouped sidebar navigation tree from the same
metadata.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from docs_assembly import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
