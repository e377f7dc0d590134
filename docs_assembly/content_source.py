"""Load the content snapshot from a directory of pre-rendered HTML files.

Each ``*.html`` file is one content unit. Its metadata lives in a YAML front
matter block at the top of the file, using the same camelCase keys authors
write in markdown front matter::

    ---
    path: /guide/install
    navText: Install
    collectionKey: guide
    collectionIndex: 2
    collectionMerge: true
    ---
    <h1>Install</h1>

The query is all-or-nothing: problems in any file are collected and raised
together as :class:`ContentQueryError` so a build never proceeds on a partial
snapshot. Results beyond ``limit`` are dropped with a warning.

Example
-------
>>> from pathlib import Path
>>> source = DirectoryContentSource(Path("content"))  # doctest: +SKIP
>>> units = source.query()  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import DEFAULT_QUERY_LIMIT
from .models import ContentUnit

if typ.TYPE_CHECKING:
    from pathlib import Path

LOG = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)

FIELD_NAMES: dict[str, str] = {
    "path": "path",
    "navText": "nav_text",
    "navIndex": "nav_index",
    "collectionKey": "collection_key",
    "collectionIndex": "collection_index",
    "collectionMerge": "collection_merge",
    "collectionTitle": "collection_title",
}


class ContentQueryError(RuntimeError):
    """Raised when the content snapshot cannot be loaded completely."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        summary = "; ".join(self.errors)
        super().__init__(f"Content query failed with {len(self.errors)} error(s): {summary}")


class DirectoryContentSource:
    """Query content units from HTML files beneath ``content_dir``."""

    def __init__(self, content_dir: Path, *, limit: int = DEFAULT_QUERY_LIMIT) -> None:
        self.content_dir = content_dir
        self.limit = limit
        self._yaml = YAML(typ="safe")
        self._yaml.version = (1, 2)

    def query(self) -> list[ContentUnit]:
        """Return every content unit, up to ``limit``, in relative path order.

        Raises
        ------
        ContentQueryError
            If the directory is missing or any file cannot be read or carries
            invalid front matter.
        """
        if not self.content_dir.is_dir():
            msg = f"Content directory '{self.content_dir}' not found."
            raise ContentQueryError([msg])

        files = sorted(
            self.content_dir.rglob("*.html"),
            key=lambda path: path.relative_to(self.content_dir).as_posix(),
        )
        if len(files) > self.limit:
            LOG.warning(
                "Content query matched %d files; keeping the first %d",
                len(files),
                self.limit,
            )
            files = files[: self.limit]

        units: list[ContentUnit] = []
        errors: list[str] = []
        for file_path in files:
            try:
                units.append(self._load_unit(file_path))
            except (OSError, UnicodeDecodeError, YAMLError, ValueError) as exc:
                rel = file_path.relative_to(self.content_dir).as_posix()
                errors.append(f"{rel}: {exc}")
        if errors:
            raise ContentQueryError(errors)
        LOG.debug("Loaded %d content units from %s", len(units), self.content_dir)
        return units

    def _load_unit(self, file_path: Path) -> ContentUnit:
        text = file_path.read_text(encoding="utf-8")
        meta, html = self._split_front_matter(text)
        return build_content_unit(meta, html)

    def _split_front_matter(self, text: str) -> tuple[dict[str, typ.Any], str]:
        """Return the parsed front matter mapping and the remaining body."""
        match = FRONT_MATTER_PATTERN.match(text)
        if match is None:
            return {}, text
        loaded = self._yaml.load(match.group("meta")) or {}
        if not isinstance(loaded, dict):
            msg = "front matter must be a mapping"
            raise ValueError(msg)  # noqa: TRY004 - collected as a query error
        return dict(loaded), text[match.end() :]


def build_content_unit(meta: typ.Mapping[str, typ.Any], html: str = "") -> ContentUnit:
    """Build a :class:`ContentUnit` from camelCase front matter.

    Unknown keys are ignored.

    Raises
    ------
    ValueError
        If ``path`` is missing or a field has the wrong type.
    """
    fields = {FIELD_NAMES[key]: value for key, value in meta.items() if key in FIELD_NAMES}
    path = fields.get("path")
    if not isinstance(path, str) or not path:
        msg = "front matter is missing 'path'"
        raise ValueError(msg)
    return ContentUnit(
        path=path,
        nav_text=_optional_text(fields.get("nav_text"), "navText") or "",
        nav_index=_optional_number(fields.get("nav_index"), "navIndex"),
        collection_key=_optional_text(fields.get("collection_key"), "collectionKey"),
        collection_index=_optional_number(
            fields.get("collection_index"), "collectionIndex"
        ),
        collection_merge=fields.get("collection_merge") is True,
        collection_title=_optional_text(
            fields.get("collection_title"), "collectionTitle"
        ),
        html=html,
    )


def _optional_text(value: object, name: str) -> str | None:
    match value:
        case None:
            return None
        case str() | int() | float():
            text = str(value).strip()
            return text or None
        case _:
            msg = f"'{name}' must be a string"
            raise ValueError(msg)


def _optional_number(value: object, name: str) -> float | None:
    match value:
        case None:
            return None
        case bool():
            msg = f"'{name}' must be a number"
            raise ValueError(msg)
        case int() | float():
            return value
        case _:
            msg = f"'{name}' must be a number"
            raise ValueError(msg)


__all__ = [
    "ContentQueryError",
    "DirectoryContentSource",
    "build_content_unit",
]
