"""Load the site configuration YAML that drives a docs build.

A minimal configuration names the content directory and the output folder::

    site_name: Handbook
    content_dir: content
    output_dir: public
    query_limit: 1000

Relative paths resolve against the directory holding the configuration file.

Examples
--------
>>> from pathlib import Path
>>> from docs_assembly.config import load_site_config
>>> config = load_site_config(Path("site.yaml"))  # doctest: +SKIP
>>> config.output_dir  # doctest: +SKIP
PosixPath('public')
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ._constants import DEFAULT_QUERY_LIMIT


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class SiteConfig:
    """Resolved settings for one build."""

    content_dir: Path
    output_dir: Path
    site_name: str = "Documentation"
    query_limit: int = DEFAULT_QUERY_LIMIT
    templates_dir: Path | None = None


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing where content lives and goes.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file.

    Returns
    -------
    SiteConfig
        Parsed configuration with paths resolved against ``path``'s directory.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required fields are missing or invalid.
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base_dir = path.parent
    content_dir = raw.get("content_dir")
    if not content_dir:
        msg = "Site configuration is missing 'content_dir'."
        raise SiteConfigError(msg)
    output_dir = raw.get("output_dir", "public")
    templates_dir = raw.get("templates_dir")

    return SiteConfig(
        content_dir=_resolve(base_dir, content_dir),
        output_dir=_resolve(base_dir, output_dir),
        site_name=str(raw.get("site_name") or "Documentation"),
        query_limit=_parse_limit(raw.get("query_limit", DEFAULT_QUERY_LIMIT)),
        templates_dir=_resolve(base_dir, templates_dir) if templates_dir else None,
    )


def _resolve(base_dir: Path, value: object) -> Path:
    """Return ``value`` as a path, anchored at ``base_dir`` when relative."""
    candidate = Path(str(value))
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


def _parse_limit(value: object) -> int:
    match value:
        case bool():
            pass
        case int() if value > 0:
            return value
    msg = f"'query_limit' must be a positive integer, got {value!r}."
    raise SiteConfigError(msg)


__all__ = ["SiteConfig", "SiteConfigError", "load_site_config"]
