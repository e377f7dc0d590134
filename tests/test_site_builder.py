"""End-to-end tests for site builds and the ``assemble-docs`` commands.

These tests write a small content directory and ``site.yaml`` into
``tmp_path``, run :class:`~docs_assembly.site_builder.SiteBuilder` (directly
and through the CLI command functions), and inspect the written HTML with
BeautifulSoup.

Usage
-----
Run ``pytest tests/test_site_builder.py -v``.
"""

from __future__ import annotations

import typing as typ

import pytest
from bs4 import BeautifulSoup

from docs_assembly import cli
from docs_assembly.config import load_site_config
from docs_assembly.content_source import ContentQueryError
from docs_assembly.models import ContentUnit, NavGroup, Page
from docs_assembly.renderer import (
    BuildError,
    PageConflictError,
    PageRenderer,
    output_path_for,
)
from docs_assembly.site_builder import SiteBuilder

if typ.TYPE_CHECKING:
    from pathlib import Path

CONTENT: dict[str, str] = {
    "index.html": "---\npath: /\nnavText: Home\nnavIndex: 1\n---\n<h1>Home</h1>",
    "guide/intro.html": (
        "---\n"
        "path: /guide/intro\n"
        "navText: Intro\n"
        "navIndex: 2\n"
        "collectionKey: guide\n"
        "collectionIndex: 1\n"
        "collectionMerge: true\n"
        "collectionTitle: Guide\n"
        "---\n"
        '<h1 id="intro"><a href="#intro" class="anchor">#</a>Intro</h1>'
        '<h2 id="why"><a href="#why" class="anchor">#</a>Why</h2>'
    ),
    "guide/setup.html": (
        "---\n"
        "path: /guide/setup\n"
        "navText: Setup\n"
        "collectionKey: guide\n"
        "collectionIndex: 2\n"
        "collectionMerge: true\n"
        "---\n"
        '<h1 id="setup"><a href="#setup" class="anchor">#</a>Setup</h1>'
        "<table><thead><tr><th>Flag</th><th>Meaning</th></tr></thead>"
        "<tbody><tr><td>[30]</td><td>[70]</td></tr>"
        "<tr><td>-v</td><td>verbose</td></tr></tbody></table>"
    ),
}


@pytest.fixture
def site_config_path(tmp_path: Path) -> Path:
    """Write the sample content tree and return the config path."""
    content_dir = tmp_path / "content"
    for name, text in CONTENT.items():
        path = content_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    config_path = tmp_path / "site.yaml"
    config_path.write_text(
        "site_name: Handbook\ncontent_dir: content\noutput_dir: public\n",
        encoding="utf-8",
    )
    return config_path


class _FailingSource:
    def query(self) -> list[ContentUnit]:
        msg = "upstream unavailable"
        raise ContentQueryError([msg])


def test_output_path_for_routes(tmp_path: Path) -> None:
    """Routes map to ``index.html`` files beneath the output directory."""
    assert output_path_for("/", tmp_path) == tmp_path / "index.html"
    assert output_path_for("/guide/intro", tmp_path) == (
        tmp_path / "guide" / "intro" / "index.html"
    )


@pytest.mark.parametrize("route", ["/../escape", "/guide/../../x", "/./here"])
def test_output_path_for_rejects_relative_segments(tmp_path: Path, route: str) -> None:
    """Dot segments cannot steer a page outside the output directory."""
    with pytest.raises(BuildError, match="escapes the output directory"):
        output_path_for(route, tmp_path / "public")


def test_build_writes_one_file_per_page(site_config_path: Path) -> None:
    """The merged guide is one page; its second member has no route."""
    config = load_site_config(site_config_path)
    written = SiteBuilder(config).run()
    public = site_config_path.parent / "public"
    assert sorted(written) == sorted(
        [public / "index.html", public / "guide" / "intro" / "index.html"]
    )
    assert not (public / "guide" / "setup").exists()

    soup = BeautifulSoup(
        (public / "guide" / "intro" / "index.html").read_text(encoding="utf-8"),
        "html.parser",
    )
    sections = soup.select("main section")
    assert len(sections) == 2
    assert sections[1].find("h1")["id"] == "guidesetup"
    assert [th["style"] for th in soup.find_all("th")] == ["width: 30%;", "width: 70%;"]
    nav_links = [a["href"] for a in soup.select("nav.content-nav a")]
    assert nav_links == ["/", "/guide/intro", "/guide/intro#guidesetup"]
    assert soup.select_one("nav.content-nav h2").get_text() == "Guide"
    assert soup.title.get_text() == "Handbook"


def test_query_failure_blocks_the_build(site_config_path: Path) -> None:
    """No page is written when the content query fails."""
    config = load_site_config(site_config_path)
    builder = SiteBuilder(config, source=_FailingSource())
    with pytest.raises(BuildError) as excinfo:
        builder.run()
    assert isinstance(excinfo.value.__cause__, ContentQueryError)
    assert not config.output_dir.exists()


def test_conflicting_paths_block_the_build(tmp_path: Path) -> None:
    """Two pages at one route are rejected before anything is rendered."""
    renderer = PageRenderer()
    pages = [Page(path="/x", html="a"), Page(path="/x/", html="b")]
    with pytest.raises(PageConflictError, match="/x"):
        renderer.render_all(pages, [], tmp_path)


def test_escaping_route_blocks_the_build(tmp_path: Path) -> None:
    """A page routed above the output directory is rejected before rendering."""
    output_dir = tmp_path / "public"
    pages = [Page(path="/ok", html="<h1>OK</h1>"), Page(path="/../../evil", html="x")]
    with pytest.raises(BuildError):
        PageRenderer().render_all(pages, [], output_dir)
    assert not output_dir.exists()


def test_nav_tree_from_builder(site_config_path: Path) -> None:
    """The builder exposes the nav tree for the same snapshot."""
    tree = SiteBuilder(load_site_config(site_config_path)).nav_tree()
    assert len(tree) == 2
    group = tree[1]
    assert isinstance(group, NavGroup)
    assert [link.path for link in group.members] == [
        "/guide/intro",
        "/guide/intro#guidesetup",
    ]


def test_cli_build_prints_written_paths(
    site_config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``build`` reports every file it wrote."""
    cli.build(config=site_config_path)
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2
    assert all(line.startswith("wrote ") for line in out)
    assert any(line.endswith("index.html") for line in out)


def test_cli_build_output_dir_override(site_config_path: Path, tmp_path: Path) -> None:
    """``--output-dir`` replaces the configured folder."""
    target = tmp_path / "dist"
    cli.build(config=site_config_path, output_dir=target)
    assert (target / "index.html").exists()
    assert not (site_config_path.parent / "public").exists()


def test_cli_build_exits_on_query_failure(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A blocked build exits with status 1 and writes nothing."""
    config_path = tmp_path / "site.yaml"
    config_path.write_text("content_dir: missing\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.build(config=config_path)
    assert excinfo.value.code == 1
    assert "content query" in capsys.readouterr().err
    assert not (tmp_path / "public").exists()


def test_cli_nav_prints_outline(
    site_config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """``nav`` prints group titles with indented member links."""
    cli.nav(config=site_config_path)
    assert capsys.readouterr().out.splitlines() == [
        "Home -> /",
        "Guide",
        "  Intro -> /guide/intro",
        "  Setup -> /guide/intro#guidesetup",
    ]
