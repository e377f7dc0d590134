"""Behaviour tests for merged collection builds.

These pytest-bdd scenarios drive :class:`~docs_assembly.site_builder.SiteBuilder`
against a temporary content directory. They check the end-to-end contract of
a merged collection: one physical page at the first member's route, sections
in collection order, and sidebar links that reach each later member through
its fragment. A second scenario proves a failed content query leaves the
output directory empty.

Usage
-----
Run ``pytest tests/bdd/test_merged_collection.py -v``. The scenarios are
defined in ``features/merged_collection.feature``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from docs_assembly.config import load_site_config
from docs_assembly.models import NavGroup
from docs_assembly.renderer import BuildError, output_path_for
from docs_assembly.site_builder import SiteBuilder

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "merged_collection.feature"
)
scenarios(FEATURE_FILE)

UNIT_A = """---
path: /a
navText: A
collectionKey: g
collectionIndex: 1
collectionMerge: true
collectionTitle: Group
---
<h1>A</h1>
"""

UNIT_B = """---
path: /b
navText: B
collectionKey: g
collectionIndex: 2
collectionMerge: true
---
<h1>B</h1>
"""


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write_site(tmp_path: Path, files: dict[str, str]) -> Path:
    content_dir = tmp_path / "content"
    content_dir.mkdir()
    for name, text in files.items():
        (content_dir / name).write_text(text, encoding="utf-8")
    config_path = tmp_path / "site.yaml"
    config_path.write_text("content_dir: content\noutput_dir: public\n", encoding="utf-8")
    return config_path


@given("a content directory with a two-part merged collection")
def given_merged_collection(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write units ``/a`` and ``/b`` sharing merging key ``g``."""
    # Written in reverse so ordering comes from collectionIndex, not filenames.
    scenario_state["config_path"] = _write_site(
        tmp_path, {"2-a.html": UNIT_A, "1-b.html": UNIT_B}
    )


@given("a content directory with a broken front matter file")
def given_broken_content(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write one valid unit and one whose front matter lacks a path."""
    scenario_state["config_path"] = _write_site(
        tmp_path, {"a.html": UNIT_A, "broken.html": "---\nnavText: Broken\n---\n"}
    )


@when("I build the site")
def when_build(scenario_state: dict[str, object]) -> None:
    """Run the site builder and keep the written paths and nav tree."""
    config = load_site_config(scenario_state["config_path"])  # type: ignore[arg-type]
    builder = SiteBuilder(config)
    scenario_state["output_dir"] = config.output_dir
    scenario_state["written"] = builder.run()
    scenario_state["nav"] = builder.nav_tree()


@when("I try to build the site")
def when_try_build(scenario_state: dict[str, object]) -> None:
    """Run the site builder, recording the build error."""
    config = load_site_config(scenario_state["config_path"])  # type: ignore[arg-type]
    scenario_state["output_dir"] = config.output_dir
    try:
        SiteBuilder(config).run()
    except BuildError as exc:
        scenario_state["error"] = exc


@then(parsers.parse('exactly one page is written at "{route}"'))
def then_one_page(scenario_state: dict[str, object], route: str) -> None:
    """Verify the merged collection produced a single file."""
    output_dir: Path = scenario_state["output_dir"]  # type: ignore[assignment]
    written: list[Path] = scenario_state["written"]  # type: ignore[assignment]
    assert written == [output_path_for(route, output_dir)], (
        f"expected a single page at {route!r}, got {written!r}"
    )


@then(parsers.parse('the page contains the sections "{first}" then "{second}"'))
def then_sections_in_order(
    scenario_state: dict[str, object], first: str, second: str
) -> None:
    """Verify section order and the fragment on the second heading."""
    written: list[Path] = scenario_state["written"]  # type: ignore[assignment]
    soup = BeautifulSoup(written[0].read_text(encoding="utf-8"), "html.parser")
    headings = [section.find("h1") for section in soup.select("main section")]
    assert [h.get_text() for h in headings] == [first, second]
    assert headings[1]["id"] == second.lower()
    assert "section-anchor" in headings[1]["class"]


@then(parsers.parse('the nav group links the second member to "{href}"'))
def then_nav_fragment(scenario_state: dict[str, object], href: str) -> None:
    """Verify the nav tree has one group whose second link is the fragment."""
    nav = scenario_state["nav"]
    assert isinstance(nav, list)
    assert len(nav) == 1
    group = nav[0]
    assert isinstance(group, NavGroup)
    assert len(group.members) == 2
    assert group.members[1].path == href


@then("the build is blocked")
def then_blocked(scenario_state: dict[str, object]) -> None:
    """Verify the build surfaced a BuildError."""
    assert isinstance(scenario_state.get("error"), BuildError)


@then("no pages are written")
def then_nothing_written(scenario_state: dict[str, object]) -> None:
    """Verify the output directory was never created."""
    output_dir: Path = scenario_state["output_dir"]  # type: ignore[assignment]
    assert not output_dir.exists()
