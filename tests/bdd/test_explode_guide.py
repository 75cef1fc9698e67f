"""Behaviour tests for exploding the guide into per-section docs pages.

These pytest-bdd scenarios drive ``SectionExploder`` end to end against a
temporary guide and output directory, checking the files that land in the
docs folder rather than internal parser state. The feature file
``explode_guide.feature`` describes two journeys: front matter feeding the
index page, and ``Table of Contents`` headings staying out of the page list.

Usage
-----
Run ``pytest tests/bdd/test_explode_guide.py -v`` after installing the test
extra (``uv sync --extra test``). No network access is required.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, scenarios, then, when

from guide_docs.exploder import ExplodeResult, SectionExploder

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "explode_guide.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write_guide(tmp_path: Path, text: str, state: dict[str, object]) -> None:
    guide = tmp_path / "GUIDE.md"
    guide.write_text(text, encoding="utf-8")
    state["guide"] = guide
    state["output_dir"] = tmp_path / "docs"


@given("a guide with front matter and two sections")
def given_front_matter_guide(
    tmp_path: Path, scenario_state: dict[str, object]
) -> None:
    """Write the canonical two-section guide with title and description."""
    _write_guide(
        tmp_path,
        "# My Guide\n"
        "> A short description.\n"
        "**Last Updated**: 2025-01-01\n"
        "## Section One\n"
        "Some text.\n"
        "## Section Two\n"
        "More text.\n",
        scenario_state,
    )


@given("a guide with Table of Contents headings")
def given_toc_guide(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    """Write a guide whose contents headings appear before and inside sections."""
    _write_guide(
        tmp_path,
        "# Guide\n"
        "## Table of Contents\n"
        "- [Intro](#intro)\n"
        "## Intro\n"
        "Welcome.\n"
        "## Table of Contents\n"
        "Stray contents line.\n"
        "## Usage\n"
        "Run it.\n",
        scenario_state,
    )


@when("I explode the guide")
def when_explode(scenario_state: dict[str, object]) -> None:
    """Run the exploder against the scenario guide."""
    exploder = SectionExploder(
        source=typ.cast("Path", scenario_state["guide"]),
        output_dir=typ.cast("Path", scenario_state["output_dir"]),
    )
    scenario_state["result"] = exploder.run()


def _output_names(scenario_state: dict[str, object]) -> list[str]:
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    return sorted(path.name for path in output_dir.iterdir())


@then("one page is written per section alongside the index")
def then_one_page_per_section(scenario_state: dict[str, object]) -> None:
    """Verify the docs folder holds exactly the section pages and index."""
    names = _output_names(scenario_state)
    assert names == ["index.md", "section-one.md", "section-two.md"], (
        f"expected two section pages plus index.md, got {names!r}"
    )


@then("the index lists the sections in document order")
def then_index_order(scenario_state: dict[str, object]) -> None:
    """Verify the quick navigation bullets follow the guide order."""
    result = typ.cast("ExplodeResult", scenario_state["result"])
    index = result.index_path.read_text(encoding="utf-8")
    assert index.startswith("# My Guide\n\nA short description.\n"), (
        "expected index to open with the guide title and description"
    )
    first = index.index("- [Section One](section-one.md)")
    second = index.index("- [Section Two](section-two.md)")
    assert first < second, "expected Section One to be listed before Section Two"


@then("the first page links only to the next page")
def then_first_page_navigation(scenario_state: dict[str, object]) -> None:
    """Verify the first page has a Next link and no Previous link."""
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    page = (output_dir / "section-one.md").read_text(encoding="utf-8")
    assert "Next: [Section Two](section-two.md) →" in page, (
        "expected a Next link to section-two.md on the first page"
    )
    assert "Previous" not in page, "expected no Previous link on the first page"


@then("no table-of-contents page is written")
def then_no_toc_page(scenario_state: dict[str, object]) -> None:
    """Verify contents headings did not produce their own page."""
    names = _output_names(scenario_state)
    assert names == ["index.md", "intro.md", "usage.md"], (
        f"expected only intro, usage, and index pages, got {names!r}"
    )


@then("the stray contents heading stays with the preceding section")
def then_toc_in_previous_section(scenario_state: dict[str, object]) -> None:
    """Verify the in-section contents heading is ordinary content."""
    output_dir = typ.cast("Path", scenario_state["output_dir"])
    page = (output_dir / "intro.md").read_text(encoding="utf-8")
    assert page.startswith(
        "## Intro\nWelcome.\n## Table of Contents\nStray contents line.\n\n---"
    ), f"expected the contents heading inside the intro page, got {page!r}"
    usage = (output_dir / "usage.md").read_text(encoding="utf-8")
    assert "Table of Contents" not in usage, (
        "expected the usage page to hold only its own content"
    )
