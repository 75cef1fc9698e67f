r"""Split a Markdown guide into ordered second-level sections.

The parser classifies each line of the guide and folds the classified lines
into an immutable :class:`ParsedDocument`. Lines that precede the first
``##`` heading only contribute the document title (first ``#`` heading) and
description (``>`` quote); everything from a ``##`` heading up to the next
one forms a :class:`Section`. A ``## Table of Contents`` heading never opens
a section of its own.

Example
-------
>>> from guide_docs.markdown_parser import parse_document
>>> document = parse_document("# Guide\n> Short.\n## Intro\nBody text")
>>> document.title, document.description
('Guide', 'Short.')
>>> document.sections[0].content
'## Intro\nBody text'
"""

from __future__ import annotations

import dataclasses as dc
import enum
import functools
import re
import typing as typ

from ._constants import (
    DEFAULT_METADATA_MARKERS,
    DEFAULT_TITLE,
    FALLBACK_SLUG,
    TABLE_OF_CONTENTS_HEADING,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

TITLE_PREFIX = "# "
SECTION_PREFIX = "## "
QUOTE_PREFIX = "> "
RULE_MARKER = "---"

_DISALLOWED_SLUG_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_HYPHEN_RUN = re.compile(r"-+")


class LineKind(enum.Enum):
    """Role a single line plays while scanning the guide."""

    TITLE = "title"
    DESCRIPTION = "description"
    METADATA = "metadata"
    SECTION = "section"
    RULE = "rule"
    CONTENT = "content"


@dc.dataclass(frozen=True, slots=True)
class Section:
    """Second-level heading and the Markdown that belongs to it.

    Attributes
    ----------
    title : str
        Heading text with the ``##`` marker removed and whitespace trimmed.
    content : str
        Section lines, heading included, joined by newlines and stripped.
    order : int
        1-based position of the section in the document.
    """

    title: str
    content: str
    order: int


@dc.dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Result of scanning a guide: title, description, and ordered sections."""

    title: str
    description: str
    sections: tuple[Section, ...]


@dc.dataclass(frozen=True, slots=True)
class _ScanState:
    title: str | None = None
    description: str = ""
    sections: tuple[Section, ...] = ()
    open_start: int | None = None

    @property
    def in_section(self) -> bool:
        return self.open_start is not None


def _strip_marker(line: str, marker: str) -> str:
    """Return the heading or quote text following ``marker``."""
    return line[len(marker) :].strip()


def section_heading(line: str) -> str | None:
    """Return the title of a section-opening ``##`` line, or ``None``.

    A heading whose text is exactly ``Table of Contents`` is not a section
    boundary and yields ``None``.
    """
    if not line.startswith(SECTION_PREFIX):
        return None
    title = _strip_marker(line, SECTION_PREFIX)
    if title == TABLE_OF_CONTENTS_HEADING:
        return None
    return title


def classify_line(
    line: str,
    *,
    in_section: bool,
    markers: cabc.Sequence[str] = DEFAULT_METADATA_MARKERS,
) -> LineKind:
    """Classify ``line`` given whether a section is currently open.

    Parameters
    ----------
    line : str
        Raw line from the guide, without its trailing newline.
    in_section : bool
        ``True`` once the first section heading has been seen.
    markers : Sequence[str], optional
        Line prefixes treated as front-matter metadata before the first
        section.

    Returns
    -------
    LineKind
        Title, description, and metadata kinds are only reported outside a
        section; inside one those lines are ``CONTENT``.
    """
    if not in_section:
        if line.startswith(TITLE_PREFIX):
            return LineKind.TITLE
        if line.startswith(QUOTE_PREFIX):
            return LineKind.DESCRIPTION
        if line.startswith(tuple(markers)):
            return LineKind.METADATA
    if section_heading(line) is not None:
        return LineKind.SECTION
    if not in_section and line.strip() == RULE_MARKER:
        return LineKind.RULE
    return LineKind.CONTENT


def _close_open_section(
    lines: cabc.Sequence[str], state: _ScanState, end: int
) -> tuple[Section, ...]:
    """Return the open section (spanning up to ``end``) as a 1-tuple, if any."""
    if state.open_start is None:
        return ()
    chunk = lines[state.open_start : end]
    title = _strip_marker(chunk[0], SECTION_PREFIX)
    section = Section(
        title=title,
        content="\n".join(chunk).strip(),
        order=len(state.sections) + 1,
    )
    return (section,)


def _scan_line(
    lines: cabc.Sequence[str],
    markers: cabc.Sequence[str],
    state: _ScanState,
    index: int,
) -> _ScanState:
    """Fold a single line into the scan state."""
    line = lines[index]
    match classify_line(line, in_section=state.in_section, markers=markers):
        case LineKind.TITLE if state.title is None:
            return dc.replace(state, title=_strip_marker(line, TITLE_PREFIX))
        case LineKind.DESCRIPTION:
            return dc.replace(state, description=_strip_marker(line, QUOTE_PREFIX))
        case LineKind.SECTION:
            closed = _close_open_section(lines, state, index)
            return dc.replace(
                state, sections=state.sections + closed, open_start=index
            )
        case _:
            # Section bodies are contiguous, so content lines are captured
            # when the section closes.
            return state


def parse_document(
    markdown_text: str,
    *,
    markers: cabc.Sequence[str] = DEFAULT_METADATA_MARKERS,
    default_title: str = DEFAULT_TITLE,
) -> ParsedDocument:
    """Split markdown into a title, description, and ordered sections.

    Parameters
    ----------
    markdown_text : str
        Raw markdown of the whole guide.
    markers : Sequence[str], optional
        Front-matter line prefixes to discard before the first section.
    default_title : str, optional
        Title used when no ``#`` heading precedes the first section.

    Returns
    -------
    ParsedDocument
        Parsed record. ``sections`` is empty when the guide contains no
        second-level headings other than ``Table of Contents``.
    """
    lines = markdown_text.split("\n")
    step = functools.partial(_scan_line, lines, tuple(markers))
    state = functools.reduce(step, range(len(lines)), _ScanState())
    sections = state.sections + _close_open_section(lines, state, len(lines))
    return ParsedDocument(
        title=state.title or default_title,
        description=state.description,
        sections=sections,
    )


def slugify(text: str) -> str:
    """Convert a heading into a lowercase hyphen-separated slug.

    Characters other than ASCII letters, digits, underscores, whitespace, and
    hyphens are removed; whitespace runs become single hyphens and repeated
    hyphens collapse. Headings with nothing left fall back to ``section``.

    Examples
    --------
    >>> slugify("Philosophy & Core Principles")
    'philosophy-core-principles'
    >>> slugify("foo-bar") == slugify("Foo Bar")
    True
    """
    slug = _DISALLOWED_SLUG_CHARS.sub("", text.lower())
    slug = _WHITESPACE_RUN.sub("-", slug)
    slug = _HYPHEN_RUN.sub("-", slug).strip("-")
    return slug or FALLBACK_SLUG


__all__ = [
    "LineKind",
    "ParsedDocument",
    "Section",
    "classify_line",
    "parse_document",
    "section_heading",
    "slugify",
]
