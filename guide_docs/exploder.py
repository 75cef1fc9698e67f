"""Explode a Markdown guide into one page per section plus an index.

This module coordinates loading the guide (from disk or over HTTP), splitting
it with :func:`~guide_docs.markdown_parser.parse_document`, assigning file
slugs, and writing the per-section pages and ``index.md`` that a static docs
site (MkDocs) serves. It exposes :class:`SectionExploder`, which consumes a
:class:`~guide_docs.config.GuideConfig`, and the :func:`explode` shortcut.

The output directory is disposable: every run deletes it and writes it again
from the guide, so files added there by hand are lost.

Example
-------
>>> from pathlib import Path
>>> from guide_docs.exploder import explode
>>> result = explode("GUIDE.md", Path("docs"))  # doctest: +SKIP
>>> result.index_path  # doctest: +SKIP
PosixPath('docs/index.md')
"""

from __future__ import annotations

import dataclasses as dc
import shutil
import typing as typ
from pathlib import Path

import requests
from jinja2 import Environment, FileSystemLoader, select_autoescape
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from guide_docs._constants import INDEX_FILENAME, INDEX_SLUG, PAGE_FILENAME_TEMPLATE
from guide_docs.config import GuideConfig, SlugCollisionPolicy
from guide_docs.markdown_parser import ParsedDocument, Section, parse_document, slugify

if typ.TYPE_CHECKING:
    import collections.abc as cabc

NAVIGATION_SEPARATOR = "\n\n---\n\n"
NAVIGATION_HEADING = "## Navigation\n\n"


class SlugCollisionError(ValueError):
    """Raised when two pages would be written to the same file."""


@dc.dataclass(frozen=True, slots=True)
class SectionPage:
    """A parsed section paired with the slug of the file it is written to."""

    section: Section
    slug: str

    @property
    def title(self) -> str:
        return self.section.title

    @property
    def filename(self) -> str:
        return PAGE_FILENAME_TEMPLATE.format(slug=self.slug)


@dc.dataclass(frozen=True, slots=True)
class ExplodeResult:
    """Paths written by a single exploder run.

    Attributes
    ----------
    output_dir : Path
        Directory that was recreated for this run.
    index_path : Path
        Location of the generated ``index.md``.
    section_paths : tuple[Path, ...]
        One path per section in document order; repeats when slugs collide
        under the ``overwrite`` policy.
    pages : tuple[SectionPage, ...]
        Sections with their assigned slugs, in document order.
    """

    output_dir: Path
    index_path: Path
    section_paths: tuple[Path, ...]
    pages: tuple[SectionPage, ...]


def assign_slugs(
    sections: cabc.Sequence[Section],
    policy: SlugCollisionPolicy = SlugCollisionPolicy.OVERWRITE,
) -> tuple[SectionPage, ...]:
    """Pair each section with the slug of its output file.

    Parameters
    ----------
    sections : Sequence[Section]
        Parsed sections in document order.
    policy : SlugCollisionPolicy, optional
        ``OVERWRITE`` keeps colliding slugs so the later section's file wins,
        ``SUFFIX`` appends ``-2``, ``-3``... to later collisions, and
        ``ERROR`` raises. The ``index`` slug is reserved for the index page.

    Returns
    -------
    tuple[SectionPage, ...]
        Pages in the same order as ``sections``.

    Raises
    ------
    SlugCollisionError
        Under the ``ERROR`` policy, when a slug is already taken.
    """
    owners: dict[str, str] = {INDEX_SLUG: "the generated index"}
    pages: list[SectionPage] = []
    for section in sections:
        slug = slugify(section.title)
        if slug in owners:
            match policy:
                case SlugCollisionPolicy.ERROR:
                    filename = PAGE_FILENAME_TEMPLATE.format(slug=slug)
                    msg = (
                        f"Section '{section.title}' collides with "
                        f"{owners[slug]} at '{filename}'."
                    )
                    raise SlugCollisionError(msg)
                case SlugCollisionPolicy.SUFFIX:
                    slug = _unique_slug(slug, owners)
                case SlugCollisionPolicy.OVERWRITE:
                    pass
        owners[slug] = f"section '{section.title}'"
        pages.append(SectionPage(section=section, slug=slug))
    return tuple(pages)


def _unique_slug(base: str, used: cabc.Container[str]) -> str:
    """Return ``base`` with the first free numeric suffix appended."""
    suffix = 2
    candidate = f"{base}-{suffix}"
    while candidate in used:
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate


def render_navigation(
    previous: SectionPage | None, following: SectionPage | None
) -> str:
    """Return the footer appended to a section page.

    The footer always starts with a horizontal rule; the ``## Navigation``
    block is only present when a previous or next page exists.
    """
    footer = NAVIGATION_SEPARATOR
    if previous is None and following is None:
        return footer
    footer += NAVIGATION_HEADING
    if previous is not None:
        footer += f"← Previous: [{previous.title}]({previous.filename})\n\n"
    if following is not None:
        footer += f"Next: [{following.title}]({following.filename}) →\n"
    return footer


def render_section_page(pages: cabc.Sequence[SectionPage], position: int) -> str:
    """Return the full Markdown body for the page at ``position``."""
    page = pages[position]
    previous = pages[position - 1] if position > 0 else None
    following = pages[position + 1] if position + 1 < len(pages) else None
    return page.section.content + render_navigation(previous, following)


class SectionExploder:
    """Split a guide into per-section Markdown pages and an index page."""

    def __init__(
        self,
        config: GuideConfig | None = None,
        *,
        source: str | Path | None = None,
        output_dir: Path | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the exploder with configuration and template context.

        Parameters
        ----------
        config : GuideConfig, optional
            Resolved configuration; defaults to :class:`GuideConfig` values.
        source : str or Path, optional
            Override for the guide location: a filesystem path or an
            ``http(s)://`` URL.
        output_dir : Path, optional
            Override for the output directory.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package
            templates.
        """
        self.config = config or GuideConfig()
        self.source = source if source is not None else self.config.source
        self.output_dir = output_dir or self.config.output_dir
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.index_template = self.env.get_template("index.md.jinja")

    def run(self) -> ExplodeResult:
        """Recreate the output directory and write every page.

        Returns
        -------
        ExplodeResult
            Paths written, with section pages in document order.

        Raises
        ------
        FileNotFoundError
            If the guide does not exist; the output directory is untouched.
        requests.HTTPError
            If a remote guide cannot be fetched.
        SlugCollisionError
            Under the ``error`` collision policy, before anything is deleted.

        Notes
        -----
        Section pages are written before ``index.md``, so a section whose
        slug is ``index`` never replaces the index under ``overwrite``.
        """
        document = self.parse()
        pages = assign_slugs(document.sections, self.config.parser.slug_collisions)

        out_dir = self.output_dir
        self._reset_output_dir(out_dir)

        written: list[Path] = []
        for position, page in enumerate(pages):
            output_path = out_dir / page.filename
            output_path.write_text(
                render_section_page(pages, position), encoding="utf-8"
            )
            written.append(output_path)

        index_path = out_dir / INDEX_FILENAME
        index_path.write_text(self.render_index(document, pages), encoding="utf-8")
        return ExplodeResult(
            output_dir=out_dir,
            index_path=index_path,
            section_paths=tuple(written),
            pages=pages,
        )

    def parse(self) -> ParsedDocument:
        """Load the guide and split it into sections."""
        parser_config = self.config.parser
        return parse_document(
            self._load_source(),
            markers=parser_config.metadata_markers,
            default_title=self.config.index.title,
        )

    def render_index(
        self, document: ParsedDocument, pages: cabc.Sequence[SectionPage]
    ) -> str:
        """Render ``index.md`` with the title, metadata, and section list."""
        text = self.index_template.render(
            title=document.title,
            description=document.description,
            index=self.config.index,
            pages=pages,
        )
        if not text.endswith("\n"):
            text += "\n"
        return text

    def _load_source(self) -> str:
        """Return the guide text from a URL or a local UTF-8 file."""
        source = self.source
        if isinstance(source, str) and source.startswith(("http://", "https://")):
            return self._fetch_markdown(source)
        path = Path(source)
        if not path.exists():
            msg = f"Guide source '{path}' not found."
            raise FileNotFoundError(msg)
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _fetch_markdown(url: str) -> str:
        """Download markdown from ``url``, retrying transient server errors."""
        session = requests.Session()
        retry = Retry(
            total=5,
            read=5,
            connect=3,
            backoff_factor=0.5,
            status_forcelist=(500, 502, 503, 504),
            allowed_methods=("GET", "HEAD"),
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        try:
            resp = session.get(url, timeout=30)
            resp.raise_for_status()
            resp.encoding = "utf-8"
            return resp.text
        finally:
            session.close()

    @staticmethod
    def _reset_output_dir(out_dir: Path) -> None:
        """Delete ``out_dir`` if present and recreate it empty."""
        if out_dir.exists():
            shutil.rmtree(out_dir)
        out_dir.mkdir(parents=True)


def explode(
    source: str | Path,
    output_dir: Path,
    *,
    config: GuideConfig | None = None,
) -> ExplodeResult:
    """Split ``source`` into per-section pages under ``output_dir``.

    Parameters
    ----------
    source : str or Path
        Guide location: a filesystem path or an ``http(s)://`` URL.
    output_dir : Path
        Destination directory. Deleted and recreated on every run.
    config : GuideConfig, optional
        Index metadata and parser options; defaults apply when omitted.

    Returns
    -------
    ExplodeResult
        Paths written by the run.
    """
    exploder = SectionExploder(config, source=source, output_dir=output_dir)
    return exploder.run()


__all__ = [
    "ExplodeResult",
    "SectionExploder",
    "SectionPage",
    "SlugCollisionError",
    "assign_slugs",
    "explode",
    "render_navigation",
    "render_section_page",
]
