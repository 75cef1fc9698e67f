"""Cyclopts CLI entrypoint for exploding the guide into docs pages.

The ``guide-docs`` console script defined here splits ``GUIDE.md`` into one
Markdown page per second-level section plus an ``index.md`` landing page under
``docs/``, ready for MkDocs. Typical usage involves running
``guide-docs explode`` locally or in CI whenever the guide changes; the output
directory is regenerated from scratch on every run.

Examples
--------
Explode the guide using the default configuration:

>>> from guide_docs.cli import main
>>> main()  # doctest: +SKIP

Explode a different file into a custom directory:

>>> from guide_docs.cli import app
>>> app(["explode", "--source", "DRAFT.md", "--output-dir", "site-docs"])  # doctest: +SKIP
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import load_guide_config
from .exploder import SectionExploder
from .markdown_parser import slugify

DEFAULT_CONFIG = Path("config/guide.yaml")

app = App(name="guide-docs", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Split the guide into per-section Markdown pages and an index.")
def explode(
    *,
    source: typ.Annotated[
        str | None,
        Parameter(help="Guide path or http(s) URL", env_var="INPUT_SOURCE"),
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    config: typ.Annotated[
        Path, Parameter(help="Path to guide config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Explode the guide into the docs directory.

    Parameters
    ----------
    source : str or None, optional
        Guide location overriding ``defaults.source`` from the config.
    output_dir : Path or None, optional
        Output directory overriding ``defaults.output_dir``. Its previous
        contents are deleted.
    config : Path, optional
        Path to ``guide.yaml``. The default path may be absent, in which case
        built-in defaults apply; an explicitly supplied path must exist.

    Returns
    -------
    None
        Writes the pages and prints one line per section file plus a summary.
    """
    guide_config = load_guide_config(config, required=config != DEFAULT_CONFIG)
    exploder = SectionExploder(guide_config, source=source, output_dir=output_dir)
    result = exploder.run()
    for path in result.section_paths:
        print(f"Created: {path.name}")
    print(
        f"\nExploded {len(result.pages)} sections into "
        f"{_format_path(result.output_dir)}/"
    )
    print(f"Created {result.index_path.name}")


@app.command(help="Print the file slug generated for a section heading.")
def slug(title: str) -> None:
    """Print the slug ``explode`` would use for ``title``."""
    print(slugify(title))


def main() -> None:
    """Invoke the Cyclopts application that powers the `guide-docs` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
