"""Tools for publishing the architecture guide as a multi-page docs site.

This package exposes the CLI entry points used by ``uv run guide-docs`` to
split the single-file guide into MkDocs pages, along with the library-level
:func:`explode` helper.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``explode``: Split a guide into per-section pages and an index.

Examples
--------
>>> from guide_docs import main
>>> main()  # doctest: +SKIP
>>> from guide_docs import explode
>>> explode("GUIDE.md", Path("docs"))  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main
from .exploder import explode

__all__ = ["app", "explode", "main"]
