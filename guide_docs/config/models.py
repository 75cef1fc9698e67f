"""Typed dataclasses describing guide_docs configuration structures."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import enum
from pathlib import Path

from .._constants import DEFAULT_METADATA_MARKERS, DEFAULT_TITLE


class GuideConfigError(ValueError):
    """Raised when the guide configuration is invalid or incomplete."""


class SlugCollisionPolicy(enum.StrEnum):
    """How to handle two sections whose titles produce the same slug."""

    OVERWRITE = "overwrite"
    SUFFIX = "suffix"
    ERROR = "error"


@dc.dataclass(slots=True)
class IndexConfig:
    """Literal metadata rendered into ``index.md``.

    None of these values are derived from the guide; ``title`` is only used
    when the guide has no top-level heading.
    """

    title: str = DEFAULT_TITLE
    author: str = "Brandon John-Freso"
    license: str = "MIT"
    last_updated: dt.date = dt.date(2025, 12, 9)


@dc.dataclass(slots=True)
class ParserConfig:
    """Options steering how the guide is split into sections."""

    metadata_markers: tuple[str, ...] = DEFAULT_METADATA_MARKERS
    slug_collisions: SlugCollisionPolicy = SlugCollisionPolicy.OVERWRITE


@dc.dataclass(slots=True)
class GuideConfig:
    """Fully resolved configuration for one exploder run."""

    source: str = "GUIDE.md"
    output_dir: Path = Path("docs")
    index: IndexConfig = dc.field(default_factory=IndexConfig)
    parser: ParserConfig = dc.field(default_factory=ParserConfig)


__all__ = [
    "GuideConfig",
    "GuideConfigError",
    "IndexConfig",
    "ParserConfig",
    "SlugCollisionPolicy",
]
