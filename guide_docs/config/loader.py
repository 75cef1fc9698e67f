"""Load guide configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _optional_str,
    _parse_collision_policy,
    _parse_date,
    _parse_markers,
)
from .models import GuideConfig, GuideConfigError, IndexConfig, ParserConfig


def load_guide_config(path: Path, *, required: bool = True) -> GuideConfig:
    """Load the YAML configuration describing how the guide is exploded.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``config/guide.yaml``).
    required : bool, optional
        When ``False`` a missing file yields the built-in defaults instead of
        raising.

    Returns
    -------
    GuideConfig
        Parsed configuration with defaults applied for every omitted field.

    Raises
    ------
    FileNotFoundError
        If ``required`` is set and the configuration file does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    GuideConfigError
        If a field holds a value of the wrong shape (for example, an unknown
        slug collision policy).

    Examples
    --------
    >>> from pathlib import Path
    >>> from guide_docs.config import load_guide_config
    >>> config = load_guide_config(Path("config/guide.yaml"))  # doctest: +SKIP
    >>> config.output_dir  # doctest: +SKIP
    PosixPath('docs')
    """
    if not path.exists():
        if not required:
            return GuideConfig()
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
    base = GuideConfig()

    defaults = _section(raw, "defaults")
    source = _optional_str(defaults.get("source")) or base.source
    output_dir = Path(_optional_str(defaults.get("output_dir")) or base.output_dir)

    return GuideConfig(
        source=source,
        output_dir=output_dir,
        index=_build_index_config(_section(raw, "index"), base.index),
        parser=_build_parser_config(_section(raw, "parser"), base.parser),
    )


def _section(raw: typ.Mapping[str, typ.Any], key: str) -> typ.Mapping[str, typ.Any]:
    """Return the mapping stored under ``key``, treating blanks as empty."""
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        msg = f"'{key}' must be a mapping."
        raise GuideConfigError(msg)
    return value


def _build_index_config(
    payload: typ.Mapping[str, typ.Any], base: IndexConfig
) -> IndexConfig:
    return IndexConfig(
        title=_optional_str(payload.get("title")) or base.title,
        author=_optional_str(payload.get("author")) or base.author,
        license=_optional_str(payload.get("license")) or base.license,
        last_updated=_parse_date(payload.get("last_updated"), base.last_updated),
    )


def _build_parser_config(
    payload: typ.Mapping[str, typ.Any], base: ParserConfig
) -> ParserConfig:
    return ParserConfig(
        metadata_markers=_parse_markers(
            payload.get("metadata_markers"), base.metadata_markers
        ),
        slug_collisions=_parse_collision_policy(payload.get("slug_collisions")),
    )


__all__ = ["load_guide_config"]
