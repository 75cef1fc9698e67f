"""Load and validate the guide exploder configuration YAML.

This subpackage parses the project's ``config/guide.yaml`` file, applies the
built-in defaults for anything omitted, and produces typed dataclasses
(:class:`GuideConfig`, :class:`IndexConfig`, :class:`ParserConfig`) that the
exploder consumes. The primary entry point is :func:`load_guide_config`.

Examples
--------
>>> from pathlib import Path
>>> from guide_docs.config import load_guide_config
>>> config = load_guide_config(Path("config/guide.yaml"))  # doctest: +SKIP
>>> config.parser.slug_collisions  # doctest: +SKIP
<SlugCollisionPolicy.OVERWRITE: 'overwrite'>
"""

from .loader import load_guide_config
from .models import (
    GuideConfig,
    GuideConfigError,
    IndexConfig,
    ParserConfig,
    SlugCollisionPolicy,
)

__all__ = [
    "GuideConfig",
    "GuideConfigError",
    "IndexConfig",
    "ParserConfig",
    "SlugCollisionPolicy",
    "load_guide_config",
]
