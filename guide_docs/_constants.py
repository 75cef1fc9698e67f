"""Common literal values used across guide_docs.

These constants keep filenames, reserved headings, and the default metadata
markers centralized so the parser, exploder, configuration loader, and tests
import the same values without drifting. Intended for internal use within the
guide_docs package.

Examples
--------
>>> from guide_docs import _constants
>>> _constants.PAGE_FILENAME_TEMPLATE.format(slug="getting-started")
'getting-started.md'
>>> _constants.INDEX_FILENAME
'index.md'
"""

INDEX_FILENAME = "index.md"
INDEX_SLUG = "index"
PAGE_FILENAME_TEMPLATE = "{slug}.md"

TABLE_OF_CONTENTS_HEADING = "Table of Contents"
DEFAULT_TITLE = "Brandon's Clean Architecture Guide"
DEFAULT_METADATA_MARKERS: tuple[str, ...] = (
    "**Last Updated",
    "**Status",
    "**Target Audience",
)
FALLBACK_SLUG = "section"
