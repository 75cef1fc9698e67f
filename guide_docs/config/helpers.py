"""Utility helpers shared by the guide_docs configuration loader."""

from __future__ import annotations

import datetime as dt
import typing as typ

from .models import GuideConfigError, SlugCollisionPolicy


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_date(value: dt.date | str | None, default: dt.date) -> dt.date:
    """Return a calendar date from a YAML date, ISO string, or ``default``."""
    match value:
        case dt.datetime():
            return value.date()
        case dt.date():
            return value
        case str() as text if text.strip():
            try:
                return dt.date.fromisoformat(text.strip())
            except ValueError as exc:
                msg = f"Invalid last_updated date {text!r}; expected YYYY-MM-DD."
                raise GuideConfigError(msg) from exc
        case str() | None:
            return default
        case _:
            msg = f"Invalid last_updated value {value!r}; expected YYYY-MM-DD."
            raise GuideConfigError(msg)


def _parse_markers(
    value: typ.Any, default: tuple[str, ...]
) -> tuple[str, ...]:
    """Normalize the metadata marker list, keeping order and dropping blanks."""
    if value is None:
        return default
    if isinstance(value, str) or not isinstance(value, list):
        msg = "parser.metadata_markers must be a list of line prefixes."
        raise GuideConfigError(msg)
    markers: list[str] = []
    for entry in value:
        text = _optional_str(entry)
        if text:
            markers.append(text)
    return tuple(markers)


def _parse_collision_policy(value: object | None) -> SlugCollisionPolicy:
    """Return the configured slug collision policy, defaulting to overwrite."""
    text = _optional_str(value)
    if text is None:
        return SlugCollisionPolicy.OVERWRITE
    try:
        return SlugCollisionPolicy(text.lower())
    except ValueError as exc:
        choices = ", ".join(policy.value for policy in SlugCollisionPolicy)
        msg = f"Unknown slug_collisions policy '{text}'. Expected one of: {choices}"
        raise GuideConfigError(msg) from exc


__all__ = [
    "_optional_str",
    "_parse_collision_policy",
    "_parse_date",
    "_parse_markers",
]
