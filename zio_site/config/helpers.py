"""Utility helpers shared by the site configuration builders."""

from __future__ import annotations

import datetime as dt
import typing as typ

from .models import SiteConfigError

COPYRIGHT_YEAR_PLACEHOLDER = "{year}"


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _require_str(payload: typ.Mapping[str, typ.Any], key: str, context: str) -> str:
    """Return ``payload[key]`` as a non-empty string or raise SiteConfigError."""
    value = _optional_str(payload.get(key))
    if value is None:
        msg = f"{context} requires '{key}'."
        raise SiteConfigError(msg)
    return value


def _as_mapping(value: object, context: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    match value:
        case None:
            return {}
        case dict() as data:
            return data
        case _:
            msg = f"{context} must be a mapping."
            raise SiteConfigError(msg)


def _as_list(value: object, context: str) -> list[typ.Any]:
    """Return ``value`` as a list, treating ``None`` as empty."""
    match value:
        case None:
            return []
        case list() | tuple() as items:
            return list(items)
        case _:
            msg = f"{context} must be a list."
            raise SiteConfigError(msg)


def _as_bool(value: object, *, default: bool) -> bool:
    """Coerce YAML scalars into booleans."""
    match value:
        case None:
            return default
        case bool():
            return value
        case str() as text:
            return text.strip().lower() in {"1", "true", "yes", "on"}
        case _:
            return bool(value)


def _current_year(today: dt.date | None = None) -> int:
    """Return the calendar year used for the copyright line."""
    return (today or dt.date.today()).year


def _render_copyright(template: str, year: int) -> str:
    """Substitute the ``{year}`` placeholder in the copyright template."""
    return template.replace(COPYRIGHT_YEAR_PLACEHOLDER, str(year)).strip()


def _join_route(*segments: str | None) -> str:
    """Join URL path segments into a route with leading and trailing slashes."""
    parts = [
        piece
        for segment in segments
        if segment
        for piece in segment.strip("/").split("/")
        if piece
    ]
    if not parts:
        return "/"
    return "/" + "/".join(parts) + "/"


__all__ = [
    "COPYRIGHT_YEAR_PLACEHOLDER",
    "_as_bool",
    "_as_list",
    "_as_mapping",
    "_current_year",
    "_join_route",
    "_optional_str",
    "_render_copyright",
    "_require_str",
]
