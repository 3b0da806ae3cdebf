"""Build and validate client redirect rules."""

from __future__ import annotations

import typing as typ

from .helpers import _as_list, _optional_str
from .models import RedirectRule, SiteConfigError


def build_redirect_rules(entries: object) -> tuple[RedirectRule, ...]:
    """Return validated redirect rules from ``{from, to}`` mappings.

    ``from`` may be a single path or a list of paths; a list expands into one
    rule per source path.

    Raises
    ------
    SiteConfigError
        If a rule lacks ``from`` or ``to``, a path is not absolute, a rule
        points at itself, or two rules share a ``from`` path.
    """
    rules: list[RedirectRule] = []
    for entry in _as_list(entries, "Redirects"):
        match entry:
            case {"from": sources, "to": target}:
                pass
            case _:
                msg = f"Redirect rules require 'from' and 'to', got {entry!r}."
                raise SiteConfigError(msg)
        to_path = _normalize_path(target, "to")
        source_list = sources if isinstance(sources, list) else [sources]
        rules.extend(
            RedirectRule(from_path=_normalize_path(source, "from"), to_path=to_path)
            for source in source_list
        )
    validate_redirect_rules(rules)
    return tuple(rules)


def validate_redirect_rules(rules: typ.Iterable[RedirectRule]) -> None:
    """Reject self-redirects and duplicate ``from`` paths."""
    seen: set[str] = set()
    for rule in rules:
        if rule.from_path == rule.to_path:
            msg = f"Redirect from '{rule.from_path}' points at itself."
            raise SiteConfigError(msg)
        if rule.from_path in seen:
            msg = f"Duplicate redirect source '{rule.from_path}'."
            raise SiteConfigError(msg)
        seen.add(rule.from_path)


def _normalize_path(value: object, field: str) -> str:
    """Return an absolute route path without a trailing slash."""
    path = _optional_str(value)
    if path is None:
        msg = f"Redirect '{field}' path cannot be empty."
        raise SiteConfigError(msg)
    if not path.startswith("/"):
        msg = f"Redirect '{field}' path '{path}' must start with '/'."
        raise SiteConfigError(msg)
    if len(path) > 1:
        path = path.rstrip("/")
    return path


__all__ = ["build_redirect_rules", "validate_redirect_rules"]
