"""Parse ordered plugin lists into tagged :class:`PluginEntry` values."""

from __future__ import annotations

import typing as typ
from types import MappingProxyType

from .helpers import _as_list, _as_mapping, _optional_str
from .models import PluginEntry, SiteConfigError

EntryT = typ.TypeVar("EntryT", bound=PluginEntry)


def _build_plugin_entries(
    entries: object, entry_type: type[EntryT] = PluginEntry
) -> tuple[EntryT, ...]:
    """Return plugin entries in declaration order.

    Each entry may be a bare reference string, a ``[reference, options]``
    pair, or a ``{plugin: reference, options: {...}}`` mapping.
    """
    return tuple(
        _build_plugin_entry(entry, entry_type) for entry in _as_list(entries, "Plugins")
    )


def _build_plugin_entry(entry: object, entry_type: type[EntryT]) -> EntryT:
    match entry:
        case str() as reference:
            options: object = None
        case [str() as reference]:
            options = None
        case [str() as reference, options]:
            pass
        case {"plugin": str() as reference, **rest}:
            options = rest.get("options")
        case _:
            msg = f"Malformed plugin entry {entry!r}."
            raise SiteConfigError(msg)
    name = _optional_str(reference)
    if name is None:
        msg = "Plugin references cannot be empty."
        raise SiteConfigError(msg)
    data = _as_mapping(options, f"Options of plugin '{name}'")
    return entry_type(reference=name, options=MappingProxyType(dict(data)))


__all__ = ["_build_plugin_entries"]
