"""Build context, plugin protocol, and the plugin registry.

A plugin is a plain callable receiving the shared :class:`BuildContext` and its
own options mapping. Plugins register new content, rewrite existing content, or
inject build-time assets by mutating the context; they return nothing.
Plugins are looked up by reference name in a :class:`PluginRegistry`, so the
configuration only ever holds ``(reference, options)`` pairs.

Example
-------
>>> registry = PluginRegistry()
>>> @registry.register("noop")
... def noop(context, options):
...     return None
>>> registry.resolve("noop") is noop
True
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

    from zio_site.config import SiteConfig, VersionEntry


class PluginExecutionError(RuntimeError):
    """Raised when a plugin fails; the build is aborted."""

    def __init__(self, plugin: str, message: str) -> None:
        super().__init__(f"Plugin '{plugin}' failed: {message}")
        self.plugin = plugin


class UnknownPluginError(LookupError):
    """Raised when a configuration references an unregistered plugin."""


class Plugin(typ.Protocol):
    """Callable transform unit run by the plugin pipeline."""

    def __call__(
        self, context: BuildContext, options: typ.Mapping[str, typ.Any]
    ) -> None: ...


@dc.dataclass(slots=True)
class Document:
    """A markdown page discovered in, or registered into, the site.

    Attributes
    ----------
    route : str
        URL path the page is served at.
    source_path : str
        Path relative to the site root, used for output and edit links.
    content : str
        Current markdown text; plugins may rewrite it.
    version : VersionEntry or None
        Version the page belongs to; ``None`` for generated pages.
    """

    route: str
    source_path: str
    content: str
    version: VersionEntry | None = None


@dc.dataclass(frozen=True, slots=True)
class HeadTag:
    """HTML tag injected into every page head."""

    tag_name: str
    attributes: tuple[tuple[str, str], ...]


@dc.dataclass(slots=True)
class BuildContext:
    """Mutable state shared by the plugins of one build."""

    site: SiteConfig
    site_dir: Path
    out_dir: Path
    documents: dict[str, Document] = dc.field(default_factory=dict)
    static_files: dict[str, str | bytes] = dc.field(default_factory=dict)
    postcss_plugins: list[str] = dc.field(default_factory=list)
    head_tags: list[HeadTag] = dc.field(default_factory=list)
    redirects: dict[str, str] = dc.field(default_factory=dict)
    invocations: list[str] = dc.field(default_factory=list)

    def add_document(self, document: Document) -> None:
        """Register a new page, refusing to shadow an existing route."""
        if document.route in self.documents:
            msg = f"Route '{document.route}' is already served by another page."
            raise ValueError(msg)
        self.documents[document.route] = document

    def add_static_file(self, relative_path: str, content: str | bytes) -> None:
        """Queue a file to be written below the output directory."""
        self.static_files[relative_path.lstrip("/")] = content

    def add_head_tag(self, tag_name: str, **attributes: str) -> None:
        """Queue a head tag, ignoring exact duplicates."""
        tag = HeadTag(tag_name=tag_name, attributes=tuple(sorted(attributes.items())))
        if tag not in self.head_tags:
            self.head_tags.append(tag)

    def resolve(self, path: str) -> Document | None:
        """Return the page served at ``path``, following redirects."""
        seen: set[str] = set()
        current = _normalize_route(path)
        while current in self.redirects and current not in seen:
            seen.add(current)
            current = _normalize_route(self.redirects[current])
        return self.documents.get(current) or self.documents.get(current + "/")


def _normalize_route(path: str) -> str:
    """Drop query strings, fragments, and trailing slashes from a route."""
    route = path.split("#", 1)[0].split("?", 1)[0]
    if len(route) > 1:
        route = route.rstrip("/")
    return route or "/"


class PluginRegistry:
    """Map plugin reference names onto plugin callables."""

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}

    def __contains__(self, reference: object) -> bool:
        return reference in self._plugins

    def register(self, reference: str) -> typ.Callable[[Plugin], Plugin]:
        """Return a decorator registering a plugin under ``reference``."""

        def _decorator(plugin: Plugin) -> Plugin:
            if reference in self._plugins:
                msg = f"Plugin '{reference}' is already registered."
                raise ValueError(msg)
            self._plugins[reference] = plugin
            return plugin

        return _decorator

    def resolve(self, reference: str) -> Plugin:
        """Return the plugin registered under ``reference``."""
        try:
            return self._plugins[reference]
        except KeyError as exc:
            available = ", ".join(sorted(self._plugins))
            msg = f"Unknown plugin '{reference}'. Known plugins: {available}"
            raise UnknownPluginError(msg) from exc

    def names(self) -> list[str]:
        """Return the registered reference names."""
        return sorted(self._plugins)


DEFAULT_REGISTRY = PluginRegistry()


__all__ = [
    "DEFAULT_REGISTRY",
    "BuildContext",
    "Document",
    "HeadTag",
    "Plugin",
    "PluginExecutionError",
    "PluginRegistry",
    "UnknownPluginError",
]
