"""Apply the configured remark-style transforms to markdown sources.

Each remark plugin reference maps onto a Python-Markdown extension factory.
:class:`MarkdownExtensionSet` registers the extensions on a single
``Markdown`` instance with descending priorities, so Python-Markdown's
registry orders the preprocessors exactly as they were declared, and then runs
only those preprocessors over each source. The result is markdown text, not
HTML; rendering stays with the site-build engine.
"""

from __future__ import annotations

import typing as typ

from markdown import Markdown

from zio_site.plugins.base import PluginExecutionError, UnknownPluginError

from .code_include import CodeIncludeExtension
from .kroki import KrokiExtension

if typ.TYPE_CHECKING:
    from pathlib import Path

    from markdown.extensions import Extension
    from markdown.preprocessors import Preprocessor

    from zio_site.config import RemarkPluginEntry


class ExtensionFactory(typ.Protocol):
    """Build a markdown extension from remark plugin options."""

    def __call__(
        self,
        options: typ.Mapping[str, typ.Any],
        *,
        docs_root: Path,
        site_root: Path,
        name: str,
        priority: float,
    ) -> Extension: ...


REMARK_PLUGINS: dict[str, ExtensionFactory] = {
    "blended-include-code-plugin": CodeIncludeExtension.from_options,
    "remark-kroki-plugin": KrokiExtension.from_options,
}
_BASE_PRIORITY = 100


class MarkdownExtensionSet:
    """Ordered markdown-only transforms applied before the general plugins."""

    def __init__(
        self,
        entries: typ.Sequence[RemarkPluginEntry],
        *,
        docs_root: Path,
        site_root: Path,
        factories: typ.Mapping[str, ExtensionFactory] | None = None,
    ) -> None:
        available = REMARK_PLUGINS if factories is None else factories
        self.entries = tuple(entries)
        extensions: list[Extension] = []
        self._references: dict[str, str] = {}
        for index, entry in enumerate(self.entries):
            try:
                factory = available[entry.reference]
            except KeyError as exc:
                known = ", ".join(sorted(available))
                msg = f"Unknown remark plugin '{entry.reference}'. Known plugins: {known}"
                raise UnknownPluginError(msg) from exc
            name = f"zio_remark_{index}"
            self._references[name] = entry.reference
            extensions.append(
                factory(
                    entry.options,
                    docs_root=docs_root,
                    site_root=site_root,
                    name=name,
                    priority=_BASE_PRIORITY + len(self.entries) - index,
                )
            )
        self.md = Markdown(extensions=extensions)

    def _processors(self) -> list[tuple[str, Preprocessor]]:
        """Return this set's preprocessors in registry (declaration) order."""
        registry = self.md.preprocessors
        names = [name for name in self._references if name in registry]
        names.sort(key=registry.get_index_for_name)
        return [(name, registry[name]) for name in names]

    def apply(self, text: str) -> str:
        """Return ``text`` after every configured transform ran in order.

        Raises
        ------
        PluginExecutionError
            If a transform fails; the error names the remark plugin.
        """
        lines = text.split("\n")
        for name, processor in self._processors():
            try:
                lines = processor.run(lines)
            except Exception as exc:
                raise PluginExecutionError(self._references[name], str(exc)) from exc
        return "\n".join(lines)


__all__ = ["REMARK_PLUGINS", "ExtensionFactory", "MarkdownExtensionSet"]
