"""Build step: discover documentation, transform it, and write the results.

:class:`SiteBuilder` drives one build of the documentation site. It checks
that every doc set has a sidebar file, loads the markdown content of each
version into a :class:`~zio_site.plugins.BuildContext`, applies the markdown
extension set to every page, runs the general plugin pipeline, checks
relative markdown links, and finally writes pages, static assets, a build
manifest, and the engine configuration below the output directory.

Example
-------
>>> from pathlib import Path
>>> from zio_site.config import load_site_config
>>> site = load_site_config(Path("config/site.yaml"))  # doctest: +SKIP
>>> SiteBuilder(site, out_dir=Path("build")).run()  # doctest: +SKIP
[PosixPath('build/docs/index.md'), ...]
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json

from zio_site._constants import ENGINE_CONFIG_FILENAME, MANIFEST_FILENAME, STATIC_DIR
from zio_site.config import DocSet, SiteConfigError, resolve_doc_sets
from zio_site.export import write_engine_config
from zio_site.links import report_broken_links
from zio_site.markdown import MarkdownExtensionSet
from zio_site.plugins import (
    DEFAULT_REGISTRY,
    BuildContext,
    Document,
    PluginPipeline,
    PluginRegistry,
)

if typ.TYPE_CHECKING:
    from zio_site.config import SiteConfig
    from zio_site.markdown import ExtensionFactory

MARKDOWN_SUFFIXES = (".md", ".mdx")
CURRENT_DOCS_PREFIX = "docs/"

logger = logging.getLogger(__name__)


class SiteBuilder:
    """Run the markdown transforms and plugin pipeline for one site."""

    def __init__(
        self,
        site: SiteConfig,
        *,
        out_dir: Path,
        site_dir: Path | None = None,
        registry: PluginRegistry = DEFAULT_REGISTRY,
        remark_factories: typ.Mapping[str, ExtensionFactory] | None = None,
    ) -> None:
        """Prepare a build without touching the filesystem.

        Parameters
        ----------
        site : SiteConfig
            Assembled configuration to build.
        out_dir : Path
            Directory receiving every written artifact.
        site_dir : Path, optional
            Site source directory; defaults to ``site.site_root``.
        registry : PluginRegistry, optional
            Registry resolving the general plugin references.
        remark_factories : Mapping[str, ExtensionFactory], optional
            Markdown extension factories keyed by remark plugin reference;
            defaults to the built-in set.

        Raises
        ------
        UnknownPluginError
            If a plugin or remark plugin reference is not registered.
        """
        self.site = site
        self.site_dir = site_dir or site.site_root
        self.out_dir = out_dir
        self.pipeline = PluginPipeline(site.plugins, registry)
        self.doc_sets = resolve_doc_sets(
            site.docs, base_url=site.metadata.base_url, site_root=self.site_dir
        )
        self.extension_sets = {
            doc_set.version.key: MarkdownExtensionSet(
                site.docs.remark_plugins,
                docs_root=doc_set.content_dir,
                site_root=self.site_dir,
                factories=remark_factories,
            )
            for doc_set in self.doc_sets
        }

    def run(self) -> list[Path]:
        """Build the site and return the written paths.

        Raises
        ------
        SiteConfigError
            If a doc set's sidebar file does not exist.
        PluginExecutionError
            If a markdown transform or plugin fails.
        BrokenLinkError
            If broken markdown links are found and the policy is ``throw``.
        """
        self._check_sidebars()
        context = BuildContext(site=self.site, site_dir=self.site_dir, out_dir=self.out_dir)
        for doc_set in self.doc_sets:
            self._load_doc_set(context, doc_set)
        self.pipeline.run(context)
        report_broken_links(context, self.site.metadata.on_broken_markdown_links)
        return self._write(context)

    def _check_sidebars(self) -> None:
        missing = [doc_set for doc_set in self.doc_sets if not doc_set.sidebar_path.is_file()]
        if missing:
            listing = ", ".join(
                f"{doc_set.version.key} ({doc_set.sidebar_path})" for doc_set in missing
            )
            msg = f"Sidebar file not found for docs version(s): {listing}"
            raise SiteConfigError(msg)

    def _load_doc_set(self, context: BuildContext, doc_set: DocSet) -> None:
        """Register every markdown page of ``doc_set`` after transforming it."""
        if not doc_set.content_dir.is_dir():
            logger.warning(
                "docs version %s has no content directory at %s",
                doc_set.version.key,
                doc_set.content_dir,
            )
            return
        extensions = self.extension_sets[doc_set.version.key]
        for path in _markdown_files(doc_set.content_dir):
            relative = path.relative_to(doc_set.content_dir)
            content = extensions.apply(path.read_text(encoding="utf-8"))
            context.add_document(
                Document(
                    route=_page_route(doc_set.route, relative),
                    source_path=_source_path(path, self.site_dir),
                    content=content,
                    version=doc_set.version,
                )
            )
        logger.debug("loaded docs version %s from %s", doc_set.version.key, doc_set.content_dir)

    def _write(self, context: BuildContext) -> list[Path]:
        written: list[Path] = []
        for document in context.documents.values():
            target = self.out_dir / document.source_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(document.content, encoding="utf-8")
            written.append(target)
        for relative, content in sorted(context.static_files.items()):
            target = self.out_dir / STATIC_DIR / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
            written.append(target)
        written.append(self._write_manifest(context))
        written.append(write_engine_config(self.site, self.out_dir / ENGINE_CONFIG_FILENAME))
        return written

    def _write_manifest(self, context: BuildContext) -> Path:
        """Record what the plugins contributed beyond pages and static files."""
        manifest = {
            "plugins": context.invocations,
            "routes": {route: doc.source_path for route, doc in context.documents.items()},
            "headTags": [
                {"tagName": tag.tag_name, "attributes": dict(tag.attributes)}
                for tag in context.head_tags
            ],
            "postcssPlugins": context.postcss_plugins,
            "editUrls": {
                route: self.site.docs.edit_url_for(
                    doc.source_path.removeprefix(CURRENT_DOCS_PREFIX)
                )
                for route, doc in context.documents.items()
                if doc.version is not None and doc.version.is_current
            },
            "redirects": context.redirects,
        }
        target = self.out_dir / MANIFEST_FILENAME
        target.parent.mkdir(parents=True, exist_ok=True)
        payload = msgspec_json.format(msgspec_json.encode(manifest), indent=2)
        target.write_bytes(payload + b"\n")
        return target


def _markdown_files(content_dir: Path) -> list[Path]:
    """Return markdown files below ``content_dir``, skipping ``_``-prefixed parts."""
    return sorted(
        path
        for path in content_dir.rglob("*")
        if path.is_file()
        and path.suffix in MARKDOWN_SUFFIXES
        and not any(part.startswith("_") for part in path.relative_to(content_dir).parts)
    )


def _page_route(base_route: str, relative: Path) -> str:
    """Return the route a page is served at; ``index`` pages take their folder."""
    parts = list(relative.with_suffix("").parts)
    if parts and parts[-1] == "index":
        parts.pop()
    route = base_route.rstrip("/") + "/" + "/".join(parts)
    return route.rstrip("/") or "/"


def _source_path(path: Path, site_dir: Path) -> str:
    try:
        return path.relative_to(site_dir).as_posix()
    except ValueError:
        return path.as_posix()


__all__ = ["SiteBuilder"]
