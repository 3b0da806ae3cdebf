"""Cyclopts CLI entrypoint for validating, exporting, and building the ZIO docs site.

The ``zio-site`` console script defined here loads ``config/site.yaml``,
reports the doc sets it declares, exports the engine configuration JSON, and
runs the build step (markdown transforms plus the plugin pipeline). Every
option can also be supplied through a ``ZIO_SITE_``-prefixed environment
variable, which keeps CI invocations short.

Examples
--------
Validate the default configuration:

>>> from zio_site.cli import main
>>> main()  # doctest: +SKIP

Build into a custom directory:

>>> from zio_site.cli import app
>>> app(["build", "--out-dir", "dist"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG, ENGINE_CONFIG_FILENAME
from .build import SiteBuilder
from .config import load_site_config, resolve_doc_sets
from .export import write_engine_config

DEFAULT_OUT_DIR = Path("build")
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = App(name="zio-site", config=cyclopts.config.Env("ZIO_SITE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT, force=True
    )


@app.command(help="Load and validate the site configuration.")
def check(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="ZIO_SITE_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Validate ``config`` and print a short summary.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file (overridable via
        ``ZIO_SITE_CONFIG``).

    Raises
    ------
    SiteConfigError
        If the configuration violates the schema.
    """
    site = load_site_config(config)
    print(f"{site.metadata.title}: {site.metadata.url}{site.metadata.base_url}")
    print(f"preset: {site.preset.name}")
    versions = ", ".join(entry.key for entry in site.docs.versions)
    print(f"versions: {versions} (last: {site.docs.last_version})")
    plugins = ", ".join(entry.reference for entry in site.plugins) or "none"
    print(f"plugins: {plugins}")
    print(f"redirects: {len(site.redirects)}")


@app.command(help="List the documentation versions and the routes serving them.")
def versions(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="ZIO_SITE_CONFIG")
    ] = DEFAULT_CONFIG,
) -> None:
    """Print one ``key<TAB>label<TAB>route`` line per doc set."""
    site = load_site_config(config)
    doc_sets = resolve_doc_sets(
        site.docs, base_url=site.metadata.base_url, site_root=site.site_root
    )
    for doc_set in doc_sets:
        print(f"{doc_set.version.key}\t{doc_set.version.label}\t{doc_set.route}")


@app.command(help="Write the engine configuration JSON.")
def export(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="ZIO_SITE_CONFIG")
    ] = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Where to write the JSON", env_var="ZIO_SITE_OUTPUT"),
    ] = None,
) -> None:
    """Export the assembled configuration for the site-build engine.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file.
    output : Path or None, optional
        Target file; defaults to ``docusaurus.config.json`` in the site root.
    """
    site = load_site_config(config)
    target = output or site.site_root / ENGINE_CONFIG_FILENAME
    print(f"wrote {_format_path(write_engine_config(site, target))}")


@app.command(help="Transform the docs, run the plugins, and write the build output.")
def build(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="ZIO_SITE_CONFIG")
    ] = DEFAULT_CONFIG,
    out_dir: typ.Annotated[
        Path, Parameter(help="Output directory", env_var="ZIO_SITE_OUT_DIR")
    ] = DEFAULT_OUT_DIR,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug diagnostics", env_var="ZIO_SITE_VERBOSE")
    ] = False,
) -> None:
    """Run the build step and print every written path.

    Parameters
    ----------
    config : Path, optional
        Path to the ``site.yaml`` configuration file.
    out_dir : Path, optional
        Directory receiving the transformed pages and generated assets.
    verbose : bool, optional
        Enable debug logging for the transforms and plugins.

    Raises
    ------
    SiteConfigError
        If the configuration is invalid or a sidebar file is missing.
    PluginExecutionError
        If a markdown transform or plugin fails.
    """
    _configure_logging(verbose=verbose)
    site = load_site_config(config)
    for path in SiteBuilder(site, out_dir=out_dir).run():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``zio-site`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
