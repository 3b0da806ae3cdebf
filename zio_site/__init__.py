"""Configuration composition and build-time plugins for the ZIO docs site.

This package assembles ``config/site.yaml`` into an immutable site
configuration, runs the markdown transforms and plugin pipeline over the
documentation, and exports the configuration the site-build engine consumes.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from zio_site import app
>>> app.name[0]
'zio-site'
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
