"""Build-time plugins and the sequential pipeline that runs them.

Importing this package registers the built-in plugins on
:data:`DEFAULT_REGISTRY`:

- ``docusaurus-tailwindcss``: append the Tailwind PostCSS plugin.
- ``zio-ecosystem``: generate the ecosystem project listing page.
- ``google-fonts``: preconnect to and embed Google Fonts.
- ``client-redirects``: emit redirect pages for moved routes.
"""

from . import ecosystem, google_fonts, redirects, tailwind
from .base import (
    DEFAULT_REGISTRY,
    BuildContext,
    Document,
    HeadTag,
    Plugin,
    PluginExecutionError,
    PluginRegistry,
    UnknownPluginError,
)
from .pipeline import PluginPipeline

__all__ = [
    "DEFAULT_REGISTRY",
    "BuildContext",
    "Document",
    "HeadTag",
    "Plugin",
    "PluginExecutionError",
    "PluginPipeline",
    "PluginRegistry",
    "UnknownPluginError",
    "ecosystem",
    "google_fonts",
    "redirects",
    "tailwind",
]
