"""Append the Tailwind CSS PostCSS plugin to the stylesheet pipeline."""

from __future__ import annotations

import typing as typ

from .base import DEFAULT_REGISTRY

if typ.TYPE_CHECKING:
    from .base import BuildContext

TAILWIND_POSTCSS_PLUGIN = "@tailwindcss/postcss"


@DEFAULT_REGISTRY.register("docusaurus-tailwindcss")
def configure_postcss(context: BuildContext, options: typ.Mapping[str, typ.Any]) -> None:
    """Add the PostCSS plugin once, after any plugins already configured."""
    plugin = str(options.get("postcss_plugin") or TAILWIND_POSTCSS_PLUGIN)
    if plugin not in context.postcss_plugins:
        context.postcss_plugins.append(plugin)


__all__ = ["TAILWIND_POSTCSS_PLUGIN", "configure_postcss"]
