"""Markdown-only transforms applied before the general plugin pipeline."""

from .code_include import CodeIncludeError, CodeIncludeExtension
from .extension_set import REMARK_PLUGINS, ExtensionFactory, MarkdownExtensionSet
from .kroki import DiagramRenderError, KrokiExtension, encode_diagram, render_diagram

__all__ = [
    "REMARK_PLUGINS",
    "CodeIncludeError",
    "CodeIncludeExtension",
    "DiagramRenderError",
    "ExtensionFactory",
    "KrokiExtension",
    "MarkdownExtensionSet",
    "encode_diagram",
    "render_diagram",
]
