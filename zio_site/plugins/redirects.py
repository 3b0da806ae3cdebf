"""Install client-side redirects for moved pages.

Each rule produces a static ``<from>/index.html`` page that forwards the
browser to the ``to`` route, and the redirect map is recorded on the build
context so :meth:`BuildContext.resolve` can follow it.
"""

from __future__ import annotations

import logging
import typing as typ

from jinja2 import Environment, FileSystemLoader, select_autoescape

from zio_site._constants import TEMPLATES_DIR
from zio_site.config.redirects import build_redirect_rules

from .base import DEFAULT_REGISTRY

if typ.TYPE_CHECKING:
    from zio_site.config import RedirectRule

    from .base import BuildContext

logger = logging.getLogger(__name__)


@DEFAULT_REGISTRY.register("client-redirects")
def install_redirects(context: BuildContext, options: typ.Mapping[str, typ.Any]) -> None:
    """Register redirect rules and emit one redirect page per ``from`` path.

    Raises
    ------
    SiteConfigError
        If the rule set is invalid (for example duplicate ``from`` paths).
    ValueError
        If a ``from`` path is already served by a page.
    """
    rules = build_redirect_rules(options.get("redirects"))
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template("redirect.html.jinja")
    for rule in rules:
        if rule.from_path in context.documents:
            msg = f"Redirect source '{rule.from_path}' is already served by a page."
            raise ValueError(msg)
        if context.resolve(rule.to_path) is None:
            logger.warning(
                "redirect target %s for %s is not a known page", rule.to_path, rule.from_path
            )
        context.redirects[rule.from_path] = rule.to_path
        html = template.render(**_redirect_context(context, rule))
        if not html.endswith("\n"):
            html += "\n"
        context.add_static_file(f"{rule.from_path.strip('/')}/index.html", html)


def _redirect_context(context: BuildContext, rule: RedirectRule) -> dict[str, str]:
    """Return the template variables for one redirect page."""
    metadata = context.site.metadata
    target = metadata.base_url.rstrip("/") + rule.to_path
    return {"target": target, "canonical": f"{metadata.url}{target}"}


__all__ = ["install_redirects"]
