"""Load web fonts from Google Fonts.

The plugin always adds ``preconnect`` hints for the Google Fonts hosts. When
``families`` are configured it downloads the CSS2 stylesheet once at build
time, stores it as a static asset, and links it from every page.

Options
-------
families : list[str]
    Font family specs, e.g. ``"Inter:wght@400;700"``.
display : str
    ``font-display`` strategy, ``"swap"`` by default.
output : str
    Asset path of the stylesheet below the output directory.
api_url : str
    Stylesheet endpoint; override for mirrors.
"""

from __future__ import annotations

import logging
import typing as typ

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .base import DEFAULT_REGISTRY

if typ.TYPE_CHECKING:
    from .base import BuildContext

GOOGLE_FONTS_API = "https://fonts.googleapis.com/css2"
FONT_HOSTS = ("https://fonts.googleapis.com", "https://fonts.gstatic.com")
DEFAULT_STYLESHEET = "css/google-fonts.css"
# Google only serves woff2 sources to user agents it recognises as modern.
_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

logger = logging.getLogger(__name__)


@DEFAULT_REGISTRY.register("google-fonts")
def load_google_fonts(context: BuildContext, options: typ.Mapping[str, typ.Any]) -> None:
    """Add font preconnect hints and embed the configured font stylesheet."""
    context.add_head_tag("link", rel="preconnect", href=FONT_HOSTS[0])
    context.add_head_tag("link", rel="preconnect", href=FONT_HOSTS[1], crossorigin="anonymous")

    families = [str(family) for family in options.get("families") or []]
    if not families:
        return

    css = fetch_font_stylesheet(
        families,
        display=str(options.get("display") or "swap"),
        api_url=str(options.get("api_url") or GOOGLE_FONTS_API),
    )
    output = str(options.get("output") or DEFAULT_STYLESHEET).lstrip("/")
    context.add_static_file(output, css)
    base_url = context.site.metadata.base_url
    context.add_head_tag("link", rel="stylesheet", href=f"{base_url}{output}")


def fetch_font_stylesheet(
    families: typ.Sequence[str],
    *,
    display: str = "swap",
    api_url: str = GOOGLE_FONTS_API,
    session: requests.Session | None = None,
) -> str:
    """Download the CSS2 stylesheet for ``families``.

    Raises
    ------
    requests.HTTPError
        If Google Fonts answers with an error status.
    """
    own_session = session is None
    http = session or _build_session()
    try:
        logger.debug("fetching font stylesheet for %s", ", ".join(families))
        resp = http.get(
            api_url,
            params={"family": list(families), "display": display},
            headers={"User-Agent": _USER_AGENT},
            timeout=30,
        )
        resp.raise_for_status()
        return resp.text
    finally:
        if own_session:
            http.close()


def _build_session() -> requests.Session:
    """Return a session that retries transient server errors."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


__all__ = ["GOOGLE_FONTS_API", "fetch_font_stylesheet", "load_google_fonts"]
