r"""Render diagram code blocks through a Kroki service.

A fenced block tagged with the configured language and a diagram type::

    ```kroki imgType="mermaid" imgAlt="Request flow"
    graph TD; A-->B
    ```

is replaced by an image reference, unless it sits inside another fenced
block. The SVG is requested from
``<kroki_base>/<type>/svg/<payload>``, where the payload is the
deflate-compressed, URL-safe base64 encoded diagram source, and stored under
``img_dir``. A diagram whose image already exists there is not requested
again. Service errors are raised as :class:`DiagramRenderError`; nothing is
retried.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import re
import typing as typ
import zlib

import requests
from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor

if typ.TYPE_CHECKING:
    from pathlib import Path

    from markdown import Markdown

DEFAULT_KROKI_BASE = "https://kroki.io"
DEFAULT_LANG = "kroki"
DEFAULT_IMG_REF_DIR = "/img/kroki"
DEFAULT_IMG_DIR = "static/img/kroki"
FENCE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})")
ATTRIBUTE_PATTERN = re.compile(r'(\w+)=(?:"([^"]*)"|(\S+))')

logger = logging.getLogger(__name__)


class DiagramRenderError(RuntimeError):
    """Raised when the diagram service cannot render a block."""


class KrokiExtension(Extension):
    """Register the Kroki diagram preprocessor on a Markdown instance."""

    def __init__(
        self,
        *,
        img_dir: Path,
        kroki_base: str = DEFAULT_KROKI_BASE,
        lang: str = DEFAULT_LANG,
        img_ref_dir: str = DEFAULT_IMG_REF_DIR,
        session: requests.Session | None = None,
        name: str = "kroki",
        priority: float = 35,
        timeout: float = 30.0,
    ) -> None:
        self.img_dir = img_dir
        self.kroki_base = kroki_base.rstrip("/")
        self.lang = lang
        self.img_ref_dir = img_ref_dir.rstrip("/")
        self.session = session
        self.name = name
        self.priority = priority
        self.timeout = timeout
        super().__init__()

    @classmethod
    def from_options(
        cls,
        options: typ.Mapping[str, typ.Any],
        *,
        docs_root: Path,  # noqa: ARG003 - shared factory signature
        site_root: Path,
        name: str,
        priority: float,
    ) -> KrokiExtension:
        """Build the extension from plugin options.

        Recognised options are ``kroki_base``, ``lang``, ``img_ref_dir`` and
        ``img_dir`` (relative to the site root).
        """
        return cls(
            img_dir=site_root / str(options.get("img_dir") or DEFAULT_IMG_DIR),
            kroki_base=str(options.get("kroki_base") or DEFAULT_KROKI_BASE),
            lang=str(options.get("lang") or DEFAULT_LANG),
            img_ref_dir=str(options.get("img_ref_dir") or DEFAULT_IMG_REF_DIR),
            name=name,
            priority=priority,
        )

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the diagram preprocessor on the Markdown instance."""
        md.preprocessors.register(KrokiPreprocessor(md, self), self.name, self.priority)


class KrokiPreprocessor(Preprocessor):
    """Swap diagram fences for references to rendered images."""

    def __init__(self, md: Markdown, extension: KrokiExtension) -> None:
        super().__init__(md)
        self.ext = extension
        self._open_pattern = re.compile(
            rf"^(?P<indent>\s*)(?P<fence>`{{3,}}|~{{3,}})\s*{re.escape(extension.lang)}"
            r"(?:\s+(?P<attrs>.*))?$"
        )

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with top-level diagram blocks replaced by images."""
        output: list[str] = []
        outer: str | None = None
        index = 0
        while index < len(lines):
            line = lines[index]
            if outer is not None:
                if _closes(line, outer):
                    outer = None
                output.append(line)
                index += 1
                continue
            match = self._open_pattern.match(line)
            if not match:
                fence_match = FENCE_PATTERN.match(line)
                if fence_match:
                    outer = fence_match.group(1)
                output.append(line)
                index += 1
                continue
            fence = match.group("fence")
            body: list[str] = []
            index += 1
            while index < len(lines) and not _closes(lines[index], fence):
                body.append(lines[index])
                index += 1
            if index >= len(lines):
                msg = f"Unterminated {self.ext.lang} block."
                raise DiagramRenderError(msg)
            index += 1
            attrs = _parse_attributes(match.group("attrs") or "")
            output.append(match.group("indent") + self._render(body, attrs))
        return output

    def _render(self, body: list[str], attrs: dict[str, str]) -> str:
        """Return the image reference for one diagram, rendering it if needed."""
        diagram_type = attrs.get("imgType") or attrs.get("type")
        if not diagram_type:
            msg = f"{self.ext.lang} block requires an 'imgType' attribute."
            raise DiagramRenderError(msg)
        source = "\n".join(body).strip("\n")
        digest = hashlib.sha256(f"{diagram_type}\n{source}".encode()).hexdigest()[:20]
        filename = f"{diagram_type}-{digest}.svg"
        target = self.ext.img_dir / filename
        if target.exists():
            logger.debug("reusing cached diagram %s", target)
        else:
            svg = render_diagram(
                source,
                diagram_type,
                kroki_base=self.ext.kroki_base,
                session=self.ext.session,
                timeout=self.ext.timeout,
            )
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(svg)
        alt = attrs.get("imgAlt") or attrs.get("imgTitle") or diagram_type
        title = attrs.get("imgTitle")
        suffix = f' "{title}"' if title else ""
        return f"![{alt}]({self.ext.img_ref_dir}/{filename}{suffix})"


def encode_diagram(source: str) -> str:
    """Return the Kroki URL payload for ``source``."""
    compressed = zlib.compress(source.encode("utf-8"), 9)
    return base64.urlsafe_b64encode(compressed).decode("ascii")


def render_diagram(
    source: str,
    diagram_type: str,
    *,
    kroki_base: str = DEFAULT_KROKI_BASE,
    session: requests.Session | None = None,
    timeout: float = 30.0,
) -> bytes:
    """Fetch the rendered SVG for ``source`` from the Kroki service.

    Raises
    ------
    DiagramRenderError
        If the request fails or the service answers with an error status.
    """
    url = f"{kroki_base.rstrip('/')}/{diagram_type}/svg/{encode_diagram(source)}"
    http = session or requests.Session()
    try:
        logger.debug("rendering %s diagram via %s", diagram_type, kroki_base)
        resp = http.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        msg = f"Kroki failed to render {diagram_type} diagram: {exc}"
        raise DiagramRenderError(msg) from exc
    finally:
        if session is None:
            http.close()
    return resp.content


def _closes(line: str, fence: str) -> bool:
    """Return True when ``line`` closes a block opened with ``fence``."""
    stripped = line.strip()
    return len(stripped) >= len(fence) and set(stripped) == {fence[0]}


def _parse_attributes(text: str) -> dict[str, str]:
    """Parse ``key="value"`` and ``key=value`` pairs from a fence info string."""
    return {
        key: quoted if quoted else bare
        for key, quoted, bare in ATTRIBUTE_PATTERN.findall(text)
    }


__all__ = [
    "DiagramRenderError",
    "KrokiExtension",
    "KrokiPreprocessor",
    "encode_diagram",
    "render_diagram",
]
