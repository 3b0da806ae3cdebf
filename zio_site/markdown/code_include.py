r"""Replace code-include placeholders with verbatim source fragments.

A placeholder is a line holding the marker followed by attributes::

    CODE_INCLUDE file="../examples/src/main/scala/Main.scala" doctag="main"

``file`` resolves against the documentation root. With ``doctag`` only the
lines between the two ``doctag<main>`` marker comments are included. Inside a
fenced code block the placeholder line is replaced in place; elsewhere the
fragment is wrapped in a new fence whose language comes from ``lang`` or from
the Pygments lexer matching the file name.

Example
-------
>>> from pathlib import Path
>>> ext = CodeIncludeExtension(docs_root=Path("docs"))  # doctest: +SKIP
"""

from __future__ import annotations

import re
import textwrap
import typing as typ
from pathlib import Path

from markdown.extensions import Extension
from markdown.preprocessors import Preprocessor
from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

if typ.TYPE_CHECKING:
    from markdown import Markdown

DEFAULT_MARKER = "CODE_INCLUDE"
ATTRIBUTE_PATTERN = re.compile(r'(\w+)="([^"]*)"')
FENCE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})")


class CodeIncludeError(RuntimeError):
    """Raised when an included file or doctag region cannot be read."""


class CodeIncludeExtension(Extension):
    """Register the code-include preprocessor on a Markdown instance."""

    def __init__(
        self,
        *,
        docs_root: Path,
        marker: str = DEFAULT_MARKER,
        name: str = "code_include",
        priority: float = 40,
    ) -> None:
        self.docs_root = docs_root
        self.marker = marker
        self.name = name
        self.priority = priority
        super().__init__()

    @classmethod
    def from_options(
        cls,
        options: typ.Mapping[str, typ.Any],
        *,
        docs_root: Path,
        site_root: Path,  # noqa: ARG003 - shared factory signature
        name: str,
        priority: float,
    ) -> CodeIncludeExtension:
        """Build the extension from plugin options (``marker``)."""
        marker = str(options.get("marker") or DEFAULT_MARKER)
        return cls(docs_root=docs_root, marker=marker, name=name, priority=priority)

    def extendMarkdown(self, md: Markdown) -> None:  # type: ignore[override]  # noqa: N802
        """Register the code-include preprocessor on the Markdown instance."""
        processor = CodeIncludePreprocessor(md, self.docs_root, self.marker)
        md.preprocessors.register(processor, self.name, self.priority)


class CodeIncludePreprocessor(Preprocessor):
    """Expand marker lines into the contents of the referenced files."""

    def __init__(self, md: Markdown, docs_root: Path, marker: str) -> None:
        super().__init__(md)
        self.docs_root = docs_root
        self.marker = marker
        self._marker_pattern = re.compile(
            rf"^(?P<indent>\s*){re.escape(marker)}(?P<attrs>(?:\s+\w+=\"[^\"]*\")*)\s*$"
        )

    def run(self, lines: list[str]) -> list[str]:
        """Return ``lines`` with every placeholder expanded."""
        output: list[str] = []
        fence: str | None = None
        for line in lines:
            fence_match = FENCE_PATTERN.match(line)
            if fence_match:
                marker = fence_match.group(1)
                if fence is None:
                    fence = marker
                elif marker[0] == fence[0] and len(marker) >= len(fence):
                    fence = None
                output.append(line)
                continue

            match = self._marker_pattern.match(line)
            if not match:
                output.append(line)
                continue

            attrs = dict(ATTRIBUTE_PATTERN.findall(match.group("attrs")))
            indent = match.group("indent")
            fragment = self._load_fragment(attrs)
            body = [f"{indent}{row}" if row else row for row in fragment.splitlines()]
            if fence is not None:
                output.extend(body)
            else:
                language = attrs.get("lang") or _language_for(attrs["file"])
                output.append(f"{indent}```{language}")
                output.extend(body)
                output.append(f"{indent}```")
        return output

    def _load_fragment(self, attrs: dict[str, str]) -> str:
        """Read the referenced file, narrowed to its doctag region if any."""
        target = attrs.get("file")
        if not target:
            msg = f"{self.marker} placeholder requires a 'file' attribute."
            raise CodeIncludeError(msg)
        path = (self.docs_root / target).resolve()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot include '{target}' (resolved to {path}): {exc}"
            raise CodeIncludeError(msg) from exc
        doctag = attrs.get("doctag")
        if doctag:
            text = _extract_doctag(text, doctag, target)
        return text.rstrip("\n")


def _extract_doctag(text: str, doctag: str, target: str) -> str:
    """Return the dedented lines between the two ``doctag<name>`` markers."""
    token = f"doctag<{doctag}>"
    lines = text.splitlines()
    positions = [index for index, line in enumerate(lines) if token in line]
    if len(positions) < 2:  # noqa: PLR2004 - an opening and a closing marker
        msg = f"Doctag '{doctag}' is not delimited twice in '{target}'."
        raise CodeIncludeError(msg)
    start, end = positions[0], positions[1]
    return textwrap.dedent("\n".join(lines[start + 1 : end]))


def _language_for(filename: str) -> str:
    """Return the Pygments alias for ``filename`` or ``text``."""
    try:
        lexer = get_lexer_for_filename(Path(filename).name)
    except ClassNotFound:
        return "text"
    return lexer.aliases[0] if lexer.aliases else "text"


__all__ = [
    "DEFAULT_MARKER",
    "CodeIncludeError",
    "CodeIncludeExtension",
    "CodeIncludePreprocessor",
]
