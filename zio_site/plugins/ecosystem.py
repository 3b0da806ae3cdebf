"""Generate the ecosystem project listing page.

The ``zio-ecosystem`` plugin turns its ``projects`` option into a markdown page
registered as new content. Descriptions missing from the options can be filled
in from the GitHub repository description when ``fetch_metadata`` is set.
"""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ
from pathlib import Path

from github3 import GitHub
from jinja2 import Environment, FileSystemLoader

from zio_site._constants import TEMPLATES_DIR

from .base import DEFAULT_REGISTRY, Document

if typ.TYPE_CHECKING:
    from .base import BuildContext

DEFAULT_ROUTE = "/ecosystem/projects"
DEFAULT_TITLE = "Ecosystem Projects"
DEFAULT_INTRO = "Official and community libraries built on top of ZIO."


@dc.dataclass(slots=True)
class EcosystemProject:
    """A single row of the ecosystem listing."""

    name: str
    repo: str
    description: str = ""

    @property
    def url(self) -> str:
        """Return the GitHub URL of the project."""
        return f"https://github.com/{self.repo}"


class EcosystemPageBuilder:
    """Render the ecosystem listing page from project metadata."""

    def __init__(
        self,
        projects: list[EcosystemProject],
        *,
        github: GitHub | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        self.projects = projects
        self._github_client = github
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=False,  # noqa: S701 - renders markdown, not HTML
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("ecosystem.md.jinja")

    def _github(self) -> GitHub:
        """Return a cached github3.py client, lazily configured from env tokens."""
        if self._github_client is None:
            token = os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN")
            self._github_client = GitHub(token=token)
        return self._github_client

    def fill_descriptions(self) -> None:
        """Fetch repository descriptions for projects that have none."""
        for project in self.projects:
            if project.description:
                continue
            owner, _, name = project.repo.partition("/")
            repository = self._github().repository(owner, name)
            project.description = (repository.description or "").strip()

    def render(self, *, doc_id: str, title: str, intro: str) -> str:
        """Return the markdown page."""
        text = self.template.render(
            doc_id=doc_id, title=title, intro=intro, projects=self.projects
        )
        if not text.endswith("\n"):
            text += "\n"
        return text


@DEFAULT_REGISTRY.register("zio-ecosystem")
def ecosystem_projects(
    context: BuildContext, options: typ.Mapping[str, typ.Any]
) -> None:
    """Register the ecosystem listing page; no-op without projects."""
    projects = [_build_project(entry) for entry in options.get("projects") or []]
    if not projects:
        return
    route = str(options.get("route") or DEFAULT_ROUTE)
    builder = EcosystemPageBuilder(projects)
    if options.get("fetch_metadata"):
        builder.fill_descriptions()
    content = builder.render(
        doc_id=route.strip("/").rsplit("/", 1)[-1],
        title=str(options.get("title") or DEFAULT_TITLE),
        intro=str(options.get("intro") or DEFAULT_INTRO),
    )
    context.add_document(
        Document(
            route=route,
            source_path=f"generated{route}.md",
            content=content,
        )
    )


def _build_project(entry: object) -> EcosystemProject:
    match entry:
        case {"name": name, "repo": repo, **rest}:
            pass
        case _:
            msg = f"Ecosystem projects require 'name' and 'repo', got {entry!r}."
            raise ValueError(msg)
    if "/" not in str(repo):
        msg = f"Ecosystem project repo '{repo}' must be in 'owner/name' form."
        raise ValueError(msg)
    description = " ".join(str(rest.get("description") or "").split())
    return EcosystemProject(name=str(name), repo=str(repo), description=description)


__all__ = ["EcosystemPageBuilder", "EcosystemProject", "ecosystem_projects"]
