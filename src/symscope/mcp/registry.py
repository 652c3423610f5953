"""Registry of lookup projects served by one tool endpoint."""

from __future__ import annotations

import logging
from pathlib import Path

from symscope.lookup.protocols import LookupProject

logger = logging.getLogger(__name__)


def _normalize(path: str) -> Path:
    return Path(path).expanduser().resolve()


class ProjectRegistry:
    """Projects addressable by name, base path, or a path inside them."""

    def __init__(self, projects: list[LookupProject] | tuple[LookupProject, ...] = ()):
        self._projects: dict[str, LookupProject] = {}
        for project in projects:
            self.register(project)

    def register(self, project: LookupProject) -> None:
        if project.name in self._projects:
            logger.warning("Replacing registered project %r", project.name)
        self._projects[project.name] = project

    @property
    def projects(self) -> list[LookupProject]:
        return list(self._projects.values())

    def resolve(self, project_name: str | None = None, project_root: str | None = None) -> LookupProject | None:
        """Find the project a request targets.

        Order: explicit name or base path, then the only registered
        project, then the project whose base path matches or contains
        ``project_root``.
        """
        if project_name and project_name.strip():
            found = self._find_by_name_or_path(project_name)
            if found is not None:
                return found

        if len(self._projects) == 1:
            return next(iter(self._projects.values()))

        if project_root and project_root.strip():
            return self._find_by_root(project_root)
        return None

    def _find_by_name_or_path(self, identifier: str) -> LookupProject | None:
        if identifier in self._projects:
            return self._projects[identifier]
        wanted = _normalize(identifier)
        for project in self._projects.values():
            if project.base_path and _normalize(project.base_path) == wanted:
                return project
        return None

    def _find_by_root(self, root: str) -> LookupProject | None:
        wanted = _normalize(root)
        containing: list[tuple[int, LookupProject]] = []
        for project in self._projects.values():
            if not project.base_path:
                continue
            base = _normalize(project.base_path)
            if base == wanted:
                return project
            if wanted.is_relative_to(base):
                containing.append((len(base.parts), project))
        if containing:
            # Innermost project wins for nested base paths
            return max(containing, key=lambda item: item[0])[1]
        return None
