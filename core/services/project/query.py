from __future__ import annotations

from typing import List

from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository
from core.models import Project, ProjectStatus


class ProjectQueryMixin:
    _project_repo: ProjectRepository

    def get_project(self, project_id: str) -> Project | None:
        return self._project_repo.get(project_id)

    def require_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} does not exist.", code="PROJECT_NOT_FOUND")
        return project

    def list_projects(self, status: ProjectStatus | None = None) -> List[Project]:
        projects = self._project_repo.list_all()
        if status is None:
            return projects
        return [p for p in projects if p.status == status]

    def list_projects_by_status(self, status: ProjectStatus) -> List[Project]:
        return self.list_projects(status=status)

    def find_project_by_name(self, name: str) -> Project | None:
        wanted = name.strip().casefold()
        return next((p for p in self._project_repo.list_all() if p.name.strip().casefold() == wanted), None)


__all__ = ["ProjectQueryMixin"]
