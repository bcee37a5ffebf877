from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, ProjectRepository, TaskRepository
from core.services.project.lifecycle import ProjectLifecycleMixin
from core.services.project.query import ProjectQueryMixin


class ProjectService(ProjectQueryMixin, ProjectLifecycleMixin):
    """Create, rename, reschedule and remove projects. Deleting cascades to tasks."""

    def __init__(
        self,
        session: Session,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        dependency_repo: DependencyRepository,
    ):
        self._session = session
        self._project_repo = project_repo
        self._task_repo = task_repo
        self._dependency_repo = dependency_repo


__all__ = ["ProjectService"]
