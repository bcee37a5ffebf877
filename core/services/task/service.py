from __future__ import annotations

from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, ProjectRepository, TaskRepository
from core.services.task.dependency import TaskDependencyMixin
from core.services.task.lifecycle import TaskLifecycleMixin
from core.services.task.query import TaskQueryMixin
from core.services.task.validation import TaskValidationMixin


class TaskService(TaskQueryMixin, TaskLifecycleMixin, TaskDependencyMixin, TaskValidationMixin):
    """Tasks and the finish-to-start links between them, one project at a time."""

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


__all__ = ["TaskService"]
