from __future__ import annotations

from typing import List

from core.exceptions import NotFoundError
from core.interfaces import TaskRepository
from core.models import Task, TaskStatus


class TaskQueryMixin:
    _task_repo: TaskRepository

    def get_task(self, task_id: str) -> Task | None:
        return self._task_repo.get(task_id)

    def require_task(self, task_id: str) -> Task:
        task = self._task_repo.get(task_id)
        if task is None:
            raise NotFoundError(f"Task {task_id} does not exist.", code="TASK_NOT_FOUND")
        return task

    def list_tasks_for_project(self, project_id: str) -> List[Task]:
        """Tasks in the order they were added, which is the order the analyzer sees."""
        return self._task_repo.list_by_project(project_id)

    def list_tasks_by_status(self, project_id: str, status: TaskStatus) -> List[Task]:
        return [task for task in self._task_repo.list_by_project(project_id) if task.status == status]

    def list_dependents(self, task_id: str) -> List[Task]:
        task = self._task_repo.get(task_id)
        if task is None:
            return []
        siblings = self._task_repo.list_by_project(task.project_id)
        return [other for other in siblings if task_id in other.dependencies]


__all__ = ["TaskQueryMixin"]
