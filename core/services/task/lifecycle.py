from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError
from core.interfaces import DependencyRepository, ProjectRepository, TaskRepository
from core.models import Task, TaskDependency, TaskPriority, TaskStatus
from core.services.transaction import committing

logger = logging.getLogger(__name__)


def status_for_progress(current: TaskStatus, progress: float) -> TaskStatus:
    """Status implied by a progress report: 0 resets, 100 finishes, anything between is work."""
    if progress >= 100:
        return TaskStatus.DONE
    if progress <= 0:
        return TaskStatus.TODO
    if current in (TaskStatus.TODO, TaskStatus.DONE):
        return TaskStatus.IN_PROGRESS
    return current


class TaskLifecycleMixin:
    _session: Session
    _project_repo: ProjectRepository
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def create_task(
        self,
        project_id: str,
        title: str,
        estimated_hours: float = 0.0,
        dependencies: Iterable[str] | None = None,
        description: str = "",
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        assignee: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Task:
        """
        Add a task to the end of the project's task list.
        ``dependencies`` keep their declared order; repeats are dropped.
        """
        if self._project_repo.get(project_id) is None:
            raise NotFoundError(f"Project {project_id} does not exist.", code="PROJECT_NOT_FOUND")
        title = self._clean_title(title)
        hours = self._hours(estimated_hours, code="TASK_INVALID_ESTIMATE")
        self._check_window(start_date, end_date)
        predecessor_ids = self._resolve_predecessors(project_id, dependencies or ())

        task = Task.create(
            project_id=project_id,
            title=title,
            estimated_hours=hours,
            dependencies=predecessor_ids,
            description=(description or "").strip(),
            status=status,
            priority=priority,
            assignee=(assignee or "").strip() or None,
            start_date=start_date,
            end_date=end_date,
        )
        with committing(self._session, f"create task {title!r}"):
            self._task_repo.add(task)
            for predecessor_id in predecessor_ids:
                self._dependency_repo.add(TaskDependency.create(predecessor_id, task.id))
        logger.info("Task %s (%s) added to project %s", task.id, task.title, project_id)
        domain_events.tasks_changed.emit(project_id)
        return task

    def update_task(
        self,
        task_id: str,
        title: str | None = None,
        description: str | None = None,
        estimated_hours: float | None = None,
        priority: TaskPriority | None = None,
        assignee: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Task:
        task = self.require_task(task_id)
        start = start_date if start_date is not None else task.start_date
        end = end_date if end_date is not None else task.end_date
        self._check_window(start, end)

        if title is not None:
            task.title = self._clean_title(title)
        if estimated_hours is not None:
            task.estimated_hours = self._hours(estimated_hours, code="TASK_INVALID_ESTIMATE")
        if description is not None:
            task.description = description.strip()
        if priority is not None:
            task.priority = priority
        if assignee is not None:
            task.assignee = assignee.strip() or None
        task.start_date, task.end_date = start, end
        return self._store(task)

    def set_status(self, task_id: str, status: TaskStatus) -> Task:
        task = self.require_task(task_id)
        task.status = status
        if status == TaskStatus.DONE:
            task.progress = 100.0
        return self._store(task)

    def update_progress(
        self,
        task_id: str,
        progress: float | None = None,
        actual_hours: float | None = None,
    ) -> Task:
        task = self.require_task(task_id)
        if progress is not None:
            task.progress = self._percent(progress)
            task.status = status_for_progress(task.status, task.progress)
        if actual_hours is not None:
            task.actual_hours = self._hours(actual_hours, code="TASK_INVALID_HOURS")
        return self._store(task)

    def delete_task(self, task_id: str) -> None:
        """Remove the task; links to and from it go too."""
        task = self.require_task(task_id)
        with committing(self._session, f"delete task {task_id}"):
            self._dependency_repo.delete_for_task(task_id)
            self._task_repo.delete(task_id)
        logger.info("Task %s (%s) deleted", task.id, task.title)
        domain_events.tasks_changed.emit(task.project_id)

    def _resolve_predecessors(self, project_id: str, dependencies: Iterable[str]) -> List[str]:
        resolved: List[str] = []
        for dep_id in dependencies:
            if dep_id in resolved:
                continue
            self._check_same_project(self.require_task(dep_id), project_id)
            resolved.append(dep_id)
        return resolved

    def _store(self, task: Task) -> Task:
        with committing(self._session, f"update task {task.id}"):
            self._task_repo.update(task)
        domain_events.tasks_changed.emit(task.project_id)
        return task


__all__ = ["TaskLifecycleMixin", "status_for_progress"]
