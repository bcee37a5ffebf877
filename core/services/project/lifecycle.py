from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.interfaces import DependencyRepository, ProjectRepository, TaskRepository
from core.models import Project, ProjectStatus
from core.services.project.validation import ProjectValidationMixin
from core.services.transaction import committing

logger = logging.getLogger(__name__)


class ProjectLifecycleMixin(ProjectValidationMixin):
    _session: Session
    _project_repo: ProjectRepository
    _task_repo: TaskRepository
    _dependency_repo: DependencyRepository

    def create_project(
        self,
        name: str,
        description: str = "",
        start_date: date | None = None,
        end_date: date | None = None,
        status: ProjectStatus = ProjectStatus.PLANNED,
    ) -> Project:
        self._check_window(start_date, end_date)
        project = Project.create(
            name=self._clean_name(name),
            description=(description or "").strip(),
            start_date=start_date,
            end_date=end_date,
            status=status,
        )
        with committing(self._session, f"create project {project.name!r}"):
            self._project_repo.add(project)
        logger.info("Project %s created (%s)", project.id, project.name)
        domain_events.project_changed.emit(project.id)
        return project

    def update_project(
        self,
        project_id: str,
        name: str | None = None,
        description: str | None = None,
        status: ProjectStatus | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> Project:
        """Apply the given fields; ``None`` leaves a field as it is."""
        project = self.require_project(project_id)
        window = (
            start_date if start_date is not None else project.start_date,
            end_date if end_date is not None else project.end_date,
        )
        self._check_window(*window)
        if name is not None:
            project.name = self._clean_name(name, current_id=project_id)
        if description is not None:
            project.description = description.strip()
        if status is not None:
            project.status = status
        project.start_date, project.end_date = window

        with committing(self._session, f"update project {project_id}"):
            self._project_repo.update(project)
        domain_events.project_changed.emit(project_id)
        return project

    def delete_project(self, project_id: str) -> None:
        """Remove the project with its tasks and their dependency links."""
        project = self.require_project(project_id)
        tasks = self._task_repo.list_by_project(project_id)
        with committing(self._session, f"delete project {project_id}"):
            for task in tasks:
                self._dependency_repo.delete_for_task(task.id)
                self._task_repo.delete(task.id)
            self._project_repo.delete(project_id)
        logger.info("Project %s deleted with %d task(s)", project.id, len(tasks))
        domain_events.project_changed.emit(project_id)


__all__ = ["ProjectLifecycleMixin"]
