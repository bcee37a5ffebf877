from __future__ import annotations

import logging
from typing import Iterable

from core.exceptions import NotFoundError
from core.interfaces import ProjectRepository, TaskRepository
from core.models import SinkAnchor, Task
from core.services.critical_path.engine import compute_critical_path
from core.services.critical_path.models import CriticalPathResult

logger = logging.getLogger(__name__)


class CriticalPathService:
    """Feeds stored project tasks into the critical-path computation."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        task_repo: TaskRepository,
        default_sink_anchor: SinkAnchor = SinkAnchor.OWN_FINISH,
    ):
        self._project_repo: ProjectRepository = project_repo
        self._task_repo: TaskRepository = task_repo
        self._default_sink_anchor: SinkAnchor = SinkAnchor(default_sink_anchor)

    def analyze_tasks(
        self,
        tasks: Iterable[Task],
        sink_anchor: SinkAnchor | str | None = None,
    ) -> CriticalPathResult:
        return compute_critical_path(tasks, sink_anchor=sink_anchor or self._default_sink_anchor)

    def analyze_project(
        self,
        project_id: str,
        sink_anchor: SinkAnchor | str | None = None,
    ) -> CriticalPathResult:
        project = self._project_repo.get(project_id)
        if project is None:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")

        tasks = self._task_repo.list_by_project(project_id)
        result = self.analyze_tasks(tasks, sink_anchor=sink_anchor)
        logger.info(
            "Critical path for project %s: %d tasks, %d days, %d critical",
            project_id,
            len(result.nodes),
            result.project_duration_days,
            result.critical_tasks_count,
        )
        return result


__all__ = ["CriticalPathService"]
