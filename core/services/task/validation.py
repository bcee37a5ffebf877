from __future__ import annotations

import math
from dataclasses import replace
from datetime import date

from core.exceptions import BusinessRuleError, CyclicDependencyError, ValidationError
from core.interfaces import TaskRepository
from core.models import Task
from core.services.critical_path.graph import build_dependency_graph

MAX_TITLE_LENGTH = 200


class TaskValidationMixin:
    _task_repo: TaskRepository

    @staticmethod
    def _clean_title(title: str | None) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValidationError("A task needs a title.", code="TASK_TITLE_EMPTY")
        if len(cleaned) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Task titles are limited to {MAX_TITLE_LENGTH} characters.", code="TASK_TITLE_TOO_LONG"
            )
        return cleaned

    @staticmethod
    def _hours(value: float, *, code: str) -> float:
        """Finite, non-negative hours as a float."""
        try:
            hours = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{value!r} is not a number of hours.", code=code) from None
        if not math.isfinite(hours) or hours < 0:
            raise ValidationError(f"Hours must be zero or more, got {value!r}.", code=code)
        return hours

    @staticmethod
    def _percent(progress: float) -> float:
        try:
            value = float(progress)
        except (TypeError, ValueError):
            raise ValidationError(
                f"Progress is a percentage (0-100), got {progress!r}.", code="TASK_INVALID_PROGRESS"
            ) from None
        if not 0 <= value <= 100:
            raise ValidationError(
                f"Progress is a percentage (0-100), got {progress!r}.", code="TASK_INVALID_PROGRESS"
            )
        return value

    @staticmethod
    def _check_window(start: date | None, end: date | None) -> None:
        if start is not None and end is not None and end < start:
            raise ValidationError(f"Task ends ({end}) before it starts ({start}).", code="TASK_INVALID_DATE")

    @staticmethod
    def _check_same_project(predecessor: Task, project_id: str) -> None:
        if predecessor.project_id != project_id:
            raise ValidationError(
                f"Task {predecessor.id} belongs to another project.", code="DEPENDENCY_CROSS_PROJECT"
            )

    def _check_stays_acyclic(self, predecessor: Task, successor: Task) -> None:
        """Try the new link on the project's tasks; the analyzer must still be able to order them."""
        tasks = [
            replace(task, dependencies=[*task.dependencies, predecessor.id]) if task.id == successor.id else task
            for task in self._task_repo.list_by_project(successor.project_id)
        ]
        try:
            build_dependency_graph(tasks)
        except CyclicDependencyError as exc:
            raise BusinessRuleError(
                f"{predecessor.id} -> {successor.id} would close a loop "
                f"({' -> '.join(exc.cycle + exc.cycle[:1])}).",
                code="DEPENDENCY_CYCLE",
            ) from exc


__all__ = ["MAX_TITLE_LENGTH", "TaskValidationMixin"]
