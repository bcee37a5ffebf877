# infra/db/mappers.py
"""Conversions between the domain dataclasses and their ORM rows."""
from __future__ import annotations

from core.models import Project, Task, TaskDependency
from infra.db.models import ProjectORM, TaskDependencyORM, TaskORM

_PROJECT_COLUMNS = ("id", "name", "description", "start_date", "end_date", "status")
# Task.dependencies is not a column: it is read back from the incoming links
_TASK_COLUMNS = (
    "id",
    "project_id",
    "title",
    "description",
    "estimated_hours",
    "actual_hours",
    "status",
    "priority",
    "assignee",
    "progress",
    "start_date",
    "end_date",
)


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(**{column: getattr(project, column) for column in _PROJECT_COLUMNS})


def project_from_orm(row: ProjectORM) -> Project:
    fields = {column: getattr(row, column) for column in _PROJECT_COLUMNS}
    fields["description"] = fields["description"] or ""
    return Project(**fields)


def task_to_orm(task: Task, position: int | None = None) -> TaskORM:
    row = TaskORM(**{column: getattr(task, column) for column in _TASK_COLUMNS})
    if position is not None:
        row.position = position
    return row


def task_from_orm(row: TaskORM) -> Task:
    fields = {column: getattr(row, column) for column in _TASK_COLUMNS}
    fields["description"] = fields["description"] or ""
    fields["estimated_hours"] = fields["estimated_hours"] or 0.0
    fields["progress"] = fields["progress"] or 0.0
    return Task(dependencies=[link.predecessor_task_id for link in row.dependency_links], **fields)


def dependency_to_orm(link: TaskDependency, position: int) -> TaskDependencyORM:
    return TaskDependencyORM(
        id=link.id,
        predecessor_task_id=link.predecessor_task_id,
        successor_task_id=link.successor_task_id,
        position=position,
    )


def dependency_from_orm(row: TaskDependencyORM) -> TaskDependency:
    return TaskDependency(row.id, row.predecessor_task_id, row.successor_task_id)


__all__ = [
    "dependency_from_orm",
    "dependency_to_orm",
    "project_from_orm",
    "project_to_orm",
    "task_from_orm",
    "task_to_orm",
]
