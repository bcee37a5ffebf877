# infra/db/repositories.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session

from core.interfaces import DependencyRepository, ProjectRepository, TaskRepository
from core.models import Project, Task, TaskDependency
from infra.db.mappers import (
    dependency_from_orm,
    dependency_to_orm,
    project_from_orm,
    project_to_orm,
    task_from_orm,
    task_to_orm,
)
from infra.db.models import ProjectORM, TaskDependencyORM, TaskORM


class _SessionRepository:
    def __init__(self, session: Session):
        self.session = session

    def _next_position(self, column, owner_column, owner_id: str) -> int:
        # autoflush is off, so rows added earlier in this transaction must be flushed first
        self.session.flush()
        last = self.session.execute(select(func.max(column)).where(owner_column == owner_id)).scalar()
        return 0 if last is None else last + 1


class SqlAlchemyProjectRepository(_SessionRepository, ProjectRepository):
    def add(self, project: Project) -> None:
        self.session.add(project_to_orm(project))

    def update(self, project: Project) -> None:
        self.session.merge(project_to_orm(project))

    def delete(self, project_id: str) -> None:
        self.session.execute(delete(ProjectORM).where(ProjectORM.id == project_id))

    def get(self, project_id: str) -> Optional[Project]:
        row = self.session.get(ProjectORM, project_id)
        return None if row is None else project_from_orm(row)

    def list_all(self) -> List[Project]:
        rows = self.session.scalars(select(ProjectORM).order_by(ProjectORM.name))
        return [project_from_orm(row) for row in rows]


class SqlAlchemyTaskRepository(_SessionRepository, TaskRepository):
    """Tasks keep a per-project position so the analyzer sees them in insertion order."""

    def add(self, task: Task) -> None:
        position = self._next_position(TaskORM.position, TaskORM.project_id, task.project_id)
        self.session.add(task_to_orm(task, position=position))

    def update(self, task: Task) -> None:
        # position is left unset so merge keeps the stored one
        self.session.merge(task_to_orm(task))

    def delete(self, task_id: str) -> None:
        self.session.execute(delete(TaskORM).where(TaskORM.id == task_id))

    def get(self, task_id: str) -> Optional[Task]:
        row = self.session.get(TaskORM, task_id)
        return None if row is None else task_from_orm(row)

    def list_by_project(self, project_id: str) -> List[Task]:
        stmt = select(TaskORM).where(TaskORM.project_id == project_id).order_by(TaskORM.position)
        return [task_from_orm(row) for row in self.session.scalars(stmt)]


class SqlAlchemyDependencyRepository(_SessionRepository, DependencyRepository):
    """Links keep a per-successor position, which is the declared dependency order."""

    def add(self, dependency: TaskDependency) -> None:
        position = self._next_position(
            TaskDependencyORM.position, TaskDependencyORM.successor_task_id, dependency.successor_task_id
        )
        self.session.add(dependency_to_orm(dependency, position))
        self.session.flush()

    def find(self, predecessor_id: str, successor_id: str) -> Optional[TaskDependency]:
        stmt = select(TaskDependencyORM).where(
            TaskDependencyORM.predecessor_task_id == predecessor_id,
            TaskDependencyORM.successor_task_id == successor_id,
        )
        row = self.session.scalars(stmt).first()
        return None if row is None else dependency_from_orm(row)

    def delete(self, dependency_id: str) -> None:
        self.session.execute(delete(TaskDependencyORM).where(TaskDependencyORM.id == dependency_id))

    def delete_for_task(self, task_id: str) -> None:
        self.session.execute(
            delete(TaskDependencyORM).where(
                or_(
                    TaskDependencyORM.predecessor_task_id == task_id,
                    TaskDependencyORM.successor_task_id == task_id,
                )
            )
        )


__all__ = [
    "SqlAlchemyDependencyRepository",
    "SqlAlchemyProjectRepository",
    "SqlAlchemyTaskRepository",
]
