# infra/db/models.py
"""
ORM rows for projects, tasks and the finish-to-start links between tasks.
Enums are stored by member name (PLANNED, IN_PROGRESS, ...), matching the
initial migration.
"""
from __future__ import annotations
from datetime import date
from typing import List, Optional

from sqlalchemy import Date, Enum as SAEnum, Float, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infra.db.base import Base
from core.models import ProjectStatus, TaskPriority, TaskStatus


def _task_fk() -> ForeignKey:
    return ForeignKey("tasks.id", ondelete="CASCADE")


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    end_date: Mapped[Optional[date]] = mapped_column(Date)
    status: Mapped[ProjectStatus] = mapped_column(SAEnum(ProjectStatus), nullable=False, default=ProjectStatus.PLANNED)


class TaskORM(Base):
    __tablename__ = "tasks"
    __table_args__ = (Index("idx_tasks_project_id", "project_id"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, default="")
    estimated_hours: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    actual_hours: Mapped[Optional[float]] = mapped_column(Float)
    status: Mapped[TaskStatus] = mapped_column(SAEnum(TaskStatus), nullable=False, default=TaskStatus.TODO)
    priority: Mapped[TaskPriority] = mapped_column(SAEnum(TaskPriority), nullable=False, default=TaskPriority.MEDIUM)
    assignee: Mapped[Optional[str]] = mapped_column(String)
    progress: Mapped[float] = mapped_column(Float, default=0.0)
    start_date: Mapped[Optional[date]] = mapped_column(Date)
    end_date: Mapped[Optional[date]] = mapped_column(Date)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # incoming links in declared order; written only through TaskDependencyORM
    dependency_links: Mapped[List["TaskDependencyORM"]] = relationship(
        primaryjoin="TaskORM.id == TaskDependencyORM.successor_task_id",
        foreign_keys="TaskDependencyORM.successor_task_id",
        order_by="TaskDependencyORM.position",
        lazy="selectin",
        viewonly=True,
    )


class TaskDependencyORM(Base):
    __tablename__ = "task_dependencies"
    __table_args__ = (
        UniqueConstraint("predecessor_task_id", "successor_task_id", name="uq_dependency_pair"),
        Index("idx_dep_predecessor", "predecessor_task_id"),
        Index("idx_dep_successor", "successor_task_id"),
    )

    id: Mapped[str] = mapped_column(String, primary_key=True)
    predecessor_task_id: Mapped[str] = mapped_column(_task_fk(), nullable=False)
    successor_task_id: Mapped[str] = mapped_column(_task_fk(), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


__all__ = ["ProjectORM", "TaskDependencyORM", "TaskORM"]
