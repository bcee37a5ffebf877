from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from uuid import uuid4

from core.domain.enums import TaskPriority, TaskStatus


@dataclass
class Task:
    """
    One unit of work. Only ``id``, ``estimated_hours`` and ``dependencies``
    feed the schedule; the rest is carried through to reports and risk.
    """

    id: str
    project_id: str
    title: str
    estimated_hours: float = 0.0
    # predecessor ids in declared order; ids outside the analyzed set are ignored
    dependencies: List[str] = field(default_factory=list)
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    actual_hours: Optional[float] = None
    assignee: Optional[str] = None
    progress: float = 0.0
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: str = ""

    @classmethod
    def create(cls, project_id: str, title: str, **fields) -> "Task":
        return cls(id=str(uuid4()), project_id=project_id, title=title, **fields)


@dataclass(frozen=True)
class TaskDependency:
    """Finish-to-start link: the successor waits for the predecessor."""

    id: str
    predecessor_task_id: str
    successor_task_id: str

    @classmethod
    def create(cls, predecessor_id: str, successor_id: str) -> "TaskDependency":
        return cls(str(uuid4()), predecessor_id, successor_id)


__all__ = ["Task", "TaskDependency"]
