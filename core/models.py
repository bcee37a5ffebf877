from __future__ import annotations

from core.domain import (
    Project,
    ProjectStatus,
    RiskLevel,
    SinkAnchor,
    Task,
    TaskDependency,
    TaskPriority,
    TaskStatus,
)

__all__ = [
    "ProjectStatus",
    "TaskStatus",
    "TaskPriority",
    "RiskLevel",
    "SinkAnchor",
    "Project",
    "Task",
    "TaskDependency",
]
