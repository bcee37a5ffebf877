from core.domain.enums import ProjectStatus, RiskLevel, SinkAnchor, TaskPriority, TaskStatus
from core.domain.project import Project
from core.domain.task import Task, TaskDependency

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
