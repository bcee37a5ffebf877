from __future__ import annotations

from enum import Enum


class ProjectStatus(str, Enum):
    PLANNED = "planned"
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    BLOCKED = "blocked"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SinkAnchor(str, Enum):
    """Where the backward pass pins tasks that nothing depends on."""

    OWN_FINISH = "own_finish"
    PROJECT_FINISH = "project_finish"


__all__ = ["ProjectStatus", "TaskStatus", "TaskPriority", "RiskLevel", "SinkAnchor"]
