from .critical_path import CriticalPathService, CriticalPathResult, CPMNode, compute_critical_path
from .project import ProjectService
from .task import TaskService

__all__ = [
    "CriticalPathService",
    "CriticalPathResult",
    "CPMNode",
    "compute_critical_path",
    "ProjectService",
    "TaskService",
]
