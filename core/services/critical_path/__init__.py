from .durations import HOURS_PER_DAY, task_duration_days
from .engine import compute_critical_path
from .graph import DependencyGraph, build_dependency_graph
from .models import CPMNode, CriticalPathResult
from .path import enumerate_critical_paths, extract_critical_path
from .risk import RiskMetrics, build_risk_alerts, compute_risk_metrics, is_task_delayed
from .service import CriticalPathService
from .timeline import Timeline, TimelineMilestone, build_timeline, expected_finish_date

__all__ = [
    "HOURS_PER_DAY",
    "task_duration_days",
    "compute_critical_path",
    "DependencyGraph",
    "build_dependency_graph",
    "CPMNode",
    "CriticalPathResult",
    "enumerate_critical_paths",
    "extract_critical_path",
    "RiskMetrics",
    "build_risk_alerts",
    "compute_risk_metrics",
    "is_task_delayed",
    "CriticalPathService",
    "Timeline",
    "TimelineMilestone",
    "build_timeline",
    "expected_finish_date",
]
