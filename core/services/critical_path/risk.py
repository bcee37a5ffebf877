from __future__ import annotations

from dataclasses import dataclass
from typing import List

from core.models import RiskLevel, Task, TaskStatus
from core.services.critical_path.models import CriticalPathResult

# actual effort beyond estimate * 1.1 counts as delayed
DELAY_TOLERANCE = 1.1
HIGH_RISK_DELAYED_TASKS = 5
MEDIUM_RISK_DELAYED_TASKS = 2
HIGH_RISK_CRITICAL_COMPLETION_RATIO = 0.3
LOW_CRITICAL_COMPLETION_PERCENT = 50.0


@dataclass(frozen=True)
class RiskMetrics:
    risk_level: RiskLevel
    delayed_tasks_count: int
    critical_tasks_count: int
    completed_critical_tasks: int
    critical_completion: float


def _status_value(task: Task) -> str:
    return str(getattr(task.status, "value", task.status) or "")


def is_task_delayed(task: Task) -> bool:
    if not task.actual_hours:
        return False
    return float(task.actual_hours) > float(task.estimated_hours or 0.0) * DELAY_TOLERANCE


def compute_risk_metrics(result: CriticalPathResult) -> RiskMetrics:
    critical = result.critical_nodes()
    completed = sum(1 for n in critical if _status_value(n.task) == TaskStatus.DONE.value)
    delayed = sum(1 for n in result.nodes if is_task_delayed(n.task))

    if critical:
        completion = completed / len(critical) * 100.0
    else:
        completion = 100.0

    if delayed > HIGH_RISK_DELAYED_TASKS or (
        critical and completed / len(critical) < HIGH_RISK_CRITICAL_COMPLETION_RATIO
    ):
        level = RiskLevel.HIGH
    elif delayed > MEDIUM_RISK_DELAYED_TASKS:
        level = RiskLevel.MEDIUM
    else:
        level = RiskLevel.LOW

    return RiskMetrics(
        risk_level=level,
        delayed_tasks_count=delayed,
        critical_tasks_count=len(critical),
        completed_critical_tasks=completed,
        critical_completion=completion,
    )


def build_risk_alerts(metrics: RiskMetrics) -> List[str]:
    alerts: List[str] = []
    if metrics.risk_level == RiskLevel.LOW:
        return alerts

    if metrics.delayed_tasks_count > 0:
        alerts.append(
            f"{metrics.delayed_tasks_count} task(s) are running more than 10% over their estimate."
        )
    if metrics.critical_completion < LOW_CRITICAL_COMPLETION_PERCENT:
        alerts.append("Less than 50% of critical tasks are completed.")
    return alerts


__all__ = [
    "DELAY_TOLERANCE",
    "RiskMetrics",
    "build_risk_alerts",
    "compute_risk_metrics",
    "is_task_delayed",
]
