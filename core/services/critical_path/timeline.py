from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import List, Optional

from core.services.critical_path.models import CriticalPathResult


@dataclass(frozen=True)
class TimelineMilestone:
    kind: str  # "start", "task" or "end"
    label: str
    task_id: Optional[str] = None
    status: Optional[str] = None
    day_start: Optional[int] = None
    day_end: Optional[int] = None
    on_date: Optional[date] = None


@dataclass(frozen=True)
class Timeline:
    milestones: List[TimelineMilestone] = field(default_factory=list)
    hidden_count: int = 0
    expected_finish: Optional[date] = None


def expected_finish_date(project_start: Optional[date], duration_days: int) -> Optional[date]:
    """Calendar date reached after ``duration_days`` days from the project start."""
    if project_start is None:
        return None
    return project_start + timedelta(days=duration_days)


def build_timeline(
    result: CriticalPathResult,
    project_start: Optional[date] = None,
    max_visible: int = 3,
) -> Timeline:
    finish = expected_finish_date(project_start, result.project_duration_days)
    milestones: List[TimelineMilestone] = [
        TimelineMilestone(kind="start", label="Start", day_start=0, day_end=0, on_date=project_start)
    ]

    visible = result.critical_path[: max(0, max_visible)]
    for task_id in visible:
        node = result.node(task_id)
        if node is None:
            continue
        milestones.append(
            TimelineMilestone(
                kind="task",
                label=node.task.title,
                task_id=task_id,
                status=str(getattr(node.task.status, "value", node.task.status)),
                day_start=node.earliest_start,
                day_end=node.earliest_finish,
                on_date=expected_finish_date(project_start, node.earliest_start),
            )
        )

    milestones.append(
        TimelineMilestone(
            kind="end",
            label="Expected finish",
            day_start=result.project_duration_days,
            day_end=result.project_duration_days,
            on_date=finish,
        )
    )
    return Timeline(
        milestones=milestones,
        hidden_count=max(0, len(result.critical_path) - len(visible)),
        expected_finish=finish,
    )


__all__ = ["Timeline", "TimelineMilestone", "build_timeline", "expected_finish_date"]
