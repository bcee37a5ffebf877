from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.models import SinkAnchor, Task


@dataclass(frozen=True)
class CPMNode:
    id: str
    task: Task
    duration_days: int
    earliest_start: int
    earliest_finish: int
    latest_start: int
    latest_finish: int
    slack: int
    is_critical: bool


@dataclass(frozen=True)
class CriticalPathResult:
    """
    Outcome of one critical-path computation.

    All times are whole-day offsets from project day 0. ``nodes`` keeps the
    order of the input task list.
    """

    nodes: List[CPMNode]
    project_duration_days: int
    critical_path: List[str]
    sink_anchor: SinkAnchor = SinkAnchor.OWN_FINISH
    _by_id: Dict[str, CPMNode] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_id", {n.id: n for n in self.nodes})

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def critical_tasks_count(self) -> int:
        return sum(1 for n in self.nodes if n.is_critical)

    @property
    def total_slack(self) -> int:
        return sum(n.slack for n in self.nodes)

    def node(self, task_id: str) -> Optional[CPMNode]:
        return self._by_id.get(task_id)

    def critical_nodes(self) -> List[CPMNode]:
        return [n for n in self.nodes if n.is_critical]

    def sorted_nodes(self, only_critical: bool = False) -> List[CPMNode]:
        # sorted() is stable: ties keep input order
        pool = self.critical_nodes() if only_critical else list(self.nodes)
        return sorted(pool, key=lambda n: n.earliest_start)


__all__ = ["CPMNode", "CriticalPathResult"]
