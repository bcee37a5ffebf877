from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence

from core.exceptions import CyclicDependencyError, ValidationError
from core.models import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DependencyGraph:
    tasks_by_id: Dict[str, Task]
    topo_order: List[str]
    # only dependencies that resolve to a task in the set, deduplicated
    predecessors: Dict[str, List[str]]
    successors: Dict[str, List[str]]

    def is_root(self, task_id: str) -> bool:
        return not self.predecessors[task_id]

    def is_sink(self, task_id: str) -> bool:
        return not self.successors[task_id]


def build_dependency_graph(tasks: Sequence[Task]) -> DependencyGraph:
    tasks_by_id: Dict[str, Task] = {}
    position: Dict[str, int] = {}
    for index, task in enumerate(tasks):
        if task.id in tasks_by_id:
            raise ValidationError(
                f"Task id {task.id!r} appears more than once.",
                code="DUPLICATE_TASK_ID",
            )
        tasks_by_id[task.id] = task
        position[task.id] = index

    predecessors: Dict[str, List[str]] = {}
    successors: Dict[str, List[str]] = {task_id: [] for task_id in tasks_by_id}
    indegree: Dict[str, int] = {}

    for task in tasks:
        resolved: List[str] = []
        for dep_id in task.dependencies or ():
            if dep_id not in tasks_by_id:
                logger.debug("Task %s: ignoring unknown dependency %s", task.id, dep_id)
                continue
            if dep_id not in resolved:
                resolved.append(dep_id)
        predecessors[task.id] = resolved
        indegree[task.id] = len(resolved)
        for dep_id in resolved:
            successors[dep_id].append(task.id)

    # Kahn's algorithm; ready tasks leave in input order
    heap: list[tuple[int, str]] = [
        (position[task_id], task_id) for task_id, degree in indegree.items() if degree == 0
    ]
    heapq.heapify(heap)

    topo_order: List[str] = []
    while heap:
        _pos, task_id = heapq.heappop(heap)
        topo_order.append(task_id)
        for succ_id in successors[task_id]:
            indegree[succ_id] -= 1
            if indegree[succ_id] == 0:
                heapq.heappush(heap, (position[succ_id], succ_id))

    if len(topo_order) != len(tasks_by_id):
        remaining = [task_id for task_id in tasks_by_id if indegree[task_id] > 0]
        raise CyclicDependencyError(_find_cycle(remaining, predecessors))

    return DependencyGraph(
        tasks_by_id=tasks_by_id,
        topo_order=topo_order,
        predecessors=predecessors,
        successors=successors,
    )


def _find_cycle(remaining: List[str], predecessors: Dict[str, List[str]]) -> List[str]:
    """
    Every task left over by Kahn's algorithm still waits on another leftover
    task, so walking predecessors from any of them must come back around.
    """
    pending = set(remaining)
    seen_at: Dict[str, int] = {}
    walk: List[str] = []
    current = remaining[0]
    while current not in seen_at:
        seen_at[current] = len(walk)
        walk.append(current)
        current = next(p for p in predecessors[current] if p in pending)
    cycle = walk[seen_at[current]:]
    cycle.reverse()
    return cycle


__all__ = ["DependencyGraph", "build_dependency_graph"]
