from __future__ import annotations

from typing import Dict, List

from core.services.critical_path.graph import DependencyGraph
from core.services.critical_path.models import CPMNode


def build_nodes(
    graph: DependencyGraph,
    durations: Dict[str, int],
    es: Dict[str, int],
    ef: Dict[str, int],
    ls: Dict[str, int],
    lf: Dict[str, int],
) -> List[CPMNode]:
    nodes: List[CPMNode] = []
    for task_id, task in graph.tasks_by_id.items():
        slack = ls[task_id] - es[task_id]
        nodes.append(
            CPMNode(
                id=task_id,
                task=task,
                duration_days=durations[task_id],
                earliest_start=es[task_id],
                earliest_finish=ef[task_id],
                latest_start=ls[task_id],
                latest_finish=lf[task_id],
                slack=slack,
                is_critical=slack == 0,
            )
        )
    return nodes


__all__ = ["build_nodes"]
