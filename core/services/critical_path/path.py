from __future__ import annotations

from typing import Dict, List, Optional

from core.services.critical_path.graph import DependencyGraph
from core.services.critical_path.models import CPMNode, CriticalPathResult


def extract_critical_path(graph: DependencyGraph, nodes_by_id: Dict[str, CPMNode]) -> List[str]:
    """
    One representative chain per critical root, concatenated in input order.

    From each critical task without predecessors, follow the first critical
    dependent (input order) until none is left. A task is listed once; reaching
    one that is already on the path ends the chain.
    """
    path: List[str] = []
    on_path: set[str] = set()

    for task_id in graph.tasks_by_id:
        if not graph.is_root(task_id) or not nodes_by_id[task_id].is_critical:
            continue
        current: str | None = task_id
        while current is not None and current not in on_path:
            path.append(current)
            on_path.add(current)
            current = next(
                (s for s in graph.successors[current] if nodes_by_id[s].is_critical),
                None,
            )
    return path


def enumerate_critical_paths(result: CriticalPathResult, limit: Optional[int] = None) -> List[List[str]]:
    """
    Chains of critical tasks from a critical root to a task with no critical dependent.

    Parallel critical branches multiply the number of chains, so ``limit`` stops
    the walk once that many have been found.
    """
    if limit is not None and limit <= 0:
        return []
    ids = {n.id for n in result.nodes}
    critical = {n.id for n in result.nodes if n.is_critical}

    has_pred: set[str] = set()
    critical_succ: Dict[str, List[str]] = {n.id: [] for n in result.nodes}
    for node in result.nodes:
        seen: set[str] = set()
        for dep_id in node.task.dependencies or ():
            if dep_id not in ids or dep_id in seen:
                continue
            seen.add(dep_id)
            has_pred.add(node.id)
            if node.id in critical:
                critical_succ[dep_id].append(node.id)

    paths: List[List[str]] = []
    for node in result.nodes:
        if node.id not in critical or node.id in has_pred:
            continue
        stack: List[List[str]] = [[node.id]]
        while stack:
            chain = stack.pop()
            nexts = critical_succ[chain[-1]]
            if not nexts:
                paths.append(chain)
                if limit is not None and len(paths) >= limit:
                    return paths
                continue
            # reversed so the first dependent is explored first
            for succ_id in reversed(nexts):
                if succ_id not in chain:
                    stack.append(chain + [succ_id])
    return paths


__all__ = ["extract_critical_path", "enumerate_critical_paths"]
