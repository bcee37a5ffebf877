from __future__ import annotations

from typing import Dict

from core.models import SinkAnchor
from core.services.critical_path.graph import DependencyGraph


def run_forward_pass(
    graph: DependencyGraph,
    durations: Dict[str, int],
) -> tuple[Dict[str, int], Dict[str, int], int]:
    es: Dict[str, int] = {}
    ef: Dict[str, int] = {}

    for task_id in graph.topo_order:
        start = max((ef[pred_id] for pred_id in graph.predecessors[task_id]), default=0)
        es[task_id] = start
        ef[task_id] = start + durations[task_id]

    project_finish = max(ef.values(), default=0)
    return es, ef, project_finish


def run_backward_pass(
    graph: DependencyGraph,
    durations: Dict[str, int],
    ef: Dict[str, int],
    project_finish: int,
    sink_anchor: SinkAnchor = SinkAnchor.OWN_FINISH,
) -> tuple[Dict[str, int], Dict[str, int]]:
    ls: Dict[str, int] = {}
    lf: Dict[str, int] = {}

    for task_id in reversed(graph.topo_order):
        dependents = graph.successors[task_id]
        if dependents:
            finish = min(ls[succ_id] for succ_id in dependents)
        elif sink_anchor == SinkAnchor.PROJECT_FINISH:
            finish = project_finish
        else:
            finish = ef[task_id]
        lf[task_id] = finish
        ls[task_id] = finish - durations[task_id]

    return ls, lf


__all__ = ["run_forward_pass", "run_backward_pass"]
