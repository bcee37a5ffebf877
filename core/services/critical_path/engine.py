from __future__ import annotations

import logging
from typing import Dict, Iterable

from core.models import SinkAnchor, Task
from core.services.critical_path.durations import task_duration_days
from core.services.critical_path.graph import build_dependency_graph
from core.services.critical_path.models import CriticalPathResult
from core.services.critical_path.passes import run_backward_pass, run_forward_pass
from core.services.critical_path.path import extract_critical_path
from core.services.critical_path.results import build_nodes

logger = logging.getLogger(__name__)


def compute_critical_path(
    tasks: Iterable[Task],
    *,
    sink_anchor: SinkAnchor | str = SinkAnchor.OWN_FINISH,
) -> CriticalPathResult:
    """
    CPM over an in-memory task list:
    - duration = ceil(estimated_hours / 8) whole days
    - forward pass: ES/EF in topological order
    - backward pass: LS/LF in reverse topological order
    - slack = LS - ES, critical when slack is zero
    - one representative critical path per critical root

    Dependencies on ids outside the list are ignored. A dependency cycle
    raises CyclicDependencyError. An empty list yields an empty result with
    a duration of 0.
    """
    anchor = SinkAnchor(sink_anchor)
    task_list = list(tasks)
    if not task_list:
        return CriticalPathResult(nodes=[], project_duration_days=0, critical_path=[], sink_anchor=anchor)

    graph = build_dependency_graph(task_list)
    durations: Dict[str, int] = {
        task_id: task_duration_days(task.estimated_hours)
        for task_id, task in graph.tasks_by_id.items()
    }

    es, ef, project_finish = run_forward_pass(graph, durations)
    ls, lf = run_backward_pass(graph, durations, ef, project_finish, anchor)

    nodes = build_nodes(graph, durations, es, ef, ls, lf)
    critical_path = extract_critical_path(graph, {n.id: n for n in nodes})

    logger.debug(
        "Critical path computed: %d tasks, %d days, %d on path",
        len(nodes),
        project_finish,
        len(critical_path),
    )
    return CriticalPathResult(
        nodes=nodes,
        project_duration_days=project_finish,
        critical_path=critical_path,
        sink_anchor=anchor,
    )


__all__ = ["compute_critical_path"]
