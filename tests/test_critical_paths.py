import time

from core.models import SinkAnchor
from core.reporting.api import result_to_dict
from core.services.critical_path import compute_critical_path, enumerate_critical_paths


def test_representative_path_follows_first_critical_dependent(make_task):
    # diamond with two equally long branches
    tasks = [
        make_task("A", 8),
        make_task("B", 16, ["A"]),
        make_task("C", 16, ["A"]),
        make_task("D", 8, ["B", "C"]),
    ]
    result = compute_critical_path(tasks)

    assert result.critical_path == ["A", "B", "D"]
    assert enumerate_critical_paths(result) == [["A", "B", "D"], ["A", "C", "D"]]


def test_converging_roots_do_not_repeat_shared_tasks(make_task):
    tasks = [make_task("R1", 8), make_task("R2", 8), make_task("X", 8, ["R1", "R2"])]
    result = compute_critical_path(tasks)

    assert result.critical_path == ["R1", "X", "R2"]
    assert len(result.critical_path) == len(set(result.critical_path))
    assert enumerate_critical_paths(result) == [["R1", "X"], ["R2", "X"]]


def test_non_critical_roots_are_skipped(make_task):
    tasks = [make_task("short", 8), make_task("long", 40)]
    result = compute_critical_path(tasks, sink_anchor=SinkAnchor.PROJECT_FINISH)

    assert result.critical_path == ["long"]
    assert enumerate_critical_paths(result) == [["long"]]


def test_enumeration_stops_at_non_critical_dependents(make_task):
    tasks = [make_task("A", 8), make_task("B", 32, ["A"]), make_task("C", 8, ["A"])]
    result = compute_critical_path(tasks, sink_anchor=SinkAnchor.PROJECT_FINISH)

    assert enumerate_critical_paths(result) == [["A", "B"]]


def test_every_enumerated_path_is_made_of_critical_tasks(make_task):
    tasks = [
        make_task("A", 8),
        make_task("B", 24, ["A"]),
        make_task("C", 8, ["A"]),
        make_task("D", 16, ["C"]),
        make_task("E", 8, ["B", "D"]),
        make_task("F", 4, ["C"]),
    ]
    result = compute_critical_path(tasks, sink_anchor=SinkAnchor.PROJECT_FINISH)

    paths = enumerate_critical_paths(result)
    assert paths
    for path in paths:
        assert all(result.node(task_id).is_critical for task_id in path)
    assert result.critical_path == paths[0]


def test_enumeration_of_empty_result():
    assert enumerate_critical_paths(compute_critical_path([])) == []


def _ladder(make_task, layers):
    # two equally long tasks per layer, each waiting on both tasks of the layer below
    tasks = []
    previous: list[str] = []
    for layer in range(layers):
        rung = [f"L{layer}a", f"L{layer}b"]
        tasks.extend(make_task(task_id, 8, previous) for task_id in rung)
        previous = rung
    return tasks


def test_enumeration_stops_at_limit(make_task):
    result = compute_critical_path(_ladder(make_task, 10))

    assert len(enumerate_critical_paths(result)) == 2**10
    limited = enumerate_critical_paths(result, limit=5)
    assert len(limited) == 5
    assert all(len(chain) == 10 for chain in limited)
    assert enumerate_critical_paths(result, limit=0) == []


def test_deep_ladder_summary_stays_bounded(make_task):
    result = compute_critical_path(_ladder(make_task, 40))
    assert result.critical_tasks_count == 80

    started = time.perf_counter()
    summary = result_to_dict(result)
    listed = result_to_dict(result, all_paths=True, max_paths=25)
    elapsed = time.perf_counter() - started

    assert "critical_paths" not in summary
    assert summary["critical_path"][:3] == ["L0a", "L1a", "L2a"]
    assert len(listed["critical_paths"]) == 25
    assert listed["critical_paths_truncated"] is True
    assert elapsed < 2.0
