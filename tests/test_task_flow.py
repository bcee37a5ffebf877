from datetime import date

import pytest

from core.events.domain_events import domain_events
from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.models import TaskStatus
from core.services.task.lifecycle import status_for_progress


def test_create_task_with_dependencies_keeps_declared_order(services):
    ps = services["project_service"]
    ts = services["task_service"]

    pid = ps.create_project("Ordering", "").id
    a = ts.create_task(pid, "A", estimated_hours=8)
    b = ts.create_task(pid, "B", estimated_hours=8)
    c = ts.create_task(pid, "C", estimated_hours=8, dependencies=[b.id, a.id, b.id])

    stored = ts.get_task(c.id)
    assert stored.dependencies == [b.id, a.id]
    assert [t.id for t in ts.list_tasks_for_project(pid)] == [a.id, b.id, c.id]


def test_create_task_rejects_bad_input(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Validation", "").id
    other = ps.create_project("Elsewhere", "").id
    foreign = ts.create_task(other, "Foreign", estimated_hours=4)

    with pytest.raises(NotFoundError):
        ts.create_task("missing-project", "X")
    with pytest.raises(ValidationError) as exc:
        ts.create_task(pid, "   ")
    assert exc.value.code == "TASK_TITLE_EMPTY"
    with pytest.raises(ValidationError) as exc:
        ts.create_task(pid, "Negative", estimated_hours=-2)
    assert exc.value.code == "TASK_INVALID_ESTIMATE"
    with pytest.raises(ValidationError) as exc:
        ts.create_task(pid, "Backwards", start_date=date(2024, 5, 2), end_date=date(2024, 5, 1))
    assert exc.value.code == "TASK_INVALID_DATE"
    with pytest.raises(NotFoundError):
        ts.create_task(pid, "Dangling", dependencies=["nope"])
    with pytest.raises(ValidationError) as exc:
        ts.create_task(pid, "Cross", dependencies=[foreign.id])
    assert exc.value.code == "DEPENDENCY_CROSS_PROJECT"

    assert ts.list_tasks_for_project(pid) == []


def test_add_and_remove_dependency(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Deps", "").id
    a = ts.create_task(pid, "A", estimated_hours=8)
    b = ts.create_task(pid, "B", estimated_hours=8)

    ts.add_dependency(a.id, b.id)
    assert ts.get_task(b.id).dependencies == [a.id]
    assert [t.id for t in ts.list_dependents(a.id)] == [b.id]

    with pytest.raises(ValidationError) as exc:
        ts.add_dependency(a.id, b.id)
    assert exc.value.code == "DEPENDENCY_DUPLICATE"

    ts.remove_dependency(a.id, b.id)
    assert ts.get_task(b.id).dependencies == []
    with pytest.raises(NotFoundError):
        ts.remove_dependency(a.id, b.id)


def test_dependency_rules(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Rules", "").id
    other = ps.create_project("Other project", "").id
    t1 = ts.create_task(pid, "T01", estimated_hours=8)
    t2 = ts.create_task(pid, "T02", estimated_hours=8)
    t3 = ts.create_task(pid, "T03", estimated_hours=8)
    outsider = ts.create_task(other, "Outsider", estimated_hours=8)

    with pytest.raises(ValidationError) as exc:
        ts.add_dependency(t1.id, t1.id)
    assert exc.value.code == "DEPENDENCY_SELF"

    with pytest.raises(NotFoundError):
        ts.add_dependency("ghost", t1.id)

    with pytest.raises(ValidationError) as exc:
        ts.add_dependency(outsider.id, t1.id)
    assert exc.value.code == "DEPENDENCY_CROSS_PROJECT"

    # t1 -> t2 -> t3, closing the loop must be rejected
    ts.add_dependency(t1.id, t2.id)
    ts.add_dependency(t2.id, t3.id)
    with pytest.raises(BusinessRuleError) as exc:
        ts.add_dependency(t3.id, t1.id)
    assert exc.value.code == "DEPENDENCY_CYCLE"

    assert ts.get_task(t1.id).dependencies == []


def test_progress_drives_status(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Progress", "").id
    task = ts.create_task(pid, "Work", estimated_hours=16)

    assert ts.update_progress(task.id, progress=40).status == TaskStatus.IN_PROGRESS
    done = ts.update_progress(task.id, progress=100, actual_hours=18)
    assert done.status == TaskStatus.DONE
    assert ts.get_task(task.id).actual_hours == 18.0
    assert ts.update_progress(task.id, progress=80).status == TaskStatus.IN_PROGRESS
    assert ts.update_progress(task.id, progress=0).status == TaskStatus.TODO

    with pytest.raises(ValidationError) as exc:
        ts.update_progress(task.id, progress=120)
    assert exc.value.code == "TASK_INVALID_PROGRESS"
    with pytest.raises(ValidationError) as exc:
        ts.update_progress(task.id, progress="most of it")
    assert exc.value.code == "TASK_INVALID_PROGRESS"
    with pytest.raises(ValidationError) as exc:
        ts.update_progress(task.id, actual_hours=-1)
    assert exc.value.code == "TASK_INVALID_HOURS"


def test_set_status_and_update_task(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Updates", "").id
    task = ts.create_task(pid, "Draft", estimated_hours=4)

    ts.set_status(task.id, TaskStatus.DONE)
    stored = ts.get_task(task.id)
    assert stored.status == TaskStatus.DONE
    assert stored.progress == 100.0
    assert [t.id for t in ts.list_tasks_by_status(pid, TaskStatus.DONE)] == [task.id]

    ts.update_task(task.id, title="Final", estimated_hours=12, assignee="Dana")
    stored = ts.get_task(task.id)
    assert (stored.title, stored.estimated_hours, stored.assignee) == ("Final", 12.0, "Dana")

    with pytest.raises(NotFoundError):
        ts.update_task("missing", title="x")


def test_delete_task_drops_its_links(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Delete", "").id
    a = ts.create_task(pid, "A", estimated_hours=8)
    b = ts.create_task(pid, "B", estimated_hours=8, dependencies=[a.id])

    ts.delete_task(a.id)

    assert ts.get_task(a.id) is None
    assert ts.get_task(b.id).dependencies == []


def test_task_changes_emit_domain_events(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Events", "").id
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.tasks_changed.connect(_handler)
    try:
        a = ts.create_task(pid, "A", estimated_hours=8)
        b = ts.create_task(pid, "B", estimated_hours=8)
        ts.add_dependency(a.id, b.id)
        with pytest.raises(ValidationError):
            ts.add_dependency(a.id, b.id)
    finally:
        domain_events.tasks_changed.disconnect(_handler)

    assert seen == [pid, pid, pid]


@pytest.mark.parametrize(
    "current, progress, expected",
    [
        (TaskStatus.TODO, 0, TaskStatus.TODO),
        (TaskStatus.TODO, 30, TaskStatus.IN_PROGRESS),
        (TaskStatus.REVIEW, 90, TaskStatus.REVIEW),
        (TaskStatus.BLOCKED, 50, TaskStatus.BLOCKED),
        (TaskStatus.DONE, 99, TaskStatus.IN_PROGRESS),
        (TaskStatus.BLOCKED, 100, TaskStatus.DONE),
        (TaskStatus.REVIEW, 0, TaskStatus.TODO),
    ],
)
def test_status_for_progress(current, progress, expected):
    assert status_for_progress(current, progress) == expected


def test_cycle_error_names_the_loop(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Loop", "").id
    a = ts.create_task(pid, "A", estimated_hours=8)
    b = ts.create_task(pid, "B", estimated_hours=8, dependencies=[a.id])

    with pytest.raises(BusinessRuleError) as exc:
        ts.add_dependency(b.id, a.id)
    assert exc.value.code == "DEPENDENCY_CYCLE"
    assert a.id in str(exc.value) and b.id in str(exc.value)


def test_update_task_keeps_position_in_project(services):
    ps = services["project_service"]
    ts = services["task_service"]
    pid = ps.create_project("Positions", "").id
    a = ts.create_task(pid, "A", estimated_hours=8)
    b = ts.create_task(pid, "B", estimated_hours=8)

    ts.update_task(a.id, title="A renamed")

    assert [t.id for t in ts.list_tasks_for_project(pid)] == [a.id, b.id]
