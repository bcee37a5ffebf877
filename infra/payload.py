from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, List, Optional

from core.exceptions import ValidationError
from core.models import Project, ProjectStatus, Task, TaskPriority, TaskStatus


@dataclass
class TaskPayload:
    """Tasks read from a JSON file, with the project they belong to when known."""

    tasks: List[Task] = field(default_factory=list)
    project: Optional[Project] = None


def _parse_date(value: Any) -> date | None:
    if value in (None, ""):
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            # API payloads carry full timestamps; only the date part matters here
            return date.fromisoformat(value[:10])
        except ValueError:
            raise ValidationError(f"Invalid date value: {value!r}", code="PAYLOAD_INVALID") from None
    raise ValidationError(f"Unsupported date value: {value!r}", code="PAYLOAD_INVALID")


def _as_float(value: Any, field_name: str, default: float | None = 0.0) -> float | None:
    if value in (None, ""):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Field '{field_name}' must be a number, got {value!r}.", code="PAYLOAD_INVALID"
        ) from None


def _as_task_status(value: Any) -> TaskStatus:
    if isinstance(value, TaskStatus):
        return value
    try:
        return TaskStatus(str(value or TaskStatus.TODO.value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown task status: {value!r}", code="PAYLOAD_INVALID") from None


def _as_priority(value: Any) -> TaskPriority:
    try:
        return TaskPriority(str(value or TaskPriority.MEDIUM.value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown task priority: {value!r}", code="PAYLOAD_INVALID") from None


def _as_assignee(value: Any) -> str | None:
    if isinstance(value, dict):
        value = value.get("full_name") or value.get("name")
    text = str(value).strip() if value is not None else ""
    return text or None


def _as_dependencies(value: Any, task_id: str) -> List[str]:
    if value in (None, ""):
        return []
    if not isinstance(value, list):
        raise ValidationError(
            f"Dependencies of task '{task_id}' must be a list.", code="PAYLOAD_INVALID"
        )
    return [str(dep) for dep in value]


def task_from_dict(raw: Any, project_id: str = "") -> Task:
    if not isinstance(raw, dict):
        raise ValidationError("Each task must be a JSON object.", code="PAYLOAD_INVALID")
    if raw.get("id") in (None, ""):
        raise ValidationError("Each task needs an 'id'.", code="PAYLOAD_INVALID")

    task_id = str(raw["id"])
    return Task(
        id=task_id,
        project_id=str(raw.get("project_id") or project_id),
        title=str(raw.get("title") or raw.get("name") or task_id),
        estimated_hours=_as_float(raw.get("estimated_hours"), "estimated_hours"),
        dependencies=_as_dependencies(raw.get("dependencies"), task_id),
        status=_as_task_status(raw.get("status")),
        priority=_as_priority(raw.get("priority")),
        actual_hours=_as_float(raw.get("actual_hours"), "actual_hours", default=None),
        assignee=_as_assignee(raw.get("assignee")),
        progress=_as_float(raw.get("progress"), "progress"),
        start_date=_parse_date(raw.get("start_date")),
        end_date=_parse_date(raw.get("end_date") or raw.get("due_date")),
        description=str(raw.get("description") or ""),
    )


def _project_from_dict(raw: dict) -> Project:
    status_raw = str(raw.get("status") or ProjectStatus.PLANNED.value).strip().lower()
    try:
        status = ProjectStatus(status_raw)
    except ValueError:
        status = ProjectStatus.PLANNED
    return Project(
        id=str(raw.get("id") or ""),
        name=str(raw.get("name") or raw.get("title") or ""),
        description=str(raw.get("description") or ""),
        start_date=_parse_date(raw.get("start_date")),
        end_date=_parse_date(raw.get("end_date")),
        status=status,
    )


def parse_payload(data: Any) -> TaskPayload:
    """
    Accepts either a bare list of tasks or a project object with a
    ``tasks`` list (the shape of ``GET /api/projects/:id``).
    """
    if isinstance(data, list):
        return TaskPayload(tasks=[task_from_dict(item) for item in data])
    if isinstance(data, dict) and isinstance(data.get("tasks"), list):
        project = _project_from_dict(data)
        return TaskPayload(
            tasks=[task_from_dict(item, project_id=project.id) for item in data["tasks"]],
            project=project,
        )
    raise ValidationError(
        "Payload must be a list of tasks or an object with a 'tasks' list.",
        code="PAYLOAD_INVALID",
    )


def load_payload(path: str | Path) -> TaskPayload:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ValidationError(f"Payload file not found: {path}", code="PAYLOAD_NOT_FOUND") from None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValidationError(f"Payload is not valid JSON: {exc}", code="PAYLOAD_INVALID") from None
    return parse_payload(data)


__all__ = ["TaskPayload", "load_payload", "parse_payload", "task_from_dict"]
