"""Change notifications for projects and their tasks; payload is the project id."""
from __future__ import annotations

from core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.project_changed: Signal[str] = Signal("project_changed")
        self.tasks_changed: Signal[str] = Signal("tasks_changed")


# SINGLE global instance
domain_events = DomainEvents()
