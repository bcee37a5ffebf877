# infra/services.py
"""Composition root: SQLAlchemy repositories wired into the core services for one session."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

from sqlalchemy.orm import Session

from core.services.critical_path import CriticalPathService
from core.services.project import ProjectService
from core.services.task import TaskService
from infra.config import Settings, load_settings
from infra.db.repositories import (
    SqlAlchemyDependencyRepository,
    SqlAlchemyProjectRepository,
    SqlAlchemyTaskRepository,
)


@dataclass(frozen=True)
class ServiceGraph:
    session: Session
    project_service: ProjectService
    task_service: TaskService
    critical_path_service: CriticalPathService

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def build_service_graph(session: Session, settings: Settings | None = None) -> ServiceGraph:
    """``settings`` only supplies the default sink anchor; loaded from the environment when omitted."""
    settings = settings or load_settings()
    repos = (
        SqlAlchemyProjectRepository(session),
        SqlAlchemyTaskRepository(session),
        SqlAlchemyDependencyRepository(session),
    )
    return ServiceGraph(
        session=session,
        project_service=ProjectService(session, *repos),
        task_service=TaskService(session, *repos),
        critical_path_service=CriticalPathService(
            repos[0], repos[1], default_sink_anchor=settings.sink_anchor
        ),
    )


__all__ = ["ServiceGraph", "build_service_graph"]
