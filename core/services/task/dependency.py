from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import DependencyRepository
from core.models import TaskDependency
from core.services.transaction import committing

logger = logging.getLogger(__name__)


class TaskDependencyMixin:
    _session: Session
    _dependency_repo: DependencyRepository

    def add_dependency(self, predecessor_id: str, successor_id: str) -> TaskDependency:
        """Make ``successor_id`` wait for ``predecessor_id``."""
        if predecessor_id == successor_id:
            raise ValidationError("A task cannot depend on itself.", code="DEPENDENCY_SELF")
        predecessor = self.require_task(predecessor_id)
        successor = self.require_task(successor_id)
        self._check_same_project(predecessor, successor.project_id)
        if self._dependency_repo.find(predecessor_id, successor_id) is not None:
            raise ValidationError(
                f"{successor_id} already depends on {predecessor_id}.", code="DEPENDENCY_DUPLICATE"
            )
        self._check_stays_acyclic(predecessor, successor)

        link = TaskDependency.create(predecessor_id, successor_id)
        with committing(self._session, f"link {predecessor_id} -> {successor_id}"):
            self._dependency_repo.add(link)
        logger.info("Dependency %s -> %s added", predecessor_id, successor_id)
        domain_events.tasks_changed.emit(successor.project_id)
        return link

    def remove_dependency(self, predecessor_id: str, successor_id: str) -> None:
        link = self._dependency_repo.find(predecessor_id, successor_id)
        if link is None:
            raise NotFoundError(
                f"{successor_id} does not depend on {predecessor_id}.", code="DEPENDENCY_NOT_FOUND"
            )
        successor = self.get_task(successor_id)
        with committing(self._session, f"unlink {predecessor_id} -> {successor_id}"):
            self._dependency_repo.delete(link.id)
        if successor is not None:
            domain_events.tasks_changed.emit(successor.project_id)


__all__ = ["TaskDependencyMixin"]
