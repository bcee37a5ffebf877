from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import uuid4

from core.domain.enums import ProjectStatus


@dataclass
class Project:
    """A named container of tasks. ``start_date`` anchors day 0 of the schedule."""

    id: str
    name: str
    description: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.PLANNED

    @classmethod
    def create(cls, name: str, **fields) -> "Project":
        return cls(id=str(uuid4()), name=name, **fields)


__all__ = ["Project"]
