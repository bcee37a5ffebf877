from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from core.models import Project
from core.services.critical_path import CriticalPathResult, RiskMetrics, Timeline


@dataclass
class CriticalPathReportContext:
    result: CriticalPathResult
    risk: RiskMetrics
    timeline: Timeline
    alerts: List[str] = field(default_factory=list)
    project: Optional[Project] = None
    as_of: Optional[date] = None

    @property
    def title(self) -> str:
        if self.project is not None:
            return f"Critical Path - {self.project.name}"
        return "Critical Path"
