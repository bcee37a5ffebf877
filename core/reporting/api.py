"""Reporting API wrappers around renderer classes."""

from pathlib import Path
from datetime import date
from typing import Any, Dict, Optional

from core.models import Project
from core.reporting.contexts import CriticalPathReportContext
from core.reporting.renderers.excel import CriticalPathExcelRenderer
from core.reporting.renderers.timeline import CriticalPathTimelineRenderer
from core.services.critical_path import (
    CriticalPathResult,
    build_risk_alerts,
    build_timeline,
    compute_risk_metrics,
    enumerate_critical_paths,
)

MAX_LISTED_PATHS = 100


def _ensure_parent(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def build_report_context(
    result: CriticalPathResult,
    project: Optional[Project] = None,
    as_of: Optional[date] = None,
) -> CriticalPathReportContext:
    risk = compute_risk_metrics(result)
    return CriticalPathReportContext(
        result=result,
        risk=risk,
        timeline=build_timeline(result, project_start=project.start_date if project else None),
        alerts=build_risk_alerts(risk),
        project=project,
        as_of=as_of,
    )


def generate_excel_report(
    result: CriticalPathResult,
    output_path: str | Path,
    project: Optional[Project] = None,
    as_of: Optional[date] = None,
) -> Path:
    ctx = build_report_context(result, project=project, as_of=as_of or date.today())
    return CriticalPathExcelRenderer().render(ctx, _ensure_parent(Path(output_path)))


def generate_timeline_png(
    result: CriticalPathResult,
    output_path: str | Path,
    project: Optional[Project] = None,
) -> Path:
    ctx = build_report_context(result, project=project)
    return CriticalPathTimelineRenderer().render(ctx, _ensure_parent(Path(output_path)))


def result_to_dict(
    result: CriticalPathResult,
    project: Optional[Project] = None,
    only_critical: bool = False,
    all_paths: bool = False,
    max_paths: int = MAX_LISTED_PATHS,
) -> Dict[str, Any]:
    """
    JSON-ready summary of an analysis, including risk and timeline figures.
    With ``all_paths`` the summary also lists up to ``max_paths`` critical
    chains and flags ``critical_paths_truncated`` when there were more.
    """
    ctx = build_report_context(result, project=project)
    finish = ctx.timeline.expected_finish
    summary: Dict[str, Any] = {
        "project_id": project.id if project else None,
        "project_duration_days": result.project_duration_days,
        "expected_finish": finish.isoformat() if finish else None,
        "sink_anchor": result.sink_anchor.value,
        "critical_path": list(result.critical_path),
        "critical_tasks_count": result.critical_tasks_count,
        "total_slack": result.total_slack,
        "risk": {
            "level": ctx.risk.risk_level.value,
            "delayed_tasks": ctx.risk.delayed_tasks_count,
            "critical_completion": round(ctx.risk.critical_completion, 1),
            "alerts": ctx.alerts,
        },
        "nodes": [
            {
                "id": n.id,
                "title": n.task.title,
                "duration_days": n.duration_days,
                "earliest_start": n.earliest_start,
                "earliest_finish": n.earliest_finish,
                "latest_start": n.latest_start,
                "latest_finish": n.latest_finish,
                "slack": n.slack,
                "is_critical": n.is_critical,
                "status": str(getattr(n.task.status, "value", n.task.status)),
            }
            for n in result.sorted_nodes(only_critical=only_critical)
        ],
    }
    if all_paths:
        chains = enumerate_critical_paths(result, limit=max_paths + 1)
        summary["critical_paths"] = chains[:max_paths]
        summary["critical_paths_truncated"] = len(chains) > max_paths
    return summary


__all__ = [
    "MAX_LISTED_PATHS",
    "build_report_context",
    "generate_excel_report",
    "generate_timeline_png",
    "result_to_dict",
]
