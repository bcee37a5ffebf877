# main_cli.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from core.exceptions import DomainError
from core.models import Project, SinkAnchor
from core.reporting.api import MAX_LISTED_PATHS, generate_excel_report, generate_timeline_png, result_to_dict
from core.services.critical_path import CriticalPathResult, compute_critical_path
from infra.config import Settings, load_settings
from infra.db.base import build_engine, make_session_factory
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.operational_support import get_support_log, trace_scope
from infra.payload import load_payload
from infra.services import build_service_graph
from infra.version import get_app_version

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DOMAIN_ERROR = 2


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--only-critical", action="store_true", help="list critical tasks only")
    parser.add_argument("--json", action="store_true", help="print the analysis as JSON")
    parser.add_argument(
        "--anchor",
        choices=[a.value for a in SinkAnchor],
        default=None,
        help="how tasks without dependents are anchored in the backward pass",
    )
    parser.add_argument("--excel", metavar="PATH", help="write an Excel workbook")
    parser.add_argument("--timeline", metavar="PATH", help="write a timeline PNG")
    parser.add_argument(
        "--all-paths",
        action="store_true",
        help=f"also list every critical chain (at most {MAX_LISTED_PATHS})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cpa", description="Critical path analysis for project tasks.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {get_app_version()}")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="analyze a JSON task payload")
    analyze.add_argument("file", help="JSON list of tasks, or a project object with a 'tasks' list")
    _add_output_options(analyze)

    sub.add_parser("init-db", help="create or upgrade the local database")

    project = sub.add_parser("project", help="analyze a stored project")
    project.add_argument("project_id")
    _add_output_options(project)
    return parser


def format_report(
    result: CriticalPathResult,
    project: Optional[Project] = None,
    only_critical: bool = False,
    all_paths: bool = False,
) -> str:
    summary = result_to_dict(result, project=project, only_critical=only_critical, all_paths=all_paths)
    lines = []
    if project is not None and project.name:
        lines.append(f"Project: {project.name} ({project.id})")
    duration_line = f"Duration: {result.project_duration_days} day(s)"
    if summary["expected_finish"]:
        duration_line += f", expected finish {summary['expected_finish']}"
    lines.append(duration_line)
    lines.append("Critical path: " + (" -> ".join(result.critical_path) or "-"))
    for chain in summary.get("critical_paths", ()):
        lines.append("  chain: " + " -> ".join(chain))
    if summary.get("critical_paths_truncated"):
        lines.append(f"  (more than {MAX_LISTED_PATHS} critical chains; list truncated)")

    risk = summary["risk"]
    lines.append(
        f"Risk: {risk['level']} (critical completion {risk['critical_completion']}%, "
        f"delayed tasks {risk['delayed_tasks']})"
    )
    for alert in risk["alerts"]:
        lines.append(f"  ! {alert}")

    rows = summary["nodes"]
    if rows:
        lines.append("")
        header = ("ID", "Title", "Days", "ES", "EF", "LS", "LF", "Slack", "Critical")
        table = [header] + [
            (
                r["id"],
                r["title"],
                str(r["duration_days"]),
                str(r["earliest_start"]),
                str(r["earliest_finish"]),
                str(r["latest_start"]),
                str(r["latest_finish"]),
                str(r["slack"]),
                "yes" if r["is_critical"] else "no",
            )
            for r in rows
        ]
        widths = [max(len(row[i]) for row in table) for i in range(len(header))]
        for row in table:
            lines.append("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())
    return "\n".join(lines)


def _emit(args: argparse.Namespace, result: CriticalPathResult, project: Optional[Project]) -> None:
    if args.json:
        summary = result_to_dict(
            result, project=project, only_critical=args.only_critical, all_paths=args.all_paths
        )
        print(json.dumps(summary, indent=2))
    else:
        print(format_report(result, project=project, only_critical=args.only_critical, all_paths=args.all_paths))

    if args.excel:
        path = generate_excel_report(result, args.excel, project=project)
        logger.info("Excel report written to %s", path)
    if args.timeline:
        try:
            path = generate_timeline_png(result, args.timeline, project=project)
        except ValueError as exc:
            logger.warning("Timeline not written: %s", exc)
        else:
            logger.info("Timeline written to %s", path)

    get_support_log().record(
        "analysis.completed",
        f"Analyzed {len(result.nodes)} task(s)",
        data={
            "project_id": project.id if project else None,
            "tasks": len(result.nodes),
            "duration_days": result.project_duration_days,
            "critical_tasks": result.critical_tasks_count,
        },
    )


def _anchor(args: argparse.Namespace, settings: Settings) -> SinkAnchor:
    return SinkAnchor(args.anchor) if args.anchor else settings.sink_anchor


def _run_analyze(args: argparse.Namespace, settings: Settings) -> int:
    payload = load_payload(args.file)
    result = compute_critical_path(payload.tasks, sink_anchor=_anchor(args, settings))
    _emit(args, result, payload.project)
    return EXIT_OK


def _run_init_db(settings: Settings) -> int:
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    run_migrations(settings.db_url)
    print(f"Database ready at {settings.db_path}")
    return EXIT_OK


def _run_project(args: argparse.Namespace, settings: Settings) -> int:
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    run_migrations(settings.db_url)
    engine = build_engine(settings.db_url)
    session = make_session_factory(engine)()
    try:
        services = build_service_graph(session, settings)
        result = services.critical_path_service.analyze_project(args.project_id, sink_anchor=_anchor(args, settings))
        project = services.project_service.get_project(args.project_id)
        _emit(args, result, project)
    finally:
        session.close()
        engine.dispose()
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except DomainError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_DOMAIN_ERROR

    setup_logging(settings)
    with trace_scope() as trace_id:
        logger.debug("cpa %s started (trace %s)", args.command, trace_id)
        try:
            if args.command == "analyze":
                return _run_analyze(args, settings)
            if args.command == "init-db":
                return _run_init_db(settings)
            return _run_project(args, settings)
        except DomainError as exc:
            logger.warning("cpa %s failed [%s]: %s", args.command, exc.code, exc)
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_DOMAIN_ERROR


if __name__ == "__main__":
    sys.exit(main())
