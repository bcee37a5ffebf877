from pathlib import Path
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side

from core.reporting.contexts import CriticalPathReportContext


def _status_text(task) -> str:
    return str(getattr(task.status, "value", task.status) or "")


class CriticalPathExcelRenderer:
    def render(self, ctx: CriticalPathReportContext, output_path: Path) -> Path:
        wb = Workbook()
        result = ctx.result

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        critical_fill = PatternFill("solid", fgColor="FFCCCC")

        def header_row(sheet, headers):
            for col_index, h in enumerate(headers, start=1):
                cell = sheet.cell(row=1, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"
        ws["A1"] = ctx.title
        ws["A1"].font = title_font

        row = 3

        def kv(key, value):
            nonlocal row
            ws[f"A{row}"] = key
            ws[f"B{row}"] = value
            ws[f"A{row}"].font = header_font
            ws[f"A{row}"].border = thin_border
            ws[f"B{row}"].border = thin_border
            row += 1

        if ctx.project is not None:
            kv("Project ID", ctx.project.id)
            kv("Project name", ctx.project.name)
            kv("Start date", ctx.project.start_date.isoformat() if ctx.project.start_date else "")
        kv("Duration (days)", result.project_duration_days)
        finish = ctx.timeline.expected_finish
        kv("Expected finish", finish.isoformat() if finish else "")
        kv("Tasks", len(result.nodes))
        kv("Critical tasks", result.critical_tasks_count)
        kv("Total slack (days)", result.total_slack)

        row += 1
        kv("Risk level", ctx.risk.risk_level.value)
        kv("Critical completion (%)", round(ctx.risk.critical_completion, 1))
        kv("Delayed tasks", ctx.risk.delayed_tasks_count)
        if ctx.as_of:
            kv("As of", ctx.as_of.isoformat())

        if ctx.alerts:
            row += 1
            ws[f"A{row}"] = "Alerts"
            ws[f"A{row}"].font = header_font
            row += 1
            for alert in ctx.alerts:
                ws[f"A{row}"] = alert
                row += 1

        ws.column_dimensions["A"].width = 30
        ws.column_dimensions["B"].width = 25

        # ---------------- Tasks ----------------
        ws_tasks = wb.create_sheet("Tasks")
        header_row(
            ws_tasks,
            ["Task ID", "Title", "Duration (days)", "ES", "EF", "LS", "LF", "Slack", "Critical", "Status"],
        )
        for row_index, node in enumerate(result.sorted_nodes(), start=2):
            values = [
                node.id,
                node.task.title,
                node.duration_days,
                node.earliest_start,
                node.earliest_finish,
                node.latest_start,
                node.latest_finish,
                node.slack,
                "Yes" if node.is_critical else "No",
                _status_text(node.task),
            ]
            for col_index, value in enumerate(values, start=1):
                cell = ws_tasks.cell(row=row_index, column=col_index, value=value)
                cell.border = thin_border
                if node.is_critical:
                    cell.fill = critical_fill

        ws_tasks.column_dimensions["A"].width = 36
        ws_tasks.column_dimensions["B"].width = 30
        for col_letter in ("C", "D", "E", "F", "G", "H", "I", "J"):
            ws_tasks.column_dimensions[col_letter].width = 12

        # ---------------- Critical Path ----------------
        ws_path = wb.create_sheet("Critical Path")
        header_row(ws_path, ["Step", "Task ID", "Title", "ES", "EF"])
        for step, task_id in enumerate(result.critical_path, start=1):
            node = result.node(task_id)
            values = [step, task_id, node.task.title, node.earliest_start, node.earliest_finish]
            for col_index, value in enumerate(values, start=1):
                ws_path.cell(row=step + 1, column=col_index, value=value).border = thin_border

        ws_path.column_dimensions["B"].width = 36
        ws_path.column_dimensions["C"].width = 30

        wb.save(output_path)
        return output_path
