from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib import ticker  # noqa: E402

from core.reporting.contexts import CriticalPathReportContext  # noqa: E402


class CriticalPathTimelineRenderer:
    def render(self, ctx: CriticalPathReportContext, output_path: Path) -> Path:
        nodes = ctx.result.sorted_nodes()
        if not nodes:
            raise ValueError("No tasks available for critical path timeline")

        names = [n.task.title or n.id for n in nodes]

        fig, ax = plt.subplots(figsize=(12, max(3, 0.45 * len(nodes) + 1.5)))

        for i, n in enumerate(nodes):
            ax.barh(i, n.duration_days, left=n.earliest_start, height=0.4,
                    color="#ff6666" if n.is_critical else "#8080ff",
                    edgecolor="black", linewidth=0.6)
            if n.slack > 0:
                ax.barh(i, n.slack, left=n.earliest_finish, height=0.4,
                        color="none", edgecolor="#808080", hatch="//", linewidth=0.6)

        ax.set_yticks(range(len(names)))
        ax.set_yticklabels(names, fontsize=9)
        ax.invert_yaxis()

        duration = ctx.result.project_duration_days
        ax.set_xlim(0, max(duration, 1))
        ax.xaxis.set_major_locator(ticker.MaxNLocator(integer=True))
        ax.axvline(duration, color="red", linestyle="--", linewidth=1)
        ax.set_xlabel("Project day")

        ax.set_title(ctx.title)
        ax.grid(True, axis="x", linestyle=":", linewidth=0.5)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
