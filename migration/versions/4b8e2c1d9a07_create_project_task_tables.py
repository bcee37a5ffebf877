"""create project, task and task dependency tables

Revision ID: 4b8e2c1d9a07
Revises:
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "4b8e2c1d9a07"
down_revision = None
branch_labels = None
depends_on = None

_PROJECT_STATUS = sa.Enum("PLANNED", "ACTIVE", "ON_HOLD", "COMPLETED", name="projectstatus")
_TASK_STATUS = sa.Enum("TODO", "IN_PROGRESS", "REVIEW", "BLOCKED", "DONE", name="taskstatus")
_TASK_PRIORITY = sa.Enum("LOW", "MEDIUM", "HIGH", "URGENT", name="taskpriority")


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("status", _PROJECT_STATUS, nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=False),
        sa.Column("actual_hours", sa.Float(), nullable=True),
        sa.Column("status", _TASK_STATUS, nullable=False),
        sa.Column("priority", _TASK_PRIORITY, nullable=False),
        sa.Column("assignee", sa.String(), nullable=True),
        sa.Column("progress", sa.Float(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.ForeignKeyConstraint(["project_id"], ["projects.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tasks_project_id", "tasks", ["project_id"])

    op.create_table(
        "task_dependencies",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("predecessor_task_id", sa.String(), nullable=False),
        sa.Column("successor_task_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.ForeignKeyConstraint(["predecessor_task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["successor_task_id"], ["tasks.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("predecessor_task_id", "successor_task_id", name="uq_dependency_pair"),
    )
    op.create_index("idx_dep_predecessor", "task_dependencies", ["predecessor_task_id"])
    op.create_index("idx_dep_successor", "task_dependencies", ["successor_task_id"])


def downgrade() -> None:
    op.drop_index("idx_dep_successor", table_name="task_dependencies")
    op.drop_index("idx_dep_predecessor", table_name="task_dependencies")
    op.drop_table("task_dependencies")
    op.drop_index("idx_tasks_project_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_table("projects")
