"""Create teams, users, projects and prebuilt_workspaces

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "teams",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_teams_slug", "teams", ["slug"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.String(512), nullable=True),
        sa.Column("auth_tokens", sa.JSON(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("clone_url", sa.String(512), nullable=False),
        sa.Column("team_id", sa.String(255), sa.ForeignKey("teams.id"), nullable=False),
        sa.Column("app_installation_id", sa.String(255), nullable=False),
        sa.Column("creation_time", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("team_id", "name", name="uq_projects_team_name"),
    )
    op.create_index("ix_projects_team_id", "projects", ["team_id"])

    op.create_table(
        "prebuilt_workspaces",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("project_id", sa.String(255), sa.ForeignKey("projects.id"), nullable=False),
        sa.Column("clone_url", sa.String(512), nullable=False),
        sa.Column("commit", sa.String(255), nullable=False),
        sa.Column("branch", sa.String(255), nullable=True),
        sa.Column("state", sa.String(50), nullable=False),
        sa.Column("creation_time", sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_prebuilt_workspaces_project_id", "prebuilt_workspaces", ["project_id"])
    op.create_index("ix_prebuilt_workspaces_branch", "prebuilt_workspaces", ["branch"])
    op.create_index(
        "ix_prebuilt_workspaces_creation_time", "prebuilt_workspaces", ["creation_time"]
    )


def downgrade() -> None:
    op.drop_table("prebuilt_workspaces")
    op.drop_table("projects")
    op.drop_table("users")
    op.drop_table("teams")
