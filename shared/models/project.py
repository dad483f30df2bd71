"""Project model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Project(Base):
    """Project model - a repository registered with a team."""

    __tablename__ = "projects"
    __table_args__ = (UniqueConstraint("team_id", "name", name="uq_projects_team_name"),)

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))

    # Repository clone URL (e.g., https://github.com/org/repo)
    clone_url: Mapped[str] = mapped_column(String(512))

    team_id: Mapped[str] = mapped_column(String(255), ForeignKey("teams.id"), index=True)

    # GitHub App installation that granted access to the repository
    app_installation_id: Mapped[str] = mapped_column(String(255))

    creation_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
