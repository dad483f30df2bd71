"""Prebuilt workspace model."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class PrebuildState(str, Enum):
    """Prebuild lifecycle state."""

    QUEUED = "queued"
    BUILDING = "building"
    ABORTED = "aborted"
    TIMEOUT = "timeout"
    AVAILABLE = "available"
    FAILED = "failed"


class PrebuiltWorkspace(Base):
    """One prebuild attempt for a project commit."""

    __tablename__ = "prebuilt_workspaces"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    project_id: Mapped[str] = mapped_column(String(255), ForeignKey("projects.id"), index=True)
    clone_url: Mapped[str] = mapped_column(String(512))
    commit: Mapped[str] = mapped_column(String(255))

    # Null for prebuilds started from a commit context rather than a branch
    branch: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)

    state: Mapped[str] = mapped_column(String(50), default=PrebuildState.QUEUED.value)
    creation_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
