"""Database models package."""

from .base import Base
from .prebuild import PrebuildState, PrebuiltWorkspace
from .project import Project
from .team import Team
from .user import User

__all__ = [
    "Base",
    "PrebuildState",
    "PrebuiltWorkspace",
    "Project",
    "Team",
    "User",
]
