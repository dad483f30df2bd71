"""Persistence interfaces and their SQLAlchemy implementations."""

from .base import PrebuildStore, ProjectStore, TeamStore, UserStore
from .sql import SqlPrebuildStore, SqlProjectStore, SqlTeamStore, SqlUserStore

__all__ = [
    "PrebuildStore",
    "ProjectStore",
    "SqlPrebuildStore",
    "SqlProjectStore",
    "SqlTeamStore",
    "SqlUserStore",
    "TeamStore",
    "UserStore",
]
