"""Routers package."""

from . import health, projects, teams

__all__ = [
    "health",
    "projects",
    "teams",
]
