"""Domain services."""

from .projects import (
    OverviewFound,
    OverviewNotFound,
    OverviewProviderUnavailable,
    OverviewResult,
    ProjectsService,
)

__all__ = [
    "OverviewFound",
    "OverviewNotFound",
    "OverviewProviderUnavailable",
    "OverviewResult",
    "ProjectsService",
]
