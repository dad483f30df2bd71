"""Shared utilities for the workspace projects services."""

from .repohost import RepoUrl, parse_repo_url

# Models and contracts are imported from their submodules
# Example: from shared.models import Project; from shared.contracts.dto.project import ProjectDTO

__all__ = ["RepoUrl", "parse_repo_url"]
