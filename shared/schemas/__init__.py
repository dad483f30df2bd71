"""Schemas for hosting provider API responses."""

from .github import GitHubBranch, GitHubCommit, GitHubRepository
from .gitlab import GitLabBranch

__all__ = [
    "GitHubBranch",
    "GitHubCommit",
    "GitHubRepository",
    "GitLabBranch",
]
