"""Git-related services for git-branch-sweeper."""

from .operations import GitOperations
from .github import GitHubService
from .branch_queries import BranchQueries

__all__ = [
    "GitOperations",
    "GitHubService",
    "BranchQueries",
]
