"""Core functionality for git-branch-sweeper."""

from .branch_sweeper import BranchSweeper

__all__ = ["BranchSweeper"]
