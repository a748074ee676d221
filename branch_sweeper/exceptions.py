"""Custom exceptions for git-branch-sweeper"""

from typing import Optional


class BranchSweeperError(Exception):
    """Base exception for all git-branch-sweeper errors."""
    pass


class RepositoryError(BranchSweeperError):
    """Exception raised when the repository cannot be opened."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Cannot open repository at '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class GitOperationError(BranchSweeperError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class NotOnTrunkError(BranchSweeperError):
    """Exception raised when the checkout is not on the trunk branch."""

    def __init__(self, current: Optional[str], trunk: str):
        self.current = current
        self.trunk = trunk
        if current:
            error_msg = f"You must be on the '{trunk}' branch. Currently on '{current}'."
        else:
            error_msg = f"You must be on the '{trunk}' branch. HEAD is detached."
        super().__init__(error_msg)
