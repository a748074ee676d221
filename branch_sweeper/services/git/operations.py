"""Git operations service"""

import git
from contextlib import contextmanager
from typing import List, Optional, Union, TYPE_CHECKING

from branch_sweeper.constants import UNKNOWN_AUTHOR
from branch_sweeper.exceptions import GitOperationError, RepositoryError
from branch_sweeper.logging_config import get_logger

if TYPE_CHECKING:
    from branch_sweeper.config import Config

logger = get_logger(__name__)

LOCAL_PREFIX = "refs/heads/"
REMOTE_PREFIX = "refs/remotes/"


def _describe_git_error(e: git.exc.GitCommandError) -> str:
    """Short, single-line description of a failed git command."""
    stderr = (e.stderr or "").strip()
    if stderr.startswith("stderr:"):
        stderr = stderr[len("stderr:"):].strip()
    stderr = stderr.strip("'").strip()
    if stderr:
        return stderr.splitlines()[-1].strip()
    return f"exit code {e.status}"


class GitOperations:
    """Service for Git query and mutate primitives."""

    def __init__(self, repo_path: str, config: Union["Config", dict]):
        """Initialize the service.

        Args:
            repo_path: Path to the git repository
            config: Configuration dictionary or Config object

        Raises:
            RepositoryError: If the path is not a usable git repository
        """
        self.repo_path = repo_path
        self.config = config
        self.remote_name = config.get("remote_name", "origin")
        self.in_git_operation = False  # Track if a mutating operation is in progress

        try:
            self.repo = git.Repo(repo_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryError(str(repo_path), "not a git repository") from e
        if self.repo.bare:
            raise RepositoryError(str(repo_path), "cannot operate on a bare repository")

        logger.debug(f"Git operations initialized for {self.repo.working_dir}")

    @contextmanager
    def _git_operation(self):
        """Context manager to track git operations."""
        self.in_git_operation = True
        try:
            yield
        finally:
            self.in_git_operation = False

    def get_current_branch(self) -> Optional[str]:
        """Name of the checked-out branch, or None for a detached HEAD."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            return None

    def get_remote_url(self) -> Optional[str]:
        """URL of the configured remote, or None if it does not exist."""
        try:
            return self.repo.remote(self.remote_name).url
        except ValueError:
            logger.debug(f"No remote named {self.remote_name}")
            return None

    def fetch_prune(self) -> None:
        """Fetch from the remote and prune deleted remote-tracking branches."""
        with self._git_operation():
            try:
                self.repo.git.fetch("--prune", self.remote_name)
            except git.exc.GitCommandError as e:
                raise GitOperationError("fetch", message=_describe_git_error(e)) from e

    def pull_ff_only(self, branch_name: str) -> None:
        """Fast-forward the current branch to the remote's tip."""
        with self._git_operation():
            try:
                self.repo.git.pull("--ff-only", self.remote_name, branch_name)
            except git.exc.GitCommandError as e:
                raise GitOperationError(
                    "pull", branch_name, _describe_git_error(e)
                ) from e

    def get_user_email(self) -> Optional[str]:
        """Read the configured user.email, or None if unset."""
        try:
            email = self.repo.git.config("user.email").strip()
        except git.exc.GitCommandError:
            return None
        return email or None

    def list_branches(self, remote: bool = False, merged_into: Optional[str] = None) -> List[str]:
        """List scope-stripped branch names.

        Args:
            remote: List remote-tracking branches of the configured remote
                instead of local branches
            merged_into: Only list branches merged into (reachable from) this ref

        Returns:
            Branch names in git's sort order; remote names are returned without
            the remote prefix and the symbolic HEAD pointer is excluded.
        """
        args = ["--format=%(refname)"]
        if remote:
            args.insert(0, "-r")
        if merged_into:
            args.extend(["--merged", merged_into])

        try:
            output = self.repo.git.branch(*args)
        except git.exc.GitCommandError as e:
            raise GitOperationError("list_branches", message=_describe_git_error(e)) from e

        prefix = f"{REMOTE_PREFIX}{self.remote_name}/" if remote else LOCAL_PREFIX
        names = []
        for line in output.splitlines():
            refname = line.strip()
            if not refname.startswith(prefix):
                continue
            name = refname[len(prefix):]
            if remote and name == "HEAD":
                continue
            names.append(name)
        return names

    def remote_ref(self, branch_name: str) -> str:
        """Remote-tracking ref name for a branch, e.g. origin/feature."""
        return f"{self.remote_name}/{branch_name}"

    def get_last_author_email(self, ref: str) -> str:
        """Author email of the newest commit on a ref."""
        try:
            email = self.repo.git.log("-1", "--format=%ae", ref).strip()
        except git.exc.GitCommandError as e:
            logger.debug(f"Error reading last author of {ref}: {e}")
            return UNKNOWN_AUTHOR
        return email or UNKNOWN_AUTHOR

    def delete_local_branch(self, branch_name: str, force: bool = False) -> None:
        """Delete a local branch.

        Args:
            branch_name: Branch to delete
            force: Allow deleting a branch that is not merged into its upstream or HEAD

        Raises:
            GitOperationError: If git refuses or fails
        """
        with self._git_operation():
            try:
                self.repo.git.branch("-D" if force else "-d", branch_name)
                logger.debug(f"Deleted local branch {branch_name} (force={force})")
            except git.exc.GitCommandError as e:
                raise GitOperationError(
                    "delete_local", branch_name, _describe_git_error(e)
                ) from e

    def delete_remote_branch(self, branch_name: str) -> None:
        """Delete a branch on the remote by pushing a ref deletion.

        Raises:
            GitOperationError: If the push fails
        """
        with self._git_operation():
            try:
                self.repo.git.push(self.remote_name, "--delete", branch_name)
                logger.debug(f"Deleted remote branch {self.remote_name}/{branch_name}")
            except git.exc.GitCommandError as e:
                raise GitOperationError(
                    "delete_remote", branch_name, _describe_git_error(e)
                ) from e

    def close(self) -> None:
        """Release the GitPython repository handle."""
        self.repo.close()
