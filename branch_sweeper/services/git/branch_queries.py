"""Branch query service for git-branch-sweeper."""

from typing import List, Union, TYPE_CHECKING

from branch_sweeper.models.branch import Branch, BranchInventory, BranchScope
from branch_sweeper.logging_config import get_logger

if TYPE_CHECKING:
    from branch_sweeper.config import Config
    from branch_sweeper.services.git.operations import GitOperations

logger = get_logger(__name__)


class BranchQueries:
    """Enumerates local and remote branches relative to the trunk branch."""

    def __init__(self, config: Union["Config", dict], git_service: "GitOperations"):
        """Initialize the branch queries service.

        Args:
            config: Configuration dictionary or Config object
            git_service: GitOperations instance (dependency injection)
        """
        self.config = config
        self.git_service = git_service
        self.main_branch = config.get("main_branch", "main")

        logger.debug("Branch queries service initialized")

    def _build(self, names: List[str], scope: BranchScope, merged: bool) -> List[Branch]:
        branches = []
        for name in names:
            if scope == BranchScope.REMOTE:
                ref = self.git_service.remote_ref(name)
            else:
                ref = name
            branches.append(
                Branch(
                    name=name,
                    scope=scope,
                    last_commit_author_email=self.git_service.get_last_author_email(ref),
                    merged_into_trunk=merged,
                    remote_name=self.git_service.remote_name,
                )
            )
        return branches

    def _partition(self, remote: bool) -> tuple:
        all_names = [
            name for name in self.git_service.list_branches(remote=remote)
            if name != self.main_branch
        ]
        merged_names = {
            name for name in self.git_service.list_branches(remote=remote, merged_into=self.main_branch)
            if name != self.main_branch
        }

        # Keep enumeration order for both partitions
        merged = [name for name in all_names if name in merged_names]
        unmerged = [name for name in all_names if name not in merged_names]
        return merged, unmerged

    def get_inventory(self) -> BranchInventory:
        """Enumerate branches into merged/unmerged lists for both scopes.

        The caller must have checked out and fast-forwarded the trunk branch
        first; a stale trunk would misreport merged branches as unmerged.
        """
        merged_local, unmerged_local = self._partition(remote=False)
        merged_remote, unmerged_remote = self._partition(remote=True)

        inventory = BranchInventory(
            merged_local=self._build(merged_local, BranchScope.LOCAL, True),
            unmerged_local=self._build(unmerged_local, BranchScope.LOCAL, False),
            merged_remote=self._build(merged_remote, BranchScope.REMOTE, True),
            unmerged_remote=self._build(unmerged_remote, BranchScope.REMOTE, False),
        )

        logger.debug(
            f"Enumerated {len(merged_local)} merged / {len(unmerged_local)} unmerged local, "
            f"{len(merged_remote)} merged / {len(unmerged_remote)} unmerged remote branches"
        )
        return inventory
