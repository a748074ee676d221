"""Core run loop for git-branch-sweeper"""

from typing import List, Optional, Union

from branch_sweeper.config import Config
from branch_sweeper.constants import REASON_NOT_EVALUATED
from branch_sweeper.exceptions import NotOnTrunkError
from branch_sweeper.models.branch import (
    Branch,
    BranchInventory,
    Identity,
    RunCounters,
)
from branch_sweeper.services.action_service import ActionService, ConsoleConfirmer
from branch_sweeper.services.disposition_service import DispositionService
from branch_sweeper.services.display_service import DisplayService
from branch_sweeper.services.git import BranchQueries, GitHubService, GitOperations
from branch_sweeper.services.identity_service import IdentityService
from branch_sweeper.logging_config import get_logger

logger = get_logger(__name__)


class BranchSweeper:
    """Deletes branches whose work has landed and keeps everything else."""

    def __init__(
        self,
        repo_path: str,
        config: Union[Config, dict],
        git_service: Optional[GitOperations] = None,
        github_service: Optional[GitHubService] = None,
        display: Optional[DisplayService] = None,
        confirmer=None,
    ):
        """Initialize BranchSweeper.

        Args:
            repo_path: Path to git repository
            config: Configuration dict or Config object
            git_service: Git primitives (created from repo_path when omitted)
            github_service: GitHub lookups (created from config when omitted)
            display: Status stream (stdout/stderr consoles when omitted)
            confirmer: Object with ``confirm(prompt) -> bool`` used for forced deletions

        Raises:
            RepositoryError: If repo_path is not a usable git repository
        """
        self.repo_path = repo_path
        if isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config
        self.main_branch = self.config.main_branch
        self.force_mode = self.config.force
        self.mode = self.config.mode

        self.git_service = git_service or GitOperations(repo_path, self.config)
        self.github_service = github_service or GitHubService(self.config)
        self.display = display or DisplayService()
        self.confirmer = confirmer or ConsoleConfirmer(self.display.console)

        self.branch_queries = BranchQueries(self.config, self.git_service)
        self.identity_service = IdentityService(self.config, self.git_service, self.github_service)
        self.action_service = ActionService(
            self.git_service, self.display, self.confirmer, self.mode
        )

    def check_trunk(self) -> None:
        """Refuse to run unless the trunk branch is checked out."""
        current = self.git_service.get_current_branch()
        if current != self.main_branch:
            raise NotOnTrunkError(current, self.main_branch)

    def prepare(self) -> None:
        """Verify the checkout and bring trunk up to date with the remote.

        Raises:
            NotOnTrunkError: If trunk is not checked out; nothing else is attempted
            GitOperationError: If fetching or fast-forwarding fails
        """
        self.check_trunk()

        self.display.info("Fetching and pruning remote tracking branches...")
        self.git_service.fetch_prune()

        self.display.info(f"Pulling latest {self.main_branch}...")
        self.git_service.pull_ff_only(self.main_branch)

    def setup_pr_lookup(self) -> bool:
        """Enable PR lookups if origin is a GitHub repository and a token is available."""
        remote_url = self.git_service.get_remote_url()
        enabled = self.github_service.setup_github_api(remote_url)
        if enabled:
            logger.info("[GitHub] Integration enabled - PR detection active")
        else:
            logger.info("[GitHub] Integration disabled - PR detection unavailable")
        return enabled

    def resolve_identity(self) -> Identity:
        identity = self.identity_service.resolve()
        self.display.info(f"User emails for author filter: {identity.describe()}")
        self.display.blank()
        return identity

    def process_branches(
        self,
        branches: List[Branch],
        identity: Identity,
        counters: RunCounters,
    ) -> None:
        """Classify and act on each branch in enumeration order."""
        for branch in branches:
            decision = DispositionService.evaluate(
                branch, identity, self.github_service.get_pr_state, self.force_mode
            )
            self.action_service.execute(branch, decision, counters)

    def keep_unevaluated(
        self,
        branches: List[Branch],
        identity: Identity,
        counters: RunCounters,
    ) -> None:
        """Keep unmerged branches when PR lookups are unavailable.

        Foreign remote branches still get their author reason; everything else
        is kept as not evaluated.
        """
        for branch in branches:
            if not DispositionService.owns_branch(branch, identity):
                decision = DispositionService.classify(branch, identity)
                self.action_service.execute(branch, decision, counters)
                continue

            scope = "Remote" if branch.is_remote else "Local"
            self.display.skip(f"{scope} branch '{branch.name}' not evaluated (PR lookup unavailable)")
            counters.record_kept(branch, REASON_NOT_EVALUATED)

    def sweep(
        self,
        inventory: BranchInventory,
        identity: Identity,
        pr_lookup_available: bool,
        counters: Optional[RunCounters] = None,
    ) -> RunCounters:
        """Run steps 2-4 over an enumerated inventory."""
        if counters is None:
            counters = RunCounters()

        self.display.section("Step 2: Merged local branches")
        if inventory.merged_local:
            self.process_branches(inventory.merged_local, identity, counters)
        else:
            self.display.info("No merged local branches to delete.")
        self.display.blank()

        self.display.section("Step 3: Merged remote branches")
        if inventory.merged_remote:
            self.process_branches(inventory.merged_remote, identity, counters)
        else:
            self.display.info("No merged remote branches to delete.")
        self.display.blank()

        self.display.section("Step 4: Unmerged branches (PR lookup)")
        if not pr_lookup_available:
            self.display.error(
                "GitHub PR lookup unavailable. Skipping squash-merge detection for unmerged branches."
            )
            self.keep_unevaluated(
                inventory.unmerged_local + inventory.unmerged_remote, identity, counters
            )
            self.display.blank()
            return counters

        if inventory.unmerged_local:
            self.display.info("Checking unmerged local branches against GitHub PRs...")
            self.process_branches(inventory.unmerged_local, identity, counters)
        else:
            self.display.info("No unmerged local branches remaining.")
        self.display.blank()

        if inventory.unmerged_remote:
            self.display.info("Checking unmerged remote branches against GitHub PRs...")
            self.process_branches(inventory.unmerged_remote, identity, counters)
        else:
            self.display.info("No unmerged remote branches remaining.")

        return counters

    def run(self) -> RunCounters:
        """Perform a full cleanup run and print the summary.

        Returns:
            The counters accumulated during the run
        """
        self.display.header(self.mode)
        self.prepare()

        pr_lookup_available = self.setup_pr_lookup()
        identity = self.resolve_identity()
        inventory = self.branch_queries.get_inventory()

        counters = self.sweep(inventory, identity, pr_lookup_available)
        self.display.print_summary(counters, self.mode)
        return counters

    def close(self) -> None:
        """Release repository and API handles."""
        self.github_service.close()
        self.git_service.close()
