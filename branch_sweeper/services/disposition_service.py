"""Branch disposition: decides what happens to each candidate branch.

Everything here is pure. Callers supply the branch, the resolved identity and,
for unmerged branches, the PR state; nothing in this module touches git,
GitHub or the terminal.

Precedence, first match wins:

1. merged local branch                       -> MERGED_DIRECT, delete
2. merged remote branch by the user          -> MERGED_DIRECT, delete
3. remote branch (merged or not) by others   -> FOREIGN_AUTHOR, skip
4. unmerged, PR merged                       -> MERGED_SQUASH, delete
5. unmerged, PR open                         -> OPEN_PROTECTED, skip
6. unmerged, PR closed                       -> ABANDONED, delete
7. unmerged, no PR, not forced               -> ORPHAN_SKIPPED, skip
8. unmerged, no PR, forced                   -> ORPHAN_FORCED, prompt

Author ownership is settled before any PR lookup is needed, and an open PR
is never overridden by ``force``.
"""

from typing import Callable, Optional

from branch_sweeper.constants import (
    REASON_FOREIGN_AUTHOR,
    REASON_NO_PR,
    REASON_OPEN_PR,
)
from branch_sweeper.models.branch import (
    Action,
    Branch,
    Decision,
    Disposition,
    Identity,
    PRState,
)
from branch_sweeper.logging_config import get_logger

logger = get_logger(__name__)


class DispositionService:
    """Classification of branches into dispositions and actions."""

    @staticmethod
    def is_owned(email: str, identity: Identity) -> bool:
        """
        Check if a commit author email belongs to the current user.

        Exact, case-sensitive membership. It may under-match (keep a branch
        that is really the user's) but never claims someone else's branch.

        Args:
            email: Author email of the branch's last commit
            identity: Resolved identity

        Returns:
            True if the email is one of the identity's emails
        """
        return email in identity.emails

    @staticmethod
    def owns_branch(branch: Branch, identity: Identity) -> bool:
        """Local branches are always owned; remote ones go through the author filter."""
        if not branch.is_remote:
            return True
        return DispositionService.is_owned(branch.last_commit_author_email, identity)

    @staticmethod
    def needs_pr_lookup(branch: Branch, identity: Identity) -> bool:
        """
        Check if classifying this branch requires its PR state.

        False for merged branches and for remote branches owned by someone else,
        so a foreign branch is never looked up by name.
        """
        if branch.merged_into_trunk:
            return False
        return DispositionService.owns_branch(branch, identity)

    @staticmethod
    def classify(
        branch: Branch,
        identity: Identity,
        pr_state: Optional[PRState] = None,
        force: bool = False,
    ) -> Decision:
        """
        Classify a branch.

        Args:
            branch: Branch to classify
            identity: Resolved identity of the current user
            pr_state: PR state of the branch; required when needs_pr_lookup() is True
            force: Whether branches with no PR may be deleted (after a prompt)

        Returns:
            The Decision for this branch

        Raises:
            ValueError: If the branch needs a PR state and none was given
        """
        if not DispositionService.owns_branch(branch, identity):
            return Decision(
                Disposition.FOREIGN_AUTHOR,
                Action.SKIP,
                REASON_FOREIGN_AUTHOR.format(email=branch.last_commit_author_email),
            )

        if branch.merged_into_trunk:
            return Decision(Disposition.MERGED_DIRECT, Action.DELETE)

        if pr_state is None:
            raise ValueError(f"PR state is required to classify unmerged branch '{branch.label}'")

        if pr_state == PRState.MERGED:
            return Decision(Disposition.MERGED_SQUASH, Action.DELETE)
        if pr_state == PRState.OPEN:
            return Decision(Disposition.OPEN_PROTECTED, Action.SKIP, REASON_OPEN_PR)
        if pr_state == PRState.CLOSED:
            return Decision(Disposition.ABANDONED, Action.DELETE)

        if force:
            return Decision(Disposition.ORPHAN_FORCED, Action.PROMPT)
        return Decision(Disposition.ORPHAN_SKIPPED, Action.SKIP, REASON_NO_PR)

    @staticmethod
    def evaluate(
        branch: Branch,
        identity: Identity,
        pr_lookup: Callable[[str], PRState],
        force: bool = False,
    ) -> Decision:
        """
        Classify a branch, calling pr_lookup only when the PR state matters.

        Args:
            branch: Branch to classify
            identity: Resolved identity of the current user
            pr_lookup: Callable returning the PR state for a scope-stripped branch name
            force: Whether branches with no PR may be deleted (after a prompt)
        """
        pr_state = None
        if DispositionService.needs_pr_lookup(branch, identity):
            pr_state = pr_lookup(branch.name)
            logger.debug(f"PR state for {branch.label}: {pr_state.value}")

        decision = DispositionService.classify(branch, identity, pr_state, force)
        logger.debug(f"{branch.label}: {decision.disposition.value} -> {decision.action.value}")
        return decision
