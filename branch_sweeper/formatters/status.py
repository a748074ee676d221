"""Status and deletion message formatting."""

from branch_sweeper.models.branch import Branch, Decision, Disposition
from branch_sweeper.constants import DELETION_QUALIFIERS


def format_scope(branch: Branch) -> str:
    """Lowercase scope word used in messages ("local" or "remote")."""
    return branch.scope.value


def format_deletion_message(branch: Branch, disposition: Disposition, dry_run: bool) -> str:
    """
    Format the line printed when a branch is (or would be) deleted.

    Args:
        branch: Branch being deleted
        disposition: Why it is deleted
        dry_run: True for the "Would delete" wording

    Returns:
        Message without tag, e.g. "Would delete local branch (squash-merged PR): fix-1"
    """
    qualifier = DELETION_QUALIFIERS.get(disposition, "")
    verb = "Would delete" if dry_run else "Deleting"
    return f"{verb} {format_scope(branch)} branch{qualifier}: {branch.name}"


def format_dry_run_prompt_message(branch: Branch) -> str:
    """Line shown in dry-run for a branch that would be prompted for."""
    return f"Would prompt to delete {format_scope(branch)} branch (no PR): {branch.name}"


def format_prompt(branch: Branch) -> str:
    """Question asked before deleting a branch that has no pull request."""
    prefix = "Remote branch" if branch.is_remote else "Branch"
    return f"{prefix} '{branch.name}' has no PR. Delete? [y/N]: "


def format_skip_message(branch: Branch, decision: Decision) -> str:
    """
    Format the line printed when a branch is kept.

    Args:
        branch: Branch being kept
        decision: Decision carrying the disposition and reason

    Returns:
        Message without tag
    """
    scope = "Remote" if branch.is_remote else "Local"
    disposition = decision.disposition

    if disposition == Disposition.FOREIGN_AUTHOR:
        return (
            f"Remote branch '{branch.name}' — last author is "
            f"'{branch.last_commit_author_email}' (not you)"
        )
    if disposition == Disposition.OPEN_PROTECTED:
        return f"{scope} branch '{branch.name}' has an OPEN PR — keeping"
    if disposition == Disposition.ORPHAN_SKIPPED:
        return (
            f"{scope} branch '{branch.name}' has no PR and is not merged — "
            "skipping (use --force to include)"
        )
    if disposition == Disposition.ORPHAN_FORCED:
        return f"Kept {scope.lower()} branch '{branch.name}' (user declined)"
    return f"Kept {scope.lower()} branch '{branch.name}' ({decision.reason})"


def format_kept_entry(label: str, reason: str) -> str:
    """One line of the kept-branches list in the summary."""
    return f"  - {label} ({reason})"
