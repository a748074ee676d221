"""Action execution: turns decisions into deletions, prompts and report lines"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from branch_sweeper.constants import REASON_DELETE_FAILED, REASON_USER_DECLINED
from branch_sweeper.exceptions import GitOperationError
from branch_sweeper.formatters import (
    format_deletion_message,
    format_dry_run_prompt_message,
    format_prompt,
    format_scope,
    format_skip_message,
)
from branch_sweeper.models.branch import (
    Action,
    Branch,
    Decision,
    Disposition,
    Mode,
    RunCounters,
)
from branch_sweeper.logging_config import get_logger

if TYPE_CHECKING:
    from branch_sweeper.services.display_service import DisplayService
    from branch_sweeper.services.git.operations import GitOperations

logger = get_logger(__name__)


class ConsoleConfirmer:
    """Asks the user on the controlling terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def confirm(self, prompt: str) -> bool:
        """Return True only for an explicit "y" or "Y"."""
        try:
            response = self.console.input(f"[yellow]{escape(prompt)}[/yellow]")
        except EOFError:
            logger.debug("No input available for confirmation, treating as decline")
            return False
        return response.strip() in ("y", "Y")


@dataclass
class ActionResult:
    """Outcome of executing one decision."""
    branch: Branch
    decision: Decision
    deleted: bool  # Counted as deleted (or would-be deleted in dry-run)
    performed: bool = False  # A destructive git call was actually made
    error: Optional[str] = None


class ActionService:
    """Executes decisions for one run mode.

    In dry-run no destructive call is ever issued and no prompt is shown; every
    deletable branch is reported and counted as "would delete". A failed
    deletion in execute mode is reported and recorded, never raised.
    """

    def __init__(
        self,
        git_service: "GitOperations",
        display: "DisplayService",
        confirmer,
        mode: Mode,
    ):
        """
        Args:
            git_service: Destructive primitives
            display: Status stream
            confirmer: Object with ``confirm(prompt) -> bool``
            mode: Dry-run or execute
        """
        self.git_service = git_service
        self.display = display
        self.confirmer = confirmer
        self.mode = mode

    @property
    def dry_run(self) -> bool:
        return self.mode == Mode.DRY_RUN

    def execute(self, branch: Branch, decision: Decision, counters: RunCounters) -> ActionResult:
        """Carry out a decision and record the outcome in counters."""
        if decision.action == Action.SKIP:
            return self._skip(branch, decision, counters)
        if decision.action == Action.PROMPT:
            return self._prompt(branch, decision, counters)
        return self._delete(branch, decision, counters)

    def _skip(self, branch: Branch, decision: Decision, counters: RunCounters) -> ActionResult:
        message = format_skip_message(branch, decision)
        if decision.disposition == Disposition.ORPHAN_SKIPPED:
            self.display.warn(message)
        else:
            self.display.skip(message)
        counters.record_kept(branch, decision.reason or decision.disposition.value)
        return ActionResult(branch, decision, deleted=False)

    def _prompt(self, branch: Branch, decision: Decision, counters: RunCounters) -> ActionResult:
        if self.dry_run:
            self.display.dry(format_dry_run_prompt_message(branch))
            counters.record_deleted(branch)
            return ActionResult(branch, decision, deleted=True)

        if self.confirmer.confirm(format_prompt(branch)):
            return self._delete(branch, decision, counters)

        declined = Decision(decision.disposition, Action.SKIP, REASON_USER_DECLINED)
        self.display.skip(format_skip_message(branch, declined))
        counters.record_kept(branch, REASON_USER_DECLINED)
        return ActionResult(branch, declined, deleted=False)

    def _delete(self, branch: Branch, decision: Decision, counters: RunCounters) -> ActionResult:
        if self.dry_run:
            self.display.dry(format_deletion_message(branch, decision.disposition, dry_run=True))
            counters.record_deleted(branch)
            return ActionResult(branch, decision, deleted=True)

        self.display.delete(format_deletion_message(branch, decision.disposition, dry_run=False))
        try:
            if branch.is_remote:
                self.git_service.delete_remote_branch(branch.name)
            else:
                # Squash-merged, abandoned and forced branches are not ancestors of trunk
                force = decision.disposition != Disposition.MERGED_DIRECT
                self.git_service.delete_local_branch(branch.name, force=force)
        except GitOperationError as e:
            error = e.message or str(e)
            self.display.error(
                f"Failed to delete {format_scope(branch)} branch '{branch.name}': {error}"
            )
            counters.record_kept(branch, REASON_DELETE_FAILED.format(error=error))
            return ActionResult(branch, decision, deleted=False, performed=True, error=error)

        counters.record_deleted(branch)
        return ActionResult(branch, decision, deleted=True, performed=True)
