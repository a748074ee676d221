"""Display service: the tagged status stream and the final summary"""
from typing import Optional

from rich.console import Console
from rich.text import Text

from branch_sweeper.constants import (
    TAG_DEL,
    TAG_DRY,
    TAG_ERR,
    TAG_INFO,
    TAG_OK,
    TAG_SKIP,
    TAG_STYLES,
    TAG_WARN,
    TAG_WIDTH,
)
from branch_sweeper.formatters import format_kept_entry
from branch_sweeper.models.branch import Mode, RunCounters
from branch_sweeper.logging_config import get_logger

logger = get_logger(__name__)


class DisplayService:
    """Prints line-oriented status messages with a fixed tag vocabulary.

    Messages are rendered as rich Text, so branch names containing square
    brackets are never mistaken for console markup.
    """

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.error_console = error_console or Console(stderr=True, highlight=False, soft_wrap=True)

    def _tagged(self, tag: str, message: str) -> Text:
        return Text.assemble((tag, TAG_STYLES.get(tag, "")), " " * max(1, TAG_WIDTH - len(tag)), message)

    def info(self, message: str) -> None:
        self.console.print(self._tagged(TAG_INFO, message))

    def ok(self, message: str) -> None:
        self.console.print(self._tagged(TAG_OK, message))

    def warn(self, message: str) -> None:
        self.console.print(self._tagged(TAG_WARN, message))

    def skip(self, message: str) -> None:
        self.console.print(self._tagged(TAG_SKIP, message))

    def error(self, message: str) -> None:
        self.error_console.print(self._tagged(TAG_ERR, message))

    def delete(self, message: str) -> None:
        self.console.print(self._tagged(TAG_DEL, message))

    def dry(self, message: str) -> None:
        self.console.print(self._tagged(TAG_DRY, message))

    def blank(self) -> None:
        self.console.print()

    def header(self, mode: Mode) -> None:
        """Banner printed at the start of a run."""
        self.blank()
        self.console.print(Text(f"══════ Branch Cleanup (mode: {mode.value}) ══════", style="bold"))
        self.blank()

    def section(self, title: str) -> None:
        self.console.print(Text(f"── {title} ──", style="bold"))

    def print_summary(self, counters: RunCounters, mode: Mode) -> None:
        """Print deletion counts and every kept branch with its reason."""
        self.blank()
        self.console.print(Text("══════ Summary ══════", style="bold"))
        self.blank()

        if mode == Mode.DRY_RUN:
            self.ok("DRY RUN — no branches were actually deleted.")
            self.console.print(f"  Local branches that would be deleted:  {counters.deleted_local}")
            self.console.print(f"  Remote branches that would be deleted: {counters.deleted_remote}")
            self.blank()
            self.console.print("Run with --execute to perform the deletions.")
        else:
            self.ok("Cleanup complete.")
            self.console.print(f"  Local branches deleted:  {counters.deleted_local}")
            self.console.print(f"  Remote branches deleted: {counters.deleted_remote}")

        if counters.kept:
            self.blank()
            self.console.print(Text("Branches kept:", style="bold"))
            for label, reason in counters.kept:
                self.console.print(Text(format_kept_entry(label, reason)))

        self.blank()
        logger.info(
            f"Run finished: {counters.deleted_local} local, {counters.deleted_remote} remote, "
            f"{len(counters.kept)} kept"
        )
