"""Branch model and related enums"""
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class BranchScope(Enum):
    """Where a branch lives."""
    LOCAL = "local"
    REMOTE = "remote"


class PRState(Enum):
    """Lifecycle state of the most recent pull request for a branch."""
    OPEN = "OPEN"
    MERGED = "MERGED"
    CLOSED = "CLOSED"
    NONE = "NONE"  # No pull request found for this exact branch name


class Disposition(Enum):
    """Classification assigned to a branch before an action is chosen."""
    MERGED_DIRECT = "merged"
    MERGED_SQUASH = "squash-merged"
    ABANDONED = "abandoned"
    OPEN_PROTECTED = "open-pr"
    FOREIGN_AUTHOR = "foreign-author"
    ORPHAN_SKIPPED = "orphan-skipped"
    ORPHAN_FORCED = "orphan-forced"


class Action(Enum):
    """What the executor should do with a classified branch."""
    DELETE = "delete"
    SKIP = "skip"
    PROMPT = "prompt"


class Mode(Enum):
    """Run mode."""
    DRY_RUN = "dry-run"
    EXECUTE = "execute"


@dataclass(frozen=True)
class Branch:
    """A branch as seen by one run.

    ``name`` is scope-stripped: remote branches are stored without the
    ``origin/`` prefix.
    """
    name: str
    scope: BranchScope
    last_commit_author_email: str
    merged_into_trunk: bool
    remote_name: str = "origin"

    @property
    def is_remote(self) -> bool:
        return self.scope == BranchScope.REMOTE

    @property
    def label(self) -> str:
        """Name used in the kept-branches report."""
        if self.is_remote:
            return f"{self.remote_name}/{self.name}"
        return self.name


@dataclass(frozen=True)
class Identity:
    """Email addresses that count as the current user, in discovery order."""
    emails: Tuple[str, ...]

    def __post_init__(self):
        if not self.emails:
            raise ValueError("Identity requires at least one email")

    def describe(self) -> str:
        return " ".join(self.emails)


@dataclass(frozen=True)
class Decision:
    """Result of classifying one branch."""
    disposition: Disposition
    action: Action
    reason: Optional[str] = None  # Set for every SKIP and for declined prompts


@dataclass
class BranchInventory:
    """The four branch lists produced by enumeration."""
    merged_local: List[Branch] = field(default_factory=list)
    unmerged_local: List[Branch] = field(default_factory=list)
    merged_remote: List[Branch] = field(default_factory=list)
    unmerged_remote: List[Branch] = field(default_factory=list)


@dataclass
class RunCounters:
    """Run-scoped accumulator for the final summary."""
    deleted_local: int = 0
    deleted_remote: int = 0
    kept: List[Tuple[str, str]] = field(default_factory=list)

    def record_deleted(self, branch: Branch) -> None:
        if branch.is_remote:
            self.deleted_remote += 1
        else:
            self.deleted_local += 1

    def record_kept(self, branch: Branch, reason: str) -> None:
        self.kept.append((branch.label, reason))
