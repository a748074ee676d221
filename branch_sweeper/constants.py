"""Shared constants for git-branch-sweeper."""

from branch_sweeper.models.branch import Disposition


# Status stream tags
TAG_INFO = "[INFO]"
TAG_OK = "[OK]"
TAG_WARN = "[WARN]"
TAG_SKIP = "[SKIP]"
TAG_ERR = "[ERR]"
TAG_DEL = "[DEL]"
TAG_DRY = "[DRY]"

# Tags are padded to this width so messages line up
TAG_WIDTH = 8


# CLI colors (Rich style names)
TAG_STYLES = {
    TAG_INFO: "cyan",
    TAG_OK: "green",
    TAG_WARN: "yellow",
    TAG_SKIP: "yellow",
    TAG_ERR: "red",
    TAG_DEL: "bold",
    TAG_DRY: "bold",
}


# Reasons recorded for kept branches
REASON_OPEN_PR = "open PR"
REASON_NO_PR = "no PR, not merged"
REASON_USER_DECLINED = "no PR — user declined"
REASON_NOT_EVALUATED = "not evaluated (PR lookup unavailable)"
REASON_FOREIGN_AUTHOR = "different author: {email}"
REASON_DELETE_FAILED = "delete failed: {error}"

# Author email used when the last commit cannot be read
UNKNOWN_AUTHOR = "unknown"


# Qualifier shown next to delete messages, by disposition
DELETION_QUALIFIERS = {
    Disposition.MERGED_DIRECT: "",
    Disposition.MERGED_SQUASH: " (squash-merged PR)",
    Disposition.ABANDONED: " (closed/abandoned PR)",
    Disposition.ORPHAN_FORCED: " (no PR, forced)",
}
