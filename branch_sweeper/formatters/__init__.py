"""Formatting utilities for git-branch-sweeper.

All user-facing wording of the status stream lives in the status module so the
services only decide what happened, not how it is phrased.
"""

from .status import (
    format_scope,
    format_deletion_message,
    format_dry_run_prompt_message,
    format_prompt,
    format_skip_message,
    format_kept_entry,
)

__all__ = [
    "format_scope",
    "format_deletion_message",
    "format_dry_run_prompt_message",
    "format_prompt",
    "format_skip_message",
    "format_kept_entry",
]
