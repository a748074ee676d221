"""Configuration handling for git-branch-sweeper"""

from dataclasses import dataclass
from typing import Optional

from branch_sweeper.models.branch import Mode

TRUNK_BRANCH = "main"
REMOTE_NAME = "origin"
NOREPLY_DOMAIN = "users.noreply.github.com"


@dataclass
class Config:
    """Configuration for git-branch-sweeper with validation."""

    # Repository layout (only "main" on "origin" is supported)
    main_branch: str = TRUNK_BRANCH
    remote_name: str = REMOTE_NAME

    # Execution modes
    dry_run: bool = True  # Preview by default, --execute to delete
    force: bool = False  # Include branches with no PR (prompted per branch)
    verbose: bool = False
    debug: bool = False

    # GitHub integration
    github_token: Optional[str] = None
    noreply_domain: str = NOREPLY_DOMAIN

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_main_branch()
        self._validate_remote_name()
        self._validate_noreply_domain()

    def _validate_main_branch(self):
        """Validate main_branch is the supported trunk."""
        if not self.main_branch or not self.main_branch.strip():
            raise ValueError("main_branch cannot be empty")
        self.main_branch = self.main_branch.strip()
        if self.main_branch != TRUNK_BRANCH:
            raise ValueError(
                f"Only '{TRUNK_BRANCH}' is supported as trunk branch, got '{self.main_branch}'"
            )

    def _validate_remote_name(self):
        """Validate remote_name is the supported remote."""
        if self.remote_name != REMOTE_NAME:
            raise ValueError(f"Only the '{REMOTE_NAME}' remote is supported, got '{self.remote_name}'")

    def _validate_noreply_domain(self):
        """Validate noreply_domain is not empty."""
        if not self.noreply_domain or not self.noreply_domain.strip():
            raise ValueError("noreply_domain cannot be empty")
        self.noreply_domain = self.noreply_domain.strip()

    @property
    def mode(self) -> Mode:
        return Mode.DRY_RUN if self.dry_run else Mode.EXECUTE

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "main_branch": self.main_branch,
            "remote_name": self.remote_name,
            "dry_run": self.dry_run,
            "force": self.force,
            "verbose": self.verbose,
            "debug": self.debug,
            "github_token": self.github_token,
            "noreply_domain": self.noreply_domain,
        }

    def get(self, key: str, default=None):
        """Get config value by key so services accept a Config or a dict."""
        return getattr(self, key, default)

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {
            "main_branch",
            "remote_name",
            "dry_run",
            "force",
            "verbose",
            "debug",
            "github_token",
            "noreply_domain",
        }

        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)
