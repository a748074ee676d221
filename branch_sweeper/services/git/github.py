"""GitHub API integration service"""

import os
import shutil
import subprocess
from typing import Optional, Tuple, TYPE_CHECKING, Union
from urllib.parse import urlparse

from github import Auth, Github

from branch_sweeper.models.branch import PRState
from branch_sweeper.logging_config import get_logger

if TYPE_CHECKING:
    from github.Repository import Repository
    from branch_sweeper.config import Config

logger = get_logger(__name__)

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")


def get_token_from_gh_cli() -> Optional[str]:
    """Ask the gh CLI for its stored token, if gh is installed and logged in."""
    gh = shutil.which("gh")
    if not gh:
        logger.debug("[GitHub] gh CLI not found")
        return None

    try:
        result = subprocess.run([gh, "auth", "token"], capture_output=True, text=True)
    except OSError as e:
        logger.debug(f"[GitHub] Could not run gh CLI: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"[GitHub] gh auth token failed: {result.stderr.strip()}")
        return None
    return result.stdout.strip() or None


def resolve_github_token(config: Union["Config", dict]) -> Optional[str]:
    """Find a GitHub token: config, then environment, then the gh CLI."""
    token = config.get("github_token")
    if token:
        return token
    for var in TOKEN_ENV_VARS:
        token = os.environ.get(var)
        if token:
            return token
    return get_token_from_gh_cli()


def parse_github_repo(remote_url: str) -> Optional[str]:
    """Extract "owner/name" from a GitHub remote URL.

    Returns None for anything that is not plainly github.com, including SSH
    host aliases such as ``git@github.com-work:org/repo.git`` whose real host
    is only known to the user's ssh config.
    """
    if "://" in remote_url:
        # Handle HTTPS and ssh:// URL formats (https://github.com/org/repo.git)
        parsed_url = urlparse(remote_url)
        host = parsed_url.hostname
        path = parsed_url.path
    elif ":" in remote_url:
        # Handle scp-like SSH format (git@github.com:org/repo.git)
        host, path = remote_url.split(":", 1)
        host = host.rsplit("@", 1)[-1]
    else:
        return None

    if host != "github.com":
        return None

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[:-4]

    owner, _, name = path.partition("/")
    if not owner or not name or "/" in name:
        return None
    return path


class GitHubService:
    """Pull request and user lookups against GitHub.

    Every lookup degrades instead of raising: when the integration is not set up
    or a request fails, the caller gets the conservative answer (``None`` or
    ``PRState.NONE``).
    """

    def __init__(self, config: Union["Config", dict], token: Optional[str] = None):
        """Initialize the service.

        Args:
            config: Configuration dictionary or Config object
            token: GitHub token; resolved from config/environment/gh when omitted
        """
        self.config = config
        self.debug_mode = config.get("debug", False)
        self.github_token = token if token is not None else resolve_github_token(config)
        self.github_repo: Optional[str] = None
        self.github: Optional[Github] = None
        self.gh_repo: Optional["Repository"] = None

    @property
    def enabled(self) -> bool:
        return self.gh_repo is not None and self.github_repo is not None

    def setup_github_api(self, remote_url: Optional[str]) -> bool:
        """Setup GitHub API access for the repository behind remote_url.

        Returns:
            True if PR lookups are available
        """
        if not remote_url:
            logger.debug("[GitHub] No remote URL")
            return False

        path = parse_github_repo(remote_url)
        if not path:
            logger.debug(f"[GitHub] Not a GitHub repository: {remote_url}")
            return False

        if not self.github_token:
            logger.debug("[GitHub] No GitHub token found. PR lookup disabled")
            return False

        try:
            self.github = Github(auth=Auth.Token(self.github_token))
            self.gh_repo = self.github.get_repo(path)
            self.github_repo = path

            logger.debug(f"[GitHub] GitHub integration enabled for: {path}")
            return True
        except Exception as e:
            logger.debug(f"[GitHub] Failed to setup GitHub API: {e}")
            self.gh_repo = None
            self.github_repo = None
            return False

    def get_authenticated_user(self) -> Optional[Tuple[str, int]]:
        """Return (login, numeric id) of the token's user, or None on any failure."""
        if not self.github_token:
            return None

        try:
            if self.github is None:
                self.github = Github(auth=Auth.Token(self.github_token))
            user = self.github.get_user()
            login, user_id = user.login, user.id
        except Exception as e:
            logger.debug(f"[GitHub] Error looking up authenticated user: {e}")
            return None

        if not login or not isinstance(user_id, int):
            logger.debug(f"[GitHub] Unexpected user payload: login={login!r} id={user_id!r}")
            return None
        return login, user_id

    def get_pr_state(self, branch_name: str) -> PRState:
        """State of the most recently created PR whose head is exactly branch_name.

        Only PRs opened from a branch of the origin repository itself are
        considered (head ``<owner>:<branch>``). A PR opened from a fork that
        reuses the branch name is not matched, so a branch pushed to a fork
        and squash-merged from there reads as ``PRState.NONE``.
        """
        if not self.enabled:
            return PRState.NONE

        try:
            assert self.gh_repo is not None
            assert self.github_repo is not None

            owner = self.github_repo.split("/")[0]
            pulls = list(self.gh_repo.get_pulls(state="all", head=f"{owner}:{branch_name}"))
            # The API matches on the head label; re-check the exact ref name
            pulls = [pr for pr in pulls if pr.head.ref == branch_name]
            if not pulls:
                return PRState.NONE

            latest_pr = max(pulls, key=lambda pr: pr.created_at)
            if latest_pr.merged_at is not None:
                state = PRState.MERGED
            elif latest_pr.state == "closed":
                state = PRState.CLOSED
            else:
                state = PRState.OPEN

            if self.debug_mode:
                logger.debug(f"[GitHub] Branch {branch_name}: PR #{latest_pr.number} is {state.value}")
            return state
        except Exception as e:
            logger.debug(f"[GitHub] Error getting PR status for {branch_name}: {e}")
            return PRState.NONE

    def close(self) -> None:
        """Close the GitHub API connection to clean up resources."""
        if self.github:
            try:
                self.github.close()
                logger.debug("[GitHub] Closed GitHub API connection")
            except Exception as e:
                logger.debug(f"[GitHub] Error closing GitHub API connection: {e}")
