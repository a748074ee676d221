"""Service for resolving which commit author emails belong to the current user"""

from typing import Optional, Union, TYPE_CHECKING

from branch_sweeper.exceptions import GitOperationError
from branch_sweeper.models.branch import Identity
from branch_sweeper.logging_config import get_logger

if TYPE_CHECKING:
    from branch_sweeper.config import Config
    from branch_sweeper.services.git.operations import GitOperations
    from branch_sweeper.services.git.github import GitHubService

logger = get_logger(__name__)


class IdentityService:
    """Builds the Identity used by the author filter."""

    def __init__(
        self,
        config: Union["Config", dict],
        git_service: "GitOperations",
        github_service: Optional["GitHubService"] = None,
    ):
        self.config = config
        self.git_service = git_service
        self.github_service = github_service
        self.noreply_domain = config.get("noreply_domain", "users.noreply.github.com")

    def is_noreply_email(self, email: str) -> bool:
        return email.endswith(f"@{self.noreply_domain}")

    def derive_noreply_email(self) -> Optional[str]:
        """Build <id>+<login>@<noreply-domain> from the authenticated GitHub user."""
        if self.github_service is None:
            return None

        user = self.github_service.get_authenticated_user()
        if user is None:
            return None
        login, user_id = user
        return f"{user_id}+{login}@{self.noreply_domain}"

    def resolve(self) -> Identity:
        """Resolve the identity once for the run.

        The configured user.email is mandatory. The noreply address is added
        only when the configured email is not already a noreply address and the
        lookup succeeds.

        Raises:
            GitOperationError: If user.email is not configured
        """
        email = self.git_service.get_user_email()
        if not email:
            raise GitOperationError("read_config", message="user.email is not configured")

        emails = [email]
        if not self.is_noreply_email(email):
            noreply = self.derive_noreply_email()
            if noreply:
                emails.append(noreply)
            else:
                logger.debug("No noreply email derived; using configured email only")

        identity = Identity(emails=tuple(emails))
        logger.info(f"Resolved identity: {identity.describe()}")
        return identity
