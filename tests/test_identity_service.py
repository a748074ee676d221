"""Tests for IdentityService"""
import pytest

from branch_sweeper.exceptions import GitOperationError
from branch_sweeper.services.identity_service import IdentityService

from conftest import USER_EMAIL


class TestIdentityResolution:
    """Test building the author filter identity."""

    def test_configured_and_noreply(self, mock_config, mock_git_service, mock_github_service):
        service = IdentityService(mock_config, mock_git_service, mock_github_service)

        identity = service.resolve()

        assert identity.emails == (USER_EMAIL, "42+tester@users.noreply.github.com")
        assert identity.describe() == f"{USER_EMAIL} 42+tester@users.noreply.github.com"

    def test_noreply_email_not_duplicated(self, mock_config, mock_git_service, mock_github_service):
        mock_git_service.get_user_email.return_value = "42+tester@users.noreply.github.com"
        service = IdentityService(mock_config, mock_git_service, mock_github_service)

        identity = service.resolve()

        assert identity.emails == ("42+tester@users.noreply.github.com",)
        mock_github_service.get_authenticated_user.assert_not_called()

    def test_lookup_failure_keeps_configured_email(
        self, mock_config, mock_git_service, mock_github_service
    ):
        mock_github_service.get_authenticated_user.return_value = None
        service = IdentityService(mock_config, mock_git_service, mock_github_service)

        assert service.resolve().emails == (USER_EMAIL,)

    def test_without_github_service(self, mock_config, mock_git_service):
        service = IdentityService(mock_config, mock_git_service)

        assert service.resolve().emails == (USER_EMAIL,)

    def test_custom_noreply_domain(self, mock_config, mock_git_service, mock_github_service):
        mock_config['noreply_domain'] = "users.noreply.ghe.example.com"
        service = IdentityService(mock_config, mock_git_service, mock_github_service)

        assert service.derive_noreply_email() == "42+tester@users.noreply.ghe.example.com"

    @pytest.mark.parametrize("email", [None, ""])
    def test_missing_email_is_fatal(self, mock_config, mock_git_service, mock_github_service, email):
        mock_git_service.get_user_email.return_value = email
        service = IdentityService(mock_config, mock_git_service, mock_github_service)

        with pytest.raises(GitOperationError):
            service.resolve()

    def test_custom_domain_noreply_not_duplicated(
        self, mock_config, mock_git_service, mock_github_service
    ):
        mock_config['noreply_domain'] = "users.noreply.ghe.example.com"
        mock_git_service.get_user_email.return_value = "42+tester@users.noreply.ghe.example.com"
        service = IdentityService(mock_config, mock_git_service, mock_github_service)

        identity = service.resolve()

        assert identity.emails == ("42+tester@users.noreply.ghe.example.com",)
        mock_github_service.get_authenticated_user.assert_not_called()

    def test_other_domain_noreply_still_derives(
        self, mock_config, mock_git_service, mock_github_service
    ):
        """A github.com noreply address is not a noreply address of a custom domain."""
        mock_config['noreply_domain'] = "users.noreply.ghe.example.com"
        mock_git_service.get_user_email.return_value = "7+me@users.noreply.github.com"
        service = IdentityService(mock_config, mock_git_service, mock_github_service)

        assert service.resolve().emails == (
            "7+me@users.noreply.github.com",
            "42+tester@users.noreply.ghe.example.com",
        )
