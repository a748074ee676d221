"""Pytest fixtures for git-branch-sweeper tests"""
import io
import tempfile
from pathlib import Path
from unittest.mock import Mock

import git
import pytest
from rich.console import Console

from branch_sweeper.models.branch import Branch, BranchScope, Identity, PRState
from branch_sweeper.services.display_service import DisplayService
from branch_sweeper.services.git.github import GitHubService
from branch_sweeper.services.git.operations import GitOperations

USER_EMAIL = "test@example.com"
OTHER_EMAIL = "bob@example.com"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_config():
    """Create a mock configuration dictionary."""
    return {
        'verbose': False,
        'debug': False,
        'dry_run': True,
        'force': False,
        'main_branch': 'main',
        'remote_name': 'origin',
        'github_token': 'test_token_for_testing',
    }


@pytest.fixture
def no_github_token(monkeypatch):
    """Make sure no GitHub token can be found from the environment or gh CLI."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("GH_TOKEN", raising=False)
    monkeypatch.setattr("branch_sweeper.services.git.github.shutil.which", lambda name: None)


def commit_file(repo, filename, content, message, email=USER_EMAIL):
    """Write a file and commit it with the given author email."""
    path = Path(repo.working_dir) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    repo.index.add([filename])
    actor = git.Actor("Author", email)
    return repo.index.commit(message, author=actor, committer=actor)


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository on main with a bare origin remote."""
    remote_path = temp_dir / "remote.git"
    git.Repo.init(remote_path, bare=True)

    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", USER_EMAIL).release()

    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    repo.create_remote('origin', str(remote_path))
    repo.git.push('-u', 'origin', 'main')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_branches(git_repo):
    """Create a repository with merged, unmerged and foreign branches.

    Local:  feature/merged (merged), feature/unmerged (not merged)
    Remote: origin/feature/merged (merged), origin/feature/unmerged (not merged),
            origin/feature/foreign (not merged, last commit by OTHER_EMAIL)
    """
    repo = git_repo

    repo.git.checkout('-b', 'feature/merged')
    commit_file(repo, "merged.txt", "Merge content\n", "Feature to merge")
    repo.git.push('origin', 'feature/merged')
    repo.git.checkout('main')
    repo.git.merge('feature/merged', '--no-ff', '-m', 'Merge feature/merged')

    repo.git.checkout('-b', 'feature/unmerged')
    commit_file(repo, "unmerged.txt", "Unmerged content\n", "Unmerged work")
    repo.git.push('origin', 'feature/unmerged')

    repo.git.checkout('main')
    repo.git.checkout('-b', 'feature/foreign')
    commit_file(repo, "foreign.txt", "Someone else\n", "Foreign work", email=OTHER_EMAIL)
    repo.git.push('origin', 'feature/foreign')

    repo.git.checkout('main')
    repo.git.branch('-D', 'feature/foreign')
    repo.git.push('origin', 'main')
    repo.git.remote('set-head', 'origin', 'main')

    yield repo


@pytest.fixture
def identity():
    """Identity with the configured email and a derived noreply email."""
    return Identity(emails=(USER_EMAIL, "42+tester@users.noreply.github.com"))


@pytest.fixture
def make_branch():
    """Factory for Branch objects."""
    def _make(name, remote=False, merged=False, email=USER_EMAIL):
        return Branch(
            name=name,
            scope=BranchScope.REMOTE if remote else BranchScope.LOCAL,
            last_commit_author_email=email,
            merged_into_trunk=merged,
        )
    return _make


@pytest.fixture
def output():
    """In-memory stdout/stderr consoles for the status stream."""
    class Output:
        def __init__(self):
            self.out = io.StringIO()
            self.err = io.StringIO()
            self.display = DisplayService(
                console=Console(file=self.out, width=200, soft_wrap=True, highlight=False),
                error_console=Console(file=self.err, width=200, soft_wrap=True, highlight=False),
            )

        @property
        def stdout(self):
            return self.out.getvalue()

        @property
        def stderr(self):
            return self.err.getvalue()

    return Output()


@pytest.fixture
def mock_git_service():
    """Create a mock GitOperations."""
    service = Mock(spec=GitOperations)
    service.remote_name = "origin"
    service.get_current_branch = Mock(return_value="main")
    service.get_remote_url = Mock(return_value="git@github.com:test/repo.git")
    service.get_user_email = Mock(return_value=USER_EMAIL)
    return service


@pytest.fixture
def mock_github_service():
    """Create a mock GitHubService with a per-branch PR state table."""
    service = Mock(spec=GitHubService)
    service.pr_states = {}
    service.get_pr_state = Mock(side_effect=lambda name: service.pr_states.get(name, PRState.NONE))
    service.setup_github_api = Mock(return_value=True)
    service.get_authenticated_user = Mock(return_value=("tester", 42))
    return service
