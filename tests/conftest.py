"""Test fixtures and helper functions."""

import tempfile
from pathlib import Path
from typing import Dict, Generator, Tuple

import pytest
from git.exc import GitCommandError
from git.repo.base import Repo

from repo_inspector.config import InspectorConfig
from repo_inspector.git.repo import RepositoryInspector
from tests.helpers import FakeExecutor, Response


@pytest.fixture
def make_inspector():
    """Build an inspector backed by a FakeExecutor."""

    def _make(responses: Dict[str, Response]) -> Tuple[RepositoryInspector, FakeExecutor]:
        executor = FakeExecutor(responses)
        return RepositoryInspector(InspectorConfig(), executor=executor), executor

    return _make


@pytest.fixture
def temp_repo() -> Generator[Repo, None, None]:
    """Create a temporary git repository with a remote.

    Yields
    -------
    Repo
        GitPython repository instance
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        # Create a bare repository to act as remote
        remote_path = Path(temp_dir) / "remote"
        remote_path.mkdir()
        Repo.init(remote_path, bare=True)

        repo_path = Path(temp_dir) / "test_repo"
        repo_path.mkdir()
        repo = Repo.init(repo_path, initial_branch="main")

        repo.git.config("core.autocrlf", "false")
        repo.config_writer().set_value("user", "name", "Test User").release()
        repo.config_writer().set_value("user", "email", "test@example.com").release()

        readme_path = repo_path / "README.md"
        readme_path.write_text("# Test Repository")
        repo.index.add(["README.md"])
        repo.index.commit("Initial commit")

        repo.create_remote("origin", str(remote_path))
        repo.git.push("--set-upstream", "origin", "main")

        yield repo

        try:
            repo.git.reset("--hard")
            repo.git.clean("-fd")
        except GitCommandError:
            pass
        repo.close()
